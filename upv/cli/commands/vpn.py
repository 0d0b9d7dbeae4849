"""VPN management CLI commands.
"""

from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from upv.cli.exit_codes import handle_cli_errors
from upv.cli.formatters import OutputFormat, get_formatter
from upv.cli.group import UPVGroup
from upv.cli.utils import cancelled, confirm_action, confirm_purge, emit, format_option, prompt_password
from upv.core.exceptions import VpnError
from upv.core.models import Credentials, PurgeReport, UPVDomain
from upv.services.vpn_manager import VpnManager
from upv.utils.logger import get_logger

app = typer.Typer(help="VPN connection management", cls=UPVGroup, no_args_is_help=True)
console = Console()
logger = get_logger(__name__)


@app.command("create")
def create_connection(
    name: str = typer.Argument(..., help="Name for the VPN connection"),
    connect: bool = typer.Option(
        False,
        "--connect",
        "-c",
        help="Connect immediately after creating",
    ),
):
    """Create a new UPV VPN connection."""
    with handle_cli_errors("VPN creation"):
        manager = VpnManager()

        console.print(f"Creating VPN connection '{escape(name)}'...")
        with console.status("Registering VPN connection..."):
            connection = manager.create(name)
        emit(get_formatter().format_success(
            f"VPN connection '{connection.name}' to {connection.server_address} created successfully"
        ))

        if connect:
            _connect(manager, name, None)


@app.command("connect")
def connect(
    name: str = typer.Argument(..., help="Name of the VPN connection to connect to"),
    username: Optional[str] = typer.Option(
        None,
        "--username",
        "-u",
        help="Dial directly with this username instead of opening the connection dialog",
    ),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-p",
        help="Password for --username (prompted for when omitted)",
    ),
    domain: Optional[UPVDomain] = typer.Option(
        None,
        "--domain",
        help="UPV domain prefixed to --username",
        case_sensitive=False,
    ),
):
    """Connect to an existing UPV VPN connection."""
    if username is None and (password is not None or domain is not None):
        raise typer.BadParameter("--password and --domain require --username")

    with handle_cli_errors("VPN connection"):
        credentials = None
        if username is not None:
            if password is None:
                password = prompt_password(username)
            credentials = Credentials(username=username, password=password, domain=domain)

        _connect(VpnManager(), name, credentials)


def _connect(manager: VpnManager, name: str, credentials: Optional[Credentials]) -> None:
    formatter = get_formatter()
    if credentials is None:
        console.print(f"Opening connection dialog for '{escape(name)}'...")
        manager.connect(name)
        emit(formatter.format_success(f"Connection dialog opened for '{name}'"))
        return

    with console.status(f"Connecting to '{escape(name)}'..."):
        manager.connect(name, credentials)
    emit(formatter.format_success(f"Connected to '{name}'"))


@app.command("disconnect")
def disconnect(
    name: Optional[str] = typer.Argument(
        None,
        help="Connection to hang up (all active connections when omitted)",
    ),
):
    """Disconnect from UPV VPN."""
    with handle_cli_errors("VPN disconnection"):
        console.print("Disconnecting from VPN...")
        VpnManager().disconnect(name)
        emit(get_formatter().format_success("Disconnected from VPN successfully"))


@app.command("delete")
def delete_connection(
    name: str = typer.Argument(..., help="Name of the VPN connection to delete"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
):
    """Delete an existing UPV VPN connection."""
    with handle_cli_errors("VPN deletion"):
        if not force and not confirm_action(
            f"Are you sure you want to delete VPN connection '{escape(name)}'?"
        ):
            cancelled()

        console.print(f"Deleting VPN connection '{escape(name)}'...")
        VpnManager().delete(name)
        emit(get_formatter().format_success(f"VPN connection '{name}' deleted successfully"))


@app.command("list")
def list_connections(
    format: Optional[OutputFormat] = format_option(),
):
    """List all UPV VPN connections."""
    with handle_cli_errors("Listing VPN connections"):
        formatter = get_formatter(format)
        names = VpnManager().list_connections()

        if formatter.structured:
            emit(formatter.format_list([{"name": name} for name in names]))
            return

        if not names:
            emit(formatter.format_warning("No UPV VPN connections found."))
            return

        emit(formatter.format_list(
            [{"name": name} for name in names],
            columns=["name"],
            title=f"UPV VPN connections ({len(names)})",
        ))


@app.command("purge")
def purge(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompts",
    ),
    except_names: Optional[List[str]] = typer.Option(
        None,
        "--except",
        "-e",
        metavar="NAME",
        help="VPN connection name to keep (can be used multiple times)",
    ),
):
    """Delete ALL UPV VPN connections (with double confirmation)."""
    with handle_cli_errors("VPN purge"):
        formatter = get_formatter()
        manager = VpnManager()
        except_names = except_names or []

        to_delete, kept = manager.purge_candidates(except_names)

        kept_lower = {k.lower() for k in kept}
        for name in except_names:
            if name.lower() not in kept_lower:
                if formatter.structured:
                    logger.warning(f"Connection '{name}' given in --except was not found")
                else:
                    emit(formatter.format_warning(f"Connection '{name}' given in --except was not found"))

        if not to_delete:
            if formatter.structured:
                emit(formatter.format_single(PurgeReport(kept=kept).model_dump()))
            else:
                console.print("No UPV VPN connections found to delete.")
            return

        if not formatter.structured:
            console.print(f"Found {len(to_delete)} UPV VPN connection(s) to delete:")
            for name in to_delete:
                console.print(f"  - {escape(name)}", highlight=False)
            if kept:
                console.print(f"Keeping: {escape(', '.join(kept))}", highlight=False)

        if not force and not confirm_purge(len(to_delete)):
            cancelled()

        if formatter.structured:
            report = manager.delete_many(to_delete, kept=kept)
            emit(formatter.format_single(report.model_dump()))
        else:
            console.print(f"\nDeleting {len(to_delete)} UPV VPN connections...")
            report = manager.delete_many(to_delete, kept=kept)

            for name in report.deleted:
                console.print(f"  [green]✓[/green] Deleted '{escape(name)}'", highlight=False)
            for name, reason in report.failed.items():
                console.print(
                    f"  [red]✗[/red] Failed to delete '{escape(name)}': {escape(reason)}",
                    highlight=False,
                )

            console.print("\nPurge completed:")
            console.print(f"  {len(report.deleted)} connections deleted successfully")

        if not report.ok:
            raise VpnError(
                f"{len(report.failed)} connections failed to delete",
                details={"failed": ", ".join(report.failed)},
            )


@app.command("status")
def status(
    format: Optional[OutputFormat] = format_option(),
):
    """Check VPN connection status."""
    with handle_cli_errors("VPN status check"):
        formatter = get_formatter(format)
        vpn_status = VpnManager().status()

        if formatter.structured:
            emit(formatter.format_single(vpn_status.model_dump()))
        elif vpn_status.connected:
            emit(formatter.format_success(
                f"Connected to: {', '.join(vpn_status.active_connections)}"
            ))
        else:
            emit(formatter.format_info("Not connected to any VPN"))
