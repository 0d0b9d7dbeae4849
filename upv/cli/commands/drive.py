"""Personal network drive (Disco W) CLI commands.
"""

from typing import Optional

import typer
from rich.console import Console

from upv.cli.exit_codes import handle_cli_errors
from upv.cli.formatters import OutputFormat, get_formatter
from upv.cli.group import UPVGroup
from upv.cli.utils import emit, format_option
from upv.core.config import settings
from upv.core.models import UPVDomain, normalize_drive_letter
from upv.services.drive_manager import DriveManager
from upv.utils.logger import get_logger

app = typer.Typer(help="Personal Network Drive (Disco W) management", cls=UPVGroup, no_args_is_help=True)
console = Console()
logger = get_logger(__name__)


def drive_letter_callback(value: Optional[str]) -> Optional[str]:
    """Validate a --drive option."""
    if value is None:
        return None
    try:
        return normalize_drive_letter(value)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def drive_option():
    return typer.Option(
        None,
        "--drive",
        "-d",
        help=f"Drive letter (default: {settings.default_drive})",
        callback=drive_letter_callback,
        show_default=False,
    )


@app.command("mount")
def mount(
    username: str = typer.Argument(
        ...,
        help='Your UPV username (example: if your email is "user@upv.es", your username is "user")',
    ),
    domain: UPVDomain = typer.Argument(..., help="UPV domain", case_sensitive=False),
    password: Optional[str] = typer.Option(
        None,
        "--password",
        "-p",
        help="Password for the network drive (if not provided, uses current VPN or Wi-Fi credentials)",
    ),
    drive: Optional[str] = drive_option(),
    open_after: bool = typer.Option(
        False,
        "--open",
        "-o",
        help="Open the drive in Explorer after mounting",
    ),
):
    """Mount the personal network drive (Disco W)."""
    with handle_cli_errors("Drive mount"):
        letter = drive or settings.default_drive
        manager = DriveManager()

        console.print(f"Mounting Disco W to drive {letter}:...")
        with console.status(f"Connecting to {settings.nas_host}..."):
            mapped = manager.mount(username, domain, password=password, letter=letter)
        emit(get_formatter().format_success(
            f"Disco W mounted successfully to drive {mapped.letter}: ({mapped.remote_path})"
        ))

        if open_after:
            console.print(f"Opening drive {mapped.letter}: in Explorer...")
            manager.open(mapped.letter, check_exists=False)


@app.command("unmount")
def unmount(
    drive: Optional[str] = drive_option(),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Unmount even if files are open on the drive (unsaved changes may be lost)",
    ),
):
    """Unmount the personal network drive."""
    with handle_cli_errors("Drive unmount"):
        letter = drive or settings.default_drive

        console.print(f"Unmounting drive {letter}:...")
        DriveManager().unmount(letter, force=force)
        emit(get_formatter().format_success(f"Drive {letter}: unmounted successfully"))


@app.command("open")
def open_drive(drive: Optional[str] = drive_option()):
    """Open the personal network drive in Explorer."""
    with handle_cli_errors("Opening drive"):
        letter = drive or settings.default_drive

        path = DriveManager().open(letter)
        console.print(f"Opening drive {path} in Explorer...", highlight=False)


@app.command("status")
def status(
    format: Optional[OutputFormat] = format_option(),
):
    """Check network drive status."""
    with handle_cli_errors("Drive status check"):
        formatter = get_formatter(format)
        drives = DriveManager().status()

        rows = [
            {
                "letter": f"{d.letter}:",
                "remote_path": d.remote_path,
                "status": d.status,
                "upv": settings.nas_host.lower() in d.remote_path.lower(),
            }
            for d in drives
        ]

        if formatter.structured:
            emit(formatter.format_list(rows))
            return

        if not rows:
            emit(formatter.format_info("No network drives are mounted"))
            return

        emit(formatter.format_list(
            rows,
            columns=["letter", "remote_path", "status", "upv"],
            title="Network drives",
        ))
