"""
Main CLI application using Typer.
"""

from enum import Enum

import typer
from rich import print as rprint
from rich.console import Console

from upv import __version__
from upv.cli.commands.drive import app as drive_app
from upv.cli.commands.drive import open_drive
from upv.cli.commands.vpn import app as vpn_app
from upv.cli.completion import generate_completion_script
from upv.cli.exit_codes import ExitCode, exit_manager, handle_cli_errors, show_exit_codes_help
from upv.cli.formatters import OutputFormat
from upv.cli.group import UPVGroup
from upv.core.config import check_environment, runtime_config, settings
from upv.utils.logger import get_logger, setup_logging

# Initialize CLI app
app = typer.Typer(
    name="upv",
    help="CLI tool to manage UPV's VPN connection and Personal Network Drive (Disco W)",
    cls=UPVGroup,
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
)

console = Console()
logger = get_logger(__name__)


class Shell(str, Enum):
    POWERSHELL = "powershell"
    BASH = "bash"


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        rprint(f"[bold]UPV CLI[/bold] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode",
        envvar="UPV_DEBUG",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress log output except errors",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log every Windows command that is run",
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format",
        case_sensitive=False,
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
):
    """
    UPV CLI - VPN and Disco W from the command line

    Requires Windows: commands wrap PowerShell, rasdial, rasphone and net use.
    """
    with handle_cli_errors("Loading configuration"):
        check_environment()

    runtime_config.quiet = quiet
    runtime_config.verbose = verbose
    runtime_config.output_format = output_format.value
    runtime_config.no_color = no_color

    if debug:
        settings.debug = True

    log_level = None
    if quiet:
        log_level = "ERROR"
    elif verbose or debug:
        log_level = "DEBUG"

    setup_logging(
        log_level=log_level,
        rich_output=not no_color,
    )


app.add_typer(vpn_app, name="vpn", help="VPN connection management")
app.add_typer(drive_app, name="drive", help="Personal Network Drive (Disco W) management")

# Shortcut for 'upv drive open'
app.command("open", help="Open the personal network drive in Explorer")(open_drive)


@app.command()
def completions(
    shell: Shell = typer.Argument(
        Shell.POWERSHELL,
        help="Shell to generate the completion script for",
        case_sensitive=False,
    ),
):
    """Generate a shell completion script.

    For PowerShell, add this to your profile:
    upv completions | Out-String | Invoke-Expression
    """
    with handle_cli_errors("Completion generation"):
        script = generate_completion_script(
            typer.main.get_command(app),
            shell=shell.value,
            prog_name="upv",
        )
        typer.echo(script, nl=False)


@app.command("exit-codes")
def exit_codes():
    """Show exit code reference and documentation."""
    show_exit_codes_help(console)
    exit_manager.exit_with_code(ExitCode.SUCCESS)


def main():
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
