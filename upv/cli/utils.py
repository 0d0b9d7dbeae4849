"""
CLI utility functions.
"""

import typer
from rich.console import Console
from rich.prompt import Confirm, Prompt

console = Console()

PURGE_CONFIRMATION_WORD = "DELETE"


def format_option():
    """Per-command --format option, overriding the global one."""
    return typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (default: the global --format)",
        case_sensitive=False,
        show_default=False,
    )


def emit(text: str) -> None:
    """Print formatter output as is, without markup, highlighting or wrapping."""
    console.out(text.rstrip("\n"), highlight=False)


def confirm_action(message: str, default: bool = False) -> bool:
    """
    Ask for a yes/no confirmation.

    A closed stdin counts as "no".

    Args:
        message: Confirmation message
        default: Default choice

    Returns:
        True if confirmed
    """
    try:
        return Confirm.ask(message, default=default, console=console)
    except EOFError:
        console.print()
        return False


def confirm_purge(count: int) -> bool:
    """
    Double confirmation before deleting every UPV VPN connection.

    The user must first answer yes and then type DELETE.
    """
    if not confirm_action(
        f"\nAre you sure you want to delete ALL {count} UPV VPN connections?"
    ):
        return False

    try:
        answer = Prompt.ask(
            f"This action cannot be undone. Type '{PURGE_CONFIRMATION_WORD}' to confirm",
            console=console,
            default="",
            show_default=False,
        )
    except EOFError:
        console.print()
        return False

    return answer.strip() == PURGE_CONFIRMATION_WORD


def prompt_password(label: str) -> str:
    """Ask for a password without echoing it."""
    return typer.prompt(f"Password for {label}", hide_input=True)


def cancelled() -> None:
    """Report a cancelled operation and exit successfully."""
    console.print("[yellow]Operation cancelled.[/yellow]")
    raise typer.Exit(0)
