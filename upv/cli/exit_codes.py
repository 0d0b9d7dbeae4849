"""Standardized exit codes for UPV CLI.

Program-level codes live in 0-9 and tool-specific codes in 10-19:
- 0 success, 1 general failure, 2 argument errors (reported by Click)
- 10 generic UPV CLI error, 11 VPN error, 12 drive error, 13 drive in use
"""

from contextlib import contextmanager
from enum import IntEnum
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from upv.utils.logger import get_logger

console = Console(stderr=True)
logger = get_logger(__name__)


class ExitCode(IntEnum):
    """Exit codes for UPV CLI."""

    # Program-level codes (0-9)
    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2

    # UPV CLI errors (10-19)
    UPV_ERROR = 10
    VPN_ERROR = 11
    DRIVE_ERROR = 12
    DRIVE_IN_USE = 13

    # Special exit codes
    KEYBOARD_INTERRUPT = 130  # Standard Ctrl+C


class ExitCodeManager:
    """Manages exit codes and provides utilities for consistent error handling."""

    def __init__(self):
        """Initialize exit code manager."""
        self._exit_code_descriptions = {
            ExitCode.SUCCESS: "Operation completed successfully",
            ExitCode.GENERAL_ERROR: "General error occurred",
            ExitCode.USAGE_ERROR: "Invalid command line arguments",
            ExitCode.UPV_ERROR: "UPV CLI error",
            ExitCode.VPN_ERROR: "VPN operation failed",
            ExitCode.DRIVE_ERROR: "Network drive operation failed",
            ExitCode.DRIVE_IN_USE: "Network drive is in use",
            ExitCode.KEYBOARD_INTERRUPT: "Operation cancelled by user",
        }

        self._suggestions = {
            ExitCode.USAGE_ERROR: "Run 'upv --help' to see the available commands",
            ExitCode.VPN_ERROR: "Use 'upv vpn list' to see your VPN connections",
            ExitCode.DRIVE_ERROR: "Use 'upv drive status' to see the mounted drives",
            ExitCode.DRIVE_IN_USE: "Close open files on the drive or use --force",
        }

    def get_description(self, code: ExitCode) -> str:
        """Get human-readable description for exit code."""
        return self._exit_code_descriptions.get(code, f"Unknown error (code {code})")

    def get_suggestion(self, code: ExitCode) -> str:
        """Get suggestion for resolving the error."""
        return self._suggestions.get(code, "")

    def exit_with_code(
        self,
        code: ExitCode,
        message: str = "",
        details: dict[str, Any] | None = None,
        suggestion: str = "",
    ) -> None:
        """Exit the application with the specified code and message."""
        if code == ExitCode.SUCCESS:
            if message:
                console.print(f"[green]✓ {message}[/green]")
        else:
            error_msg = message or self.get_description(code)
            console.print(f"[red]✗ {escape(error_msg)}[/red]", highlight=False)

            if suggestion:
                console.print(f"[yellow]💡 {escape(suggestion)}[/yellow]")

            if details:
                logger.debug(f"Error details: {details}")

        raise typer.Exit(code.value)

    def handle_exception(self, exception: BaseException, context: str = "") -> ExitCode:
        """Map exceptions to appropriate exit codes."""
        from upv.core.exceptions import DriveError, DriveInUseError, UPVError, VpnError

        if isinstance(exception, KeyboardInterrupt):
            return ExitCode.KEYBOARD_INTERRUPT

        if isinstance(exception, DriveInUseError):
            return ExitCode.DRIVE_IN_USE

        if isinstance(exception, DriveError):
            return ExitCode.DRIVE_ERROR

        if isinstance(exception, VpnError):
            return ExitCode.VPN_ERROR

        if isinstance(exception, UPVError):
            return ExitCode.UPV_ERROR

        if isinstance(exception, ValueError):
            return ExitCode.USAGE_ERROR

        # Default to general error
        return ExitCode.GENERAL_ERROR


# Global exit code manager instance
exit_manager = ExitCodeManager()


@contextmanager
def handle_cli_errors(operation: str = "Operation"):
    """Context manager for handling CLI errors with proper exit codes.

    UPV CLI errors are printed as they are since their messages already say
    what failed; anything else is prefixed with the operation name.
    """
    from upv.core.exceptions import UPVError

    try:
        yield
    except (typer.Exit, typer.Abort):
        raise
    except KeyboardInterrupt:
        exit_manager.exit_with_code(
            ExitCode.KEYBOARD_INTERRUPT,
            f"{operation} cancelled by user"
        )
    except Exception as e:
        code = exit_manager.handle_exception(e, operation)

        if isinstance(e, UPVError):
            logger.debug(f"{e.error_code}: {e.message}")
            message = e.message
            details = e.details
        else:
            logger.debug(f"{operation} failed", exc_info=True)
            message = f"{operation} failed: {e}"
            details = {
                "exception_type": type(e).__name__,
                "operation": operation,
            }

        exit_manager.exit_with_code(
            code,
            message,
            details=details,
            suggestion=exit_manager.get_suggestion(code) if code != ExitCode.DRIVE_IN_USE else "",
        )


def get_exit_code_documentation() -> dict[str, list[dict[str, int | str]]]:
    """Get documentation for all exit codes organized by category."""
    manager = ExitCodeManager()

    def entry(code: ExitCode) -> dict[str, int | str]:
        return {"code": code.value, "name": code.name, "description": manager.get_description(code)}

    return {
        "Program": [
            entry(ExitCode.SUCCESS),
            entry(ExitCode.GENERAL_ERROR),
            entry(ExitCode.USAGE_ERROR),
        ],
        "UPV CLI": [
            entry(ExitCode.UPV_ERROR),
            entry(ExitCode.VPN_ERROR),
            entry(ExitCode.DRIVE_ERROR),
            entry(ExitCode.DRIVE_IN_USE),
        ],
        "Signals": [
            entry(ExitCode.KEYBOARD_INTERRUPT),
        ],
    }


def show_exit_codes_help(output: Console | None = None):
    """Display help information about exit codes."""
    from rich.panel import Panel
    from rich.table import Table

    output = output or Console()
    output.print(Panel(
        "[bold]UPV CLI Exit Codes[/bold]\n\n"
        "• 0-9 = Program-level results\n"
        "• 10-19 = UPV CLI errors\n"
        "• 130 = Operation cancelled (Ctrl+C)\n\n"
        "Use exit codes in scripts: upv drive unmount; if ($LASTEXITCODE -eq 13) { ... }",
        title="📋 Exit Code Reference"
    ))

    documentation = get_exit_code_documentation()

    for category, codes in documentation.items():
        table = Table(title=f"{category}")
        table.add_column("Code", style="cyan", width=6)
        table.add_column("Name", style="green", width=20)
        table.add_column("Description", style="white")

        for code_info in codes:
            table.add_row(
                str(code_info["code"]),
                str(code_info["name"]),
                str(code_info["description"])
            )

        output.print(table)
        output.print()


def validate_exit_codes():
    """Validate that all exit codes are unique and in valid ranges."""
    codes = [code.value for code in ExitCode]

    if len(codes) != len(set(codes)):
        duplicates = [code for code in codes if codes.count(code) > 1]
        raise ValueError(f"Duplicate exit codes found: {set(duplicates)}")

    invalid_codes = [code for code in codes if not (0 <= code <= 255)]
    if invalid_codes:
        raise ValueError(f"Invalid exit codes (must be 0-255): {invalid_codes}")

    return True


# Ensure exit codes are valid when module is imported
validate_exit_codes()
