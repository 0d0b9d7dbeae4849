"""
Tests for the exit code system.
"""

from unittest.mock import patch

import pytest
import typer

from upv.cli.exit_codes import (
    ExitCode,
    ExitCodeManager,
    exit_manager,
    get_exit_code_documentation,
    handle_cli_errors,
    validate_exit_codes,
)
from upv.core.exceptions import (
    CommandNotFoundError,
    DriveAuthenticationError,
    DriveInUseError,
    DriveNotMountedError,
    VpnConnectionError,
    VpnError,
)


class TestExitCode:
    """Test exit code enum values."""

    def test_documented_values(self):
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.USAGE_ERROR == 2
        assert ExitCode.UPV_ERROR == 10
        assert ExitCode.VPN_ERROR == 11
        assert ExitCode.DRIVE_ERROR == 12
        assert ExitCode.DRIVE_IN_USE == 13

    def test_error_codes_unique(self):
        """Test that all exit codes are unique."""
        codes = [code.value for code in ExitCode]
        assert len(codes) == len(set(codes))

    def test_validate_exit_codes(self):
        assert validate_exit_codes() is True


class TestExitCodeManager:
    """Test ExitCodeManager class."""

    def test_suggestions(self):
        manager = ExitCodeManager()

        assert manager.get_description(ExitCode.DRIVE_IN_USE) == "Network drive is in use"
        assert "--force" in manager.get_suggestion(ExitCode.DRIVE_IN_USE)
        assert manager.get_suggestion(ExitCode.UPV_ERROR) == ""

    @pytest.mark.parametrize(
        ("exception", "expected"),
        [
            (DriveInUseError("W"), ExitCode.DRIVE_IN_USE),
            (DriveNotMountedError("W"), ExitCode.DRIVE_ERROR),
            (DriveAuthenticationError("W", "bad password"), ExitCode.DRIVE_ERROR),
            (VpnError("failed"), ExitCode.VPN_ERROR),
            (VpnConnectionError("UPV", "denied", 691), ExitCode.VPN_ERROR),
            (CommandNotFoundError("rasdial"), ExitCode.UPV_ERROR),
            (ValueError("bad value"), ExitCode.USAGE_ERROR),
            (KeyboardInterrupt(), ExitCode.KEYBOARD_INTERRUPT),
            (RuntimeError("boom"), ExitCode.GENERAL_ERROR),
        ],
    )
    def test_handle_exception(self, exception, expected):
        assert exit_manager.handle_exception(exception) == expected

    @patch("upv.cli.exit_codes.console")
    def test_exit_with_code_error(self, mock_console):
        with pytest.raises(typer.Exit) as exc_info:
            exit_manager.exit_with_code(ExitCode.VPN_ERROR, "Dial failed", suggestion="Check the entry")

        assert exc_info.value.exit_code == 11
        # Error message and suggestion
        assert mock_console.print.call_count == 2


class TestHandleCliErrors:
    """Test handle_cli_errors context manager."""

    @patch("upv.cli.exit_codes.console")
    def test_success(self, mock_console):
        with handle_cli_errors("Test operation"):
            pass

        mock_console.print.assert_not_called()

    @patch("upv.cli.exit_codes.console")
    def test_upv_error_message_is_printed_as_is(self, mock_console):
        with pytest.raises(typer.Exit) as exc_info:
            with handle_cli_errors("Drive unmount"):
                raise DriveNotMountedError("W")

        assert exc_info.value.exit_code == 12
        first_line = mock_console.print.call_args_list[0].args[0]
        assert "Drive W: is not mounted" in first_line
        assert "Drive unmount failed" not in first_line

    @patch("upv.cli.exit_codes.console")
    def test_drive_in_use_has_no_extra_suggestion(self, mock_console):
        with pytest.raises(typer.Exit) as exc_info:
            with handle_cli_errors("Drive unmount"):
                raise DriveInUseError("W")

        assert exc_info.value.exit_code == 13
        mock_console.print.assert_called_once()

    @patch("upv.cli.exit_codes.console")
    def test_unexpected_error_is_prefixed(self, mock_console):
        with pytest.raises(typer.Exit) as exc_info:
            with handle_cli_errors("VPN status check"):
                raise RuntimeError("boom")

        assert exc_info.value.exit_code == 1
        assert "VPN status check failed: boom" in mock_console.print.call_args_list[0].args[0]

    @patch("upv.cli.exit_codes.console")
    def test_keyboard_interrupt(self, mock_console):
        with pytest.raises(typer.Exit) as exc_info:
            with handle_cli_errors("Test operation"):
                raise KeyboardInterrupt()

        assert exc_info.value.exit_code == 130

    def test_exit_passes_through(self):
        with pytest.raises(typer.Exit) as exc_info:
            with handle_cli_errors("Test operation"):
                raise typer.Exit(0)

        assert exc_info.value.exit_code == 0


class TestExitCodeDocumentation:

    def test_categories(self):
        docs = get_exit_code_documentation()

        assert list(docs) == ["Program", "UPV CLI", "Signals"]
        codes = [entry["code"] for entries in docs.values() for entry in entries]
        assert sorted(codes) == sorted(code.value for code in ExitCode)
