"""
Custom exceptions for UPV CLI.
"""

from typing import Any, Dict, Optional


class UPVError(Exception):
    """Base exception for all UPV CLI errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(UPVError):
    """Configuration related errors."""
    pass


class CommandNotFoundError(UPVError):
    """An external Windows utility could not be executed."""

    def __init__(self, program: str):
        super().__init__(
            f"Command '{program}' not found. This tool only works on Windows.",
            error_code="COMMAND_NOT_FOUND",
            details={"program": program},
        )


# VPN errors

class VpnError(UPVError):
    """VPN (dial-up) related errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code or "VPN_ERROR", details)


class VpnConnectionError(VpnError):
    """Dialing a VPN entry failed with a Remote Access error."""

    def __init__(self, name: str, reason: str, ras_code: Optional[int] = None):
        details: Dict[str, Any] = {"name": name}
        if ras_code is not None:
            details["ras_error"] = ras_code
        super().__init__(
            f"Failed to connect to '{name}': {reason}",
            details=details,
        )
        self.ras_code = ras_code


# Drive errors

class DriveError(UPVError):
    """Network drive related errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code or "DRIVE_ERROR", details)


class DriveAlreadyMountedError(DriveError):
    """The drive letter is already mapped."""

    def __init__(self, letter: str):
        super().__init__(
            f"Drive {letter}: is already in use by another mapping",
            details={"drive": letter},
        )


class DriveNotMountedError(DriveError):
    """The drive letter is not mapped."""

    def __init__(self, letter: str):
        super().__init__(
            f"Drive {letter}: is not mounted",
            details={"drive": letter},
        )


class DriveNotFoundError(DriveError):
    """The drive path does not exist on this machine."""

    def __init__(self, letter: str):
        super().__init__(
            f"Drive {letter} does not exist",
            details={"drive": letter},
        )


class DriveAuthenticationError(DriveError):
    """The share rejected the supplied credentials."""

    def __init__(self, letter: str, reason: str = "Invalid username or password"):
        super().__init__(
            f"Authentication failed while mounting drive {letter}: {reason}",
            details={"drive": letter},
        )


class NetworkUnreachableError(DriveError):
    """The network share could not be reached."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Network path {path} could not be reached"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            details={"remote_path": path},
        )


class DriveStateError(DriveError):
    """An operation was attempted from a state that does not allow it."""

    def __init__(self, letter: str, current: str, target: str):
        super().__init__(
            f"Drive {letter}: cannot go from {current} to {target}",
            details={"drive": letter, "current": current, "target": target},
        )


class DriveInUseError(UPVError):
    """The drive has open files or folders and cannot be unmounted."""

    def __init__(self, letter: str):
        super().__init__(
            f"Drive {letter}: is currently IN USE. Please CLOSE any open files or "
            f"folders on this drive and try again, or run this again with the "
            f"--force option to unmount it anyways, accepting that INFORMATION "
            f"COULD BE LOST.",
            error_code="DRIVE_IN_USE",
            details={"drive": letter},
        )
