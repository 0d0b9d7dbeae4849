"""
Personal network drive (Disco W) service.

Shares are attached and detached with ``net use`` and opened with the
Windows file browser.
"""

import os

from upv.core.exceptions import (
    DriveAlreadyMountedError,
    DriveAuthenticationError,
    DriveError,
    DriveInUseError,
    DriveNotFoundError,
    DriveNotMountedError,
    DriveStateError,
    NetworkUnreachableError,
)
from upv.core.models import (
    CommandResult,
    Credentials,
    DriveState,
    MappedDrive,
    UPVDomain,
    normalize_drive_letter,
)
from upv.services.base import BaseService
from upv.services.parsers import (
    NET_ALREADY_IN_USE,
    NET_AUTH_FAILURE,
    NET_MULTIPLE_CREDENTIALS,
    NET_NOT_CONNECTED,
    NET_UNREACHABLE,
    is_in_use_prompt,
    net_use_error_message,
    parse_net_use_error,
    parse_net_use_list,
)

# Allowed transitions of a drive letter
TRANSITIONS = {
    DriveState.UNMOUNTED: {DriveState.MOUNTING},
    DriveState.MOUNTING: {DriveState.MOUNTED, DriveState.UNMOUNTED},
    DriveState.MOUNTED: {DriveState.UNMOUNTING},
    DriveState.UNMOUNTING: {DriveState.UNMOUNTED, DriveState.MOUNTED},
}


class DriveManager(BaseService):
    """Service for mounting the UPV personal network drive."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._states: dict[str, DriveState] = {}

    # State tracking

    def state(self, letter: str) -> DriveState:
        """Current state of a drive letter as seen by this manager."""
        return self._states.get(normalize_drive_letter(letter), DriveState.UNMOUNTED)

    def _transition(self, letter: str, target: DriveState) -> None:
        current = self.state(letter)
        if target not in TRANSITIONS[current]:
            raise DriveStateError(letter, current.value, target.value)
        self.logger.debug(f"Drive {letter}: {current.value} -> {target.value}")
        self._states[letter] = target

    # Paths

    def remote_path(self, username: str, domain: UPVDomain) -> str:
        """
        UNC path of a user's personal share.

        Example: jdoe on UPVNET -> \\\\nasupv.upv.es\\discos\\j\\jdoe
        """
        username = (username or "").strip()
        if not username:
            raise ValueError("Username cannot be empty")
        first_letter = username[0].lower()
        return f"\\\\{self.settings.nas_host}\\{domain.share_root}\\{first_letter}\\{username}"

    # Operations

    def mount(
        self,
        username: str,
        domain: UPVDomain,
        password: str | None = None,
        letter: str | None = None,
        open_after: bool = False,
    ) -> MappedDrive:
        """
        Attach the personal share to a drive letter.

        Without a password the current session identity (VPN or Wi-Fi login)
        is used.

        Raises:
            DriveAlreadyMountedError: The letter is already mapped
            DriveAuthenticationError: The share rejected the credentials
            NetworkUnreachableError: The share could not be reached
            DriveError: Any other net use failure
        """
        letter = normalize_drive_letter(letter or self.settings.default_drive)
        remote = self.remote_path(username, domain)

        args = [self.settings.net_executable, "use", f"{letter}:", remote]
        secrets: list[str] = []
        if password is not None:
            credentials = Credentials(username=username.strip(), password=password, domain=domain)
            args += [f"/user:{credentials.qualified_username}", password]
            secrets.append(password)
        args.append(f"/persistent:{'yes' if self.settings.persistent_mounts else 'no'}")

        if self.state(letter) is DriveState.MOUNTED:
            raise DriveAlreadyMountedError(letter)
        self._transition(letter, DriveState.MOUNTING)
        self.logger.info(f"Mounting {remote} on {letter}:")
        try:
            result = self.runner.run(args, secrets=secrets)
            if not result.success:
                raise self._mount_error(letter, remote, result)
        except Exception:
            self._transition(letter, DriveState.UNMOUNTED)
            raise
        self._transition(letter, DriveState.MOUNTED)

        drive = MappedDrive(letter=letter, remote_path=remote, status="OK")
        if open_after:
            self.open(letter, check_exists=False)
        return drive

    def unmount(self, letter: str | None = None, force: bool = False) -> None:
        """
        Detach a drive letter.

        Args:
            letter: Drive letter, the configured default when omitted
            force: Disconnect even if files are open on the share

        Raises:
            DriveInUseError: Files are open and force was not given
            DriveNotMountedError: The letter is not mapped
            DriveError: Any other net use failure
        """
        letter = normalize_drive_letter(letter or self.settings.default_drive)

        args = [self.settings.net_executable, "use", f"{letter}:", "/delete"]
        if force:
            args.append("/y")

        # The OS is authoritative about what is mounted, not this process
        if self.state(letter) is DriveState.UNMOUNTED:
            self._states[letter] = DriveState.MOUNTED

        self._transition(letter, DriveState.UNMOUNTING)
        self.logger.info(f"Unmounting {letter}:{' (forced)' if force else ''}")
        try:
            result = self.runner.run(args)
            if not result.success:
                raise self._unmount_error(letter, result)
        except DriveNotMountedError:
            self._states[letter] = DriveState.UNMOUNTED
            raise
        except Exception:
            self._transition(letter, DriveState.MOUNTED)
            raise
        self._transition(letter, DriveState.UNMOUNTED)

    def status(self) -> list[MappedDrive]:
        """
        List mapped drive letters.

        Raises:
            DriveError: If net use fails
        """
        result = self.runner.run([self.settings.net_executable, "use"])
        if not result.success:
            raise DriveError(f"Failed to check drive status: {net_use_error_message(result.output)}")

        drives = parse_net_use_list(result.stdout)
        for drive in drives:
            self._states[drive.letter] = DriveState.MOUNTED
        return drives

    def open(self, letter: str | None = None, check_exists: bool = True) -> str:
        """
        Open a drive in the Windows file browser.

        Nothing is mounted; the letter must already be available.

        Returns:
            The opened path

        Raises:
            DriveNotFoundError: If check_exists is set and the path is missing
        """
        letter = normalize_drive_letter(letter or self.settings.default_drive)
        path = f"{letter}:\\"

        if check_exists and not self.path_exists(path):
            raise DriveNotFoundError(letter)

        self.logger.info(f"Opening {path} in Explorer")
        self.runner.spawn([self.settings.explorer_executable, path])
        return path

    @staticmethod
    def path_exists(path: str) -> bool:
        return os.path.exists(path)

    # Error classification

    def _mount_error(self, letter: str, remote: str, result: CommandResult) -> DriveError:
        text = result.output
        code = parse_net_use_error(text)
        message = net_use_error_message(text) or result.diagnostic

        if code in NET_ALREADY_IN_USE:
            return DriveAlreadyMountedError(letter)
        if code in NET_AUTH_FAILURE:
            return DriveAuthenticationError(letter, message)
        if code in NET_UNREACHABLE:
            return NetworkUnreachableError(remote, message)
        if code in NET_MULTIPLE_CREDENTIALS:
            return DriveError(
                f"Failed to mount drive {letter}: {message} "
                f"Disconnect other connections to {self.settings.nas_host} first.",
                details={"drive": letter, "system_error": code},
            )

        details = {"drive": letter}
        if code is not None:
            details["system_error"] = code
        return DriveError(f"Failed to mount drive {letter}: {message}", details=details)

    def _unmount_error(self, letter: str, result: CommandResult) -> Exception:
        text = result.output
        if is_in_use_prompt(text):
            return DriveInUseError(letter)

        code = parse_net_use_error(text)
        if code in NET_NOT_CONNECTED:
            return DriveNotMountedError(letter)

        message = net_use_error_message(text) or result.diagnostic
        details = {"drive": letter}
        if code is not None:
            details["system_error"] = code
        return DriveError(f"Failed to unmount drive {letter}: {message}", details=details)
