"""
VPN management service.

Profiles are managed through the PowerShell VpnClient cmdlets, dialing and
hanging up through rasdial, and the interactive dial dialog through rasphone.
"""

from importlib import resources
from typing import Iterable

from upv.core.exceptions import ConfigurationError, VpnConnectionError, VpnError
from upv.core.models import CommandResult, Credentials, PurgeReport, VpnConnection, VpnStatus
from upv.services.base import BaseService
from upv.services.parsers import (
    RAS_HINTS,
    parse_name_list,
    parse_rasdial_result,
    parse_rasdial_status,
)


def quote_ps(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string."""
    return "'" + value.replace("'", "''") + "'"


class VpnManager(BaseService):
    """Service for UPV VPN (dial-up) entries."""

    def load_eap_config(self) -> str:
        """Read the EAP configuration XML embedded in new entries."""
        path = self.settings.eap_config_path
        try:
            if path is not None:
                xml = path.read_text(encoding="utf-8-sig")
            else:
                xml = (
                    resources.files("upv")
                    .joinpath("resources", "UPV_Config.xml")
                    .read_text(encoding="utf-8-sig")
                )
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read EAP configuration: {e}",
                details={"path": str(path) if path else "UPV_Config.xml"},
            ) from e

        return xml.strip().lstrip("\ufeff")

    def _powershell(self, script: str, via_stdin: bool = False) -> CommandResult:
        executable = self.settings.powershell_executable
        if via_stdin:
            # Long scripts (the EAP here-string) are fed through stdin
            return self.runner.run(
                [executable, "-NoProfile", "-NonInteractive", "-Command", "-"],
                input=script,
            )
        return self.runner.run(
            [executable, "-NoProfile", "-NonInteractive", "-Command", script]
        )

    # Profile management

    def create(self, name: str) -> VpnConnection:
        """
        Register a new UPV VPN entry.

        Args:
            name: Name for the VPN connection

        Returns:
            The created connection

        Raises:
            VpnError: If PowerShell reports a failure
        """
        name = self._validate_name(name)
        xml = self.load_eap_config()
        server = self.settings.vpn_server_address
        tunnel = self.settings.tunnel_type

        script = (
            f"Add-VpnConnection -Name {quote_ps(name)} "
            f"-ServerAddress {quote_ps(server)} "
            f"-AuthenticationMethod Eap -EncryptionLevel Required "
            f"-TunnelType {tunnel} "
            f"-EapConfigXmlStream @'\r\n{xml}\r\n'@\r\n\r\n"
        )

        self.logger.info(f"Creating VPN connection '{name}' to {server}")
        result = self._powershell(script, via_stdin=True)

        # PowerShell may exit 0 while writing an error record to stderr
        if not result.success or result.stderr.strip():
            raise VpnError(
                f"Failed to create VPN connection '{name}': {result.diagnostic}",
                details={"name": name},
            )

        return VpnConnection(name=name, server_address=server, tunnel_type=tunnel)

    def list_connections(self) -> list[str]:
        """Names of the VPN entries that point to the UPV server."""
        server = self.settings.vpn_server_address
        script = (
            "Get-VpnConnection | "
            f"Where-Object {{$_.ServerAddress -eq {quote_ps(server)}}} | "
            "Select-Object -ExpandProperty Name"
        )

        result = self._powershell(script)
        if not result.success:
            raise VpnError(f"Failed to get VPN connections: {result.diagnostic}")

        return parse_name_list(result.stdout)

    def delete(self, name: str) -> None:
        """
        Remove a VPN entry.

        Raises:
            VpnError: If the entry could not be removed
        """
        name = self._validate_name(name)
        self.logger.info(f"Deleting VPN connection '{name}'")

        result = self._powershell(f"Remove-VpnConnection -Name {quote_ps(name)} -Force")
        if not result.success or result.stderr.strip():
            raise VpnError(
                f"Failed to delete VPN connection '{name}': {result.diagnostic}",
                details={"name": name},
            )

    def purge_candidates(self, except_names: Iterable[str] = ()) -> tuple[list[str], list[str]]:
        """
        Split UPV entries into those a purge would delete and those it keeps.

        Returns:
            Tuple of (to_delete, kept)
        """
        keep = {n.strip().lower() for n in except_names if n.strip()}
        to_delete: list[str] = []
        kept: list[str] = []
        for name in self.list_connections():
            if name.lower() in keep:
                kept.append(name)
            else:
                to_delete.append(name)
        return to_delete, kept

    def purge(self, except_names: Iterable[str] = ()) -> PurgeReport:
        """
        Delete every UPV entry except the excluded ones.

        Failures are collected per entry; the remaining entries are still
        deleted.
        """
        to_delete, kept = self.purge_candidates(except_names)
        return self.delete_many(to_delete, kept=kept)

    def delete_many(self, names: Iterable[str], kept: Iterable[str] = ()) -> PurgeReport:
        """Delete the given entries one by one, recording failures."""
        report = PurgeReport(kept=list(kept))
        for name in names:
            try:
                self.delete(name)
            except VpnError as e:
                self.logger.warning(f"Could not delete '{name}': {e.message}")
                report.failed[name] = e.message
            else:
                report.deleted.append(name)
        return report

    # Dialing

    def connect(self, name: str, credentials: Credentials | None = None) -> None:
        """
        Dial a VPN entry.

        With credentials the entry is dialed directly through rasdial. Without
        them the Windows dial dialog is opened, which asks for the password
        itself.

        Raises:
            VpnConnectionError: If rasdial reports a Remote Access error
            VpnError: If the dialog cannot be opened or the output is not
                      recognized
        """
        name = self._validate_name(name)

        if credentials is None:
            self.logger.info(f"Opening connection dialog for '{name}'")
            result = self.runner.run([self.settings.rasphone_executable, "-d", name])
            if not result.success:
                raise VpnError(
                    f"Failed to open connection dialog for '{name}': {result.diagnostic}",
                    details={"name": name},
                )
            return

        args = [self.settings.rasdial_executable, name, credentials.qualified_username]
        if credentials.password is not None:
            args.append(credentials.password)

        self.logger.info(f"Dialing '{name}' as {credentials.qualified_username}")
        result = self.runner.run(args, secrets=[credentials.password or ""])
        outcome = parse_rasdial_result(result.stdout, result.stderr, result.returncode)

        if outcome.success:
            return
        if not outcome.recognized:
            raise VpnError(
                f"Unrecognized response from rasdial while connecting to '{name}': {outcome.message}",
                details={"name": name},
            )

        reason = outcome.message
        hint = RAS_HINTS.get(outcome.error_code) if outcome.error_code else None
        if hint:
            reason = f"{reason} ({hint})" if reason else hint
        raise VpnConnectionError(name, reason, outcome.error_code)

    def disconnect(self, name: str | None = None) -> None:
        """
        Hang up the named connection, or every active one.

        Raises:
            VpnError: If rasdial reports a failure
        """
        args = [self.settings.rasdial_executable]
        if name:
            args.append(name)
        args.append("/disconnect")

        result = self.runner.run(args)
        outcome = parse_rasdial_result(result.stdout, result.stderr, result.returncode)
        if outcome.success:
            return

        target = f"'{name}'" if name else "VPN"
        if not outcome.recognized:
            raise VpnError(f"Unrecognized response from rasdial while disconnecting from {target}: {outcome.message}")
        raise VpnError(
            f"Failed to disconnect from {target}: {outcome.message}",
            details={"ras_error": outcome.error_code} if outcome.error_code else None,
        )

    def status(self) -> VpnStatus:
        """
        Report which entries are connected.

        Raises:
            VpnError: If the rasdial output cannot be interpreted
        """
        result = self.runner.run([self.settings.rasdial_executable])
        if not result.success:
            raise VpnError(f"Failed to check VPN status: {result.diagnostic}")

        status = parse_rasdial_status(result.stdout)
        if status is None:
            raise VpnError(
                "Unrecognized response from rasdial while checking status",
                details={"output": result.stdout.strip()},
            )
        return status

    @staticmethod
    def _validate_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("VPN connection name cannot be empty")
        return name
