"""Parsers for the text output of rasdial and net use.

Windows localizes these messages, so every marker is matched against the
English and Spanish wordings. Error numbers (``Remote Access error 691``,
``System error 85``) are the same in every language and are preferred over
message text wherever they are available.
"""

import re
from dataclasses import dataclass

from upv.core.models import MappedDrive, VpnStatus

# rasdial markers
RASDIAL_SUCCESS_MARKERS = (
    "command completed successfully",
    "el comando se completó correctamente",
    "se ha completado el comando correctamente",
)
RASDIAL_NO_CONNECTIONS_MARKERS = (
    "no connections",
    "no hay conexiones",
)
RASDIAL_CONNECTED_MARKERS = (
    "connected to",
    "conectado a",
)
RASDIAL_ERROR_RE = re.compile(
    r"(?:remote access error|error de acceso remoto)\s+(?P<code>\d+)\s*[-:]?\s*(?P<text>.*)",
    re.IGNORECASE,
)

# net use markers
NET_SYSTEM_ERROR_RE = re.compile(
    r"(?:system error|error de sistema)\s+(?P<code>\d+)",
    re.IGNORECASE,
)
# The "(Y/N) [N]" confirmation shown when files are open on the share
NET_CONFIRM_PROMPT_RE = re.compile(r"\(\s*\w\s*/\s*N\s*\)", re.IGNORECASE)
NET_MAPPING_RE = re.compile(
    r"^(?P<status>.*?)\s*\b(?P<letter>[A-Za-z]):\s+(?P<remote>\\\\\S.*?)\s*$"
)
NET_COLUMN_GAP_RE = re.compile(r"\s{2,}")
NET_SEPARATOR_RE = re.compile(r"^-{10,}\s*$")

# Remote Access errors worth a dedicated hint
RAS_HINTS = {
    623: "The VPN entry does not exist. Use 'upv vpn list' to see your entries.",
    691: "The user name or password was not accepted.",
    718: "The server did not respond in time. Check your Internet connection.",
    800: "Unable to reach the VPN server. Check your Internet connection.",
    809: "The VPN server could not be reached. A firewall may be blocking it.",
}

# net use system errors grouped by cause
NET_ALREADY_IN_USE = {85}
NET_AUTH_FAILURE = {86, 1244, 1326, 1327, 1330, 1331}
NET_UNREACHABLE = {51, 53, 64, 67, 1231, 1232}
NET_NOT_CONNECTED = {2250}
NET_MULTIPLE_CREDENTIALS = {1219}


@dataclass
class RasdialOutcome:
    """Interpretation of a rasdial invocation."""

    success: bool
    error_code: int | None = None
    message: str = ""
    recognized: bool = True


def _contains(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def _lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_rasdial_result(stdout: str, stderr: str = "", returncode: int = 0) -> RasdialOutcome:
    """Decide whether a rasdial call succeeded.

    A non-zero exit status or a ``Remote Access error`` line is a failure.
    Exit status 0 with a completion marker is success. Exit status 0 without
    any recognized marker is reported as unrecognized so the caller can raise
    a generic error instead of assuming success.
    """
    text = "\n".join(part for part in (stdout, stderr) if part)

    match = RASDIAL_ERROR_RE.search(text)
    if match:
        return RasdialOutcome(
            success=False,
            error_code=int(match.group("code")),
            message=match.group("text").strip() or _first_line(text),
        )

    if returncode != 0:
        # rasdial exits with the RAS error number
        return RasdialOutcome(
            success=False,
            error_code=returncode if returncode > 0 else None,
            message=_first_line(text) or f"rasdial exited with status {returncode}",
        )

    if _contains(text, RASDIAL_SUCCESS_MARKERS):
        return RasdialOutcome(success=True, message=_first_line(text))

    return RasdialOutcome(
        success=False,
        message=_first_line(text) or "rasdial produced no output",
        recognized=False,
    )


def parse_rasdial_status(stdout: str) -> VpnStatus | None:
    """Parse the output of ``rasdial`` without arguments.

    Returns None when the output matches neither the connected nor the
    disconnected layout.

    Example (connected)::

        Connected to
        UPV
        Command completed successfully.
    """
    lines = _lines(stdout)
    if not lines:
        return None

    if _contains(lines[0], RASDIAL_NO_CONNECTIONS_MARKERS):
        return VpnStatus(connected=False)

    if _contains(lines[0], RASDIAL_CONNECTED_MARKERS):
        names = [
            line for line in lines[1:]
            if not _contains(line, RASDIAL_SUCCESS_MARKERS)
        ]
        return VpnStatus(connected=bool(names), active_connections=names)

    return None


def parse_name_list(stdout: str) -> list[str]:
    """One connection name per non-empty line, duplicates removed."""
    seen: list[str] = []
    for line in _lines(stdout):
        if line not in seen:
            seen.append(line)
    return seen


def parse_net_use_error(text: str) -> int | None:
    """Extract the system error number from net use output."""
    match = NET_SYSTEM_ERROR_RE.search(text)
    if match:
        return int(match.group("code"))
    return None


def net_use_error_message(text: str) -> str:
    """Human readable part of a net use failure.

    net use prints ``System error NN has occurred.`` followed by a blank line
    and the actual message; the message is what users need to see.
    """
    lines = _lines(text)
    if not lines:
        return ""
    if NET_SYSTEM_ERROR_RE.search(lines[0]) and len(lines) > 1:
        return " ".join(lines[1:])
    return " ".join(lines)


def is_in_use_prompt(text: str) -> bool:
    """Check for the open-files confirmation net use shows on /delete."""
    return bool(NET_CONFIRM_PROMPT_RE.search(text))


def parse_net_use_list(stdout: str) -> list[MappedDrive]:
    """Parse the table printed by ``net use``.

    Example::

        Status       Local     Remote                    Network
        -------------------------------------------------------------------
        OK           W:        \\\\nasupv.upv.es\\discos\\j\\jdoe
                                                    Microsoft Windows Network
        Unavailable  Z:        \\\\server\\share            Microsoft Windows Network
        The command completed successfully.

    Only drive-letter mappings are returned; deviceless connections
    (``IPC$`` and similar) are skipped.
    """
    drives: list[MappedDrive] = []
    lines = stdout.splitlines()

    # Skip the header when the separator is present
    start = 0
    network_column = None
    for index, line in enumerate(lines):
        if NET_SEPARATOR_RE.match(line.strip()):
            start = index + 1
            network_column = _network_column(lines[:index])
            break

    for line in lines[start:]:
        if not line.strip():
            continue

        match = NET_MAPPING_RE.match(line.rstrip())
        if match:
            remote, network = _split_network(match.group("remote"), match.start("remote"), network_column)
            drives.append(MappedDrive(
                letter=match.group("letter"),
                remote_path=remote,
                status=match.group("status").strip() or None,
                network=network,
            ))
            continue

        # Long remote paths push the network provider onto the next line
        stripped = line.strip()
        if (
            drives
            and drives[-1].network is None
            and line[:1].isspace()
            and not stripped.startswith("\\\\")
        ):
            drives[-1].network = stripped

    return drives


def _network_column(header_lines: list[str]) -> int | None:
    """Offset of the last column ("Network", "Red") of the net use header."""
    for line in reversed(header_lines):
        if line.strip():
            columns = list(re.finditer(r"\S+", line))
            return columns[-1].start() if len(columns) >= 4 else None
    return None


def _split_network(rest: str, offset: int, network_column: int | None) -> tuple[str, str | None]:
    """Split the remote path from the network provider on a mapping line.

    Remote paths may contain spaces, so the header's column offset is used when
    known; otherwise the columns are taken to be separated by two or more spaces.
    """
    if network_column is not None:
        cut = network_column - offset
        if 0 < cut < len(rest) and rest[cut - 1].isspace():
            return rest[:cut].rstrip(), rest[cut:].strip() or None
        return rest, None

    parts = NET_COLUMN_GAP_RE.split(rest, maxsplit=1)
    return parts[0], parts[1] if len(parts) > 1 else None


def _first_line(text: str) -> str:
    lines = _lines(text)
    return lines[0] if lines else ""
