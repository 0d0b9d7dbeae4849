"""Core Pydantic models for UPV CLI.

All models are request-scoped: nothing here is persisted, the operating
system owns the registered VPN entries and the mapped drives.
"""

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


class UPVDomain(str, Enum):
    """UPV account domains."""

    ALUMNO = "ALUMNO"
    UPVNET = "UPVNET"

    @property
    def share_root(self) -> str:
        """Top-level folder of the personal share for this domain."""
        return "alumnos" if self is UPVDomain.ALUMNO else "discos"


class DriveState(str, Enum):
    """Lifecycle of a drive letter during one invocation."""

    UNMOUNTED = "unmounted"
    MOUNTING = "mounting"
    MOUNTED = "mounted"
    UNMOUNTING = "unmounting"


def normalize_drive_letter(value: str) -> str:
    """Normalize 'w', 'W' or 'W:' to 'W'.

    Raises:
        ValueError: If the value is not a single letter A-Z
    """
    letter = str(value).strip().rstrip(":\\").upper()
    if len(letter) != 1 or not ("A" <= letter <= "Z"):
        raise ValueError(f"Invalid drive letter: {value!r}. Use a single letter A-Z.")
    return letter


class Credentials(BaseModel):
    """Explicit credentials for a share or a dial-up entry."""

    username: str = Field(min_length=1)
    password: str | None = None
    domain: UPVDomain | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def qualified_username(self) -> str:
        """Username prefixed with the domain, as net use expects it."""
        if self.domain is None:
            return self.username
        return f"{self.domain.value}\\{self.username}"


class CommandResult(BaseModel):
    """Outcome of an external command."""

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @computed_field
    @property
    def success(self) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)

    @property
    def diagnostic(self) -> str:
        """Best available error text: stderr, falling back to stdout."""
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"exit status {self.returncode}"


class VpnConnection(BaseModel):
    """A registered dial-up entry."""

    name: str = Field(min_length=1)
    server_address: str | None = None
    tunnel_type: str | None = None


class VpnStatus(BaseModel):
    """Current state of the dial-up subsystem."""

    connected: bool = False
    active_connections: list[str] = Field(default_factory=list)


class MappedDrive(BaseModel):
    """A drive letter mapped to a remote share."""

    letter: str
    remote_path: str
    status: str | None = None
    network: str | None = None

    @field_validator("letter")
    @classmethod
    def validate_letter(cls, v: str) -> str:
        return normalize_drive_letter(v)

    @property
    def path(self) -> str:
        """Local root path, e.g. ``W:\\``."""
        return f"{self.letter}:\\"


class PurgeReport(BaseModel):
    """Result of deleting every UPV VPN entry."""

    deleted: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)
    kept: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def ok(self) -> bool:
        return not self.failed
