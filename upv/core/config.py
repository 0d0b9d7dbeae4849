"""
Configuration management using Pydantic Settings.
"""

from pathlib import Path
from typing import Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from upv.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are prefixed with UPV_.
    For example: UPV_DEBUG=true, UPV_DEFAULT_DRIVE=Z
    """

    # Application settings
    app_name: str = "UPV CLI"
    debug: bool = False
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # VPN
    vpn_server_address: str = "vpn.upv.es"
    tunnel_type: str = "Sstp"
    eap_config_path: Optional[Path] = None

    # Personal network drive (Disco W)
    nas_host: str = "nasupv.upv.es"
    default_drive: str = "W"
    persistent_mounts: bool = False

    # External programs
    powershell_executable: str = "powershell"
    rasdial_executable: str = "rasdial"
    rasphone_executable: str = "rasphone"
    net_executable: str = "net"
    explorer_executable: str = "explorer.exe"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="UPV_",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {', '.join(valid_levels)}")
        return v

    @field_validator("default_drive")
    @classmethod
    def validate_default_drive(cls, v: str) -> str:
        """Validate the default drive letter."""
        letter = v.strip().rstrip(":").upper()
        if len(letter) != 1 or not ("A" <= letter <= "Z"):
            raise ValueError(f"Invalid drive letter: {v!r}")
        return letter

    @field_validator("eap_config_path")
    @classmethod
    def expand_eap_config_path(cls, v: Optional[Path]) -> Optional[Path]:
        """Expand user home in the EAP configuration path."""
        if v is None:
            return v
        return v.expanduser()


class RuntimeConfig(BaseSettings):
    """Runtime configuration that can be modified during execution."""

    # Runtime flags
    quiet: bool = False
    verbose: bool = False
    output_format: str = "table"
    no_color: bool = False

    model_config = SettingsConfigDict(
        env_prefix="UPV_",
        validate_default=True,
        validate_assignment=True,
    )

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        """Validate output format."""
        valid_formats = ["table", "json", "yaml", "plain"]
        if v not in valid_formats:
            raise ValueError(f"Invalid output format. Must be one of: {', '.join(valid_formats)}")
        return v


def load_settings(settings_class):
    """
    Build a settings instance from the environment.

    Invalid values fall back to the defaults so that importing the CLI never
    fails; the validation error is returned for `check_environment` to report.
    """
    try:
        return settings_class(), None
    except ValidationError as e:
        return settings_class.model_construct(), e


# Global instances
settings, _settings_error = load_settings(Settings)
runtime_config, _runtime_error = load_settings(RuntimeConfig)


def check_environment() -> None:
    """
    Report invalid UPV_* variables found while loading the global settings.

    Raises:
        ConfigurationError: If a variable or .env entry failed validation
    """
    for error in (_settings_error, _runtime_error):
        if error is None:
            continue
        first = error.errors()[0]
        variable = "UPV_" + "_".join(str(part) for part in first["loc"]).upper()
        raise ConfigurationError(
            f"Invalid value for {variable}: {first['msg']}",
            error_code="INVALID_SETTING",
            details={"variable": variable, "errors": error.error_count()},
        )
