"""
Tests for settings, runtime configuration and models.
"""

import pytest
from pydantic import ValidationError

from upv.core.config import RuntimeConfig, Settings, check_environment, load_settings
from upv.core.exceptions import ConfigurationError
from upv.core.models import (
    CommandResult,
    Credentials,
    MappedDrive,
    UPVDomain,
    normalize_drive_letter,
)


class TestSettings:
    """Test environment driven settings."""

    def test_defaults(self, test_settings):
        assert test_settings.vpn_server_address == "vpn.upv.es"
        assert test_settings.nas_host == "nasupv.upv.es"
        assert test_settings.default_drive == "W"
        assert test_settings.tunnel_type == "Sstp"
        assert test_settings.log_level == "WARNING"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("UPV_DEFAULT_DRIVE", "z:")
        monkeypatch.setenv("UPV_LOG_LEVEL", "debug")
        monkeypatch.setenv("UPV_PERSISTENT_MOUNTS", "true")

        settings = Settings(_env_file=None)

        assert settings.default_drive == "Z"
        assert settings.log_level == "DEBUG"
        assert settings.persistent_mounts is True

    def test_invalid_drive(self, monkeypatch):
        monkeypatch.setenv("UPV_DEFAULT_DRIVE", "WW")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("UPV_NAS_HOST=nas.example.com\n")

        settings = Settings(_env_file=env_file)

        assert settings.nas_host == "nas.example.com"


class TestRuntimeConfig:

    def test_output_format_is_validated(self):
        config = RuntimeConfig()

        config.output_format = "json"
        assert config.output_format == "json"

        with pytest.raises(ValidationError):
            config.output_format = "xml"


class TestLoadSettings:
    """Test loading the global settings from a possibly invalid environment."""

    def test_valid_environment(self, monkeypatch):
        monkeypatch.setenv("UPV_NAS_HOST", "nas.example.com")

        loaded, error = load_settings(Settings)

        assert error is None
        assert loaded.nas_host == "nas.example.com"

    def test_invalid_environment_falls_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("UPV_OUTPUT_FORMAT", "xml")

        loaded, error = load_settings(RuntimeConfig)

        assert isinstance(error, ValidationError)
        assert loaded.output_format == "table"

    def test_check_environment_reports_variable(self, monkeypatch):
        monkeypatch.setenv("UPV_DEFAULT_DRIVE", "WW")
        _, error = load_settings(Settings)
        monkeypatch.setattr("upv.core.config._settings_error", error)

        with pytest.raises(ConfigurationError, match="UPV_DEFAULT_DRIVE") as exc_info:
            check_environment()

        assert exc_info.value.details["variable"] == "UPV_DEFAULT_DRIVE"

    def test_check_environment_passes(self, monkeypatch):
        monkeypatch.setattr("upv.core.config._settings_error", None)
        monkeypatch.setattr("upv.core.config._runtime_error", None)

        check_environment()


class TestModels:

    @pytest.mark.parametrize("value", ["w", "W", "W:", "w:\\", " W "])
    def test_normalize_drive_letter(self, value):
        assert normalize_drive_letter(value) == "W"

    @pytest.mark.parametrize("value", ["", "WW", "1", "Ñ"])
    def test_invalid_drive_letter(self, value):
        with pytest.raises(ValueError):
            normalize_drive_letter(value)

    def test_share_roots(self):
        assert UPVDomain.ALUMNO.share_root == "alumnos"
        assert UPVDomain.UPVNET.share_root == "discos"

    def test_qualified_username(self):
        assert Credentials(username="jdoe").qualified_username == "jdoe"
        assert Credentials(username="jdoe", domain=UPVDomain.ALUMNO).qualified_username == "ALUMNO\\jdoe"

    def test_credentials_require_username(self):
        with pytest.raises(ValidationError):
            Credentials(username="")

    def test_command_result_diagnostic(self):
        assert CommandResult(args=["net"], returncode=2, stderr="boom\n").diagnostic == "boom"
        assert CommandResult(args=["net"], returncode=2, stdout="out").diagnostic == "out"
        assert CommandResult(args=["net"], returncode=2).diagnostic == "exit status 2"

    def test_mapped_drive(self):
        drive = MappedDrive(letter="w:", remote_path="\\\\nasupv.upv.es\\discos\\j\\jdoe")

        assert drive.letter == "W"
        assert drive.path == "W:\\"
