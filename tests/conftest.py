"""
Pytest configuration and shared fixtures.
"""

import pytest
from typer.testing import CliRunner

from upv.core.config import Settings, runtime_config, settings
from upv.services.drive_manager import DriveManager
from upv.services.vpn_manager import VpnManager

from .fakes import FakeWindows


@pytest.fixture(autouse=True)
def reset_runtime_config():
    """Undo changes the CLI callback makes to the global configuration."""
    saved = runtime_config.model_dump()
    debug = settings.debug
    yield
    for key, value in saved.items():
        setattr(runtime_config, key, value)
    settings.debug = debug


@pytest.fixture
def test_settings() -> Settings:
    """Settings with defaults only, ignoring the environment and .env files."""
    return Settings(_env_file=None)


@pytest.fixture
def windows() -> FakeWindows:
    """An empty fake Windows host."""
    return FakeWindows()


@pytest.fixture
def vpn_manager(windows, test_settings) -> VpnManager:
    return VpnManager(runner=windows, settings=test_settings)


@pytest.fixture
def drive_manager(windows, test_settings) -> DriveManager:
    return DriveManager(runner=windows, settings=test_settings)


@pytest.fixture
def cli_windows(windows, monkeypatch) -> FakeWindows:
    """Route every service created by the CLI to the fake host."""
    monkeypatch.setattr("upv.services.base.CommandRunner", lambda: windows)
    return windows


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create CLI runner for testing."""
    return CliRunner()
