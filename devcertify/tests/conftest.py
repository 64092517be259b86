"""Test fixtures for devcertify tests."""

from pathlib import Path

import pytest

from devcertify.lib.config import DevCertConfig
from devcertify.lib.platforms import PlatformCapabilities, resolve_platform
from devcertify.tests.fakes import ScriptedRunner


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Return temporary directory for certificate artifacts."""
    return tmp_path


@pytest.fixture
def dev_config() -> DevCertConfig:
    """Return default provisioning configuration."""
    return DevCertConfig()


@pytest.fixture
def windows() -> PlatformCapabilities:
    return resolve_platform("Windows")


@pytest.fixture
def macos() -> PlatformCapabilities:
    return resolve_platform("Darwin")


@pytest.fixture
def linux() -> PlatformCapabilities:
    return resolve_platform("Linux")


@pytest.fixture
def runner() -> ScriptedRunner:
    """Scripted runner for a platform without an elevation prompt."""
    return ScriptedRunner()


@pytest.fixture
def windows_runner() -> ScriptedRunner:
    """Scripted runner for Windows, where elevated calls capture no output."""
    return ScriptedRunner(elevation_supported=True)
