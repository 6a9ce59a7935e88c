"""
Settings Tests

Tests for environment-driven settings and their process-wide cache.
"""

import platform
from pathlib import Path

import pytest

from humantyped import __version__
from humantyped.config import get_settings


ENV_VARS = (
    "HUMANTYPED_PLATFORM",
    "HUMANTYPED_PLATFORM_VERSION",
    "HUMANTYPED_LOG_LEVEL",
    "HUMANTYPED_HOST",
    "HUMANTYPED_PORT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset all settings variables and clear the cache around each test."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettings:
    """Test settings defaults and overrides."""

    def test_defaults(self, clean_env):
        settings = get_settings()

        assert settings.sdk_version == __version__
        assert settings.platform == (platform.system() or "unknown")
        assert settings.platform_version == (platform.release() or "unknown")
        assert settings.log_level == "INFO"
        assert settings.host == "127.0.0.1"
        assert settings.port == 8000

    def test_overrides(self, clean_env):
        clean_env.setenv("HUMANTYPED_PLATFORM", "iOS")
        clean_env.setenv("HUMANTYPED_PLATFORM_VERSION", "17.2")
        clean_env.setenv("HUMANTYPED_LOG_LEVEL", "debug")
        clean_env.setenv("HUMANTYPED_PORT", "9100")

        settings = get_settings()

        assert settings.platform == "iOS"
        assert settings.platform_version == "17.2"
        assert settings.log_level == "DEBUG"
        assert settings.port == 9100

    def test_cached(self, clean_env):
        first = get_settings()
        clean_env.setenv("HUMANTYPED_PLATFORM", "Changed")

        assert get_settings() is first

    def test_invalid_port(self, clean_env):
        clean_env.setenv("HUMANTYPED_PORT", "not-a-port")

        with pytest.raises(ValueError):
            get_settings()

    def test_settings_frozen(self, clean_env):
        settings = get_settings()

        with pytest.raises(AttributeError):
            settings.platform = "Other"


class TestPackaging:
    """Project metadata published with the distribution."""

    def test_no_readme_published(self):
        tomllib = pytest.importorskip("tomllib")
        with open(Path(__file__).resolve().parents[1] / "pyproject.toml", "rb") as f:
            project = tomllib.load(f)["project"]

        assert project["name"] == "human-typed-input"
        assert "readme" not in project
