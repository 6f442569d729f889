"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from config import ConfigurationError, Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without HELLOWED_* variables."""
    for name in ("PORT", "HOST", "LOG_LEVEL", "LOG_FILE", "TODOS_APP"):
        monkeypatch.delenv(f"HELLOWED_{name}", raising=False)


class TestLoadSettings:
    """Test building settings from the environment."""

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("HELLOWED_PORT", "9000")

        settings = load_settings()

        assert settings.port == 9000
        assert settings.host == "0.0.0.0"
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.todos_app is None

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("HELLOWED_PORT", "9000")
        monkeypatch.setenv("HELLOWED_HOST", "0.0.0.0")

        settings = load_settings(host="127.0.0.1", port=7000)

        assert settings.port == 7000
        assert settings.host == "127.0.0.1"

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("HELLOWED_PORT", "9000")

        assert load_settings(host=None, port=None).port == 9000

    def test_missing_port(self):
        with pytest.raises(ConfigurationError, match="port"):
            load_settings()

    @pytest.mark.parametrize("value", ["abc", "0", "65536", "-1"])
    def test_invalid_port(self, monkeypatch, value):
        monkeypatch.setenv("HELLOWED_PORT", value)

        with pytest.raises(ConfigurationError, match="port"):
            load_settings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("HELLOWED_PORT", "9000")
        monkeypatch.setenv("HELLOWED_LOG_LEVEL", "debug")

        assert load_settings().log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ConfigurationError, match="log_level"):
            load_settings(port=9000, log_level="loud")


def test_settings_frozen():
    settings = Settings(port=8000)

    with pytest.raises(ValidationError):
        settings.port = 9000
