"""Tests for configuration validation."""

import pytest

from oura_digest.config import (
    VALID_LOG_LEVELS,
    AppSettings,
    LineSettings,
    OuraSettings,
    Settings,
)
from oura_digest.errors import ConfigError

REQUIRED_ENV = ("OURA_API_TOKEN", "LINE_API_TOKEN", "TO_LINE_USER")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Drop required variables and move away from any local .env file."""
    for name in REQUIRED_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_oura_token_validation():
    """Oura token must be non-empty."""
    with pytest.raises(ValueError, match="Oura API token cannot be empty"):
        OuraSettings(_env_file=None, api_token="   ")


def test_oura_defaults():
    settings = OuraSettings(_env_file=None, api_token="t", base_url="https://example.test/v2/")
    assert settings.base_url == "https://example.test/v2"
    assert settings.timeout_seconds == 10.0


def test_oura_timeout_must_be_positive():
    with pytest.raises(ValueError, match="Timeout must be positive"):
        OuraSettings(_env_file=None, api_token="t", timeout_seconds=0)


def test_line_recipient_validation():
    with pytest.raises(ValueError, match="LINE recipient cannot be empty"):
        LineSettings(_env_file=None, api_token="t", TO_LINE_USER="")


def test_line_recipient_from_env(clean_env):
    clean_env.setenv("LINE_API_TOKEN", "line-token")
    clean_env.setenv("TO_LINE_USER", "Uabc")

    settings = LineSettings()

    assert settings.recipient_id == "Uabc"
    assert settings.api_token == "line-token"
    assert settings.push_url == "https://api.line.me/v2/bot/message/push"


def test_app_settings_normalize_log_fields():
    """App settings normalize log format and log level."""
    settings = AppSettings(_env_file=None, log_level="debug", log_format="Console")

    assert settings.log_level == "DEBUG"
    assert settings.log_format == "console"
    assert settings.log_level in VALID_LOG_LEVELS


def test_app_settings_reject_unknown_timezone():
    with pytest.raises(ValueError, match="Unknown timezone"):
        AppSettings(_env_file=None, timezone="Not/AZone")


def test_settings_are_immutable(settings):
    with pytest.raises(ValueError):
        settings.oura.api_token = "other"


def test_load_reads_environment(clean_env):
    clean_env.setenv("OURA_API_TOKEN", "oura-token")
    clean_env.setenv("LINE_API_TOKEN", "line-token")
    clean_env.setenv("TO_LINE_USER", "U1")

    settings = Settings.load()

    assert settings.oura.api_token == "oura-token"
    assert settings.line.recipient_id == "U1"
    assert settings.app.timezone == "Asia/Tokyo"


def test_load_reads_dotenv_file(clean_env, tmp_path):
    (tmp_path / ".env").write_text(
        "OURA_API_TOKEN=from-file\nLINE_API_TOKEN=line-file\nTO_LINE_USER=Ufile\n"
    )

    settings = Settings.load()

    assert settings.oura.api_token == "from-file"
    assert settings.line.recipient_id == "Ufile"


@pytest.mark.parametrize("missing", REQUIRED_ENV)
def test_load_missing_value_is_config_error(clean_env, missing):
    for name in REQUIRED_ENV:
        clean_env.setenv(name, "value")
    clean_env.delenv(missing)

    with pytest.raises(ConfigError, match="Invalid configuration"):
        Settings.load()


def test_load_empty_value_is_config_error(clean_env):
    clean_env.setenv("OURA_API_TOKEN", "")
    clean_env.setenv("LINE_API_TOKEN", "line-token")
    clean_env.setenv("TO_LINE_USER", "U1")

    with pytest.raises(ConfigError, match="Oura API token cannot be empty"):
        Settings.load()
