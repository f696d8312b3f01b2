"""Tests for mugloar.config.Settings."""

import os

import pytest
from pydantic import ValidationError

from mugloar.config import Settings

ENV_VARS = ["MUGLOAR_API_URL", "MUGLOAR_TIMEOUT", "MUGLOAR_MAX_TURNS", "MUGLOAR_TURN_DELAY",
            "MUGLOAR_SESSION_TTL", "LOG_LEVEL", "HOST", "PORT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings.api_url == "https://dragonsofmugloar.com/api/v2"
    assert settings.max_turns == 300
    assert settings.turn_delay == 0.5


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("MUGLOAR_API_URL", "http://localhost:9000/api/v2")
    monkeypatch.setenv("MUGLOAR_MAX_TURNS", "25")
    monkeypatch.setenv("MUGLOAR_TURN_DELAY", "0")
    settings = Settings.from_env(tmp_path / "missing.env")
    assert settings.api_url == "http://localhost:9000/api/v2"
    assert settings.max_turns == 25
    assert settings.turn_delay == 0


def test_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("MUGLOAR_MAX_TURNS=42\n")
    try:
        settings = Settings.from_env(env_file)
        assert settings.max_turns == 42
    finally:
        # load_dotenv writes into os.environ
        os.environ.pop("MUGLOAR_MAX_TURNS", None)


def test_invalid_values_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("MUGLOAR_MAX_TURNS", "0")
    with pytest.raises(ValidationError):
        Settings.from_env(tmp_path / "missing.env")


def test_log_level_case_insensitive(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings.from_env(tmp_path / "missing.env").log_level == "DEBUG"


def test_unknown_log_level_rejected(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        Settings.from_env(tmp_path / "missing.env")
