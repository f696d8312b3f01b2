"""Runtime settings, read from the environment (and .env, if present)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from mugloar.client import DEFAULT_BASE_URL

ROOT = Path(__file__).parent.parent

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    api_url: str = DEFAULT_BASE_URL
    timeout: float = Field(30.0, gt=0)
    max_turns: int = Field(300, ge=1)  # safety valve against a runaway loop
    turn_delay: float = Field(0.5, ge=0)
    session_ttl: int = Field(3600, ge=1)  # seconds a served session may sit idle
    log_level: LogLevel = "INFO"
    host: str = "0.0.0.0"
    port: int = 13015

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> Settings:
        """Build settings from MUGLOAR_* variables, falling back to defaults."""
        load_dotenv(env_file or ROOT / ".env")
        values = {
            "api_url": os.getenv("MUGLOAR_API_URL"),
            "timeout": os.getenv("MUGLOAR_TIMEOUT"),
            "max_turns": os.getenv("MUGLOAR_MAX_TURNS"),
            "turn_delay": os.getenv("MUGLOAR_TURN_DELAY"),
            "session_ttl": os.getenv("MUGLOAR_SESSION_TTL"),
            "log_level": os.getenv("LOG_LEVEL"),
            "host": os.getenv("HOST"),
            "port": os.getenv("PORT"),
        }
        return cls.model_validate({k: v for k, v in values.items() if v})
