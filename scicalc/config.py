"""Runtime settings read from the environment (and a .env file, if present)."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .evaluator import AngleMode

ENV_PREFIX = "SCICALC_"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    """Calculator settings. Every field can be overridden by ``SCICALC_<FIELD>``."""
    angle_mode: AngleMode = AngleMode.DEGREES
    history_limit: int = Field(6, ge=1, description="Number of results kept in the history")
    log_level: str = "WARNING"
    history_file: str = Field("~/.scicalc_history", validate_default=True, description="REPL input history file")

    @field_validator('angle_mode', mode='before')
    @classmethod
    def parse_angle_mode(cls, v):
        try:
            return AngleMode(v)
        except ValueError:
            raise ValueError(f"angle_mode must be DEG or RAD, got {v!r}")

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('history_file')
    @classmethod
    def expand_history_file(cls, v: str) -> str:
        return os.path.expanduser(v.strip())


def load_settings(**overrides) -> Settings:
    """Build Settings from ``SCICALC_*`` environment variables, then apply ``overrides``."""
    load_dotenv()
    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip():
            values[name] = raw
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
