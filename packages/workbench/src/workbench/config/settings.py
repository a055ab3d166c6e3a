"""Pydantic models for workbench settings."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class Settings(BaseModel, frozen=True):
    """Runtime configuration loaded from environment variables."""

    # Echo the full joined command line instead of just the program name
    compiler_show_path: bool = False
    working_dir: str = "."
    command_timeout: float | None = None
    log_level: str = "INFO"
    trace_enabled: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return level

    @field_validator("command_timeout")
    @classmethod
    def _check_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            msg = "command_timeout must be positive"
            raise ValueError(msg)
        return value


def _parse_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean, got {raw!r}"
    raise ValueError(msg)


def _parse_timeout(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number of seconds, got {raw!r}"
        raise ValueError(msg) from None


def load_settings() -> Settings:
    """Load settings from environment variables with defaults."""
    load_dotenv()

    return Settings(
        compiler_show_path=_parse_bool("WORKBENCH_COMPILER_SHOW_PATH", False),
        working_dir=os.getenv("WORKBENCH_WORKING_DIR") or os.getcwd(),
        command_timeout=_parse_timeout("WORKBENCH_COMMAND_TIMEOUT"),
        log_level=os.getenv("WORKBENCH_LOG_LEVEL", "INFO"),
        trace_enabled=_parse_bool("WORKBENCH_TRACE_ENABLED", False),
    )
