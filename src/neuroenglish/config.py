"""Environment-driven settings and well-known file locations."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

__all__ = ["APP_NAME", "APP_VERSION", "Settings", "get_settings", "reload"]

APP_NAME = "NeuroEnglish"
APP_VERSION = "1.0.0"

_FALSE_VALUES = {"0", "false", "off", "no", "disable", "disabled"}
_TRUE_VALUES = {"1", "true", "on", "yes", "enable", "enabled"}


@dataclass(frozen=True)
class Settings:
    home: Path
    db_path: Path
    phrases_path: Path
    log_dir: Path
    log_level: int = logging.WARNING
    log_files: bool = True


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalised = value.strip().lower()
    if normalised in _TRUE_VALUES:
        return True
    if normalised in _FALSE_VALUES:
        return False
    return default


def _parse_level(value: str | None) -> int:
    if not value:
        return logging.WARNING
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def _default_home() -> Path:
    """
    Platform data directory for the application.

    - Windows: %LOCALAPPDATA%\\NeuroEnglish
    - macOS: ~/Library/Application Support/NeuroEnglish
    - Linux: $XDG_DATA_HOME/NeuroEnglish (~/.local/share/NeuroEnglish)
    """
    home = Path.home()

    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA", home / "AppData" / "Local"))
        return base / APP_NAME

    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_NAME

    xdg_data_home = os.environ.get("XDG_DATA_HOME") or home / ".local" / "share"
    return Path(xdg_data_home) / APP_NAME


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the settings parsed from ``NEUROENGLISH_*`` environment variables."""

    raw_home = os.environ.get("NEUROENGLISH_HOME")
    home = Path(raw_home).expanduser() if raw_home else _default_home()

    raw_db = os.environ.get("NEUROENGLISH_DB")
    raw_phrases = os.environ.get("NEUROENGLISH_PHRASES")

    return Settings(
        home=home,
        db_path=Path(raw_db).expanduser() if raw_db else home / "db" / "phrases.db",
        phrases_path=(
            Path(raw_phrases).expanduser() if raw_phrases else home / "data" / "phrases.json"
        ),
        log_dir=home / "logs",
        log_level=_parse_level(os.environ.get("NEUROENGLISH_LOG_LEVEL")),
        log_files=_parse_bool(os.environ.get("NEUROENGLISH_LOG_FILES"), True),
    )


def reload() -> None:
    """Clear the cached settings (useful for tests)."""

    get_settings.cache_clear()
