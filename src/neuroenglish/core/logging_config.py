# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Logging configuration with rotating log files."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from neuroenglish.config import APP_NAME, get_settings

__all__ = ["setup_logging"]

# Console noise from these stays at WARNING; DEBUG still goes to file
QUIET_MODULES = (
    "neuroenglish.storage.phrase_store",
    "neuroenglish.storage.sqlite.schema",
    "neuroenglish.core.file_lock",
)


def setup_logging(
    console_level: int | None = None,
    log_dir: Path | None = None,
    *,
    log_files: bool | None = None,
) -> Path | None:
    """
    Configure logging for the ``neuroenglish`` package.

    Creates two log files unless file logging is disabled:
    - neuroenglish.log: DEBUG+ messages of the package (5 MB per file, 3 rotations)
    - errors.log: ERROR+ messages from any logger (1 MB per file, 3 rotations)

    Args:
        console_level: Minimum level for console output. Defaults to the
            ``NEUROENGLISH_LOG_LEVEL`` setting.
        log_dir: Directory for log files. Defaults to ``<home>/logs``.
        log_files: Whether to write log files. Defaults to the
            ``NEUROENGLISH_LOG_FILES`` setting.

    Returns:
        The log directory, or ``None`` when only console logging is active.
    """
    settings = get_settings()
    if console_level is None:
        console_level = settings.log_level
    if log_files is None:
        log_files = settings.log_files

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    app_logger = logging.getLogger("neuroenglish")
    app_logger.setLevel(logging.DEBUG)
    app_logger.handlers.clear()

    detailed_formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    simple_formatter = logging.Formatter("%(levelname)-8s | %(name)s | %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    if console_level > logging.DEBUG:
        console_handler.addFilter(_QuietModulesFilter(QUIET_MODULES))
    app_logger.addHandler(console_handler)

    if not log_files:
        return None

    log_dir = log_dir or settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    app_log_path = log_dir / "neuroenglish.log"
    app_handler = RotatingFileHandler(
        app_log_path,
        maxBytes=5 * 1024 * 1024,  # 5 MB
        backupCount=3,
        encoding="utf-8",
    )
    app_handler.setLevel(logging.DEBUG)
    app_handler.setFormatter(detailed_formatter)
    app_logger.addHandler(app_handler)

    error_log_path = log_dir / "errors.log"
    for handler in list(root_logger.handlers):
        if getattr(handler, "baseFilename", None) == str(error_log_path.resolve()):
            root_logger.removeHandler(handler)
            handler.close()
    error_handler = RotatingFileHandler(
        error_log_path,
        maxBytes=1024 * 1024,  # 1 MB
        backupCount=3,
        encoding="utf-8",
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_handler)

    log = logging.getLogger(__name__)
    log.info("%s logging initialized", APP_NAME)
    log.info("Log directory: %s", log_dir)
    log.info("Platform: %s, Python: %s", sys.platform, sys.version.split()[0])

    return log_dir


class _QuietModulesFilter(logging.Filter):
    """Drop records below WARNING from the given logger names."""

    def __init__(self, names: tuple[str, ...]):
        super().__init__()
        self._names = names

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.WARNING:
            return True
        return not record.name.startswith(self._names)
