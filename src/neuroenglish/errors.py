# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Exception types raised by the phrase storage and import layers."""

from __future__ import annotations

import os
from pathlib import Path

__all__ = [
    "NeuroEnglishError",
    "StorageInitError",
    "StorageClosedError",
    "MalformedImportError",
]


class NeuroEnglishError(RuntimeError):
    """Base class for NeuroEnglish failures."""


class StorageInitError(NeuroEnglishError):
    """Raised when the phrase database cannot be opened, created or locked."""

    def __init__(self, message: str, path: str | os.PathLike[str] | None = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class StorageClosedError(NeuroEnglishError):
    """Raised when an operation is attempted on a store that was shut down."""


class MalformedImportError(NeuroEnglishError):
    """Raised when an import source is not a JSON list of phrase records."""

    def __init__(self, message: str, source: str | os.PathLike[str] | None = None):
        self.source = Path(source) if source is not None else None
        super().__init__(message)
