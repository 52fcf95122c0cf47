# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Public package interface for the NeuroEnglish phrase trainer."""

from neuroenglish.config import APP_VERSION as __version__
from neuroenglish.errors import (
    MalformedImportError,
    NeuroEnglishError,
    StorageClosedError,
    StorageInitError,
)
from neuroenglish.models import (
    LEVELS,
    ImportReport,
    Level,
    LevelStats,
    Phrase,
    PhraseKey,
)
from neuroenglish.services.import_service import import_phrases, import_records
from neuroenglish.storage.phrase_store import PhraseStore, open_store

__all__ = [
    "__version__",
    "LEVELS",
    "Level",
    "Phrase",
    "PhraseKey",
    "LevelStats",
    "ImportReport",
    "PhraseStore",
    "open_store",
    "import_phrases",
    "import_records",
    "NeuroEnglishError",
    "StorageInitError",
    "StorageClosedError",
    "MalformedImportError",
]
