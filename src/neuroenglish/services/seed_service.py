"""First-run bootstrap: create a sample phrase file or import the user's one."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from neuroenglish.io.phrases import write_phrase_file
from neuroenglish.models import ImportReport
from neuroenglish.services.import_service import import_phrases
from neuroenglish.storage.phrase_store import PhraseStore

log = logging.getLogger(__name__)

__all__ = ["SAMPLE_PHRASES", "SeedResult", "write_sample_file", "initialize_database"]

SAMPLE_PHRASES: list[dict[str, str]] = [
    {"ru": "Привет", "en": "Hello", "level": "A1"},
    {"ru": "Как дела?", "en": "How are you?", "level": "A1"},
    {"ru": "Спасибо", "en": "Thank you", "level": "A1"},
    {"ru": "Пожалуйста", "en": "You are welcome", "level": "A1"},
    {"ru": "Меня зовут...", "en": "My name is...", "level": "A1"},
    {"ru": "Где туалет?", "en": "Where is the toilet?", "level": "A2"},
    {"ru": "Сколько это стоит?", "en": "How much does it cost?", "level": "A2"},
    {"ru": "Я не понимаю", "en": "I don't understand", "level": "A2"},
    {"ru": "Могу я помочь вам?", "en": "Can I help you?", "level": "B1"},
    {
        "ru": "Это зависит от обстоятельств",
        "en": "It depends on the circumstances",
        "level": "B2",
    },
]


@dataclass(frozen=True)
class SeedResult:
    phrases_path: Path
    created_sample: bool
    report: ImportReport | None = None


def write_sample_file(path: str | os.PathLike[str]) -> Path:
    """Write :data:`SAMPLE_PHRASES` to ``path``."""

    target = write_phrase_file(path, SAMPLE_PHRASES)
    log.info("Created sample phrase file %s", target)
    return target


def initialize_database(store: PhraseStore, phrases_path: str | os.PathLike[str]) -> SeedResult:
    """
    Import ``phrases_path`` into ``store``.

    When the file does not exist a sample file is written there instead and
    nothing is imported, so the user can edit it before the first import.
    """
    path = Path(phrases_path)
    if not path.exists():
        log.warning("Phrase file not found: %s", path)
        write_sample_file(path)
        return SeedResult(phrases_path=path, created_sample=True)

    report = import_phrases(store, path)
    return SeedResult(phrases_path=path, created_sample=False, report=report)
