"""Phrase records, CEFR levels and import candidate validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "Level",
    "LEVELS",
    "Phrase",
    "PhraseKey",
    "PhraseCandidate",
    "LevelStats",
    "ImportReport",
]


class Level(str, Enum):
    """CEFR proficiency tiers, beginner to advanced."""

    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self) + 1

    @classmethod
    def parse(cls, value: str | Level) -> Level:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unknown level {value!r}. Supported: {', '.join(LEVELS)}"
            ) from None

    def __str__(self) -> str:
        return self.value


_LEVEL_ORDER: tuple[Level, ...] = tuple(Level)
LEVELS: tuple[str, ...] = tuple(level.value for level in _LEVEL_ORDER)


class PhraseKey(NamedTuple):
    """Natural duplicate key of a phrase."""

    source_text: str
    target_text: str
    level: Level


@dataclass(frozen=True)
class Phrase:
    id: int
    source_text: str
    target_text: str
    level: Level
    completed: bool
    created_at: datetime
    updated_at: datetime

    @property
    def key(self) -> PhraseKey:
        return PhraseKey(self.source_text, self.target_text, self.level)


@dataclass(frozen=True)
class LevelStats:
    level: Level
    total: int
    completed: int
    remaining: int


@dataclass(frozen=True)
class ImportReport:
    """Counts produced by one batch import.

    ``invalid`` is informational; it never contributes to ``inserted`` or
    ``skipped``.
    """

    inserted: int = 0
    skipped: int = 0
    invalid: int = 0


class PhraseCandidate(BaseModel):
    """One record of an import source (``{"ru": ..., "en": ..., "level": ...}``)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    ru: str = Field(min_length=1)
    en: str = Field(min_length=1)
    level: Level

    def key(self) -> PhraseKey:
        return PhraseKey(self.ru, self.en, self.level)
