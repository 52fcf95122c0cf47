# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Interactive study loop: show a phrase, reveal it, record the answer."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from neuroenglish.models import Phrase
from neuroenglish.services.study_service import (
    format_progress_table,
    next_due_phrase,
    set_completed,
    stats_by_level,
)
from neuroenglish.storage.phrase_store import PhraseStore
from neuroenglish.utils.duration import format_duration

log = logging.getLogger(__name__)

__all__ = ["SessionStats", "StudySession"]

RULE = "-" * 46

_YES = {"y", "yes"}
_NO = {"n", "no"}
_QUIT = {"q", "quit"}


@dataclass
class SessionStats:
    shown: int = 0
    completed: int = 0
    postponed: int = 0
    started: float = 0.0
    finished: float | None = None

    def elapsed_ms(self) -> float:
        end = self.finished if self.finished is not None else self.started
        return max(end - self.started, 0.0) * 1000


@dataclass
class StudySession:
    """
    One pass over the due phrases of a store.

    ``input_fn``/``output_fn`` default to the terminal; tests pass scripted
    callables. A closed input stream ends the session like ``q``.
    """

    store: PhraseStore
    input_fn: Callable[[str], str] = input
    output_fn: Callable[[str], None] = print
    clock: Callable[[], float] = time.monotonic
    stats: SessionStats = field(default_factory=SessionStats)

    def run(self) -> SessionStats:
        self.stats = SessionStats(started=self.clock())
        self.output_fn("NeuroEnglish - learn English phrases")
        self.output_fn("=" * 46)
        log.info("Study session started")

        try:
            while True:
                phrase = next_due_phrase(self.store)
                if phrase is None:
                    self.output_fn("\nCongratulations! Every phrase is learned.")
                    break
                if not self._study(phrase):
                    self.output_fn("\nLeaving the session...")
                    break
        finally:
            self.stats.finished = self.clock()
            log.info(
                "Study session ended shown=%d completed=%d postponed=%d",
                self.stats.shown,
                self.stats.completed,
                self.stats.postponed,
            )

        self._print_summary()
        return self.stats

    def _study(self, phrase: Phrase) -> bool:
        """Run one card; return False when the user wants to stop."""
        self.output_fn(f"\nPhrase #{self.stats.shown + 1} [{phrase.level}]")
        self.output_fn(f"\nRU: {phrase.source_text}")
        try:
            self.input_fn("\n[Press Enter to show the translation...]")
        except EOFError:
            return False
        self.output_fn(f"\nEN: {phrase.target_text}")
        self.output_fn(RULE)

        answer = self._ask()
        if answer is None:
            return False

        set_completed(self.store, phrase.id, answer)
        self.stats.shown += 1
        if answer:
            self.stats.completed += 1
            self.output_fn("Marked as learned")
        else:
            self.stats.postponed += 1
            self.output_fn("Will be shown again")
        return True

    def _ask(self) -> bool | None:
        while True:
            try:
                answer = self.input_fn("\nLearned? (y/n) or q to quit: ").strip().lower()
            except EOFError:
                return None
            if answer in _QUIT:
                return None
            if answer in _YES:
                return True
            if answer in _NO:
                return False
            self.output_fn("Please answer y, n or q")

    def _print_summary(self) -> None:
        self.output_fn("\nSession summary:")
        self.output_fn(f"   Phrases shown: {self.stats.shown}")
        self.output_fn(f"   Learned: {self.stats.completed}")
        self.output_fn(f"   Postponed: {self.stats.postponed}")
        self.output_fn(f"   Session time: {format_duration(self.stats.elapsed_ms(), precision=0)}")
        self.output_fn("")
        self.output_fn(format_progress_table(stats_by_level(self.store)))
