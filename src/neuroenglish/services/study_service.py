"""Read/update operations used by the study session, plus progress reporting."""

from __future__ import annotations

import pandas as pd

from neuroenglish.models import LevelStats, Phrase
from neuroenglish.storage.phrase_store import PhraseStore

__all__ = [
    "next_due_phrase",
    "set_completed",
    "stats_by_level",
    "progress_table",
    "format_progress_table",
]

PROGRESS_COLUMNS = ["total", "completed", "remaining", "percent"]
TOTAL_LABEL = "TOTAL"


def next_due_phrase(store: PhraseStore) -> Phrase | None:
    return store.next_due_phrase()


def set_completed(store: PhraseStore, phrase_id: int, completed: bool) -> int:
    return store.set_completed(phrase_id, completed)


def stats_by_level(store: PhraseStore) -> list[LevelStats]:
    return store.stats_by_level()


def _percent(completed: int, total: int) -> int:
    return round(completed / total * 100) if total else 0


def progress_table(stats: list[LevelStats]) -> pd.DataFrame:
    """Per-level progress with a trailing ``TOTAL`` row.

    Columns: ``total``, ``completed``, ``remaining`` and ``percent`` (an int).
    An empty ``stats`` list gives an empty frame with the same columns.
    """

    if not stats:
        empty = pd.DataFrame(columns=PROGRESS_COLUMNS, dtype="int64")
        empty.index.name = "level"
        return empty

    frame = pd.DataFrame(
        {
            "total": [s.total for s in stats],
            "completed": [s.completed for s in stats],
            "remaining": [s.remaining for s in stats],
        },
        index=pd.Index([s.level.value for s in stats], name="level"),
    )
    frame.loc[TOTAL_LABEL] = frame.sum()
    frame["percent"] = [
        _percent(int(done), int(total))
        for done, total in zip(frame["completed"], frame["total"])
    ]
    return frame.astype("int64")


def format_progress_table(stats: list[LevelStats]) -> str:
    """Render :func:`progress_table` for the terminal."""

    frame = progress_table(stats)
    if frame.empty:
        return "No phrases yet."
    display = frame.copy()
    display["percent"] = display["percent"].map(lambda p: f"{p}%")
    display.columns = ["Total", "Learned", "Remaining", "Progress"]
    display.index.name = "Level"
    return display.to_string()
