# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""
SQLite-backed phrase storage.

A :class:`PhraseStore` is the single writer of the phrase database. It owns
the connection and the lock that keeps other processes out, creates the schema
on first use and exposes the record-level operations used by the import
pipeline and the study session.
"""

from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path

from neuroenglish.config import get_settings
from neuroenglish.core.file_lock import LockBusyError, StoreFileLock
from neuroenglish.errors import StorageClosedError, StorageInitError
from neuroenglish.models import Level, LevelStats, Phrase, PhraseKey
from neuroenglish.storage.sqlite import phrases as _phrases
from neuroenglish.storage.sqlite import schema as _schema
from neuroenglish.storage.sqlite.utils import open_db, transaction

log = logging.getLogger(__name__)

__all__ = ["PhraseStore", "TIMESTAMP_FORMAT", "open_store"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _parse_timestamp(value: str) -> datetime:
    return datetime.strptime(value, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)


def _row_to_phrase(row: sqlite3.Row) -> Phrase:
    return Phrase(
        id=int(row["id"]),
        source_text=row["ru"],
        target_text=row["en"],
        level=Level(row["level"]),
        completed=bool(row["completed"]),
        created_at=_parse_timestamp(row["created_at"]),
        updated_at=_parse_timestamp(row["updated_at"]),
    )


@dataclass
class PhraseStore:
    """Open handle on the phrase database."""

    path: Path
    conn: sqlite3.Connection | None
    lock: StoreFileLock
    _last_stamp: datetime | None = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Lifecycle

    @classmethod
    def initialize(
        cls, path: str | os.PathLike[str] | None = None, *, lock_timeout: float = 0.0
    ) -> PhraseStore:
        """
        Open or create the phrase database and lock it for this instance.

        Args:
            path: Database file. Defaults to the configured location.
            lock_timeout: Seconds to wait for a busy lock; 0 fails at once.

        Raises:
            StorageInitError: The directory or file is inaccessible, the
                schema cannot be created, or another instance holds the lock.
        """
        db_path = Path(path) if path is not None else get_settings().db_path

        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageInitError(
                f"Cannot create storage directory {db_path.parent}: {exc}", db_path
            ) from exc

        lock = StoreFileLock(db_path)
        try:
            lock.acquire(timeout=lock_timeout)
        except LockBusyError as exc:
            raise StorageInitError(str(exc), db_path) from exc
        except OSError as exc:
            raise StorageInitError(f"Cannot lock {db_path}: {exc}", db_path) from exc

        conn: sqlite3.Connection | None = None
        try:
            conn = open_db(db_path.as_posix())
            _schema.apply_default_pragmas(conn)
            # Take the exclusive file lock now; locking_mode=EXCLUSIVE keeps it
            conn.execute("BEGIN EXCLUSIVE")
            conn.execute("COMMIT")
            _schema.ensure_schema(conn)
            last = _phrases.max_timestamp(conn)
        except (sqlite3.Error, RuntimeError) as exc:
            if conn is not None:
                conn.close()
            lock.release()
            raise StorageInitError(f"Cannot open phrase database {db_path}: {exc}", db_path) from exc

        store = cls(path=db_path, conn=conn, lock=lock)
        if last:
            store._last_stamp = _parse_timestamp(last)
        log.info("Opened phrase database %s", db_path)
        return store

    @property
    def closed(self) -> bool:
        return self.conn is None

    def shutdown(self) -> None:
        """Close the connection and release the lock. Safe to call twice."""
        conn, self.conn = self.conn, None
        try:
            if conn is not None:
                try:
                    conn.close()
                except sqlite3.Error as exc:
                    log.warning("Error closing phrase database %s: %s", self.path, exc)
                else:
                    log.info("Closed phrase database %s", self.path)
        finally:
            self.lock.release()

    def __enter__(self) -> PhraseStore:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Helpers

    def _require_conn(self) -> sqlite3.Connection:
        if self.conn is None:
            raise StorageClosedError(f"Phrase database {self.path} is closed")
        return self.conn

    def _touch(self) -> str:
        """Return a timestamp strictly later than any this store handed out."""
        now = datetime.now(timezone.utc)
        if self._last_stamp is not None and now <= self._last_stamp:
            now = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = now
        return _format_timestamp(now)

    @contextmanager
    def transaction(self) -> Iterator[PhraseStore]:
        """Group writes into one atomic transaction (rolled back on error)."""
        with transaction(self._require_conn()):
            yield self

    # ------------------------------------------------------------------
    # Record operations

    def insert_phrase(self, source_text: str, target_text: str, level: Level | str) -> int:
        """Insert a new incomplete phrase and return its id. No duplicate check."""
        conn = self._require_conn()
        phrase_id = _phrases.insert_phrase(
            conn, source_text, target_text, Level.parse(level).value, now=self._touch()
        )
        log.debug("Inserted phrase id=%s level=%s", phrase_id, level)
        return phrase_id

    def all_phrases(self) -> list[PhraseKey]:
        """Return the natural key of every stored phrase, in no particular order."""
        return [
            PhraseKey(row["ru"], row["en"], Level(row["level"]))
            for row in _phrases.fetch_keys(self._require_conn())
        ]

    def get_phrase(self, phrase_id: int) -> Phrase | None:
        row = _phrases.fetch_phrase(self._require_conn(), phrase_id)
        return _row_to_phrase(row) if row is not None else None

    def next_due_phrase(self) -> Phrase | None:
        """Return the highest-priority incomplete phrase, or ``None``.

        Priority: lowest level first, then least recently updated, then id.
        """
        row = _phrases.fetch_next_due(self._require_conn())
        return _row_to_phrase(row) if row is not None else None

    def set_completed(self, phrase_id: int, completed: bool) -> int:
        """Set the completion flag and refresh ``updated_at``.

        Returns the number of affected rows; 0 means ``phrase_id`` is unknown.
        """
        changes = _phrases.update_completed(
            self._require_conn(), phrase_id, bool(completed), now=self._touch()
        )
        if changes:
            log.debug("Phrase id=%s completed=%s", phrase_id, bool(completed))
        else:
            log.debug("Phrase id=%s not found; nothing updated", phrase_id)
        return changes

    def stats_by_level(self) -> list[LevelStats]:
        """Per-level totals in level order; levels without phrases are omitted."""
        return [
            LevelStats(
                level=Level(row["level"]),
                total=int(row["total"]),
                completed=int(row["completed"]),
                remaining=int(row["remaining"]),
            )
            for row in _phrases.fetch_level_stats(self._require_conn())
        ]

    def count(self) -> int:
        return _phrases.count_phrases(self._require_conn())


def open_store(
    path: str | os.PathLike[str] | None = None, *, lock_timeout: float = 0.0
) -> PhraseStore:
    """Shortcut for :meth:`PhraseStore.initialize`."""

    return PhraseStore.initialize(path, lock_timeout=lock_timeout)
