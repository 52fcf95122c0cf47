"""
Phrase table persistence helpers.
"""

from __future__ import annotations

import sqlite3

__all__ = [
    "insert_phrase",
    "fetch_keys",
    "fetch_phrase",
    "fetch_next_due",
    "update_completed",
    "fetch_level_stats",
    "count_phrases",
    "max_timestamp",
]

_PHRASE_COLUMNS = "id, ru, en, level, completed, created_at, updated_at"


def insert_phrase(
    conn: sqlite3.Connection, ru: str, en: str, level: str, *, now: str
) -> int:
    """Insert an incomplete phrase stamped with ``now`` and return its id."""

    cur = conn.execute(
        "INSERT INTO phrases(ru, en, level, completed, created_at, updated_at) "
        "VALUES (?, ?, ?, 0, ?, ?)",
        (ru, en, level, now, now),
    )
    return int(cur.lastrowid)


def fetch_keys(conn: sqlite3.Connection) -> list[sqlite3.Row]:
    return conn.execute("SELECT ru, en, level FROM phrases").fetchall()


def fetch_phrase(conn: sqlite3.Connection, phrase_id: int) -> sqlite3.Row | None:
    return conn.execute(
        f"SELECT {_PHRASE_COLUMNS} FROM phrases WHERE id = ?", (phrase_id,)
    ).fetchone()


def fetch_next_due(conn: sqlite3.Connection) -> sqlite3.Row | None:
    """Return the incomplete phrase with the lowest level, then oldest touch.

    CEFR codes sort lexicographically in rank order, so ``ORDER BY level``
    is rank order and ``idx_priority`` covers the whole sort.
    """

    return conn.execute(
        f"""
        SELECT {_PHRASE_COLUMNS}
          FROM phrases
         WHERE completed = 0
         ORDER BY level ASC, updated_at ASC, id ASC
         LIMIT 1
        """
    ).fetchone()


def update_completed(
    conn: sqlite3.Connection, phrase_id: int, completed: bool, *, now: str
) -> int:
    """Set the completion flag and touch ``updated_at``; return affected rows."""

    cur = conn.execute(
        "UPDATE phrases SET completed = ?, updated_at = ? WHERE id = ?",
        (1 if completed else 0, now, phrase_id),
    )
    return cur.rowcount


def fetch_level_stats(conn: sqlite3.Connection) -> list[sqlite3.Row]:
    return conn.execute(
        """
        SELECT level,
               COUNT(*) AS total,
               SUM(CASE WHEN completed = 1 THEN 1 ELSE 0 END) AS completed,
               SUM(CASE WHEN completed = 0 THEN 1 ELSE 0 END) AS remaining
          FROM phrases
         GROUP BY level
         ORDER BY level ASC
        """
    ).fetchall()


def count_phrases(conn: sqlite3.Connection) -> int:
    row = conn.execute("SELECT COUNT(*) FROM phrases").fetchone()
    return int(row[0])


def max_timestamp(conn: sqlite3.Connection) -> str | None:
    """Latest ``updated_at`` stored, if any."""

    row = conn.execute("SELECT MAX(updated_at) FROM phrases").fetchone()
    return row[0] if row else None
