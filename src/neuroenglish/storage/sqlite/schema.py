"""
Schema and pragma setup for the phrase database.
"""

from __future__ import annotations

import logging
import sqlite3

from neuroenglish.models import LEVELS

from .utils import set_pragmas

__all__ = [
    "SCHEMA_VERSION",
    "DEFAULT_PRAGMAS",
    "apply_default_pragmas",
    "ensure_schema",
    "get_user_version",
    "set_user_version",
]

SCHEMA_VERSION = 1

log = logging.getLogger(__name__)

# locking_mode must precede journal_mode so WAL runs without a shared-memory
# index and the file lock is kept for the life of the connection.
DEFAULT_PRAGMAS: dict[str, object] = {
    "locking_mode": "EXCLUSIVE",
    "journal_mode": "WAL",
    "synchronous": "NORMAL",
    "foreign_keys": True,
    "temp_store": "MEMORY",
    "busy_timeout_ms": 0,
}

# Fixed width so that text order is time order; matches the Python side
# (see phrase_store.TIMESTAMP_FORMAT).
SQL_NOW = "strftime('%Y-%m-%d %H:%M:%f', 'now') || '000'"

_LEVEL_LIST = ", ".join(f"'{level}'" for level in LEVELS)

SCHEMA_SQL = f"""
CREATE TABLE IF NOT EXISTS phrases (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ru TEXT NOT NULL CHECK (length(ru) > 0),
    en TEXT NOT NULL CHECK (length(en) > 0),
    level TEXT NOT NULL CHECK (level IN ({_LEVEL_LIST})),
    completed INTEGER NOT NULL DEFAULT 0 CHECK (completed IN (0, 1)),
    created_at TEXT NOT NULL DEFAULT ({SQL_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({SQL_NOW}),
    CHECK (updated_at >= created_at)
);

CREATE INDEX IF NOT EXISTS idx_priority ON phrases(completed, level, updated_at);

CREATE TRIGGER IF NOT EXISTS phrases_touch_updated_at
AFTER UPDATE ON phrases
FOR EACH ROW WHEN NEW.updated_at IS OLD.updated_at
BEGIN
    UPDATE phrases SET updated_at = MAX({SQL_NOW}, NEW.updated_at) WHERE id = NEW.id;
END;
"""


def apply_default_pragmas(conn: sqlite3.Connection) -> None:
    """
    Exclusive locking, WAL journal and NORMAL synchronous.

    NORMAL is durable enough with WAL: a power loss can drop the last
    commits but never corrupts the database.
    """
    set_pragmas(conn, DEFAULT_PRAGMAS)


def ensure_schema(conn: sqlite3.Connection) -> None:
    """Create missing schema objects and stamp the schema version.

    Raises ``RuntimeError`` when the file was written by a newer schema.
    """

    version = get_user_version(conn)
    if version > SCHEMA_VERSION:
        raise RuntimeError(
            f"Database schema version {version} is newer than supported {SCHEMA_VERSION}"
        )

    conn.executescript(SCHEMA_SQL)
    if version < SCHEMA_VERSION:
        log.info("Initialised phrase schema v%d (was v%d)", SCHEMA_VERSION, version)
        set_user_version(conn, SCHEMA_VERSION)


def get_user_version(conn: sqlite3.Connection) -> int:
    """Return the PRAGMA user_version value."""

    row = conn.execute("PRAGMA user_version").fetchone()
    return int(row[0]) if row and row[0] is not None else 0


def set_user_version(conn: sqlite3.Connection, version: int) -> None:
    """Update the PRAGMA user_version value."""

    conn.execute(f"PRAGMA user_version = {int(version)}")
