"""
Connection, pragma and transaction helpers for the phrase database.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, cast

__all__ = ["open_db", "set_pragmas", "transaction"]


# ---- Connections ------------------------------------------------------------


def open_db(
    path: str,
    *,
    mode: str = "rwc",
    timeout: float = 0.0,
    pragmas: Mapping[str, object] | None = None,
) -> sqlite3.Connection:
    """
    Open a SQLite database in autocommit mode.

    mode: "ro" (read-only), "rw", "rwc" (create if needed). Default: "rwc".
    timeout: seconds to wait on a locked database; 0 fails immediately.
    Transactions are explicit, see :func:`transaction`.
    """
    if path == ":memory:":
        conn = sqlite3.connect(":memory:", timeout=timeout, isolation_level=None)
    else:
        # as_uri percent-encodes "#", "?" and "%" so SQLite opens this exact file
        uri = f"{Path(path).resolve().as_uri()}?mode={mode}"
        conn = sqlite3.connect(uri, uri=True, timeout=timeout, isolation_level=None)
    conn.row_factory = sqlite3.Row
    if pragmas:
        set_pragmas(conn, pragmas)
    return conn


def _to_int(value: object) -> int:
    return int(cast(Any, value))


def set_pragmas(conn: sqlite3.Connection, opts: Mapping[str, object]) -> None:
    """Apply selected pragmas in the given order.

    Supported keys: ``locking_mode``, ``journal_mode``, ``synchronous``,
    ``foreign_keys``, ``temp_store`` and ``busy_timeout_ms``. Unknown keys
    raise ``ValueError``.
    """

    for key, value in opts.items():
        key = str(key).lower()
        if key == "locking_mode":
            conn.execute(f"PRAGMA locking_mode={value}")
        elif key == "journal_mode":
            conn.execute(f"PRAGMA journal_mode={value}")
        elif key == "synchronous":
            conn.execute(f"PRAGMA synchronous={value}")
        elif key == "foreign_keys":
            conn.execute(f"PRAGMA foreign_keys={'ON' if value else 'OFF'}")
        elif key == "temp_store":
            conn.execute(f"PRAGMA temp_store={value}")
        elif key == "busy_timeout_ms":
            conn.execute(f"PRAGMA busy_timeout={_to_int(value)}")
        else:
            raise ValueError(f"Unsupported pragma: {key}")


# ---- Transactions -----------------------------------------------------------


@contextmanager
def transaction(
    conn: sqlite3.Connection,
    *,
    begin: str = "BEGIN IMMEDIATE",
) -> Iterator[sqlite3.Connection]:
    """
    Transaction wrapper that commits on success and rolls back on error.
    Uses BEGIN IMMEDIATE by default so the write lock is taken up front.
    """

    conn.execute(begin)
    try:
        yield conn
    except BaseException:
        # SQLite may already have rolled back on its own (SQLITE_FULL, IOERR)
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        raise
    conn.execute("COMMIT")
