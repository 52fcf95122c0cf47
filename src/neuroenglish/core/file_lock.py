# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Sidecar lock file that keeps a phrase database single-instance."""

from __future__ import annotations

import logging
import os
import sys
import time
from pathlib import Path

__all__ = ["LockBusyError", "StoreFileLock"]

STALE_LOCK_AGE_SECONDS = 2 * 60 * 60  # 2 hours

log = logging.getLogger(__name__)


class LockBusyError(RuntimeError):
    """Raised when another live process holds the lock."""

    def __init__(self, lock_path: Path, holder: str):
        self.lock_path = lock_path
        self.holder = holder
        super().__init__(
            f"Phrase database is already in use by another instance.\n"
            f"Lock file: {lock_path}\n"
            f"{holder}\n"
            f"If you're certain no other instance is running, delete the lock file manually."
        )


class StoreFileLock:
    """
    Exclusive lock for a phrase database file.

    The lock is a ``<db>.lock`` file created atomically next to the database
    and holding the owner PID and creation time. A lock left behind by a
    process that no longer exists is treated as stale and replaced.

    Usage:
        lock = StoreFileLock(db_path)
        lock.acquire()
        try:
            ...
        finally:
            lock.release()

    Or as a context manager:
        with StoreFileLock(db_path):
            ...
    """

    def __init__(self, db_path: str | os.PathLike[str]):
        self.db_path = Path(db_path)
        self.lock_path = self.db_path.with_suffix(self.db_path.suffix + ".lock")
        self.lock_file: int | None = None
        self._acquired = False

    @property
    def acquired(self) -> bool:
        return self._acquired

    def acquire(self, timeout: float = 0.0) -> bool:
        """
        Acquire the lock.

        Args:
            timeout: Seconds to keep retrying while the lock is busy. The
                default of 0 tries exactly once.

        Returns:
            True once the lock is held.

        Raises:
            LockBusyError: If a live process still holds the lock when the
                timeout expires.
            OSError: If the lock file cannot be created for any other reason.
        """
        if self._acquired:
            return True

        start_time = time.monotonic()
        logged_waiting = False

        while True:
            try:
                fd = os.open(self.lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                if self._is_stale_lock():
                    log.warning("Removing stale lock file: %s", self.lock_path)
                    self.lock_path.unlink(missing_ok=True)
                    continue

                holder = self._get_lock_holder_info()
                if time.monotonic() - start_time >= timeout:
                    log.error("Lock busy path=%s lock=%s holder=%s", self.db_path, self.lock_path, holder)
                    raise LockBusyError(self.lock_path, holder) from None

                if not logged_waiting:
                    log.info("Waiting for lock path=%s holder=%s", self.db_path, holder)
                    logged_waiting = True
                time.sleep(0.1)
                continue

            lock_info = f"{os.getpid()}\n{time.time()}\n"
            os.write(fd, lock_info.encode("utf-8"))
            self.lock_file = fd
            self._acquired = True
            log.info("Acquired database lock: %s", self.lock_path)
            return True

    def release(self) -> None:
        """Release the lock if held. Safe to call repeatedly."""
        if not self._acquired:
            return

        try:
            if self.lock_file is not None:
                try:
                    os.close(self.lock_file)
                except OSError as e:
                    log.debug("Error closing lock file descriptor: %s", e)
                finally:
                    self.lock_file = None

            if not self._is_held_by_current_process():
                log.warning("Lock file %s was taken over; leaving it in place", self.lock_path)
                return
            try:
                self.lock_path.unlink(missing_ok=True)
                log.info("Released database lock: %s", self.lock_path)
            except OSError as e:
                log.error("Failed to remove lock file %s: %s", self.lock_path, e)
        finally:
            self._acquired = False

    def is_locked(self) -> bool:
        """Check if a lock file exists (doesn't verify if it's stale)."""
        return self.lock_path.exists()

    def _is_stale_lock(self) -> bool:
        """Return True when the lock belongs to a process that is gone or is too old."""
        metadata = self._read_lock_metadata()
        if metadata is None:
            # Released by its holder in the meantime
            return not self.lock_path.exists()

        pid, timestamp = metadata
        if pid is not None:
            if not self._process_exists(pid):
                log.warning("Lock pid %s is not running; treating %s as stale", pid, self.lock_path)
                return True
            if pid == os.getpid() or timestamp is None:
                return False
            # A live pid on an old lock is most likely a reused pid
            age = time.time() - timestamp
            if age >= STALE_LOCK_AGE_SECONDS:
                log.warning(
                    "Lock pid %s is %ds old; treating %s as stale", pid, int(age), self.lock_path
                )
                return True
            return False

        if timestamp is not None:
            age = time.time() - timestamp
            if age >= STALE_LOCK_AGE_SECONDS:
                log.warning(
                    "Lock has no PID and is %ds old; treating %s as stale", int(age), self.lock_path
                )
                return True
            return False

        log.warning("Lock metadata missing for %s; treating as stale", self.lock_path)
        return True

    def _is_held_by_current_process(self) -> bool:
        metadata = self._read_lock_metadata()
        if metadata is None:
            return False
        pid, _ = metadata
        return pid == os.getpid()

    def _read_lock_metadata(self) -> tuple[int | None, float | None] | None:
        """Return (pid, timestamp) tuple from the lock file when available."""
        try:
            with open(self.lock_path, encoding="utf-8") as f:
                lines = f.readlines()
        except FileNotFoundError:
            return None
        except OSError as exc:
            log.debug("Unable to read lock metadata for %s: %s", self.lock_path, exc)
            return None

        if not lines:
            return None

        pid: int | None = None
        timestamp: float | None = None

        try:
            pid = int(lines[0].strip())
        except ValueError:
            log.debug("Invalid PID entry in %s: %r", self.lock_path, lines[0])

        if len(lines) >= 2:
            try:
                timestamp = float(lines[1].strip())
            except ValueError:
                log.debug("Invalid timestamp entry in %s: %r", self.lock_path, lines[1])

        return pid, timestamp

    @staticmethod
    def _process_exists(pid: int) -> bool:
        if pid == os.getpid():
            return True
        try:
            if sys.platform == "win32":
                import ctypes

                kernel32 = ctypes.windll.kernel32
                PROCESS_QUERY_LIMITED_INFORMATION = 0x1000

                handle = kernel32.OpenProcess(PROCESS_QUERY_LIMITED_INFORMATION, False, pid)
                if handle:
                    kernel32.CloseHandle(handle)
                    return True
                return False

            # Signal 0 only checks for existence
            os.kill(pid, 0)
            return True
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists but owned by another user
            return True
        except OSError:
            return False

    def _get_lock_holder_info(self) -> str:
        """Describe the process holding the lock."""
        metadata = self._read_lock_metadata()
        if metadata is None:
            return "Lock holder information unavailable"

        pid, timestamp = metadata
        if pid is not None and timestamp is not None:
            return f"Locked by PID {pid} (lock age: {time.time() - timestamp:.0f}s)"
        if pid is not None:
            return f"Locked by PID {pid}"
        if timestamp is not None:
            return f"Lock age {time.time() - timestamp:.0f}s (no PID recorded)"
        return "Lock metadata missing"

    def __enter__(self) -> StoreFileLock:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()
