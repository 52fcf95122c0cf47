"""Process-level infrastructure: single-instance locking and logging."""

from neuroenglish.core.file_lock import LockBusyError, StoreFileLock

__all__ = ["LockBusyError", "StoreFileLock"]
