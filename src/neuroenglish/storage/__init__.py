"""Phrase persistence: the SQLite store and its single-instance lock."""

from neuroenglish.storage.phrase_store import TIMESTAMP_FORMAT, PhraseStore, open_store

__all__ = ["PhraseStore", "TIMESTAMP_FORMAT", "open_store"]
