# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Helpers to read and write JSON phrase lists."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from neuroenglish.errors import MalformedImportError

log = logging.getLogger(__name__)

__all__ = ["read_import_source", "write_phrase_file"]


def read_import_source(path: str | os.PathLike[str]) -> list[Any]:
    """
    Load the raw records of a phrase file.

    The file must hold a JSON list; its items are returned untouched so the
    caller decides which ones are valid.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        MalformedImportError: The content is not UTF-8 JSON or not a list.
    """
    source = Path(path)
    raw = source.read_bytes()

    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as exc:
        raise MalformedImportError(f"{source} is not valid UTF-8: {exc}", source) from exc
    except json.JSONDecodeError as exc:
        raise MalformedImportError(f"{source} is not valid JSON: {exc}", source) from exc

    if not isinstance(data, list):
        raise MalformedImportError(
            f"{source} must contain a JSON array of phrases, got {type(data).__name__}",
            source,
        )

    log.debug("Read %d records from %s", len(data), source)
    return data


def write_phrase_file(path: str | os.PathLike[str], records: Iterable[Mapping[str, Any]]) -> Path:
    """Write ``records`` as a pretty-printed UTF-8 JSON array, creating parents."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps([dict(r) for r in records], ensure_ascii=False, indent=2)
    target.write_text(payload + "\n", encoding="utf-8")
    return target
