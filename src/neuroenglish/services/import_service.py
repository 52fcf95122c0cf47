# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Idempotent batch import of phrase files into a :class:`PhraseStore`."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from neuroenglish.errors import MalformedImportError
from neuroenglish.io.phrases import read_import_source
from neuroenglish.models import ImportReport, PhraseCandidate, PhraseKey
from neuroenglish.storage.phrase_store import PhraseStore

log = logging.getLogger(__name__)

__all__ = ["validate_candidates", "import_records", "import_phrases"]


def validate_candidates(records: Iterable[Any]) -> tuple[list[PhraseCandidate], int]:
    """Split raw records into valid candidates and a count of dropped ones.

    A record is valid when ``ru`` and ``en`` are non-empty strings and
    ``level`` is a known CEFR level. Other fields are ignored.
    """

    valid: list[PhraseCandidate] = []
    invalid = 0
    for record in records:
        try:
            valid.append(PhraseCandidate.model_validate(record))
        except ValidationError:
            invalid += 1
    return valid, invalid


def import_records(store: PhraseStore, records: Sequence[Any]) -> ImportReport:
    """
    Insert the valid, not yet stored records of ``records`` in one transaction.

    Duplicates are detected on the (ru, en, level) key against the phrases
    stored before the batch starts and against earlier records of the same
    batch. Any storage error rolls the whole batch back and propagates.

    Raises:
        MalformedImportError: ``records`` is not a list-like sequence.
    """
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        raise MalformedImportError(
            f"Import source must be a sequence of phrases, got {type(records).__name__}"
        )

    candidates, invalid = validate_candidates(records)
    if not candidates:
        log.warning("No valid phrases to import (%d invalid records dropped)", invalid)
        return ImportReport(inserted=0, skipped=0, invalid=invalid)

    known: set[PhraseKey] = set(store.all_phrases())
    inserted = 0
    skipped = 0

    with store.transaction():
        for candidate in candidates:
            key = candidate.key()
            if key in known:
                skipped += 1
                continue
            store.insert_phrase(candidate.ru, candidate.en, candidate.level)
            known.add(key)
            inserted += 1

    log.info(
        "Import finished: %d inserted, %d skipped, %d invalid", inserted, skipped, invalid
    )
    return ImportReport(inserted=inserted, skipped=skipped, invalid=invalid)


def import_phrases(store: PhraseStore, source: str | os.PathLike[str]) -> ImportReport:
    """Read the JSON phrase file at ``source`` and import it into ``store``."""

    log.info("Importing phrases from %s", source)
    records = read_import_source(source)
    return import_records(store, records)
