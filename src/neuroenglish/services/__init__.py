"""Application services: batch import and the study query surface."""

from neuroenglish.services.import_service import import_phrases, import_records
from neuroenglish.services.study_service import (
    format_progress_table,
    next_due_phrase,
    progress_table,
    set_completed,
    stats_by_level,
)

__all__ = [
    "import_phrases",
    "import_records",
    "next_due_phrase",
    "set_completed",
    "stats_by_level",
    "progress_table",
    "format_progress_table",
]
