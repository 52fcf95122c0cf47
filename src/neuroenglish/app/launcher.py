# NeuroEnglish
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Entry point for the interactive study session."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable

from neuroenglish.app.session import StudySession
from neuroenglish.core.logging_config import setup_logging
from neuroenglish.errors import NeuroEnglishError
from neuroenglish.storage.phrase_store import PhraseStore

log = logging.getLogger(__name__)

__all__ = ["launch_session", "main"]


def launch_session(
    db_path: str | os.PathLike[str] | None = None,
    *,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    """Open the store, run a session and always shut the store down.

    Returns the process exit code.
    """
    store = PhraseStore.initialize(db_path)
    try:
        if store.count() == 0:
            output_fn("The phrase database is empty!")
            output_fn("Add phrases to your phrases.json and run:")
            output_fn("   neuroenglish init-db")
            return 0
        StudySession(store, input_fn=input_fn, output_fn=output_fn).run()
        return 0
    except KeyboardInterrupt:
        output_fn("\n\nBye! Session finished.")
        return 0
    finally:
        store.shutdown()


def main(argv: list[str] | None = None) -> int:
    """Start a study session on the configured database (``argv[0]`` overrides it)."""
    argv = list(sys.argv[1:] if argv is None else argv)
    db_path = argv[0] if argv else None

    try:
        setup_logging()
    except OSError as e:
        logging.basicConfig(level=logging.WARNING)
        log.error("Failed to set up file logging: %s", e)

    try:
        return launch_session(db_path)
    except NeuroEnglishError as e:
        log.critical("Critical error: %s", e, exc_info=True)
        print(f"Critical error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - import guard
    sys.exit(main())
