from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app.launcher import launch_session
from .config import APP_VERSION, get_settings
from .core.logging_config import setup_logging
from .errors import MalformedImportError, StorageInitError
from .services.import_service import import_phrases
from .services.seed_service import initialize_database
from .services.study_service import format_progress_table, next_due_phrase, set_completed
from .storage.phrase_store import PhraseStore

log = logging.getLogger(__name__)


def _open(args: argparse.Namespace) -> PhraseStore:
    return PhraseStore.initialize(args.db)


def cmd_init_db(args: argparse.Namespace) -> int:
    phrases_path = Path(args.phrases) if args.phrases else get_settings().phrases_path
    with _open(args) as store:
        print("Phrase database initialised")
        result = initialize_database(store, phrases_path)
        if result.created_sample:
            print(f"Phrase file not found, created a sample: {result.phrases_path}")
            print("Fill it with your own phrases and run init-db again.")
        elif result.report is not None:
            report = result.report
            print(
                f"Imported {result.phrases_path}: "
                f"{report.inserted} added, {report.skipped} skipped"
            )
        print()
        print(format_progress_table(store.stats_by_level()))
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    with _open(args) as store:
        report = import_phrases(store, args.path)
    print(f"{report.inserted} added, {report.skipped} skipped, {report.invalid} invalid")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    with _open(args) as store:
        print(format_progress_table(store.stats_by_level()))
    return 0


def cmd_next(args: argparse.Namespace) -> int:
    with _open(args) as store:
        phrase = next_due_phrase(store)
    if phrase is None:
        print("Every phrase is learned.")
        return 0
    print(f"#{phrase.id} [{phrase.level}] {phrase.source_text} -> {phrase.target_text}")
    return 0


def cmd_mark(args: argparse.Namespace) -> int:
    completed = not args.undo
    with _open(args) as store:
        changes = set_completed(store, args.id, completed)
    if not changes:
        print(f"No phrase with id {args.id}", file=sys.stderr)
        return 1
    print(f"Phrase #{args.id} marked as {'learned' if completed else 'not learned'}")
    return 0


def cmd_study(args: argparse.Namespace) -> int:
    return launch_session(args.db)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("neuroenglish")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("--db", default=None, help="phrase database file")
    parser.add_argument("--verbose", action="store_true", help="debug output on the console")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("init-db", help="create the database and import the phrase file")
    sp.add_argument("--phrases", default=None, help="JSON phrase file")
    sp.set_defaults(func=cmd_init_db)

    sp = sub.add_parser("import", help="import a JSON phrase file")
    sp.add_argument("path")
    sp.set_defaults(func=cmd_import)

    sp = sub.add_parser("stats", help="show progress per level")
    sp.set_defaults(func=cmd_stats)

    sp = sub.add_parser("next", help="show the next due phrase")
    sp.set_defaults(func=cmd_next)

    sp = sub.add_parser("mark", help="mark a phrase as learned")
    sp.add_argument("id", type=int)
    sp.add_argument("--undo", action="store_true", help="mark as not learned")
    sp.set_defaults(func=cmd_mark)

    sp = sub.add_parser("study", help="start an interactive study session")
    sp.set_defaults(func=cmd_study)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(console_level=logging.DEBUG if args.verbose else None)
    except OSError as e:
        logging.basicConfig(level=logging.WARNING)
        log.error("Failed to set up file logging: %s", e)

    try:
        return args.func(args)
    except (StorageInitError, MalformedImportError, FileNotFoundError) as e:
        log.debug("%s failed", args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
