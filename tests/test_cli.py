import json

import pytest

from neuroenglish import cli
from neuroenglish.services.seed_service import SAMPLE_PHRASES
from neuroenglish.storage.phrase_store import PhraseStore


@pytest.fixture
def run(capsys):
    def _run(*argv):
        code = cli.main(list(argv))
        out, err = capsys.readouterr()
        return code, out, err

    return _run


def test_init_db_creates_sample_then_imports_it(run, isolated_home):
    phrases_path = isolated_home / "data" / "phrases.json"

    code, out, _ = run("init-db")
    assert code == 0
    assert "created a sample" in out
    assert json.loads(phrases_path.read_text(encoding="utf-8")) == SAMPLE_PHRASES

    code, out, _ = run("init-db")
    assert code == 0
    assert "10 added, 0 skipped" in out
    assert "TOTAL" in out

    code, out, _ = run("init-db")
    assert "0 added, 10 skipped" in out


def test_init_db_with_explicit_paths(run, tmp_path, write_json):
    db = tmp_path / "custom.db"
    phrases = write_json([{"ru": "Да", "en": "Yes", "level": "A1"}])

    code, out, _ = run("--db", str(db), "init-db", "--phrases", str(phrases))

    assert code == 0
    assert "1 added" in out
    assert db.exists()


def test_import_next_and_mark(run, write_json):
    path = write_json(
        [
            {"ru": "Могу я помочь вам?", "en": "Can I help you?", "level": "B1"},
            {"ru": "Привет", "en": "Hello", "level": "A1"},
            {"ru": "X", "en": "Y", "level": "Z9"},
        ]
    )

    code, out, _ = run("import", str(path))
    assert code == 0
    assert "2 added, 0 skipped, 1 invalid" in out

    code, out, _ = run("next")
    assert "#2 [A1] Привет -> Hello" in out

    code, out, _ = run("mark", "2")
    assert code == 0
    code, out, _ = run("next")
    assert "[B1]" in out

    code, out, _ = run("mark", "2", "--undo")
    code, out, _ = run("next")
    assert "[A1]" in out


def test_mark_unknown_id_fails(run, write_json):
    run("import", str(write_json([{"ru": "Да", "en": "Yes", "level": "A1"}])))

    code, _, err = run("mark", "42")

    assert code == 1
    assert "No phrase with id 42" in err


def test_stats_on_empty_database(run):
    code, out, _ = run("stats")

    assert code == 0
    assert "No phrases yet." in out


def test_malformed_import_reports_error(run, write_json):
    code, _, err = run("import", str(write_json({"ru": "Да"})))

    assert code == 1
    assert "JSON array" in err


def test_locked_database_reports_error(run, isolated_home):
    store = PhraseStore.initialize()
    try:
        code, _, err = run("stats")
    finally:
        store.shutdown()

    assert code == 1
    assert "already in use" in err


def test_study_on_empty_database_prints_hint(run):
    code, out, _ = run("study")

    assert code == 0
    assert "init-db" in out
