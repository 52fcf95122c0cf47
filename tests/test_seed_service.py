import json

from neuroenglish.app.launcher import launch_session
from neuroenglish.services.seed_service import SAMPLE_PHRASES, initialize_database
from neuroenglish.storage.phrase_store import PhraseStore


def test_missing_file_gets_sample_without_import(store, tmp_path):
    path = tmp_path / "data" / "phrases.json"

    result = initialize_database(store, path)

    assert result.created_sample
    assert result.report is None
    assert store.count() == 0
    assert len(json.loads(path.read_text(encoding="utf-8"))) == len(SAMPLE_PHRASES)


def test_existing_file_is_imported(store, write_json):
    path = write_json(SAMPLE_PHRASES)

    result = initialize_database(store, path)

    assert not result.created_sample
    assert result.report.inserted == len(SAMPLE_PHRASES)
    assert store.count() == len(SAMPLE_PHRASES)


def test_launch_session_runs_and_releases_store(db_path, write_json):
    with PhraseStore.initialize(db_path) as store:
        initialize_database(store, write_json(SAMPLE_PHRASES[:1]))

    lines = []
    answers = iter(["", "y"])
    code = launch_session(db_path, input_fn=lambda prompt: next(answers), output_fn=lines.append)

    assert code == 0
    assert any("Congratulations" in line for line in lines)
    with PhraseStore.initialize(db_path) as store:
        assert store.stats_by_level()[0].completed == 1


def test_launch_session_interrupted(db_path, write_json):
    with PhraseStore.initialize(db_path) as store:
        initialize_database(store, write_json(SAMPLE_PHRASES[:1]))

    def interrupt(prompt):
        raise KeyboardInterrupt

    lines = []
    assert launch_session(db_path, input_fn=interrupt, output_fn=lines.append) == 0
    assert any("Bye" in line for line in lines)
    PhraseStore.initialize(db_path).shutdown()
