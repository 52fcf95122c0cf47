import json
import logging

import pytest

from neuroenglish import config
from neuroenglish.storage.phrase_store import PhraseStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("NEUROENGLISH_HOME", str(home))
    monkeypatch.setenv("NEUROENGLISH_LOG_FILES", "0")
    for name in ("NEUROENGLISH_DB", "NEUROENGLISH_PHRASES", "NEUROENGLISH_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config.reload()
    yield home
    config.reload()
    logging.getLogger("neuroenglish").handlers.clear()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db" / "phrases.db"


@pytest.fixture
def store(db_path):
    store = PhraseStore.initialize(db_path)
    yield store
    store.shutdown()


@pytest.fixture
def write_json(tmp_path):
    def _write(data, name="phrases.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
