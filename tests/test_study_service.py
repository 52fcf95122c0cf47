from neuroenglish.models import Level, LevelStats
from neuroenglish.services import study_service


def test_query_surface_delegates_to_store(store):
    phrase_id = store.insert_phrase("Привет", "Hello", "A1")

    assert study_service.next_due_phrase(store).id == phrase_id
    assert study_service.set_completed(store, phrase_id, True) == 1
    assert study_service.next_due_phrase(store) is None
    assert study_service.stats_by_level(store) == [
        LevelStats(level=Level.A1, total=1, completed=1, remaining=0)
    ]


def test_progress_table_adds_percent_and_total_row():
    frame = study_service.progress_table(
        [
            LevelStats(level=Level.A1, total=4, completed=1, remaining=3),
            LevelStats(level=Level.B2, total=2, completed=2, remaining=0),
        ]
    )

    assert list(frame.index) == ["A1", "B2", "TOTAL"]
    assert list(frame.columns) == ["total", "completed", "remaining", "percent"]
    assert frame.loc["A1"].tolist() == [4, 1, 3, 25]
    assert frame.loc["B2", "percent"] == 100
    assert frame.loc["TOTAL"].tolist() == [6, 3, 3, 50]


def test_progress_table_rounds_percent():
    frame = study_service.progress_table(
        [LevelStats(level=Level.A1, total=3, completed=2, remaining=1)]
    )

    assert frame.loc["A1", "percent"] == 67


def test_progress_table_empty():
    frame = study_service.progress_table([])

    assert frame.empty
    assert list(frame.columns) == ["total", "completed", "remaining", "percent"]


def test_format_progress_table():
    text = study_service.format_progress_table(
        [LevelStats(level=Level.A1, total=2, completed=1, remaining=1)]
    )

    assert "Learned" in text
    assert "TOTAL" in text
    assert "50%" in text
    assert study_service.format_progress_table([]) == "No phrases yet."
