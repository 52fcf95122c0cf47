import pytest

from neuroenglish.app.session import StudySession
from neuroenglish.services.import_service import import_records


def _scripted(*answers):
    remaining = list(answers)
    prompts = []

    def _input(prompt):
        prompts.append(prompt)
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    _input.prompts = prompts
    return _input


@pytest.fixture
def two_phrases(store):
    import_records(
        store,
        [
            {"ru": "Привет", "en": "Hello", "level": "A1"},
            {"ru": "Спасибо", "en": "Thank you", "level": "A1"},
        ],
    )
    return store


def test_session_records_answers(two_phrases):
    output = []
    session = StudySession(
        two_phrases,
        input_fn=_scripted("", "y", "", "n", "", "q"),
        output_fn=output.append,
    )

    stats = session.run()

    assert (stats.shown, stats.completed, stats.postponed) == (2, 1, 1)
    assert "\nRU: Привет" in output
    assert "\nEN: Thank you" in output
    # The postponed phrase is the only one left, so it comes back before "q"
    assert output.count("\nRU: Спасибо") == 2
    remaining = [s for s in two_phrases.stats_by_level()]
    assert (remaining[0].completed, remaining[0].remaining) == (1, 1)


def test_session_ends_when_everything_is_learned(two_phrases):
    output = []
    stats = StudySession(
        two_phrases, input_fn=_scripted("", "yes", "", "Y"), output_fn=output.append
    ).run()

    assert stats.completed == 2
    assert any("Congratulations" in line for line in output)
    assert two_phrases.next_due_phrase() is None


def test_unknown_answer_is_asked_again(two_phrases):
    output = []
    stats = StudySession(
        two_phrases, input_fn=_scripted("", "maybe", "y", "", "q"), output_fn=output.append
    ).run()

    assert "Please answer y, n or q" in output
    assert stats.completed == 1


def test_closed_input_ends_session(two_phrases):
    output = []
    stats = StudySession(two_phrases, input_fn=_scripted(), output_fn=output.append).run()

    assert stats.shown == 0
    assert two_phrases.stats_by_level()[0].completed == 0
    assert any("Session summary" in line for line in output)


def test_session_time_uses_clock(two_phrases):
    ticks = iter([10.0, 12.5])
    stats = StudySession(
        two_phrases,
        input_fn=_scripted("", "q"),
        output_fn=lambda line: None,
        clock=lambda: next(ticks),
    ).run()

    assert stats.elapsed_ms() == 2500.0
