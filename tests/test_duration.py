import pytest

from neuroenglish.utils.duration import format_duration


@pytest.mark.parametrize(
    ("ms", "expected"),
    [
        (0, "0.0ms"),
        (250, "250.0ms"),
        (1500, "1.5s"),
        (90_000, "1.5min"),
        (2 * 60 * 60 * 1000, "2.0h"),
    ],
)
def test_picks_largest_fitting_unit(ms, expected):
    assert format_duration(ms) == expected


def test_forced_unit_and_precision():
    assert format_duration(1500, "ms", precision=0) == "1500ms"
    assert format_duration(90_000, "s", precision=2) == "90.00s"


def test_unknown_unit():
    with pytest.raises(ValueError, match="Supported: h, min, s, ms"):
        format_duration(10, "days")
