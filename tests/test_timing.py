from __future__ import annotations

import pytest

from scoresynth.errors import InvalidTimingError
from scoresynth.song import RationalDuration, by
from scoresynth.timing import resolve_duration


@pytest.mark.parametrize(
    ("numerator", "denominator", "bpm", "expected"),
    [
        (1, 4, 240, 0.25),
        (1, 8, 240, 0.125),
        (1, 2, 240, 0.5),
        (1, 1, 60, 4.0),
        (3, 8, 120, 0.75),
        (1, 4, 90, 2.0 / 3.0),
    ],
)
def test_resolve_duration_uses_four_beats_per_whole_note(
    numerator: int, denominator: int, bpm: float, expected: float
) -> None:
    assert resolve_duration(RationalDuration(numerator, denominator), bpm) == pytest.approx(expected)


@pytest.mark.parametrize("bpm", [0, -120, float("nan"), float("inf")])
def test_resolve_duration_rejects_bad_tempo(bpm: float) -> None:
    with pytest.raises(InvalidTimingError):
        resolve_duration(by(1, 4), bpm)


@pytest.mark.parametrize(
    "value",
    [by(0, 4), by(-1, 4), by(1, 0), by(1, -4)],
    ids=["zero-numerator", "negative-numerator", "zero-denominator", "negative-denominator"],
)
def test_resolve_duration_rejects_bad_note_value(value: RationalDuration) -> None:
    with pytest.raises(InvalidTimingError):
        resolve_duration(value, 120)


def test_resolve_duration_rejects_fractional_components() -> None:
    with pytest.raises(InvalidTimingError):
        resolve_duration(RationalDuration(1.5, 4), 120)  # type: ignore[arg-type]


def test_rational_duration_as_fraction() -> None:
    assert by(2, 8).as_fraction() == by(1, 4).as_fraction()
    assert repr(by(3, 16)) == "3/16"
