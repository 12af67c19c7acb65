"""Symbolic score: note values, track segments, tracks and songs."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TypeAlias

from .instruments import Instrument
from .pitches import Pitch, PitchTransition


@dataclass(frozen=True, slots=True)
class RationalDuration:
    """Note length as a fraction of a whole note, e.g. ``RationalDuration(1, 4)``.

    Components are checked when the duration is resolved against a tempo, so a
    whole song can be built first and validated in one pass.
    """

    numerator: int
    denominator: int

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __repr__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


def by(numerator: int, denominator: int) -> RationalDuration:
    return RationalDuration(numerator, denominator)


@dataclass(frozen=True, slots=True)
class SingleNote:
    value: RationalDuration
    pitch: Pitch


@dataclass(frozen=True, slots=True)
class Chord:
    value: RationalDuration
    pitches: tuple[Pitch, ...]


@dataclass(frozen=True, slots=True)
class Glissando:
    value: RationalDuration
    transition: PitchTransition


@dataclass(frozen=True, slots=True)
class Pause:
    value: RationalDuration


TrackSegment: TypeAlias = SingleNote | Chord | Glissando | Pause


@dataclass(frozen=True, slots=True)
class Track:
    instrument: Instrument
    volume: float
    segments: tuple[TrackSegment, ...] = ()
    name: str | None = None


@dataclass(frozen=True, slots=True)
class Song:
    name: str
    beats_per_minute: float
    tracks: tuple[Track, ...] = ()
