from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import InvalidPitchError

A4_FREQUENCY = 440.0
A4_MIDI_NUMBER = 69

_PITCH_CLASSES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)
_FLAT_ALIASES: Mapping[str, str] = MappingProxyType(
    {"Db": "C#", "Eb": "D#", "Gb": "F#", "Ab": "G#", "Bb": "A#"}
)


@dataclass(frozen=True, slots=True)
class Pitch:
    """A named pitch and its frequency in Hz."""

    name: str
    frequency: float

    def __rshift__(self, end: Pitch) -> PitchTransition:
        return PitchTransition(start=self, end=end)

    def __repr__(self) -> str:
        return f"Pitch({self.name}, {self.frequency:.3f} Hz)"


@dataclass(frozen=True, slots=True)
class PitchTransition:
    """Start and end pitch of a glissando."""

    start: Pitch
    end: Pitch


def _equal_tempered(midi_number: int) -> float:
    return A4_FREQUENCY * 2 ** ((midi_number - A4_MIDI_NUMBER) / 12)


def _build_table() -> Mapping[str, Pitch]:
    table: dict[str, Pitch] = {}
    for octave in range(0, 9):
        for index, pitch_class in enumerate(_PITCH_CLASSES):
            midi_number = (octave + 1) * 12 + index
            name = f"{pitch_class}{octave}"
            table[name] = Pitch(name=name, frequency=_equal_tempered(midi_number))
    return MappingProxyType(table)


PITCHES: Mapping[str, Pitch] = _build_table()

# Sweeps starting here begin at an almost-zero frequency.
VERY_LOW_FOR_TESTING = Pitch(name="VeryLowForTesting", frequency=0.001)


def pitch(name: str) -> Pitch:
    """Look up a pitch such as ``"C4"``, ``"f#3"`` or ``"Bb2"``."""
    cleaned = name.strip()
    if len(cleaned) < 2:
        raise InvalidPitchError(f"Unknown pitch: {name!r}")
    letter, rest = cleaned[0].upper(), cleaned[1:]
    accidental = ""
    if rest[:1] in ("#", "b"):
        accidental, rest = rest[:1], rest[1:]
    pitch_class = _FLAT_ALIASES.get(letter + accidental, letter + accidental)
    found = PITCHES.get(f"{pitch_class}{rest}")
    if found is None:
        raise InvalidPitchError(f"Unknown pitch: {name!r}")
    return found
