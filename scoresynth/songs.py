from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .builder import SongBuilder
from .instruments import sawtooth_bass, sine_organ, square_lead, triangle_flute
from .pitches import pitch
from .song import Song, by


def _scale() -> Song:
    builder = SongBuilder("scale", beats_per_minute=120)
    melody = builder.track(sine_organ, volume=0.6, name="Melody")
    for name in ("C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5"):
        melody.note(by(1, 4), pitch(name))
    melody.pause(by(1, 4))
    for name in ("C5", "G4", "E4", "C4"):
        melody.note(by(1, 8), pitch(name))
    return builder.build()


def _cadence() -> Song:
    builder = SongBuilder("cadence", beats_per_minute=90)
    (
        builder.track(triangle_flute, volume=0.2, name="Chords")
        .chord(by(1, 2), pitch("C4"), pitch("E4"), pitch("G4"))
        .chord(by(1, 2), pitch("F4"), pitch("A4"), pitch("C5"))
        .chord(by(1, 2), pitch("G4"), pitch("B4"), pitch("D5"))
        .chord(by(1, 2), pitch("C4"), pitch("E4"), pitch("G4"))
    )
    (
        builder.track(sawtooth_bass, volume=0.2, name="Bass")
        .note(by(1, 2), pitch("C2"))
        .note(by(1, 2), pitch("F2"))
        .note(by(1, 2), pitch("G2"))
        .note(by(1, 2), pitch("C2"))
    )
    (
        builder.track(square_lead, volume=0.15, name="Lead")
        .pause(by(1, 1))
        .glissando(by(1, 2), pitch("G4") >> pitch("D5"))
        .note(by(1, 2), pitch("C5"))
    )
    return builder.build()


def all_songs() -> Mapping[str, Song]:
    songs = (_scale(), _cadence())
    return MappingProxyType({song.name: song for song in songs})
