"""Chainable helpers for writing songs by hand.

Example:
    builder = SongBuilder("Scale", beats_per_minute=120)
    builder.track(sine_organ, volume=0.5).note(by(1, 4), pitch("C4")).note(by(1, 4), pitch("D4"))
    song = builder.build()
"""

from __future__ import annotations

from dataclasses import replace

from .instruments import Instrument
from .pitches import Pitch, PitchTransition
from .song import Chord, Glissando, Pause, RationalDuration, SingleNote, Song, Track, TrackSegment


class TrackBuilder:
    def __init__(self, instrument: Instrument, volume: float, name: str | None = None) -> None:
        self._track = Track(instrument=instrument, volume=volume, name=name)

    def _append(self, segment: TrackSegment) -> TrackBuilder:
        self._track = replace(self._track, segments=self._track.segments + (segment,))
        return self

    def note(self, value: RationalDuration, pitch: Pitch) -> TrackBuilder:
        return self._append(SingleNote(value, pitch))

    def chord(self, value: RationalDuration, *pitches: Pitch) -> TrackBuilder:
        return self._append(Chord(value, tuple(pitches)))

    def glissando(self, value: RationalDuration, transition: PitchTransition) -> TrackBuilder:
        return self._append(Glissando(value, transition))

    def pause(self, value: RationalDuration) -> TrackBuilder:
        return self._append(Pause(value))

    def build(self) -> Track:
        return self._track


class SongBuilder:
    def __init__(self, name: str, beats_per_minute: float) -> None:
        self._name = name
        self._beats_per_minute = beats_per_minute
        self._tracks: list[TrackBuilder] = []

    def track(self, instrument: Instrument, volume: float, name: str | None = None) -> TrackBuilder:
        builder = TrackBuilder(instrument, volume, name)
        self._tracks.append(builder)
        return builder

    def build(self) -> Song:
        return Song(
            name=self._name,
            beats_per_minute=self._beats_per_minute,
            tracks=tuple(track.build() for track in self._tracks),
        )
