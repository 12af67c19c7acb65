"""
Architecture:

1. Segment synthesis: one symbolic segment -> one bounded waveform
2. Track assembly: bounded waveforms placed back to back on a track timeline
3. Song assembly: every track assembled independently from t=0
"""

from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .errors import InvalidPitchError
from .instruments import Instrument
from .pitches import Pitch
from .song import Chord, Glissando, Pause, SingleNote, Song, Track, TrackSegment
from .timing import resolve_duration, validate_tempo
from .waveforms import Signal, Waveform, sample_waveform, silence

_LOGGER = logging.getLogger("scoresynth.synthesis")


# =============================================================================
# TYPES
# =============================================================================


@dataclass(frozen=True, slots=True)
class BoundedWaveform:
    """A waveform that only means something for elapsed time in [0, duration)."""

    waveform: Waveform
    duration: float

    def __call__(self, time: Any) -> Signal:
        return sample_waveform(self.waveform, time)


@dataclass(frozen=True, slots=True)
class PositionedBoundedWaveform:
    bounded_waveform: BoundedWaveform
    start_time: float

    @property
    def end_time(self) -> float:
        return self.start_time + self.bounded_waveform.duration

    def is_active(self, time: float) -> bool:
        return self.start_time <= time < self.end_time


@dataclass(frozen=True, slots=True)
class TrackForSynthesis:
    segments: tuple[PositionedBoundedWaveform, ...]
    volume: float

    @property
    def duration_in_seconds(self) -> float:
        return max((segment.end_time for segment in self.segments), default=0.0)


@dataclass(frozen=True, slots=True)
class SongForSynthesis:
    tracks: tuple[TrackForSynthesis, ...]

    @property
    def duration_in_seconds(self) -> float:
        return max((track.duration_in_seconds for track in self.tracks), default=0.0)

    @property
    def human_friendly_duration(self) -> str:
        total = int(self.duration_in_seconds)
        minutes, seconds = divmod(total, 60)
        return f"{minutes}:{seconds:02d}"


# =============================================================================
# SEGMENT SYNTHESIS
# =============================================================================


def _checked_frequency(pitch: Pitch) -> float:
    frequency = pitch.frequency
    if isinstance(frequency, bool) or not isinstance(frequency, numbers.Real):
        raise InvalidPitchError(f"Pitch {pitch.name!r} has non-numeric frequency {frequency!r}")
    if not math.isfinite(frequency) or frequency <= 0:
        raise InvalidPitchError(f"Pitch {pitch.name!r} has non-positive frequency {frequency!r}")
    return float(frequency)


def _enveloped(raw: Waveform, gain: Waveform) -> Waveform:
    def _waveform(time: Any) -> Signal:
        return sample_waveform(raw, time) * sample_waveform(gain, time)

    return _waveform


def _note_waveform(instrument: Instrument, pitch: Pitch, note_duration: float) -> Waveform:
    frequency = _checked_frequency(pitch)
    return _enveloped(instrument.waveform(frequency), instrument.envelope(note_duration))


def _chord_waveform(
    instrument: Instrument, pitches: Iterable[Pitch], note_duration: float
) -> Waveform:
    # No normalization: a chord peaks at the sum of its notes' peaks.
    notes = tuple(_note_waveform(instrument, pitch, note_duration) for pitch in pitches)

    def _waveform(time: Any) -> Signal:
        total: Signal = sample_waveform(silence, time)
        for note in notes:
            total = total + note(time)
        return total

    return _waveform


def glissando_cycles(
    start_frequency: float, end_frequency: float, sweep_duration: float, time: Any
) -> Signal:
    """Oscillator phase, in cycles, of a linear frequency sweep.

    The instantaneous frequency goes from ``start_frequency`` to
    ``end_frequency`` over ``sweep_duration`` and holds ``end_frequency``
    afterwards. The phase is its integral, so it never jumps.
    """
    t = np.asarray(time, dtype=np.float64)
    slope = (end_frequency - start_frequency) / sweep_duration
    during = start_frequency * t + 0.5 * slope * t * t
    at_end = 0.5 * (start_frequency + end_frequency) * sweep_duration
    after = at_end + end_frequency * (t - sweep_duration)
    cycles = np.where(t <= sweep_duration, during, after)
    if np.ndim(time) == 0:
        return float(cycles)
    return cycles


def _glissando_waveform(instrument: Instrument, segment: Glissando, note_duration: float) -> Waveform:
    start_frequency = _checked_frequency(segment.transition.start)
    end_frequency = _checked_frequency(segment.transition.end)
    # A unit-frequency generator read at the accumulated phase gives the sweep.
    unit = instrument.waveform(1.0)
    gain = instrument.envelope(note_duration)

    def _waveform(time: Any) -> Signal:
        cycles = glissando_cycles(start_frequency, end_frequency, note_duration, time)
        return sample_waveform(unit, cycles) * sample_waveform(gain, time)

    return _waveform


def synthesize_segment(
    segment: TrackSegment,
    instrument: Instrument,
    note_duration: float,
    *,
    release_tails: bool = False,
) -> BoundedWaveform:
    tail = instrument.envelope_release_time if release_tails else 0.0
    match segment:
        case Pause():
            return BoundedWaveform(silence, note_duration)
        case SingleNote(pitch=note_pitch):
            waveform = _note_waveform(instrument, note_pitch, note_duration)
        case Chord(pitches=pitches):
            waveform = _chord_waveform(instrument, pitches, note_duration)
        case Glissando():
            waveform = _glissando_waveform(instrument, segment, note_duration)
        case _:
            raise TypeError(f"Unsupported track segment: {segment!r}")
    return BoundedWaveform(waveform, note_duration + tail)


# =============================================================================
# ASSEMBLY
# =============================================================================


def preprocess_track(
    track: Track,
    beats_per_minute: float,
    *,
    release_tails: bool = False,
) -> TrackForSynthesis:
    positioned: list[PositionedBoundedWaveform] = []
    cursor = 0.0
    for segment in track.segments:
        note_duration = resolve_duration(segment.value, beats_per_minute)
        bounded = synthesize_segment(
            segment, track.instrument, note_duration, release_tails=release_tails
        )
        positioned.append(PositionedBoundedWaveform(bounded, cursor))
        cursor += note_duration
    return TrackForSynthesis(segments=tuple(positioned), volume=track.volume)


def preprocess(
    song: Song,
    *,
    tempo_offset: int = 0,
    release_tails: bool = False,
) -> SongForSynthesis:
    """Resolve every segment of ``song`` into positioned waveforms.

    All timing and pitch errors are raised here, before anything is rendered.
    """
    beats_per_minute = validate_tempo(validate_tempo(song.beats_per_minute) + tempo_offset)
    tracks = tuple(
        preprocess_track(track, beats_per_minute, release_tails=release_tails)
        for track in song.tracks
    )
    result = SongForSynthesis(tracks=tracks)
    _LOGGER.debug(
        "Preprocessed %r: %d tracks, %d segments, %.3fs at %.1f BPM",
        song.name,
        len(tracks),
        sum(len(track.segments) for track in tracks),
        result.duration_in_seconds,
        beats_per_minute,
    )
    return result


def positioned_waveforms(song: SongForSynthesis) -> Sequence[tuple[float, PositionedBoundedWaveform]]:
    """Every positioned waveform of the song paired with its track volume."""
    return tuple(
        (track.volume, segment) for track in song.tracks for segment in track.segments
    )
