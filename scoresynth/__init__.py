from __future__ import annotations

from .audio import write_wav
from .builder import SongBuilder, TrackBuilder
from .config import SAMPLE_RATE, SynthesisParameters
from .envelope import AdsrEnvelopeDefinition, build_envelope_function
from .errors import InvalidConfigError, InvalidPitchError, InvalidTimingError, ScoreSynthError
from .evaluator import BucketedEvaluator, build_evaluator
from .instruments import Instrument, sawtooth_bass, sine_organ, square_lead, triangle_flute
from .logging_utils import configure_logging as _configure_logging
from .pitches import VERY_LOW_FOR_TESTING, Pitch, PitchTransition, pitch
from .render import RenderHooks, reduce_levels_per_sample, render, render_song
from .song import Chord, Glissando, Pause, RationalDuration, SingleNote, Song, Track, by
from .synthesis import (
    BoundedWaveform,
    PositionedBoundedWaveform,
    SongForSynthesis,
    TrackForSynthesis,
    preprocess,
)
from .timing import resolve_duration
from .waveforms import sawtooth_wave, silence, sine_wave, square_wave, triangle_wave

__all__ = [
    "SAMPLE_RATE",
    "AdsrEnvelopeDefinition",
    "BoundedWaveform",
    "BucketedEvaluator",
    "Chord",
    "Glissando",
    "Instrument",
    "InvalidConfigError",
    "InvalidPitchError",
    "InvalidTimingError",
    "Pause",
    "Pitch",
    "PitchTransition",
    "PositionedBoundedWaveform",
    "RationalDuration",
    "RenderHooks",
    "ScoreSynthError",
    "SingleNote",
    "Song",
    "SongBuilder",
    "SongForSynthesis",
    "SynthesisParameters",
    "Track",
    "TrackBuilder",
    "TrackForSynthesis",
    "VERY_LOW_FOR_TESTING",
    "build_envelope_function",
    "build_evaluator",
    "by",
    "pitch",
    "preprocess",
    "reduce_levels_per_sample",
    "render",
    "render_song",
    "resolve_duration",
    "sawtooth_bass",
    "sawtooth_wave",
    "silence",
    "sine_organ",
    "sine_wave",
    "square_lead",
    "square_wave",
    "triangle_flute",
    "triangle_wave",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
