from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeAlias

import numpy as np

from .errors import InvalidConfigError
from .waveforms import Signal, Waveform, _match_input

# note duration in seconds -> gain curve over elapsed time
Envelope: TypeAlias = Callable[[float], Waveform]


@dataclass(frozen=True, slots=True)
class AdsrEnvelopeDefinition:
    """Attack/decay/sustain/release shape.

    Times are in seconds, ``sustain_level`` is a gain in [0, 1]. The release
    starts when the note ends, from whatever level the envelope had reached.
    """

    attack_time: float
    decay_time: float
    sustain_level: float
    release_time: float

    def __post_init__(self) -> None:
        for field_name in ("attack_time", "decay_time", "release_time"):
            if getattr(self, field_name) < 0:
                raise InvalidConfigError(f"{field_name} must be >= 0")
        if not 0.0 <= self.sustain_level <= 1.0:
            raise InvalidConfigError("sustain_level must be within [0, 1]")


def _held_level(definition: AdsrEnvelopeDefinition, time: Any) -> Any:
    attack = definition.attack_time
    decay = definition.decay_time
    sustain = definition.sustain_level
    t = np.asarray(time, dtype=np.float64)

    if attack > 0:
        rising = np.clip(t / attack, 0.0, 1.0)
    else:
        rising = np.ones_like(t)
    if decay > 0:
        falling = 1.0 - (1.0 - sustain) * np.clip((t - attack) / decay, 0.0, 1.0)
    else:
        falling = np.full_like(t, sustain)
    return np.where(t < attack, rising, falling)


def build_envelope_function(definition: AdsrEnvelopeDefinition) -> Envelope:
    def _for_note(note_duration: float) -> Waveform:
        level_at_release = float(_held_level(definition, note_duration))

        def _gain(time: Any) -> Signal:
            t = np.asarray(time, dtype=np.float64)
            if definition.release_time > 0:
                remaining = np.clip(1.0 - (t - note_duration) / definition.release_time, 0.0, 1.0)
            else:
                remaining = np.zeros_like(t)
            gain = np.where(
                t < note_duration,
                _held_level(definition, t),
                level_at_release * remaining,
            )
            gain = np.where(t < 0.0, 0.0, gain)
            return _match_input(np.clip(gain, 0.0, 1.0), time)

        return _gain

    return _for_note


def constant_envelope(note_duration: float) -> Waveform:
    """Full gain for the whole note, no release."""
    _ = note_duration

    def _gain(time: Any) -> Signal:
        t = np.asarray(time, dtype=np.float64)
        return _match_input(np.where(t < 0.0, 0.0, 1.0), time)

    return _gain
