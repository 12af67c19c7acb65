from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .envelope import AdsrEnvelopeDefinition, Envelope, build_envelope_function, constant_envelope
from .waveforms import Waveform, sawtooth_wave, sine_wave, square_wave, triangle_wave


@dataclass(frozen=True, slots=True)
class Instrument:
    """Timbre shared by every segment of a track.

    ``waveform`` maps a frequency in Hz to a periodic generator and
    ``envelope`` maps a note duration to a gain curve.
    ``envelope_release_time`` is how long the envelope keeps sounding after
    the note ends.
    """

    waveform: Callable[[float], Waveform]
    envelope: Envelope = constant_envelope
    envelope_release_time: float = 0.0

    @classmethod
    def with_adsr(
        cls,
        waveform: Callable[[float], Waveform],
        definition: AdsrEnvelopeDefinition,
    ) -> Instrument:
        return cls(
            waveform=waveform,
            envelope=build_envelope_function(definition),
            envelope_release_time=definition.release_time,
        )


sine_organ = Instrument.with_adsr(
    sine_wave,
    AdsrEnvelopeDefinition(attack_time=0.02, decay_time=0.05, sustain_level=0.8, release_time=0.1),
)
square_lead = Instrument.with_adsr(
    square_wave,
    AdsrEnvelopeDefinition(attack_time=0.005, decay_time=0.1, sustain_level=0.6, release_time=0.05),
)
sawtooth_bass = Instrument.with_adsr(
    sawtooth_wave,
    AdsrEnvelopeDefinition(attack_time=0.01, decay_time=0.2, sustain_level=0.5, release_time=0.08),
)
triangle_flute = Instrument.with_adsr(
    triangle_wave,
    AdsrEnvelopeDefinition(attack_time=0.08, decay_time=0.1, sustain_level=0.9, release_time=0.15),
)
