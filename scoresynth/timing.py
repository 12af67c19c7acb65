from __future__ import annotations

import math
import numbers

from .errors import InvalidTimingError
from .song import RationalDuration

BEATS_PER_WHOLE_NOTE = 4
SECONDS_PER_MINUTE = 60.0


def validate_tempo(beats_per_minute: float) -> float:
    if isinstance(beats_per_minute, bool) or not isinstance(beats_per_minute, numbers.Real):
        raise InvalidTimingError(f"Tempo must be a number, got {beats_per_minute!r}")
    if not math.isfinite(beats_per_minute) or beats_per_minute <= 0:
        raise InvalidTimingError(f"Tempo must be positive, got {beats_per_minute!r} BPM")
    return float(beats_per_minute)


def validate_note_value(value: RationalDuration) -> RationalDuration:
    for part, component in (("numerator", value.numerator), ("denominator", value.denominator)):
        if isinstance(component, bool) or not isinstance(component, numbers.Integral):
            raise InvalidTimingError(f"Note value {part} must be an integer, got {component!r}")
        if component <= 0:
            raise InvalidTimingError(f"Note value {part} must be positive, got {component!r}")
    return value


def resolve_duration(value: RationalDuration, beats_per_minute: float) -> float:
    """Seconds taken by ``value`` at the given tempo; a whole note spans four beats."""
    tempo = validate_tempo(beats_per_minute)
    validate_note_value(value)
    return (value.numerator / value.denominator) * BEATS_PER_WHOLE_NOTE * SECONDS_PER_MINUTE / tempo
