"""
Periodic signal generators.

Every waveform is a pure function of time in seconds. It accepts either a
scalar (returning a float) or a numpy array of times (returning an array of
the same shape), so the evaluator can sample whole chunks at once.
"""

from __future__ import annotations

from typing import Any, Callable, TypeAlias

import numpy as np
from numpy.typing import NDArray
from scipy.signal import sawtooth, square  # type: ignore[import]

FloatArray: TypeAlias = NDArray[np.float64]
Signal: TypeAlias = "float | FloatArray"
Waveform: TypeAlias = Callable[[Any], Any]

TWO_PI = 2.0 * np.pi


def _match_input(values: Any, time: Any) -> Signal:
    """Shape a generator's output like the time argument it was given."""
    array = np.asarray(values, dtype=np.float64)
    if np.ndim(time) == 0:
        return float(array)
    return np.broadcast_to(array, np.shape(time)).astype(np.float64, copy=True)


def sample_waveform(waveform: Waveform, time: Any) -> Signal:
    """Evaluate any waveform and broadcast constant outputs to the input shape."""
    return _match_input(waveform(time), time)


def silence(time: Any) -> Signal:
    return _match_input(0.0, time)


def sine_wave(frequency: float) -> Waveform:
    def _sine(time: Any) -> Signal:
        return _match_input(np.sin(TWO_PI * frequency * np.asarray(time, dtype=np.float64)), time)

    return _sine


def square_wave(frequency: float) -> Waveform:
    """+1 for the first half of each period, -1 for the second."""

    def _square(time: Any) -> Signal:
        phase = TWO_PI * frequency * np.asarray(time, dtype=np.float64)
        return _match_input(square(phase), time)

    return _square


def sawtooth_wave(frequency: float) -> Waveform:
    def _sawtooth(time: Any) -> Signal:
        phase = TWO_PI * frequency * np.asarray(time, dtype=np.float64)
        return _match_input(sawtooth(phase), time)

    return _sawtooth


def triangle_wave(frequency: float) -> Waveform:
    def _triangle(time: Any) -> Signal:
        # Shift a quarter period so the triangle starts at 0 and rises, like the sine.
        phase = TWO_PI * frequency * np.asarray(time, dtype=np.float64) + np.pi / 2
        return _match_input(sawtooth(phase, width=0.5), time)

    return _triangle
