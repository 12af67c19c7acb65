from __future__ import annotations

import logging
import math
import threading
from typing import Any, Callable, Literal, Protocol

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict

from .config import DEFAULT_CHUNK_SIZE, SynthesisParameters
from .errors import InvalidConfigError
from .evaluator import BucketedEvaluator, build_evaluator
from .logging_utils import debug_enabled, log_stage
from .song import Song
from .synthesis import SongForSynthesis, preprocess
from .waveforms import FloatArray

_LOGGER = logging.getLogger("scoresynth.render")

SampleArray = NDArray[np.float32]
ProgressCallback = Callable[[float], None]


class SongEvaluator(Protocol):
    @property
    def duration_in_seconds(self) -> float: ...

    def evaluate_many(self, times: Any) -> FloatArray: ...


def reduce_levels_per_sample(samples: Any, levels: int) -> FloatArray:
    """Quantize samples in [-1, 1] onto ``levels`` evenly spaced values."""
    if levels < 2:
        raise InvalidConfigError(f"levels must be >= 2, got {levels}")
    clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    step = 2.0 / (levels - 1)
    return np.round((clipped + 1.0) / step) * step - 1.0


def sample_count(duration: float, sample_rate: int, start_time: float = 0.0) -> int:
    """Number of indices ``i`` with ``start_time + i / sample_rate < duration``."""
    if sample_rate <= 0:
        raise InvalidConfigError(f"sample_rate must be positive, got {sample_rate}")
    span = duration - start_time
    if span <= 0:
        return 0
    count = math.ceil(span * sample_rate)
    # Float rounding in the product can be off by one either way.
    while count > 0 and start_time + (count - 1) / sample_rate >= duration:
        count -= 1
    while start_time + count / sample_rate < duration:
        count += 1
    return count


def render(
    evaluator: SongEvaluator,
    sample_rate: int,
    *,
    start_time: float = 0.0,
    levels_per_sample: int | None = None,
    on_progress: ProgressCallback | None = None,
    cancel_event: threading.Event | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> SampleArray:
    """Sample ``evaluator`` at ``sample_rate`` from ``start_time`` to the end of the song.

    Samples are produced chunk by chunk. ``on_progress`` receives the completed
    fraction after each chunk. If ``cancel_event`` is set between chunks, the
    samples produced so far are returned. ``levels_per_sample`` quantizes each
    sample onto that many evenly spaced levels.
    """
    if chunk_size <= 0:
        raise InvalidConfigError(f"chunk_size must be positive, got {chunk_size}")
    if start_time < 0:
        raise InvalidConfigError(f"start_time must be >= 0, got {start_time}")
    if levels_per_sample is not None and levels_per_sample < 2:
        raise InvalidConfigError(f"levels_per_sample must be >= 2, got {levels_per_sample}")

    total = sample_count(evaluator.duration_in_seconds, sample_rate, start_time)
    output = np.zeros(total, dtype=np.float32)
    produced = 0
    while produced < total:
        if cancel_event is not None and cancel_event.is_set():
            _LOGGER.info("Render cancelled after %d of %d samples", produced, total)
            return output[:produced]
        stop = min(produced + chunk_size, total)
        indices = np.arange(produced, stop, dtype=np.float64)
        chunk = evaluator.evaluate_many(start_time + indices / sample_rate)
        if levels_per_sample is not None:
            chunk = reduce_levels_per_sample(chunk, levels_per_sample)
        output[produced:stop] = chunk
        produced = stop
        if on_progress is not None:
            on_progress(produced / total)

    if total == 0 and on_progress is not None:
        on_progress(1.0)
    _LOGGER.debug("Rendered %d samples at %d Hz", total, sample_rate)
    return output


# =============================================================================
# SONG-LEVEL ENTRY POINT
# =============================================================================


class RenderHooks(BaseModel):
    on_start: Callable[[], None] | None = None
    on_preprocess_end: Callable[[SongForSynthesis], None] | None = None
    on_progress: Callable[[float], None] | None = None
    on_end: Callable[[], None] | None = None
    on_error: Callable[[Exception], None] | None = None

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )


def _emit_render(
    hooks: RenderHooks | None,
    *,
    kind: Literal["start", "preprocess_end", "progress", "end", "error"],
    song: SongForSynthesis | None = None,
    fraction: float | None = None,
    error: Exception | None = None,
) -> None:
    if hooks is None:
        return
    try:
        match kind:
            case "start":
                if hooks.on_start is not None:
                    hooks.on_start()
            case "preprocess_end":
                if hooks.on_preprocess_end is not None and song is not None:
                    hooks.on_preprocess_end(song)
            case "progress":
                if hooks.on_progress is not None and fraction is not None:
                    hooks.on_progress(fraction)
            case "end":
                if hooks.on_end is not None:
                    hooks.on_end()
            case "error":
                if hooks.on_error is not None and error is not None:
                    hooks.on_error(error)
            case _:
                pass
    except Exception as exc:
        _LOGGER.warning("Render hook failed: %s", exc, exc_info=debug_enabled())


def render_song(
    song: Song,
    parameters: SynthesisParameters | None = None,
    *,
    hooks: RenderHooks | None = None,
    cancel_event: threading.Event | None = None,
) -> SampleArray:
    params = parameters or SynthesisParameters()
    _emit_render(hooks, kind="start")
    try:
        with log_stage(_LOGGER, "Preprocessing"):
            prepared = preprocess(
                song,
                tempo_offset=params.tempo_offset,
                release_tails=params.release_tails,
            )
        _emit_render(hooks, kind="preprocess_end", song=prepared)
        with log_stage(_LOGGER, "Indexing"):
            evaluator: BucketedEvaluator = build_evaluator(prepared, bucket_width=params.bucket_width)
        with log_stage(_LOGGER, "Sampling"):
            samples = render(
                evaluator,
                params.sample_rate,
                start_time=params.start_time,
                levels_per_sample=params.levels_per_sample,
                on_progress=lambda fraction: _emit_render(hooks, kind="progress", fraction=fraction),
                cancel_event=cancel_event,
                chunk_size=params.chunk_size,
            )
        _emit_render(hooks, kind="end")
        return samples
    except Exception as exc:
        _emit_render(hooks, kind="error", error=exc)
        _LOGGER.warning("Rendering %r failed: %s", song.name, exc, exc_info=debug_enabled())
        raise
