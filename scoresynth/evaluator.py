from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from .config import DEFAULT_BUCKET_WIDTH
from .errors import InvalidConfigError
from .synthesis import SongForSynthesis, positioned_waveforms
from .waveforms import FloatArray, Waveform, sample_waveform

_LOGGER = logging.getLogger("scoresynth.evaluator")


@dataclass(frozen=True, slots=True)
class _Record:
    start: float
    end: float
    volume: float
    waveform: Waveform


class BucketedEvaluator:
    """Sum of all track signals at a point in time.

    The timeline is cut into ``bucket_width``-second buckets and every
    positioned waveform is registered in each bucket its span touches, so a
    query only visits waveforms near ``t``. The index is built once in
    ``__init__`` and never mutated, which makes evaluation safe to call from
    several threads.
    """

    def __init__(
        self,
        song: SongForSynthesis,
        *,
        bucket_width: float = DEFAULT_BUCKET_WIDTH,
    ) -> None:
        if not math.isfinite(bucket_width) or bucket_width <= 0:
            raise InvalidConfigError(f"bucket_width must be positive, got {bucket_width!r}")
        self._bucket_width = float(bucket_width)
        self._duration = song.duration_in_seconds

        records = [
            _Record(
                start=segment.start_time,
                end=segment.end_time,
                volume=volume,
                waveform=segment.bounded_waveform.waveform,
            )
            for volume, segment in positioned_waveforms(song)
        ]
        bucket_count = math.floor(self._duration / self._bucket_width) + 1 if self._duration > 0 else 0
        buckets: list[list[int]] = [[] for _ in range(bucket_count)]
        for index, record in enumerate(records):
            if record.end <= record.start:
                continue
            first = max(0, math.floor(record.start / self._bucket_width))
            last = min(bucket_count - 1, math.floor(record.end / self._bucket_width))
            for bucket in range(first, last + 1):
                buckets[bucket].append(index)

        self._records: tuple[_Record, ...] = tuple(records)
        self._buckets: tuple[tuple[int, ...], ...] = tuple(tuple(bucket) for bucket in buckets)
        _LOGGER.debug(
            "Built evaluator: %d records in %d buckets of %.3fs",
            len(self._records),
            len(self._buckets),
            self._bucket_width,
        )

    @property
    def duration_in_seconds(self) -> float:
        return self._duration

    @property
    def bucket_width(self) -> float:
        return self._bucket_width

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    def _bucket_of(self, time: float) -> int | None:
        if not 0.0 <= time < self._duration:
            return None
        bucket = math.floor(time / self._bucket_width)
        if bucket >= len(self._buckets):
            return None
        return bucket

    def evaluate(self, time: float) -> float:
        bucket = self._bucket_of(float(time))
        if bucket is None:
            return 0.0
        total = 0.0
        for index in self._buckets[bucket]:
            record = self._records[index]
            if record.start <= time < record.end:
                total += record.volume * float(sample_waveform(record.waveform, time - record.start))
        return total

    def __call__(self, time: float) -> float:
        return self.evaluate(time)

    def evaluate_many(self, times: Any) -> FloatArray:
        """Vectorized ``evaluate`` over an array of times."""
        t = np.asarray(times, dtype=np.float64).reshape(-1)
        output = np.zeros(t.shape, dtype=np.float64)
        if t.size == 0 or not self._buckets:
            return output

        in_range = (t >= 0.0) & (t < self._duration)
        bucket_ids = np.full(t.shape, -1, dtype=np.int64)
        bucket_ids[in_range] = np.floor(t[in_range] / self._bucket_width).astype(np.int64)
        bucket_ids[bucket_ids >= len(self._buckets)] = -1

        for bucket in np.unique(bucket_ids):
            if bucket < 0:
                continue
            positions = np.flatnonzero(bucket_ids == bucket)
            local = t[positions]
            for index in self._buckets[int(bucket)]:
                record = self._records[index]
                active = (local >= record.start) & (local < record.end)
                if not np.any(active):
                    continue
                elapsed = local[active] - record.start
                output[positions[active]] += record.volume * sample_waveform(record.waveform, elapsed)
        return output


def build_evaluator(
    song: SongForSynthesis,
    *,
    bucket_width: float = DEFAULT_BUCKET_WIDTH,
) -> BucketedEvaluator:
    return BucketedEvaluator(song, bucket_width=bucket_width)
