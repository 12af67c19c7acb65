from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from scoresynth.config import DEFAULT_BUCKET_WIDTH, DEFAULT_CHUNK_SIZE, SAMPLE_RATE, SynthesisParameters


def test_defaults() -> None:
    params = SynthesisParameters()

    assert params.sample_rate == SAMPLE_RATE == 44_100
    assert params.start_time == 0.0
    assert params.downcast_to_bits_per_sample is None
    assert params.levels_per_sample is None
    assert params.tempo_offset == 0
    assert params.bucket_width == DEFAULT_BUCKET_WIDTH
    assert params.chunk_size == DEFAULT_CHUNK_SIZE
    assert params.release_tails is False


@pytest.mark.parametrize(("bits", "levels"), [(1, 2), (8, 256), (16, 65_536)])
def test_levels_per_sample(bits: int, levels: int) -> None:
    assert SynthesisParameters(downcast_to_bits_per_sample=bits).levels_per_sample == levels


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sample_rate": 0},
        {"start_time": -0.5},
        {"start_time": float("inf")},
        {"downcast_to_bits_per_sample": 0},
        {"downcast_to_bits_per_sample": 64},
        {"bucket_width": 0.0},
        {"bucket_width": float("nan")},
        {"chunk_size": 0},
        {"volume": 1.0},
    ],
)
def test_invalid_values_are_rejected(kwargs: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        SynthesisParameters(**kwargs)


def test_parameters_are_frozen() -> None:
    params = SynthesisParameters()
    with pytest.raises(ValidationError):
        params.sample_rate = 8000  # type: ignore[misc]


def test_negative_tempo_offset_is_allowed() -> None:
    assert SynthesisParameters(tempo_offset=-20).tempo_offset == -20
