from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Any

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

from .config import SAMPLE_RATE
from .errors import InvalidConfigError

FloatArray = NDArray[np.float32]
AudioNumbers = NDArray[np.floating[Any]] | Sequence[float] | FloatArray

PCM_SUBTYPES: Mapping[int, str] = MappingProxyType(
    {
        8: "PCM_U8",
        16: "PCM_16",
        24: "PCM_24",
        32: "PCM_32",
    }
)


def subtype_for_bits(bits: int | None) -> str:
    """soundfile subtype for a sample width; ``None`` keeps 32-bit float."""
    if bits is None:
        return "FLOAT"
    try:
        return PCM_SUBTYPES[bits]
    except KeyError:
        raise InvalidConfigError(
            f"Unsupported WAV sample width: {bits} bits. Valid: {sorted(PCM_SUBTYPES)}"
        ) from None


def ensure_audio_contract(
    audio: AudioNumbers,
    *,
    check_peak: bool = True,
) -> FloatArray:
    """Normalize dtype/range/shape to mono float32 in [-1, 1]."""

    mono: FloatArray = np.asarray(audio, dtype=np.float32).reshape(-1)
    if mono.size == 0 or not check_peak:
        return mono
    peak = float(np.max(np.abs(mono)))
    if peak > 1.0:
        mono = mono / peak
    return mono


def write_wav(
    path: str | Path,
    audio: AudioNumbers,
    *,
    sample_rate: int = SAMPLE_RATE,
    subtype: str = "FLOAT",
) -> Path:
    """Write rendered samples to a mono wav file."""

    match audio:
        case str() | bytes():
            raise InvalidConfigError("audio must be a sequence or array of samples")
        case np.ndarray() | Sequence():
            pass
        case _:
            raise InvalidConfigError("audio must be a sequence or array of samples")
    if sample_rate <= 0:
        raise InvalidConfigError(f"sample_rate must be positive, got {sample_rate}")

    target = Path(path)
    normalized = ensure_audio_contract(audio)
    sf.write(target, normalized, sample_rate, subtype=subtype)
    return target
