from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf  # type: ignore[import]

from scoresynth.audio import PCM_SUBTYPES, ensure_audio_contract, subtype_for_bits, write_wav
from scoresynth.errors import InvalidConfigError


def test_write_wav_round_trips_float_samples(tmp_path: Path) -> None:
    samples = np.sin(np.linspace(0.0, 2.0 * np.pi, 800, endpoint=False)).astype(np.float32) * 0.5
    path = write_wav(tmp_path / "tone.wav", samples, sample_rate=8000)

    data, sample_rate = sf.read(path, dtype="float32")
    assert sample_rate == 8000
    assert sf.info(path).subtype == "FLOAT"
    assert np.allclose(data, samples)


def test_write_wav_with_pcm_subtype(tmp_path: Path) -> None:
    samples = [0.0, 0.25, -0.25, 0.5]
    path = write_wav(tmp_path / "pcm.wav", samples, sample_rate=100, subtype=subtype_for_bits(16))

    info = sf.info(path)
    assert info.subtype == "PCM_16"
    assert info.frames == 4
    data, _ = sf.read(path, dtype="float32")
    assert np.allclose(data, samples, atol=1e-4)


def test_write_wav_normalizes_overs(tmp_path: Path) -> None:
    path = write_wav(tmp_path / "loud.wav", [2.0, -1.0, 0.5], sample_rate=100)
    data, _ = sf.read(path, dtype="float32")
    assert np.allclose(data, [1.0, -0.5, 0.25])


@pytest.mark.parametrize("audio", ["not audio", 3.5, None])
def test_write_wav_rejects_non_sample_input(tmp_path: Path, audio: object) -> None:
    with pytest.raises(InvalidConfigError):
        write_wav(tmp_path / "bad.wav", audio)  # type: ignore[arg-type]


def test_write_wav_rejects_bad_rate(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        write_wav(tmp_path / "bad.wav", [0.0], sample_rate=0)


def test_subtype_for_bits() -> None:
    assert subtype_for_bits(None) == "FLOAT"
    for bits, subtype in PCM_SUBTYPES.items():
        assert subtype_for_bits(bits) == subtype
    with pytest.raises(InvalidConfigError):
        subtype_for_bits(12)


def test_ensure_audio_contract_flattens_to_float32() -> None:
    mono = ensure_audio_contract(np.array([[0.1, 0.2], [0.3, 0.4]], dtype=np.float64))
    assert mono.dtype == np.float32
    assert mono.shape == (4,)


def test_ensure_audio_contract_can_skip_peak_check() -> None:
    mono = ensure_audio_contract([3.0, -1.0], check_peak=False)
    assert mono.tolist() == [3.0, -1.0]
