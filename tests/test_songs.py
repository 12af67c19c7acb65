from __future__ import annotations

import numpy as np
import pytest

from scoresynth.config import SynthesisParameters
from scoresynth.render import render_song
from scoresynth.songs import all_songs
from scoresynth.synthesis import preprocess


def test_bundled_songs_are_keyed_by_name() -> None:
    songs = all_songs()
    assert sorted(songs) == ["cadence", "scale"]
    for name, song in songs.items():
        assert song.name == name


@pytest.mark.parametrize(("name", "seconds", "human"), [("scale", 5.5, "0:05"), ("cadence", 16 / 3, "0:05")])
def test_bundled_song_durations(name: str, seconds: float, human: str) -> None:
    prepared = preprocess(all_songs()[name])
    assert prepared.duration_in_seconds == pytest.approx(seconds)
    assert prepared.human_friendly_duration == human


@pytest.mark.parametrize("name", ["scale", "cadence"])
def test_bundled_songs_render_to_audible_bounded_signal(name: str) -> None:
    samples = render_song(all_songs()[name], SynthesisParameters(sample_rate=4000))

    assert np.all(np.isfinite(samples))
    assert np.max(np.abs(samples)) > 0.05
    assert np.max(np.abs(samples)) <= 1.0
