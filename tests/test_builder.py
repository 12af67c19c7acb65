from __future__ import annotations

import pytest

from scoresynth.builder import SongBuilder, TrackBuilder
from scoresynth.instruments import sawtooth_bass, sine_organ
from scoresynth.pitches import pitch
from scoresynth.song import Chord, Glissando, Pause, SingleNote, by
from scoresynth.synthesis import preprocess


def test_track_builder_appends_segments_in_order() -> None:
    track = (
        TrackBuilder(sine_organ, volume=0.5, name="Lead")
        .note(by(1, 4), pitch("C4"))
        .chord(by(1, 2), pitch("C4"), pitch("E4"))
        .glissando(by(1, 8), pitch("C4") >> pitch("C5"))
        .pause(by(1, 16))
        .build()
    )

    assert track.name == "Lead"
    assert track.volume == 0.5
    assert [type(segment) for segment in track.segments] == [SingleNote, Chord, Glissando, Pause]
    chord = track.segments[1]
    assert isinstance(chord, Chord)
    assert chord.pitches == (pitch("C4"), pitch("E4"))
    glissando = track.segments[2]
    assert isinstance(glissando, Glissando)
    assert glissando.transition.end == pitch("C5")


def test_song_builder_collects_tracks() -> None:
    builder = SongBuilder("Duet", beats_per_minute=60)
    builder.track(sine_organ, volume=0.5).note(by(1, 4), pitch("A4"))
    builder.track(sawtooth_bass, volume=0.25).note(by(1, 2), pitch("A2"))
    song = builder.build()

    assert song.name == "Duet"
    assert song.beats_per_minute == 60
    assert len(song.tracks) == 2
    assert preprocess(song).duration_in_seconds == pytest.approx(2.0)


def test_tracks_keep_receiving_segments_after_song_builder_hands_them_out() -> None:
    builder = SongBuilder("Late", beats_per_minute=120)
    melody = builder.track(sine_organ, volume=1.0)
    melody.note(by(1, 4), pitch("C4"))
    melody.note(by(1, 4), pitch("D4"))

    assert len(builder.build().tracks[0].segments) == 2


def test_empty_song_builder() -> None:
    song = SongBuilder("Empty", beats_per_minute=100).build()
    assert song.tracks == ()
    assert preprocess(song).duration_in_seconds == 0.0
