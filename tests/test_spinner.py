from __future__ import annotations

import io

from scoresynth.errors import InvalidPitchError
from scoresynth.spinner import ProgressBar, render_error


def test_progress_bar_disabled_is_noop() -> None:
    bar = ProgressBar("Synthesizing", enabled=False)
    bar.start()
    bar.update(0.5)
    bar.update(1.0)
    bar.stop()


def test_progress_bar_enabled_draws_to_stream() -> None:
    stream = io.StringIO()
    with ProgressBar("Synthesizing", stream=stream, enabled=True) as bar:
        bar.update(0.25)
        bar.update(2.0)
    bar.stop()


def test_progress_bar_is_disabled_for_non_tty_stream() -> None:
    bar = ProgressBar("Synthesizing", stream=io.StringIO())
    bar.start()
    bar.update(0.5)
    bar.stop()


def test_render_error_plain_text_for_non_tty() -> None:
    stream = io.StringIO()
    render_error("render", InvalidPitchError("no such pitch"), stream=stream)
    text = stream.getvalue()
    assert "render failed: InvalidPitchError: no such pitch" in text
    assert "scoresynth.log" in text
