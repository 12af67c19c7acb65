from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from .audio import subtype_for_bits, write_wav
from .config import SAMPLE_RATE, SynthesisParameters
from .logging_utils import configure_logging, debug_enabled, log_exception
from .render import RenderHooks, render_song
from .songs import all_songs
from .spinner import ProgressBar, render_error
from .synthesis import preprocess

_LOGGER = logging.getLogger("scoresynth.cli")
_CONSOLE = Console()


def _non_negative_float(raw: str) -> float:
    value = float(raw)
    if value < 0:
        raise argparse.ArgumentTypeError("Start time should be positive!")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scoresynth")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List bundled songs and their durations.")

    render = sub.add_parser("render", help="Render a bundled song to a WAVE file.")
    render.add_argument("--song", required=True, choices=sorted(all_songs()), metavar="NAME")
    render.add_argument("--output", type=Path, required=True, metavar="PATH")
    render.add_argument(
        "--start-time",
        type=_non_negative_float,
        default=0.0,
        metavar="SECONDS",
        help="Skip the given amount of seconds from the beginning.",
    )
    render.add_argument("--bits", type=int, default=None, choices=[8, 16, 24, 32])
    render.add_argument("--sample-rate", type=int, default=SAMPLE_RATE)
    render.add_argument("--tempo-offset", type=int, default=0)
    render.add_argument("--release-tails", action="store_true")
    return parser


def _list_songs() -> int:
    for name, song in all_songs().items():
        prepared = preprocess(song)
        _CONSOLE.print(f"{name}\t{prepared.human_friendly_duration}\t{song.beats_per_minute:g} BPM")
    return 0


def _render(args: argparse.Namespace) -> int:
    song = all_songs()[args.song]
    params = SynthesisParameters(
        sample_rate=args.sample_rate,
        start_time=args.start_time,
        downcast_to_bits_per_sample=args.bits,
        tempo_offset=args.tempo_offset,
        release_tails=args.release_tails,
    )
    with ProgressBar(f"Synthesizing {song.name}") as progress:
        hooks = RenderHooks(
            on_preprocess_end=lambda prepared: _LOGGER.info(
                "Song %r lasts %s", song.name, prepared.human_friendly_duration
            ),
            on_progress=progress.update,
        )
        samples = render_song(song, params, hooks=hooks)
    path = write_wav(
        args.output,
        samples,
        sample_rate=params.sample_rate,
        subtype=subtype_for_bits(args.bits),
    )
    _CONSOLE.print(f"Wrote {song.name} to {path} ({samples.size} samples, sr={params.sample_rate})")
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "list":
            return _list_songs()
        if args.command == "render":
            return _render(args)
        parser.print_help()
        return 1
    except Exception as exc:
        _LOGGER.warning("scoresynth CLI failed: %s", exc, exc_info=debug_enabled())
        log_exception("scoresynth CLI", exc)
        render_error("scoresynth CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
