from __future__ import annotations

import logging
import os
import sys
import time
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path

_LOGGER = logging.getLogger("scoresynth.logging")
PACKAGE_LOGGER = "scoresynth"
LOG_DIR_ENV = "SCORESYNTH_LOG_DIR"
DEBUG_ENV = "SCORESYNTH_DEBUG"
_LOG_FILE = "scoresynth.log"
_CONSOLE_HANDLER = "scoresynth.console"
_FILE_HANDLER = "scoresynth.file"
_LEVEL_PREFIXES = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
}


class _PrefixedFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        prefix = _LEVEL_PREFIXES.get(record.levelno, "")
        return f"{prefix} {super().format(record)}"


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV))


def get_log_dir() -> Path:
    configured = os.environ.get(LOG_DIR_ENV)
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".cache" / "scoresynth" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / _LOG_FILE


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.__stderr__)
    handler.set_name(_CONSOLE_HANDLER)
    handler.setLevel(logging.DEBUG if debug_enabled() else logging.INFO)
    handler.setFormatter(_PrefixedFormatter("%(name)s: %(message)s"))
    return handler


def _file_handler() -> logging.Handler | None:
    try:
        get_log_dir().mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(get_log_path(), encoding="utf-8")
    except OSError as exc:
        _LOGGER.warning("File logging disabled: %s", exc)
        return None
    handler.set_name(_FILE_HANDLER)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s", "%Y-%m-%d %H:%M:%S")
    )
    return handler


def configure_logging(*, force: bool = False) -> None:
    """Attach the package console and file handlers once.

    The console handler is skipped when the host application already
    configured the root logger. ``force`` rebuilds both handlers, picking up
    a changed ``SCORESYNTH_LOG_DIR`` or ``SCORESYNTH_DEBUG``.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    ours = [h for h in logger.handlers if h.get_name() in (_CONSOLE_HANDLER, _FILE_HANDLER)]
    if ours and not force:
        return
    for handler in ours:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    if force or not logging.getLogger().handlers:
        logger.addHandler(_console_handler())
    file_handler = _file_handler()
    if file_handler is not None:
        logger.addHandler(file_handler)


@contextmanager
def log_stage(logger: logging.Logger, stage: str) -> Iterator[None]:
    """Log how long a pipeline stage took, at DEBUG."""
    started = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s took %.3fs", stage, time.perf_counter() - started)


def log_exception(context: str, exc: BaseException) -> Path | None:
    path = get_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"[{datetime.now().isoformat()}] {context} failed: {type(exc).__name__}: {exc}\n")
            traceback.print_exception(type(exc), exc, exc.__traceback__, file=handle)
            handle.write("\n")
    except OSError as log_exc:
        _LOGGER.warning("Failed to write log file: %s", log_exc, exc_info=True)
        return None
    return path
