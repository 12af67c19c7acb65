from __future__ import annotations


class ScoreSynthError(Exception):
    """Base error for the scoresynth library."""


class InvalidTimingError(ScoreSynthError):
    """Raised when a tempo or note value cannot be turned into seconds."""


class InvalidPitchError(ScoreSynthError):
    """Raised when a pitch is unknown or has a non-positive frequency."""


class InvalidConfigError(ScoreSynthError):
    """Raised when render settings or audio buffers are malformed."""
