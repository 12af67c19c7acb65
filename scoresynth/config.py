from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SAMPLE_RATE = 44_100
DEFAULT_BUCKET_WIDTH = 1.0
DEFAULT_CHUNK_SIZE = 4096


class SynthesisParameters(BaseModel):
    """Knobs for turning a song into samples.

    Example:
        params = SynthesisParameters(downcast_to_bits_per_sample=8, tempo_offset=-20)
        samples = render_song(song, params)
    """

    sample_rate: int = Field(default=SAMPLE_RATE, gt=0)
    start_time: float = Field(default=0.0, ge=0.0, allow_inf_nan=False)
    downcast_to_bits_per_sample: int | None = Field(default=None, ge=1, le=32)
    tempo_offset: int = 0
    bucket_width: float = Field(default=DEFAULT_BUCKET_WIDTH, gt=0.0, allow_inf_nan=False)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    release_tails: bool = False

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    @property
    def levels_per_sample(self) -> int | None:
        if self.downcast_to_bits_per_sample is None:
            return None
        return 2**self.downcast_to_bits_per_sample
