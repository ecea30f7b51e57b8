"""Data types shared by discovery, invocation and the batch runner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from glb_compressor.utils.constants import (
    DEFAULT_EXTENSION,
    DEFAULT_INPUT_DIR,
    DEFAULT_MAX_TEXTURE_SIZE,
    DEFAULT_OUTPUT_DIR,
    QUALITY_PRESETS,
    QualityPreset,
)


class Quality(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


@dataclass(frozen=True)
class CompressOptions:
    """Configuration for a batch compression run."""

    input_dir: Path = field(default_factory=lambda: Path(DEFAULT_INPUT_DIR))
    output_dir: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    quality: Quality = Quality.medium
    use_draco: bool = True
    use_texture_compression: bool = True
    use_mesh_simplification: bool = True
    resize_textures: bool = True
    max_texture_size: int = DEFAULT_MAX_TEXTURE_SIZE
    extension: str = DEFAULT_EXTENSION
    timeout: float | None = None

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "input_dir", Path(self.input_dir))
        object.__setattr__(self, "output_dir", Path(self.output_dir))
        try:
            object.__setattr__(self, "quality", Quality(self.quality))
        except ValueError:
            choices = ", ".join(q.value for q in Quality)
            raise ValueError(
                f"quality must be one of {choices}, got {self.quality!r}"
            ) from None

        if isinstance(self.max_texture_size, bool) or not isinstance(
            self.max_texture_size, int
        ):
            raise ValueError(
                "max_texture_size must be an integer, "
                f"got {type(self.max_texture_size).__name__}"
            )
        if self.max_texture_size <= 0:
            raise ValueError(
                f"max_texture_size must be positive, got {self.max_texture_size}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

        extension = self.extension
        if not extension.startswith("."):
            extension = "." + extension
        object.__setattr__(self, "extension", extension)

    @property
    def preset(self) -> QualityPreset:
        return QUALITY_PRESETS[self.quality.value]


@dataclass(frozen=True)
class DiscoveredFile:
    """A candidate input file and its location relative to the input root."""

    absolute_path: Path
    relative_path: Path


@dataclass
class BatchStats:
    """Counters accumulated over a single run. Only ever incremented."""

    total: int = 0
    processed: int = 0
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class CompressionResult:
    """Outcome of compressing one file."""

    file: DiscoveredFile
    success: bool
    input_size: int = 0
    output_size: int = 0
    ratio: float = 0.0
    error: str | None = None


def compression_ratio(input_size: int, output_size: int) -> float:
    """Percentage saved, rounded to one decimal. Empty inputs report 0.0."""
    if input_size <= 0:
        return 0.0
    return round((1 - output_size / input_size) * 100, 1)
