"""Constants and presets for batch GLB compression."""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class QualityPreset:
    """Compression parameters bundled under a quality name."""

    compression_level: int
    max_texture_size: int
    simplify_ratio: float


# Quality presets (lower quality = more aggressive reduction)
QUALITY_PRESETS: MappingProxyType[str, QualityPreset] = MappingProxyType(
    {
        "low": QualityPreset(
            compression_level=7, max_texture_size=512, simplify_ratio=0.5
        ),
        "medium": QualityPreset(
            compression_level=5, max_texture_size=1024, simplify_ratio=0.8
        ),
        "high": QualityPreset(
            compression_level=3, max_texture_size=2048, simplify_ratio=0.9
        ),
    }
)

DEFAULT_INPUT_DIR = "."
DEFAULT_OUTPUT_DIR = "./compressed"
DEFAULT_PATTERN = "**/*.glb"
DEFAULT_QUALITY = "medium"
DEFAULT_MAX_TEXTURE_SIZE = 1024
DEFAULT_EXTENSION = ".glb"

# Path segments never searched for input files
EXCLUDED_DIRS: frozenset[str] = frozenset({"node_modules"})

# Scanned directly when globbing finds nothing
FALLBACK_DIR = "models"

# gltf-transform invoked through npx unless installed globally
OPTIMIZER_EXECUTABLE = "gltf-transform"
DEFAULT_PROGRAM: tuple[str, ...] = ("npx", OPTIMIZER_EXECUTABLE)
