"""
GLB Batch Compressor
====================
Finds every GLB file under a directory and compresses each one with the
external gltf-transform optimizer, writing results to a mirrored output tree.

Per file, depending on options:
- Draco geometry compression
- WebP texture compression
- Texture resizing (max size, default 1024px)
- Mesh simplification (ratio taken from the quality preset)

Usage:
    CLI:
        glb-compressor --input assets --output assets/compressed
        glb-compressor -q high --no-mesh --max-texture-size 2048

    Python:
        from glb_compressor import BatchCompressor, CompressOptions
        stats = BatchCompressor(CompressOptions(input_dir="assets")).run()
"""

from importlib.metadata import PackageNotFoundError, version

from glb_compressor.batch import BatchCompressor
from glb_compressor.cli import main
from glb_compressor.models import BatchStats, CompressOptions, Quality

try:
    __version__ = version("glb-compressor")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["BatchCompressor", "BatchStats", "CompressOptions", "Quality", "main"]
