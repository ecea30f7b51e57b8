"""Shared helpers for glb-compressor."""

from glb_compressor.utils.logging import format_file_size

__all__ = ["format_file_size"]
