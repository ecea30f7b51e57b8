"""Find candidate model files under an input root."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from glb_compressor.models import DiscoveredFile
from glb_compressor.utils.constants import (
    DEFAULT_EXTENSION,
    DEFAULT_OUTPUT_DIR,
    EXCLUDED_DIRS,
    FALLBACK_DIR,
)
from glb_compressor.utils.logging import (
    bright_green,
    dim,
    format_count,
    log_detail,
    log_info,
    log_warn,
)


def _is_excluded(relative: Path, exclude_dirs: frozenset[str]) -> bool:
    """Check whether any directory segment of ``relative`` is excluded."""
    return any(part in exclude_dirs for part in relative.parts[:-1])


def _glob_pattern(root: Path, pattern: str) -> list[Path]:
    """Run one glob pattern, returning files only. Errors propagate."""
    return [p for p in root.glob(pattern) if p.is_file()]


def _scan_fallback_dir(root: Path, extension: str) -> list[Path]:
    """
    Best-effort, non-recursive listing of ``<root>/models``.

    Used only when globbing found nothing. Listing errors are logged
    and treated as an empty result.
    """
    fallback = root / FALLBACK_DIR
    if not fallback.is_dir():
        return []

    log_info(f"Checking {FALLBACK_DIR}/ directly...")
    try:
        return sorted(
            p
            for p in fallback.iterdir()
            if p.is_file() and p.name.lower().endswith(extension.lower())
        )
    except OSError as e:
        log_warn(f"Could not list {fallback}: {e}")
        return []


def discover_files(
    input_dir: str | Path,
    *,
    extension: str = DEFAULT_EXTENSION,
    exclude_dirs: Iterable[str] | None = None,
) -> list[DiscoveredFile]:
    """
    Discover model files under ``input_dir``.

    Two patterns are globbed: direct children (``*.glb``) and all descendants
    (``**/*.glb``). Their results are merged, deduplicated by absolute path and
    sorted. Paths inside ``node_modules``, the default output directory
    (``compressed``) or any directory named in ``exclude_dirs`` are skipped,
    so vendored files and previous output are never reprocessed.

    Args:
        input_dir: Discovery root
        extension: Target file suffix, including the dot
        exclude_dirs: Extra directory names to skip, typically the name of
            the configured output directory

    Returns:
        Discovered files sorted by absolute path.
    """
    root = Path(input_dir).absolute()
    excluded = EXCLUDED_DIRS | {Path(DEFAULT_OUTPUT_DIR).name}
    if exclude_dirs is not None:
        excluded |= frozenset(exclude_dirs)

    found: set[Path] = set()
    for pattern in (f"*{extension}", f"**/*{extension}"):
        try:
            matches = _glob_pattern(root, pattern)
        except (OSError, ValueError) as e:
            log_warn(f'Pattern "{pattern}" failed: {e}')
            continue
        found.update(
            p for p in matches if not _is_excluded(p.relative_to(root), excluded)
        )

    if not found:
        found.update(_scan_fallback_dir(root, extension))

    files = [
        DiscoveredFile(absolute_path=p, relative_path=p.relative_to(root))
        for p in sorted(found, key=str)
    ]

    log_info(f"Found {bright_green(format_count(len(files), 'file'))}")
    for f in files:
        log_detail(dim(f"- {f.relative_path}"))

    return files
