"""Map input files to their mirrored location under the output root."""

from __future__ import annotations

from pathlib import Path


def resolve_output_path(
    input_path: str | Path,
    input_dir: str | Path,
    output_dir: str | Path,
) -> Path:
    """
    Compute where the compressed copy of ``input_path`` is written.

    The path of the file relative to ``input_dir`` is re-rooted under
    ``output_dir``, so the output tree mirrors the input tree.

    Raises:
        ValueError: if ``input_path`` does not live under ``input_dir``.
    """
    input_root = Path(input_dir).absolute()
    relative = Path(input_path).absolute().relative_to(input_root)
    return Path(output_dir).absolute() / relative


def ensure_parent_dir(path: Path) -> Path:
    """Create the parent directory of ``path`` if needed and return it."""
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent
