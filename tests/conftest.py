"""Pytest fixtures for glb-compressor tests."""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest


def write_glb(path: Path, size: int = 1000) -> Path:
    """Write a placeholder model file of ``size`` bytes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"g" * size)
    return path


@pytest.fixture
def glb_tree(tmp_path: Path) -> Path:
    """
    Input tree with models at several depths plus files discovery must skip.

        input/root.glb
        input/models/a.glb
        input/models/nested/b.glb
        input/node_modules/pkg/vendored.glb
        input/compressed/old.glb
        input/readme.txt
    """
    root = tmp_path / "input"
    write_glb(root / "root.glb", 2048)
    write_glb(root / "models" / "a.glb", 4096)
    write_glb(root / "models" / "nested" / "b.glb", 1024)
    write_glb(root / "node_modules" / "pkg" / "vendored.glb")
    write_glb(root / "compressed" / "old.glb")
    (root / "readme.txt").write_text("not a model")
    return root


def make_fake_optimizer(
    fail_names: set[str] | None = None,
    ratio: float = 0.5,
    write_output: bool = True,
) -> Callable[..., subprocess.CompletedProcess[str]]:
    """
    Build a ``subprocess.run`` replacement that mimics gltf-transform.

    Files whose name is in ``fail_names`` exit with code 1; all others get an
    output file ``ratio`` times the input size.
    """
    fail_names = fail_names or set()

    def fake_run(
        cmd: list[str], **kwargs: object
    ) -> subprocess.CompletedProcess[str]:
        idx = cmd.index("optimize")
        src, dst = Path(cmd[idx + 1]), Path(cmd[idx + 2])
        if src.name in fail_names:
            return subprocess.CompletedProcess(cmd, 1, "", f"cannot read {src.name}")
        if write_output:
            dst.write_bytes(b"o" * int(src.stat().st_size * ratio))
        return subprocess.CompletedProcess(cmd, 0, "", "")

    return fake_run


@pytest.fixture
def fake_optimizer() -> Callable[..., Callable[..., subprocess.CompletedProcess[str]]]:
    """Factory fixture around :func:`make_fake_optimizer`."""
    return make_fake_optimizer
