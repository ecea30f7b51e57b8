"""Tests for model file discovery."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from glb_compressor.discovery import discover_files


def _relative(files: list) -> list[str]:
    return [f.relative_path.as_posix() for f in files]


class TestDiscoverFiles:
    """Tests for discover_files function."""

    def test_finds_files_at_all_depths(self, glb_tree: Path) -> None:
        """Root-level and nested files should all be found."""
        files = discover_files(glb_tree)

        assert _relative(files) == [
            "models/a.glb",
            "models/nested/b.glb",
            "root.glb",
        ]

    def test_each_file_listed_once(self, glb_tree: Path) -> None:
        """Root files match both patterns but appear only once."""
        files = discover_files(glb_tree)
        paths = [f.absolute_path for f in files]

        assert len(paths) == len(set(paths))
        assert paths.count(glb_tree / "root.glb") == 1

    def test_sorted_by_absolute_path(self, glb_tree: Path) -> None:
        """Results are sorted lexicographically for determinism."""
        files = discover_files(glb_tree)
        paths = [str(f.absolute_path) for f in files]

        assert paths == sorted(paths)

    def test_paths_are_absolute_and_relative_to_root(self, glb_tree: Path) -> None:
        """Each entry carries its absolute path and its path below the root."""
        for f in discover_files(glb_tree):
            assert f.absolute_path.is_absolute()
            assert glb_tree / f.relative_path == f.absolute_path

    def test_skips_node_modules_and_output_dir(self, glb_tree: Path) -> None:
        """Vendored files and previous output should never be picked up."""
        names = [f.absolute_path.name for f in discover_files(glb_tree)]

        assert "vendored.glb" not in names
        assert "old.glb" not in names

    def test_custom_output_dir_name_is_excluded(self, glb_tree: Path) -> None:
        """Extra names are excluded on top of node_modules and compressed."""
        files = discover_files(glb_tree, exclude_dirs={"models"})

        assert _relative(files) == ["root.glb"]

    def test_default_output_name_always_excluded(self, glb_tree: Path) -> None:
        """compressed/ stays excluded when another output name is configured."""
        files = discover_files(glb_tree, exclude_dirs={"dist"})

        assert "compressed/old.glb" not in _relative(files)
        assert len(files) == 3

    def test_ignores_other_extensions(self, glb_tree: Path) -> None:
        """Only files with the target extension are returned."""
        assert all(f.absolute_path.suffix == ".glb" for f in discover_files(glb_tree))

    def test_upper_case_extension(self, tmp_path: Path) -> None:
        """The extension casing given by the caller is used for globbing."""
        (tmp_path / "SHIP.GLB").write_bytes(b"g")
        (tmp_path / "boat.glb").write_bytes(b"g")

        files = discover_files(tmp_path, extension=".GLB")

        assert _relative(files) == ["SHIP.GLB"]

    def test_custom_extension(self, tmp_path: Path) -> None:
        """The extension parameter selects which files are found."""
        (tmp_path / "scene.gltf").write_text("{}")
        (tmp_path / "scene.glb").write_bytes(b"g")

        files = discover_files(tmp_path, extension=".gltf")

        assert _relative(files) == ["scene.gltf"]

    def test_directory_named_like_model_is_ignored(self, tmp_path: Path) -> None:
        """Directories matching the pattern are not files."""
        (tmp_path / "weird.glb").mkdir()

        assert discover_files(tmp_path) == []

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty root yields an empty list, not an error."""
        assert discover_files(tmp_path) == []

    def test_lists_files_for_operator(
        self, glb_tree: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Discovery prints the count and each relative path."""
        discover_files(glb_tree)
        out = capsys.readouterr().out

        assert "Found 3 files" in out
        assert "models/nested/b.glb" in out


class TestPatternFailures:
    """A failing glob pattern must not abort discovery."""

    def test_failing_pattern_is_skipped(
        self, glb_tree: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """If the recursive pattern fails, direct children are still found."""
        from glb_compressor import discovery

        original = discovery._glob_pattern

        def flaky(root: Path, pattern: str) -> list[Path]:
            if pattern.startswith("**"):
                raise PermissionError("denied")
            return original(root, pattern)

        with patch.object(discovery, "_glob_pattern", side_effect=flaky):
            files = discover_files(glb_tree)

        assert _relative(files) == ["root.glb"]
        assert "failed" in capsys.readouterr().out

    def test_all_patterns_failing_gives_empty_result(self, tmp_path: Path) -> None:
        """With every pattern failing and no fallback dir, result is empty."""
        from glb_compressor import discovery

        with patch.object(
            discovery, "_glob_pattern", side_effect=OSError("broken")
        ):
            assert discover_files(tmp_path) == []


class TestFallbackDirectory:
    """Tests for the models/ fallback scan."""

    def test_fallback_used_when_globs_find_nothing(self, tmp_path: Path) -> None:
        """models/ is scanned directly when globbing returns nothing."""
        from glb_compressor import discovery

        models = tmp_path / "models"
        models.mkdir()
        (models / "Upper.GLB").write_bytes(b"g")
        (models / "lower.glb").write_bytes(b"g")
        (models / "notes.txt").write_text("x")
        (models / "sub").mkdir()
        (models / "sub" / "deep.glb").write_bytes(b"g")

        with patch.object(discovery, "_glob_pattern", return_value=[]):
            files = discover_files(tmp_path)

        assert _relative(files) == ["models/Upper.GLB", "models/lower.glb"]

    def test_fallback_not_used_when_globs_match(self, glb_tree: Path) -> None:
        """The fallback does not add duplicates to a non-empty result."""
        files = discover_files(glb_tree)

        assert len(files) == 3

    def test_fallback_listing_error_is_swallowed(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An unreadable fallback directory yields no files and a warning."""
        from glb_compressor import discovery

        (tmp_path / "models").mkdir()

        with (
            patch.object(discovery, "_glob_pattern", return_value=[]),
            patch.object(Path, "iterdir", side_effect=PermissionError("denied")),
        ):
            files = discover_files(tmp_path)

        assert files == []
        assert "Could not list" in capsys.readouterr().out
