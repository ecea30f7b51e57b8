"""Command-line interface for batch GLB compression."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path, PurePosixPath
from typing import Annotated

import typer
from rich.console import Console

from glb_compressor.batch import (
    BatchCompressor,
    GlbCompressorError,
    WatchModeNotSupportedError,
)
from glb_compressor.models import CompressOptions, Quality
from glb_compressor.utils.constants import (
    DEFAULT_EXTENSION,
    DEFAULT_INPUT_DIR,
    DEFAULT_MAX_TEXTURE_SIZE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PATTERN,
)
from glb_compressor.utils.logging import timed

try:
    __version__ = version("glb-compressor")
except PackageNotFoundError:
    __version__ = "unknown"

app = typer.Typer(
    name="glb-compressor",
    help="Compress every GLB file in a directory tree with gltf-transform",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        print(f"glb-compressor {__version__}")
        raise typer.Exit()


def extension_from_pattern(pattern: str) -> str:
    """
    Derive the target file extension from a ``--pattern`` glob.

    Discovery always searches the input root and all of its subdirectories,
    so only the suffix of the pattern is honored.
    """
    name = PurePosixPath(pattern.replace("\\", "/")).name
    suffix = PurePosixPath(name).suffix
    if not suffix or any(ch in suffix for ch in "*?[{"):
        console.print(
            f"[bold yellow][WARN][/] Pattern {pattern!r} has no file extension, "
            f"using {DEFAULT_EXTENSION}"
        )
        return DEFAULT_EXTENSION
    if name != f"*{suffix}" or pattern not in (name, f"**/{name}"):
        console.print(
            f"[bold yellow][WARN][/] Only the extension of pattern {pattern!r} "
            f"is used ({suffix})"
        )
    return suffix


@app.command()
def compress(
    input_dir: Annotated[
        Path,
        typer.Option(
            "--input",
            "-i",
            help="Input directory to search for GLB files",
            rich_help_panel="Core Options",
        ),
    ] = Path(DEFAULT_INPUT_DIR),
    output_dir: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output directory (mirrors the input tree)",
            rich_help_panel="Core Options",
        ),
    ] = Path(DEFAULT_OUTPUT_DIR),
    pattern: Annotated[
        str,
        typer.Option(
            "--pattern",
            "-p",
            help="File pattern; only its extension selects files",
            rich_help_panel="Core Options",
        ),
    ] = DEFAULT_PATTERN,
    quality: Annotated[
        Quality,
        typer.Option(
            "--quality",
            "-q",
            help="Compression quality preset",
            rich_help_panel="Core Options",
        ),
    ] = Quality.medium,
    use_draco: Annotated[
        bool,
        typer.Option(
            "--draco/--no-draco",
            help="Enable/Disable Draco geometry compression",
            rich_help_panel="Compression & Textures",
        ),
    ] = True,
    use_texture: Annotated[
        bool,
        typer.Option(
            "--texture/--no-texture",
            help="Enable/Disable WebP texture compression",
            rich_help_panel="Compression & Textures",
        ),
    ] = True,
    use_mesh: Annotated[
        bool,
        typer.Option(
            "--mesh/--no-mesh",
            help="Enable/Disable mesh simplification",
            rich_help_panel="Compression & Textures",
        ),
    ] = True,
    resize: Annotated[
        bool,
        typer.Option(
            "--resize/--no-resize",
            help="Enable/Disable texture resizing",
            rich_help_panel="Compression & Textures",
        ),
    ] = True,
    max_texture_size: Annotated[
        int,
        typer.Option(
            "--max-texture-size",
            min=1,
            help="Max texture size in pixels",
            rich_help_panel="Compression & Textures",
        ),
    ] = DEFAULT_MAX_TEXTURE_SIZE,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            min=0.001,
            help="Per-file optimizer timeout in seconds (default: none)",
            rich_help_panel="Execution",
        ),
    ] = None,
    watch: Annotated[
        bool,
        typer.Option(
            "--watch",
            "-w",
            help="Watch for changes [italic](not supported yet)[/]",
            rich_help_panel="Execution",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """
    Compress all GLB files under a directory into a mirrored output tree.
    """
    try:
        options = CompressOptions(
            input_dir=input_dir,
            output_dir=output_dir,
            quality=quality,
            use_draco=use_draco,
            use_texture_compression=use_texture,
            use_mesh_simplification=use_mesh,
            resize_textures=resize,
            max_texture_size=max_texture_size,
            extension=extension_from_pattern(pattern),
            timeout=timeout,
        )
        compressor = BatchCompressor(options)

        if watch:
            compressor.watch()
            return

        with timed("Batch compression"):
            compressor.run()
    except WatchModeNotSupportedError as e:
        console.print(f"[bold yellow][WATCH][/] {e}")
    except (GlbCompressorError, ValueError) as e:
        console.print(f"[bold red][ERROR][/] {e}")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[bold red][ERROR][/] Unexpected error: {e}")
        raise typer.Exit(code=1) from e


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
