"""Sequential batch compression of every discovered model file."""

from __future__ import annotations

from glb_compressor.discovery import discover_files
from glb_compressor.models import (
    BatchStats,
    CompressionResult,
    CompressOptions,
    DiscoveredFile,
    compression_ratio,
)
from glb_compressor.paths import ensure_parent_dir, resolve_output_path
from glb_compressor.utils.gltf_transform import (
    build_command,
    find_optimizer,
    run_optimizer,
)
from glb_compressor.utils.logging import (
    bright_cyan,
    bright_green,
    bright_red,
    bright_yellow,
    cyan,
    dim,
    format_file_size,
    log_detail,
    log_error,
    log_info,
    log_ok,
    log_warn,
    print_header,
    print_section,
)


class GlbCompressorError(Exception):
    """Base class for errors raised by glb-compressor."""


class OutputDirectoryError(GlbCompressorError):
    """The output root could not be created. Aborts the whole run."""


class WatchModeNotSupportedError(GlbCompressorError, NotImplementedError):
    """Watch mode is accepted on the command line but not implemented."""


class BatchCompressor:
    """
    Compress every model under ``options.input_dir`` into ``options.output_dir``.

    Files are processed one at a time in discovery order. A failing file is
    counted and reported, and the batch moves on to the next one. Constructed
    without options it runs with all defaults.
    """

    def __init__(
        self,
        options: CompressOptions | None = None,
        *,
        program: tuple[str, ...] | None = None,
    ) -> None:
        self.options = options if options is not None else CompressOptions()
        self.program = program if program is not None else find_optimizer()
        self.stats = BatchStats()
        self.results: list[CompressionResult] = []

    def ensure_output_dir(self) -> None:
        output_dir = self.options.output_dir
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(
                f"Cannot create output directory {output_dir}: {e}"
            ) from e
        log_ok(f"Output directory ready: {output_dir}")

    def discover(self) -> list[DiscoveredFile]:
        return discover_files(
            self.options.input_dir,
            extension=self.options.extension,
            exclude_dirs={self.options.output_dir.absolute().name},
        )

    def compress_file(self, file: DiscoveredFile) -> CompressionResult:
        """Compress a single file. Never raises for per-file failures."""
        opts = self.options
        log_info(f"Compressing {cyan(str(file.relative_path))}")

        try:
            output_path = resolve_output_path(
                file.absolute_path, opts.input_dir, opts.output_dir
            )
            ensure_parent_dir(output_path)
        except (OSError, ValueError) as e:
            return self._fail(file, f"Cannot prepare output path: {e}")

        command = build_command(file.absolute_path, output_path, opts, self.program)
        success, message = run_optimizer(command, output_path, timeout=opts.timeout)
        if not success:
            return self._fail(file, message)

        try:
            input_size = file.absolute_path.stat().st_size
            output_size = output_path.stat().st_size
        except OSError as e:
            return self._fail(file, f"Cannot measure file sizes: {e}")

        ratio = compression_ratio(input_size, output_size)
        self.stats.succeeded += 1
        log_ok(f"Compressed {file.relative_path}")
        log_detail(
            dim(
                f"{format_file_size(input_size)} -> {format_file_size(output_size)}"
            )
            + f" ({bright_cyan(f'{ratio}%')} saved)"
        )
        return CompressionResult(
            file=file,
            success=True,
            input_size=input_size,
            output_size=output_size,
            ratio=ratio,
        )

    def _fail(self, file: DiscoveredFile, message: str) -> CompressionResult:
        self.stats.failed += 1
        log_error(f"Failed: {file.relative_path}")
        log_detail(bright_red(message))
        return CompressionResult(file=file, success=False, error=message)

    def run(self) -> BatchStats:
        """
        Run the batch and return the final statistics.

        Raises:
            OutputDirectoryError: if the output root cannot be created.
                No file is processed in that case.
        """
        opts = self.options
        self.stats = BatchStats()
        self.results = []

        print_header("Batch GLB compression")
        log_detail(dim(f"Input:   {opts.input_dir}"))
        log_detail(dim(f"Output:  {opts.output_dir}"))
        log_detail(dim(f"Quality: {opts.quality.value}"))

        self.ensure_output_dir()

        files = self.discover()
        self.stats.total = len(files)
        if not files:
            log_warn("No GLB files found")
            return self.stats

        for file in files:
            self.stats.processed += 1
            self.results.append(self.compress_file(file))

        self.print_stats()
        return self.stats

    def print_stats(self) -> None:
        stats = self.stats
        print_section("Compression summary")
        log_detail(f"Total:     {stats.total}")
        log_detail(f"Succeeded: {bright_green(str(stats.succeeded))}")
        log_detail(f"Failed:    {bright_red(str(stats.failed))}")
        log_detail(f"Skipped:   {bright_yellow(str(stats.skipped))}")

        saved = sum(r.input_size - r.output_size for r in self.results if r.success)
        saved = max(0, saved)
        if stats.succeeded > 0:
            log_ok(f"Compression complete, saved {format_file_size(saved)}")
        else:
            log_error("No files were compressed successfully")

    def watch(self) -> None:
        raise WatchModeNotSupportedError("Watch mode is not supported yet")

