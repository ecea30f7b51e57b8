"""Wrapper for the gltf-transform optimizer CLI."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import TypeAlias

from glb_compressor.models import CompressOptions
from glb_compressor.utils.constants import DEFAULT_PROGRAM, OPTIMIZER_EXECUTABLE

# (success, message)
OptimizerResult: TypeAlias = tuple[bool, str]

# Always passed: mesh joining breaks some inputs
NO_JOIN_FLAG = "--no-join"


@dataclass(frozen=True)
class OptimizerCommand:
    """Program plus ordered arguments for one optimizer invocation."""

    program: tuple[str, ...]
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [*self.program, *self.args]

    def __str__(self) -> str:
        return " ".join(self.argv)


def find_optimizer() -> tuple[str, ...]:
    """Use a globally installed gltf-transform, else go through npx."""
    executable = shutil.which(OPTIMIZER_EXECUTABLE)
    if executable:
        return (executable,)
    return DEFAULT_PROGRAM


def build_command(
    input_path: str | Path,
    output_path: str | Path,
    options: CompressOptions,
    program: tuple[str, ...] = DEFAULT_PROGRAM,
) -> OptimizerCommand:
    """
    Build the gltf-transform invocation for one file.

    Args:
        input_path: Source model
        output_path: Destination for the optimized model
        options: Run options selecting which optimizations are enabled
        program: Executable (and leading arguments) to invoke

    Returns:
        The command; building it has no side effects.
    """
    args: list[str] = ["optimize", str(input_path), str(output_path)]
    if options.use_draco:
        args.extend(["--compress", "draco"])
    if options.use_texture_compression:
        args.extend(["--texture-compress", "webp"])
    if options.resize_textures:
        args.extend(["--texture-size", str(options.max_texture_size)])
    if options.use_mesh_simplification:
        args.append("--simplify")
        args.extend(["--simplify-ratio", str(options.preset.simplify_ratio)])
    args.append(NO_JOIN_FLAG)
    return OptimizerCommand(program=tuple(program), args=tuple(args))


def run_optimizer(
    command: OptimizerCommand,
    output_path: Path,
    timeout: float | None = None,
) -> OptimizerResult:
    """
    Execute the optimizer and block until it exits.

    Failures are reported in the result rather than raised.
    """
    try:
        result = subprocess.run(
            command.argv,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return False, f"{OPTIMIZER_EXECUTABLE} timed out after {timeout}s"
    except subprocess.SubprocessError as e:
        return False, f"{OPTIMIZER_EXECUTABLE} subprocess error: {e}"
    except OSError as e:
        return False, f"{OPTIMIZER_EXECUTABLE} could not be started ({command}): {e}"

    if result.returncode != 0:
        error_msg = result.stderr.strip() or result.stdout.strip() or "Unknown error"
        return (
            False,
            f"{OPTIMIZER_EXECUTABLE} exited with code {result.returncode}: {error_msg}",
        )
    if not output_path.exists():
        return False, f"{OPTIMIZER_EXECUTABLE} completed but output file not found"
    return True, "Success"
