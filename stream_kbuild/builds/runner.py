"""Build runner for executing kbuild make commands.

This module handles:
- Composing `make` commands for the kernel tree
- Executing builds with output copied to the log file
- Measuring wall-clock build duration
"""

from __future__ import annotations

import logging
import shlex
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from stream_kbuild.process import CommandRunner
    from stream_kbuild.types import ArchTarget

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a build execution.

    Attributes:
        exit_code: Exit code of make itself.
        duration: Wall-clock duration in seconds.
        command: The command that was executed.
        artifact: Path of the produced artifact, if found.
    """

    exit_code: int
    duration: float
    command: str
    artifact: Path | None = None

    @property
    def success(self) -> bool:
        """Both make and the artifact check must succeed."""
        return self.exit_code == 0 and self.artifact is not None


def compose_make_base(
    src_dir: Path,
    target: ArchTarget,
    build_dir: Path | None = None,
    cross: bool = True,
) -> list[str]:
    """Compose the common part of every make invocation.

    Args:
        src_dir: Kernel source tree.
        target: Resolved architecture.
        build_dir: Out-of-tree output directory (O=), if any.
        cross: Include CROSS_COMPILE when the target needs it.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    cmd = ["make", "-C", str(src_dir)]
    if build_dir is not None:
        cmd.append(f"O={build_dir}")
    cmd.append(f"ARCH={target.kernel_arch}")
    if cross and target.cross_compile:
        cmd.append(f"CROSS_COMPILE={target.cross_compile}")
    return cmd


def compose_build_command(
    src_dir: Path,
    build_dir: Path,
    target: ArchTarget,
    jobs: int,
) -> list[str]:
    """Compose the parallel build command."""
    cmd = compose_make_base(src_dir, target, build_dir, cross=False)
    cmd.append(f"-j{jobs}")
    cmd.append("WERROR=0")
    if target.cross_compile:
        cmd.append(f"CROSS_COMPILE={target.cross_compile}")
    return cmd


def format_duration(seconds: float) -> str:
    """Format a duration as 'Xm Ys'."""
    minutes, secs = divmod(int(round(seconds)), 60)
    return f"{minutes}m {secs}s"


def run_build(
    cmd: list[str],
    runner: CommandRunner,
    log_file: TextIO,
) -> BuildResult:
    """Execute the build, appending its output to log_file.

    Args:
        cmd: Build command from compose_build_command.
        runner: Command runner.
        log_file: Open log file.

    Returns:
        BuildResult without the artifact filled in.

    Raises:
        CommandError: If make cannot be started.
    """
    cmd_str = shlex.join(cmd)
    logger.info("Executing build: %s", cmd_str)

    started = time.monotonic()
    exit_code = runner.tee(cmd, log_file)
    duration = time.monotonic() - started

    if exit_code != 0:
        logger.error("Build failed with exit code %d", exit_code)

    return BuildResult(exit_code=exit_code, duration=duration, command=cmd_str)


__all__ = [
    "BuildResult",
    "compose_build_command",
    "compose_make_base",
    "format_duration",
    "run_build",
]
