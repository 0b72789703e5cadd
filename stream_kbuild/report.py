"""Terminal and log file reporting.

Reporter is the single sink for user-facing output: colored status lines
on a Rich console, plus the header and summary written into the build log.
"""

from __future__ import annotations

import itertools
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

from stream_kbuild.errors import FilesystemError

if TYPE_CHECKING:
    from stream_kbuild.builds.runner import BuildResult
    from stream_kbuild.types import ArchTarget, BuildOptions

SEPARATOR = "# " + "=" * 70


def log_file_name(label: str, now: datetime, suffix: int | None = None) -> str:
    """Return the log file name, e.g. centos-stream-9-20260101-1200.log.

    A suffix distinguishes runs started within the same minute
    (centos-stream-9-20260101-1200-2.log).
    """
    stamp = f"{label}-{now:%Y%m%d-%H%M}"
    if suffix is not None:
        stamp = f"{stamp}-{suffix}"
    return f"{stamp}.log"


class Reporter:
    """Colored terminal output plus an append-only log file."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console()
        self.log_path: Path | None = None

    # Terminal

    def info(self, message: str) -> None:
        self.console.print(f"[blue]{escape(message)}[/blue]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error and record it in the log if one is open."""
        self.console.print(f"[bold red]Error:[/bold red] [red]{escape(message)}[/red]")
        if self.log_path is not None:
            self.log(f"# ERROR: {message}")

    # Log file

    def open_log(self, logs_dir: Path, label: str, now: datetime | None = None) -> Path:
        """Create a new timestamped log file and make it current.

        An existing log for the same minute is never reused; the name gets
        a numeric suffix instead.

        Raises:
            FilesystemError: If the logs directory or file cannot be created.
        """
        if now is None:
            now = datetime.now()
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            path = logs_dir / log_file_name(label, now)
            for suffix in itertools.count(2):
                try:
                    path.open("x").close()
                    break
                except FileExistsError:
                    path = logs_dir / log_file_name(label, now, suffix)
        except OSError as e:
            raise FilesystemError(
                f"Cannot create log file in {logs_dir}: {e}", path=str(logs_dir)
            ) from e
        self.log_path = path
        return path

    def log(self, line: str) -> None:
        if self.log_path is None:
            return
        with self.log_path.open("a") as log_file:
            log_file.write(line + "\n")

    def write_header(
        self,
        options: BuildOptions,
        target: ArchTarget,
        command: str,
        compiler: str,
        fragment: Path | None = None,
        now: datetime | None = None,
    ) -> None:
        """Write the run description at the top of the log."""
        if now is None:
            now = datetime.now()
        self.log(f"# Repository: {options.variant.label}")
        self.log(f"# Date: {now.isoformat(timespec='seconds')}")
        self.log(f"# Compiler: {compiler}")
        self.log(f"# Source: {options.src_dir}")
        self.log(f"# Build: {options.build_dir}")
        self.log(f"# Arch: {target.name} (ARCH={target.kernel_arch})")
        if fragment is not None:
            self.log(f"# Config: {fragment}")
        self.log(f"# Command: {command}")
        self.log(SEPARATOR)
        self.log("")

    def write_footer(self, result: BuildResult, duration: str) -> None:
        """Append the build summary to the log."""
        self.log("")
        self.log(SEPARATOR)
        self.log(f"# Build time: {duration}")
        self.log(f"# Exit code: {result.exit_code}")
        self.log(f"# Artifact: {result.artifact or 'missing'}")
        self.log(f"# Result: {'SUCCESS' if result.success else 'FAILED'}")


__all__ = ["SEPARATOR", "Reporter", "log_file_name"]
