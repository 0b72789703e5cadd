"""External command execution.

All git, make, ctags and cpupower invocations go through CommandRunner so
tests can swap in a recording fake. Launch failures and non-zero exits
are reported as CommandError.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO, cast

from stream_kbuild.errors import EXECUTION_ERROR, CommandError

logger = logging.getLogger(__name__)


class CommandRunner:
    """Run external commands with subprocess."""

    def run(
        self,
        cmd: Sequence[str],
        cwd: Path | None = None,
        check: bool = True,
    ) -> int:
        """Run a command attached to the current terminal.

        Args:
            cmd: Command and arguments.
            cwd: Working directory.
            check: Raise CommandError on a non-zero exit.

        Returns:
            Process exit code.

        Raises:
            CommandError: If the command cannot be started, or exits
                non-zero while check is set.
        """
        cmd_str = shlex.join(cmd)
        logger.info("Running: %s", cmd_str)
        try:
            result = subprocess.run(list(cmd), cwd=cwd, check=False)
        except OSError as e:
            raise CommandError(
                f"Failed to execute {cmd[0]}: {e}", cmd, code=EXECUTION_ERROR
            ) from e

        if check and result.returncode != 0:
            raise CommandError(
                f"Command failed with exit code {result.returncode}: {cmd_str}",
                cmd,
                exit_code=result.returncode,
            )
        return result.returncode

    def output(self, cmd: Sequence[str], cwd: Path | None = None) -> str:
        """Run a command and return its standard output.

        Raises:
            CommandError: If the command cannot be started or exits non-zero.
        """
        cmd_str = shlex.join(cmd)
        logger.debug("Capturing: %s", cmd_str)
        try:
            result = subprocess.run(
                list(cmd),
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise CommandError(
                f"Command failed with exit code {e.returncode}: {cmd_str}",
                cmd,
                exit_code=e.returncode,
            ) from e
        except OSError as e:
            raise CommandError(
                f"Failed to execute {cmd[0]}: {e}", cmd, code=EXECUTION_ERROR
            ) from e
        return result.stdout

    def tee(
        self,
        cmd: Sequence[str],
        log_file: TextIO,
        cwd: Path | None = None,
        echo: TextIO | None = None,
    ) -> int:
        """Run a command, copying combined stdout/stderr to a log file.

        Output is also echoed line by line to the terminal. The returned
        status is the command's own exit code.

        Args:
            cmd: Command and arguments.
            log_file: Open text file receiving the output.
            cwd: Working directory.
            echo: Stream to mirror output to (defaults to sys.stdout).

        Returns:
            Process exit code.

        Raises:
            CommandError: If the command cannot be started.
        """
        if echo is None:
            echo = sys.stdout

        logger.info("Running: %s", shlex.join(cmd))
        try:
            proc = subprocess.Popen(
                list(cmd),
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise CommandError(
                f"Failed to execute {cmd[0]}: {e}", cmd, code=EXECUTION_ERROR
            ) from e

        stdout = cast(TextIO, proc.stdout)
        with stdout:
            for line in stdout:
                log_file.write(line)
                echo.write(line)
        log_file.flush()
        return proc.wait()


__all__ = ["CommandRunner"]
