"""Host environment checks and tuning.

This module handles:
- Verifying required external tools are on PATH
- Detecting boards that benefit from the performance CPU governor
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from stream_kbuild.errors import CommandError, MissingToolError

if TYPE_CHECKING:
    from stream_kbuild.process import CommandRunner

logger = logging.getLogger(__name__)

REQUIRED_TOOLS: tuple[str, ...] = ("git", "make", "ctags")

GOVERNOR_CMD = ["cpupower", "frequency-set", "-g", "performance"]


def check_required_tools(
    tools: Iterable[str] = REQUIRED_TOOLS,
    which: Callable[[str], str | None] | None = None,
) -> None:
    """Ensure every tool resolves on PATH.

    Args:
        tools: Command names to look up.
        which: PATH lookup function; shutil.which when not given.

    Raises:
        MissingToolError: For the first tool that cannot be found.
    """
    if which is None:
        which = shutil.which
    for tool in tools:
        path = which(tool)
        if path is None:
            raise MissingToolError(tool)
        logger.debug("Found %s at %s", tool, path)


def read_device_model(model_path: Path) -> str | None:
    """Read the device-tree hardware model string, if the host has one."""
    try:
        raw = model_path.read_bytes()
    except OSError:
        return None
    # device-tree strings are NUL terminated
    return raw.rstrip(b"\x00").decode("utf-8", errors="replace").strip() or None


def matching_model(model: str | None, models: Iterable[str]) -> str | None:
    """Return the first configured model contained in the host model."""
    if not model:
        return None
    for candidate in models:
        if candidate and candidate in model:
            return candidate
    return None


def tune_cpu_governor(
    runner: CommandRunner,
    model_path: Path,
    models: Iterable[str],
) -> bool:
    """Switch to the performance governor on matching hardware.

    Args:
        runner: Command runner used to invoke cpupower.
        model_path: Path of the device-tree model file.
        models: Model substrings that enable tuning.

    Returns:
        True if the governor was changed.
    """
    model = read_device_model(model_path)
    if matching_model(model, models) is None:
        return False

    if shutil.which(GOVERNOR_CMD[0]) is None:
        logger.warning("%s detected but cpupower is not installed", model)
        return False

    logger.info("%s detected, setting performance CPU governor", model)
    try:
        runner.run(GOVERNOR_CMD)
    except CommandError as e:
        logger.warning("Could not set CPU governor: %s", e.message)
        return False
    return True


__all__ = [
    "GOVERNOR_CMD",
    "REQUIRED_TOOLS",
    "check_required_tools",
    "matching_model",
    "read_device_model",
    "tune_cpu_governor",
]
