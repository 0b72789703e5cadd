"""Narrow git adapter over CommandRunner."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stream_kbuild.process import CommandRunner

logger = logging.getLogger(__name__)


class GitRepo:
    """Git operations against a single working tree."""

    def __init__(self, path: Path, runner: CommandRunner) -> None:
        self.path = path
        self.runner = runner

    def _git(self, *args: str) -> list[str]:
        return ["git", "-C", str(self.path), *args]

    def clone(self, url: str) -> None:
        """Clone url into this repository's path."""
        self.runner.run(["git", "clone", url, str(self.path)])

    def remotes(self) -> list[str]:
        """Return the names of configured remotes."""
        output = self.runner.output(self._git("remote"))
        return [line.strip() for line in output.splitlines() if line.strip()]

    def has_remote(self, name: str) -> bool:
        return name in self.remotes()

    def add_remote(self, name: str, url: str) -> bool:
        """Register a remote unless it already exists.

        Returns:
            True if the remote was added, False if it was already present.
        """
        if self.has_remote(name):
            logger.info("Remote %s already exists, skipping add", name)
            return False
        self.runner.run(self._git("remote", "add", name, url))
        return True

    def fetch(self, remote: str, tags: bool = False) -> None:
        cmd = self._git("fetch", remote)
        if tags:
            cmd.append("--tags")
        self.runner.run(cmd)

    def am(self, patch: Path) -> bool:
        """Apply a mailbox patch as a commit.

        Returns:
            True if the patch applied cleanly.
        """
        return self.runner.run(self._git("am", str(patch)), check=False) == 0

    def am_abort(self) -> bool:
        """Abort an in-progress git am, restoring the original branch.

        Some am failures leave no session behind, so a failing abort is
        logged rather than raised.

        Returns:
            True if git accepted the abort.
        """
        code = self.runner.run(self._git("am", "--abort"), check=False)
        if code != 0:
            logger.warning("git am --abort exited with %d in %s", code, self.path)
        return code == 0


__all__ = ["GitRepo"]
