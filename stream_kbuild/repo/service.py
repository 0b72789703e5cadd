"""Repository provisioning service.

Re-clones the kernel source tree and optionally registers the remotes used
for backporting. Destroying an existing tree requires the user to type
'yes' exactly.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from typing import TYPE_CHECKING

from stream_kbuild.errors import AbortedError, FilesystemError
from stream_kbuild.repo.git import GitRepo
from stream_kbuild.variants import STABLE_REMOTE

if TYPE_CHECKING:
    from stream_kbuild.process import CommandRunner
    from stream_kbuild.types import BuildOptions, Remote

logger = logging.getLogger(__name__)

CONFIRM_WORD = "yes"
CONFIRM_DEFAULT = "no"

# Prompt callback: receives the question and the default answer.
Prompt = Callable[[str, str], str]


def confirm_destroy(options: BuildOptions, prompt: Prompt) -> bool:
    """Ask before removing the existing source and build directories."""
    question = (
        f"{options.src_dir} already exists. Remove it and "
        f"{options.build_dir} and clone again? Type '{CONFIRM_WORD}' to continue"
    )
    answer = prompt(question, CONFIRM_DEFAULT)
    return answer == CONFIRM_WORD


def backport_remotes(options: BuildOptions) -> list[Remote]:
    """Return the remotes registered for backporting."""
    return [STABLE_REMOTE, options.variant.backport_remote]


def setup_backport_remotes(repo: GitRepo, remotes: list[Remote]) -> list[str]:
    """Register and fetch backporting remotes.

    Existing remotes are kept as they are and only fetched.

    Returns:
        Names of the remotes that were newly added.
    """
    added: list[str] = []
    for remote in remotes:
        if repo.add_remote(remote.name, remote.url):
            added.append(remote.name)
        repo.fetch(remote.name)
        repo.fetch(remote.name, tags=True)
    return added


def provision_repository(
    options: BuildOptions,
    runner: CommandRunner,
    prompt: Prompt,
) -> GitRepo:
    """Clone the selected variant into the source directory.

    Args:
        options: Resolved build options.
        runner: Command runner for git.
        prompt: Interactive prompt used when the source tree exists.

    Returns:
        GitRepo for the fresh clone.

    Raises:
        AbortedError: If the user declines to remove the existing tree.
        FilesystemError: If the existing trees cannot be removed.
        CommandError: If clone or fetch fails.
    """
    if options.src_dir.exists():
        if not confirm_destroy(options, prompt):
            raise AbortedError(
                f"Not removing {options.src_dir}; clone aborted by user"
            )
        logger.info("Removing %s and %s", options.src_dir, options.build_dir)
        for path in (options.src_dir, options.build_dir):
            if not path.exists():
                continue
            try:
                shutil.rmtree(path)
            except OSError as e:
                raise FilesystemError(f"Cannot remove {path}: {e}", path=str(path)) from e

    repo = GitRepo(options.src_dir, runner)
    logger.info("Cloning %s into %s", options.variant.url, options.src_dir)
    repo.clone(options.variant.url)

    if options.backport:
        added = setup_backport_remotes(repo, backport_remotes(options))
        logger.info("Backport remotes added: %s", ", ".join(added) or "none")

    return repo


__all__ = [
    "CONFIRM_DEFAULT",
    "CONFIRM_WORD",
    "Prompt",
    "backport_remotes",
    "confirm_destroy",
    "provision_repository",
    "setup_backport_remotes",
]
