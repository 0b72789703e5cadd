"""Apply a directory of mailbox patches to the source tree.

Patches are applied in lexical order. The first failure aborts the
in-progress `git am` so the tree is not left mid-apply, then stops the run.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from stream_kbuild.errors import PatchError
from stream_kbuild.repo.git import GitRepo

if TYPE_CHECKING:
    from stream_kbuild.process import CommandRunner

logger = logging.getLogger(__name__)

PATCH_PATTERN = "*.patch"


def collect_patches(patches_dir: Path) -> list[Path]:
    """Return the patch files in patches_dir in lexical order.

    Raises:
        PatchError: If the directory holds no patch files.
    """
    patches = sorted(p for p in patches_dir.glob(PATCH_PATTERN) if p.is_file())
    if not patches:
        raise PatchError(f"No {PATCH_PATTERN} files found in {patches_dir}")
    return patches


def apply_patches(
    patches_dir: Path,
    src_dir: Path,
    runner: CommandRunner,
) -> list[Path]:
    """Apply every patch in patches_dir with git am.

    Args:
        patches_dir: Directory of *.patch files.
        src_dir: Kernel source tree (git working tree).
        runner: Command runner for git.

    Returns:
        The patches that were applied.

    Raises:
        PatchError: If there are no patches or one fails to apply.
    """
    patches = collect_patches(patches_dir)
    repo = GitRepo(src_dir, runner)

    for patch in patches:
        logger.info("Applying %s", patch.name)
        if not repo.am(patch):
            repo.am_abort()
            raise PatchError(f"Failed to apply patch {patch.name}", patch=str(patch))

    logger.info("Applied %d patch(es)", len(patches))
    return patches


__all__ = ["PATCH_PATTERN", "apply_patches", "collect_patches"]
