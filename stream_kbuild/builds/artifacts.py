"""Build artifact handling.

A build only counts as successful when make exits 0 and the target's
output file exists. Old outputs are removed before each build so that a
leftover file cannot be mistaken for a fresh one.
"""

import logging
from pathlib import Path

from stream_kbuild.arch import ARCHITECTURES
from stream_kbuild.types import ArchTarget

logger = logging.getLogger(__name__)

# Artifact that may also be written into the source tree
SOURCE_TREE_FALLBACK = "vmlinux"


def artifact_candidates(
    target: ArchTarget, build_dir: Path, src_dir: Path
) -> list[Path]:
    """Return the paths checked for the target's artifact, in order."""
    candidates = [build_dir / target.artifact]
    if target.artifact == SOURCE_TREE_FALLBACK:
        candidates.append(src_dir / SOURCE_TREE_FALLBACK)
    return candidates


def stale_artifacts(build_dir: Path, src_dir: Path) -> list[Path]:
    """Return the output paths of every known architecture."""
    paths: list[Path] = []
    for entry in ARCHITECTURES.values():
        path = build_dir / entry["artifact"]
        if path not in paths:
            paths.append(path)
    paths.append(src_dir / SOURCE_TREE_FALLBACK)
    return paths


def remove_stale_artifacts(build_dir: Path, src_dir: Path) -> list[Path]:
    """Delete outputs left by earlier builds.

    Returns:
        Paths that were removed.
    """
    removed: list[Path] = []
    for path in stale_artifacts(build_dir, src_dir):
        if path.is_file() or path.is_symlink():
            path.unlink()
            removed.append(path)
            logger.debug("Removed stale artifact %s", path)
    return removed


def find_artifact(target: ArchTarget, build_dir: Path, src_dir: Path) -> Path | None:
    """Return the produced artifact, or None if the build left nothing."""
    for path in artifact_candidates(target, build_dir, src_dir):
        if path.is_file():
            return path
    return None


__all__ = [
    "SOURCE_TREE_FALLBACK",
    "artifact_candidates",
    "find_artifact",
    "remove_stale_artifacts",
    "stale_artifacts",
]
