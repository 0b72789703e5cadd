"""Resolve command-line flags and settings into BuildOptions."""

import logging
import os
from pathlib import Path

from stream_kbuild.config import Settings
from stream_kbuild.errors import OptionsError
from stream_kbuild.types import BuildOptions
from stream_kbuild.variants import VARIANTS, get_variant

logger = logging.getLogger(__name__)


def default_jobs() -> int:
    """Return the host's available parallelism."""
    return os.cpu_count() or 1


def resolve_options(
    settings: Settings,
    arch: str,
    variant: str,
    clone: bool = False,
    configure: bool = False,
    backport: bool = False,
    menuconfig: bool = False,
    patches_dir: Path | None = None,
    jobs: int | None = None,
) -> BuildOptions:
    """Validate invocation flags against settings.

    Args:
        settings: Loaded settings supplying source/build directories.
        arch: Architecture token (validated later against the host).
        variant: Repository variant selector.
        clone: Re-clone the source tree.
        configure: Regenerate the build configuration.
        backport: Register backporting remotes while cloning.
        menuconfig: Launch menuconfig after configuring.
        patches_dir: Directory of *.patch files to apply.
        jobs: Parallel make jobs; overrides settings.jobs.

    Returns:
        BuildOptions instance.

    Raises:
        OptionsError: If a required setting is missing or the variant
            is unknown.
    """
    if not settings.src_dir.strip():
        raise OptionsError(
            "Kernel source directory is not set (STREAM_KBUILD_SRC_DIR)"
        )
    if not settings.build_dir.strip():
        raise OptionsError(
            "Kernel build directory is not set (STREAM_KBUILD_BUILD_DIR)"
        )

    resolved_variant = get_variant(variant)
    if resolved_variant is None:
        known = ", ".join(VARIANTS)
        raise OptionsError(f"Unknown repository '{variant}' (expected one of: {known})")

    if backport and not clone:
        logger.warning("--backport has no effect without --clone")
    if menuconfig and not configure:
        logger.warning("--menuconfig has no effect without --configure")

    return BuildOptions(
        arch=arch,
        variant=resolved_variant,
        src_dir=Path(settings.src_dir).expanduser(),
        build_dir=Path(settings.build_dir).expanduser(),
        logs_dir=settings.logs_dir,
        jobs=jobs or settings.jobs or default_jobs(),
        clone=clone,
        configure=configure,
        backport=backport,
        menuconfig=menuconfig,
        patches_dir=patches_dir,
    )


__all__ = ["default_jobs", "resolve_options"]
