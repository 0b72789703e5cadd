"""Kernel configuration service.

Rebuilds the out-of-tree .config from the distribution's debug fragment:
fresh build directory, dist-configs, copy fragment, disable the fixed
override options, mrproper, olddefconfig and optionally menuconfig.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from stream_kbuild.builds.runner import compose_make_base
from stream_kbuild.errors import ConfigurationError, FilesystemError
from stream_kbuild.kconfig.fragments import compose_override_command, fragment_path

if TYPE_CHECKING:
    from stream_kbuild.process import CommandRunner
    from stream_kbuild.types import ArchTarget, BuildOptions

logger = logging.getLogger(__name__)

CTAGS_LANGUAGES = "C,C++,Asm,Make"
CTAGS_EXCLUDES: tuple[str, ...] = (
    "*.o",
    "*.ko",
    "*.a",
    "*.so",
    "*.cmd",
    "*.mod",
    "*.mod.c",
    "*.order",
    "*.symvers",
    ".git",
)
TAGS_FILE = "tags"


def reset_build_dir(build_dir: Path) -> None:
    """Remove and recreate the build directory.

    Raises:
        FilesystemError: If the directory cannot be removed or created.
    """
    try:
        if build_dir.exists():
            logger.info("Removing %s", build_dir)
            shutil.rmtree(build_dir)
        build_dir.mkdir(parents=True)
    except OSError as e:
        raise FilesystemError(
            f"Cannot reset build directory {build_dir}: {e}", path=str(build_dir)
        ) from e


def compose_ctags_command(src_dir: Path, build_dir: Path) -> list[str]:
    """Compose the ctags invocation indexing the source tree."""
    cmd = ["ctags", "-R", "-f", str(build_dir / TAGS_FILE)]
    cmd.append(f"--languages={CTAGS_LANGUAGES}")
    cmd.extend(f"--exclude={pattern}" for pattern in CTAGS_EXCLUDES)
    cmd.append(str(src_dir))
    return cmd


def generate_tags(src_dir: Path, build_dir: Path, runner: CommandRunner) -> Path:
    """Regenerate the ctags index inside the build directory.

    Raises:
        CommandError: If ctags fails.
    """
    runner.run(compose_ctags_command(src_dir, build_dir))
    return build_dir / TAGS_FILE


def configure_tree(
    options: BuildOptions,
    target: ArchTarget,
    runner: CommandRunner,
) -> Path:
    """Prepare the build directory configuration.

    Args:
        options: Resolved build options.
        target: Resolved architecture.
        runner: Command runner for make, scripts/config and ctags.

    Returns:
        Path of the config fragment that seeded the .config.

    Raises:
        ConfigurationError: If the source tree or fragment is missing.
        FilesystemError: If the build directory cannot be prepared.
        CommandError: If any make, scripts/config or ctags step fails.
    """
    src_dir = options.src_dir
    build_dir = options.build_dir
    if not src_dir.is_dir():
        raise ConfigurationError(f"Kernel source directory not found: {src_dir}")

    reset_build_dir(build_dir)

    runner.run(["make", "-C", str(src_dir), "dist-configs"])

    fragment = fragment_path(src_dir, options.variant, target)
    if not fragment.is_file():
        raise ConfigurationError(f"Config fragment not found: {fragment}")
    config_file = build_dir / ".config"
    try:
        shutil.copyfile(fragment, config_file)
    except OSError as e:
        raise FilesystemError(
            f"Cannot copy {fragment.name} to {config_file}: {e}", path=str(config_file)
        ) from e
    logger.info("Seeded %s from %s", config_file, fragment.name)

    runner.run(compose_override_command(src_dir, config_file))

    runner.run(compose_make_base(src_dir, target, cross=False) + ["mrproper"])
    runner.run(compose_make_base(src_dir, target, build_dir) + ["olddefconfig"])

    if options.menuconfig:
        runner.run(compose_make_base(src_dir, target, build_dir) + ["menuconfig"])

    generate_tags(src_dir, build_dir, runner)
    return fragment


__all__ = [
    "CTAGS_EXCLUDES",
    "CTAGS_LANGUAGES",
    "TAGS_FILE",
    "compose_ctags_command",
    "configure_tree",
    "generate_tags",
    "reset_build_dir",
]
