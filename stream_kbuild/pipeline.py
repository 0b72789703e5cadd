"""End-to-end kernel build flow.

Runs the steps in order: tool check, architecture resolution, optional
clone, optional configure, optional patching and the build itself. Each
step either completes or raises a KbuildError; the first error (or a
stray OSError) ends the run with exit status 1.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from stream_kbuild.arch import resolve_arch
from stream_kbuild.builds.artifacts import find_artifact, remove_stale_artifacts
from stream_kbuild.builds.runner import (
    BuildResult,
    compose_build_command,
    format_duration,
    run_build,
)
from stream_kbuild.errors import CommandError, KbuildError
from stream_kbuild.host import check_required_tools, tune_cpu_governor
from stream_kbuild.kconfig.service import configure_tree
from stream_kbuild.patches.service import apply_patches
from stream_kbuild.repo.service import Prompt, provision_repository

if TYPE_CHECKING:
    from stream_kbuild.config import Settings
    from stream_kbuild.process import CommandRunner
    from stream_kbuild.report import Reporter
    from stream_kbuild.types import ArchTarget, BuildOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def compiler_version(runner: CommandRunner, target: ArchTarget) -> str:
    """Return the first line of `gcc --version` for the target compiler."""
    try:
        output = runner.output([target.compiler, "--version"])
    except CommandError as e:
        logger.warning("Could not read compiler version: %s", e.message)
        return "unknown"
    lines = output.splitlines()
    return lines[0].strip() if lines else "unknown"


def build_kernel(
    options: BuildOptions,
    target: ArchTarget,
    settings: Settings,
    runner: CommandRunner,
    reporter: Reporter,
    fragment: Path | None = None,
) -> BuildResult:
    """Run the build and record it in a fresh log file.

    Raises:
        CommandError: If make cannot be started.
        FilesystemError: If the log file cannot be created.
    """
    removed = remove_stale_artifacts(options.build_dir, options.src_dir)
    if removed:
        logger.info("Removed %d stale artifact(s)", len(removed))

    tune_cpu_governor(runner, settings.device_model_path, settings.governor_models)

    cmd = compose_build_command(
        options.src_dir, options.build_dir, target, options.jobs
    )
    log_path = reporter.open_log(options.logs_dir, options.variant.label)
    reporter.write_header(
        options,
        target,
        command=shlex.join(cmd),
        compiler=compiler_version(runner, target),
        fragment=fragment,
    )
    mode = f"cross, {target.cross_compile}" if target.is_cross else "native"
    reporter.info(f"Building {target.name} kernel ({mode}), log: {log_path}")

    with log_path.open("a") as log_file:
        result = run_build(cmd, runner, log_file)

    result.artifact = find_artifact(target, options.build_dir, options.src_dir)
    duration = format_duration(result.duration)
    reporter.write_footer(result, duration)

    if result.success:
        reporter.success(f"Build succeeded in {duration}: {result.artifact}")
    elif result.exit_code != 0:
        reporter.error(f"Build failed with exit code {result.exit_code} after {duration}")
    else:
        reporter.error(f"Build finished but {target.artifact} was not produced")
    return result


def run_pipeline(
    options: BuildOptions,
    settings: Settings,
    runner: CommandRunner,
    reporter: Reporter,
    prompt: Prompt,
    machine: str | None = None,
    which: Callable[[str], str | None] | None = None,
) -> int:
    """Run the whole flow.

    Args:
        options: Resolved build options.
        settings: Loaded settings (host tuning).
        runner: Command runner for every external tool.
        reporter: Output sink.
        prompt: Interactive prompt for destructive confirmation.
        machine: Host machine name; detected when not given.
        which: PATH lookup used for the tool checks.

    Returns:
        0 if the kernel was built, 1 otherwise.
    """
    try:
        check_required_tools(which=which)
        target = resolve_arch(options.arch, machine)
        check_required_tools([target.compiler], which=which)

        if options.clone:
            reporter.info(f"Cloning {options.variant.label} into {options.src_dir}")
            provision_repository(options, runner, prompt)

        fragment: Path | None = None
        if options.configure:
            reporter.info(f"Configuring {options.build_dir} for {target.name}")
            fragment = configure_tree(options, target, runner)

        if options.patches_dir is not None:
            if options.patches_dir.is_dir():
                reporter.info(f"Applying patches from {options.patches_dir}")
                applied = apply_patches(options.patches_dir, options.src_dir, runner)
                reporter.success(f"Applied {len(applied)} patch(es)")
            else:
                reporter.warning(
                    f"Patches directory {options.patches_dir} not found, skipping"
                )

        result = build_kernel(options, target, settings, runner, reporter, fragment)
    except KbuildError as e:
        logger.debug("Run stopped: %s (%s)", e.message, e.code)
        reporter.error(e.message)
        return EXIT_FAILURE
    except OSError as e:
        logger.debug("Run stopped by filesystem error", exc_info=True)
        reporter.error(f"Filesystem error: {e}")
        return EXIT_FAILURE

    return EXIT_SUCCESS if result.success else EXIT_FAILURE


__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "build_kernel",
    "compiler_version",
    "run_pipeline",
]
