"""Thin CLI wrapper for stream_kbuild.

This module provides the command-line interface using Typer.
All build logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from stream_kbuild import __version__
from stream_kbuild.config import get_settings, print_settings_json

app = typer.Typer(
    name="kbuild",
    help="CentOS Stream kernel builder - clone, configure, patch and build",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def setup_logging(level: str) -> None:
    """Configure logging with a Rich handler on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"stream-kbuild version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """CentOS Stream kernel builder - clone, configure, patch and build."""
    setup_logging("DEBUG" if verbose else get_settings().log_level)


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings))
        return

    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print("[bold]Paths:[/bold]")
    console.print(f"  Source directory:    {settings.src_dir or '(not set)'}")
    console.print(f"  Build directory:     {settings.build_dir or '(not set)'}")
    console.print(f"  Logs directory:      {settings.logs_dir}")
    console.print()
    console.print("[bold]Build:[/bold]")
    console.print(f"  Jobs:                {settings.jobs or '(CPU count)'}")
    console.print(f"  Log level:           {settings.log_level}")
    console.print()
    console.print("[bold]Host tuning:[/bold]")
    console.print(f"  Device model file:   {settings.device_model_path}")
    console.print(f"  Governor models:     {', '.join(settings.governor_models)}")


@app.command()
def targets(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """List supported architectures and repositories."""
    from stream_kbuild.arch import ARCHITECTURES, NATIVE_ONLY
    from stream_kbuild.variants import VARIANTS

    if json_output:
        output = {
            "architectures": {
                name: {**entry, "native_only": name in NATIVE_ONLY}
                for name, entry in ARCHITECTURES.items()
            },
            "repositories": {
                key: {
                    "label": v.label,
                    "kernel_version": v.kernel_version,
                    "url": v.url,
                    "backport_remote": v.backport_remote.name,
                }
                for key, v in VARIANTS.items()
            },
        }
        console.print(json.dumps(output, indent=2))
        return

    console.print("[bold]Architectures:[/bold]")
    for name, entry in ARCHITECTURES.items():
        cross = "native only" if name in NATIVE_ONLY else entry["cross_prefix"]
        console.print(f"  [green]{name}[/green]  ARCH={entry['kernel_arch']}  ({cross})")
    console.print()
    console.print("[bold]Repositories:[/bold]")
    for key, v in VARIANTS.items():
        console.print(f"  [green]{key}[/green]  {v.label} ({v.kernel_version})")


@app.command()
def build(
    arch: Annotated[
        str,
        typer.Option("--arch", "-a", help="Target architecture: x86_64, arm64, riscv"),
    ] = "x86_64",
    repo: Annotated[
        str,
        typer.Option("--repo", "-r", help="Repository: c9s or c10s"),
    ] = "c9s",
    clone: Annotated[
        bool,
        typer.Option("--clone", "-c", help="Remove and re-clone the source tree"),
    ] = False,
    configure: Annotated[
        bool,
        typer.Option("--configure", "-f", help="Regenerate the build configuration"),
    ] = False,
    backport: Annotated[
        bool,
        typer.Option("--backport", "-b", help="Add stable and distro remotes on clone"),
    ] = False,
    menuconfig: Annotated[
        bool,
        typer.Option("--menuconfig", "-m", help="Run menuconfig after configuring"),
    ] = False,
    patches: Annotated[
        Path | None,
        typer.Option("--patches", "-p", help="Directory of *.patch files to apply"),
    ] = None,
    jobs: Annotated[
        int | None,
        typer.Option("--jobs", "-j", min=1, help="Parallel make jobs"),
    ] = None,
) -> None:
    """Clone, configure, patch and build the kernel.

    The source and build directories come from STREAM_KBUILD_SRC_DIR and
    STREAM_KBUILD_BUILD_DIR. Exit code is 0 only when the kernel image
    was produced.
    """
    from stream_kbuild.errors import KbuildError
    from stream_kbuild.options import resolve_options
    from stream_kbuild.pipeline import run_pipeline
    from stream_kbuild.process import CommandRunner
    from stream_kbuild.report import Reporter

    settings = get_settings()
    reporter = Reporter(console)
    try:
        options = resolve_options(
            settings,
            arch=arch,
            variant=repo,
            clone=clone,
            configure=configure,
            backport=backport,
            menuconfig=menuconfig,
            patches_dir=patches,
            jobs=jobs,
        )
    except KbuildError as e:
        reporter.error(e.message)
        raise typer.Exit(code=1) from None

    def prompt(question: str, default: str) -> str:
        return typer.prompt(question, default=default)

    exit_code = run_pipeline(
        options,
        settings,
        runner=CommandRunner(),
        reporter=reporter,
        prompt=prompt,
    )
    raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
