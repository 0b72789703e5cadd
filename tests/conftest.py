"""Shared fixtures for stream_kbuild tests.

External commands never run in tests: FakeRunner records every command
and returns scripted exit codes and output.
"""

import io
import shlex
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from stream_kbuild.config import Settings
from stream_kbuild.errors import CommandError
from stream_kbuild.report import Reporter
from stream_kbuild.types import BuildOptions
from stream_kbuild.variants import VARIANTS


class FakeRunner:
    """Recording stand-in for CommandRunner."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.failures: list[tuple[str, int]] = []
        self.outputs: dict[str, str] = {}
        self.build_exit = 0
        self.on_build: Callable[[], None] | None = None

    def fail_on(self, fragment: str, code: int = 1) -> None:
        """Make any command containing fragment exit with code."""
        self.failures.append((fragment, code))

    def _exit_code(self, cmd: list[str]) -> int:
        joined = shlex.join(cmd)
        for fragment, code in self.failures:
            if fragment in joined:
                return code
        return 0

    def run(self, cmd, cwd=None, check=True) -> int:
        cmd = list(cmd)
        self.calls.append(cmd)
        code = self._exit_code(cmd)
        if check and code != 0:
            raise CommandError(f"{cmd[0]} failed", cmd, exit_code=code)
        return code

    def output(self, cmd, cwd=None) -> str:
        cmd = list(cmd)
        self.calls.append(cmd)
        code = self._exit_code(cmd)
        if code != 0:
            raise CommandError(f"{cmd[0]} failed", cmd, exit_code=code)
        joined = shlex.join(cmd)
        for fragment, out in self.outputs.items():
            if fragment in joined:
                return out
        return ""

    def tee(self, cmd, log_file, cwd=None, echo=None) -> int:
        self.calls.append(list(cmd))
        log_file.write("  CC      init/main.o\n")
        if self.on_build is not None:
            self.on_build()
        return self.build_exit

    def joined(self) -> list[str]:
        return [shlex.join(c) for c in self.calls]


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(console_output) -> Reporter:
    return Reporter(Console(file=console_output, force_terminal=False, width=200))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        src_dir=str(tmp_path / "src"),
        build_dir=str(tmp_path / "build"),
        logs_dir=tmp_path / "logs",
        device_model_path=tmp_path / "model",
    )


@pytest.fixture
def make_options(tmp_path) -> Callable[..., BuildOptions]:
    """Factory for BuildOptions rooted in tmp_path."""

    def _make(**overrides) -> BuildOptions:
        values = {
            "arch": "x86_64",
            "variant": VARIANTS["c9s"],
            "src_dir": tmp_path / "src",
            "build_dir": tmp_path / "build",
            "logs_dir": tmp_path / "logs",
            "jobs": 4,
        }
        values.update(overrides)
        return BuildOptions(**values)

    return _make


def which_all(tool: str) -> str:
    """PATH lookup that finds every tool."""
    return f"/usr/bin/{tool}"


@pytest.fixture
def which() -> Callable[[str], str]:
    return which_all


@pytest.fixture
def src_tree(tmp_path) -> Path:
    """A minimal kernel source tree with a generated debug fragment."""
    src = tmp_path / "src"
    configs = src / "redhat" / "configs"
    configs.mkdir(parents=True)
    for rpm_arch in ("x86_64", "aarch64", "riscv64"):
        (configs / f"kernel-5.14.0-{rpm_arch}-debug.config").write_text(
            "CONFIG_WERROR=y\nCONFIG_DEBUG_INFO_BTF=y\n"
        )
    return src
