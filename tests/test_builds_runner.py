"""Tests for builds/runner.py module.

Tests build command composition and execution with a fake runner.
"""

import io

from stream_kbuild.arch import resolve_arch
from stream_kbuild.builds.runner import (
    BuildResult,
    compose_build_command,
    compose_make_base,
    format_duration,
    run_build,
)


class TestComposeMakeBase:
    def test_native(self, tmp_path):
        target = resolve_arch("x86_64", "x86_64")
        assert compose_make_base(tmp_path, target) == ["make", "-C", str(tmp_path), "ARCH=x86"]

    def test_out_of_tree_cross(self, tmp_path):
        target = resolve_arch("riscv", "x86_64")
        cmd = compose_make_base(tmp_path / "src", target, tmp_path / "build")
        assert f"O={tmp_path / 'build'}" in cmd
        assert "CROSS_COMPILE=riscv64-linux-gnu-" in cmd

    def test_cross_suppressed(self, tmp_path):
        target = resolve_arch("riscv", "x86_64")
        cmd = compose_make_base(tmp_path, target, cross=False)
        assert not any(c.startswith("CROSS_COMPILE=") for c in cmd)


class TestComposeBuildCommand:
    def test_native(self, tmp_path):
        target = resolve_arch("x86_64", "x86_64")
        cmd = compose_build_command(tmp_path / "src", tmp_path / "build", target, 8)
        assert cmd == [
            "make", "-C", str(tmp_path / "src"), f"O={tmp_path / 'build'}",
            "ARCH=x86", "-j8", "WERROR=0",
        ]

    def test_cross(self, tmp_path):
        target = resolve_arch("arm64", "x86_64")
        cmd = compose_build_command(tmp_path / "src", tmp_path / "build", target, 2)
        assert cmd[-1] == "CROSS_COMPILE=aarch64-linux-gnu-"
        assert "-j2" in cmd
        assert "WERROR=0" in cmd


class TestFormatDuration:
    def test_values(self):
        assert format_duration(0) == "0m 0s"
        assert format_duration(59.6) == "1m 0s"
        assert format_duration(3725) == "62m 5s"


class TestBuildResult:
    def test_success_needs_artifact(self, tmp_path):
        assert BuildResult(0, 1.0, "make").success is False
        assert BuildResult(0, 1.0, "make", artifact=tmp_path).success is True
        assert BuildResult(2, 1.0, "make", artifact=tmp_path).success is False


class TestRunBuild:
    def test_exit_code_and_log(self, runner):
        runner.build_exit = 2
        log_file = io.StringIO()

        result = run_build(["make", "-j4"], runner, log_file)

        assert result.exit_code == 2
        assert result.command == "make -j4"
        assert result.duration >= 0
        assert result.artifact is None
        assert "CC" in log_file.getvalue()
