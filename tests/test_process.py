"""Tests for process.py module.

Uses mocked subprocess so no external command runs.
"""

import io
import subprocess
from unittest.mock import MagicMock, patch

import pytest

from stream_kbuild.errors import COMMAND_FAILED, EXECUTION_ERROR, CommandError
from stream_kbuild.process import CommandRunner


class TestRun:
    """Tests for CommandRunner.run."""

    def test_success(self):
        with patch("stream_kbuild.process.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0)
            assert CommandRunner().run(["git", "status"]) == 0
            mock_run.assert_called_once_with(["git", "status"], cwd=None, check=False)

    def test_nonzero_raises(self):
        with patch("stream_kbuild.process.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=128)
            with pytest.raises(CommandError) as exc_info:
                CommandRunner().run(["git", "clone", "url", "dst"])
        assert exc_info.value.exit_code == 128
        assert exc_info.value.code == COMMAND_FAILED
        assert exc_info.value.cmd == ["git", "clone", "url", "dst"]

    def test_nonzero_without_check(self):
        with patch("stream_kbuild.process.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1)
            assert CommandRunner().run(["git", "am", "x.patch"], check=False) == 1

    def test_launch_failure(self):
        with patch(
            "stream_kbuild.process.subprocess.run",
            side_effect=FileNotFoundError("No such file"),
        ):
            with pytest.raises(CommandError) as exc_info:
                CommandRunner().run(["ctags", "-R"])
        assert exc_info.value.code == EXECUTION_ERROR
        assert exc_info.value.exit_code is None


class TestOutput:
    """Tests for CommandRunner.output."""

    def test_returns_stdout(self):
        with patch("stream_kbuild.process.subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(stdout="origin\nstable\n")
            assert CommandRunner().output(["git", "remote"]) == "origin\nstable\n"

    def test_failure(self):
        error = subprocess.CalledProcessError(2, ["gcc", "--version"])
        with patch("stream_kbuild.process.subprocess.run", side_effect=error):
            with pytest.raises(CommandError) as exc_info:
                CommandRunner().output(["gcc", "--version"])
        assert exc_info.value.exit_code == 2


class TestTee:
    """Tests for CommandRunner.tee."""

    def test_copies_output_and_returns_status(self):
        proc = MagicMock()
        proc.stdout = io.StringIO("line one\nline two\n")
        proc.wait.return_value = 2
        log_file = io.StringIO()
        echo = io.StringIO()

        with patch("stream_kbuild.process.subprocess.Popen", return_value=proc):
            code = CommandRunner().tee(["make", "-j4"], log_file, echo=echo)

        assert code == 2
        assert log_file.getvalue() == "line one\nline two\n"
        assert echo.getvalue() == "line one\nline two\n"

    def test_launch_failure(self):
        with patch(
            "stream_kbuild.process.subprocess.Popen",
            side_effect=OSError("exec format error"),
        ):
            with pytest.raises(CommandError) as exc_info:
                CommandRunner().tee(["make"], io.StringIO(), echo=io.StringIO())
        assert exc_info.value.code == EXECUTION_ERROR
