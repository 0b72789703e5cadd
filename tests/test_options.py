"""Tests for options.py module."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from stream_kbuild.config import Settings
from stream_kbuild.errors import OPTIONS_ERROR, OptionsError
from stream_kbuild.options import default_jobs, resolve_options


class TestResolveOptions:
    """Tests for resolve_options function."""

    def test_populates_options(self, settings):
        options = resolve_options(
            settings,
            arch="arm64",
            variant="c10s",
            clone=True,
            configure=True,
            backport=True,
            patches_dir=Path("/tmp/patches"),
            jobs=8,
        )
        assert options.arch == "arm64"
        assert options.variant.label == "centos-stream-10"
        assert options.src_dir == Path(settings.src_dir)
        assert options.build_dir == Path(settings.build_dir)
        assert options.logs_dir == settings.logs_dir
        assert options.jobs == 8
        assert options.clone and options.configure and options.backport
        assert options.menuconfig is False
        assert options.patches_dir == Path("/tmp/patches")

    def test_missing_src_dir(self, tmp_path):
        settings = Settings(src_dir="", build_dir=str(tmp_path / "build"))
        with pytest.raises(OptionsError) as exc_info:
            resolve_options(settings, arch="x86_64", variant="c9s")
        assert exc_info.value.code == OPTIONS_ERROR
        assert "STREAM_KBUILD_SRC_DIR" in exc_info.value.message

    def test_blank_build_dir(self, tmp_path):
        settings = Settings(src_dir=str(tmp_path / "src"), build_dir="   ")
        with pytest.raises(OptionsError, match="STREAM_KBUILD_BUILD_DIR"):
            resolve_options(settings, arch="x86_64", variant="c9s")

    def test_unknown_variant(self, settings):
        with pytest.raises(OptionsError, match="c8s"):
            resolve_options(settings, arch="x86_64", variant="c8s")

    def test_jobs_precedence(self, settings):
        """CLI jobs beat settings, settings beat CPU count."""
        tuned = settings.model_copy(update={"jobs": 6})
        assert resolve_options(tuned, "x86_64", "c9s", jobs=2).jobs == 2
        assert resolve_options(tuned, "x86_64", "c9s").jobs == 6
        with patch("stream_kbuild.options.os.cpu_count", return_value=12):
            assert resolve_options(settings, "x86_64", "c9s").jobs == 12

    def test_no_side_effects(self, settings):
        resolve_options(settings, arch="riscv", variant="c9s", clone=True)
        assert not Path(settings.src_dir).exists()
        assert not Path(settings.build_dir).exists()

    def test_warns_on_noop_flags(self, settings, caplog):
        with caplog.at_level(logging.WARNING):
            resolve_options(settings, "x86_64", "c9s", backport=True, menuconfig=True)
        assert "--backport" in caplog.text
        assert "--menuconfig" in caplog.text


class TestDefaultJobs:
    def test_cpu_count_unknown(self):
        with patch("stream_kbuild.options.os.cpu_count", return_value=None):
            assert default_jobs() == 1
