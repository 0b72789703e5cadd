"""Shared type definitions for stream_kbuild.

This module contains dataclasses shared across subpackages
to avoid circular imports.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArchTarget:
    """A resolved build target architecture.

    Attributes:
        name: Token given on the command line (e.g. 'arm64').
        kernel_arch: Value passed as ARCH= to kbuild.
        rpm_arch: Architecture name used in CentOS config fragment names.
        native_machine: platform.machine() value of a native host.
        cross_compile: CROSS_COMPILE prefix, empty for native builds.
        artifact: Expected output file, relative to the build directory.
    """

    name: str
    kernel_arch: str
    rpm_arch: str
    native_machine: str
    cross_compile: str
    artifact: str

    @property
    def is_cross(self) -> bool:
        return bool(self.cross_compile)

    @property
    def compiler(self) -> str:
        """Name of the C compiler for this target."""
        return f"{self.cross_compile}gcc"


@dataclass(frozen=True)
class Remote:
    """A named git remote."""

    name: str
    url: str


@dataclass(frozen=True)
class Variant:
    """A CentOS Stream kernel repository variant.

    Attributes:
        key: Short selector used on the command line (e.g. 'c9s').
        label: Human-readable label used in logs and log file names.
        kernel_version: Kernel version line encoded in config fragment names.
        url: Clone URL of the distribution kernel repository.
        backport_remote: Distribution remote registered for backporting.
    """

    key: str
    label: str
    kernel_version: str
    url: str
    backport_remote: Remote


@dataclass(frozen=True)
class BuildOptions:
    """Fully resolved invocation options."""

    arch: str
    variant: Variant
    src_dir: Path
    build_dir: Path
    logs_dir: Path
    jobs: int
    clone: bool = False
    configure: bool = False
    backport: bool = False
    menuconfig: bool = False
    patches_dir: Path | None = None


__all__ = [
    "ArchTarget",
    "BuildOptions",
    "Remote",
    "Variant",
]
