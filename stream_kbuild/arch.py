"""Target architecture resolution.

Maps an architecture token to the kbuild ARCH value, the cross-compiler
prefix and the artifact a successful build leaves behind.
"""

import logging
import platform

from stream_kbuild.errors import ArchError
from stream_kbuild.types import ArchTarget

logger = logging.getLogger(__name__)

# Targets that may only be built on a native host
NATIVE_ONLY = frozenset({"x86_64"})

ARCHITECTURES: dict[str, dict[str, str]] = {
    "x86_64": {
        "kernel_arch": "x86",
        "rpm_arch": "x86_64",
        "native_machine": "x86_64",
        "cross_prefix": "",
        "artifact": "vmlinux",
    },
    "arm64": {
        "kernel_arch": "arm64",
        "rpm_arch": "aarch64",
        "native_machine": "aarch64",
        "cross_prefix": "aarch64-linux-gnu-",
        "artifact": "arch/arm64/boot/Image",
    },
    "riscv": {
        "kernel_arch": "riscv",
        "rpm_arch": "riscv64",
        "native_machine": "riscv64",
        "cross_prefix": "riscv64-linux-gnu-",
        "artifact": "arch/riscv/boot/Image",
    },
}

_MACHINE_ALIASES = {
    "amd64": "x86_64",
    "arm64": "aarch64",
}


def host_machine() -> str:
    """Return the normalized machine name of the running host."""
    machine = platform.machine().lower()
    return _MACHINE_ALIASES.get(machine, machine)


def resolve_arch(token: str, machine: str | None = None) -> ArchTarget:
    """Resolve an architecture token for the given host.

    Args:
        token: Requested architecture ('x86_64', 'arm64' or 'riscv').
        machine: Host machine name; detected when not given.

    Returns:
        ArchTarget with cross_compile set when host and target differ.

    Raises:
        ArchError: If the token is unknown or the target cannot be
            built on this host.
    """
    entry = ARCHITECTURES.get(token)
    if entry is None:
        known = ", ".join(ARCHITECTURES)
        raise ArchError(f"Unknown architecture '{token}' (expected one of: {known})")

    if machine is None:
        machine = host_machine()
    machine = _MACHINE_ALIASES.get(machine, machine)

    native = machine == entry["native_machine"]
    if not native and token in NATIVE_ONLY:
        raise ArchError(
            f"Building {token} on a {machine} host is not supported; "
            f"no cross toolchain is assumed for {token}"
        )

    cross_compile = "" if native else entry["cross_prefix"]
    target = ArchTarget(
        name=token,
        kernel_arch=entry["kernel_arch"],
        rpm_arch=entry["rpm_arch"],
        native_machine=entry["native_machine"],
        cross_compile=cross_compile,
        artifact=entry["artifact"],
    )
    logger.debug(
        "Resolved arch %s on %s: ARCH=%s CROSS_COMPILE=%r",
        token,
        machine,
        target.kernel_arch,
        target.cross_compile,
    )
    return target


__all__ = ["ARCHITECTURES", "NATIVE_ONLY", "host_machine", "resolve_arch"]
