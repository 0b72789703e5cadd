"""Config fragment selection and option overrides."""

from pathlib import Path

from stream_kbuild.types import ArchTarget, Variant

# Options turned off on every configured tree
DISABLED_OPTIONS: tuple[str, ...] = (
    "WERROR",
    "SECURITY_LOCKDOWN_LSM",
    "DEBUG_INFO_BTF",
    "DEBUG_INFO_BTF_MODULES",
)

FRAGMENT_FLAVOR = "debug"


def fragment_name(variant: Variant, target: ArchTarget) -> str:
    """Return the config fragment file name, e.g. kernel-5.14.0-aarch64-debug.config."""
    return f"kernel-{variant.kernel_version}-{target.rpm_arch}-{FRAGMENT_FLAVOR}.config"


def fragment_path(src_dir: Path, variant: Variant, target: ArchTarget) -> Path:
    """Return where dist-configs writes the fragment for this target."""
    return src_dir / "redhat" / "configs" / fragment_name(variant, target)


def compose_override_command(
    src_dir: Path,
    config_file: Path,
    disabled: tuple[str, ...] = DISABLED_OPTIONS,
) -> list[str]:
    """Compose the scripts/config invocation that disables options."""
    cmd = [str(src_dir / "scripts" / "config"), "--file", str(config_file)]
    for option in disabled:
        cmd.extend(["--disable", option])
    return cmd


__all__ = [
    "DISABLED_OPTIONS",
    "FRAGMENT_FLAVOR",
    "compose_override_command",
    "fragment_name",
    "fragment_path",
]
