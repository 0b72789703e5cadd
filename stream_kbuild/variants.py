"""Known CentOS Stream kernel repositories and backport remotes."""

from stream_kbuild.types import Remote, Variant

CENTOS_STREAM_BASE = "https://gitlab.com/redhat/centos-stream/src/kernel"

# Mainline-equivalent remote registered for every variant
STABLE_REMOTE = Remote(
    name="stable",
    url="https://git.kernel.org/pub/scm/linux/kernel/git/stable/linux.git",
)

VARIANTS: dict[str, Variant] = {
    "c9s": Variant(
        key="c9s",
        label="centos-stream-9",
        kernel_version="5.14.0",
        url=f"{CENTOS_STREAM_BASE}/centos-stream-9.git",
        backport_remote=Remote(
            name="c10s",
            url=f"{CENTOS_STREAM_BASE}/centos-stream-10.git",
        ),
    ),
    "c10s": Variant(
        key="c10s",
        label="centos-stream-10",
        kernel_version="6.12.0",
        url=f"{CENTOS_STREAM_BASE}/centos-stream-10.git",
        backport_remote=Remote(
            name="ark",
            url="https://gitlab.com/cki-project/kernel-ark.git",
        ),
    ),
}

DEFAULT_VARIANT = "c9s"


def get_variant(key: str) -> Variant | None:
    """Look up a variant by its selector, or None if unknown."""
    return VARIANTS.get(key)


__all__ = [
    "CENTOS_STREAM_BASE",
    "DEFAULT_VARIANT",
    "STABLE_REMOTE",
    "VARIANTS",
    "get_variant",
]
