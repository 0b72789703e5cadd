"""stream-kbuild - clone, configure, patch and build CentOS Stream kernels.

This package orchestrates git, make, ctags and the kernel tree's own
helper scripts to produce a debug kernel build for a chosen architecture.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
