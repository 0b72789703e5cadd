"""Kernel build execution.

This module handles:
- Composing the parallel make invocation
- Running the build with output teed to the log
- Stale artifact removal and success detection
"""

from stream_kbuild.builds.runner import BuildResult

__all__ = ["BuildResult"]
