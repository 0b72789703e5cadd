"""Kernel repository provisioning.

This module handles:
- Destructive re-cloning with confirmation
- Registering and fetching backporting remotes
"""

from stream_kbuild.repo.git import GitRepo

__all__ = ["GitRepo"]
