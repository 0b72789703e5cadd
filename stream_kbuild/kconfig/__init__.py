"""Kernel configuration.

This module handles:
- Selecting the CentOS debug config fragment for a target
- Applying fixed option overrides with scripts/config
- Normalizing the configuration with olddefconfig
- Regenerating the ctags index
"""
