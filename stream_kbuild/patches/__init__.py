"""Patch application with git am."""
