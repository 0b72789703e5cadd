"""Error definitions for stream_kbuild.

Every step of the build flow raises a subclass of KbuildError carrying a
stable code. The pipeline turns the first one it sees into exit status 1.
"""

from collections.abc import Sequence

# Error code constants
OPTIONS_ERROR = "options"
MISSING_TOOL = "missing_tool"
ARCH_ERROR = "arch"
ABORTED = "aborted"
COMMAND_FAILED = "command_failed"
EXECUTION_ERROR = "execution_error"
CONFIGURATION_ERROR = "configuration"
PATCH_ERROR = "patch_failed"
FILESYSTEM_ERROR = "filesystem"


class KbuildError(Exception):
    """Base exception for all fatal build-flow errors."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class OptionsError(KbuildError):
    """Invalid or missing invocation options."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=OPTIONS_ERROR)


class MissingToolError(KbuildError):
    """A required external command is not on PATH."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"Required tool not found in PATH: {tool}", MISSING_TOOL)
        self.tool = tool


class ArchError(KbuildError):
    """Unknown architecture or unsupported host/target combination."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ARCH_ERROR)


class AbortedError(KbuildError):
    """The user declined a destructive operation."""

    def __init__(self, message: str = "Aborted by user") -> None:
        super().__init__(message, code=ABORTED)


class CommandError(KbuildError):
    """An external command failed to start or exited non-zero."""

    def __init__(
        self,
        message: str,
        cmd: Sequence[str],
        exit_code: int | None = None,
        code: str = COMMAND_FAILED,
    ) -> None:
        super().__init__(message, code=code)
        self.cmd = list(cmd)
        self.exit_code = exit_code


class ConfigurationError(KbuildError):
    """Kernel configuration could not be prepared."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=CONFIGURATION_ERROR)


class PatchError(KbuildError):
    """Patch directory is empty or a patch failed to apply."""

    def __init__(self, message: str, patch: str | None = None) -> None:
        super().__init__(message, code=PATCH_ERROR)
        self.patch = patch


class FilesystemError(KbuildError):
    """A directory or file the run needs could not be created or removed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, code=FILESYSTEM_ERROR)
        self.path = path


__all__ = [
    "ABORTED",
    "ARCH_ERROR",
    "COMMAND_FAILED",
    "CONFIGURATION_ERROR",
    "EXECUTION_ERROR",
    "FILESYSTEM_ERROR",
    "MISSING_TOOL",
    "OPTIONS_ERROR",
    "PATCH_ERROR",
    "AbortedError",
    "ArchError",
    "CommandError",
    "ConfigurationError",
    "FilesystemError",
    "KbuildError",
    "MissingToolError",
    "OptionsError",
    "PatchError",
]
