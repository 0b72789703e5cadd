"""Configuration settings for stream_kbuild.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_logs_dir() -> Path:
    """Return the default build log directory."""
    return Path.home() / ".local" / "share" / "stream-kbuild" / "logs"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the STREAM_KBUILD_
    prefix. The source and build directories have no default and must be
    provided before a build can start.
    """

    model_config = SettingsConfigDict(
        env_prefix="STREAM_KBUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    src_dir: str = Field(
        default="",
        description="Kernel source tree location (required)",
    )
    build_dir: str = Field(
        default="",
        description="Out-of-tree build output location (required)",
    )
    logs_dir: Path = Field(
        default_factory=_default_logs_dir,
        description="Directory for timestamped build logs",
    )

    # Build
    jobs: int | None = Field(
        default=None,
        ge=1,
        description="Parallel make jobs (uses CPU count if not set)",
    )

    # Host tuning
    device_model_path: Path = Field(
        default=Path("/proc/device-tree/model"),
        description="File holding the hardware model string",
    )
    governor_models: list[str] = Field(
        default_factory=lambda: ["Raspberry Pi"],
        description="Hardware models that get the performance CPU governor",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
