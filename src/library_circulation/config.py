"""Configuration management for the library circulation desk.

Settings are read from the environment (prefix ``LIBRARY_CIRCULATION_``) and
an optional ``.env`` file, and validated with Pydantic v2:
1. Application metadata shown in the console banner
2. Reservation queue sizing
3. Logging verbosity
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LibraryConfig(BaseSettings):
    """Runtime configuration for the circulation desk and its console."""

    model_config = SettingsConfigDict(
        # Use LIBRARY_CIRCULATION_ prefix for all env vars
        env_prefix="LIBRARY_CIRCULATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application Metadata ===

    app_name: str = Field(
        default="library-circulation",
        description="Name shown in the console banner",
        pattern=r"^[a-z0-9-]+$",
    )

    app_version: str = Field(
        default="0.1.0",
        description="Application version",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Circulation Policy ===

    reservation_capacity: int = Field(
        default=10,
        description="Maximum number of patrons waiting on a single item",
        ge=1,
        le=100,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def effective_log_level(self) -> str:
        """Debug mode always wins over the configured level."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def banner(self) -> str:
        return f"{self.app_name} v{self.app_version}"


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LibraryConfig | None = None


def get_config() -> LibraryConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LibraryConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
