"""ChromaForge configuration.

Loads from a .env file or CHROMAFORGE_* environment variables.
Keying constants (mask colors, thresholds) live in chromaforge.core and are
not configurable at runtime.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CHROMAFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Logging ---
    log_level: str = "info"
    log_json: bool = False

    # --- Batch processing ---
    max_workers: int = Field(default=4, ge=1)  # Full-resolution buffers held at once
    default_padding: int = Field(default=0, ge=0)


def get_settings() -> Settings:
    """Factory function for settings."""
    return Settings()
