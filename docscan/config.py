"""Application configuration using pydantic-settings."""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"

    # Upload limits for the HTTP layer
    max_upload_bytes: int = 25 * 1024 * 1024
    max_output_pixels: int = 40_000_000

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    def validate_output_size(self, width: int, height: int) -> None:
        """Validate that a requested output image fits the configured pixel budget."""
        if width * height > self.max_output_pixels:
            raise ValueError(
                f"Requested output {width}x{height} exceeds the limit of "
                f"{self.max_output_pixels} pixels"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
