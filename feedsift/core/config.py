"""Application configuration using Pydantic Settings.

Settings are loaded from environment variables or a .env file and validated
once on first access.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration.

    Example:
        >>> config = Config()
        >>> print(config.app_name)
        'FeedSift'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ============================================
    # Application Settings
    # ============================================
    app_name: str = Field(default="FeedSift", description="Application name")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development", description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )

    # ============================================
    # Source Store
    # ============================================
    sources_path: Path = Field(
        default=Path("config/feeds.yaml"),
        description="Source configuration document (YAML or JSON)",
    )
    items_per_source: int = Field(
        default=3, ge=1, le=50, description="Items kept per source after scoring"
    )

    # ============================================
    # Scoring Weight Overrides
    # ============================================
    weight_engagement: float = Field(default=0.3, ge=0, le=1)
    weight_recency: float = Field(default=0.25, ge=0, le=1)
    weight_topic_match: float = Field(default=0.25, ge=0, le=1)
    weight_quality: float = Field(default=0.15, ge=0, le=1)
    weight_source: float = Field(default=0.05, ge=0, le=1)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


# =============================================================================
# Singleton accessor
# =============================================================================

_config: Config | None = None


def get_config() -> Config:
    """Get the global Config singleton.

    Returns:
        The lazily created Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the cached Config so the next access re-reads the environment."""
    global _config
    _config = None
