"""Scoring configuration models."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, model_validator

from feedsift.config.validators import validate_weights_sum

if TYPE_CHECKING:
    from feedsift.core.config import Config


class ScoringWeights(BaseModel):
    """Weights for each score component.

    All weights must sum to 1.0. The `source` component is a raw multiplier
    rather than a 0-1 score, but its weight still counts toward the sum.
    """

    model_config = ConfigDict(frozen=True)

    engagement: float = Field(default=0.3, ge=0, le=1)
    recency: float = Field(default=0.25, ge=0, le=1)
    topic_match: float = Field(default=0.25, ge=0, le=1)
    quality: float = Field(default=0.15, ge=0, le=1)
    source: float = Field(default=0.05, ge=0, le=1)

    @model_validator(mode="after")
    def check_weights_sum(self) -> "ScoringWeights":
        """Validate that all weights sum to 1.0."""
        validate_weights_sum(self.model_dump())
        return self

    @classmethod
    def from_settings(cls, config: "Config") -> "ScoringWeights":
        """Build weights from WEIGHT_* environment overrides."""
        return cls(
            engagement=config.weight_engagement,
            recency=config.weight_recency,
            topic_match=config.weight_topic_match,
            quality=config.weight_quality,
            source=config.weight_source,
        )


class ScoringConfig(BaseModel):
    """Configuration for item scoring.

    All fields have defaults - can be used without any configuration.
    """

    weights: ScoringWeights = Field(default_factory=ScoringWeights)

    # Topic-match pool multipliers
    high_priority_weight: float = Field(default=0.4)
    medium_priority_weight: float = Field(default=0.2)
    source_topic_weight: float = Field(default=0.3)
    interest_weight: float = Field(default=0.1)
    exclude_penalty: float = Field(default=0.5)

    # Quality thresholds
    min_video_seconds: int = Field(default=300, ge=0)
    max_video_seconds: int = Field(default=3600, ge=0)
    high_upvote_ratio: float = Field(default=0.8, ge=0, le=1)

    default_limit: int = Field(default=3, ge=1, description="Top items kept per source")

    @classmethod
    def from_settings(cls, config: "Config") -> "ScoringConfig":
        """Build scoring config from application settings."""
        return cls(
            weights=ScoringWeights.from_settings(config),
            default_limit=config.items_per_source,
        )


__all__ = ["ScoringWeights", "ScoringConfig"]
