"""Keyword pools for topic relevance.

All keywords are lowercased on load.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedsift.config.validators import normalize_string_list


class KeywordPools(BaseModel):
    """Priority-tiered keyword pools."""

    model_config = ConfigDict(frozen=True)

    high_priority: list[str] = Field(default_factory=list)
    medium_priority: list[str] = Field(default_factory=list)

    @field_validator("high_priority", "medium_priority", mode="before")
    @classmethod
    def lowercase_keywords(cls, v: list[str]) -> list[str]:
        """Normalize keywords to lowercase."""
        return normalize_string_list(v)


class TopicsConfig(BaseModel):
    """Global topic interests and exclusions.

    Attributes:
        interests: General interest keywords (lowest weight)
        keywords: High and medium priority pools
        exclude_keywords: Keywords that penalize scoring and reject in filtering
    """

    model_config = ConfigDict(frozen=True)

    interests: list[str] = Field(default_factory=list)
    keywords: KeywordPools = Field(default_factory=KeywordPools)
    exclude_keywords: list[str] = Field(default_factory=list)

    @field_validator("interests", "exclude_keywords", mode="before")
    @classmethod
    def lowercase_lists(cls, v: list[str]) -> list[str]:
        """Normalize keyword lists to lowercase."""
        return normalize_string_list(v)


__all__ = ["KeywordPools", "TopicsConfig"]
