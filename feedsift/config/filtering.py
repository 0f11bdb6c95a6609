"""Content filtering rule models.

Regex patterns are compiled case-insensitively when the filter is built.
"""

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from feedsift.config.validators import normalize_string_list


class FilterRules(BaseModel):
    """Fixed heuristics for the quality and exclusion stages.

    Attributes:
        clickbait_patterns: Regexes matched against the title
        spam_phrases: Phrases matched against title and description
        excluded_patterns: Regexes for off-mission subjects
        min_title_length: Shortest acceptable title
        max_title_length: Longest acceptable title
        max_age_days_recent: Age below which videos get the low view floor
        min_views_recent: View floor for recent videos
        min_views: View floor for older videos
        min_post_score: Score floor for discussion posts
        min_upvote_ratio: Upvote ratio floor for discussion posts
    """

    model_config = ConfigDict(frozen=True)

    clickbait_patterns: list[str] = Field(default_factory=list)
    spam_phrases: list[str] = Field(default_factory=list)
    excluded_patterns: list[str] = Field(default_factory=list)

    min_title_length: int = Field(default=5, ge=0)
    max_title_length: int = Field(default=200, ge=1)
    max_age_days_recent: int = Field(default=7, ge=0)
    min_views_recent: int = Field(default=100, ge=0)
    min_views: int = Field(default=1000, ge=0)
    min_post_score: int = Field(default=10)
    min_upvote_ratio: float = Field(default=0.6, ge=0, le=1)

    @field_validator("spam_phrases", mode="before")
    @classmethod
    def lowercase_spam(cls, v: list[str]) -> list[str]:
        """Normalize spam phrases to lowercase."""
        return normalize_string_list(v)

    @field_validator("clickbait_patterns", "excluded_patterns")
    @classmethod
    def check_patterns(cls, v: list[str]) -> list[str]:
        """Reject patterns that do not compile."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return v


__all__ = ["FilterRules"]
