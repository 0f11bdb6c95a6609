"""Configuration models."""

from feedsift.config.categories import (
    Category,
    CategoryDefinition,
    CategoryTable,
    parse_category,
)
from feedsift.config.filtering import FilterRules
from feedsift.config.scoring import ScoringConfig, ScoringWeights
from feedsift.config.sources import SourceCatalog, SourceConfig, SourceType
from feedsift.config.topics import KeywordPools, TopicsConfig

__all__ = [
    # Categories
    "Category",
    "CategoryDefinition",
    "CategoryTable",
    "parse_category",
    # Filtering
    "FilterRules",
    # Scoring
    "ScoringConfig",
    "ScoringWeights",
    # Sources
    "SourceCatalog",
    "SourceConfig",
    "SourceType",
    # Topics
    "KeywordPools",
    "TopicsConfig",
]
