"""Content collection services.

This package implements the collection pipeline:
1. Base DTOs validate raw feed records into candidate items
2. Filter rejects malformed, clickbait, excluded and low-engagement items
3. Deduplicator drops repeated titles
4. Scorer calculates weighted scores and keeps the top items
5. Pipeline runs the stages per source and aggregates the results
"""

from feedsift.config import ScoringConfig, ScoringWeights
from feedsift.services.collector.base import (
    CandidateItem,
    DiscussionPost,
    ItemType,
    ScoreBreakdown,
    VideoItem,
    build_candidates,
    parse_candidate,
)
from feedsift.services.collector.deduplicator import TitleDeduplicator, normalize_title
from feedsift.services.collector.filter import (
    ContentFilter,
    FilterReason,
    FilterResult,
    FilterStage,
)
from feedsift.services.collector.pipeline import (
    CollectionRun,
    CollectionStats,
    ContentPipeline,
    SourceStats,
)
from feedsift.services.collector.scorer import ItemScorer, parse_duration

__all__ = [
    # Base DTOs
    "CandidateItem",
    "DiscussionPost",
    "ItemType",
    "ScoreBreakdown",
    "VideoItem",
    "build_candidates",
    "parse_candidate",
    # Filter
    "ContentFilter",
    "FilterReason",
    "FilterResult",
    "FilterStage",
    # Deduplicator
    "TitleDeduplicator",
    "normalize_title",
    # Scorer
    "ItemScorer",
    "ScoringConfig",
    "ScoringWeights",
    "parse_duration",
    # Pipeline
    "ContentPipeline",
    "CollectionRun",
    "CollectionStats",
    "SourceStats",
]
