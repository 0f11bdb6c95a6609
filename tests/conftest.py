"""Pytest configuration and fixtures.

This module provides common fixtures used across all tests.
"""

from datetime import UTC, datetime
from typing import Any

import pytest

from feedsift.config import SourceConfig, SourceType
from feedsift.core.logging import setup_logging
from feedsift.infrastructure import InMemorySourceConfigStore

# Setup logging for tests
setup_logging()


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for time-dependent formulas."""
    return datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def video_source() -> SourceConfig:
    """A video channel about machine learning."""
    return SourceConfig(
        id="UC_ml_channel",
        display_name="ML Explained",
        type=SourceType.VIDEO,
        topics=["machine learning", "tutorials"],
        weight=1.0,
    )


@pytest.fixture
def forum_source() -> SourceConfig:
    """A discussion forum about programming."""
    return SourceConfig(
        id="programming",
        display_name="r/programming",
        type=SourceType.DISCUSSION,
        topics=["programming", "software"],
        weight=0.8,
    )


@pytest.fixture
def legacy_feeds_document() -> dict[str, Any]:
    """Feeds document in the legacy youtube/reddit shape."""
    return {
        "youtube": [
            {
                "channelId": "UC_ml_1",
                "name": "Two Minute Papers",
                "feedUrl": "https://www.youtube.com/feeds/videos.xml?channel_id=UC_ml_1",
                "topics": ["AI", "research"],
                "weight": 1.0,
            },
            {
                "channelId": "UC_math_1",
                "name": "Numberphile",
                "feedUrl": "https://www.youtube.com/feeds/videos.xml?channel_id=UC_math_1",
                "topics": ["mathematics", "numbers"],
                "weight": 0.8,
            },
            {
                "channelId": "UC_sport_1",
                "name": "Hoops Breakdown",
                "topics": ["basketball", "sports"],
                "weight": 1.2,
            },
        ],
        "reddit": [
            {"subreddit": "MachineLearning", "topics": ["machine learning"], "weight": 1.1},
            {"subreddit": "worldnews", "topics": ["international news"], "weight": 0.5},
        ],
    }


@pytest.fixture
def memory_store(legacy_feeds_document: dict[str, Any]) -> InMemorySourceConfigStore:
    """In-memory store seeded with the legacy feeds document."""
    return InMemorySourceConfigStore(legacy_feeds_document)
