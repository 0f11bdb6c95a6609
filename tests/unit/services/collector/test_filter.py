"""Unit tests for ContentFilter.

Tests cover:
- Structural validity (fields, title length, URL, date window)
- Quality heuristics (clickbait, punctuation, caps, spam)
- Content exclusion (keywords, topic patterns)
- Engagement floors per item type
- Date-range and score-floor helpers
"""

from datetime import UTC, datetime, timedelta

import pytest

from feedsift.config import ScoringWeights
from feedsift.services.collector.base import DiscussionPost, ScoreBreakdown, VideoItem
from feedsift.services.collector.filter import (
    ContentFilter,
    FilterReason,
    FilterStage,
    _one_year_before,
)

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


def create_video(**overrides) -> VideoItem:
    """Create a VideoItem that passes every stage by default."""
    data = {
        "title": "Building a compiler in Rust",
        "url": "https://www.youtube.com/watch?v=abc123",
        "description": "A walkthrough of parsing and code generation.",
        "published_at": NOW - timedelta(days=2),
        "view_count": 5000,
    }
    data.update(overrides)
    return VideoItem(**data)


def create_post(**overrides) -> DiscussionPost:
    """Create a DiscussionPost that passes every stage by default."""
    data = {
        "title": "Ask: how do you profile async code?",
        "url": "https://www.reddit.com/r/python/comments/xyz",
        "published_at": NOW - timedelta(hours=5),
        "score": 42,
        "upvote_ratio": 0.9,
    }
    data.update(overrides)
    return DiscussionPost(**data)


@pytest.fixture
def content_filter() -> ContentFilter:
    """Create a ContentFilter with packaged rules."""
    return ContentFilter()


class TestStructural:
    """Tests for stage 1."""

    def test_valid_items_pass(self, content_filter: ContentFilter):
        """Test baseline items pass."""
        assert content_filter.evaluate(create_video(), now=NOW).passed
        assert content_filter.evaluate(create_post(), now=NOW).passed

    def test_missing_title(self, content_filter: ContentFilter):
        """Test missing title is rejected."""
        result = content_filter.evaluate(create_video(title=None), now=NOW)
        assert not result.passed
        assert result.stage is FilterStage.STRUCTURAL
        assert result.reason is FilterReason.MISSING_FIELD

    def test_missing_url(self, content_filter: ContentFilter):
        """Test missing URL is rejected."""
        result = content_filter.evaluate(create_video(url=None), now=NOW)
        assert result.reason is FilterReason.MISSING_FIELD
        assert result.detail == "url"

    @pytest.mark.parametrize("title", ["Hey", "x" * 201])
    def test_title_length(self, content_filter: ContentFilter, title: str):
        """Test titles outside [5, 200] are rejected."""
        result = content_filter.evaluate(create_video(title=title), now=NOW)
        assert result.reason is FilterReason.TITLE_LENGTH

    def test_title_length_bounds_inclusive(self, content_filter: ContentFilter):
        """Test 5 and 200 character titles pass the length check."""
        assert content_filter.evaluate(create_video(title="Rusty"), now=NOW).passed
        assert content_filter.evaluate(create_video(title="a" * 200), now=NOW).passed

    @pytest.mark.parametrize("url", ["not a url", "www.example.com/video", "/relative/path"])
    def test_invalid_url(self, content_filter: ContentFilter, url: str):
        """Test URLs without scheme and host are rejected."""
        result = content_filter.evaluate(create_video(url=url), now=NOW)
        assert result.reason is FilterReason.INVALID_URL

    def test_future_date(self, content_filter: ContentFilter):
        """Test items published in the future are rejected."""
        result = content_filter.evaluate(create_video(published_at=NOW + timedelta(hours=1)), now=NOW)
        assert result.reason is FilterReason.FUTURE_DATE

    def test_stale_date(self, content_filter: ContentFilter):
        """Test items older than a calendar year are rejected."""
        result = content_filter.evaluate(
            create_video(published_at=NOW - timedelta(days=400)), now=NOW
        )
        assert result.reason is FilterReason.STALE_DATE

    def test_missing_date_allowed(self, content_filter: ContentFilter):
        """Test items without a publish date pass the date checks."""
        assert content_filter.evaluate(create_video(published_at=None), now=NOW).passed

    def test_one_year_before_leap_day(self):
        """Test Feb 29 falls back to Feb 28."""
        leap = datetime(2024, 2, 29, 10, 30, tzinfo=UTC)
        assert _one_year_before(leap) == datetime(2023, 2, 28, tzinfo=UTC)

    def test_one_year_before_midnight(self):
        """Test the cutoff is midnight one year earlier."""
        assert _one_year_before(NOW) == datetime(2023, 6, 15, tzinfo=UTC)


class TestQuality:
    """Tests for stage 2."""

    def test_clickbait(self, content_filter: ContentFilter):
        """Test clickbait titles are rejected."""
        result = content_filter.evaluate(
            create_video(title="You Won't Believe this compiler trick"), now=NOW
        )
        assert result.stage is FilterStage.QUALITY
        assert result.reason is FilterReason.CLICKBAIT

    def test_numbered_reasons(self, content_filter: ContentFilter):
        """Test numbered listicle pattern."""
        result = content_filter.evaluate(
            create_video(title="7 reasons why Rust compiles slowly"), now=NOW
        )
        assert result.reason is FilterReason.CLICKBAIT

    @pytest.mark.parametrize("title", ["Is this real???", "Compiler done!!!"])
    def test_excessive_punctuation(self, content_filter: ContentFilter, title: str):
        """Test runs of 3+ ! or ? are rejected."""
        result = content_filter.evaluate(create_video(title=title), now=NOW)
        assert result.reason is FilterReason.EXCESSIVE_PUNCTUATION

    def test_two_marks_allowed(self, content_filter: ContentFilter):
        """Test two marks are not an excessive run."""
        assert content_filter.evaluate(create_video(title="Compiler done!!"), now=NOW).passed

    def test_excessive_caps(self, content_filter: ContentFilter):
        """Test mostly-uppercase titles are rejected."""
        result = content_filter.evaluate(create_video(title="BUILDING A COMPILER"), now=NOW)
        assert result.reason is FilterReason.EXCESSIVE_CAPS

    def test_acronyms_allowed(self, content_filter: ContentFilter):
        """Test a few capitals are fine."""
        assert content_filter.evaluate(create_video(title="Writing a JIT for WASM"), now=NOW).passed

    def test_spam_in_description(self, content_filter: ContentFilter):
        """Test spam phrases in the description are rejected."""
        result = content_filter.evaluate(
            create_video(description="Learn compilers and make FREE MONEY today"), now=NOW
        )
        assert result.reason is FilterReason.SPAM
        assert result.detail == "free money"


class TestContent:
    """Tests for stage 3."""

    def test_excluded_keyword(self, content_filter: ContentFilter):
        """Test globally excluded keywords are rejected."""
        result = content_filter.evaluate(create_video(title="Crypto pump signals in Rust"), now=NOW)
        assert result.stage is FilterStage.CONTENT
        assert result.reason is FilterReason.EXCLUDED_KEYWORD

    def test_excluded_topic(self, content_filter: ContentFilter):
        """Test excluded topic patterns are rejected."""
        result = content_filter.evaluate(
            create_video(description="The compiler team drama continues."), now=NOW
        )
        assert result.reason is FilterReason.EXCLUDED_TOPIC


class TestEngagement:
    """Tests for stage 4."""

    def test_recent_video_low_floor(self, content_filter: ContentFilter):
        """Test recent videos need 100 views."""
        assert content_filter.evaluate(create_video(view_count=100), now=NOW).passed
        result = content_filter.evaluate(create_video(view_count=99), now=NOW)
        assert result.stage is FilterStage.ENGAGEMENT
        assert result.reason is FilterReason.LOW_VIEWS

    def test_older_video_high_floor(self, content_filter: ContentFilter):
        """Test videos a week or older need 1000 views."""
        published = NOW - timedelta(days=10)
        result = content_filter.evaluate(
            create_video(published_at=published, view_count=500), now=NOW
        )
        assert result.reason is FilterReason.LOW_VIEWS
        assert content_filter.evaluate(
            create_video(published_at=published, view_count=1000), now=NOW
        ).passed

    def test_post_floors(self, content_filter: ContentFilter):
        """Test posts need score >= 10 and ratio >= 0.6."""
        assert content_filter.evaluate(create_post(score=10, upvote_ratio=0.6), now=NOW).passed
        assert not content_filter.evaluate(create_post(score=9), now=NOW).passed
        assert not content_filter.evaluate(create_post(upvote_ratio=0.59), now=NOW).passed

    def test_post_missing_ratio(self, content_filter: ContentFilter):
        """Test a missing upvote ratio counts as zero."""
        result = content_filter.evaluate(create_post(upvote_ratio=None), now=NOW)
        assert result.reason is FilterReason.LOW_SCORE


class TestFilter:
    """Tests for the batch API and helpers."""

    def test_filter_keeps_order(self, content_filter: ContentFilter):
        """Test survivors keep input order and inputs are untouched."""
        items = [
            create_video(title="First compiler talk"),
            create_video(title="SHOCKING compiler news"),
            create_post(),
            create_video(title="Second compiler talk"),
        ]

        result = content_filter.filter(items, now=NOW)

        assert [i.title for i in result] == [
            "First compiler talk",
            "Ask: how do you profile async code?",
            "Second compiler talk",
        ]
        assert len(items) == 4

    def test_filter_empty(self, content_filter: ContentFilter):
        """Test empty input."""
        assert content_filter.filter([], now=NOW) == []

    def test_filter_by_date_range(self, content_filter: ContentFilter):
        """Test items older than days_back are dropped."""
        items = [
            create_video(published_at=NOW - timedelta(days=5)),
            create_video(published_at=NOW - timedelta(days=40)),
            create_video(published_at=None),
        ]
        result = content_filter.filter_by_date_range(items, days_back=30, now=NOW)
        assert len(result) == 2

    def test_filter_by_score(self, content_filter: ContentFilter):
        """Test scored items below the floor are dropped."""

        def scored(total: float) -> VideoItem:
            breakdown = ScoreBreakdown(
                engagement=0.1,
                recency=0.2,
                topic_match=0.0,
                quality=0.5,
                source=1.0,
                total_score=total,
                weights=ScoringWeights(),
            )
            return create_video(scoring=breakdown)

        items = [scored(0.2), scored(0.3), create_video()]
        result = content_filter.filter_by_score(items, min_score=0.3)

        assert len(result) == 2
        assert result[0].scoring is not None
        assert result[1].scoring is None
