"""Content filtering service.

Filtering happens before deduplication and scoring. Every item must pass
four stages in order: structural validity, quality/clickbait heuristics,
content exclusion, and a minimum-engagement floor.
"""

import re
from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel

from feedsift.config.filtering import FilterRules
from feedsift.config.topics import TopicsConfig
from feedsift.core.config_loader import load_filter_rules, load_topics_config
from feedsift.core.logging import get_logger
from feedsift.services.collector.base import DiscussionPost, VideoItem

logger = get_logger(__name__)

_PUNCTUATION_RUN = re.compile(r"!{3,}|\?{3,}")


class FilterStage(str, Enum):
    """Stage at which an item was rejected."""

    STRUCTURAL = "structural"
    QUALITY = "quality"
    CONTENT = "content"
    ENGAGEMENT = "engagement"


class FilterReason(str, Enum):
    """Reason for filter decision."""

    MISSING_FIELD = "missing_field"
    TITLE_LENGTH = "title_length"
    INVALID_URL = "invalid_url"
    FUTURE_DATE = "future_date"
    STALE_DATE = "stale_date"
    CLICKBAIT = "clickbait"
    EXCESSIVE_PUNCTUATION = "excessive_punctuation"
    EXCESSIVE_CAPS = "excessive_caps"
    SPAM = "spam"
    EXCLUDED_KEYWORD = "excluded_keyword"
    EXCLUDED_TOPIC = "excluded_topic"
    LOW_VIEWS = "low_views"
    LOW_SCORE = "low_score"


class FilterResult(BaseModel):
    """Result of filtering one item.

    Attributes:
        passed: Whether the item survived all stages
        stage: Stage that rejected the item (if not passed)
        reason: Reason for rejection (if not passed)
        detail: Offending pattern, keyword or value
    """

    passed: bool
    stage: FilterStage | None = None
    reason: FilterReason | None = None
    detail: str | None = None


_PASSED = FilterResult(passed=True)


def _reject(stage: FilterStage, reason: FilterReason, detail: str | None = None) -> FilterResult:
    return FilterResult(passed=False, stage=stage, reason=reason, detail=detail)


def _one_year_before(now: datetime) -> datetime:
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        return midnight.replace(year=midnight.year - 1)
    except ValueError:
        # Feb 29
        return midnight.replace(year=midnight.year - 1, day=28)


class ContentFilter:
    """Four-stage boolean filter for candidate items.

    Attributes:
        rules: Clickbait, spam and exclusion heuristics
        topics: Topic config supplying the global excluded keywords
    """

    def __init__(
        self,
        rules: FilterRules | None = None,
        topics: TopicsConfig | None = None,
    ):
        """Initialize content filter.

        Args:
            rules: Filter rules (packaged defaults if not provided)
            topics: Topic config (packaged defaults if not provided)
        """
        self.rules = rules or load_filter_rules()
        self.topics = topics or load_topics_config()
        self._clickbait = [re.compile(p, re.IGNORECASE) for p in self.rules.clickbait_patterns]
        self._excluded_patterns = [
            re.compile(p, re.IGNORECASE) for p in self.rules.excluded_patterns
        ]

    def filter(
        self,
        items: Sequence[VideoItem | DiscussionPost],
        now: datetime | None = None,
    ) -> list[VideoItem | DiscussionPost]:
        """Return the items that pass every stage, in input order.

        Args:
            items: Candidate items
            now: Reference time (defaults to current UTC time)

        Returns:
            New list of surviving items
        """
        now = now or datetime.now(UTC)
        passed: list[VideoItem | DiscussionPost] = []
        rejected: Counter[str] = Counter()

        for item in items:
            result = self.evaluate(item, now=now)
            if result.passed:
                passed.append(item)
                continue
            stage = result.stage.value if result.stage else "unknown"
            rejected[stage] += 1
            logger.debug(
                "Item rejected",
                title=(item.title or "")[:50],
                stage=stage,
                reason=result.reason.value if result.reason else None,
                detail=result.detail,
            )

        logger.debug(
            "Filtering complete",
            total=len(items),
            passed=len(passed),
            rejected=dict(rejected),
        )
        return passed

    def evaluate(
        self,
        item: VideoItem | DiscussionPost,
        now: datetime | None = None,
    ) -> FilterResult:
        """Run the four stages on one item.

        Args:
            item: Candidate item
            now: Reference time (defaults to current UTC time)

        Returns:
            FilterResult naming the first failing stage, if any
        """
        now = now or datetime.now(UTC)

        result = self._check_structure(item, now)
        if not result.passed:
            return result
        result = self._check_quality(item)
        if not result.passed:
            return result
        result = self._check_content(item)
        if not result.passed:
            return result
        return self._check_engagement(item, now)

    def _check_structure(self, item: VideoItem | DiscussionPost, now: datetime) -> FilterResult:
        stage = FilterStage.STRUCTURAL
        if not item.title or not item.url:
            return _reject(stage, FilterReason.MISSING_FIELD, "title" if not item.title else "url")

        length = len(item.title)
        if length < self.rules.min_title_length or length > self.rules.max_title_length:
            return _reject(stage, FilterReason.TITLE_LENGTH, str(length))

        try:
            parsed = urlparse(item.url)
        except ValueError:
            return _reject(stage, FilterReason.INVALID_URL, item.url)
        if not parsed.scheme or not parsed.netloc:
            return _reject(stage, FilterReason.INVALID_URL, item.url)

        if item.published_at is not None:
            if item.published_at > now:
                return _reject(stage, FilterReason.FUTURE_DATE, item.published_at.isoformat())
            if item.published_at < _one_year_before(now):
                return _reject(stage, FilterReason.STALE_DATE, item.published_at.isoformat())

        return _PASSED

    def _check_quality(self, item: VideoItem | DiscussionPost) -> FilterResult:
        stage = FilterStage.QUALITY
        title = item.title or ""

        for pattern in self._clickbait:
            if pattern.search(title):
                return _reject(stage, FilterReason.CLICKBAIT, pattern.pattern)

        if _PUNCTUATION_RUN.search(title):
            return _reject(stage, FilterReason.EXCESSIVE_PUNCTUATION)

        uppercase = sum(1 for c in title if "A" <= c <= "Z")
        if uppercase > len(title) * 0.5:
            return _reject(stage, FilterReason.EXCESSIVE_CAPS, f"{uppercase}/{len(title)}")

        lowered_title = title.lower()
        lowered_description = item.description.lower()
        for phrase in self.rules.spam_phrases:
            if phrase in lowered_title or phrase in lowered_description:
                return _reject(stage, FilterReason.SPAM, phrase)

        return _PASSED

    def _check_content(self, item: VideoItem | DiscussionPost) -> FilterResult:
        stage = FilterStage.CONTENT
        content = item.content_text

        for keyword in self.topics.exclude_keywords:
            if keyword and keyword in content:
                return _reject(stage, FilterReason.EXCLUDED_KEYWORD, keyword)

        for pattern in self._excluded_patterns:
            if pattern.search(content):
                return _reject(stage, FilterReason.EXCLUDED_TOPIC, pattern.pattern)

        return _PASSED

    def _check_engagement(self, item: VideoItem | DiscussionPost, now: datetime) -> FilterResult:
        stage = FilterStage.ENGAGEMENT

        if isinstance(item, VideoItem):
            published = item.published_at or now
            age_days = (now - published).total_seconds() / 86400.0
            min_views = (
                self.rules.min_views_recent
                if age_days < self.rules.max_age_days_recent
                else self.rules.min_views
            )
            if item.view_count < min_views:
                return _reject(stage, FilterReason.LOW_VIEWS, f"{item.view_count}<{min_views}")
            return _PASSED

        ratio = item.upvote_ratio if item.upvote_ratio is not None else 0.0
        if item.score < self.rules.min_post_score or ratio < self.rules.min_upvote_ratio:
            return _reject(stage, FilterReason.LOW_SCORE, f"score={item.score} ratio={ratio}")
        return _PASSED

    def filter_by_date_range(
        self,
        items: Sequence[VideoItem | DiscussionPost],
        days_back: int = 30,
        now: datetime | None = None,
    ) -> list[VideoItem | DiscussionPost]:
        """Keep items published within the last `days_back` days.

        Items without a publish date count as published now.
        """
        now = now or datetime.now(UTC)
        cutoff = now - timedelta(days=days_back)
        return [item for item in items if (item.published_at or now) >= cutoff]

    def filter_by_score(
        self,
        items: Sequence[VideoItem | DiscussionPost],
        min_score: float = 0.3,
    ) -> list[VideoItem | DiscussionPost]:
        """Keep unscored items and scored items at or above `min_score`."""
        return [
            item
            for item in items
            if item.scoring is None or item.scoring.total_score >= min_score
        ]


__all__ = [
    "ContentFilter",
    "FilterResult",
    "FilterReason",
    "FilterStage",
]
