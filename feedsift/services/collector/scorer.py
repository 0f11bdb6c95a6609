"""Item scoring service.

Calculates five independent component scores per item and combines them
into one weighted total:
- Engagement (views/likes/comments or score/comments/ratio)
- Recency (discrete age tiers)
- Topic match (keyword pools, averaged per match)
- Quality (title/description/duration heuristics)
- Source (the source's persisted weight, used as a raw multiplier)
"""

import re
from collections.abc import Sequence
from datetime import UTC, datetime

from feedsift.config.scoring import ScoringConfig
from feedsift.config.sources import SourceConfig
from feedsift.config.topics import TopicsConfig
from feedsift.config.validators import round_half_up
from feedsift.core.config_loader import load_topics_config
from feedsift.core.logging import get_logger
from feedsift.services.collector.base import DiscussionPost, ScoreBreakdown, VideoItem

logger = get_logger(__name__)

_DURATION = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
_CLICKBAIT_PUNCTUATION = re.compile(r"!{2,}|\?{2,}")

# (max age in hours, score), checked in order
_RECENCY_TIERS: tuple[tuple[float, float], ...] = (
    (6, 1.0),
    (24, 0.8),
    (168, 0.6),
    (672, 0.4),
)
_RECENCY_FLOOR = 0.2


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def parse_duration(duration: str | None) -> int:
    """Parse an ISO-8601 video duration (PT1H2M3S) into seconds.

    Args:
        duration: Duration text

    Returns:
        Total seconds, or 0 when the text is missing or malformed
    """
    if not isinstance(duration, str):
        return 0
    match = _DURATION.search(duration)
    if not match:
        return 0
    hours, minutes, seconds = (int(g) if g else 0 for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


class ItemScorer:
    """Calculates weighted scores for candidate items.

    Scoring formula:
        total = engagement * w.engagement + recency * w.recency
              + topic_match * w.topic_match + quality * w.quality
              + source_weight * w.source

    The total is rounded to two decimals. All components except `source`
    are clamped to [0, 1].
    """

    def __init__(
        self,
        config: ScoringConfig | None = None,
        topics: TopicsConfig | None = None,
    ):
        """Initialize scorer.

        Args:
            config: Scoring configuration (uses defaults if not provided)
            topics: Keyword pools (packaged defaults if not provided)
        """
        self.config = config or ScoringConfig()
        self.topics = topics or load_topics_config()

    def score(
        self,
        item: VideoItem | DiscussionPost,
        source: SourceConfig | None = None,
        now: datetime | None = None,
    ) -> ScoreBreakdown:
        """Calculate the score breakdown for one item.

        Args:
            item: Item to score
            source: Source config supplying weight and topics; when omitted
                the item's own `source_weight` is used and no source topics
                are matched
            now: Reference time for recency (defaults to current UTC time)

        Returns:
            ScoreBreakdown with components, total and weight vector
        """
        weights = self.config.weights
        source_weight = source.weight if source is not None else item.source_weight
        source_topics = source.topics if source is not None else []

        engagement = self._calc_engagement(item)
        recency = self._calc_recency(item.published_at, now or datetime.now(UTC))
        topic_match = self._calc_topic_match(item, source_topics)
        quality = self._calc_quality(item)

        total = (
            engagement * weights.engagement
            + recency * weights.recency
            + topic_match * weights.topic_match
            + quality * weights.quality
            + source_weight * weights.source
        )

        return ScoreBreakdown(
            engagement=engagement,
            recency=recency,
            topic_match=topic_match,
            quality=quality,
            source=source_weight,
            total_score=round_half_up(total, 2),
            weights=weights,
        )

    def select_top(
        self,
        items: Sequence[VideoItem | DiscussionPost],
        source: SourceConfig | None = None,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> list[VideoItem | DiscussionPost]:
        """Score items and keep the best `limit`.

        Sorting is stable, so ties keep their input order.

        Args:
            items: Items from one source
            source: Source config
            limit: Maximum items to keep (config default if not provided)
            now: Reference time for recency

        Returns:
            Copies of the items with `scoring` attached, best first
        """
        limit = self.config.default_limit if limit is None else limit
        now = now or datetime.now(UTC)

        scored = [
            item.model_copy(update={"scoring": self.score(item, source, now=now)})
            for item in items
        ]
        scored.sort(key=lambda i: i.scoring.total_score if i.scoring else 0.0, reverse=True)

        if scored:
            logger.debug(
                "Items scored",
                source_id=source.id if source else None,
                count=len(scored),
                best=scored[0].scoring.total_score if scored[0].scoring else None,
            )
        return scored[:limit]

    def _calc_engagement(self, item: VideoItem | DiscussionPost) -> float:
        """Blend normalized engagement metrics by item type.

        Args:
            item: Item with engagement fields

        Returns:
            Engagement score (0-1)
        """
        if isinstance(item, VideoItem):
            score = (
                min(item.view_count / 100_000, 1.0) * 0.5
                + min(item.like_count / 1_000, 1.0) * 0.3
                + min(item.comment_count / 100, 1.0) * 0.2
            )
        else:
            ratio = item.upvote_ratio if item.upvote_ratio is not None else 0.5
            score = (
                min(item.score / 1_000, 1.0) * 0.5
                + min(item.comment_count / 50, 1.0) * 0.3
                + ratio * 0.2
            )
        return _clamp(score)

    def _calc_recency(self, published_at: datetime | None, now: datetime) -> float:
        """Map item age onto discrete tiers.

        Args:
            published_at: Publication timestamp (None counts as brand new)
            now: Reference time

        Returns:
            Recency score: 1.0, 0.8, 0.6, 0.4 or 0.2
        """
        if published_at is None:
            return _RECENCY_TIERS[0][1]

        age_hours = (now - published_at).total_seconds() / 3600.0
        for max_hours, tier_score in _RECENCY_TIERS:
            if age_hours <= max_hours:
                return tier_score
        return _RECENCY_FLOOR

    def _calc_topic_match(
        self, item: VideoItem | DiscussionPost, source_topics: Sequence[str]
    ) -> float:
        """Average keyword weight per match.

        Each occurrence adds its pool weight and one match; excluded
        keywords subtract a penalty without adding a match. The result is
        score / matches, so more weak matches can lower the score.

        Args:
            item: Item whose title and description are searched
            source_topics: The source's own topic tags

        Returns:
            Topic match score (0-1)
        """
        content = item.content_text
        cfg = self.config
        pools = (
            (self.topics.keywords.high_priority, cfg.high_priority_weight),
            (self.topics.keywords.medium_priority, cfg.medium_priority_weight),
            ([t.lower() for t in source_topics], cfg.source_topic_weight),
            (self.topics.interests, cfg.interest_weight),
        )

        score = 0.0
        matches = 0
        for keywords, weight in pools:
            count = self._count_matches(content, keywords)
            score += count * weight
            matches += count

        score -= self._count_matches(content, self.topics.exclude_keywords) * cfg.exclude_penalty

        if matches == 0:
            return 0.0
        return _clamp(score / matches)

    def _calc_quality(self, item: VideoItem | DiscussionPost) -> float:
        """Score title, description and type-specific quality signals.

        Args:
            item: Item to inspect

        Returns:
            Quality score (0-1)
        """
        score = 0.5
        title = item.title or ""

        if 10 < len(title) < 100:
            score += 0.1
        if not _CLICKBAIT_PUNCTUATION.search(title):
            score += 0.1

        if len(item.description) > 50:
            score += 0.1
        if len(item.description) > 200:
            score += 0.1

        if isinstance(item, VideoItem):
            seconds = parse_duration(item.duration)
            if self.config.min_video_seconds < seconds < self.config.max_video_seconds:
                score += 0.1
        else:
            ratio = item.upvote_ratio if item.upvote_ratio is not None else 0.5
            if ratio > self.config.high_upvote_ratio:
                score += 0.1

        return _clamp(score)

    @staticmethod
    def _count_matches(content: str, keywords: Sequence[str]) -> int:
        return sum(content.count(k) for k in keywords if k)


__all__ = ["ItemScorer", "parse_duration"]
