"""Preview ranking service.

Previews are a quick, unfiltered look at what each source currently
offers. They are ranked with their own additive score (unbounded, rounded
to an integer), separate from the collection pipeline's weighted 0-1
score, and a user or `auto_select` picks which ones to summarize.

Preview score:
    video:      20*w + min(views/1000, 50) + 30*likes/views + freshness
                (freshness: +20 under 1 day, +10 under 7 days)
    discussion: 20*w + min(score/10, 30) + 20*upvote_ratio
                + min(comments/2, 20) + min(awards*5, 25) + freshness
                (freshness: +15 under 6 hours, +10 under 24 hours)
"""

import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from feedsift.config.categories import Category
from feedsift.config.sources import SourceConfig
from feedsift.core.logging import get_logger
from feedsift.services.collector.base import DiscussionPost, VideoItem, build_candidates
from feedsift.services.distribution.classifier import CategoryClassifier
from feedsift.services.distribution.rebalancer import parse_targets

logger = get_logger(__name__)

# (max age in hours, label), checked in order
_FRESHNESS_LABELS: tuple[tuple[float, str], ...] = (
    (1, "just-posted"),
    (6, "very-fresh"),
    (24, "fresh"),
    (48, "recent"),
)
_OLDER = "older"


class PreviewItem(BaseModel):
    """A ranked preview of one item.

    Attributes:
        item: The candidate item
        source_id: Source the item came from
        category: Category of the source's topics
        preview_score: Additive preview score
        freshness: Age label ("just-posted" ... "older")
        source_weight: Source weight at preview time
        selected: Whether the item is picked for summarization
    """

    model_config = ConfigDict(frozen=True)

    item: VideoItem | DiscussionPost
    source_id: str
    category: Category
    preview_score: int
    freshness: str
    source_weight: float
    selected: bool = False

    @property
    def key(self) -> str:
        return self.item.key


class PreviewStats(BaseModel):
    """Counts over one preview collection.

    Attributes:
        total_items: All previews
        video_items: Previews of videos
        discussion_items: Previews of discussion posts
        categories: Preview count per category id
    """

    total_items: int = 0
    video_items: int = 0
    discussion_items: int = 0
    categories: dict[str, int] = Field(default_factory=dict)


def _age_hours(published_at: datetime | None, now: datetime) -> float | None:
    if published_at is None:
        return None
    return (now - published_at).total_seconds() / 3600.0


def freshness_label(published_at: datetime | None, now: datetime | None = None) -> str:
    """Label an item's age.

    Args:
        published_at: Publication timestamp
        now: Reference time (defaults to current UTC time)

    Returns:
        "just-posted", "very-fresh", "fresh", "recent" or "older"
        (unknown dates are "older")
    """
    hours = _age_hours(published_at, now or datetime.now(UTC))
    if hours is None:
        return _OLDER
    for max_hours, label in _FRESHNESS_LABELS:
        if hours < max_hours:
            return label
    return _OLDER


class PreviewRanker:
    """Scores, labels and auto-selects previews."""

    def __init__(self, classifier: CategoryClassifier | None = None):
        """Initialize ranker.

        Args:
            classifier: Category classifier (packaged defaults if not provided)
        """
        self.classifier = classifier or CategoryClassifier()

    def preview_score(
        self,
        item: VideoItem | DiscussionPost,
        source: SourceConfig | None = None,
        now: datetime | None = None,
    ) -> int:
        """Compute the additive preview score.

        Args:
            item: Item to score
            source: Source config supplying the weight (falls back to the
                item's `source_weight`)
            now: Reference time for the freshness bonus

        Returns:
            Score rounded half-up to an integer
        """
        weight = source.weight if source is not None else item.source_weight
        hours = _age_hours(item.published_at, now or datetime.now(UTC))
        score = weight * 20

        if isinstance(item, VideoItem):
            if item.view_count:
                score += min(item.view_count / 1000, 50)
                if item.like_count:
                    score += item.like_count / item.view_count * 30
            if hours is not None:
                if hours < 24:
                    score += 20
                elif hours < 24 * 7:
                    score += 10
        else:
            score += min(item.score / 10, 30)
            if item.upvote_ratio:
                score += item.upvote_ratio * 20
            if item.comment_count:
                score += min(item.comment_count / 2, 20)
            if item.awards:
                score += min(item.awards * 5, 25)
            if hours is not None:
                if hours < 6:
                    score += 15
                elif hours < 24:
                    score += 10

        return math.floor(score + 0.5)

    def build_previews(
        self,
        batches: Iterable[tuple[SourceConfig, Iterable[Mapping[str, Any] | VideoItem | DiscussionPost]]],
        now: datetime | None = None,
    ) -> tuple[list[PreviewItem], PreviewStats]:
        """Turn per-source item batches into previews.

        Args:
            batches: (source, raw records) pairs
            now: Reference time for scores and labels

        Returns:
            Tuple of (previews in batch order, preview stats)
        """
        now = now or datetime.now(UTC)
        previews: list[PreviewItem] = []
        stats = PreviewStats()

        for source, records in batches:
            items, skipped = build_candidates(records, source)
            category = self.classifier.classify(source.topics)

            for item in items:
                previews.append(
                    PreviewItem(
                        item=item,
                        source_id=source.id,
                        category=category,
                        preview_score=self.preview_score(item, source, now=now),
                        freshness=freshness_label(item.published_at, now=now),
                        source_weight=source.weight,
                    )
                )
                if isinstance(item, VideoItem):
                    stats.video_items += 1
                else:
                    stats.discussion_items += 1
                stats.categories[category.value] = stats.categories.get(category.value, 0) + 1

            logger.debug(
                "Previews built",
                source_id=source.id,
                count=len(items),
                skipped=skipped,
                category=category.value,
            )

        stats.total_items = len(previews)
        logger.info(
            "Preview collection complete",
            total=stats.total_items,
            videos=stats.video_items,
            discussions=stats.discussion_items,
            categories=stats.categories,
        )
        return previews, stats

    def auto_select(
        self,
        previews: Iterable[PreviewItem],
        targets: Mapping[str, int] | None = None,
    ) -> list[PreviewItem]:
        """Select the best previews of each category.

        Each category contributes its target count of top-scoring previews
        (ties keep input order). A category missing from `targets`, or
        targeted at 0, still gets one pick. Invalid targets are ignored.
        Previous selections are cleared.

        Args:
            previews: Previews to choose from
            targets: Category id or display name to desired item count

        Returns:
            All previews in input order with `selected` updated
        """
        counts, _ = parse_targets(targets or {})

        ordered = list(previews)
        by_category: dict[Category, list[int]] = {}
        for index, preview in enumerate(ordered):
            by_category.setdefault(preview.category, []).append(index)

        chosen: set[int] = set()
        for category, indices in by_category.items():
            ranked = sorted(indices, key=lambda i: ordered[i].preview_score, reverse=True)
            chosen.update(ranked[: counts.get(category) or 1])

        logger.info("Previews auto-selected", selected=len(chosen), total=len(ordered))
        return [
            preview.model_copy(update={"selected": index in chosen})
            for index, preview in enumerate(ordered)
        ]


__all__ = [
    "PreviewItem",
    "PreviewRanker",
    "PreviewStats",
    "freshness_label",
]
