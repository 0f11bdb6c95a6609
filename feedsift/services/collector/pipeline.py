"""Content collection pipeline service.

The pipeline, per source:
1. Validate raw records into candidate items
2. Filter (structural, quality, content, engagement)
3. Deduplicate (normalized titles)
4. Score and keep the top N
5. Attach the category derived from the source's topics

Sources are processed one after another; a failing supplier only affects
its own source.

Usage:
    pipeline = ContentPipeline()
    run = pipeline.run(catalog.sources, fetch=supplier)
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from feedsift.config.categories import Category
from feedsift.config.scoring import ScoringConfig
from feedsift.config.sources import SourceConfig
from feedsift.core.config import get_config
from feedsift.core.exceptions import CollectionError
from feedsift.core.logging import get_logger
from feedsift.services.collector.base import DiscussionPost, VideoItem, build_candidates
from feedsift.services.collector.deduplicator import TitleDeduplicator
from feedsift.services.collector.filter import ContentFilter
from feedsift.services.collector.scorer import ItemScorer
from feedsift.services.distribution.classifier import CategoryClassifier

logger = get_logger(__name__)

RawRecord = Mapping[str, Any] | VideoItem | DiscussionPost
Supplier = Callable[[SourceConfig], Iterable[RawRecord]]


class SourceStats(BaseModel):
    """Counts for one processed source.

    Attributes:
        source_id: Source identifier
        original_count: Items handed to the pipeline
        skipped_count: Records that failed validation
        filtered_count: Items surviving the filter
        deduplicated_count: Items surviving deduplication
        selected_count: Items kept after top-N selection
    """

    source_id: str
    original_count: int = 0
    skipped_count: int = 0
    filtered_count: int = 0
    deduplicated_count: int = 0
    selected_count: int = 0

    @property
    def selection_rate(self) -> float:
        """Selected share of the original items, in percent."""
        if self.original_count == 0:
            return 0.0
        return round(self.selected_count / self.original_count * 100, 1)


class CollectionStats(BaseModel):
    """Statistics from one collection run.

    Attributes:
        sources_processed: Sources that completed
        sources_failed: Sources whose supplier raised
        total_collected: Raw records received
        selected_count: Items in the final list
        per_source: Stats for each completed source
        errors: Error messages for failed sources
    """

    sources_processed: int = 0
    sources_failed: int = 0
    total_collected: int = 0
    selected_count: int = 0
    per_source: list[SourceStats] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class CollectionRun(BaseModel):
    """Selected items from all sources plus run statistics."""

    items: list[VideoItem | DiscussionPost] = Field(default_factory=list)
    stats: CollectionStats = Field(default_factory=CollectionStats)


class ContentPipeline:
    """Filter, deduplicate, score and categorize items per source."""

    def __init__(
        self,
        content_filter: ContentFilter | None = None,
        deduplicator: TitleDeduplicator | None = None,
        scorer: ItemScorer | None = None,
        classifier: CategoryClassifier | None = None,
    ):
        """Initialize pipeline.

        Args:
            content_filter: Item filter
            deduplicator: Title deduplicator
            scorer: Item scorer (weights from settings if not provided)
            classifier: Category classifier
        """
        self.content_filter = content_filter or ContentFilter()
        self.deduplicator = deduplicator or TitleDeduplicator()
        self.scorer = scorer or ItemScorer(ScoringConfig.from_settings(get_config()))
        self.classifier = classifier or CategoryClassifier()

    def process_source(
        self,
        items: Iterable[RawRecord],
        source: SourceConfig,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> tuple[list[VideoItem | DiscussionPost], SourceStats]:
        """Run one source's items through the pipeline.

        Args:
            items: Raw records or candidate items from the source
            source: Source configuration (weight and topics)
            limit: Maximum items to keep (scorer default if not provided)
            now: Reference time shared by every stage

        Returns:
            Tuple of (selected items best first, source stats)
        """
        now = now or datetime.now(UTC)
        records = list(items)
        stats = SourceStats(source_id=source.id, original_count=len(records))

        candidates, stats.skipped_count = build_candidates(records, source)

        filtered = self.content_filter.filter(candidates, now=now)
        stats.filtered_count = len(filtered)

        unique = self.deduplicator.deduplicate(filtered)
        stats.deduplicated_count = len(unique)

        selected = self.scorer.select_top(unique, source, limit=limit, now=now)
        selected = [
            item.model_copy(update={"category": self._categorize(item, source)})
            for item in selected
        ]
        stats.selected_count = len(selected)

        logger.info(
            "Source processed",
            source_id=source.id,
            original=stats.original_count,
            filtered=stats.filtered_count,
            deduplicated=stats.deduplicated_count,
            selected=stats.selected_count,
            selection_rate=f"{stats.selection_rate}%",
        )
        return selected, stats

    def run(
        self,
        sources: Sequence[SourceConfig],
        fetch: Supplier,
        limit: int | None = None,
        now: datetime | None = None,
    ) -> CollectionRun:
        """Collect and process every source.

        Args:
            sources: Sources to collect from, in order
            fetch: Supplier returning raw records for a source
            limit: Items kept per source
            now: Reference time for the whole run

        Returns:
            CollectionRun with the aggregated items and stats
        """
        now = now or datetime.now(UTC)
        run = CollectionRun()
        logger.info("Starting collection", sources=len(sources))

        for source in sources:
            try:
                records = list(fetch(source))
            except Exception as e:
                error = CollectionError(source.id, str(e))
                logger.error(str(error), exc_info=True)
                run.stats.sources_failed += 1
                run.stats.errors.append(str(error))
                continue

            selected, source_stats = self.process_source(records, source, limit=limit, now=now)
            run.items.extend(selected)
            run.stats.total_collected += source_stats.original_count
            run.stats.per_source.append(source_stats)
            run.stats.sources_processed += 1

        run.stats.selected_count = len(run.items)
        logger.info(
            "Collection complete",
            processed=run.stats.sources_processed,
            failed=run.stats.sources_failed,
            collected=run.stats.total_collected,
            selected=run.stats.selected_count,
        )
        return run

    def _categorize(self, item: VideoItem | DiscussionPost, source: SourceConfig) -> Category:
        topics = source.topics or item.tags
        return self.classifier.classify(topics)


__all__ = [
    "ContentPipeline",
    "CollectionRun",
    "CollectionStats",
    "SourceStats",
]
