"""Distribution rebalancing service.

Steers future collection runs toward a desired per-category item count by
rewriting each source's persisted weight. The weight is one of five score
inputs, so this nudges the output mix rather than controlling it.

Algorithm:
1. Classify every source by its topics into per-category buckets
2. For each targeted category with at least one source:
   new = round1(multiplier * max(target / count, 0.3)), or 0.1 when target == 0
3. Apply `new`, clamped to [0.1, 2.0], to every source in the bucket
"""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field

from feedsift.config.categories import Category, CategoryTable, parse_category
from feedsift.config.sources import SourceConfig, SourceType
from feedsift.config.validators import clamp_source_weight, round_half_up
from feedsift.core.config_loader import load_category_table
from feedsift.core.logging import get_logger
from feedsift.infrastructure.source_store import SourceConfigStore
from feedsift.services.distribution.classifier import CategoryClassifier

logger = get_logger(__name__)

MIN_DISTRIBUTION_FACTOR = 0.3
ZERO_TARGET_WEIGHT = 0.1


class WeightChange(BaseModel):
    """One source's weight update."""

    source_id: str
    name: str
    category: Category
    old_weight: float
    new_weight: float

    @property
    def changed(self) -> bool:
        return self.old_weight != self.new_weight


class RebalanceResult(BaseModel):
    """Outcome of applying a distribution target.

    Attributes:
        sources: Full source list with updated weights, in input order
        changes: Weight updates for sources in targeted categories
        ignored: Target keys that were rejected
    """

    sources: list[SourceConfig] = Field(default_factory=list)
    changes: list[WeightChange] = Field(default_factory=list)
    ignored: list[str] = Field(default_factory=list)


class SourceSummary(BaseModel):
    """A source as listed in a distribution report."""

    id: str
    name: str
    weight: float
    type: SourceType


class CategorySummary(BaseModel):
    """Current state of one category.

    Attributes:
        category: Category
        count: Number of sources classified into it
        sources: The sources themselves
        target: Desired item count, when a target was supplied
    """

    category: Category
    count: int = 0
    sources: list[SourceSummary] = Field(default_factory=list)
    target: int | None = None

    @property
    def name(self) -> str:
        return self.category.display_name


def compute_category_weight(
    category: Category,
    target_count: int,
    count_in_category: int,
    table: CategoryTable | None = None,
) -> float:
    """Compute the new weight for every source in a category.

    Args:
        category: Category being rebalanced
        target_count: Desired items from this category
        count_in_category: Sources currently classified into it
        table: Category table supplying the multiplier (packaged defaults
            if not provided)

    Returns:
        Weight rounded half-up to one decimal (not yet clamped)

    Example:
        >>> compute_category_weight(Category.AIML, 5, 5)
        1.3
    """
    if target_count == 0:
        return ZERO_TARGET_WEIGHT
    table = table or load_category_table()
    factor = target_count / max(count_in_category, 1)
    return round_half_up(table.multiplier(category) * max(factor, MIN_DISTRIBUTION_FACTOR), 1)


def parse_targets(targets: Mapping[str, int]) -> tuple[dict[Category, int], list[str]]:
    """Validate a distribution target mapping.

    Keys may be category ids or display names. Unknown keys and counts
    that are not non-negative integers are logged and left out.

    Returns:
        Tuple of (accepted counts per category, ignored keys)
    """
    accepted: dict[Category, int] = {}
    ignored: list[str] = []

    for key, value in targets.items():
        category = parse_category(key)
        if category is None:
            logger.warning("Unknown category in distribution target", key=key)
            ignored.append(str(key))
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            logger.warning("Invalid target count", key=key, value=value)
            ignored.append(str(key))
            continue
        accepted[category] = value

    return accepted, ignored


def rebalance_sources(
    sources: Sequence[SourceConfig],
    targets: Mapping[str, int],
    classifier: CategoryClassifier | None = None,
) -> RebalanceResult:
    """Apply a distribution target to a list of sources.

    Pure: returns new SourceConfig copies and never touches a store.
    Categories absent from `targets`, or with no sources, are left as is.

    Args:
        sources: Current sources
        targets: Category id or display name to desired item count
        classifier: Category classifier (packaged defaults if not provided)

    Returns:
        RebalanceResult with updated sources and the per-source changes
    """
    classifier = classifier or CategoryClassifier()
    accepted, ignored = parse_targets(targets)

    categories = [classifier.classify(s.topics) for s in sources]
    counts: dict[Category, int] = {}
    for category in categories:
        counts[category] = counts.get(category, 0) + 1

    new_weights: dict[Category, float] = {}
    for category, target in accepted.items():
        count = counts.get(category, 0)
        if count == 0:
            logger.debug("No sources in category", category=category.value)
            continue
        new_weights[category] = clamp_source_weight(
            compute_category_weight(category, target, count, classifier.table)
        )
        logger.debug(
            "Category weight computed",
            category=category.value,
            target=target,
            sources=count,
            weight=new_weights[category],
        )

    updated: list[SourceConfig] = []
    changes: list[WeightChange] = []
    for source, category in zip(sources, categories, strict=True):
        if category not in new_weights:
            updated.append(source)
            continue
        new_source = source.with_weight(new_weights[category])
        updated.append(new_source)
        changes.append(
            WeightChange(
                source_id=source.id,
                name=source.label,
                category=category,
                old_weight=source.weight,
                new_weight=new_source.weight,
            )
        )

    return RebalanceResult(sources=updated, changes=changes, ignored=ignored)


class DistributionRebalancer:
    """Reads, rebalances and persists source weights through a store.

    Attributes:
        store: Source configuration store
        classifier: Category classifier
    """

    def __init__(
        self,
        store: SourceConfigStore,
        classifier: CategoryClassifier | None = None,
    ):
        """Initialize rebalancer.

        Args:
            store: Store holding the source catalog
            classifier: Category classifier (packaged defaults if not provided)
        """
        self.store = store
        self.classifier = classifier or CategoryClassifier()

    def rebalance(self, targets: Mapping[str, int]) -> RebalanceResult:
        """Apply `targets` and persist the new weights.

        The read-modify-write runs inside one store transaction, so
        concurrent calls are serialized. Nothing is written when no source
        is affected.

        Args:
            targets: Category id or display name to desired item count

        Returns:
            RebalanceResult describing the applied changes
        """
        logger.info("Rebalancing sources", targets=dict(targets))

        with self.store.transaction() as txn:
            result = rebalance_sources(txn.catalog.sources, targets, self.classifier)
            if result.changes:
                txn.commit(txn.catalog.with_sources(result.sources))

        for change in result.changes:
            if change.changed:
                logger.info(
                    "Source weight updated",
                    source=change.name,
                    category=change.category.value,
                    old=change.old_weight,
                    new=change.new_weight,
                )
        return result

    def current_distribution(self) -> list[CategorySummary]:
        """Summarize how sources are spread across categories.

        Every category in the table is listed, even when empty. Sources
        falling into Other are appended as a final entry only when present.

        Returns:
            CategorySummary per category, in priority order
        """
        summaries = {
            definition.id: CategorySummary(category=definition.id)
            for definition in self.classifier.table.categories
        }

        for source in self.store.read().sources:
            category = self.classifier.classify(source.topics)
            summary = summaries.setdefault(category, CategorySummary(category=category))
            summary.count += 1
            summary.sources.append(
                SourceSummary(
                    id=source.id,
                    name=source.label,
                    weight=source.weight,
                    type=source.type,
                )
            )

        return list(summaries.values())

    def analyze(self, targets: Mapping[str, int] | None = None) -> list[CategorySummary]:
        """Pair the current distribution with desired targets.

        Args:
            targets: Desired counts (category table defaults if not provided)

        Returns:
            CategorySummary per category with `target` filled in
        """
        if targets is None:
            targets = self.classifier.table.default_targets()
        accepted, _ = parse_targets(targets)

        return [
            summary.model_copy(update={"target": accepted.get(summary.category)})
            for summary in self.current_distribution()
        ]


__all__ = [
    "CategorySummary",
    "DistributionRebalancer",
    "RebalanceResult",
    "SourceSummary",
    "WeightChange",
    "compute_category_weight",
    "parse_targets",
    "rebalance_sources",
]
