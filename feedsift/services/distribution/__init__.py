"""Category classification and distribution steering."""

from feedsift.services.distribution.classifier import CategoryClassifier
from feedsift.services.distribution.rebalancer import (
    CategorySummary,
    DistributionRebalancer,
    RebalanceResult,
    SourceSummary,
    WeightChange,
    compute_category_weight,
    parse_targets,
    rebalance_sources,
)

__all__ = [
    "CategoryClassifier",
    "CategorySummary",
    "DistributionRebalancer",
    "RebalanceResult",
    "SourceSummary",
    "WeightChange",
    "compute_category_weight",
    "parse_targets",
    "rebalance_sources",
]
