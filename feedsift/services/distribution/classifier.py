"""Keyword-priority category classifier.

Categories are tried in table order and the first one with a matching
keyword wins. Matching is a case-insensitive substring test, not a word
match: the keyword "ai" also hits "explainers" or "maintenance". Reports
and persisted weights depend on this behavior, so it is kept as is.
"""

from collections.abc import Sequence

from feedsift.config.categories import Category, CategoryTable
from feedsift.core.config_loader import load_category_table


class CategoryClassifier:
    """Maps topic tags to exactly one category.

    Attributes:
        table: Priority-ordered category definitions
    """

    def __init__(self, table: CategoryTable | None = None):
        """Initialize classifier.

        Args:
            table: Category table (packaged defaults if not provided)
        """
        self.table = table or load_category_table()
        self._keywords: list[tuple[Category, tuple[str, ...]]] = [
            (definition.id, tuple(k.lower() for k in definition.keywords if k))
            for definition in self.table.categories
        ]

    def classify(self, topics: Sequence[str]) -> Category:
        """Classify a sequence of topic tags.

        Args:
            topics: Free-text tags (source topics or item tags)

        Returns:
            First matching category in priority order, or Category.OTHER
        """
        lowered = [t.lower() for t in topics if t]
        if not lowered:
            return Category.OTHER

        for category, keywords in self._keywords:
            if any(keyword in topic for topic in lowered for keyword in keywords):
                return category
        return Category.OTHER


__all__ = ["CategoryClassifier"]
