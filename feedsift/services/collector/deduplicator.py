"""Title-based deduplication.

Runs after filtering, within a single collection batch. Two items are
duplicates when their normalized titles are equal: lowercased, punctuation
stripped, whitespace collapsed. The first occurrence wins.
"""

import re
from collections.abc import Sequence

from feedsift.core.logging import get_logger
from feedsift.services.collector.base import DiscussionPost, VideoItem

logger = get_logger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str | None) -> str:
    """Normalize a title for duplicate detection.

    Args:
        title: Raw title

    Returns:
        Lowercase title without punctuation and with single spaces
    """
    text = (title or "").lower()
    text = _NON_WORD.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


class TitleDeduplicator:
    """Drops items whose normalized title was already seen in the batch."""

    def deduplicate(
        self, items: Sequence[VideoItem | DiscussionPost]
    ) -> list[VideoItem | DiscussionPost]:
        """Keep the first item for each normalized title.

        Args:
            items: Items in priority order

        Returns:
            New list preserving input order
        """
        seen: set[str] = set()
        unique: list[VideoItem | DiscussionPost] = []

        for item in items:
            normalized = normalize_title(item.title)
            if normalized in seen:
                logger.debug("Duplicate title dropped", title=(item.title or "")[:50])
                continue
            seen.add(normalized)
            unique.append(item)

        return unique


__all__ = ["TitleDeduplicator", "normalize_title"]
