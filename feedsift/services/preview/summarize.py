"""Summarization of selected previews.

The summarizer itself is an external text-in/text-out callable (usually a
language model client). This module builds its input from each selected
item, trims the output and keeps one failure from stopping the batch.
"""

import re
from collections.abc import Callable, Iterable
from typing import Literal

from pydantic import BaseModel, Field

from feedsift.config.categories import Category
from feedsift.core.exceptions import SummarizationError
from feedsift.core.logging import get_logger
from feedsift.services.collector.base import DiscussionPost, VideoItem
from feedsift.services.preview.ranker import PreviewItem

logger = get_logger(__name__)

Summarizer = Callable[[str], str]

_WHITESPACE = re.compile(r"\s+")

MAX_SUMMARY_LENGTH = 300
MAX_CONTENT_LENGTH = 4000
MAX_CONTEXT_TAGS = 10


class ItemSummary(BaseModel):
    """Summary of one selected item.

    Attributes:
        item_id: Item identifier
        title: Item title
        url: Item URL
        category: Category of the preview
        summary: Summary text (empty on failure)
        method: "ai" on success, "error" on failure
    """

    item_id: str
    title: str | None = None
    url: str | None = None
    category: Category
    summary: str = ""
    method: Literal["ai", "error"] = "ai"


class SummarizationReport(BaseModel):
    """Outcome of summarizing a selection."""

    summaries: list[ItemSummary] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for s in self.summaries if s.method == "ai")

    @property
    def failed(self) -> int:
        return len(self.errors)


def _normalize_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _limit(text: str, max_length: int) -> str:
    clean = _normalize_whitespace(text)
    return clean[:max_length] + "…" if len(clean) > max_length else clean


def build_prompt(item: VideoItem | DiscussionPost, max_content_length: int = MAX_CONTENT_LENGTH) -> str:
    """Build the summarizer input for one item.

    Args:
        item: Item to summarize
        max_content_length: Budget for context; the description gets a third

    Returns:
        Prompt text with URL, title and context
    """
    parts = []
    if item.description:
        parts.append(_limit(item.description, max_content_length // 3))
    if item.tags:
        parts.append("Tags: " + ", ".join(item.tags[:MAX_CONTEXT_TAGS]))
    context = "\n\n".join(parts)

    return (
        f"URL: {item.url or ''}\n"
        f"Title: {item.title or ''}\n\n"
        f"Context:\n{context}"
    )


def _truncate(summary: str, max_length: int) -> str:
    if len(summary) > max_length:
        return summary[: max_length - 3] + "..."
    return summary


def summarize_selected(
    previews: Iterable[PreviewItem],
    summarizer: Summarizer,
    max_summary_length: int = MAX_SUMMARY_LENGTH,
) -> SummarizationReport:
    """Summarize every selected preview.

    Items are processed in order. A summarizer error or empty reply is
    recorded for that item and the batch continues.

    Args:
        previews: Previews, of which only `selected` ones are summarized
        summarizer: External callable mapping prompt text to summary text
        max_summary_length: Longer summaries are cut and end in "..."

    Returns:
        SummarizationReport with one entry per selected preview
    """
    report = SummarizationReport()
    selected = [p for p in previews if p.selected]
    logger.info("Summarizing selection", count=len(selected))

    for preview in selected:
        item = preview.item
        entry = ItemSummary(
            item_id=preview.key,
            title=item.title,
            url=item.url,
            category=preview.category,
        )
        try:
            text = (summarizer(build_prompt(item)) or "").strip()
            if not text:
                raise SummarizationError(preview.key, "empty summary")
        except SummarizationError as e:
            logger.warning(str(e), item_id=preview.key)
            report.errors.append(str(e))
            entry.method = "error"
        except Exception as e:
            error = SummarizationError(preview.key, str(e))
            logger.error(str(error), exc_info=True)
            report.errors.append(str(error))
            entry.method = "error"
        else:
            entry.summary = _truncate(text, max_summary_length)
        report.summaries.append(entry)

    logger.info(
        "Summarization complete",
        succeeded=report.succeeded,
        failed=report.failed,
    )
    return report


__all__ = [
    "ItemSummary",
    "SummarizationReport",
    "Summarizer",
    "build_prompt",
    "summarize_selected",
]
