"""Preview ranking, selection and summarization."""

from feedsift.services.preview.ranker import (
    PreviewItem,
    PreviewRanker,
    PreviewStats,
    freshness_label,
)
from feedsift.services.preview.summarize import (
    ItemSummary,
    SummarizationReport,
    Summarizer,
    build_prompt,
    summarize_selected,
)

__all__ = [
    "PreviewItem",
    "PreviewRanker",
    "PreviewStats",
    "freshness_label",
    "ItemSummary",
    "SummarizationReport",
    "Summarizer",
    "build_prompt",
    "summarize_selected",
]
