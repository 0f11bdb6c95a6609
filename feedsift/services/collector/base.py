"""Base DTOs for content collection.

Candidate items arrive from external feed suppliers as plain records with
camelCase keys (`viewCount`, `publishedAt`, `upvoteRatio`). They are
validated into a tagged union discriminated on `type`. Items are frozen:
pipeline stages attach `scoring` and `category` by copying.
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from feedsift.config.categories import Category
from feedsift.config.scoring import ScoringWeights
from feedsift.config.sources import SourceConfig
from feedsift.core.logging import get_logger

logger = get_logger(__name__)


class ItemType(str, Enum):
    """Kinds of candidate items."""

    VIDEO = "video"
    DISCUSSION_POST = "discussion_post"


# Feed suppliers historically tagged items by platform
_TYPE_ALIASES = {
    "youtube": ItemType.VIDEO.value,
    "reddit": ItemType.DISCUSSION_POST.value,
}


class ScoreBreakdown(BaseModel):
    """Per-component scores and the weighted total.

    Attributes:
        engagement: Normalized engagement (0-1)
        recency: Age tier score (0-1)
        topic_match: Keyword relevance (0-1)
        quality: Heuristic quality (0-1)
        source: Raw source weight (a multiplier, not normalized)
        total_score: Weighted sum, rounded to two decimals
        weights: Weight vector used for the total
    """

    model_config = ConfigDict(frozen=True)

    engagement: float = Field(ge=0.0, le=1.0)
    recency: float = Field(ge=0.0, le=1.0)
    topic_match: float = Field(ge=0.0, le=1.0)
    quality: float = Field(ge=0.0, le=1.0)
    source: float = Field(ge=0.0)
    total_score: float
    weights: ScoringWeights


class _CandidateBase(BaseModel):
    """Fields shared by every candidate item."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )

    id: str | None = None
    source_id: str | None = None
    title: str | None = None
    url: str | None = None
    published_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("publishedAt", "published_at", "createdAt"),
    )
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    source_weight: float = Field(default=1.0, ge=0.0)

    scoring: ScoreBreakdown | None = None
    category: Category | None = None

    @field_validator("description", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Treat a null description as empty."""
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        """Treat null tags as no tags."""
        return [] if v is None else v

    @field_validator("published_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Naive timestamps are interpreted as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def content_text(self) -> str:
        """Lowercased `title + " " + description`."""
        return f"{self.title or ''} {self.description}".lower()

    @property
    def key(self) -> str:
        """Best available identifier for logging and selection."""
        return self.id or self.url or self.title or "<untitled>"


def _none_to_zero(v: Any) -> Any:
    return 0 if v is None else v


Count = Annotated[int, BeforeValidator(_none_to_zero)]


class VideoItem(_CandidateBase):
    """Item from a video feed.

    Attributes:
        view_count: Total views
        like_count: Total likes
        comment_count: Total comments
        duration: ISO-8601 duration (e.g. "PT4M13S")
    """

    type: Literal["video"] = "video"
    view_count: Count = 0
    like_count: Count = 0
    comment_count: Count = 0
    duration: str | None = None


class DiscussionPost(_CandidateBase):
    """Item from a discussion forum.

    Attributes:
        score: Net upvotes
        upvote_ratio: Share of upvotes (0-1), None when unknown
        comment_count: Number of comments
        awards: Awards received
    """

    type: Literal["discussion_post"] = "discussion_post"
    score: Count = 0
    upvote_ratio: float | None = Field(default=None, ge=0.0, le=1.0)
    comment_count: Count = 0
    awards: Count = Field(
        default=0,
        validation_alias=AliasChoices("awards", "totalAwardsReceived", "total_awards_received"),
    )


CandidateItem = Annotated[VideoItem | DiscussionPost, Field(discriminator="type")]

_candidate_adapter: TypeAdapter[VideoItem | DiscussionPost] = TypeAdapter(CandidateItem)


def parse_candidate(record: Mapping[str, Any] | VideoItem | DiscussionPost) -> VideoItem | DiscussionPost:
    """Validate one raw record into a candidate item.

    Args:
        record: Raw record or an already-built item

    Returns:
        VideoItem or DiscussionPost

    Raises:
        ValidationError: If the record cannot be parsed
    """
    if isinstance(record, (VideoItem, DiscussionPost)):
        return record
    data = dict(record)
    raw_type = data.get("type")
    if isinstance(raw_type, str):
        data["type"] = _TYPE_ALIASES.get(raw_type.lower(), raw_type.lower())
    return _candidate_adapter.validate_python(data)


def build_candidates(
    records: Iterable[Mapping[str, Any] | VideoItem | DiscussionPost],
    source: SourceConfig | None = None,
) -> tuple[list[VideoItem | DiscussionPost], int]:
    """Validate a batch of raw records, skipping the malformed ones.

    Records missing `sourceId`/`sourceWeight` inherit them from `source`.

    Args:
        records: Raw records from a feed supplier
        source: Source the records were collected from

    Returns:
        Tuple of (valid items, number of skipped records)
    """
    items: list[VideoItem | DiscussionPost] = []
    skipped = 0

    for index, record in enumerate(records):
        if not isinstance(record, (Mapping, VideoItem, DiscussionPost)):
            skipped += 1
            logger.warning(
                "Skipping non-record entry",
                source_id=source.id if source else None,
                index=index,
                record_type=type(record).__name__,
            )
            continue
        if source is not None and isinstance(record, Mapping):
            record = {
                "sourceId": source.id,
                "sourceWeight": source.weight,
                **record,
            }
        try:
            items.append(parse_candidate(record))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "Skipping malformed record",
                source_id=source.id if source else None,
                index=index,
                errors=e.error_count(),
                first_error=e.errors()[0]["msg"] if e.errors() else None,
            )

    return items, skipped


__all__ = [
    "ItemType",
    "ScoreBreakdown",
    "VideoItem",
    "DiscussionPost",
    "CandidateItem",
    "parse_candidate",
    "build_candidates",
]
