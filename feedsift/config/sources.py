"""Source (feed) configuration models.

A SourceCatalog is the whole persisted document. Besides the native
`{"sources": [...]}` shape it accepts the legacy feeds document that keeps
video channels and forums in separate `youtube` / `reddit` lists.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from feedsift.config.validators import clamp_source_weight


class SourceType(str, Enum):
    """Kind of feed a source produces."""

    VIDEO = "video"
    DISCUSSION = "discussion"


class SourceConfig(BaseModel):
    """A watched feed.

    Unknown keys (feed URLs, handles) are preserved so a rewrite never
    drops data the pipeline does not understand.

    Attributes:
        id: Stable identifier (channel id or forum name)
        display_name: Name shown in reports
        type: Video channel or discussion forum
        topics: Free-text tags describing the source
        weight: Persisted scoring multiplier
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    id: str = Field(..., min_length=1)
    display_name: str = ""
    type: SourceType
    topics: list[str] = Field(default_factory=list)
    weight: float = Field(default=1.0, ge=0)

    @property
    def label(self) -> str:
        """Display name, falling back to the id."""
        return self.display_name or self.id

    def with_weight(self, weight: float) -> "SourceConfig":
        """Return a copy carrying a clamped weight."""
        return self.model_copy(update={"weight": clamp_source_weight(weight)})


def _legacy_entry(entry: Any, id_key: str, source_type: SourceType, prefix: str) -> Any:
    if not isinstance(entry, dict):
        return entry
    item = dict(entry)
    source_id = item.pop(id_key, None)
    item.setdefault("id", source_id)
    name = item.pop("name", None)
    item.setdefault("displayName", name or f"{prefix}{source_id}")
    item["type"] = source_type.value
    return item


class SourceCatalog(BaseModel):
    """All configured sources, in document order."""

    sources: list[SourceConfig] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_shape(cls, data: Any) -> Any:
        """Convert a `{"youtube": [...], "reddit": [...]}` document."""
        if not isinstance(data, dict) or "sources" in data:
            return data
        if "youtube" not in data and "reddit" not in data:
            return data
        sources = [
            _legacy_entry(e, "channelId", SourceType.VIDEO, "")
            for e in data.get("youtube") or []
        ]
        sources.extend(
            _legacy_entry(e, "subreddit", SourceType.DISCUSSION, "r/")
            for e in data.get("reddit") or []
        )
        return {"sources": sources}

    def get(self, source_id: str) -> SourceConfig | None:
        """Find a source by id."""
        for source in self.sources:
            if source.id == source_id:
                return source
        return None

    def with_sources(self, sources: list[SourceConfig]) -> "SourceCatalog":
        """Return a catalog holding `sources`."""
        return self.model_copy(update={"sources": list(sources)})

    def to_document(self) -> dict[str, Any]:
        """Serialize for persistence."""
        return {
            "sources": [s.model_dump(mode="json", by_alias=True) for s in self.sources],
        }


__all__ = ["SourceType", "SourceConfig", "SourceCatalog"]
