"""Unit tests for source configuration models."""

import pytest
from pydantic import ValidationError

from feedsift.config import SourceCatalog, SourceConfig, SourceType


class TestSourceConfig:
    """Tests for SourceConfig."""

    def test_camel_case_input(self):
        """Test camelCase keys populate snake_case fields."""
        source = SourceConfig.model_validate(
            {"id": "UC1", "displayName": "Channel", "type": "video", "topics": ["AI"]}
        )
        assert source.display_name == "Channel"
        assert source.type is SourceType.VIDEO
        assert source.weight == 1.0

    def test_unknown_keys_preserved(self):
        """Test extra keys survive a round trip."""
        source = SourceConfig.model_validate(
            {"id": "UC1", "type": "video", "feedUrl": "https://example.com/feed.xml"}
        )
        dumped = source.model_dump(mode="json", by_alias=True)
        assert dumped["feedUrl"] == "https://example.com/feed.xml"

    def test_label_falls_back_to_id(self):
        """Test label uses the id when no display name is set."""
        assert SourceConfig(id="UC1", type=SourceType.VIDEO).label == "UC1"

    def test_with_weight_clamps(self):
        """Test with_weight clamps into [0.1, 2.0] and copies."""
        source = SourceConfig(id="UC1", type=SourceType.VIDEO, weight=1.0)

        assert source.with_weight(3.3).weight == 2.0
        assert source.with_weight(0.0).weight == 0.1
        assert source.with_weight(1.3).weight == 1.3
        assert source.weight == 1.0

    def test_negative_weight_rejected(self):
        """Test negative weights are invalid."""
        with pytest.raises(ValidationError):
            SourceConfig(id="UC1", type=SourceType.VIDEO, weight=-1)

    def test_type_required(self):
        """Test type must be video or discussion."""
        with pytest.raises(ValidationError):
            SourceConfig.model_validate({"id": "UC1", "type": "podcast"})


class TestSourceCatalog:
    """Tests for SourceCatalog."""

    def test_native_shape(self):
        """Test the native sources document."""
        catalog = SourceCatalog.model_validate(
            {"sources": [{"id": "python", "type": "discussion", "topics": ["programming"]}]}
        )
        assert len(catalog.sources) == 1
        assert catalog.sources[0].type is SourceType.DISCUSSION

    def test_legacy_shape(self, legacy_feeds_document):
        """Test the youtube/reddit document is converted."""
        catalog = SourceCatalog.model_validate(legacy_feeds_document)

        assert [s.id for s in catalog.sources] == [
            "UC_ml_1",
            "UC_math_1",
            "UC_sport_1",
            "MachineLearning",
            "worldnews",
        ]
        papers = catalog.get("UC_ml_1")
        assert papers is not None
        assert papers.display_name == "Two Minute Papers"
        assert papers.type is SourceType.VIDEO

        forum = catalog.get("MachineLearning")
        assert forum is not None
        assert forum.display_name == "r/MachineLearning"
        assert forum.type is SourceType.DISCUSSION
        assert forum.weight == 1.1

    def test_get_missing(self, legacy_feeds_document):
        """Test get returns None for unknown ids."""
        assert SourceCatalog.model_validate(legacy_feeds_document).get("nope") is None

    def test_to_document(self, legacy_feeds_document):
        """Test serialization keeps camelCase keys and extra fields."""
        document = SourceCatalog.model_validate(legacy_feeds_document).to_document()

        first = document["sources"][0]
        assert first["displayName"] == "Two Minute Papers"
        assert first["feedUrl"].startswith("https://www.youtube.com/")
        assert first["type"] == "video"

    def test_document_round_trip(self, legacy_feeds_document):
        """Test a serialized catalog parses back to the same catalog."""
        catalog = SourceCatalog.model_validate(legacy_feeds_document)
        assert SourceCatalog.model_validate(catalog.to_document()) == catalog

    def test_with_sources(self, legacy_feeds_document):
        """Test with_sources returns a new catalog."""
        catalog = SourceCatalog.model_validate(legacy_feeds_document)
        updated = catalog.with_sources(catalog.sources[:1])

        assert len(updated.sources) == 1
        assert len(catalog.sources) == 5
