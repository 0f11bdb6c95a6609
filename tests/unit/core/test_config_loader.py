"""Tests for the packaged defaults loader."""

import pytest
import yaml

from feedsift.config import Category, CategoryTable, FilterRules, TopicsConfig
from feedsift.core import config_loader
from feedsift.core.config_loader import (
    clear_global_config_cache,
    load_category_table,
    load_defaults,
    load_filter_rules,
    load_topics_config,
    load_yaml_file,
)
from feedsift.core.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError


@pytest.fixture
def isolated_defaults(tmp_path, monkeypatch):
    """Point the loader at a temporary defaults file.

    Returns:
        Path of the (not yet written) defaults file
    """
    path = tmp_path / "defaults.yaml"
    monkeypatch.setattr(config_loader, "_DEFAULTS_PATH", path)
    clear_global_config_cache()
    yield path
    clear_global_config_cache()


class TestPackagedDefaults:
    """Tests against the shipped defaults.yaml."""

    def test_sections_present(self):
        """Test all sections are present."""
        defaults = load_defaults()
        assert {"topics", "filtering", "categories"} <= set(defaults)

    def test_typed_accessors(self):
        """Test typed accessors return frozen models."""
        assert isinstance(load_topics_config(), TopicsConfig)
        assert isinstance(load_filter_rules(), FilterRules)
        assert isinstance(load_category_table(), CategoryTable)

    def test_accessors_are_cached(self):
        """Test repeated calls return the same instance."""
        assert load_topics_config() is load_topics_config()

    def test_category_priority_order(self):
        """Test categories load in classification priority order."""
        ids = [c.id for c in load_category_table().categories]
        assert ids == [
            Category.AIML,
            Category.TECH,
            Category.SCIENCE,
            Category.CULTURE,
            Category.BUSINESS,
            Category.NEWS,
            Category.TECHNICAL,
        ]

    def test_multipliers(self):
        """Test weight multipliers per category."""
        table = load_category_table()
        assert table.multiplier(Category.AIML) == 1.3
        assert table.multiplier(Category.TECH) == 0.6
        assert table.multiplier(Category.SCIENCE) == 0.4
        assert table.multiplier(Category.CULTURE) == 1.1
        assert table.multiplier(Category.TECHNICAL) == 0.9
        assert table.multiplier(Category.OTHER) == 1.0

    def test_keywords_lowercased(self):
        """Test keyword pools are normalized to lowercase."""
        topics = load_topics_config()
        assert "llm" in topics.keywords.high_priority
        assert all(k == k.lower() for k in topics.keywords.medium_priority)

    def test_clear_cache(self):
        """Test cache clearing produces fresh instances."""
        before = load_filter_rules()
        clear_global_config_cache()
        assert load_filter_rules() is not before
        assert load_filter_rules() == before


class TestBrokenDefaults:
    """Tests for error reporting on bad defaults files."""

    def test_missing_section(self, isolated_defaults):
        """Test missing section raises ConfigNotFoundError."""
        isolated_defaults.write_text(yaml.safe_dump({"topics": {}}))

        with pytest.raises(ConfigNotFoundError) as exc_info:
            load_category_table()
        assert exc_info.value.config_key == "categories"

    def test_invalid_section(self, isolated_defaults):
        """Test invalid section raises ConfigValidationError."""
        isolated_defaults.write_text(
            yaml.safe_dump({"filtering": {"clickbait_patterns": ["(unclosed"]}})
        )

        with pytest.raises(ConfigValidationError):
            load_filter_rules()

    def test_invalid_category_table(self, isolated_defaults):
        """Test a category without keywords is rejected."""
        isolated_defaults.write_text(
            yaml.safe_dump({"categories": [{"id": "aiml", "name": "AI/ML", "keywords": []}]})
        )

        with pytest.raises(ConfigValidationError):
            load_category_table()

    def test_missing_file(self, isolated_defaults):
        """Test missing defaults file raises ConfigError."""
        with pytest.raises(ConfigError):
            load_defaults()


class TestLoadYamlFile:
    """Tests for load_yaml_file."""

    def test_loads_mapping(self, tmp_path):
        """Test a YAML mapping loads as dict."""
        path = tmp_path / "feeds.yaml"
        path.write_text("sources: []\n")
        assert load_yaml_file(path, "sources") == {"sources": []}

    def test_loads_json(self, tmp_path):
        """Test JSON documents load through the YAML parser."""
        path = tmp_path / "feeds.json"
        path.write_text('{"youtube": [], "reddit": []}')
        assert load_yaml_file(path, "sources") == {"youtube": [], "reddit": []}

    def test_missing_file(self, tmp_path):
        """Test missing file raises ConfigError with the path."""
        path = tmp_path / "absent.yaml"
        with pytest.raises(ConfigError) as exc_info:
            load_yaml_file(path, "sources")
        assert exc_info.value.context["config_path"] == str(path)

    def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "feeds.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_yaml_file(path, "sources")

    def test_invalid_yaml(self, tmp_path):
        """Test malformed YAML raises ConfigError."""
        path = tmp_path / "feeds.yaml"
        path.write_text("sources: [unclosed\n")
        with pytest.raises(ConfigError):
            load_yaml_file(path, "sources")
