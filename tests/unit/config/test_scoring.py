"""Unit tests for scoring config models."""

import pytest
from pydantic import ValidationError

from feedsift.config import ScoringConfig, ScoringWeights
from feedsift.core.config import Config


class TestScoringWeights:
    """Tests for ScoringWeights."""

    def test_defaults(self):
        """Test default weight vector."""
        weights = ScoringWeights()
        assert weights.engagement == 0.3
        assert weights.recency == 0.25
        assert weights.topic_match == 0.25
        assert weights.quality == 0.15
        assert weights.source == 0.05

    def test_sum_validated(self):
        """Test weights must sum to 1.0."""
        with pytest.raises(ValidationError, match="must sum to 1.0"):
            ScoringWeights(engagement=0.5)

    def test_custom_valid(self):
        """Test a custom vector that sums to 1.0."""
        weights = ScoringWeights(engagement=0.2, recency=0.2, topic_match=0.4, quality=0.1, source=0.1)
        assert weights.topic_match == 0.4

    def test_frozen(self):
        """Test weights are immutable."""
        weights = ScoringWeights()
        with pytest.raises(ValidationError):
            weights.engagement = 0.9

    def test_from_settings(self):
        """Test weights built from settings overrides."""
        config = Config(_env_file=None, weight_engagement=0.5, weight_recency=0.05)
        weights = ScoringWeights.from_settings(config)
        assert weights.engagement == 0.5
        assert weights.recency == 0.05
        assert weights.quality == 0.15

    def test_from_settings_invalid_sum(self):
        """Test overrides that break the sum are rejected."""
        config = Config(_env_file=None, weight_engagement=0.9)
        with pytest.raises(ValidationError):
            ScoringWeights.from_settings(config)


class TestScoringConfig:
    """Tests for ScoringConfig."""

    def test_defaults(self):
        """Test default pool multipliers and thresholds."""
        config = ScoringConfig()
        assert config.high_priority_weight == 0.4
        assert config.medium_priority_weight == 0.2
        assert config.source_topic_weight == 0.3
        assert config.interest_weight == 0.1
        assert config.exclude_penalty == 0.5
        assert config.min_video_seconds == 300
        assert config.max_video_seconds == 3600
        assert config.default_limit == 3

    def test_from_settings(self):
        """Test items per source feeds the default limit."""
        config = ScoringConfig.from_settings(Config(_env_file=None, items_per_source=5))
        assert config.default_limit == 5
        assert config.weights == ScoringWeights()
