"""
Tests for model parameters.
"""

import json
from dataclasses import replace

import pytest

from app.models.parameters import (
    DEFAULT_MODEL_CONFIG,
    ModelConfig,
    NormalizationReference,
    RatingWeights,
    load_model_config,
)


class TestRatingWeights:
    """Test weight validation."""

    def test_defaults_sum_to_one(self):
        assert RatingWeights().total() == pytest.approx(1.0)

    def test_unbalanced_weights_rejected(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            RatingWeights(win_pct=0.50)

    def test_replace_is_validated(self):
        with pytest.raises(ValueError):
            replace(RatingWeights(), turnovers=0.0)

    def test_as_dict_keys(self):
        weights = RatingWeights().as_dict()
        assert len(weights) == 10
        assert weights["win_pct"] == 0.30

    def test_immutable(self):
        with pytest.raises(AttributeError):
            RatingWeights().win_pct = 0.5


class TestModelConfig:
    """Test config construction."""

    def test_defaults(self):
        config = ModelConfig()
        assert config.home_advantage == 0.05
        assert config.logistic_k == 2.5
        assert config.rating_clamp == 2.0
        assert config.high_confidence_gap == 0.30

    def test_from_dict_partial(self):
        config = ModelConfig.from_dict({"logistic_k": 4.0, "reference": {"avg_shots": 30.0}})

        assert config.logistic_k == 4.0
        assert config.reference.avg_shots == 30.0
        assert config.reference.avg_goal_diff == NormalizationReference().avg_goal_diff
        assert config.weights == RatingWeights()

    def test_from_dict_validates_weights(self):
        with pytest.raises(ValueError):
            ModelConfig.from_dict({"weights": {"win_pct": 0.9}})

    def test_round_trip_dict(self):
        assert ModelConfig.from_dict(DEFAULT_MODEL_CONFIG.to_dict()) == DEFAULT_MODEL_CONFIG


class TestLoadModelConfig:
    """Test loading overrides from JSON."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "model.json"
        path.write_text(json.dumps({"home_advantage": 0.0, "high_confidence_gap": 0.5}))

        config = load_model_config(str(path))

        assert config.home_advantage == 0.0
        assert config.high_confidence_gap == 0.5
        assert config.logistic_k == 2.5

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_model_config(str(tmp_path / "missing.json"))
