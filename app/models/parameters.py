"""
Model Parameters

Tunable constants for the hockey rating engine. Everything here is
immutable; build an alternate set with ``ModelConfig.from_dict`` or
``dataclasses.replace`` and pass it to the calculator.

Default set:
- Category weights summing to 1.0, leaning on win percentage and goal
  differential, with smaller shares for goaltending, special teams,
  possession, physicality and puck management.
- League-average reference values: 0.6 goal differential per game,
  35 shots per game, .900 save percentage.
- Home-ice bonus of 0.05 rating points.
- Early-season dampening in steps of ten games: a third of the rating
  below 10 games played, two thirds below 20, full weight from 20 on.
- Logistic steepness k = 2.5, so a 0.30 rating gap reads as roughly a
  68/32 game.
"""

import json
import math
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Mapping

WEIGHT_TOLERANCE = 1e-6


@dataclass(frozen=True)
class RatingWeights:
    """Per-category weights applied to normalized features."""
    win_pct: float = 0.30
    goal_diff: float = 0.18
    save_pct: float = 0.08
    special_teams: float = 0.13
    shots_for: float = 0.04
    shots_against: float = 0.04
    corsi_diff: float = 0.05
    fenwick_diff: float = 0.05
    hits_penalties: float = 0.05
    turnovers: float = 0.08

    def __post_init__(self):
        total = self.total()
        if not math.isclose(total, 1.0, abs_tol=WEIGHT_TOLERANCE):
            raise ValueError(f"Rating weights must sum to 1.0, got {total:.6f}")

    def total(self) -> float:
        return sum(getattr(self, f.name) for f in fields(self))

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class NormalizationReference:
    """League-average reference values used to scale per-game rates."""
    avg_goal_diff: float = 0.6
    avg_save_pct: float = 0.900
    save_pct_spread: float = 0.04
    avg_shots: float = 35.0
    possession_scale: float = 10.0
    physicality_scale: float = 5.0
    turnover_scale: float = 10.0


@dataclass(frozen=True)
class ModelConfig:
    """
    Complete parameter set for rating, probability and report notes.

    Attributes:
        weights: Category weights
        reference: Normalization reference values
        home_advantage: Rating bonus added to the home side
        logistic_k: Steepness of the rating-differential logistic curve
        rating_clamp: Ratings are clamped into [-rating_clamp, rating_clamp]
        dampening_games: Games per dampening step
        dampening_divisor: Full weight is reached at (divisor - 1) * dampening_games games
        high_confidence_gap: Rating gap above which notes flag high confidence
    """
    weights: RatingWeights = field(default_factory=RatingWeights)
    reference: NormalizationReference = field(default_factory=NormalizationReference)
    home_advantage: float = 0.05
    logistic_k: float = 2.5
    rating_clamp: float = 2.0
    dampening_games: int = 10
    dampening_divisor: float = 3.0
    high_confidence_gap: float = 0.30

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ModelConfig":
        """Build a config from a partial mapping; missing keys keep their defaults."""
        data = dict(data)
        weights = RatingWeights(**data.pop("weights", {}))
        reference = NormalizationReference(**data.pop("reference", {}))
        return cls(weights=weights, reference=reference, **data)


def load_model_config(path: str) -> ModelConfig:
    """Load ModelConfig overrides from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        return ModelConfig.from_dict(json.load(f))


DEFAULT_MODEL_CONFIG = ModelConfig()
