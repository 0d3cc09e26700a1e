"""
Rating Calculator

Combines normalized team features into a single power rating suitable for
home-minus-away comparison.
"""

import logging
from typing import Dict, Tuple

import numpy as np

from app.models.normalizer import StatNormalizer, floored_games_played
from app.models.parameters import ModelConfig, DEFAULT_MODEL_CONFIG
from app.schemas.teams import TeamStats

logger = logging.getLogger(__name__)


class RatingCalculator:
    def __init__(self, config: ModelConfig = DEFAULT_MODEL_CONFIG):
        self.config = config
        self.normalizer = StatNormalizer(config.reference)

    def dampening_factor(self, games_played: int) -> float:
        """
        Early-season multiplier, stepping up every ``dampening_games`` games.

        A team with no games gets the minimum, 1 / dampening_divisor.
        """
        gp = max(1, games_played)
        return min(1.0, (1 + gp // self.config.dampening_games) / self.config.dampening_divisor)

    def contributions(self, team: TeamStats) -> Dict[str, float]:
        """Weighted contribution of every category, before home bonus and dampening."""
        features = self.normalizer.normalize(team).as_dict()
        weights = self.config.weights.as_dict()
        return {name: weights[name] * value for name, value in features.items()}

    def _base_rating(self, team: TeamStats) -> Tuple[Dict[str, float], float]:
        """Contributions and their sum; counters too large for a float give NaN."""
        try:
            contributions = self.contributions(team)
        except OverflowError:
            return {}, float("nan")
        return contributions, sum(contributions.values())

    def breakdown(self, team: TeamStats, is_home: bool) -> Dict[str, float]:
        contributions, base = self._base_rating(team)
        home_bonus = self.config.home_advantage if is_home else 0.0
        dampening = self.dampening_factor(floored_games_played(team))
        return {
            **contributions,
            "base": base,
            "home_bonus": home_bonus,
            "dampening": dampening,
            "rating": self._finalize(team.name, (base + home_bonus) * dampening),
        }

    def rating(self, team: TeamStats, is_home: bool) -> float:
        return self.breakdown(team, is_home)["rating"]

    def _finalize(self, team_name: str, rating: float) -> float:
        if not np.isfinite(rating):
            logger.warning(f"Non-finite rating for {team_name}; using neutral 0.0")
            return 0.0
        bound = self.config.rating_clamp
        return float(np.clip(rating, -bound, bound))
