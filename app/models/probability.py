from typing import Tuple

import numpy as np

from app.models.parameters import DEFAULT_MODEL_CONFIG


class ProbabilityModel:
    """Logistic mapping from rating differential to home win probability."""

    def __init__(self, k: float = DEFAULT_MODEL_CONFIG.logistic_k):
        self.k = k

    def _sigmoid(self, x: float) -> float:
        return 1 / (1 + np.exp(-x))

    def probability(self, rating_home: float, rating_away: float) -> float:
        diff = rating_home - rating_away
        return float(self._sigmoid(self.k * diff))

    def probabilities(self, rating_home: float, rating_away: float) -> Tuple[float, float]:
        p_home = self.probability(rating_home, rating_away)
        return p_home, 1.0 - p_home
