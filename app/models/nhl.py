from dataclasses import dataclass
from typing import Optional

from app.config import TOO_CLOSE_TO_CALL
from app.models.parameters import ModelConfig, DEFAULT_MODEL_CONFIG
from app.models.probability import ProbabilityModel
from app.models.rating import RatingCalculator
from app.schemas.teams import TeamStats


@dataclass(frozen=True)
class MatchupProbabilities:
    home_rating: float
    away_rating: float
    home_win: float
    away_win: float

    @property
    def rating_gap(self) -> float:
        return self.home_rating - self.away_rating

    @property
    def winner_probability(self) -> float:
        return max(self.home_win, self.away_win)

    def winner(self, home_name: str, away_name: str) -> str:
        if self.home_win == self.away_win:
            return TOO_CLOSE_TO_CALL
        return home_name if self.home_win > self.away_win else away_name


class NHLModel:
    sport = "NHL"

    def __init__(self, config: Optional[ModelConfig] = None):
        self.config = config or DEFAULT_MODEL_CONFIG
        self.rating_calculator = RatingCalculator(self.config)
        self.probability_model = ProbabilityModel(self.config.logistic_k)

    def predict_matchup(self, home: TeamStats, away: TeamStats) -> MatchupProbabilities:
        home_rating = self.rating_calculator.rating(home, is_home=True)
        away_rating = self.rating_calculator.rating(away, is_home=False)

        home_win, away_win = self.probability_model.probabilities(home_rating, away_rating)

        return MatchupProbabilities(
            home_rating=home_rating,
            away_rating=away_rating,
            home_win=home_win,
            away_win=away_win,
        )
