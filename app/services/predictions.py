"""
Prediction Service

Evaluates a slate of matchups with the NHL rating model and assembles the
results into PredictionResult records and the daily text report.

Per matchup:
- Rate both teams (home side gets the home-ice bonus)
- Convert the rating gap into win probabilities
- Quote the favorite's probability as American odds
- Attach notes with ratings, probabilities and a high-confidence flag
"""

import concurrent.futures
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from app import config
from app.models.nhl import NHLModel, MatchupProbabilities
from app.models.parameters import ModelConfig, DEFAULT_MODEL_CONFIG, load_model_config
from app.schemas.predictions import Matchup, PredictionResult
from app.schemas.teams import TeamStats
from app.services.report_writer import write_daily_report
from app.utils.logging import get_logger
from app.utils.odds import to_american_odds

logger = get_logger(__name__)


@dataclass
class PredictionRun:
    results: List[PredictionResult]
    skipped: int
    report_path: Optional[Path] = None


def build_notes(probs: MatchupProbabilities, high_confidence_gap: float) -> str:
    notes = (
        f"Home rating: {probs.home_rating:.3f}, Away rating: {probs.away_rating:.3f}. "
        f"HomeProb: {probs.home_win:.3f}, AwayProb: {probs.away_win:.3f}."
    )
    gap = abs(probs.rating_gap)
    if gap > high_confidence_gap:
        notes += f" High confidence: rating gap {gap:.3f} exceeds {high_confidence_gap:.2f}."
    return notes


def get_model_config() -> ModelConfig:
    if config.MODEL_CONFIG_PATH:
        return load_model_config(config.MODEL_CONFIG_PATH)
    return DEFAULT_MODEL_CONFIG


class PredictionService:
    def __init__(
        self,
        model_config: Optional[ModelConfig] = None,
        report_folder: Optional[str] = None,
        max_workers: Optional[int] = None
    ):
        self.model_config = model_config or DEFAULT_MODEL_CONFIG
        self.model = NHLModel(self.model_config)
        self.report_folder = report_folder
        self.max_workers = max_workers if max_workers is not None else config.PREDICTION_WORKERS

    def evaluate_matchup(
        self,
        home: TeamStats,
        away: TeamStats,
        game_id: Optional[int] = None
    ) -> PredictionResult:
        probs = self.model.predict_matchup(home, away)
        winner_prob = probs.winner_probability

        return PredictionResult(
            game_id=game_id,
            home_team=home.name,
            away_team=away.name,
            predicted_winner=probs.winner(home.name, away.name),
            probability=round(winner_prob, 3),
            american_odds=to_american_odds(winner_prob),
            notes=build_notes(probs, self.model_config.high_confidence_gap),
        )

    def _evaluate(self, matchup: Matchup) -> Optional[PredictionResult]:
        if matchup.home is None or matchup.away is None:
            logger.warning(f"Skipping game {matchup.game_id}: missing home or away team")
            return None
        return self.evaluate_matchup(matchup.home, matchup.away, matchup.game_id)

    def run(
        self,
        matchups: Sequence[Matchup],
        report_date: Optional[date] = None,
        write_report: bool = True
    ) -> PredictionRun:
        if self.max_workers > 1 and len(matchups) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                evaluated = list(executor.map(self._evaluate, matchups))
        else:
            evaluated = [self._evaluate(m) for m in matchups]

        results = [r for r in evaluated if r is not None]
        run = PredictionRun(results=results, skipped=len(evaluated) - len(results))

        if write_report:
            run.report_path = write_daily_report(
                results, report_date or date.today(), self.report_folder
            )

        logger.info(f"Predicted {len(results)} games ({run.skipped} skipped)")
        return run

    def predict_matchups(
        self,
        matchups: Sequence[Matchup],
        report_date: Optional[date] = None,
        write_report: bool = True
    ) -> List[PredictionResult]:
        return self.run(matchups, report_date, write_report).results

    def predict_games(
        self,
        games: Iterable,
        report_date: Optional[date] = None,
        write_report: bool = True
    ) -> PredictionRun:
        """Evaluate persisted Game rows."""
        return self.run([matchup_from_game(g) for g in games], report_date, write_report)


def matchup_from_game(game) -> Matchup:
    return Matchup(
        game_id=game.id,
        home=TeamStats.model_validate(game.home_team) if game.home_team else None,
        away=TeamStats.model_validate(game.away_team) if game.away_team else None,
    )
