from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import List, Optional

from app.schemas.teams import TeamStats

AMERICAN_ODDS_PATTERN = r"^[+-]\d+$"


class PredictionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    game_id: Optional[int] = None
    home_team: str
    away_team: str
    predicted_winner: str
    probability: float = Field(..., ge=0, le=1)
    american_odds: str = Field(..., pattern=AMERICAN_ODDS_PATTERN)
    notes: str = ""


class Matchup(BaseModel):
    """A game to evaluate. A missing side means the game is skipped."""
    game_id: Optional[int] = None
    home: Optional[TeamStats] = None
    away: Optional[TeamStats] = None


class EvaluateRequest(BaseModel):
    matchups: List[Matchup] = Field(..., min_length=1)
    report_date: Optional[date] = None
    write_report: bool = False


class PredictionBatch(BaseModel):
    date: date
    count: int
    skipped: int = 0
    report_path: Optional[str] = None
    predictions: List[PredictionResult]
