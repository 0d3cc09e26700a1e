"""
Predictions API Router

Runs the NHL rating model over stored games (and writes the daily report),
or over matchups supplied inline in the request body.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import date, datetime

from app.db import get_db, Game
from app.schemas.predictions import EvaluateRequest, PredictionBatch
from app.services.predictions import PredictionService, PredictionRun, get_model_config

router = APIRouter(prefix="/api/predict", tags=["Predictions"])


def get_prediction_service() -> PredictionService:
    return PredictionService(model_config=get_model_config())


def _batch(target_date: date, run: PredictionRun) -> PredictionBatch:
    return PredictionBatch(
        date=target_date,
        count=len(run.results),
        skipped=run.skipped,
        report_path=str(run.report_path) if run.report_path else None,
        predictions=run.results,
    )


def _predict_for_date(target_date: date, db: Session, service: PredictionService) -> PredictionBatch:
    games = db.query(Game).filter(Game.game_date == target_date).order_by(Game.id).all()
    return _batch(target_date, service.predict_games(games, report_date=target_date))


@router.get("", response_model=PredictionBatch)
def predict_today(
    db: Session = Depends(get_db),
    service: PredictionService = Depends(get_prediction_service)
):
    """Predict all games stored for today."""
    return _predict_for_date(date.today(), db, service)


@router.get("/{game_date}", response_model=PredictionBatch)
def predict_for_date(
    game_date: str,
    db: Session = Depends(get_db),
    service: PredictionService = Depends(get_prediction_service)
):
    """
    Predict all games stored for a date.

    Args:
        game_date: Date in YYYY-MM-DD format
    """
    try:
        target_date = datetime.strptime(game_date, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")

    return _predict_for_date(target_date, db, service)


@router.post("/evaluate", response_model=PredictionBatch)
def evaluate_matchups(
    request: EvaluateRequest,
    service: PredictionService = Depends(get_prediction_service)
):
    """Evaluate inline matchups without touching stored games."""
    target_date = request.report_date or date.today()
    run = service.run(request.matchups, report_date=target_date, write_report=request.write_report)
    return _batch(target_date, run)
