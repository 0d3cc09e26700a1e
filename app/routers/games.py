from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from app.db import get_db, Game, Team
from app.schemas.games import GameCreate, GameRead, GameUpdate

router = APIRouter(prefix="/api/games", tags=["Games"])


def _to_read(game: Game) -> GameRead:
    return GameRead(
        id=game.id,
        external_id=game.external_id,
        home_team_id=game.home_team_id,
        away_team_id=game.away_team_id,
        home_team_name=game.home_team.name if game.home_team else None,
        away_team_name=game.away_team.name if game.away_team else None,
        game_date=game.game_date,
    )


def _get_game_or_404(db: Session, game_id: int) -> Game:
    game = db.query(Game).filter(Game.id == game_id).first()
    if not game:
        raise HTTPException(status_code=404, detail=f"Game not found with id {game_id}")
    return game


def _require_team(db: Session, team_id: int) -> None:
    if not db.query(Team).filter(Team.id == team_id).first():
        raise HTTPException(status_code=404, detail=f"Team not found with id {team_id}")


@router.get("", response_model=List[GameRead])
def list_games(
    game_date: Optional[date] = Query(None, alias="date", description="Filter by date (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    query = db.query(Game)

    if game_date:
        query = query.filter(Game.game_date == game_date)

    return [_to_read(g) for g in query.order_by(Game.game_date, Game.id).all()]


@router.get("/{game_id}", response_model=GameRead)
def get_game(game_id: int, db: Session = Depends(get_db)):
    return _to_read(_get_game_or_404(db, game_id))


@router.post("", response_model=GameRead, status_code=201)
def create_game(payload: GameCreate, db: Session = Depends(get_db)):
    _require_team(db, payload.home_team_id)
    _require_team(db, payload.away_team_id)

    game = Game(**payload.model_dump())
    db.add(game)
    db.commit()
    db.refresh(game)
    return _to_read(game)


@router.put("/{game_id}", response_model=GameRead)
def update_game(game_id: int, payload: GameUpdate, db: Session = Depends(get_db)):
    game = _get_game_or_404(db, game_id)

    updates = payload.model_dump(exclude_unset=True)
    for key in ("home_team_id", "away_team_id"):
        if updates.get(key) is not None:
            _require_team(db, updates[key])

    for key, value in updates.items():
        setattr(game, key, value)

    db.commit()
    db.refresh(game)
    return _to_read(game)


@router.delete("/{game_id}", status_code=204)
def delete_game(game_id: int, db: Session = Depends(get_db)):
    game = _get_game_or_404(db, game_id)
    db.delete(game)
    db.commit()
