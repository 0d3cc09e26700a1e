from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.db import get_db, Team
from app.schemas.teams import TeamCreate, TeamRead, TeamStats

router = APIRouter(prefix="/api/teams", tags=["Teams"])

STAT_EXCLUDE = set(TeamStats.model_computed_fields)


def _get_team_or_404(db: Session, team_id: int) -> Team:
    team = db.query(Team).filter(Team.id == team_id).first()
    if not team:
        raise HTTPException(status_code=404, detail=f"Team not found with id {team_id}")
    return team


@router.get("", response_model=List[TeamRead])
def list_teams(db: Session = Depends(get_db)):
    return db.query(Team).order_by(Team.name).all()


@router.get("/{team_id}", response_model=TeamRead)
def get_team(team_id: int, db: Session = Depends(get_db)):
    return _get_team_or_404(db, team_id)


@router.post("", response_model=TeamRead, status_code=201)
def create_team(payload: TeamCreate, db: Session = Depends(get_db)):
    team = Team(**payload.model_dump(exclude=STAT_EXCLUDE))
    db.add(team)
    db.commit()
    db.refresh(team)
    return team


@router.put("/{team_id}", response_model=TeamRead)
def update_team(team_id: int, payload: TeamCreate, db: Session = Depends(get_db)):
    team = _get_team_or_404(db, team_id)

    for key, value in payload.model_dump(exclude=STAT_EXCLUDE).items():
        setattr(team, key, value)

    db.commit()
    db.refresh(team)
    return team


@router.delete("/{team_id}", status_code=204)
def delete_team(team_id: int, db: Session = Depends(get_db)):
    team = _get_team_or_404(db, team_id)
    db.delete(team)
    db.commit()
