from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class GameCreate(BaseModel):
    home_team_id: int
    away_team_id: int
    game_date: date
    external_id: Optional[str] = Field(None, max_length=100)


class GameUpdate(BaseModel):
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    game_date: Optional[date] = None


class GameRead(BaseModel):
    id: int
    external_id: Optional[str] = None
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    home_team_name: Optional[str] = None
    away_team_name: Optional[str] = None
    game_date: date

    class Config:
        from_attributes = True
