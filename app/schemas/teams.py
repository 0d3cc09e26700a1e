from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from datetime import datetime
from typing import Optional

PERCENTAGE_FIELDS = ("powerplay_percentage", "penalty_kill_percentage", "save_percentage")


def to_fraction(value: float) -> float:
    """
    Percentages are stored as fractions; values above 1 are read as 0-100.

    Exactly 1.0 is ambiguous and stays a fraction (100%), so a 1% figure must
    be sent as 0.01.
    """
    return value / 100.0 if value > 1.0 else value


class TeamStats(BaseModel):
    """
    Season statistics for one team.

    Counters are season totals. Percentage fields are fractions in [0, 1];
    values on the 0-100 scale are converted on the way in.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True)

    name: str = Field(..., min_length=1, max_length=200)
    wins: int = 0
    losses: int = 0
    overtime_losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    shots_for: int = 0
    shots_against: int = 0
    hits: int = 0
    powerplays: int = 0
    penalties: int = 0
    powerplay_percentage: float = 0.0
    penalty_kill_percentage: float = 0.0
    save_percentage: float = 0.0
    giveaways: int = 0
    takeaways: int = 0
    corsi_for: int = 0
    corsi_against: int = 0
    fenwick_for: int = 0
    fenwick_against: int = 0
    opponents_corsi_for: int = 0
    opponents_fenwick_for: int = 0

    @field_validator(*PERCENTAGE_FIELDS)
    @classmethod
    def normalize_percentage(cls, v: float) -> float:
        return to_fraction(v)

    @computed_field
    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.overtime_losses

    @computed_field
    @property
    def goal_differential(self) -> int:
        return self.goals_for - self.goals_against

    @computed_field
    @property
    def points(self) -> int:
        return self.wins * 2 + self.overtime_losses


class TeamCreate(TeamStats):
    model_config = ConfigDict(frozen=False, from_attributes=True)

    external_id: Optional[str] = Field(None, max_length=100)


class TeamRead(TeamStats):
    id: int
    external_id: Optional[str] = None
    updated_at: Optional[datetime] = None
