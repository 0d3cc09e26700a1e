"""
Stat Normalizer

Turns season counters into per-game rates expressed relative to league
reference values, so that teams at different points of the season can be
compared on the same footing.
"""

from dataclasses import dataclass, asdict
from typing import Dict

from app.models.parameters import NormalizationReference
from app.schemas.teams import TeamStats

NEUTRAL_RATIO = 0.5


def safe_ratio(numerator: float, denominator: float, default: float = NEUTRAL_RATIO) -> float:
    """Ratio that falls back to ``default`` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator


def floored_games_played(team: TeamStats) -> int:
    return max(1, team.wins + team.losses + team.overtime_losses)


@dataclass(frozen=True)
class PerGameRates:
    goal_diff: float
    shots_for: float
    shots_against: float
    corsi_diff: float
    fenwick_diff: float
    hits: float
    penalties: float
    turnover_diff: float


@dataclass(frozen=True)
class NormalizedFeatures:
    """Dimensionless features, one per rating category."""
    win_pct: float
    goal_diff: float
    save_pct: float
    special_teams: float
    shots_for: float
    shots_against: float
    corsi_diff: float
    fenwick_diff: float
    hits_penalties: float
    turnovers: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class StatNormalizer:
    def __init__(self, reference: NormalizationReference = None):
        self.reference = reference or NormalizationReference()

    def per_game_rates(self, team: TeamStats) -> PerGameRates:
        gp = floored_games_played(team)
        return PerGameRates(
            goal_diff=(team.goals_for - team.goals_against) / gp,
            shots_for=team.shots_for / gp,
            shots_against=team.shots_against / gp,
            corsi_diff=(team.corsi_for - team.corsi_against) / gp,
            fenwick_diff=(team.fenwick_for - team.fenwick_against) / gp,
            hits=team.hits / gp,
            penalties=team.penalties / gp,
            turnover_diff=(team.takeaways - team.giveaways) / gp,
        )

    def normalize(self, team: TeamStats) -> NormalizedFeatures:
        ref = self.reference
        rates = self.per_game_rates(team)

        win_pct = safe_ratio(team.wins, team.wins + team.losses + team.overtime_losses)
        hits_per_penalty = safe_ratio(rates.hits, rates.penalties + 1.0, 0.0)

        return NormalizedFeatures(
            win_pct=win_pct,
            goal_diff=safe_ratio(rates.goal_diff, ref.avg_goal_diff, 0.0),
            save_pct=safe_ratio(team.save_percentage - ref.avg_save_pct, ref.save_pct_spread, 0.0),
            special_teams=(team.powerplay_percentage + team.penalty_kill_percentage) / 2.0,
            shots_for=safe_ratio(rates.shots_for, ref.avg_shots),
            # An average shots-against team lands at 0.5
            shots_against=safe_ratio(1.5 * ref.avg_shots - rates.shots_against, ref.avg_shots),
            corsi_diff=safe_ratio(rates.corsi_diff, ref.possession_scale, 0.0),
            fenwick_diff=safe_ratio(rates.fenwick_diff, ref.possession_scale, 0.0),
            hits_penalties=safe_ratio(hits_per_penalty, ref.physicality_scale, 0.0),
            turnovers=safe_ratio(rates.turnover_diff, ref.turnover_scale, 0.0),
        )
