"""
Tests for the rating calculator.
"""

import math
from dataclasses import replace

import pytest

from app.models.parameters import ModelConfig, RatingWeights
from app.models.rating import RatingCalculator
from app.schemas.teams import TeamStats


@pytest.fixture
def calculator():
    return RatingCalculator()


class TestDampeningFactor:
    """Test early-season dampening."""

    def test_zero_games_is_minimum(self, calculator):
        assert calculator.dampening_factor(0) == pytest.approx(1 / 3)

    def test_first_step(self, calculator):
        assert calculator.dampening_factor(9) == pytest.approx(1 / 3)
        assert calculator.dampening_factor(10) == pytest.approx(2 / 3)

    def test_full_weight_from_twenty_games(self, calculator):
        assert calculator.dampening_factor(19) == pytest.approx(2 / 3)
        assert calculator.dampening_factor(20) == 1.0
        assert calculator.dampening_factor(82) == 1.0

    def test_never_decreases(self, calculator):
        factors = [calculator.dampening_factor(gp) for gp in range(0, 90)]
        assert factors == sorted(factors)


class TestRating:
    """Test rating computation."""

    def test_average_team_value(self, calculator, team_factory):
        """Hand-computed rating for a league-average 10-8-2 team on the road."""
        team = team_factory("A", wins=10, losses=8, overtime_losses=2)
        expected = (
            0.30 * 0.5
            + 0.08 * 0.125
            + 0.13 * 0.5
            + 0.04 * (30 / 35)
            + 0.04 * (22.5 / 35)
            + 0.05 * 0.8
            + 0.08 * -0.1
        )
        assert calculator.rating(team, is_home=False) == pytest.approx(expected)

    def test_home_bonus(self, calculator, team_factory):
        team = team_factory("A", wins=12, losses=6, overtime_losses=2)
        home = calculator.rating(team, is_home=True)
        away = calculator.rating(team, is_home=False)
        assert home - away == pytest.approx(0.05)

    def test_home_bonus_is_dampened(self, calculator, team_factory):
        team = team_factory("A", wins=3, losses=2, overtime_losses=0)
        home = calculator.rating(team, is_home=True)
        away = calculator.rating(team, is_home=False)
        assert home - away == pytest.approx(0.05 / 3)

    def test_better_record_rates_higher(self, calculator, team_factory):
        strong = team_factory("Strong", wins=15, losses=4, overtime_losses=1)
        weak = team_factory("Weak", wins=5, losses=13, overtime_losses=2)
        assert calculator.rating(strong, False) > calculator.rating(weak, False)

    def test_zero_games_does_not_raise(self, calculator):
        rating = calculator.rating(TeamStats(name="Expansion"), is_home=False)
        assert math.isfinite(rating)

    def test_zero_games_uses_neutral_win_pct_and_minimum_dampening(self, calculator):
        breakdown = calculator.breakdown(TeamStats(name="Expansion"), is_home=False)
        assert breakdown["win_pct"] == pytest.approx(0.30 * 0.5)
        assert breakdown["dampening"] == pytest.approx(1 / 3)

    def test_deterministic(self, calculator, team_factory):
        team = team_factory("A")
        assert calculator.rating(team, True) == calculator.rating(team, True)


class TestRatingClamp:
    """Test that ratings stay within the clamp bound."""

    def test_extreme_positive_input_clamped(self, calculator):
        team = TeamStats(name="Juggernaut", wins=30, goals_for=10_000, corsi_for=100_000)
        assert calculator.rating(team, True) == 2.0

    def test_extreme_negative_input_clamped(self, calculator):
        team = TeamStats(name="Disaster", losses=30, goals_against=10_000, giveaways=100_000)
        assert calculator.rating(team, False) == -2.0

    def test_custom_clamp(self, team_factory):
        calculator = RatingCalculator(ModelConfig(rating_clamp=0.1))
        assert calculator.rating(team_factory("A", wins=20, losses=0, overtime_losses=0), True) == 0.1

    @pytest.mark.parametrize("overrides", [
        {},
        {"wins": 0, "losses": 0, "overtime_losses": 0},
        {"wins": -5, "losses": 2},
        {"save_percentage": 0.0},
        {"shots_against": 10 ** 9},
        {"penalties": -20, "hits": 500},
        {"takeaways": 10 ** 12},
    ])
    def test_rating_finite_and_bounded(self, calculator, team_factory, overrides):
        team = team_factory("A").model_copy(update=overrides)
        for is_home in (True, False):
            rating = calculator.rating(team, is_home)
            assert math.isfinite(rating)
            assert -2.0 <= rating <= 2.0

    def test_non_finite_input_collapses_to_neutral(self, calculator):
        team = TeamStats(name="Broken", wins=10, save_percentage=float("nan"))
        assert calculator.rating(team, False) == 0.0

    def test_breakdown_survives_counters_too_large_for_float(self, calculator):
        """Overflowing counters collapse to a neutral rating in both entry points."""
        team = TeamStats(name="Huge", wins=1, goals_for=10 ** 400)
        breakdown = calculator.breakdown(team, is_home=True)

        assert breakdown["rating"] == 0.0
        assert math.isnan(breakdown["base"])
        assert calculator.rating(team, True) == 0.0


class TestAlternateWeights:
    """Test rating with alternate configuration."""

    def test_win_pct_only(self, team_factory):
        weights = RatingWeights(
            win_pct=1.0, goal_diff=0.0, save_pct=0.0, special_teams=0.0,
            shots_for=0.0, shots_against=0.0, corsi_diff=0.0, fenwick_diff=0.0,
            hits_penalties=0.0, turnovers=0.0,
        )
        config = replace(ModelConfig(), weights=weights, home_advantage=0.0)
        calculator = RatingCalculator(config)
        team = team_factory("A", wins=15, losses=5, overtime_losses=0)

        assert calculator.rating(team, True) == pytest.approx(0.75)

    def test_breakdown_matches_rating(self, calculator, team_factory):
        team = team_factory("A", wins=14, losses=5, overtime_losses=3)
        breakdown = calculator.breakdown(team, is_home=True)
        assert breakdown["rating"] == pytest.approx(calculator.rating(team, True))
        assert breakdown["home_bonus"] == 0.05
