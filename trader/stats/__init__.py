"""Derived statistics over parsed results: volatility, rolling form, resilience."""

from trader.stats.form import RollingForm, rolling_form
from trader.stats.resilience import ResilienceStats, calculate_resilience, team_resilience
from trader.stats.volatility import (
    GoalRange,
    MatchVolatility,
    VolatilityStats,
    calculate_volatility,
    goal_range,
    match_volatility,
    team_volatility,
)

__all__ = [
    "GoalRange",
    "MatchVolatility",
    "ResilienceStats",
    "RollingForm",
    "VolatilityStats",
    "calculate_resilience",
    "calculate_volatility",
    "goal_range",
    "match_volatility",
    "rolling_form",
    "team_resilience",
    "team_volatility",
]
