"""
Goal volatility from a team's results.

volatility% = min(mean(CV_scored, CV_conceded) * 100, cap)

CV = sample std (n-1) / mean, 0 when the mean is 0. It is a clamped index,
not a probability. Fewer than `min_matches` results -> the all-zero stats
object with `insufficient_data` set, which tells it apart from a steady team.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from trader.parsing.results import team_matches

DEFAULT_MIN_MATCHES = 2
DEFAULT_CAP_PERCENT = 150.0


@dataclass(frozen=True)
class VolatilityStats:
    volatility_percent: float = 0.0
    mean_scored: float = 0.0
    std_dev_scored: float = 0.0
    scored_cv: float = 0.0
    mean_conceded: float = 0.0
    std_dev_conceded: float = 0.0
    conceded_cv: float = 0.0
    sample_size: int = 0
    insufficient_data: bool = True

    @property
    def mean_total_goals(self) -> float:
        return self.mean_scored + self.mean_conceded


@dataclass(frozen=True)
class GoalRange:
    low: float
    high: float


@dataclass(frozen=True)
class MatchVolatility:
    """Both teams' volatility folded into one match-level view."""

    combined_volatility_percent: float
    home_goal_involvement: float
    away_goal_involvement: float
    match_goal_expectancy: float
    match_range: GoalRange


def _mean_std(values: np.ndarray) -> tuple[float, float]:
    mean = float(np.mean(values))
    std = float(np.std(values, ddof=1))
    return mean, std


def _cv(mean: float, std: float) -> float:
    return std / mean if mean > 0 else 0.0


def calculate_volatility(
    pairs: Sequence[tuple[int, int]],
    min_matches: int = DEFAULT_MIN_MATCHES,
    cap_percent: float = DEFAULT_CAP_PERCENT,
) -> VolatilityStats:
    """
    Volatility of a (scored, conceded) sequence.

    Args:
        pairs: Per-match (scored, conceded) for one team.
        min_matches: Minimum sample for a variance estimate (at least 2).
        cap_percent: Clamp for the volatility index.
    """
    n = len(pairs)
    if n < max(min_matches, 2):
        return VolatilityStats(sample_size=n, insufficient_data=True)

    goals = np.asarray(pairs, dtype=float)
    mean_scored, std_scored = _mean_std(goals[:, 0])
    mean_conceded, std_conceded = _mean_std(goals[:, 1])

    scored_cv = _cv(mean_scored, std_scored)
    conceded_cv = _cv(mean_conceded, std_conceded)
    avg_cv = (scored_cv + conceded_cv) / 2

    return VolatilityStats(
        volatility_percent=min(avg_cv * 100, cap_percent),
        mean_scored=mean_scored,
        std_dev_scored=std_scored,
        scored_cv=scored_cv,
        mean_conceded=mean_conceded,
        std_dev_conceded=std_conceded,
        conceded_cv=conceded_cv,
        sample_size=n,
        insufficient_data=False,
    )


def team_volatility(
    results_block: Optional[str],
    team: Optional[str],
    venue: Optional[str] = None,
    min_matches: int = DEFAULT_MIN_MATCHES,
    cap_percent: float = DEFAULT_CAP_PERCENT,
) -> VolatilityStats:
    """Volatility of `team` from a pasted results block (full-time scores only)."""
    matches = team_matches(results_block, team, venue)
    pairs = [(m.scored, m.conceded) for m in matches]
    return calculate_volatility(pairs, min_matches=min_matches, cap_percent=cap_percent)


def goal_range(stats: VolatilityStats) -> GoalRange:
    """Mean total goals +/- (scored SD + conceded SD), floored at 0."""
    spread = stats.std_dev_scored + stats.std_dev_conceded
    total = stats.mean_total_goals
    return GoalRange(low=max(0.0, total - spread), high=total + spread)


def match_volatility(home: VolatilityStats, away: VolatilityStats) -> MatchVolatility:
    """Average the two teams' volatility, goal involvement and ranges."""
    home_range = goal_range(home)
    away_range = goal_range(away)
    return MatchVolatility(
        combined_volatility_percent=(home.volatility_percent + away.volatility_percent) / 2,
        home_goal_involvement=home.mean_total_goals,
        away_goal_involvement=away.mean_total_goals,
        match_goal_expectancy=(home.mean_total_goals + away.mean_total_goals) / 2,
        match_range=GoalRange(
            low=(home_range.low + away_range.low) / 2,
            high=(home_range.high + away_range.high) / 2,
        ),
    )
