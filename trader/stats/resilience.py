"""
Half-time resilience: how often a team squanders a half-time lead or
recovers from a half-time deficit.

Only matches carrying a half-time score count. Level at half-time counts
toward neither bucket. An empty bucket reports 0%.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from trader.parsing.results import TeamMatch, team_matches


@dataclass(frozen=True)
class TeamResilience:
    comeback_rate: float = 0.0
    dropped_rate: float = 0.0
    led_at_half: int = 0
    trailed_at_half: int = 0


@dataclass(frozen=True)
class ResilienceStats:
    home_comeback: float = 0.0
    home_dropped: float = 0.0
    away_comeback: float = 0.0
    away_dropped: float = 0.0


def _rate(hits: int, total: int) -> float:
    return hits / total * 100 if total > 0 else 0.0


def resilience_from_matches(matches: Iterable[TeamMatch]) -> TeamResilience:
    led = dropped = trailed = recovered = 0
    for match in matches:
        if match.ht_scored is None or match.ht_conceded is None:
            continue
        half_time = match.ht_scored - match.ht_conceded
        full_time = match.scored - match.conceded
        if half_time > 0:
            led += 1
            if full_time <= 0:
                dropped += 1
        elif half_time < 0:
            trailed += 1
            if full_time >= 0:
                recovered += 1

    return TeamResilience(
        comeback_rate=_rate(recovered, trailed),
        dropped_rate=_rate(dropped, led),
        led_at_half=led,
        trailed_at_half=trailed,
    )


def team_resilience(
    results_block: Optional[str],
    team: Optional[str],
    venue: Optional[str] = None,
) -> TeamResilience:
    return resilience_from_matches(team_matches(results_block, team, venue))


def calculate_resilience(
    home_results: Optional[str],
    away_results: Optional[str],
    home_team: Optional[str],
    away_team: Optional[str],
) -> ResilienceStats:
    """Home team at home from the home results block, away team away from the away block."""
    home = team_resilience(home_results, home_team, venue="home")
    away = team_resilience(away_results, away_team, venue="away")
    return ResilienceStats(
        home_comeback=home.comeback_rate,
        home_dropped=home.dropped_rate,
        away_comeback=away.comeback_rate,
        away_dropped=away.dropped_rate,
    )
