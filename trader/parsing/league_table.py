"""
League table -> style quadrant (goals for vs goals against per game).

Rows look like "1. Arsenal  20  14  4  2  41  15  26  46"
(rank, team, GP, W, D, L, GF, GA, GD, Pts; GD and Pts may be absent).
The numeric columns are anchored to the end of the row, so names ending in
digits ("Schalke 04") stay whole. Rows whose W + D + L differs from GP are
skipped along with anything else that does not match.
The quadrant is for display only; flags do not read it.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from trader.parsing.tokens import split_lines

logger = logging.getLogger(__name__)

LEAGUE_ROW_RE = re.compile(
    r"^\s*\d+\.?\s+(?P<name>.+?)\s+(?P<gp>\d+)\s+(?P<w>\d+)\s+(?P<d>\d+)"
    r"\s+(?P<l>\d+)\s+(?P<gf>\d+)\s+(?P<ga>\d+)(?:\s+(?P<gd>[+-]?\d+)\s+(?P<pts>\d+))?\s*$"
)


@dataclass(frozen=True)
class QuadrantPoint:
    name: str
    goals_for_per_game: float
    goals_against_per_game: float
    games_played: int
    role: str = "league"  # "home", "away" or "league"


@dataclass(frozen=True)
class LeagueQuadrant:
    """Point cloud plus the GP-weighted league averages (reference lines)."""

    teams: list[QuadrantPoint]
    avg_goals_for: float = 0.0
    avg_goals_against: float = 0.0

    @property
    def team_count(self) -> int:
        return len(self.teams)


def _role_for(name: str, home_team: Optional[str], away_team: Optional[str]) -> str:
    lower = name.lower()
    if home_team and home_team.lower() in lower:
        return "home"
    if away_team and away_team.lower() in lower:
        return "away"
    return "league"


def parse_league_table(
    data: Optional[str],
    home_team: Optional[str] = None,
    away_team: Optional[str] = None,
) -> LeagueQuadrant:
    """
    Parse a pasted league table into quadrant points.

    League averages are total GF (GA) over total games played, i.e. weighted
    by games played. Rows with 0 GP are skipped.
    """
    teams: list[QuadrantPoint] = []
    total_gf = 0
    total_ga = 0
    total_gp = 0

    for line in split_lines(data):
        match = LEAGUE_ROW_RE.match(line)
        if not match:
            continue
        gp = int(match.group("gp"))
        if gp <= 0:
            continue
        if int(match.group("w")) + int(match.group("d")) + int(match.group("l")) != gp:
            logger.debug("League table: inconsistent row skipped: %r", line)
            continue
        gf = int(match.group("gf"))
        ga = int(match.group("ga"))
        name = match.group("name").strip()

        total_gf += gf
        total_ga += ga
        total_gp += gp
        teams.append(QuadrantPoint(
            name=name,
            goals_for_per_game=gf / gp,
            goals_against_per_game=ga / gp,
            games_played=gp,
            role=_role_for(name, home_team, away_team),
        ))

    if not teams:
        return LeagueQuadrant(teams=[])

    logger.debug("League table: %d teams parsed", len(teams))
    return LeagueQuadrant(
        teams=teams,
        avg_goals_for=total_gf / total_gp,
        avg_goals_against=total_ga / total_gp,
    )
