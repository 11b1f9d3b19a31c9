"""
Raw match-results list parser.

One line per match:

    12/10/2024  Man City v Liverpool  2-1 (1-0)

Date (optionally led by a weekday, "Sat 12 Oct") and half-time score are
optional. A line that does not fit is a SkippedLine, not an error: results lists routinely carry headers and blank
lines, and one bad line never aborts the rest of the block.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

from trader.parsing.tokens import split_lines

logger = logging.getLogger(__name__)

_WEEKDAY = r"(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)[a-z]*\.?,?\s+)?"

_DATE = (
    r"(?P<date>" + _WEEKDAY + r"(?:\d{4}-\d{2}-\d{2}"
    r"|\d{1,2}[/.]\d{1,2}(?:[/.]\d{2,4})?"
    r"|\d{1,2}\s+[A-Z][a-z]{2}(?:\s+\d{4})?))"
)

RESULT_LINE_RE = re.compile(
    r"^\s*(?:" + _DATE + r"\s+)?"
    r"(?P<home>.+?)\s+v\s+(?P<away>.+?)\s+"
    r"(?P<ft_home>\d+)\s*-\s*(?P<ft_away>\d+)"
    r"(?:\s*\(\s*(?P<ht_home>\d+)\s*-\s*(?P<ht_away>\d+)\s*\))?\s*$"
)


@dataclass(frozen=True)
class MatchResultRecord:
    """One parsed result line. Half-time goals are None when not given."""

    home_team: str
    away_team: str
    ft_home: int
    ft_away: int
    ht_home: Optional[int] = None
    ht_away: Optional[int] = None
    date: Optional[str] = None

    @property
    def has_half_time(self) -> bool:
        return self.ht_home is not None and self.ht_away is not None


@dataclass(frozen=True)
class ParsedLine:
    record: MatchResultRecord


@dataclass(frozen=True)
class SkippedLine:
    line: str
    reason: str


LineOutcome = Union[ParsedLine, SkippedLine]


@dataclass(frozen=True)
class TeamMatch:
    """A result seen from one team's side."""

    venue: str  # "home" or "away"
    scored: int
    conceded: int
    ht_scored: Optional[int] = None
    ht_conceded: Optional[int] = None

    @property
    def points(self) -> int:
        if self.scored > self.conceded:
            return 3
        if self.scored == self.conceded:
            return 1
        return 0


def parse_result_line(line: str) -> LineOutcome:
    """Parse one results line into a ParsedLine or a SkippedLine."""
    match = RESULT_LINE_RE.match(line or "")
    if not match:
        return SkippedLine(line=line, reason="no_match")

    try:
        ft_home = int(match.group("ft_home"))
        ft_away = int(match.group("ft_away"))
        ht_home = match.group("ht_home")
        ht_away = match.group("ht_away")
        record = MatchResultRecord(
            home_team=match.group("home").strip(),
            away_team=match.group("away").strip(),
            ft_home=ft_home,
            ft_away=ft_away,
            ht_home=int(ht_home) if ht_home is not None else None,
            ht_away=int(ht_away) if ht_away is not None else None,
            date=match.group("date"),
        )
    except (TypeError, ValueError) as e:
        logger.warning(f"Malformed score in result line {line!r}: {e}")
        return SkippedLine(line=line, reason="bad_score")

    return ParsedLine(record=record)


def parse_results_block(data: Optional[str]) -> list[MatchResultRecord]:
    """All parseable records of a results block, in input order (most recent first)."""
    records = []
    skipped = 0
    for line in split_lines(data):
        outcome = parse_result_line(line)
        if isinstance(outcome, ParsedLine):
            records.append(outcome.record)
        else:
            skipped += 1
    if skipped:
        logger.debug("Results block: %d parsed, %d skipped", len(records), skipped)
    return records


def team_perspective(
    record: MatchResultRecord,
    team: Optional[str],
    venue: Optional[str] = None,
) -> Optional[TeamMatch]:
    """
    View a record from the target team's side.

    The target matches a side by case-insensitive substring containment,
    checked independently for the home and away names (home first). With
    `venue` set, only that side is considered. Empty target or no match ->
    None (the record contributes nothing for this team).
    """
    target = (team or "").strip().lower()
    if not target:
        return None

    if venue in (None, "home") and target in record.home_team.lower():
        return TeamMatch(
            venue="home",
            scored=record.ft_home,
            conceded=record.ft_away,
            ht_scored=record.ht_home,
            ht_conceded=record.ht_away,
        )
    if venue in (None, "away") and target in record.away_team.lower():
        return TeamMatch(
            venue="away",
            scored=record.ft_away,
            conceded=record.ft_home,
            ht_scored=record.ht_away,
            ht_conceded=record.ht_home,
        )
    return None


def team_matches(
    data: Optional[str],
    team: Optional[str],
    venue: Optional[str] = None,
) -> list[TeamMatch]:
    """Parse a results block and keep the target team's matches."""
    if not (team or "").strip():
        return []
    matches = []
    for record in parse_results_block(data):
        seen = team_perspective(record, team, venue)
        if seen is not None:
            matches.append(seen)
    return matches
