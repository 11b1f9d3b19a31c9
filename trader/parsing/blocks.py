"""
Row-table block parsers: PPG, Index & Edge, Overall / At-Venue stats.

All three blocks are "Name  HomeVal  AwayVal" tables (the PPG block carries
extra columns around the home/away pair). Labels are looked up with the
row search first and the token scan as fallback (see fields.py).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from trader.parsing.fields import labeled_values
from trader.parsing.tokens import split_columns, split_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SidePair:
    """A statistic's home and away values."""

    home: float = 0.0
    away: float = 0.0


# ═══════════════════════════════════════════════════════════════════
# PPG & GoalSense block
# ═══════════════════════════════════════════════════════════════════

# (label, attribute, lookup options)
PPG_ROWS = [
    ("PPG", "season_ppg", {"reject_next": ("L8", "Bias"), "exclude": ("Opp",)}),
    ("PPG L8", "last8_ppg", {"reject_prev": ("Opp",), "exclude": ("Opp",)}),
    ("Opp PPG L8", "opponent_last8_ppg", {}),
    ("PPG Bias", "ppg_bias", {}),
]


@dataclass(frozen=True)
class PpgSnapshot:
    """One side's points-per-game figures. ppg_bias is read, never recomputed."""

    team_label: str
    season_ppg: float = 0.0
    last8_ppg: float = 0.0
    opponent_last8_ppg: float = 0.0
    ppg_bias: float = 0.0

    def as_chart_row(self) -> dict:
        return {
            "name": self.team_label,
            "PPG": self.season_ppg,
            "PPG L8": self.last8_ppg,
            "Opp PPG L8": self.opponent_last8_ppg,
            "PPG Bias": self.ppg_bias,
        }


@dataclass(frozen=True)
class PpgBlock:
    """Parsed PPG block: a snapshot per side plus per-side summary text."""

    home: PpgSnapshot
    away: PpgSnapshot
    home_text: str = ""
    away_text: str = ""
    full_block: str = ""

    @property
    def chart_data(self) -> list[dict]:
        return [self.home.as_chart_row(), self.away.as_chart_row()]


def parse_ppg_block(
    data: Optional[str], team_a: Optional[str] = None, team_b: Optional[str] = None
) -> PpgBlock:
    """
    Parse the PPG block into home/away PpgSnapshots.

    Rows are "Stat  ...  Home  Away  ..." with the home/away pair third- and
    second-from-last on 6+ column rows, or the first two numbers otherwise.
    Empty input returns zeroed snapshots labelled with the team names.
    """
    home_label = team_a or "Home"
    away_label = team_b or "Away"
    if not data or not data.strip():
        return PpgBlock(home=PpgSnapshot(home_label), away=PpgSnapshot(away_label))

    home_values: dict[str, float] = {}
    away_values: dict[str, float] = {}
    home_text: list[str] = []
    away_text: list[str] = []

    for label, attr, options in PPG_ROWS:
        (home_val, away_val), found = labeled_values(
            data, label, count=2, match="exact", wide=True, **options
        )
        home_values[attr] = home_val
        away_values[attr] = away_val
        if found:
            home_text.append(f"{label}: {home_val:g}")
            away_text.append(f"{label}: {away_val:g}")
        else:
            logger.debug("PPG block: label %r not found", label)

    return PpgBlock(
        home=PpgSnapshot(home_label, **home_values),
        away=PpgSnapshot(away_label, **away_values),
        home_text="\n".join(home_text),
        away_text="\n".join(away_text),
        full_block=data,
    )


# ═══════════════════════════════════════════════════════════════════
# Index & Edge block
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class IndexSnapshot:
    """
    Offence/Defence indices per side plus the shared H v A and Goal Edge.

    H v A: negative favours home, positive favours away.
    All fields default to 0; `found` lists which labels were present.
    """

    home_offence: float = 0.0
    home_defence: float = 0.0
    away_offence: float = 0.0
    away_defence: float = 0.0
    home_vs_away: float = 0.0
    goal_edge: float = 0.0
    found: frozenset = field(default_factory=frozenset)


@dataclass(frozen=True)
class IndexBlock:
    snapshot: IndexSnapshot
    home_text: str = ""
    away_text: str = ""
    shared_text: str = ""
    full_block: str = ""


SHARED_INDEX_LABELS = ("H v A", "Goal Edge")


def parse_index_block(data: Optional[str]) -> IndexBlock:
    """Parse the Index & Edge block. Empty input yields an all-zero snapshot."""
    if not data or not data.strip():
        return IndexBlock(snapshot=IndexSnapshot())

    found = set()
    (home_off, away_off), ok = labeled_values(data, "Offence", count=2, match="prefix")
    if ok:
        found.add("Offence")
    (home_def, away_def), ok = labeled_values(data, "Defence", count=2, match="prefix")
    if ok:
        found.add("Defence")
    (hva,), ok = labeled_values(data, "H v A", count=1, match="prefix")
    if ok:
        found.add("H v A")
    (goal_edge,), ok = labeled_values(data, "Goal Edge", count=1, match="prefix")
    if ok:
        found.add("Goal Edge")

    home_text: list[str] = []
    away_text: list[str] = []
    shared_text: list[str] = []
    for line in split_lines(data):
        columns = split_columns(line)
        if len(columns) == 2 and columns[0].startswith(SHARED_INDEX_LABELS):
            shared_text.append(line)
        elif len(columns) >= 3:
            home_text.append(f"{columns[0]}: {columns[-2]}")
            away_text.append(f"{columns[0]}: {columns[-1]}")

    snapshot = IndexSnapshot(
        home_offence=home_off,
        home_defence=home_def,
        away_offence=away_off,
        away_defence=away_def,
        home_vs_away=hva,
        goal_edge=goal_edge,
        found=frozenset(found),
    )
    return IndexBlock(
        snapshot=snapshot,
        home_text="\n".join(home_text),
        away_text="\n".join(away_text),
        shared_text="\n".join(shared_text),
        full_block=data,
    )


# ═══════════════════════════════════════════════════════════════════
# Overall / At-Venue stats block
# ═══════════════════════════════════════════════════════════════════

# (label, attribute, exclusions)
VENUE_ROWS = [
    ("PPG", "ppg", ("L8", "Opp", "Bias")),
    ("First to score (%)", "first_to_score", ()),
    ("First to concede (%)", "first_to_concede", ()),
    ("Games with a FHG (%)", "first_half_goal", ()),
    ("Games with a SHG (%)", "second_half_goal", ()),
    ("Clean sheets (%)", "clean_sheets", ()),
    ("Scoring Rate", "scoring_rate", ("L8", "Half")),
    ("Conceding Rate", "conceding_rate", ("L8", "Half")),
]

# Stats compared between the Overall and At-Venue blocks
VENUE_OVERALL_STATS = [
    ("PPG", "ppg"),
    ("Scoring Rate", "scoring_rate"),
    ("Conceding Rate", "conceding_rate"),
    ("Clean sheets (%)", "clean_sheets"),
    ("Games with a FHG (%)", "first_half_goal"),
]


@dataclass(frozen=True)
class VenueSnapshot:
    """Overall or At-Venue table (home column = home team, away = away team)."""

    ppg: SidePair = SidePair()
    first_to_score: SidePair = SidePair()
    first_to_concede: SidePair = SidePair()
    first_half_goal: SidePair = SidePair()
    second_half_goal: SidePair = SidePair()
    clean_sheets: SidePair = SidePair()
    scoring_rate: SidePair = SidePair()
    conceding_rate: SidePair = SidePair()


@dataclass(frozen=True)
class VenueComparisonRow:
    stat: str
    overall: SidePair
    venue: SidePair


def parse_venue_block(data: Optional[str]) -> VenueSnapshot:
    """Parse an Overall or At-Venue stats table; missing rows stay 0."""
    if not data or not data.strip():
        return VenueSnapshot()

    values = {}
    for label, attr, exclude in VENUE_ROWS:
        (home_val, away_val), found = labeled_values(
            data, label, count=2, match="prefix", exclude=exclude, reject_next=exclude
        )
        if not found:
            logger.debug("Venue block: label %r not found", label)
        values[attr] = SidePair(home_val, away_val)
    return VenueSnapshot(**values)


def venue_comparison(overall: VenueSnapshot, venue: VenueSnapshot) -> list[VenueComparisonRow]:
    """Overall vs At-Venue series for the chart comparing both profiles."""
    return [
        VenueComparisonRow(stat=label, overall=getattr(overall, attr), venue=getattr(venue, attr))
        for label, attr in VENUE_OVERALL_STATS
    ]
