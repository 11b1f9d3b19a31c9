"""
Five-minute goal segment parser.

Input is two pasted tables, one per team, each with rows like:

    1-5    3-2    2-1    1-1

(label, overall, Home column, Away column). Cells are Scored-Conceded
counts, not percentages. Only one column belongs to the subject team at the
venue it plays this match:
- home team's block -> "Home" column (H@H)
- away team's block -> "Away" column (A@A)

'41-45' absorbs first-half stoppage time and '86-90' second-half stoppage.

Ranges (e.g. 76-90) are ALWAYS the sum of their 5-minute buckets.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional

from trader.parsing.tokens import parse_score_pair, split_columns, split_lines

logger = logging.getLogger(__name__)

FIVE_MIN_SEGMENTS = [
    "1-5", "6-10", "11-15", "16-20", "21-25", "26-30",
    "31-35", "36-40", "41-45", "46-50", "51-55", "56-60",
    "61-65", "66-70", "71-75", "76-80", "81-85", "86-90",
]

LATE_SEGMENTS = ["76-80", "81-85", "86-90"]

HOME_COLUMN = 2
AWAY_COLUMN = 3

SIDES = ("home", "away")


@dataclass(frozen=True)
class FiveMinuteSegment:
    """
    One 5-minute bucket.

    home_* come from the home team's block (Home column), away_* from the
    away team's block (Away column). overall_* add the row's other venue
    column (venue + non-venue combined).
    """

    segment: str
    home_scored: float = 0.0
    home_conceded: float = 0.0
    away_scored: float = 0.0
    away_conceded: float = 0.0
    home_overall_scored: float = 0.0
    home_overall_conceded: float = 0.0
    away_overall_scored: float = 0.0
    away_overall_conceded: float = 0.0

    def as_chart_row(self) -> dict:
        return {
            "segment": self.segment,
            "Home Scored": self.home_scored,
            "Home Conceded": self.home_conceded,
            "Away Scored": self.away_scored,
            "Away Conceded": self.away_conceded,
        }


@dataclass(frozen=True)
class RangeTotal:
    scored: float = 0.0
    conceded: float = 0.0


@dataclass(frozen=True)
class SegmentSeries:
    """The ordered 18-bucket series plus per-side summary text."""

    segments: list[FiveMinuteSegment]
    home_lines: str = ""
    away_lines: str = ""

    @property
    def chart_data(self) -> list[dict]:
        return [s.as_chart_row() for s in self.segments]

    def total(self, side: str, overall: bool = False) -> RangeTotal:
        return range_total(self, FIVE_MIN_SEGMENTS[0], FIVE_MIN_SEGMENTS[-1], side, overall)

    @property
    def has_data(self) -> bool:
        return bool(self.home_lines or self.away_lines)


def _segment_label(line: str) -> Optional[str]:
    for label in FIVE_MIN_SEGMENTS:
        if line.startswith(label + " ") or line.startswith(label + "\t"):
            return label
    return None


def _parse_block(data: Optional[str], side: str) -> tuple[dict[str, tuple], list[str]]:
    """
    Read one team's table.

    Returns {segment: (scored, conceded, overall_scored, overall_conceded)}
    for the side's venue column, and the summary lines.
    """
    column = HOME_COLUMN if side == "home" else AWAY_COLUMN
    other = AWAY_COLUMN if side == "home" else HOME_COLUMN
    rows: dict[str, tuple] = {}
    summary: list[str] = []

    for line in split_lines(data):
        label = _segment_label(line)
        if label is None or label in rows:
            continue
        columns = split_columns(line)
        if len(columns) < 4:
            logger.debug("5-min %s block: short row skipped: %r", side, line)
            continue
        pair = parse_score_pair(columns[column])
        if pair is None:
            logger.debug("5-min %s block: bad cell %r in row %r", side, columns[column], line)
            continue
        other_pair = parse_score_pair(columns[other]) or (0.0, 0.0)
        scored, conceded = pair
        rows[label] = (
            scored,
            conceded,
            scored + other_pair[0],
            conceded + other_pair[1],
        )
        summary.append(f"{label}: {columns[column]}")

    return rows, summary


def parse_five_minute_blocks(home_data: Optional[str], away_data: Optional[str]) -> SegmentSeries:
    """
    Build the 18-entry segment series from both teams' tables.

    Always returns all 18 buckets in order; buckets missing from a block
    stay at 0. Either block may be empty.
    """
    home_rows, home_lines = _parse_block(home_data, "home")
    away_rows, away_lines = _parse_block(away_data, "away")

    segments = []
    for label in FIVE_MIN_SEGMENTS:
        segment = FiveMinuteSegment(label)
        if label in home_rows:
            scored, conceded, overall_scored, overall_conceded = home_rows[label]
            segment = replace(
                segment,
                home_scored=scored,
                home_conceded=conceded,
                home_overall_scored=overall_scored,
                home_overall_conceded=overall_conceded,
            )
        if label in away_rows:
            scored, conceded, overall_scored, overall_conceded = away_rows[label]
            segment = replace(
                segment,
                away_scored=scored,
                away_conceded=conceded,
                away_overall_scored=overall_scored,
                away_overall_conceded=overall_conceded,
            )
        segments.append(segment)

    return SegmentSeries(
        segments=segments,
        home_lines="\n".join(home_lines),
        away_lines="\n".join(away_lines),
    )


def range_total(
    series: SegmentSeries,
    start: str,
    end: str,
    side: str,
    overall: bool = False,
) -> RangeTotal:
    """
    Total a contiguous range of buckets, e.g. ("76-80", "86-90") for 76-90.

    Sums the discrete buckets; no interpolation or averaging.

    Raises:
        ValueError: unknown bucket label, end before start, or bad side.
    """
    if side not in SIDES:
        raise ValueError(f"side must be one of {SIDES}, got {side!r}")
    try:
        first = FIVE_MIN_SEGMENTS.index(start)
        last = FIVE_MIN_SEGMENTS.index(end)
    except ValueError:
        raise ValueError(f"Unknown segment range {start!r}..{end!r}") from None
    if last < first:
        raise ValueError(f"Segment range ends before it starts: {start!r}..{end!r}")

    prefix = f"{side}_overall_" if overall else f"{side}_"
    scored = 0.0
    conceded = 0.0
    for segment in series.segments[first:last + 1]:
        scored += getattr(segment, prefix + "scored")
        conceded += getattr(segment, prefix + "conceded")
    return RangeTotal(scored=scored, conceded=conceded)


def late_totals(series: SegmentSeries) -> dict[str, RangeTotal]:
    """76-90 totals per side (home at home, away away)."""
    return {
        side: range_total(series, LATE_SEGMENTS[0], LATE_SEGMENTS[-1], side)
        for side in SIDES
    }


def fifteen_minute_timeline(series: SegmentSeries) -> list[dict]:
    """
    0-90 timeline in 15-minute windows (1-15, 16-30, ... 76-90).

    Each window is the sum of its three 5-minute buckets.
    """
    timeline = []
    for i in range(0, len(FIVE_MIN_SEGMENTS), 3):
        start, end = FIVE_MIN_SEGMENTS[i], FIVE_MIN_SEGMENTS[i + 2]
        window = f"{start.split('-')[0]}-{end.split('-')[1]}"
        home = range_total(series, start, end, "home")
        away = range_total(series, start, end, "away")
        timeline.append({
            "window": window,
            "home_scored": home.scored,
            "home_conceded": home.conceded,
            "away_scored": away.scored,
            "away_conceded": away.conceded,
        })
    return timeline


def heatmap_timelines(series: SegmentSeries) -> dict[str, dict[str, list[float]]]:
    """
    Attack-vs-defence rows for the goal heatmap.

    home_attack: home scored (H@H) against away conceded (A@A), and the
    mirror for away_attack.
    """
    return {
        "home_attack": {
            "attack": [s.home_scored for s in series.segments],
            "defence": [s.away_conceded for s in series.segments],
        },
        "away_attack": {
            "attack": [s.away_scored for s in series.segments],
            "defence": [s.home_conceded for s in series.segments],
        },
    }
