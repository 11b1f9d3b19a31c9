"""
Half Data block parser (goals by half, scored or conceded).

The block is a sequence of sections introduced by header tokens:

    H@H:
    1ST HALF OVERS   0.5+ 75%   1.5+ 25%
    2ND HALF OVERS   0.5+ 88%   1.5+ 38%
    GOALS BY HALF    1st 40%   2nd 60%
    A@A:
    ...

A header switches the current section; every following line belongs to it
until the next header. Text after a header on the same line also belongs to
the section ("H@H: GOALS BY HALF 1st 40% 2nd 60%").
"""

import logging
from dataclasses import dataclass
from typing import Optional

from trader.parsing.fields import scan_label
from trader.parsing.tokens import split_lines, split_tokens

logger = logging.getLogger(__name__)

# header token -> section key
SECTION_HEADERS = [
    ("H@H:", "home_h2h"),
    ("A@A:", "away_a2a"),
    ("Venue:", "venue"),
    ("Home Season:", "home_season"),
    ("Away Season:", "away_season"),
    ("Avg:", "avg"),
]

SECTION_KEYS = [key for _, key in SECTION_HEADERS]

# Threshold tokens like "0.5+" are not numbers, so the scan steps over them.
FIRST_HALF_OVERS = ("1ST", "HALF", "OVERS")
SECOND_HALF_OVERS = ("2ND", "HALF", "OVERS")
GOALS_BY_HALF = ("GOALS", "BY", "HALF")


@dataclass(frozen=True)
class HalfSplit:
    """One side, one phase (scored or conceded). Percentages."""

    first_half_over05: float = 0.0
    first_half_over15: float = 0.0
    second_half_over05: float = 0.0
    second_half_over15: float = 0.0
    first_half_goals_pct: float = 0.0
    second_half_goals_pct: float = 0.0


@dataclass(frozen=True)
class HalfSplitStats:
    """Home team at home (H@H) and away team away (A@A), scored and conceded."""

    home_scored: HalfSplit = HalfSplit()
    home_conceded: HalfSplit = HalfSplit()
    away_scored: HalfSplit = HalfSplit()
    away_conceded: HalfSplit = HalfSplit()


def split_half_sections(data: Optional[str]) -> dict[str, str]:
    """
    Run the header state machine over a Half Data block.

    Returns one newline-joined string per section key; lines before the
    first header are dropped. No headers -> every section empty.
    """
    sections: dict[str, list[str]] = {key: [] for key in SECTION_KEYS}
    current: Optional[str] = None

    for line in split_lines(data):
        header = next(((token, key) for token, key in SECTION_HEADERS if line.startswith(token)), None)
        if header is not None:
            token, current = header
            remainder = line[len(token):].strip()
            if remainder:
                sections[current].append(remainder)
            continue
        if current is not None:
            sections[current].append(line)

    return {key: "\n".join(lines) for key, lines in sections.items()}


def extract_half_split(section_text: Optional[str]) -> HalfSplit:
    """Pull the 1st/2nd half figures out of one section's text."""
    tokens = split_tokens(section_text)
    if not tokens:
        return HalfSplit()

    first = scan_label(tokens, FIRST_HALF_OVERS, count=2) or [0.0, 0.0]
    second = scan_label(tokens, SECOND_HALF_OVERS, count=2) or [0.0, 0.0]
    by_half = scan_label(tokens, GOALS_BY_HALF, count=2) or [0.0, 0.0]

    return HalfSplit(
        first_half_over05=first[0],
        first_half_over15=first[1],
        second_half_over05=second[0],
        second_half_over15=second[1],
        first_half_goals_pct=by_half[0],
        second_half_goals_pct=by_half[1],
    )


def parse_half_blocks(scored: Optional[str], conceded: Optional[str]) -> HalfSplitStats:
    """Parse the SCORED and CONCEDED Half Data blocks for both teams."""
    scored_sections = split_half_sections(scored)
    conceded_sections = split_half_sections(conceded)
    return HalfSplitStats(
        home_scored=extract_half_split(scored_sections["home_h2h"]),
        home_conceded=extract_half_split(conceded_sections["home_h2h"]),
        away_scored=extract_half_split(scored_sections["away_a2a"]),
        away_conceded=extract_half_split(conceded_sections["away_a2a"]),
    )
