"""
Line and token splitting shared by every block parser.

Pasted tables separate columns with runs of spaces or tabs, while the
free text around them uses single spaces. Two splitters cover both:
- split_columns: runs of 2+ spaces or any tab (tabular rows)
- split_tokens: any whitespace (free-text keyword search)
"""

import math
import re
from typing import Optional

_COLUMN_SPLIT_RE = re.compile(r"(?:\t|\s{2,})\s*")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")


def split_lines(text: Optional[str]) -> list[str]:
    """Return the stripped, non-empty lines of a pasted block."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def split_columns(line: str) -> list[str]:
    """
    Split a table row into columns.

    Tabs and runs of two or more spaces are equivalent separators; single
    spaces stay inside a column ("PPG L8", "First to score (%)").
    """
    stripped = (line or "").strip()
    if not stripped:
        return []
    return [part for part in _COLUMN_SPLIT_RE.split(stripped) if part]


def split_tokens(text: Optional[str]) -> list[str]:
    """Split free text on any whitespace."""
    if not text:
        return []
    return text.split()


def parse_number(token: Optional[str]) -> Optional[float]:
    """
    Parse a numeric token, ignoring a trailing '%'.

    Returns None for anything that is not a plain number (including NaN),
    so callers can skip it instead of reading it as zero.
    """
    if token is None:
        return None
    cleaned = token.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1].rstrip()
    if not _NUMBER_RE.match(cleaned):
        return None
    value = float(cleaned)
    if math.isnan(value):
        return None
    return value


def parse_score_pair(token: Optional[str]) -> Optional[tuple[float, float]]:
    """Parse a 'scored-conceded' cell such as '2-1'."""
    if not token:
        return None
    parts = token.strip().split("-")
    if len(parts) != 2:
        return None
    scored = parse_number(parts[0])
    conceded = parse_number(parts[1])
    if scored is None and conceded is None:
        return None
    return (scored or 0.0, conceded or 0.0)
