"""
Tolerant parsers for pasted statistics blocks.

Every parser is pure: given the raw text (and optional team-name hints) it
returns its documented shape, never None, and never raises on bad input.
"""

from trader.parsing.blocks import parse_index_block, parse_ppg_block, parse_venue_block
from trader.parsing.half_data import parse_half_blocks, split_half_sections
from trader.parsing.league_table import parse_league_table
from trader.parsing.results import parse_result_line, parse_results_block, team_perspective
from trader.parsing.segments import FIVE_MIN_SEGMENTS, LATE_SEGMENTS, parse_five_minute_blocks

__all__ = [
    "FIVE_MIN_SEGMENTS",
    "LATE_SEGMENTS",
    "parse_five_minute_blocks",
    "parse_half_blocks",
    "parse_index_block",
    "parse_league_table",
    "parse_ppg_block",
    "parse_result_line",
    "parse_results_block",
    "parse_venue_block",
    "split_half_sections",
    "team_perspective",
]
