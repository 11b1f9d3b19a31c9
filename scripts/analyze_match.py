#!/usr/bin/env python3
"""
Offline match analysis from pasted-block files.

Reads each block from a text file, runs the parsers, aggregators and flag
engine, and prints the flags and the raw-data block (or JSON with --json).

Usage:
    python scripts/analyze_match.py --team-a Arsenal --team-b Chelsea \\
        --ppg ppg.txt --index index.txt --home-results home.txt --away-results away.txt
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from trader.analysis import AnalysisInputs, VolatilityOptions, analyze
from trader.config import get_settings
from trader.flags import FlagThresholds
from trader.llm.derived_facts import build_raw_data_block
from trader.routes.analysis import analysis_payload

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# CLI flag -> AnalysisInputs field
BLOCK_ARGS = {
    "ppg": "ppg_block",
    "index": "index_block",
    "home_five_min": "home_five_min_block",
    "away_five_min": "away_five_min_block",
    "half_scored": "half_scored_block",
    "half_conceded": "half_conceded_block",
    "league_table": "league_table_block",
    "home_results": "home_results_block",
    "away_results": "away_results_block",
    "overall_stats": "overall_stats_block",
    "venue_stats": "venue_stats_block",
}


def read_block(path: Optional[str]) -> str:
    if not path:
        return ""
    return Path(path).read_text(encoding="utf-8")


def main() -> int:
    parser = argparse.ArgumentParser(description="Parse pasted stats blocks and print flags")
    parser.add_argument("--team-a", default="", help="Home team name")
    parser.add_argument("--team-b", default="", help="Away team name")
    for arg in BLOCK_ARGS:
        parser.add_argument(f"--{arg.replace('_', '-')}", dest=arg, help=f"File with the {arg} block")
    parser.add_argument("--json", action="store_true", help="Print the full analysis as JSON")
    args = parser.parse_args()

    try:
        blocks = {field: read_block(getattr(args, arg)) for arg, field in BLOCK_ARGS.items()}
    except OSError as e:
        logger.error(f"Cannot read block file: {e}")
        return 1

    inputs = AnalysisInputs(team_a=args.team_a, team_b=args.team_b, **blocks)
    settings = get_settings()
    analysis = analyze(
        inputs,
        FlagThresholds.from_settings(settings),
        VolatilityOptions.from_settings(settings),
    )

    if args.json:
        print(json.dumps(analysis_payload(analysis), indent=2, default=str))
        return 0

    print(f"=== {inputs.team_a or 'Home'} v {inputs.team_b or 'Away'} ===")
    if not analysis.flags:
        print("No significant analytical flags triggered based on the provided data.")
    for flag in analysis.flags:
        print(f"[{flag.type.upper():5}] {flag.title}: {flag.description}")
    print()
    print(build_raw_data_block(inputs, analysis))
    return 0


if __name__ == "__main__":
    sys.exit(main())
