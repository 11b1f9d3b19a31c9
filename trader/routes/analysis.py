"""
Analysis route: run the parsers, aggregators and flag engine on pasted blocks.

Never fails on content. Empty or garbled blocks come back as zeroed stats,
empty series and no flags.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends

from trader.analysis import AnalysisInputs, MatchAnalysis, VolatilityOptions, analyze
from trader.flags import FlagThresholds
from trader.llm.derived_facts import build_raw_data_block
from trader.routes.deps import get_thresholds, get_volatility_options

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


def analysis_payload(analysis: MatchAnalysis) -> dict:
    """Chart-ready series, derived stats and flags as plain JSON."""
    index = asdict(analysis.index.snapshot)
    index["found"] = sorted(analysis.index.snapshot.found)
    return {
        "teams": {"home": analysis.team_a, "away": analysis.team_b},
        "ppg": {
            "chart_data": analysis.ppg.chart_data,
            "home_text": analysis.ppg.home_text,
            "away_text": analysis.ppg.away_text,
        },
        "index": index,
        "overall": asdict(analysis.overall),
        "venue": asdict(analysis.venue),
        "venue_comparison": [asdict(row) for row in analysis.venue_comparison],
        "segments": analysis.segments.chart_data,
        "timeline": analysis.timeline,
        "heatmap": analysis.heatmap,
        "late_goals": asdict(analysis.late),
        "half": asdict(analysis.half),
        "league": {
            "teams": [asdict(point) for point in analysis.league.teams],
            "avg_goals_for": analysis.league.avg_goals_for,
            "avg_goals_against": analysis.league.avg_goals_against,
            "team_count": analysis.league.team_count,
        },
        "volatility": {
            "home": asdict(analysis.home_volatility),
            "away": asdict(analysis.away_volatility),
            "match": asdict(analysis.match_volatility),
        },
        "form": {
            "home": asdict(analysis.home_form),
            "away": asdict(analysis.away_form),
        },
        "resilience": asdict(analysis.resilience),
        "flags": [flag.to_dict() for flag in analysis.flags],
    }


@router.post("/analysis")
async def run_analysis(
    inputs: AnalysisInputs,
    thresholds: FlagThresholds = Depends(get_thresholds),
    volatility: VolatilityOptions = Depends(get_volatility_options),
):
    analysis = analyze(inputs, thresholds, volatility)
    payload = analysis_payload(analysis)
    payload["raw_data"] = build_raw_data_block(inputs, analysis)
    return payload
