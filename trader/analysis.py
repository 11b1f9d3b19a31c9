"""
Match analysis: run every parser and aggregator over the pasted blocks.

analyze() is pure. Each call re-derives everything from the raw text, so a
changed input field simply means calling it again.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel

from trader.flags import AnalyticalFlag, FlagInputs, FlagThresholds, LateGoals, evaluate_flags
from trader.parsing.blocks import (
    IndexBlock,
    PpgBlock,
    VenueComparisonRow,
    VenueSnapshot,
    parse_index_block,
    parse_ppg_block,
    parse_venue_block,
    venue_comparison,
)
from trader.parsing.half_data import HalfSplitStats, parse_half_blocks
from trader.parsing.league_table import LeagueQuadrant, parse_league_table
from trader.parsing.segments import (
    SegmentSeries,
    fifteen_minute_timeline,
    heatmap_timelines,
    late_totals,
    parse_five_minute_blocks,
)
from trader.stats.form import RollingForm, rolling_form
from trader.stats.resilience import ResilienceStats, calculate_resilience
from trader.stats.volatility import (
    DEFAULT_CAP_PERCENT,
    DEFAULT_MIN_MATCHES,
    MatchVolatility,
    VolatilityStats,
    match_volatility,
    team_volatility,
)

logger = logging.getLogger(__name__)


class AnalysisInputs(BaseModel):
    """The named raw-text fields of one analysis session. All optional."""

    team_a: str = ""
    team_b: str = ""
    ppg_block: str = ""
    index_block: str = ""
    home_five_min_block: str = ""
    away_five_min_block: str = ""
    half_scored_block: str = ""
    half_conceded_block: str = ""
    league_table_block: str = ""
    home_results_block: str = ""
    away_results_block: str = ""
    overall_stats_block: str = ""
    venue_stats_block: str = ""


@dataclass(frozen=True)
class VolatilityOptions:
    min_matches: int = DEFAULT_MIN_MATCHES
    cap_percent: float = DEFAULT_CAP_PERCENT

    @classmethod
    def from_settings(cls, settings) -> "VolatilityOptions":
        return cls(
            min_matches=settings.VOLATILITY_MIN_MATCHES,
            cap_percent=settings.VOLATILITY_CAP_PERCENT,
        )


@dataclass(frozen=True)
class MatchAnalysis:
    """Everything derived from one set of inputs."""

    team_a: str
    team_b: str
    ppg: PpgBlock
    index: IndexBlock
    overall: VenueSnapshot
    venue: VenueSnapshot
    venue_comparison: list[VenueComparisonRow]
    segments: SegmentSeries
    late: LateGoals
    half: HalfSplitStats
    league: LeagueQuadrant
    home_volatility: VolatilityStats
    away_volatility: VolatilityStats
    match_volatility: MatchVolatility
    home_form: RollingForm
    away_form: RollingForm
    resilience: ResilienceStats
    flags: list[AnalyticalFlag]

    @property
    def timeline(self) -> list[dict]:
        return fifteen_minute_timeline(self.segments)

    @property
    def heatmap(self) -> dict:
        return heatmap_timelines(self.segments)


def analyze(
    inputs: AnalysisInputs,
    thresholds: Optional[FlagThresholds] = None,
    volatility: Optional[VolatilityOptions] = None,
) -> MatchAnalysis:
    """
    Parse every block, derive stats and evaluate flags.

    Args:
        inputs: Raw pasted blocks and team names.
        thresholds: Flag thresholds (product defaults when None).
        volatility: Volatility sample minimum and cap (defaults when None).

    Returns:
        MatchAnalysis. Empty inputs give zeroed snapshots and no flags.
    """
    volatility = volatility or VolatilityOptions()
    team_a = inputs.team_a.strip()
    team_b = inputs.team_b.strip()

    ppg = parse_ppg_block(inputs.ppg_block, team_a or None, team_b or None)
    index = parse_index_block(inputs.index_block)
    overall = parse_venue_block(inputs.overall_stats_block)
    venue = parse_venue_block(inputs.venue_stats_block)
    segments = parse_five_minute_blocks(inputs.home_five_min_block, inputs.away_five_min_block)
    late = late_totals(segments)
    late_goals = LateGoals(home=late["home"], away=late["away"])
    half = parse_half_blocks(inputs.half_scored_block, inputs.half_conceded_block)
    league = parse_league_table(inputs.league_table_block, team_a or None, team_b or None)

    home_vol = team_volatility(
        inputs.home_results_block, team_a, venue="home",
        min_matches=volatility.min_matches, cap_percent=volatility.cap_percent,
    )
    away_vol = team_volatility(
        inputs.away_results_block, team_b, venue="away",
        min_matches=volatility.min_matches, cap_percent=volatility.cap_percent,
    )
    resilience = calculate_resilience(
        inputs.home_results_block, inputs.away_results_block, team_a, team_b
    )

    flags = evaluate_flags(
        FlagInputs(
            home_ppg=ppg.home,
            away_ppg=ppg.away,
            venue=venue,
            index=index.snapshot,
            late=late_goals,
            resilience=resilience,
            half=half,
        ),
        thresholds,
    )
    logger.info(
        f"Analysis {team_a or 'Home'} v {team_b or 'Away'}: "
        f"{len(flags)} flags, {league.team_count} league rows, "
        f"results {home_vol.sample_size}/{away_vol.sample_size}"
    )

    return MatchAnalysis(
        team_a=team_a,
        team_b=team_b,
        ppg=ppg,
        index=index,
        overall=overall,
        venue=venue,
        venue_comparison=venue_comparison(overall, venue),
        segments=segments,
        late=late_goals,
        half=half,
        league=league,
        home_volatility=home_vol,
        away_volatility=away_vol,
        match_volatility=match_volatility(home_vol, away_vol),
        home_form=rolling_form(inputs.home_results_block, team_a, venue="home"),
        away_form=rolling_form(inputs.away_results_block, team_b, venue="away"),
        resilience=resilience,
        flags=flags,
    )
