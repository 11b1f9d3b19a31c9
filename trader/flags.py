"""
Analytical flag engine.

Pure function of the parsed and derived snapshots -> ordered list of flags.
Rules are independent and not mutually exclusive; the declaration order in
RULES is the evaluation and display order. A rule whose inputs are still at
their zero defaults fails its threshold quietly, so empty input gives an
empty list.

Thresholds are configuration (FlagThresholds.from_settings); the defaults
are the values the product shipped with.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from trader.parsing.blocks import IndexSnapshot, PpgSnapshot, VenueSnapshot
from trader.parsing.half_data import HalfSplitStats
from trader.parsing.segments import RangeTotal
from trader.stats.resilience import ResilienceStats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlagThresholds:
    fts: float = 55.0
    bias: float = 0.4
    hva: float = -0.15
    late_goal: float = 5.0
    resilience: float = 30.0
    half_skew: float = 60.0
    index: float = 13.0
    clean_sheet: float = 40.0
    scoring_rate: float = 35.0
    fhg: float = 60.0
    goal_edge: float = 2.5

    @classmethod
    def from_settings(cls, settings) -> "FlagThresholds":
        return cls(
            fts=settings.FLAG_FTS_THRESHOLD,
            bias=settings.FLAG_BIAS_THRESHOLD,
            hva=settings.FLAG_HVA_THRESHOLD,
            late_goal=settings.FLAG_LATE_GOAL_THRESHOLD,
            resilience=settings.FLAG_RESILIENCE_THRESHOLD,
            half_skew=settings.FLAG_HALF_SKEW_THRESHOLD,
            index=settings.FLAG_INDEX_THRESHOLD,
            clean_sheet=settings.FLAG_CLEAN_SHEET_THRESHOLD,
            scoring_rate=settings.FLAG_SCORING_RATE_THRESHOLD,
            fhg=settings.FLAG_FHG_THRESHOLD,
            goal_edge=settings.FLAG_GOAL_EDGE_THRESHOLD,
        )


@dataclass(frozen=True)
class LateGoals:
    """76-90 totals: home team at home, away team away."""

    home: RangeTotal = RangeTotal()
    away: RangeTotal = RangeTotal()


@dataclass(frozen=True)
class FlagInputs:
    home_ppg: PpgSnapshot = field(default_factory=lambda: PpgSnapshot("Home"))
    away_ppg: PpgSnapshot = field(default_factory=lambda: PpgSnapshot("Away"))
    venue: VenueSnapshot = VenueSnapshot()
    index: IndexSnapshot = IndexSnapshot()
    late: LateGoals = LateGoals()
    resilience: ResilienceStats = ResilienceStats()
    half: HalfSplitStats = HalfSplitStats()


@dataclass(frozen=True)
class AnalyticalFlag:
    id: str
    type: str  # good | bad | alert | clash
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"id": self.id, "type": self.type, "title": self.title, "description": self.description}


def _num(value: float) -> str:
    """Render a pasted value as pasted: 60.0 -> '60', 62.5 -> '62.5'."""
    return f"{value:g}"


# ═══════════════════════════════════════════════════════════════════
# Rules: each returns a flag or None
# ═══════════════════════════════════════════════════════════════════

Rule = Callable[[FlagInputs, FlagThresholds], Optional[AnalyticalFlag]]


def _fts_home(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    fts, ftc = i.venue.first_to_score.home, i.venue.first_to_concede.away
    if fts > t.fts and ftc > t.fts:
        return AnalyticalFlag(
            "fts-htc", "good", "Home Fast Start",
            f"Home scores first ({_num(fts)}%) vs. Away concedes first ({_num(ftc)}%) at venue.",
        )
    return None


def _fts_away(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    fts, ftc = i.venue.first_to_score.away, i.venue.first_to_concede.home
    if fts > t.fts and ftc > t.fts:
        return AnalyticalFlag(
            "fts-atc", "good", "Away Fast Start",
            f"Away scores first ({_num(fts)}%) vs. Home concedes first ({_num(ftc)}%) at venue.",
        )
    return None


def _ppg_bias_home(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    bias = i.home_ppg.ppg_bias
    if bias > t.bias:
        return AnalyticalFlag(
            "ppg-bias-home", "good", "Home Form",
            f"Home team PPG Bias is high (+{bias:.2f}), indicating strong recent form vs. schedule.",
        )
    return None


def _ppg_bias_away(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    bias = i.away_ppg.ppg_bias
    if bias < -t.bias:
        return AnalyticalFlag(
            "ppg-bias-away", "bad", "Away Form",
            f"Away team PPG Bias is low ({bias:.2f}), indicating poor recent form vs. schedule.",
        )
    return None


def _hva_home(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    hva = i.index.home_vs_away
    if hva < t.hva:
        return AnalyticalFlag(
            "hva-home", "good", "Home Index Advantage",
            f"H v A Index ({hva:.2f}) strongly favors the Home team.",
        )
    return None


def _hva_away(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    hva = i.index.home_vs_away
    if hva > -t.hva:
        return AnalyticalFlag(
            "hva-away", "good", "Away Index Advantage",
            f"H v A Index ({hva:.2f}) favors the Away team.",
        )
    return None


def _late_home(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    scored, conceded = i.late.home.scored, i.late.away.conceded
    if scored > t.late_goal and conceded > t.late_goal:
        return AnalyticalFlag(
            "late-home-goal", "alert", "Late Home Goal Threat",
            f"Home scores late ({_num(scored)} goals) vs. Away concedes late ({_num(conceded)} goals).",
        )
    return None


def _late_away(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    scored, conceded = i.late.away.scored, i.late.home.conceded
    if scored > t.late_goal and conceded > t.late_goal:
        return AnalyticalFlag(
            "late-away-goal", "alert", "Late Away Goal Threat",
            f"Away scores late ({_num(scored)} goals) vs. Home concedes late ({_num(conceded)} goals).",
        )
    return None


def _res_home(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    rate = i.resilience.home_comeback
    if rate > t.resilience:
        return AnalyticalFlag(
            "res-home", "alert", "Home Resilience",
            f"Home team comes back from losing at HT in {rate:.0f}% of games.",
        )
    return None


def _res_away_drop(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    rate = i.resilience.away_dropped
    if rate > t.resilience:
        return AnalyticalFlag(
            "res-away-drop", "bad", "Away Drops Points",
            f"Away team drops points from winning at HT in {rate:.0f}% of games.",
        )
    return None


def _half_skew(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    scored = i.half.home_scored.second_half_goals_pct
    conceded = i.half.away_conceded.second_half_goals_pct
    if scored > t.half_skew and conceded > t.half_skew:
        return AnalyticalFlag(
            "half-skew", "alert", "2nd Half Action",
            f"Home scores {scored:.0f}% of their goals in 2H, while Away concedes {conceded:.0f}% in 2H.",
        )
    return None


def _mismatch_home_attack(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    offence, defence = i.index.home_offence, i.index.away_defence
    if offence < t.index and defence > t.index:
        return AnalyticalFlag(
            "mismatch-home-atk", "good", "Home Offensive Mismatch",
            f"Home's high Offence Index ({offence:.2f}) meets Away's weak Defence Index ({defence:.2f}).",
        )
    return None


def _mismatch_home_struggle(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    offence, defence = i.index.home_offence, i.index.away_defence
    if offence > t.index and defence < t.index:
        return AnalyticalFlag(
            "mismatch-home-struggle", "bad", "Home Offensive Struggle",
            f"Home's low Offence Index ({offence:.2f}) faces Away's strong Defence Index ({defence:.2f}).",
        )
    return None


def _mismatch_away_attack(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    offence, defence = i.index.away_offence, i.index.home_defence
    if offence < t.index and defence > t.index:
        return AnalyticalFlag(
            "mismatch-away-atk", "good", "Away Offensive Mismatch",
            f"Away's high Offence Index ({offence:.2f}) meets Home's weak Defence Index ({defence:.2f}).",
        )
    return None


def _clean_sheet_home(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    clean, rate = i.venue.clean_sheets.home, i.venue.scoring_rate.away
    if clean > t.clean_sheet and rate < t.scoring_rate:
        return AnalyticalFlag(
            "cs-home", "good", "Home Defensive Solidity",
            f"Home has a high Clean Sheet rate ({_num(clean)}%) while Away scores in only {_num(rate)}% of its games.",
        )
    return None


def _clean_sheet_away(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    clean, rate = i.venue.clean_sheets.away, i.venue.scoring_rate.home
    if clean > t.clean_sheet and rate < t.scoring_rate:
        return AnalyticalFlag(
            "cs-away", "good", "Away Defensive Solidity",
            f"Away has a high Clean Sheet rate ({_num(clean)}%) while Home scores in only {_num(rate)}% of its games.",
        )
    return None


def _fhg_action(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    home, away = i.venue.first_half_goal.home, i.venue.first_half_goal.away
    if home > t.fhg and away > t.fhg:
        return AnalyticalFlag(
            "fhg-action", "alert", "High FHG Action",
            "Both teams see a First Half Goal in a high percentage of their games "
            f"(Home: {_num(home)}%, Away: {_num(away)}%).",
        )
    return None


def _goal_edge(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    # 0 is "near zero" too, so the rule needs a pasted Goal Edge
    if "Goal Edge" not in i.index.found:
        return None
    edge = i.index.goal_edge
    if abs(edge) < t.goal_edge:
        return AnalyticalFlag(
            "goal-edge", "alert", "Goal Edge Alert",
            f'The "Goal Edge" index is {edge:.2f}, which is very close to zero, '
            "suggesting a high potential for goals.",
        )
    return None


def _resilience_clash(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    if i.resilience.home_comeback > t.resilience and i.resilience.away_comeback > t.resilience:
        return AnalyticalFlag(
            "res-clash-comeback", "clash", "Resilient Teams Clash",
            f"Both teams show high resilience, coming back from losing at HT in over {_num(t.resilience)}% of games.",
        )
    return None


def _brittle_leads(i: FlagInputs, t: FlagThresholds) -> Optional[AnalyticalFlag]:
    if i.resilience.home_dropped > t.resilience and i.resilience.away_dropped > t.resilience:
        return AnalyticalFlag(
            "res-clash-brittle", "clash", "Brittle Leads",
            "Both teams are prone to dropping points from winning HT positions "
            f"in over {_num(t.resilience)}% of games.",
        )
    return None


RULES: list[Rule] = [
    _fts_home,
    _fts_away,
    _ppg_bias_home,
    _ppg_bias_away,
    _hva_home,
    _hva_away,
    _late_home,
    _late_away,
    _res_home,
    _res_away_drop,
    _half_skew,
    _mismatch_home_attack,
    _mismatch_home_struggle,
    _mismatch_away_attack,
    _clean_sheet_home,
    _clean_sheet_away,
    _fhg_action,
    _goal_edge,
    _resilience_clash,
    _brittle_leads,
]


def evaluate_flags(
    inputs: FlagInputs,
    thresholds: Optional[FlagThresholds] = None,
) -> list[AnalyticalFlag]:
    """
    Run every rule in declaration order.

    Args:
        inputs: Parsed and derived snapshots.
        thresholds: Rule thresholds; product defaults when None.

    Returns:
        The flags that fired, in rule order.
    """
    thresholds = thresholds or FlagThresholds()
    flags = []
    for rule in RULES:
        flag = rule(inputs, thresholds)
        if flag is not None:
            flags.append(flag)
    logger.debug("Flag engine: %d/%d rules fired", len(flags), len(RULES))
    return flags
