"""
Derived Facts Builder: pre-computed numbers for the profile prompts.

The model is told to trust these values literally, so every derived number
is rendered with fixed precision:
- ratios and means: 2 decimal places
- percentages: integer percent
- goal counts: integers

Principle: only render what was parsed. Blocks that were not pasted show
N/A instead of a row of zeros.
"""

from typing import Optional

from trader.analysis import AnalysisInputs, MatchAnalysis
from trader.stats.volatility import VolatilityStats

NOT_AVAILABLE = "N/A"


def _ratio(value: float) -> str:
    return f"{value:.2f}"


def _pct(value: float) -> str:
    return f"{value:.0f}%"


def _count(value: float) -> str:
    return f"{value:.0f}"


def _raw(text: Optional[str]) -> str:
    text = (text or "").strip()
    return text or NOT_AVAILABLE


def _team_names(analysis: MatchAnalysis) -> tuple[str, str]:
    return analysis.team_a or "Home", analysis.team_b or "Away"


def _ppg_lines(analysis: MatchAnalysis) -> list[str]:
    if not analysis.ppg.full_block:
        return [f"PPG: {NOT_AVAILABLE}"]
    lines = []
    for side, snapshot in (("Home", analysis.ppg.home), ("Away", analysis.ppg.away)):
        lines.append(
            f"{side} ({snapshot.team_label}) PPG: {_ratio(snapshot.season_ppg)} | "
            f"PPG L8: {_ratio(snapshot.last8_ppg)} | "
            f"Opp PPG L8: {_ratio(snapshot.opponent_last8_ppg)} | "
            f"PPG Bias: {_ratio(snapshot.ppg_bias)}"
        )
    return lines


def _index_lines(analysis: MatchAnalysis) -> list[str]:
    snap = analysis.index.snapshot
    if not snap.found:
        return [f"Index: {NOT_AVAILABLE}"]
    return [
        f"Offence Index: Home {_ratio(snap.home_offence)} | Away {_ratio(snap.away_offence)}",
        f"Defence Index: Home {_ratio(snap.home_defence)} | Away {_ratio(snap.away_defence)}",
        f"H v A: {_ratio(snap.home_vs_away)} (negative favours Home)",
        f"Goal Edge: {_ratio(snap.goal_edge)}" if "Goal Edge" in snap.found else f"Goal Edge: {NOT_AVAILABLE}",
    ]


def _segment_lines(analysis: MatchAnalysis) -> list[str]:
    if not analysis.segments.has_data:
        return [f"5-Min Segments: {NOT_AVAILABLE}"]
    lines = [
        f"Late goals 76-90 (sum of 76-80, 81-85, 86-90): "
        f"Home H@H scored {_count(analysis.late.home.scored)} conceded {_count(analysis.late.home.conceded)} | "
        f"Away A@A scored {_count(analysis.late.away.scored)} conceded {_count(analysis.late.away.conceded)}"
    ]
    for window in analysis.timeline:
        lines.append(
            f"{window['window']}: Home {_count(window['home_scored'])}-{_count(window['home_conceded'])} | "
            f"Away {_count(window['away_scored'])}-{_count(window['away_conceded'])}"
        )
    return lines


def _half_lines(analysis: MatchAnalysis) -> list[str]:
    half = analysis.half
    lines = []
    for label, split in (
        ("Home scored (H@H)", half.home_scored),
        ("Home conceded (H@H)", half.home_conceded),
        ("Away scored (A@A)", half.away_scored),
        ("Away conceded (A@A)", half.away_conceded),
    ):
        lines.append(
            f"{label}: 1H 0.5+ {_pct(split.first_half_over05)}, 1H 1.5+ {_pct(split.first_half_over15)}, "
            f"2H 0.5+ {_pct(split.second_half_over05)}, 2H 1.5+ {_pct(split.second_half_over15)}, "
            f"goals by half {_pct(split.first_half_goals_pct)} / {_pct(split.second_half_goals_pct)}"
        )
    return lines


def _volatility_line(label: str, stats: VolatilityStats) -> str:
    if stats.insufficient_data:
        return f"{label} volatility: {NOT_AVAILABLE} ({stats.sample_size} matches found)"
    return (
        f"{label} volatility: {_pct(stats.volatility_percent)} over {stats.sample_size} matches | "
        f"scored mean {_ratio(stats.mean_scored)} SD {_ratio(stats.std_dev_scored)} CV {_ratio(stats.scored_cv)} | "
        f"conceded mean {_ratio(stats.mean_conceded)} SD {_ratio(stats.std_dev_conceded)} "
        f"CV {_ratio(stats.conceded_cv)}"
    )


def _results_lines(analysis: MatchAnalysis) -> list[str]:
    home, away = _team_names(analysis)
    match_vol = analysis.match_volatility
    lines = [
        _volatility_line(f"Home ({home})", analysis.home_volatility),
        _volatility_line(f"Away ({away})", analysis.away_volatility),
        f"Match volatility: {_pct(match_vol.combined_volatility_percent)} | "
        f"avg total goals {_ratio(match_vol.match_goal_expectancy)} | "
        f"range {_ratio(match_vol.match_range.low)} - {_ratio(match_vol.match_range.high)}",
    ]
    for label, form in (("Home", analysis.home_form), ("Away", analysis.away_form)):
        lines.append(
            f"{label} form PPG: L4 {_ratio(form.ppg_l4)} | L8 {_ratio(form.ppg_l8)} | "
            f"L12 {_ratio(form.ppg_l12)} ({form.games_found} games)"
        )
    res = analysis.resilience
    lines.append(
        f"Resilience: Home comeback {_pct(res.home_comeback)}, Home dropped {_pct(res.home_dropped)} | "
        f"Away comeback {_pct(res.away_comeback)}, Away dropped {_pct(res.away_dropped)}"
    )
    return lines


def _league_lines(analysis: MatchAnalysis) -> list[str]:
    league = analysis.league
    if not league.team_count:
        return [f"League table: {NOT_AVAILABLE}"]
    lines = [
        f"League averages ({league.team_count} teams): GF/game {_ratio(league.avg_goals_for)} | "
        f"GA/game {_ratio(league.avg_goals_against)}"
    ]
    for point in league.teams:
        if point.role != "league":
            lines.append(
                f"{point.role.title()} ({point.name}): GF/game {_ratio(point.goals_for_per_game)} | "
                f"GA/game {_ratio(point.goals_against_per_game)}"
            )
    return lines


def _flag_lines(analysis: MatchAnalysis) -> list[str]:
    if not analysis.flags:
        return ["No analytical flags triggered."]
    return [f"[{flag.type.upper()}] {flag.title}: {flag.description}" for flag in analysis.flags]


def build_raw_data_block(inputs: AnalysisInputs, analysis: MatchAnalysis) -> str:
    """
    The pasted blocks plus every derived figure, as one labelled text block.

    Supplied verbatim as grounding context for the follow-up and key-content
    reports.
    """
    sections = [
        f"PPG Block: {_raw(inputs.ppg_block)}",
        f"Index Block: {_raw(inputs.index_block)}",
        f"Home 5-Min: {_raw(inputs.home_five_min_block)}",
        f"Away 5-Min: {_raw(inputs.away_five_min_block)}",
        f"Overall Stats: {_raw(inputs.overall_stats_block)}",
        f"At Venue Stats: {_raw(inputs.venue_stats_block)}",
        "DERIVED STATS:",
        "\n".join(_ppg_lines(analysis)),
        "\n".join(_index_lines(analysis)),
        "\n".join(_segment_lines(analysis)),
        "\n".join(_half_lines(analysis)),
        "\n".join(_results_lines(analysis)),
        "\n".join(_league_lines(analysis)),
        "ANALYTICAL FLAGS:",
        "\n".join(_flag_lines(analysis)),
    ]
    return "\n\n".join(sections)


def build_verified_stats_context(analysis: MatchAnalysis) -> str:
    """Headline parsed values the main report must use as-is."""
    venue = analysis.venue
    half = analysis.half
    lines = [
        "**VERIFIED PARSED STATS (USE THESE VALUES, THEY ARE CORRECT):**",
        f"- Home Scoring Rate (H@H): {_pct(venue.scoring_rate.home)}",
        f"- Away Scoring Rate (A@A): {_pct(venue.scoring_rate.away)}",
        f"- Home Conceding Rate (H@H): {_pct(venue.conceding_rate.home)}",
        f"- Away Conceding Rate (A@A): {_pct(venue.conceding_rate.away)}",
        f"- Home Games with FHG: {_pct(venue.first_half_goal.home)}",
        f"- Home Games with SHG: {_pct(venue.second_half_goal.home)}",
        f"- Away Games with FHG: {_pct(venue.first_half_goal.away)}",
        f"- Away Games with SHG: {_pct(venue.second_half_goal.away)}",
        f"- Home PPG Bias: {_ratio(analysis.ppg.home.ppg_bias)}",
        f"- Away PPG Bias: {_ratio(analysis.ppg.away.ppg_bias)}",
        f"- Home 1st Half Goals (H@H 0.5+): {_pct(half.home_scored.first_half_over05)}",
        f"- Home Goals Breakdown (1st Half %): {_pct(half.home_scored.first_half_goals_pct)}",
        f"- Home Conceded 1st Half (H@H 0.5+): {_pct(half.home_conceded.first_half_over05)}",
        f"- Home Goals Conceded Breakdown (1st Half %): {_pct(half.home_conceded.first_half_goals_pct)}",
        f"- Late goals 76-90: Home scored {_count(analysis.late.home.scored)}, "
        f"Away conceded {_count(analysis.late.away.conceded)}, "
        f"Away scored {_count(analysis.late.away.scored)}, "
        f"Home conceded {_count(analysis.late.home.conceded)}",
    ]
    return "\n".join(lines)
