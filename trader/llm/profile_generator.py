"""
Match profile generation.

Flow for the main report:
1. Validate inputs (both team names, PPG and Index blocks, an API key).
2. Fetch team news (search grounded).
3. Build the stats query, the verified-stats context and the news context.
4. Generate the report (search grounded).

Follow-up answers and the key learnings / charts / visualisations side
reports reuse the report text plus the raw data block as context.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from trader.analysis import AnalysisInputs, MatchAnalysis, VolatilityOptions, analyze
from trader.flags import FlagThresholds
from trader.llm.derived_facts import build_raw_data_block, build_verified_stats_context
from trader.llm.gemini_client import GeminiClient, GeminiResult
from trader.llm.prompts import (
    FOLLOW_UP_SYSTEM_PROMPT,
    KEY_CONTENT_PROMPTS,
    SYSTEM_PROMPT,
    render_team_news_prompt,
)

logger = logging.getLogger(__name__)


class ProfileInputError(Exception):
    """Required inputs missing for profile generation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class ProfileReport:
    profile: GeminiResult
    team_news: GeminiResult
    analysis: MatchAnalysis
    raw_data: str


def validate_profile_inputs(inputs: AnalysisInputs, api_key: Optional[str]) -> None:
    """
    Raises:
        ProfileInputError: listing every missing requirement.
    """
    errors = []
    if not inputs.team_a.strip() or not inputs.team_b.strip():
        errors.append("Both team names are required")
    if not inputs.ppg_block.strip() or not inputs.index_block.strip():
        errors.append("PPG and Index blocks are required for analysis")
    if not (api_key or "").strip():
        errors.append("API key is required")
    if errors:
        raise ProfileInputError(errors)


def _or_na(text: str) -> str:
    return text.strip() or "N/A"


def build_stats_query(inputs: AnalysisInputs) -> str:
    home = inputs.team_a.strip() or "Home Team"
    away = inputs.team_b.strip() or "Away Team"
    return "\n".join([
        f"Analyze the upcoming match: **{home} vs {away}**.",
        "",
        f"PPG Block: {_or_na(inputs.ppg_block)}",
        f"Index Block: {_or_na(inputs.index_block)}",
        f"Home 5-Min: {_or_na(inputs.home_five_min_block)}",
        f"Away 5-Min: {_or_na(inputs.away_five_min_block)}",
        f"Overall Stats: {_or_na(inputs.overall_stats_block)}",
        f"At Venue Stats: {_or_na(inputs.venue_stats_block)}",
        f"League Table: {_or_na(inputs.league_table_block)}",
        f"Home Raw Results: {_or_na(inputs.home_results_block)}",
        f"Away Raw Results: {_or_na(inputs.away_results_block)}",
    ])


def build_profile_query(stats_query: str, verified_stats: str, news_text: str) -> str:
    return "\n".join([
        stats_query,
        "",
        "---",
        verified_stats,
        "---",
        "**CRITICAL REAL-TIME CONTEXT (You MUST use this to guide your analysis):**",
        news_text,
        "---",
    ])


def build_follow_up_query(question: str, context: str) -> str:
    return "\n".join([
        "---",
        "**MY ORIGINAL PROPRIETARY DATA (FOR YOUR REFERENCE):**",
        "---",
        context,
        "---",
        "**MY FOLLOW-UP QUESTION:**",
        f'"{question}"',
    ])


def build_key_content_query(analysis_text: str, raw_data: str) -> str:
    return "\n".join([
        "---",
        "**MY ORIGINAL PROPRIETARY DATA (FOR YOUR REFERENCE):**",
        "---",
        raw_data,
        "---",
        "**THE DETAILED ANALYSIS I JUST READ (YOUR PRIMARY CONTEXT):**",
        "---",
        analysis_text,
    ])


class ProfileGenerator:
    """Drives the Gemini calls for one analysis session."""

    def __init__(
        self,
        client: GeminiClient,
        thresholds: Optional[FlagThresholds] = None,
        volatility: Optional[VolatilityOptions] = None,
    ):
        self.client = client
        self.thresholds = thresholds or FlagThresholds()
        self.volatility = volatility or VolatilityOptions()

    async def get_team_news(self, team_a: str, team_b: str, today: Optional[date] = None) -> GeminiResult:
        return await self.client.generate(
            f"Get team news for {team_a} vs {team_b}",
            render_team_news_prompt(team_a, team_b, today),
            include_search=True,
        )

    async def generate(self, inputs: AnalysisInputs, today: Optional[date] = None) -> ProfileReport:
        """
        Generate the main match profile.

        Raises:
            ProfileInputError: missing team names, blocks or API key.
            GeminiError: either Gemini call failed.
        """
        validate_profile_inputs(inputs, self.client.api_key)
        team_a, team_b = inputs.team_a.strip(), inputs.team_b.strip()

        logger.info(f"Profile {team_a} v {team_b}: fetching team news")
        news = await self.get_team_news(team_a, team_b, today)

        analysis = analyze(inputs, self.thresholds, self.volatility)
        query = build_profile_query(
            build_stats_query(inputs),
            build_verified_stats_context(analysis),
            news.text,
        )

        logger.info(f"Profile {team_a} v {team_b}: generating report ({len(analysis.flags)} flags)")
        profile = await self.client.generate(query, SYSTEM_PROMPT, include_search=True)

        return ProfileReport(
            profile=profile,
            team_news=news,
            analysis=analysis,
            raw_data=build_raw_data_block(inputs, analysis),
        )

    async def ask_follow_up(self, question: str, profile_text: str, raw_data: str) -> GeminiResult:
        if not question.strip():
            raise ProfileInputError(["Follow-up question is required"])
        context = f"{profile_text}\n\n{raw_data}"
        return await self.client.generate(
            build_follow_up_query(question.strip(), context),
            FOLLOW_UP_SYSTEM_PROMPT,
            include_search=True,
        )

    async def generate_key_content(self, kind: str, profile_text: str, raw_data: str) -> GeminiResult:
        """Key learnings, charts or visualisations for a finished report (no search)."""
        system_prompt = KEY_CONTENT_PROMPTS.get(kind)
        if system_prompt is None:
            raise ProfileInputError([f"Unknown key content kind {kind!r}; expected one of {sorted(KEY_CONTENT_PROMPTS)}"])
        if not profile_text.strip():
            raise ProfileInputError(["A generated profile is required"])
        return await self.client.generate(
            build_key_content_query(profile_text, raw_data),
            system_prompt,
            include_search=False,
        )
