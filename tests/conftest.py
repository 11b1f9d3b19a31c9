import pytest

from trader.analysis import AnalysisInputs

from tests.samples import (
    AWAY_FIVE_MIN,
    AWAY_RESULTS,
    HALF_CONCEDED,
    HALF_SCORED,
    HOME_FIVE_MIN,
    HOME_RESULTS,
    INDEX_BLOCK,
    LEAGUE_TABLE,
    PPG_BLOCK,
    VENUE_BLOCK,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def full_inputs() -> AnalysisInputs:
    """Arsenal v Chelsea with every block pasted."""
    return AnalysisInputs(
        team_a="Arsenal",
        team_b="Chelsea",
        ppg_block=PPG_BLOCK,
        index_block=INDEX_BLOCK,
        home_five_min_block=HOME_FIVE_MIN,
        away_five_min_block=AWAY_FIVE_MIN,
        half_scored_block=HALF_SCORED,
        half_conceded_block=HALF_CONCEDED,
        league_table_block=LEAGUE_TABLE,
        home_results_block=HOME_RESULTS,
        away_results_block=AWAY_RESULTS,
        venue_stats_block=VENUE_BLOCK,
    )
