"""
Tests for the Half Data section parser and the league table quadrant.
"""

import pytest

from trader.parsing.half_data import (
    HalfSplit,
    extract_half_split,
    parse_half_blocks,
    split_half_sections,
)
from trader.parsing.league_table import parse_league_table

from tests.samples import HALF_CONCEDED, HALF_SCORED, LEAGUE_TABLE


class TestHalfSections:
    """Header state machine."""

    def test_lines_follow_current_header(self):
        """Lines belong to the header above them."""
        sections = split_half_sections(HALF_SCORED)
        assert sections["home_h2h"].splitlines()[0].startswith("1ST HALF OVERS")
        assert len(sections["home_h2h"].splitlines()) == 3
        assert len(sections["away_a2a"].splitlines()) == 3
        assert sections["venue"] == ""

    def test_text_after_header_belongs_to_section(self):
        """Text on the header line joins its section."""
        sections = split_half_sections("A@A: GOALS BY HALF 1st 40% 2nd 60%")
        assert sections["away_a2a"] == "GOALS BY HALF 1st 40% 2nd 60%"

    def test_lines_before_first_header_are_dropped(self):
        """Preamble lines are ignored."""
        sections = split_half_sections("Goals scored\nH@H:\nGOALS BY HALF 1st 40% 2nd 60%")
        assert sections["home_h2h"] == "GOALS BY HALF 1st 40% 2nd 60%"

    def test_no_headers(self):
        """Without headers there are no sections."""
        assert set(split_half_sections("just text").values()) == {""}

    def test_season_headers(self):
        """Season-wide headers are recognised."""
        sections = split_half_sections("Home Season:\nx\nAway Season:\ny\nAvg:\nz")
        assert sections["home_season"] == "x"
        assert sections["away_season"] == "y"
        assert sections["avg"] == "z"


class TestHalfSplit:
    """Per-section figures."""

    def test_threshold_tokens_are_stepped_over(self):
        """Threshold labels such as 0.5+ are not read as values."""
        split = extract_half_split(
            "1ST HALF OVERS  0.5+ 75%  1.5+ 25%\n"
            "2ND HALF OVERS  0.5+ 88%  1.5+ 38%\n"
            "GOALS BY HALF  1st 35%  2nd 65%"
        )
        assert split == HalfSplit(75, 25, 88, 38, 35, 65)

    def test_empty_section(self):
        """An empty section is all zero."""
        assert extract_half_split("") == HalfSplit()

    def test_both_blocks(self):
        """Scored and conceded blocks fill both sides."""
        half = parse_half_blocks(HALF_SCORED, HALF_CONCEDED)
        assert half.home_scored.second_half_goals_pct == 65
        assert half.away_scored.first_half_over05 == 50
        assert half.home_conceded.first_half_over05 == 30
        assert half.away_conceded.second_half_goals_pct == 70

    def test_missing_conceded_block(self):
        """A missing conceded block stays zero."""
        half = parse_half_blocks(HALF_SCORED, None)
        assert half.home_conceded == HalfSplit()
        assert half.home_scored.first_half_over15 == 25


class TestLeagueTable:
    """Goals for / against per game quadrant."""

    def test_rows_and_roles(self):
        """Rows are read and the two teams tagged."""
        league = parse_league_table(LEAGUE_TABLE, "Arsenal", "Chelsea")
        assert league.team_count == 3
        assert [p.role for p in league.teams] == ["home", "away", "league"]
        arsenal = league.teams[0]
        assert arsenal.name == "Arsenal"
        assert arsenal.games_played == 20
        assert arsenal.goals_for_per_game == pytest.approx(41 / 20)
        assert arsenal.goals_against_per_game == pytest.approx(15 / 20)

    def test_multi_word_names(self):
        """Names with spaces stay whole."""
        league = parse_league_table(LEAGUE_TABLE)
        assert league.teams[2].name == "Luton Town"

    def test_names_ending_in_digits(self):
        """Trailing numeric columns are anchored, so 'Schalke 04' stays whole."""
        league = parse_league_table(
            "8. Schalke 04  20  8  4  8  30  31  -1  28\n9. Mainz 05  20  7  6  7  25  25  0  27"
        )
        assert [p.name for p in league.teams] == ["Schalke 04", "Mainz 05"]
        schalke = league.teams[0]
        assert schalke.games_played == 20
        assert schalke.goals_for_per_game == pytest.approx(30 / 20)
        assert schalke.goals_against_per_game == pytest.approx(31 / 20)
        assert league.avg_goals_for == pytest.approx(55 / 40)

    def test_rows_without_goal_difference_and_points(self):
        """GD and Pts are optional."""
        league = parse_league_table("1. Hannover 96  10  5  3  2  18  11")
        assert league.teams[0].name == "Hannover 96"
        assert league.teams[0].goals_for_per_game == pytest.approx(1.8)

    def test_inconsistent_record_is_skipped(self):
        """W + D + L must add up to GP."""
        league = parse_league_table("1. Arsenal  20  14  4  9  41  15  26  46")
        assert league.team_count == 0

    def test_averages_weighted_by_games_played(self):
        """League averages are weighted by GP."""
        league = parse_league_table(LEAGUE_TABLE)
        assert league.avg_goals_for == pytest.approx(99 / 60)
        assert league.avg_goals_against == pytest.approx(75 / 60)

    def test_averages_reproduce_league_totals(self):
        """Average times total GP gives total GF."""
        league = parse_league_table(LEAGUE_TABLE)
        total_gp = sum(p.games_played for p in league.teams)
        total_gf = sum(p.goals_for_per_game * p.games_played for p in league.teams)
        assert league.avg_goals_for * total_gp == pytest.approx(total_gf)

    def test_zero_games_rows_skipped(self):
        """Teams without games are skipped."""
        league = parse_league_table("1. Newcomers  0  0  0  0  0  0  0  0\n2. Arsenal  1  1  0  0  2  0  2  3")
        assert league.team_count == 1
        assert league.avg_goals_for == 2.0

    def test_empty_table(self):
        """No rows, no averages."""
        league = parse_league_table("no table here")
        assert league.team_count == 0
        assert league.avg_goals_for == 0.0
