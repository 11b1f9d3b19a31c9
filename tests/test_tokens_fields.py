"""
Tests for line/column splitting and labeled value lookup.
"""

import pytest

from trader.parsing.fields import find_row, labeled_values, row_values, scan_label
from trader.parsing.tokens import (
    parse_number,
    parse_score_pair,
    split_columns,
    split_lines,
    split_tokens,
)


class TestSplitting:
    """Column and token splitting."""

    def test_columns_split_on_runs_of_spaces_and_tabs(self):
        """Tabs and double spaces split columns."""
        assert split_columns("PPG L8   1.5\t2.0") == ["PPG L8", "1.5", "2.0"]

    def test_single_space_stays_inside_column(self):
        """Single spaces stay inside a label."""
        assert split_columns("First to score (%)  65%  40%") == ["First to score (%)", "65%", "40%"]

    def test_blank_line_has_no_columns(self):
        """A blank line has no columns."""
        assert split_columns("   ") == []

    def test_lines_are_stripped_and_blank_lines_dropped(self):
        """Lines are stripped and blanks dropped."""
        assert split_lines("  a  \n\n b\n") == ["a", "b"]
        assert split_lines(None) == []

    def test_tokens(self):
        """Tokens split on any whitespace."""
        assert split_tokens("Scoring Rate 70% 45%") == ["Scoring", "Rate", "70%", "45%"]
        assert split_tokens("") == []


class TestParseNumber:
    """Numeric token parsing."""

    @pytest.mark.parametrize("token,expected", [
        ("62%", 62.0),
        ("-0.25", -0.25),
        (".5", 0.5),
        ("1.85", 1.85),
        ("40 %", 40.0),
    ])
    def test_numbers(self, token, expected):
        """Plain numbers and percentages parse."""
        assert parse_number(token) == expected

    @pytest.mark.parametrize("token", ["abc", "nan", "0.5+", "", None, "1st"])
    def test_non_numbers(self, token):
        """Anything else is None."""
        assert parse_number(token) is None

    def test_score_pair(self):
        """Score cells split on the dash."""
        assert parse_score_pair("3-1") == (3.0, 1.0)
        assert parse_score_pair("3") is None
        assert parse_score_pair("-") is None


class TestLabeledValues:
    """Row search first, token scan as fallback."""

    def test_row_search_exact(self):
        """Exact label match in row mode."""
        text = "PPG  1.80  1.20\nPPG L8  2.00  1.00"
        values, found = labeled_values(text, "PPG L8")
        assert found
        assert values == [2.0, 1.0]

    def test_token_scan_fallback(self):
        """Single-spaced text falls back to the token scan."""
        values, found = labeled_values("Scoring Rate 70% 45%", "Scoring Rate")
        assert found
        assert values == [70.0, 45.0]

    def test_missing_label_pads_with_zero(self):
        """A missing label reads zero and not found."""
        values, found = labeled_values("Offence  1  2", "Defence", count=2)
        assert not found
        assert values == [0.0, 0.0]

    def test_reject_next_skips_longer_label(self):
        """A longer label is not mistaken for a shorter one."""
        text = "PPG L8 2.0 1.0 PPG 1.5 1.2"
        values, found = labeled_values(text, "PPG", reject_next=("L8", "Bias"))
        assert found
        assert values == [1.5, 1.2]

    def test_reject_prev_skips_opponent_label(self):
        """Opp PPG L8 is not mistaken for PPG L8."""
        tokens = "Opp PPG L8 1.4 1.6 PPG L8 2.1 0.9".split()
        assert scan_label(tokens, ["PPG", "L8"], count=2, reject_prev=("Opp",)) == [2.1, 0.9]

    def test_prefix_match_with_exclusion(self):
        """Excluded words disqualify a prefix match."""
        lines = ["Opp PPG L8  1.4  1.6", "PPG  1.9  1.1"]
        row = find_row(lines, "PPG", match="prefix", exclude=("Opp",))
        assert row is not None
        assert row.values == ["1.9", "1.1"]

    def test_wide_row_takes_pair_before_last_column(self):
        """Wide rows read the pair before the last column."""
        row = find_row(["PPG  Arsenal  x  1.85  1.10  Chelsea"], "PPG")
        assert row_values(row, 2, wide=True) == [1.85, 1.10]

    def test_unparseable_cell_reads_zero_for_its_side(self):
        """A placeholder home cell leaves the away value in the away slot."""
        row = find_row(["Clean sheets (%)  -  45%"], "Clean sheets (%)")
        assert row_values(row, 2) == [0.0, 45.0]

    def test_wide_row_with_blank_home_cell(self):
        """The wide pair is read by position too."""
        row = find_row(["PPG Bias  x  y  -  -0.6  z"], "PPG Bias")
        assert row_values(row, 2, wide=True) == [0.0, -0.6]

    def test_header_row_does_not_shadow_data_row(self):
        """Rows with no numeric cell are passed over."""
        lines = ["Offence Index  Home  Away", "Offence Index  14.0  12.0"]
        row = find_row(lines, "Offence", match="prefix")
        assert row.values == ["14.0", "12.0"]
        values, found = labeled_values("\n".join(lines), "Offence", match="prefix")
        assert found
        assert values == [14.0, 12.0]

    def test_placeholder_value_is_not_found(self):
        """A label followed only by N/A reports not found and never borrows later numbers."""
        values, found = labeled_values("Goal Edge  N/A\nOffence  14.0  12.0", "Goal Edge", count=1)
        assert not found
        assert values == [0.0]

    def test_token_scan_without_numbers_is_not_found(self):
        """The free-token fallback also needs a number to count as found."""
        values, found = labeled_values("Goal Edge N/A", "Goal Edge", count=1)
        assert not found
        assert values == [0.0]

    def test_missing_row_is_zero_padded(self):
        """No row, all zero."""
        assert row_values(None, 3) == [0.0, 0.0, 0.0]
