"""
Labeled value lookup.

Two calling conventions:

(a) Row search: "Name  HomeVal  AwayVal" rows whose columns are separated by
    runs of 2+ spaces. The label is matched against the first column and
    values are read by position, so a blank home cell never shifts the away
    value into the home slot. Rows without a single numeric cell (headers)
    are passed over.
(b) Token scan: the whole block is split on whitespace and a label phrase is
    located anywhere in it; the next N numeric tokens are collected, skipping
    whatever non-numeric tokens sit in between.

(a) is preferred for fixed-width blocks, (b) is the fallback when a block's
formatting is inconsistent. Labels are case-sensitive literals. Missing
values are padded with 0, so lookups never fail. A label counts as found
only when at least one of its values was actually read.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from trader.parsing.tokens import parse_number, split_columns, split_lines, split_tokens


@dataclass(frozen=True)
class LabeledRow:
    """A table row located by its label."""

    label: str
    columns: list[str]

    @property
    def values(self) -> list[str]:
        return self.columns[1:]


def _label_matches(first_column: str, label: str, match: str, exclude: Iterable[str]) -> bool:
    if any(word in first_column for word in exclude):
        return False
    if match == "exact":
        return first_column == label
    return first_column.startswith(label)


def _has_number(cells: Iterable[str]) -> bool:
    return any(parse_number(cell) is not None for cell in cells)


def find_row(
    lines: Sequence[str],
    label: str,
    match: str = "exact",
    exclude: Iterable[str] = (),
    min_columns: int = 2,
    require_number: bool = True,
) -> Optional[LabeledRow]:
    """
    Find the first row whose first column matches `label`.

    Args:
        lines: Block lines (see split_lines).
        label: Literal label, e.g. "PPG L8".
        match: "exact" or "prefix".
        exclude: Substrings that disqualify a first column
            (e.g. "Opp" so "PPG" never hits "Opp PPG L8" in prefix mode).
        min_columns: Rows with fewer columns are ignored.
        require_number: Skip matching rows with no numeric value cell, so a
            header such as "Offence Index  Home  Away" does not shadow the
            data row below it.
    """
    exclude = tuple(exclude)
    for line in lines:
        columns = split_columns(line)
        if len(columns) < min_columns:
            continue
        if not _label_matches(columns[0], label, match, exclude):
            continue
        if require_number and not _has_number(columns[1:]):
            continue
        return LabeledRow(label=label, columns=columns)
    return None


def _value_cells(row: LabeledRow, count: int, wide: bool) -> list[str]:
    if wide and len(row.columns) >= 6:
        return row.columns[-3:-1]
    return row.values[:count]


def row_values(row: Optional[LabeledRow], count: int = 2, wide: bool = False) -> list[float]:
    """
    Numeric values of a row, padded with 0 to `count`.

    In the wide layout (6+ columns, used by the PPG block) the home/away
    pair sits third- and second-from-last; otherwise the columns right after
    the label are taken. Values are positional: an unparseable cell reads as
    0 for its own side only.
    """
    if row is None:
        return [0.0] * count

    values = [parse_number(cell) or 0.0 for cell in _value_cells(row, count, wide)]
    return values + [0.0] * (count - len(values))


def _phrase_at(tokens: Sequence[str], start: int, phrase: Sequence[str], prefix: bool) -> bool:
    if start + len(phrase) > len(tokens):
        return False
    for offset, word in enumerate(phrase):
        token = tokens[start + offset]
        if prefix and offset == len(phrase) - 1:
            if not token.startswith(word):
                return False
        elif token != word:
            return False
    return True


def _scan_numbers(
    tokens: Sequence[str],
    phrase: Sequence[str],
    count: int,
    reject_next: Iterable[str],
    reject_prev: Iterable[str],
    prefix: bool,
) -> Optional[list[float]]:
    if not phrase:
        return None
    reject_after = set(reject_next)
    reject_before = set(reject_prev)
    for start in range(len(tokens)):
        if not _phrase_at(tokens, start, phrase, prefix):
            continue
        after = start + len(phrase)
        if after < len(tokens) and tokens[after] in reject_after:
            continue
        if start > 0 and tokens[start - 1] in reject_before:
            continue
        found: list[float] = []
        for token in tokens[after:]:
            value = parse_number(token)
            if value is None:
                continue
            found.append(value)
            if len(found) == count:
                break
        return found
    return None


def scan_label(
    tokens: Sequence[str],
    phrase: Sequence[str],
    count: int = 1,
    reject_next: Iterable[str] = (),
    reject_prev: Iterable[str] = (),
    prefix: bool = False,
) -> Optional[list[float]]:
    """
    Free-token scan for a label phrase.

    Returns the next `count` numeric tokens after the first occurrence of
    `phrase`, 0-padded, or None when the phrase never occurs. An occurrence
    directly followed by a token in `reject_next`, or preceded by one in
    `reject_prev`, is ignored: "PPG" does not match the start of "PPG L8"
    and "PPG L8" does not match the tail of "Opp PPG L8".
    """
    found = _scan_numbers(tokens, phrase, count, reject_next, reject_prev, prefix)
    if found is None:
        return None
    return found + [0.0] * (count - len(found))


def labeled_values(
    text: Optional[str],
    label: str,
    count: int = 2,
    match: str = "exact",
    exclude: Iterable[str] = (),
    wide: bool = False,
    reject_next: Iterable[str] = (),
    reject_prev: Iterable[str] = (),
) -> tuple[list[float], bool]:
    """
    Look a label up with row search first and token scan as fallback.

    Returns:
        (values, found). values is always `count` long; found tells whether
        a numeric value was read for the label by either convention. A label
        row holding only placeholders ("Goal Edge  N/A") is not found, and
        the token scan is skipped so it cannot borrow the next row's numbers.
    """
    exclude = tuple(exclude)
    lines = split_lines(text)
    row = find_row(lines, label, match=match, exclude=exclude)
    if row is not None:
        return row_values(row, count, wide=wide), _has_number(_value_cells(row, count, wide))
    if find_row(lines, label, match=match, exclude=exclude, require_number=False) is not None:
        return [0.0] * count, False

    scanned = _scan_numbers(
        split_tokens(text), label.split(), count,
        reject_next=reject_next, reject_prev=reject_prev, prefix=False,
    )
    if not scanned:
        return [0.0] * count, False
    return scanned + [0.0] * (count - len(scanned)), True
