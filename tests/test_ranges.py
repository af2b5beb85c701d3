"""Tests for the range literal grammar (core/ranges.py).

Every test is a pure function call.  These tests exercise:

* Tokenizing single tokens into numbers and separators
* Folding split token sequences into ``start..step..end``
* Rejection of incomplete, dangling, and over-long literals
* Greedy consumption that stops after the third component
"""

from __future__ import annotations

import pytest

from entry_driver.core.cursor import TokenCursor
from entry_driver.core.ranges import (
    SEPARATOR,
    fold_range,
    parse_range_tokens,
    split_range_token,
)
from entry_driver.core.types import RangeValue
from entry_driver.exceptions import RangeGrammarError


# ---------------------------------------------------------------------------
# split_range_token
# ---------------------------------------------------------------------------

class TestSplitRangeToken:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("0", [0]),
            ("0..1", [0, SEPARATOR, 1]),
            ("0..2..10", [0, SEPARATOR, 2, SEPARATOR, 10]),
            ("..", [SEPARATOR]),
            ("0..", [0, SEPARATOR]),
            ("..1", [SEPARATOR, 1]),
            ("-5..-1", [-5, SEPARATOR, -1]),
        ],
    )
    def test_pieces(self, token: str, expected: list[object]) -> None:
        assert split_range_token(token) == expected

    @pytest.mark.parametrize("token", ["", "0....1", "a..1", "0.5..1", "0...1"])
    def test_rejects(self, token: str) -> None:
        with pytest.raises(RangeGrammarError):
            split_range_token(token)

    def test_rejects_out_of_int64(self) -> None:
        with pytest.raises(RangeGrammarError, match="64-bit"):
            split_range_token("0..9223372036854775808")


# ---------------------------------------------------------------------------
# parse_range_tokens — accepted forms
# ---------------------------------------------------------------------------

class TestAcceptedRanges:
    @pytest.mark.parametrize(
        ("tokens", "expected"),
        [
            (["0..0"], RangeValue(0, 1, 0)),
            (["0..1"], RangeValue(0, 1, 1)),
            (["0..2..10"], RangeValue(0, 2, 10)),
            (["0", "..1"], RangeValue(0, 1, 1)),
            (["0..", "1"], RangeValue(0, 1, 1)),
            (["0", "..", "1"], RangeValue(0, 1, 1)),
            (["0", "..2", "..10"], RangeValue(0, 2, 10)),
            (["0..", "2", "..10"], RangeValue(0, 2, 10)),
            (["0", "..", "2", "..", "10"], RangeValue(0, 2, 10)),
            (["0", "1"], RangeValue(0, 1, 1)),
            (["0", "2", "10"], RangeValue(0, 2, 10)),
            (["10..-2..0"], RangeValue(10, -2, 0)),
        ],
    )
    def test_forms(self, tokens: list[str], expected: RangeValue) -> None:
        assert parse_range_tokens(tokens) == expected


# ---------------------------------------------------------------------------
# parse_range_tokens — rejected forms
# ---------------------------------------------------------------------------

class TestRejectedRanges:
    @pytest.mark.parametrize(
        "tokens",
        [
            [],
            ["0"],
            ["0.."],
            ["..1"],
            ["0..2.."],
            ["0..2..3.."],
            ["0..2..3..4"],
            ["0", "1", "2", "3"],
            ["0", "..", "..", "1"],
            ["0", ".."],
            ["foo"],
        ],
    )
    def test_fails(self, tokens: list[str]) -> None:
        with pytest.raises(RangeGrammarError):
            parse_range_tokens(tokens)

    def test_error_reports_consumed_tokens(self) -> None:
        with pytest.raises(RangeGrammarError) as exc_info:
            parse_range_tokens(["0", ".."])
        assert exc_info.value.tokens == ("0", "..")


# ---------------------------------------------------------------------------
# fold_range — cursor behaviour
# ---------------------------------------------------------------------------

class TestFoldRange:
    def test_stops_after_three_components(self) -> None:
        cursor = TokenCursor(["0", "2", "10", "99"])
        assert fold_range(cursor) == RangeValue(0, 2, 10)
        assert cursor.remaining() == ("99",)

    def test_stops_at_option_flag(self) -> None:
        cursor = TokenCursor(["0..5", "--other", "1"], is_option=lambda tok: tok == "--other")
        assert fold_range(cursor) == RangeValue(0, 1, 5)
        assert cursor.remaining() == ("--other", "1")

    def test_dangling_separator_before_flag_fails(self) -> None:
        cursor = TokenCursor(["0..", "--other"], is_option=lambda tok: tok == "--other")
        with pytest.raises(RangeGrammarError):
            fold_range(cursor)
