"""Tests for type-directed value parsing (core/parsing.py, core/numbers.py).

Pure function calls only.  Covers each domain type's accepted and
rejected tokens, bool flag semantics, greedy arrays, and the cursor.
"""

from __future__ import annotations

import math

import pytest

from entry_driver.core import types as t
from entry_driver.core.cursor import TokenCursor
from entry_driver.core.numbers import parse_big_int, parse_double, parse_int64
from entry_driver.core.parsing import parse_token, parse_tokens, parse_value
from entry_driver.core.types import DomainType, Pauli, RangeValue, Result
from entry_driver.exceptions import (
    MissingRequiredValue,
    RangeGrammarError,
    TypeConversionError,
    UnknownOption,
)


def _is_flag(token: str) -> bool:
    return token.startswith("--")


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestInt64:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("42", 42),
            ("-42", -42),
            ("+7", 7),
            ("9223372036854775807", 2**63 - 1),
            ("-9223372036854775808", -(2**63)),
        ],
    )
    def test_accepts(self, token: str, expected: int) -> None:
        assert parse_int64(token) == expected

    @pytest.mark.parametrize(
        "token",
        ["4.2", "foo", "", " 42", "1_000", "9223372036854775808", "-9223372036854775809", "٣"],
    )
    def test_rejects(self, token: str) -> None:
        with pytest.raises(TypeConversionError):
            parse_int64(token)


class TestBigInt:
    def test_accepts_beyond_int64(self) -> None:
        assert parse_big_int("9223372036854775808") == 2**63

    def test_accepts_huge_negative(self) -> None:
        assert parse_big_int("-" + "9" * 40) == -int("9" * 40)

    @pytest.mark.parametrize("token", ["4.2", "foo", "1e3"])
    def test_rejects(self, token: str) -> None:
        with pytest.raises(TypeConversionError) as exc_info:
            parse_big_int(token)
        assert exc_info.value.type_name == "BigInt"


class TestDouble:
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("4.2", 4.2),
            ("42", 42.0),
            ("-0.5", -0.5),
            (".5", 0.5),
            ("1e+20", 1e20),
            ("2.5E-3", 2.5e-3),
            ("Infinity", math.inf),
            ("-infinity", -math.inf),
        ],
    )
    def test_accepts(self, token: str, expected: float) -> None:
        assert parse_double(token) == expected

    def test_nan(self) -> None:
        assert math.isnan(parse_double("NaN"))

    @pytest.mark.parametrize("token", ["foo", "", "1_0.5", "4.2.1", "inf"])
    def test_rejects(self, token: str) -> None:
        with pytest.raises(TypeConversionError):
            parse_double(token)


# ---------------------------------------------------------------------------
# Single-token kinds
# ---------------------------------------------------------------------------

class TestScalarTokens:
    def test_unit(self) -> None:
        assert parse_token(t.UNIT, "()") is None

    @pytest.mark.parametrize("token", ["42", "( )", ""])
    def test_unit_rejects(self, token: str) -> None:
        with pytest.raises(TypeConversionError):
            parse_token(t.UNIT, token)

    @pytest.mark.parametrize("name", ["PauliI", "PauliX", "PauliY", "PauliZ"])
    def test_pauli(self, name: str) -> None:
        assert parse_token(t.PAULI, name) is Pauli[name]

    @pytest.mark.parametrize("token", ["PauliW", "paulix", "X"])
    def test_pauli_rejects(self, token: str) -> None:
        with pytest.raises(TypeConversionError):
            parse_token(t.PAULI, token)

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("Zero", Result.Zero),
            ("zero", Result.Zero),
            ("One", Result.One),
            ("one", Result.One),
            ("0", Result.Zero),
            ("1", Result.One),
        ],
    )
    def test_result(self, token: str, expected: Result) -> None:
        assert parse_token(t.RESULT, token) is expected

    @pytest.mark.parametrize("token", ["Two", "2", ""])
    def test_result_rejects(self, token: str) -> None:
        with pytest.raises(TypeConversionError):
            parse_token(t.RESULT, token)

    def test_string_is_verbatim(self) -> None:
        assert parse_token(t.STRING, "  Hello, World!  ") == "  Hello, World!  "

    def test_bool_token_requires_literal(self) -> None:
        assert parse_token(t.BOOL, "FALSE") is False
        with pytest.raises(TypeConversionError):
            parse_token(t.BOOL, "one")

    def test_range_token(self) -> None:
        assert parse_token(t.RANGE, "1..3") == RangeValue(1, 1, 3)


# ---------------------------------------------------------------------------
# Bool flag semantics
# ---------------------------------------------------------------------------

class TestBoolFlag:
    def test_bare_flag_is_true(self) -> None:
        assert parse_tokens(t.BOOL, []) is True

    @pytest.mark.parametrize(("token", "expected"), [("false", False), ("True", True)])
    def test_explicit_value_is_consumed(self, token: str, expected: bool) -> None:
        cursor = TokenCursor([token, "--next"], is_option=_is_flag)
        assert parse_value(t.BOOL, cursor) is expected
        assert cursor.remaining() == ("--next",)

    def test_unrelated_token_is_left(self) -> None:
        cursor = TokenCursor(["one"])
        assert parse_value(t.BOOL, cursor) is True
        assert cursor.remaining() == ("one",)

    def test_unrelated_token_fails_when_handed_to_flag(self) -> None:
        with pytest.raises(UnknownOption):
            parse_tokens(t.BOOL, ["one"])

    def test_next_option_is_not_consumed(self) -> None:
        cursor = TokenCursor(["--other"], is_option=_is_flag)
        assert parse_value(t.BOOL, cursor) is True
        assert cursor.position == 0


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------

class TestArray:
    def test_single_element(self) -> None:
        assert parse_tokens(DomainType.array(t.STRING), ["foo"]) == ["foo"]

    def test_embedded_spaces_stay_one_element(self) -> None:
        assert parse_tokens(DomainType.array(t.STRING), ["foo bar", "baz"]) == ["foo bar", "baz"]

    def test_stops_at_next_flag(self) -> None:
        cursor = TokenCursor(["1", "2", "--n", "3"], is_option=_is_flag)
        assert parse_value(DomainType.array(t.INT), cursor) == [1, 2]
        assert cursor.remaining() == ("--n", "3")

    def test_requires_one_element(self) -> None:
        cursor = TokenCursor(["--n"], is_option=_is_flag)
        with pytest.raises(MissingRequiredValue):
            parse_value(DomainType.array(t.INT), cursor)

    def test_element_conversion_error(self) -> None:
        with pytest.raises(TypeConversionError) as exc_info:
            parse_tokens(DomainType.array(t.INT), ["1", "two"])
        assert exc_info.value.token == "two"

    def test_result_elements(self) -> None:
        assert parse_tokens(DomainType.array(t.RESULT), ["0", "One"]) == [Result.Zero, Result.One]

    def test_range_elements_are_single_tokens(self) -> None:
        value = parse_tokens(DomainType.array(t.RANGE), ["0..2", "1..2..9"])
        assert value == [RangeValue(0, 1, 2), RangeValue(1, 2, 9)]

    def test_split_range_element_fails(self) -> None:
        with pytest.raises(RangeGrammarError):
            parse_tokens(DomainType.array(t.RANGE), ["0", "..2"])


# ---------------------------------------------------------------------------
# Whole-value parsing
# ---------------------------------------------------------------------------

class TestParseTokens:
    def test_single_value(self) -> None:
        assert parse_tokens(t.INT, ["42"]) == 42

    def test_missing_value(self) -> None:
        with pytest.raises(MissingRequiredValue):
            parse_tokens(t.INT, [])

    def test_leftover_tokens(self) -> None:
        with pytest.raises(UnknownOption, match="3"):
            parse_tokens(t.RANGE, ["0", "1", "2", "3"])

    def test_range(self) -> None:
        assert parse_tokens(t.RANGE, ["0..", "2", "..10"]) == RangeValue(0, 2, 10)


class TestTokenCursor:
    def test_peek_does_not_consume(self) -> None:
        cursor = TokenCursor(["a", "b"])
        assert cursor.peek() == "a"
        assert cursor.position == 0

    def test_advance_past_end(self) -> None:
        cursor = TokenCursor([])
        assert cursor.at_end()
        with pytest.raises(IndexError):
            cursor.advance()

    def test_flag_counts_as_end(self) -> None:
        cursor = TokenCursor(["--x"], is_option=_is_flag)
        assert cursor.at_end()
        assert cursor.peek() is None
        assert cursor.remaining() == ("--x",)
