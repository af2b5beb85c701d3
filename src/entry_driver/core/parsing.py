"""Type-directed conversion of command-line tokens into domain values.

Each :class:`~entry_driver.core.types.Kind` has a parser.  Single-token
kinds are listed in :data:`_TOKEN_PARSERS`; Bool, Range and Array read a
variable number of tokens and are handled by :func:`parse_value`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from entry_driver.core.cursor import TokenCursor
from entry_driver.core.numbers import parse_big_int, parse_double, parse_int64
from entry_driver.core.ranges import fold_range, parse_range_tokens
from entry_driver.core.types import DomainType, Kind, Pauli, Result
from entry_driver.exceptions import MissingRequiredValue, TypeConversionError, UnknownOption

UNIT_LITERAL = "()"

_BOOL_TOKENS: dict[str, bool] = {"true": True, "false": False}
_RESULT_TOKENS: dict[str, Result] = {
    "zero": Result.Zero,
    "one": Result.One,
    "0": Result.Zero,
    "1": Result.One,
}


# ---------------------------------------------------------------------------
# Single-token parsers
# ---------------------------------------------------------------------------

def parse_unit(token: str) -> None:
    if token != UNIT_LITERAL:
        raise TypeConversionError("Unit", token, hint="The only Unit value is ().")
    return None


def parse_bool(token: str) -> bool:
    try:
        return _BOOL_TOKENS[token.lower()]
    except KeyError:
        raise TypeConversionError("Bool", token, hint="Use true or false.") from None


def parse_pauli(token: str) -> Pauli:
    try:
        return Pauli[token]
    except KeyError:
        raise TypeConversionError(
            "Pauli", token, hint="Use PauliI, PauliX, PauliY or PauliZ.",
        ) from None


def parse_result(token: str) -> Result:
    try:
        return _RESULT_TOKENS[token.lower()]
    except KeyError:
        raise TypeConversionError(
            "Result", token, hint="Use Zero, One, 0 or 1.",
        ) from None


def parse_string(token: str) -> str:
    return token


_TOKEN_PARSERS: dict[Kind, Callable[[str], Any]] = {
    Kind.UNIT: parse_unit,
    Kind.INT: parse_int64,
    Kind.BIG_INT: parse_big_int,
    Kind.DOUBLE: parse_double,
    Kind.BOOL: parse_bool,
    Kind.PAULI: parse_pauli,
    Kind.RESULT: parse_result,
    Kind.RANGE: lambda token: parse_range_tokens([token]),
    Kind.STRING: parse_string,
}

if set(_TOKEN_PARSERS) | {Kind.ARRAY} != set(Kind):  # pragma: no cover
    raise RuntimeError("Every scalar Kind needs a token parser.")


def parse_token(domain_type: DomainType, token: str) -> Any:
    """Parse one token as a scalar *domain_type*.

    Range accepts only its single-token ``a..b`` or ``a..b..c`` forms
    here; Bool requires an explicit ``true``/``false``.
    """
    if domain_type.element is not None:
        raise TypeConversionError(str(domain_type), token)
    return _TOKEN_PARSERS[domain_type.kind](token)


# ---------------------------------------------------------------------------
# Cursor-driven parsing
# ---------------------------------------------------------------------------

def parse_value(domain_type: DomainType, cursor: TokenCursor) -> Any:
    """Consume the tokens of one option value from *cursor*.

    Raises
    ------
    MissingRequiredValue
        When a value is required but the cursor is exhausted.
    TypeConversionError
        When a token does not convert to *domain_type*.
    RangeGrammarError
        When a range literal is malformed.
    """
    kind = domain_type.kind

    if kind is Kind.BOOL:
        # Anything other than true/false is left for the caller.
        token = cursor.peek()
        if token is None or token.lower() not in _BOOL_TOKENS:
            return True
        cursor.advance()
        return _BOOL_TOKENS[token.lower()]

    if kind is Kind.RANGE:
        return fold_range(cursor)

    if domain_type.element is not None:
        element = domain_type.element
        items: list[Any] = []
        while not cursor.at_end():
            items.append(parse_token(element, cursor.advance()))
        if not items:
            raise MissingRequiredValue(
                f"Expected at least one {element} value.",
            )
        return items

    if cursor.at_end():
        raise MissingRequiredValue(f"Expected a {domain_type} value.")
    return parse_token(domain_type, cursor.advance())


def parse_tokens(domain_type: DomainType, tokens: Sequence[str]) -> Any:
    """Parse *tokens* as exactly one value of *domain_type*.

    Raises
    ------
    UnknownOption
        When tokens remain after the value is complete.
    """
    cursor = TokenCursor(tokens)
    value = parse_value(domain_type, cursor)
    leftover = cursor.remaining()
    if leftover:
        raise UnknownOption(
            f"Unrecognized argument(s): {' '.join(leftover)}",
        )
    return value
