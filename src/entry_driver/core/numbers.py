"""Strict numeric text conversion.

Python's ``int()`` and ``float()`` accept whitespace, underscores and
non-ASCII digits.  The command line accepts plain base-10 ASCII only, so
every token is matched against an explicit pattern before conversion.
"""

from __future__ import annotations

import math
import re

from entry_driver.core.types import INT64_MAX, INT64_MIN
from entry_driver.exceptions import TypeConversionError

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_SPECIAL_DOUBLES: dict[str, float] = {
    "nan": math.nan,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
}


def parse_big_int(token: str, *, type_name: str = "BigInt") -> int:
    """Parse a signed base-10 integer of any magnitude."""
    if not _INTEGER.fullmatch(token):
        raise TypeConversionError(type_name, token)
    return int(token)


def parse_int64(token: str, *, type_name: str = "Int") -> int:
    """Parse a signed base-10 integer that fits in 64 bits."""
    value = parse_big_int(token, type_name=type_name)
    if not INT64_MIN <= value <= INT64_MAX:
        raise TypeConversionError(
            type_name,
            token,
            hint=f"Values must lie between {INT64_MIN} and {INT64_MAX}.",
        )
    return value


def parse_double(token: str) -> float:
    """Parse decimal or exponent notation, ``NaN`` or ``Infinity``."""
    special = _SPECIAL_DOUBLES.get(token.lower())
    if special is not None:
        return special
    if not _DECIMAL.fullmatch(token):
        raise TypeConversionError("Double", token)
    return float(token)


def format_double(value: float) -> str:
    """Render *value* with the fewest digits that parse back to it."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)
