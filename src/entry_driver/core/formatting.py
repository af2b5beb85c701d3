"""Canonical text for domain values.

Every function in this module is a **pure** transformation — the text
it produces is what the driver writes to stdout, byte for byte.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from entry_driver.core.numbers import format_double
from entry_driver.core.types import INT64_MAX, INT64_MIN, DomainType, Kind, Pauli, RangeValue, Result
from entry_driver.exceptions import ValueFormatError


def _mismatch(domain_type: DomainType | str, value: Any) -> ValueFormatError:
    return ValueFormatError(
        f"Expected a {domain_type} value, got {type(value).__name__} {value!r}.",
    )


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Per-kind formatters
# ---------------------------------------------------------------------------

def format_unit(value: Any) -> str:
    if value is not None and value != ():
        raise _mismatch("Unit", value)
    return ""


def format_int(value: Any) -> str:
    if not _is_integer(value) or not INT64_MIN <= value <= INT64_MAX:
        raise _mismatch("Int", value)
    return str(value)


def format_big_int(value: Any) -> str:
    if not _is_integer(value):
        raise _mismatch("BigInt", value)
    return str(value)


def format_double_value(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch("Double", value)
    return format_double(float(value))


def format_bool(value: Any) -> str:
    if not isinstance(value, bool):
        raise _mismatch("Bool", value)
    return "True" if value else "False"


def format_pauli(value: Any) -> str:
    if not isinstance(value, Pauli):
        raise _mismatch("Pauli", value)
    return value.name


def format_result(value: Any) -> str:
    if not isinstance(value, Result):
        raise _mismatch("Result", value)
    return value.name


def format_range(value: Any) -> str:
    if not isinstance(value, RangeValue):
        raise _mismatch("Range", value)
    return f"{value.start}..{value.step}..{value.end}"


def format_string(value: Any) -> str:
    if not isinstance(value, str):
        raise _mismatch("String", value)
    return value


_FORMATTERS: dict[Kind, Callable[[Any], str]] = {
    Kind.UNIT: format_unit,
    Kind.INT: format_int,
    Kind.BIG_INT: format_big_int,
    Kind.DOUBLE: format_double_value,
    Kind.BOOL: format_bool,
    Kind.PAULI: format_pauli,
    Kind.RESULT: format_result,
    Kind.RANGE: format_range,
    Kind.STRING: format_string,
}

if set(_FORMATTERS) | {Kind.ARRAY} != set(Kind):  # pragma: no cover
    raise RuntimeError("Every scalar Kind needs a formatter.")


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def format_value(domain_type: DomainType | None, value: Any) -> str:
    """Render *value* as the canonical text for *domain_type*.

    ``None`` as the type means Unit.  Arrays render as ``[a,b,c]`` with
    no spaces, recursing into nested arrays.

    Raises
    ------
    ValueFormatError
        If *value* does not belong to *domain_type*.
    """
    if domain_type is None:
        return format_unit(value)
    if domain_type.element is not None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise _mismatch(domain_type, value)
        element = domain_type.element
        return "[" + ",".join(format_value(element, item) for item in value) + "]"
    return _FORMATTERS[domain_type.kind](value)
