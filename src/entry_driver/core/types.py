"""Domain types and domain values.

The set of types an entry point may declare is closed: :class:`Kind`
enumerates every variant, and :class:`DomainType` pairs a kind with the
element type of an array.  Parsers and formatters dispatch on the kind
and check at import time that they cover all of them.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1


class Kind(enum.Enum):
    """Tag of a :class:`DomainType`.  The value is the display label."""

    UNIT = "Unit"
    INT = "Int"
    BIG_INT = "BigInt"
    DOUBLE = "Double"
    BOOL = "Bool"
    PAULI = "Pauli"
    RESULT = "Result"
    RANGE = "Range"
    STRING = "String"
    ARRAY = "Array"


@dataclass(frozen=True, slots=True)
class DomainType:
    """A parameter or return type.

    ``element`` is set for :attr:`Kind.ARRAY` only.  Use the module
    constants for scalar types and :meth:`array` for arrays.
    """

    kind: Kind
    element: DomainType | None = None

    def __post_init__(self) -> None:
        if (self.kind is Kind.ARRAY) != (self.element is not None):
            raise ValueError("Only array types carry an element type.")

    @classmethod
    def array(cls, element: DomainType) -> DomainType:
        return cls(Kind.ARRAY, element)

    @property
    def is_array(self) -> bool:
        return self.kind is Kind.ARRAY

    def __str__(self) -> str:
        if self.element is not None:
            return f"{self.element}[]"
        return self.kind.value


UNIT = DomainType(Kind.UNIT)
INT = DomainType(Kind.INT)
BIG_INT = DomainType(Kind.BIG_INT)
DOUBLE = DomainType(Kind.DOUBLE)
BOOL = DomainType(Kind.BOOL)
PAULI = DomainType(Kind.PAULI)
RESULT = DomainType(Kind.RESULT)
RANGE = DomainType(Kind.RANGE)
STRING = DomainType(Kind.STRING)


class Pauli(enum.Enum):
    """Single-qubit Pauli operator.  Member names are the canonical text."""

    PauliI = 0
    PauliX = 1
    PauliY = 3
    PauliZ = 2


class Result(enum.Enum):
    """Measurement outcome.  Member names are the canonical text."""

    Zero = 0
    One = 1


@dataclass(frozen=True, slots=True)
class RangeValue:
    """Inclusive integer range ``start..step..end``."""

    start: int
    step: int
    end: int

    def __post_init__(self) -> None:
        for name in ("start", "step", "end"):
            value = getattr(self, name)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ValueError(f"Range {name} {value} is outside the 64-bit range.")

    def __iter__(self) -> Iterator[int]:
        if self.step == 0:
            raise ValueError("Cannot iterate a range with step 0.")
        stop = self.end + (1 if self.step > 0 else -1)
        return iter(range(self.start, stop, self.step))
