"""Core layer — pure schema building, parsing and formatting.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from entry_driver.core.formatting import format_value
from entry_driver.core.models import (
    DriverConfig,
    EntryPoint,
    OptionSchema,
    OptionSpec,
    ParameterSpec,
    ParsedArguments,
    ShadowPolicy,
    attach_documentation,
)
from entry_driver.core.naming import build_schema
from entry_driver.core.parsing import parse_tokens, parse_value
from entry_driver.core.protocols import Simulator
from entry_driver.core.types import DomainType, Kind, Pauli, RangeValue, Result

__all__: list[str] = [
    "DomainType",
    "DriverConfig",
    "EntryPoint",
    "Kind",
    "OptionSchema",
    "OptionSpec",
    "ParameterSpec",
    "ParsedArguments",
    "Pauli",
    "RangeValue",
    "Result",
    "ShadowPolicy",
    "Simulator",
    "attach_documentation",
    "build_schema",
    "format_value",
    "parse_tokens",
    "parse_value",
]
