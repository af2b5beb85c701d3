"""Domain models for entry-driver.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  Schema models are built once per entry
point and shared across runs; :class:`ParsedArguments` and
:class:`ExitResult` live for a single run.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from entry_driver.core.types import DomainType


# ---------------------------------------------------------------------------
# Entry point signature (supplied by the front-end)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One declared parameter of an entry point."""

    name: str
    """Source identifier (e.g. ``numQubits``)."""

    type: DomainType
    """Declared domain type."""

    doc: str = ""
    """Documentation text shown verbatim in help."""

    position: int = 0
    """Zero-based index in the declared parameter list."""


@dataclass(frozen=True, slots=True)
class EntryPoint:
    """The callable a driver runs, together with its typed signature."""

    name: str
    callable: Callable[..., Any]
    parameters: tuple[ParameterSpec, ...] = ()
    return_type: DomainType | None = None
    """``None`` is treated as Unit."""

    summary: str = ""
    """Top-level documentation, rendered as the help description."""


def attach_documentation(
    parameters: Sequence[ParameterSpec],
    docs: Mapping[str, str],
) -> tuple[ParameterSpec, ...]:
    """Return *parameters* with ``doc`` filled from a name → text mapping.

    Parameters missing from *docs* keep their current text.  Positions
    are renumbered to follow the sequence order.
    """
    return tuple(
        replace(param, doc=docs.get(param.name, param.doc), position=index)
        for index, param in enumerate(parameters)
    )


# ---------------------------------------------------------------------------
# Option schema
# ---------------------------------------------------------------------------

class Arity(enum.Enum):
    """How many tokens an option consumes."""

    SINGLE = "single"
    """Exactly one value token."""

    FLAG = "flag"
    """Zero tokens, or one explicit ``true``/``false``."""

    GREEDY = "greedy"
    """Every following token up to the next option flag."""


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Command-line option derived from a :class:`ParameterSpec`."""

    parameter: ParameterSpec
    long_name: str
    short_alias: str | None
    arity: Arity

    @property
    def flags(self) -> tuple[str, ...]:
        """Option strings in display order, long form first."""
        if self.short_alias is None:
            return (f"--{self.long_name}",)
        return (f"--{self.long_name}", f"-{self.short_alias}")


class ShadowPolicy(enum.Enum):
    """What happens to a built-in option whose name a parameter took."""

    RENAME = "rename"
    """Offer the built-in under ``<prefix><name>`` when that is free."""

    OMIT = "omit"
    """Do not offer the built-in at all."""


@dataclass(frozen=True, slots=True)
class BuiltinOption:
    """A reserved driver option, before collision resolution."""

    key: str
    """Stable identifier used by the driver (``help``, ``simulator``…)."""

    long_name: str
    short_alias: str | None
    doc: str
    takes_value: bool = False


@dataclass(frozen=True, slots=True)
class BuiltinBinding:
    """The names a built-in option actually received for one driver."""

    option: BuiltinOption
    long_name: str | None
    """``None`` when the built-in is omitted."""

    short_alias: str | None

    @property
    def omitted(self) -> bool:
        return self.long_name is None

    @property
    def renamed(self) -> bool:
        return self.long_name is not None and self.long_name != self.option.long_name

    @property
    def flags(self) -> tuple[str, ...]:
        if self.long_name is None:
            return ()
        if self.short_alias is None:
            return (f"--{self.long_name}",)
        return (f"--{self.long_name}", f"-{self.short_alias}")


@dataclass(frozen=True, slots=True)
class OptionSchema:
    """Immutable result of option naming for one entry point."""

    options: tuple[OptionSpec, ...]
    builtins: tuple[BuiltinBinding, ...] = ()

    def builtin(self, key: str) -> BuiltinBinding | None:
        """Return the binding for built-in *key*, or ``None`` if unknown."""
        return next((b for b in self.builtins if b.option.key == key), None)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DriverConfig:
    """Per-driver settings.  Defaults suit a generated program."""

    prog: str | None = None
    """Program name for usage text.  Defaults to the entry point name."""

    version: str | None = None
    """Text printed by the version option.  Defaults to the package version."""

    shadow_policy: ShadowPolicy = ShadowPolicy.RENAME
    rename_prefix: str = "driver-"
    default_simulator: str = "local"


# ---------------------------------------------------------------------------
# Per-run results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedArguments:
    """Typed values for one run, keyed by parameter name."""

    values: Mapping[str, Any]
    simulator: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def __len__(self) -> int:
        return len(self.values)


class DriverState(enum.Enum):
    """States a single driver run moves through."""

    IDLE = "idle"
    PARSING = "parsing"
    INVOKING = "invoking"
    FORMATTING = "formatting"
    REPORTING_ERROR = "reporting_error"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class ExitResult:
    """Outcome of one driver run."""

    code: int
    output: str
    """Text destined for stdout, exactly as it must be written."""

    error: Exception | None = None
    """The error that ended the run, if any."""

    states: tuple[DriverState, ...] = field(default=())
    """States visited, in order."""
