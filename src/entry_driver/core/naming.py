"""Option naming — derive command-line names from parameter identifiers.

The schema is built in two passes:

1. **Parameters** — every parameter, in declaration order, claims its
   kebab-case long name and, when still free, a one-letter alias.
2. **Built-ins** — reserved driver options take whatever names the
   parameters left unclaimed.  A shadowed built-in is renamed or
   omitted according to :class:`~entry_driver.core.models.ShadowPolicy`.

A parameter therefore always keeps the name derived from its
identifier, even when that name is also a built-in's name.
"""

from __future__ import annotations

from collections.abc import Sequence

from entry_driver.core.models import (
    Arity,
    BuiltinBinding,
    BuiltinOption,
    OptionSchema,
    OptionSpec,
    ParameterSpec,
    ShadowPolicy,
)
from entry_driver.core.types import DomainType, Kind
from entry_driver.exceptions import DuplicateOptionName, SchemaError, UnsupportedTypeError

HELP = BuiltinOption(
    key="help",
    long_name="help",
    short_alias="h",
    doc="Show help and usage information.",
)
VERSION = BuiltinOption(
    key="version",
    long_name="version",
    short_alias=None,
    doc="Show version information.",
)
SIMULATOR = BuiltinOption(
    key="simulator",
    long_name="simulator",
    short_alias="s",
    doc="The name of the simulator to use.",
    takes_value=True,
)

DEFAULT_BUILTINS: tuple[BuiltinOption, ...] = (HELP, VERSION, SIMULATOR)


# ---------------------------------------------------------------------------
# Name derivation
# ---------------------------------------------------------------------------

def kebab_case(identifier: str) -> str:
    """Lower-case *identifier*, hyphenating each lower→upper transition.

    ``numQubits`` → ``num-qubits``; ``HTTPPort`` → ``httpport``.
    """
    chars: list[str] = []
    previous = ""
    for char in identifier:
        if previous.islower() and char.isupper():
            chars.append("-")
        chars.append(char.lower())
        previous = char
    return "".join(chars)


def alias_candidate(identifier: str) -> str | None:
    """Return the one-letter alias an identifier asks for, if any."""
    if not identifier or not identifier[0].isalpha():
        return None
    return identifier[0].lower()


def arity_for(domain_type: DomainType) -> Arity:
    """Map a parameter type to the number of tokens its option takes."""
    if domain_type.kind is Kind.BOOL:
        return Arity.FLAG
    if domain_type.kind in (Kind.ARRAY, Kind.RANGE):
        return Arity.GREEDY
    return Arity.SINGLE


def _check_supported(param: ParameterSpec) -> None:
    if not param.name.isidentifier():
        raise SchemaError(
            f"Parameter name {param.name!r} is not a valid identifier.",
            hint="Option names are derived from parameter identifiers.",
        )
    element = param.type.element
    if element is not None and element.is_array:
        raise UnsupportedTypeError(
            f"Parameter {param.name!r} has type {param.type}, "
            "which cannot be given on the command line.",
            hint="Nested arrays are not supported as entry point parameters.",
        )


# ---------------------------------------------------------------------------
# Schema build
# ---------------------------------------------------------------------------

def build_schema(
    parameters: Sequence[ParameterSpec],
    builtins: Sequence[BuiltinOption] = DEFAULT_BUILTINS,
    *,
    policy: ShadowPolicy = ShadowPolicy.RENAME,
    rename_prefix: str = "driver-",
) -> OptionSchema:
    """Derive an :class:`OptionSchema` for *parameters* and *builtins*.

    Raises
    ------
    DuplicateOptionName
        If two parameters derive the same long name.
    UnsupportedTypeError
        If a parameter's type cannot be parsed from the command line.
    SchemaError
        If a parameter name is not an identifier.
    """
    claimed_long: dict[str, str] = {}
    claimed_alias: set[str] = set()
    options: list[OptionSpec] = []

    for param in parameters:
        _check_supported(param)
        long_name = kebab_case(param.name)
        key = long_name.casefold()
        if key in claimed_long:
            raise DuplicateOptionName(
                f"Parameters {claimed_long[key]!r} and {param.name!r} "
                f"both map to option --{long_name}.",
                hint="Rename one of the parameters.",
            )
        claimed_long[key] = param.name

        alias = alias_candidate(param.name)
        if alias is not None and alias in claimed_alias:
            alias = None
        if alias is not None:
            claimed_alias.add(alias)

        options.append(
            OptionSpec(
                parameter=param,
                long_name=long_name,
                short_alias=alias,
                arity=arity_for(param.type),
            )
        )

    bindings = [
        _bind_builtin(builtin, claimed_long, claimed_alias, policy, rename_prefix)
        for builtin in builtins
    ]
    return OptionSchema(options=tuple(options), builtins=tuple(bindings))


def _bind_builtin(
    builtin: BuiltinOption,
    claimed_long: dict[str, str],
    claimed_alias: set[str],
    policy: ShadowPolicy,
    rename_prefix: str,
) -> BuiltinBinding:
    """Assign unclaimed names to *builtin*, recording the claim."""
    long_name: str | None = builtin.long_name
    if long_name.casefold() in claimed_long:
        long_name = None
        if policy is ShadowPolicy.RENAME:
            alternate = f"{rename_prefix}{builtin.long_name}"
            if alternate.casefold() not in claimed_long:
                long_name = alternate

    if long_name is None:
        return BuiltinBinding(option=builtin, long_name=None, short_alias=None)

    claimed_long[long_name.casefold()] = builtin.key
    alias = builtin.short_alias
    if alias is not None and alias in claimed_alias:
        alias = None
    if alias is not None:
        claimed_alias.add(alias)
    return BuiltinBinding(option=builtin, long_name=long_name, short_alias=alias)
