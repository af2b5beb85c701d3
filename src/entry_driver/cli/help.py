"""Usage and help text for a driver's option schema.

Help is rendered by :mod:`argparse` with :class:`HelpFormatter`.  This
module supplies the pieces argparse cannot derive on its own: the usage
line, each option's value syntax, and documentation escaped so that
argparse prints it unchanged.
"""

from __future__ import annotations

import argparse
from collections.abc import Iterable

from entry_driver.core.models import Arity, BuiltinBinding, OptionSchema, OptionSpec
from entry_driver.core.types import DomainType, Kind

RANGE_SYNTAX = "<start>..[<step>..]<end>"


class HelpFormatter(argparse.RawTextHelpFormatter):
    """Keep documentation line breaks and show value syntax verbatim."""

    def _format_args(self, action: argparse.Action, default_metavar: str) -> str:
        syntax = getattr(action, "value_syntax", None)
        if syntax is not None:
            return syntax
        return super()._format_args(action, default_metavar)


# ---------------------------------------------------------------------------
# Pieces
# ---------------------------------------------------------------------------

def escape_percent(text: str) -> str:
    """Escape ``%`` so argparse's help interpolation leaves *text* intact."""
    return text.replace("%", "%%")


def type_label(domain_type: DomainType) -> str:
    """Human-readable type name, e.g. ``Int`` or ``String[]``."""
    return str(domain_type)


def value_syntax(option: OptionSpec) -> str:
    """What follows the flag on the command line."""
    domain_type = option.parameter.type
    if option.arity is Arity.FLAG:
        return "[true|false]"
    if domain_type.kind is Kind.RANGE:
        return RANGE_SYNTAX
    if domain_type.element is not None:
        element = domain_type.element
        if element.kind is Kind.RANGE:
            return f"{RANGE_SYNTAX} ..."
        return f"<{type_label(element)}> ..."
    return f"<{type_label(domain_type)}>"


def option_help(option: OptionSpec) -> str:
    """Help cell for a parameter option: its type, then its documentation."""
    label = f"({type_label(option.parameter.type)})"
    doc = option.parameter.doc
    return escape_percent(f"{label} {doc}" if doc else label)


def builtin_help(binding: BuiltinBinding, simulators: Iterable[str] = (), default: str = "") -> str:
    """Help cell for a built-in option."""
    text = binding.option.doc
    if binding.option.key == "simulator":
        names = ", ".join(simulators)
        if names:
            text = f"{text} Available: {names}."
        if default:
            text = f"{text} Default: {default}."
    return escape_percent(text)


def usage_text(schema: OptionSchema) -> str:
    """Usage line listing every option; built-ins are bracketed.

    Returned with a ``%(prog)s`` placeholder for argparse to fill in.
    """
    parts = ["%(prog)s"]
    for option in schema.options:
        flag = f"-{option.short_alias}" if option.short_alias else f"--{option.long_name}"
        parts.append(f"{flag} {escape_percent(value_syntax(option))}")
    for binding in schema.builtins:
        if binding.omitted:
            continue
        flag = binding.flags[0]
        if binding.option.takes_value:
            parts.append(f"[{flag} <name>]")
        else:
            parts.append(f"[{flag}]")
    return " ".join(parts)


def description_text(summary: str) -> str | None:
    """The command summary, or ``None`` when the entry point has none."""
    summary = summary.strip()
    if not summary:
        return None
    # argparse interpolates descriptions only when they mention %(prog).
    if "%(prog)" in summary:
        return escape_percent(summary)
    return summary


def render_help(parser: argparse.ArgumentParser) -> str:
    """Full help text for *parser*."""
    return parser.format_help()
