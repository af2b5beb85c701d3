"""Custom exception hierarchy for entry-driver.

All exceptions that cross layer boundaries must inherit from
:class:`EntryDriverError`.  Raw exceptions raised by an entry point's
callable must NEVER propagate beyond the infrastructure layer — they are
caught there and re-raised as :class:`InvocationError`.

Hierarchy
---------
EntryDriverError
├── SchemaError
│   ├── DuplicateOptionName
│   └── UnsupportedTypeError
├── ParseError
│   ├── UnknownOption
│   ├── MissingRequiredValue
│   ├── RepeatedOptionError
│   ├── TypeConversionError
│   └── RangeGrammarError
├── InvocationError
├── ValueFormatError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class EntryDriverError(Exception):
    """Base exception for all entry-driver errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Schema construction ---------------------------------------------------

class SchemaError(EntryDriverError):
    """Raised when an option schema cannot be built for an entry point."""


class DuplicateOptionName(SchemaError):
    """Raised when two parameters derive the same long option name."""


class UnsupportedTypeError(SchemaError):
    """Raised when a parameter type cannot be expressed on the command line."""


# --- Argument parsing ------------------------------------------------------

class ParseError(EntryDriverError):
    """Base class for every failure detected while parsing arguments."""


class UnknownOption(ParseError):
    """Raised for an unrecognized flag or a stray value token."""


class MissingRequiredValue(ParseError):
    """Raised when an option, or the value an option needs, is absent."""


class RepeatedOptionError(ParseError):
    """Raised when the same option is supplied more than once."""


class TypeConversionError(ParseError):
    """Raised when a token cannot be converted to the option's type."""

    def __init__(
        self,
        type_name: str,
        token: str,
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(
            f"Cannot parse {token!r} as {type_name}.",
            hint=hint,
        )
        self.type_name: str = type_name
        self.token: str = token


class RangeGrammarError(ParseError):
    """Raised when a token sequence does not form a valid range literal."""

    def __init__(
        self,
        tokens: Sequence[str],
        reason: str,
    ) -> None:
        rendered = " ".join(tokens) if tokens else "<nothing>"
        super().__init__(
            f"Invalid range {rendered!r}: {reason}.",
            hint="Write ranges as start..end or start..step..end.",
        )
        self.tokens: tuple[str, ...] = tuple(tokens)
        self.reason: str = reason


# --- Running ---------------------------------------------------------------

class InvocationError(EntryDriverError):
    """Raised when the entry point fails while it is being run."""


class ValueFormatError(EntryDriverError):
    """Raised when a value does not match the type it is formatted as."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(EntryDriverError):
    """Raised when an optional runtime dependency is not available."""
