"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — the entry point ran and its result was printed."""

INVOCATION_ERROR: int = 1
"""The entry point failed while running, or returned an unprintable value."""

PARSE_ERROR: int = 2
"""The command line was rejected. Nothing was run."""

UNEXPECTED_ERROR: int = 3
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
