"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so that parsing, ``--help`` and ``--version`` remain
functional even when Rich is not installed.  Only diagnostics go
through this console, and always to stderr — stdout is reserved for
the entry point's result.
"""

from __future__ import annotations

import sys
from typing import Any

from entry_driver.exceptions import EntryDriverError, EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def _escape(text: str) -> str:
	"""Escape Rich markup in user-supplied text."""
	try:
		from rich.markup import escape
	except ModuleNotFoundError:
		return text
	return escape(text)


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, highlight=False, soft_wrap=True)


class _ConsoleProxy:
	"""Minimal diagnostics printer with a plain-stderr fallback."""

	def print(self, markup: str, plain: str | None = None) -> None:
		"""Render *markup* with Rich when available, else print *plain*."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(markup if plain is None else plain, file=sys.stderr)
			return
		rich_console.print(markup)

	def error(self, exc: EntryDriverError | Exception) -> None:
		"""Print an ``Error:`` line and, when present, a ``Hint:`` line."""
		message = str(exc)
		self.print(
			f"[bold red]Error:[/bold red] {_escape(message)}",
			f"Error: {message}",
		)
		hint = getattr(exc, "hint", None)
		if hint:
			self.print(
				f"[yellow]Hint:[/yellow] {_escape(hint)}",
				f"Hint: {hint}",
			)


console = _ConsoleProxy()
