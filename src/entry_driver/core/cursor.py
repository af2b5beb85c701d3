"""Forward-only cursor over command-line tokens."""

from __future__ import annotations

from collections.abc import Callable, Sequence


class TokenCursor:
    """Read tokens left to right without ever rewinding.

    Parameters
    ----------
    tokens:
        The tokens to read.
    is_option:
        Optional predicate recognising option flags.  The cursor reports
        end-of-input when the next token is a recognised flag, so greedy
        values stop in front of the next option.
    """

    def __init__(
        self,
        tokens: Sequence[str],
        is_option: Callable[[str], bool] | None = None,
    ) -> None:
        self._tokens: tuple[str, ...] = tuple(tokens)
        self._is_option = is_option
        self._position: int = 0

    @property
    def position(self) -> int:
        return self._position

    def at_end(self) -> bool:
        if self._position >= len(self._tokens):
            return True
        if self._is_option is not None:
            return self._is_option(self._tokens[self._position])
        return False

    def peek(self) -> str | None:
        """Return the next value token without consuming it."""
        if self.at_end():
            return None
        return self._tokens[self._position]

    def advance(self) -> str:
        """Consume and return the next value token."""
        if self.at_end():
            raise IndexError("No value token left.")
        token = self._tokens[self._position]
        self._position += 1
        return token

    def remaining(self) -> tuple[str, ...]:
        """All tokens not yet consumed, including any option flags."""
        return self._tokens[self._position:]
