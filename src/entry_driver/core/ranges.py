"""Range literal grammar.

A range is written ``start..step..end`` or ``start..end`` (step 1), but
the shell may split it anywhere around the ``..`` separators::

    0..2..10        0 ..2 ..10        0.. 2 ..10        0 .. 2 .. 10

Parsing happens in two stages:

1. **Tokenize** — :func:`split_range_token` turns one token into numbers
   and separators.
2. **Fold** — :func:`fold_range` reads tokens from a cursor and folds the
   pieces into at most three components.  Two numbers in consecutive
   tokens are separated implicitly, so ``0 2 10`` is also accepted.

The fold stops reading as soon as the third component is assembled.
"""

from __future__ import annotations

from collections.abc import Sequence

from entry_driver.core.cursor import TokenCursor
from entry_driver.core.numbers import parse_int64
from entry_driver.core.types import RangeValue
from entry_driver.exceptions import RangeGrammarError, TypeConversionError

SEPARATOR_TEXT = ".."


class _Separator:
    """Marker for a ``..`` inside a tokenized range fragment."""

    def __repr__(self) -> str:
        return "SEPARATOR"


SEPARATOR = _Separator()

RangePiece = int | _Separator


# ---------------------------------------------------------------------------
# 1. Tokenize
# ---------------------------------------------------------------------------

def split_range_token(token: str) -> list[RangePiece]:
    """Split *token* into integers and :data:`SEPARATOR` markers.

    ``"0..2"`` → ``[0, SEPARATOR, 2]``; ``".."`` → ``[SEPARATOR]``;
    ``"0.."`` → ``[0, SEPARATOR]``.

    Raises
    ------
    RangeGrammarError
        For an empty token, an empty component between two separators,
        or a fragment that is not a 64-bit integer.
    """
    if not token:
        raise RangeGrammarError([token], "empty token")

    fragments = token.split(SEPARATOR_TEXT)
    last = len(fragments) - 1
    pieces: list[RangePiece] = []
    for index, fragment in enumerate(fragments):
        if index > 0:
            pieces.append(SEPARATOR)
        if not fragment:
            if 0 < index < last:
                raise RangeGrammarError([token], "empty component between separators")
            continue
        try:
            pieces.append(parse_int64(fragment, type_name="Range"))
        except TypeConversionError as exc:
            raise RangeGrammarError(
                [token], f"{fragment!r} is not a 64-bit integer",
            ) from exc
    return pieces


# ---------------------------------------------------------------------------
# 2. Fold
# ---------------------------------------------------------------------------

def fold_range(cursor: TokenCursor) -> RangeValue:
    """Consume one range literal from *cursor*.

    Raises
    ------
    RangeGrammarError
        When fewer than two or more than three components are given, or
        a separator is left without a following number.
    """
    numbers: list[int] = []
    pending = False
    consumed: list[str] = []

    while len(numbers) < 3 and not cursor.at_end():
        token = cursor.advance()
        consumed.append(token)
        try:
            pieces = split_range_token(token)
        except RangeGrammarError as exc:
            raise RangeGrammarError(consumed, exc.reason) from exc

        for piece in pieces:
            if isinstance(piece, _Separator):
                if not numbers:
                    raise RangeGrammarError(consumed, "missing start")
                if pending:
                    raise RangeGrammarError(consumed, "two separators in a row")
                if len(numbers) == 3:
                    raise RangeGrammarError(consumed, "more than three components")
                pending = True
            else:
                if len(numbers) == 3:
                    raise RangeGrammarError(consumed, "more than three components")
                numbers.append(piece)
                pending = False

    if pending:
        raise RangeGrammarError(consumed, "separator without a following number")
    if len(numbers) < 2:
        raise RangeGrammarError(consumed, "expected at least a start and an end")

    if len(numbers) == 2:
        start, end = numbers
        return RangeValue(start=start, step=1, end=end)
    start, step, end = numbers
    return RangeValue(start=start, step=step, end=end)


def parse_range_tokens(tokens: Sequence[str]) -> RangeValue:
    """Parse a complete range from *tokens*; every token must be used."""
    cursor = TokenCursor(tokens)
    value = fold_range(cursor)
    leftover = cursor.remaining()
    if leftover:
        raise RangeGrammarError(tokens, "more than three components")
    return value
