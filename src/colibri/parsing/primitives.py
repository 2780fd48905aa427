"""Single-character parsers.

Every rule takes a source index and returns the index after the match, or
None. A rule advances the shared cursor only after the match is confirmed,
and exactly once, so a failed rule never needs to undo anything.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from colibri.parsing.charsets import (
    LINE_ENDINGS,
    SPACE,
    TAB,
    is_printable,
    is_special,
)

if TYPE_CHECKING:
    from colibri.cursor import Cursor


class PrimitiveParsingMixin:
    """Mixin for character-level matching.

    Required Host Attributes:
        - _source: str
        - _end: int (active end bound; see StringParsingMixin._bounded)
        - _cursor: Cursor

    """

    _source: str
    _end: int
    _cursor: Cursor

    def _peek[**P](self, rule: Callable[P, object], *args: P.args, **kwargs: P.kwargs) -> bool:
        """Run ``rule`` and report whether it matched, leaving the cursor untouched.

        The cursor is restored to its exact prior state, including the
        previous position and line-break flag.
        """
        state = self._cursor.snapshot()
        try:
            return rule(*args, **kwargs) is not None
        finally:
            self._cursor.restore(state)

    def _match_char(self, pos: int, char: str) -> int | None:
        """Match one literal character."""
        if pos < self._end and self._source[pos] == char:
            self._cursor.advance_chars()
            return pos + 1
        return None

    def _match_space(self, pos: int) -> int | None:
        return self._match_char(pos, SPACE)

    def _match_tab(self, pos: int) -> int | None:
        return self._match_char(pos, TAB)

    def _match_printable(self, pos: int) -> int | None:
        """Match any character except control codes and space."""
        if pos < self._end and is_printable(self._source[pos]):
            self._cursor.advance_chars()
            return pos + 1
        return None

    def _match_non_break(self, pos: int) -> int | None:
        """Match tab, space or a printable character."""
        return self._match_tab(pos) or self._match_space(pos) or self._match_printable(pos)

    def _match_special(self, pos: int) -> int | None:
        """Match one ASCII punctuation character."""
        if pos < self._end and is_special(self._source[pos]):
            self._cursor.advance_chars()
            return pos + 1
        return None

    def _match_non_special(self, pos: int) -> int | None:
        """Match a non-break character that is not punctuation."""
        if self._peek(self._match_special, pos):
            return None
        return self._match_non_break(pos)

    def _match_unbroken_char(self, pos: int) -> int | None:
        """Match any single character, control codes included, except a line ending."""
        if pos >= self._end or self._peek(self._match_line_ending, pos):
            return None
        self._cursor.advance_chars()
        return pos + 1

    def _match_line_ending(self, pos: int) -> int | None:
        """Match ``\\r\\n`` or ``\\n`` and move the cursor to the next line."""
        source = self._source
        for ending in LINE_ENDINGS:
            end = pos + len(ending)
            if end <= self._end and source.startswith(ending, pos):
                self._cursor.advance_line(1, len(ending))
                return end
        return None
