"""String-level combinators built from the primitive parsers.

Repetition rules return the index after the longest match. Rules that can
fail after consuming part of their input are transactional, so a partial
match never leaves the cursor moved.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from colibri.parsing.transactions import transactional

if TYPE_CHECKING:
    from colibri.config import ParseConfig
    from colibri.cursor import Cursor


class StringParsingMixin:
    """Mixin for runs, breaks and input bounds.

    Required Host Attributes:
        - _source: str
        - _end: int
        - _cursor: Cursor
        - _config: ParseConfig

    Required Host Methods (from PrimitiveParsingMixin):
        - _match_space(pos) -> int | None
        - _match_non_break(pos) -> int | None
        - _match_non_special(pos) -> int | None
        - _match_line_ending(pos) -> int | None

    """

    _source: str
    _end: int
    _cursor: Cursor
    _config: ParseConfig

    @contextmanager
    def _bounded(self, end: int) -> Iterator[None]:
        """Treat ``end`` as end of input while re-parsing a delimited span."""
        saved = self._end
        self._end = min(end, saved)
        try:
            yield
        finally:
            self._end = saved

    def _at_end(self, pos: int) -> bool:
        return pos >= self._end

    def _match_many(self, rule: Callable[[int], int | None], pos: int) -> int | None:
        """Match ``rule`` one or more times."""
        end = rule(pos)
        if end is None:
            return None
        while (step := rule(end)) is not None:
            end = step
        return end

    def _match_non_break_run(self, pos: int) -> int | None:
        """Match 1+ characters up to a line ending or control code."""
        return self._match_many(self._match_non_break, pos)

    def _match_non_special_run(self, pos: int) -> int | None:
        """Match 1+ characters of plain prose (no punctuation, no breaks)."""
        return self._match_many(self._match_non_special, pos)

    @transactional
    def _match_spaces(self, pos: int, minimum: int, maximum: int) -> int | None:
        """Match between ``minimum`` and ``maximum`` spaces, greedily."""
        count = 0
        while count < maximum and (step := self._match_space(pos)) is not None:
            pos = step
            count += 1
        return pos if count >= minimum else None

    def _match_soft_break(self, pos: int) -> int | None:
        """Match exactly one line ending."""
        return self._match_line_ending(pos)

    @transactional
    def _match_hard_break(self, pos: int) -> int | None:
        """Match two or more consecutive line endings.

        At most ``hard_break_limit`` endings are folded into one match; a
        longer run is matched again by the next call.
        """
        limit = self._config.hard_break_limit
        count = 0
        while count < limit and (step := self._match_line_ending(pos)) is not None:
            pos = step
            count += 1
        return pos if count >= 2 else None

    def _match_break_or_end(self, pos: int) -> int | None:
        """Match a soft break, or succeed without consuming at end of input."""
        if self._at_end(pos):
            return pos
        return self._match_soft_break(pos)
