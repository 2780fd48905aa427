"""Transactional cursor shared by every grammar rule of one parse.

The grammar is written as ordered choices that may fail after consuming
input. Position bookkeeping (line, column, offset) is a side effect of
consumption, so each attempt that can fail is wrapped in a transaction:

1. ``begin()`` saves the current position on a stack
2. the attempt succeeds: ``commit()`` drops the saved position
3. the attempt fails: ``rollback()`` restores the saved position

Locking suspends every advance and every transaction call. It is used
while a block's extent is scanned, so that the following inline parse of
that extent is the only thing that moves the cursor.

Thread Safety:
Cursor instances are single-use and owned by one Parser. They are never
shared between parses.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from colibri.location import Position, Range
from colibri.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CursorState:
    """Exact copy of the movable part of a cursor, for lookahead."""

    current: Position
    previous: Position
    just_broke: bool


class Cursor:
    """Live position plus a stack of saved positions for backtracking.

    Usage:
            >>> cursor = Cursor()
            >>> cursor.begin()
            >>> cursor.advance_chars(3)
            >>> cursor.range_since_last_begin()
            Range(begin=Position(line=1, column=1, offset=0), end=Position(line=1, column=4, offset=3))
            >>> cursor.rollback()
            >>> cursor.current
            Position(line=1, column=1, offset=0)

    """

    __slots__ = ("_current", "_previous", "_stack", "_locked", "_just_broke", "_trace")

    def __init__(self) -> None:
        self._current = Position.origin()
        self._previous = Position.origin()
        self._stack: list[Position] = []
        self._locked = False
        self._just_broke = False
        # Cached once; the check sits on the hottest path of the parser
        self._trace = logger.isEnabledFor(logging.DEBUG)

    @property
    def current(self) -> Position:
        return self._current

    @property
    def previous(self) -> Position:
        """Position just before the last advance."""
        return self._previous

    @property
    def depth(self) -> int:
        """Number of open transactions."""
        return len(self._stack)

    @property
    def is_locked(self) -> bool:
        return self._locked

    @property
    def just_broke(self) -> bool:
        """Whether the last advance consumed a line ending."""
        return self._just_broke

    # =========================================================================
    # Transactions
    # =========================================================================

    def begin(self) -> None:
        """Save the current position."""
        if self._locked:
            return
        self._stack.append(self._current)
        if self._trace:
            self._log("BEGIN")

    def commit(self) -> None:
        """Discard the innermost saved position; consumption stands."""
        if self._locked:
            return
        if self._trace:
            self._log("COMMIT")
        if self._stack:
            self._stack.pop()

    def rollback(self) -> None:
        """Restore the innermost saved position, undoing consumption."""
        if self._locked or not self._stack:
            return
        self._current = self._stack.pop()
        if self._trace:
            self._log("ROLLBACK", depth=len(self._stack) + 1)

    # =========================================================================
    # Advancing
    # =========================================================================

    def advance_chars(self, n: int = 1) -> None:
        if self._locked:
            return
        self._previous = self._current
        self._just_broke = False
        self._current = self._current.advance_chars(n)

    def advance_line(self, n: int = 1, length: int | None = None) -> None:
        """Move past ``n`` line endings spanning ``length`` code points."""
        if self._locked:
            return
        self._previous = self._current
        self._just_broke = True
        self._current = self._current.advance_line(n, length)

    # =========================================================================
    # Locking and lookahead
    # =========================================================================

    def lock(self) -> None:
        if self._trace:
            self._log("LOCK")
        self._locked = True

    def unlock(self) -> None:
        if self._trace:
            self._log("UNLOCK")
        self._locked = False

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Suspend advances for the duration of the block.

        Restores the previous lock state on exit, so nested use is safe.
        """
        was_locked = self._locked
        self.lock()
        try:
            yield
        finally:
            if not was_locked:
                self.unlock()

    def snapshot(self) -> CursorState:
        return CursorState(self._current, self._previous, self._just_broke)

    def restore(self, state: CursorState) -> None:
        self._current = state.current
        self._previous = state.previous
        self._just_broke = state.just_broke

    # =========================================================================
    # Ranges
    # =========================================================================

    def range_since_last_begin(self) -> Range:
        begin = self._stack[-1] if self._stack else Position.origin()
        return Range(begin, self._current)

    def range_since_last_begin_excluding_trailing_break(self) -> Range:
        """Like range_since_last_begin, but stop before a just-consumed line ending."""
        begin = self._stack[-1] if self._stack else Position.origin()
        end = self._previous if self._just_broke else self._current
        return Range(begin, end)

    def _log(self, event: str, depth: int | None = None) -> None:
        depth = len(self._stack) if depth is None else depth
        logger.debug("%stransaction(%d): %s %s", "  " * depth, depth, event, self._current)
