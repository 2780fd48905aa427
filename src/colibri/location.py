"""Source positions and ranges.

Provides the Position and Range value types that every AST node carries.

Positions are 1-indexed for line and column and 0-indexed for the absolute
offset. Offsets count Unicode code points, so ``source[pos.offset]`` is the
character a position points at.

Thread Safety:
Both types are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A cursor position in source text.

    Ordering is lexicographic on ``(line, column, offset)``.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Absolute offset in code points (0-indexed)

    Examples:
            >>> Position().advance_chars()
            Position(line=1, column=2, offset=1)

            >>> Position(1, 5, 4).advance_line(length=2)
            Position(line=2, column=1, offset=6)

    """

    line: int = 1
    column: int = 1
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"

    def advance_chars(self, n: int = 1) -> Position:
        """Return the position ``n`` characters further along the line."""
        return Position(self.line, self.column + n, self.offset + n)

    def advance_line(self, n: int = 1, length: int | None = None) -> Position:
        """Return the position after ``n`` line endings.

        Args:
            n: Number of line endings consumed
            length: Total code points consumed (defaults to ``n``; a
                ``\\r\\n`` ending is two code points long)
        """
        return Position(self.line + n, 1, self.offset + (n if length is None else length))

    @classmethod
    def origin(cls) -> Position:
        """Start of any source: line 1, column 1, offset 0."""
        return cls(1, 1, 0)


@dataclass(frozen=True, slots=True)
class Range:
    """Span between two positions, end exclusive.

    Produced when a node is constructed and never mutated afterwards.

    """

    begin: Position
    end: Position

    def __str__(self) -> str:
        return f"{self.begin}-{self.end}"

    @property
    def is_empty(self) -> bool:
        return self.begin.offset == self.end.offset

    def contains(self, other: Range) -> bool:
        """Check that ``other`` lies entirely within this range."""
        return self.begin <= other.begin and other.end <= self.end

    @classmethod
    def origin(cls) -> Range:
        """Empty range at the origin, for synthetic nodes."""
        return cls(Position.origin(), Position.origin())
