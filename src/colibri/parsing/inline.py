"""Inline grammar: text runs, nested emphasis and stray symbols.

Each step is an ordered choice, first match wins:

1. Text run: maximal run of non-punctuation characters
2. Emphasis: ``'*' body '*'``, recursive
3. Fallback: any single punctuation character as literal text

The fallback makes the grammar total over any run of non-break characters,
so a delimited span (header text, paragraph extent) always parses to the
end. Unterminated emphasis is never an error; it falls through to a literal
'*' and the text after it.

Emphasis attempts and body scans are remembered for the rest of the parse,
so each opener in a line such as ``a*b*c*d`` is tried once per depth.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from colibri.errors import GrammarInvariantError
from colibri.nodes import Emphasis, Inline, SoftBreak, Text
from colibri.parsing.charsets import EMPHASIS_DELIMITER, LINE_ENDINGS, SPACE
from colibri.parsing.transactions import transactional

if TYPE_CHECKING:
    from colibri.config import ParseConfig
    from colibri.cursor import Cursor, CursorState

# Characters that may not sit on the inner side of an emphasis delimiter
_DELIMITER_PADDING = frozenset({SPACE, *(ending[-1] for ending in LINE_ENDINGS)})

# Memo lookup default, distinct from a remembered failure
_MISS = object()


class InlineParsingMixin:
    """Mixin for inline content.

    Required Host Attributes:
        - _source: str
        - _end: int
        - _source_file: str | None
        - _cursor: Cursor
        - _config: ParseConfig
        - _emphasis_depth: int
        - _emphasis_memo: dict (per-parse emphasis results)
        - _emphasis_body_stops: dict (per-parse emphasis body scan ends)

    Required Host Methods:
        - _peek(rule, *args) -> bool
        - _bounded(end) -> context manager
        - _match_char(pos, char) -> int | None
        - _match_space(pos) -> int | None
        - _match_special(pos) -> int | None
        - _match_non_special_run(pos) -> int | None
        - _match_soft_break(pos) -> int | None

    """

    _source: str
    _end: int
    _source_file: str | None
    _cursor: Cursor
    _config: ParseConfig
    _emphasis_depth: int
    _emphasis_memo: dict[
        tuple[int, int, int, bool], tuple[tuple[int, Emphasis] | None, CursorState | None]
    ]
    _emphasis_body_stops: dict[tuple[int, int, int], int]

    def _parse_inline_span(
        self, start: int, end: int, *, soft_breaks: bool = False
    ) -> tuple[Inline, ...]:
        """Parse ``source[start:end]`` into inline nodes, consuming all of it.

        Args:
            start: First index of the span
            end: Index just past the span
            soft_breaks: Accept line endings between inline nodes

        Raises:
            GrammarInvariantError: If some step matches nothing before ``end``
        """
        nodes: list[Inline] = []
        pos = start
        with self._bounded(end):
            while pos < end:
                step = self._try_parse_inline(pos)
                if step is None and soft_breaks:
                    step = self._try_parse_soft_break(pos)
                if step is None:
                    raise self._stalled(pos, end)
                pos, node = step
                nodes.append(node)
        return tuple(nodes)

    def _stalled(self, pos: int, end: int) -> GrammarInvariantError:
        where = self._cursor.current
        msg = (
            f"Inline grammar stopped at {self._source[pos]!r} "
            f"with {end - pos} characters of its span left"
        )
        return GrammarInvariantError(
            msg,
            lineno=where.line,
            col_offset=where.column,
            source_file=self._source_file,
        )

    def _try_parse_inline(self, pos: int) -> tuple[int, Inline] | None:
        """One inline step: syntax first, literal symbol as the fallback."""
        return self._try_parse_inline_syntax(pos) or self._try_parse_stray_symbol(pos)

    def _try_parse_inline_syntax(self, pos: int) -> tuple[int, Inline] | None:
        return self._try_parse_text(pos) or self._try_parse_emphasis(pos)

    @transactional
    def _try_parse_text(self, pos: int) -> tuple[int, Text] | None:
        end = self._match_non_special_run(pos)
        if end is None:
            return None
        run = self._source[pos:end]
        return end, Text(range=self._cursor.range_since_last_begin(), value=run, raw_value=run)

    @transactional
    def _try_parse_stray_symbol(self, pos: int, exclude: str = "") -> tuple[int, Text] | None:
        """Punctuation that formed no syntax, kept as a one-character Text."""
        if pos < self._end and self._source[pos] in exclude:
            return None
        end = self._match_special(pos)
        if end is None:
            return None
        symbol = self._source[pos:end]
        return end, Text(range=self._cursor.range_since_last_begin(), value=symbol, raw_value=symbol)

    @transactional
    def _try_parse_soft_break(self, pos: int) -> tuple[int, SoftBreak] | None:
        end = self._match_soft_break(pos)
        if end is None:
            return None
        return end, SoftBreak(
            range=self._cursor.range_since_last_begin(),
            value="\n",
            raw_value=self._source[pos:end],
        )

    # =========================================================================
    # Emphasis
    # =========================================================================

    def _try_parse_emphasis(self, pos: int) -> tuple[int, Emphasis] | None:
        """Parse ``*body*``, where body may nest emphasis and span soft breaks.

        Attempts are memoized per parse by position, active end, nesting
        depth and lock state. A remembered match moves the cursor to where
        the original match left it.
        """
        depth = self._emphasis_depth
        headroom = self._config.max_emphasis_depth - depth
        if headroom <= 0 or self._starts_unclosable_run(pos, headroom):
            return None

        cursor = self._cursor
        key = (pos, self._end, depth, cursor.is_locked)
        cached = self._emphasis_memo.get(key, _MISS)
        if cached is not _MISS:
            result, state = cached
            if result is not None and not cursor.is_locked:
                cursor.restore(state)
            return result

        result = self._parse_emphasis(pos)
        self._emphasis_memo[key] = (result, cursor.snapshot() if result is not None else None)
        return result

    @transactional
    def _parse_emphasis(self, pos: int) -> tuple[int, Emphasis] | None:
        body_start = self._match_opening_delimiter(pos)
        if body_start is None:
            return None

        self._emphasis_depth += 1
        try:
            with self._cursor.locked():
                body_end = self._scan_emphasis_body(body_start)
            if body_end is None or not self._can_close(body_end):
                return None
            children = self._parse_emphasis_body(body_start, body_end)
        finally:
            self._emphasis_depth -= 1

        end = self._match_closing_delimiter(body_end)
        if end is None:
            return None
        return end, Emphasis(
            range=self._cursor.range_since_last_begin(),
            raw_value=self._source[pos:end],
            children=children,
        )

    def _starts_unclosable_run(self, pos: int, headroom: int) -> bool:
        """Whether ``pos`` opens a run of '*' that no emphasis can close.

        Inside a run each opener's body must begin with the next opener, so
        the whole run fails once it reaches the end of input or outlasts the
        remaining nesting depth.
        """
        window = min(self._end, pos + headroom + 1)
        if pos >= window or self._source[pos] != EMPHASIS_DELIMITER:
            return False
        run = self._source.count(EMPHASIS_DELIMITER, pos, window)
        return run == window - pos and (window == self._end or run > headroom)

    def _match_opening_delimiter(self, pos: int) -> int | None:
        end = self._match_char(pos, EMPHASIS_DELIMITER)
        if end is None:
            return None
        if self._peek(self._match_soft_break, end) or self._peek(self._match_space, end):
            return None
        return end

    def _can_close(self, pos: int) -> bool:
        # The body is never empty, so pos - 1 is inside it
        return (
            pos < self._end
            and self._source[pos] == EMPHASIS_DELIMITER
            and self._source[pos - 1] not in _DELIMITER_PADDING
        )

    def _match_closing_delimiter(self, pos: int) -> int | None:
        if not self._can_close(pos):
            return None
        return self._match_char(pos, EMPHASIS_DELIMITER)

    def _scan_emphasis_body(self, start: int) -> int | None:
        """Find where a body starting at ``start`` stops; None if it is empty.

        Every position a scan passes is recorded with the index the scan
        stopped at, so a later scan at the same depth stops as soon as it
        reaches one of them.
        """
        stops = self._emphasis_body_stops
        bound, depth = self._end, self._emphasis_depth
        passed: list[int] = []
        pos = start
        while True:
            known = stops.get((pos, bound, depth))
            if known is not None:
                pos = known
                break
            passed.append(pos)
            step = self._try_parse_emphasis_item(pos)
            if step is None:
                break
            pos = step[0]
        for seen in passed:
            stops[(seen, bound, depth)] = pos
        return None if pos == start else pos

    def _parse_emphasis_body(self, start: int, end: int) -> tuple[Inline, ...]:
        """Build the body items between two indices a scan already found."""
        children: list[Inline] = []
        pos = start
        while pos < end:
            step = self._try_parse_emphasis_item(pos)
            if step is None:
                raise self._stalled(pos, end)
            pos, node = step
            children.append(node)
        return tuple(children)

    def _try_parse_emphasis_item(self, pos: int) -> tuple[int, Inline] | None:
        # A stray '*' here would swallow the closing delimiter
        return (
            self._try_parse_inline_syntax(pos)
            or self._try_parse_soft_break(pos)
            or self._try_parse_stray_symbol(pos, exclude=EMPHASIS_DELIMITER)
        )
