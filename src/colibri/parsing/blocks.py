"""Block grammar: headers, paragraphs and the document loop.

Block parsing works in two passes over the same characters:

1. Scan the block's extent with the cursor locked. Nothing advances, and
   lookahead into the following lines (hard breaks, header syntax) leaves
   no trace.
2. Parse the extent through the inline grammar with the cursor unlocked,
   so every character advances the cursor exactly once and child ranges
   come out right.

Paragraphs are greedy up to a structural boundary: a hard break, the end
of input, or a line that is a header. The boundary itself is never part of
the paragraph; the document loop consumes it.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from colibri.errors import ParseError
from colibri.location import Range
from colibri.nodes import Block, HardBreak, Heading, HeadingLevel, Paragraph, Text
from colibri.parsing.charsets import HEADING_MARKER, SPACE
from colibri.parsing.transactions import transactional
from colibri.utils.logger import get_logger

if TYPE_CHECKING:
    from colibri.config import ParseConfig
    from colibri.cursor import Cursor

logger = get_logger(__name__)

HEADING_MAX_INDENT = 3
HEADING_MAX_LEVEL = 6


class BlockParsingMixin:
    """Mixin for block-level content.

    Required Host Attributes:
        - _source: str
        - _source_file: str | None
        - _cursor: Cursor
        - _config: ParseConfig

    Required Host Methods:
        - _peek(rule, *args) -> bool
        - _at_end(pos) -> bool
        - _bounded(end) -> context manager
        - _match_char(pos, char) -> int | None
        - _match_space(pos) -> int | None
        - _match_spaces(pos, minimum, maximum) -> int | None
        - _match_many(rule, pos) -> int | None
        - _match_non_break_run(pos) -> int | None
        - _match_unbroken_char(pos) -> int | None
        - _match_soft_break(pos) -> int | None
        - _match_hard_break(pos) -> int | None
        - _match_break_or_end(pos) -> int | None
        - _parse_inline_span(start, end, soft_breaks=False) -> tuple[Inline, ...]

    """

    _source: str
    _source_file: str | None
    _cursor: Cursor
    _config: ParseConfig

    def _parse_document(self) -> tuple[tuple[Block, ...], Range]:
        """Parse blocks until input is exhausted.

        Returns:
            The top-level blocks and the range of everything consumed.
        """
        cursor = self._cursor
        cursor.begin()
        blocks: list[Block] = []
        pos = 0
        while not self._at_end(pos):
            step = self._try_parse_block(pos)
            if step is None:
                step = self._recover_unparsed(pos)
                if step is None:
                    break
            pos, node = step
            if node is not None:
                blocks.append(node)
        span = cursor.range_since_last_begin()
        cursor.commit()
        return tuple(blocks), span

    def _try_parse_block(self, pos: int) -> tuple[int, Block | None] | None:
        """Next block, or a skipped line break (reported with no node)."""
        block = self._try_parse_heading(pos) or self._try_parse_paragraph(pos)
        if block is not None:
            return block

        hard = self._try_parse_hard_break(pos)
        if hard is not None:
            end, node = hard
            return end, node if self._config.emit_hard_breaks else None

        end = self._match_soft_break(pos)
        if end is not None:
            return end, None
        return None

    # =========================================================================
    # Headers
    # =========================================================================

    @transactional
    def _try_parse_heading(self, pos: int) -> tuple[int, Heading] | None:
        """ATX heading: ``{0,3} spaces, #{1,6}, spaces, text, [#...]``.

        The terminating line break is looked at but left in place.
        """
        prefix = self._match_heading_prefix(pos)
        if prefix is None:
            return None
        content_start, level = prefix

        with self._cursor.locked():
            line_end = self._match_non_break_run(content_start)
        if line_end is None or not self._peek(self._match_break_or_end, line_end):
            return None

        content_end = self._closing_sequence_start(content_start, line_end)
        children = self._parse_inline_span(content_start, content_end)
        if content_end < line_end:
            with self._bounded(line_end):
                self._match_non_break_run(content_end)

        return line_end, Heading(
            range=self._cursor.range_since_last_begin_excluding_trailing_break(),
            raw_value=self._source[pos:line_end],
            heading_level=HeadingLevel.from_count(level),
            children=children,
        )

    def _match_heading_prefix(self, pos: int) -> tuple[int, int] | None:
        """Match indent, the '#' run and the spaces after it.

        Returns:
            Index where the heading text starts, and the heading level.
        """
        pos = self._match_spaces(pos, 0, HEADING_MAX_INDENT)
        level = 0
        while level < HEADING_MAX_LEVEL:
            step = self._match_char(pos, HEADING_MARKER)
            if step is None:
                break
            pos = step
            level += 1
        if level == 0:
            return None
        content_start = self._match_many(self._match_space, pos)
        if content_start is None:
            return None
        return content_start, level

    def _closing_sequence_start(self, start: int, end: int) -> int:
        """Index where an optional closing ``###`` sequence begins.

        The closing run only counts when a space separates it from the text
        (or it is the whole text). Without one, the text ends at ``end``.
        """
        text = self._source[start:end]
        stripped = text.rstrip(SPACE)
        body = stripped.rstrip(HEADING_MARKER)
        if len(body) == len(stripped):
            return end
        if body and not body.endswith(SPACE):
            return end
        return start + len(body.rstrip(SPACE))

    # =========================================================================
    # Paragraphs
    # =========================================================================

    @transactional
    def _try_parse_paragraph(self, pos: int) -> tuple[int, Paragraph] | None:
        with self._cursor.locked():
            end = self._scan_paragraph(pos)
        if end is None:
            return None
        children = self._parse_inline_span(pos, end, soft_breaks=True)
        return end, Paragraph(
            range=self._cursor.range_since_last_begin_excluding_trailing_break(),
            raw_value=self._source[pos:end],
            children=children,
        )

    def _scan_paragraph(self, pos: int) -> int | None:
        """Find where the paragraph starting at ``pos`` ends.

        Alternates between a run of line content and a separator. The
        paragraph ends after the last run whose following line break is a
        block boundary.

        Returns:
            Index just past the paragraph text, or None if no line content
            starts at ``pos``.
        """
        end = None
        while (run_end := self._match_non_break_run(pos)) is not None:
            end = run_end
            next_line = self._match_separator(run_end)
            if next_line is None:
                break
            pos = next_line
        return end

    @transactional
    def _match_separator(self, pos: int) -> int | None:
        """Consume a soft break that keeps the paragraph going.

        Fails, consuming nothing, when the break is a block boundary: a hard
        break, a break followed by end of input or unusable content, or a
        break followed by a header line.
        """
        if self._peek(self._match_hard_break, pos):
            return None
        next_line = self._match_soft_break(pos)
        if next_line is None:
            return None
        if not self._peek(self._match_non_break_run, next_line):
            return None
        if self._peek(self._try_parse_heading, next_line):
            return None
        return next_line

    # =========================================================================
    # Separators and recovery
    # =========================================================================

    @transactional
    def _try_parse_hard_break(self, pos: int) -> tuple[int, HardBreak] | None:
        end = self._match_hard_break(pos)
        if end is None:
            return None
        literal = self._source[pos:end]
        return end, HardBreak(
            range=self._cursor.range_since_last_begin(),
            value=literal.replace("\r\n", "\n"),
            raw_value=literal,
        )

    def _recover_unparsed(self, pos: int) -> tuple[int, Paragraph] | None:
        """Handle input that no block rule accepts, per ``on_unparsed``.

        Only control characters (other than tab and line endings) get here.

        Raises:
            ParseError: If the policy is "error"
        """
        policy = self._config.on_unparsed
        where = self._cursor.current
        if policy == "error":
            msg = f"No block starts with {self._source[pos]!r}"
            raise ParseError(
                msg, lineno=where.line, col_offset=where.column, source_file=self._source_file
            )
        if policy == "drop":
            logger.warning(
                "Dropping %d unparsed characters from %s", len(self._source) - pos, where
            )
            return None
        logger.warning("Unparsed input at %s kept as a literal paragraph", where)
        return self._try_parse_unparsed_line(pos)

    @transactional
    def _try_parse_unparsed_line(self, pos: int) -> tuple[int, Paragraph] | None:
        end = self._match_many(self._match_unbroken_char, pos)
        if end is None:
            return None
        span = self._cursor.range_since_last_begin()
        literal = self._source[pos:end]
        text = Text(range=span, value=literal, raw_value=literal)
        return end, Paragraph(range=span, raw_value=literal, children=(text,))
