"""Recursive descent parser producing typed AST.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `PrimitiveParsingMixin`: Character classes, each advancing the cursor once
- `StringParsingMixin`: Repetition, breaks and input bounds
- `InlineParsingMixin`: Text runs, emphasis, stray symbols
- `BlockParsingMixin`: Headers, paragraphs, document assembly

All of them run against one Cursor owned by the Parser instance.

Thread Safety:
- Parser instances are single-use and never shared between threads
- Configuration is read from ContextVar (thread-local) at construction
- The resulting AST is immutable and thread-safe

"""

from __future__ import annotations

from dataclasses import replace

from colibri.config import ParseConfig, get_parse_config
from colibri.cursor import Cursor
from colibri.location import Range
from colibri.nodes import Document, HeadingLevel
from colibri.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    PrimitiveParsingMixin,
    StringParsingMixin,
)


class Parser(
    PrimitiveParsingMixin,
    StringParsingMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for the Markdown dialect.

    Usage:
            >>> parser = Parser("# Hello\\n\\nWorld")
            >>> doc = parser.parse()
            >>> doc.children[0]
        Heading(range=..., raw_value='# Hello', heading_level=<HeadingLevel.H1: 'H1'>, ...)

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_end",
        "_source_file",
        "_config",
        "_cursor",
        "_emphasis_depth",
        "_emphasis_memo",
        "_emphasis_body_stops",
    )

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        config: ParseConfig | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages
            config: Parse configuration (the context's config if None)

        """
        self._source = source
        self._end = len(source)
        self._source_file = source_file
        self._config = config if config is not None else get_parse_config()
        self._cursor = Cursor()
        self._emphasis_depth = 0
        self._emphasis_memo = {}
        self._emphasis_body_stops = {}

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    def parse(self, seed: Document | None = None) -> Document:
        """Parse the source into a Document.

        Args:
            seed: Optional empty Document whose fields are finalized with
                the parse result

        Returns:
            Document covering the consumed input.

        Raises:
            ValueError: If ``seed`` already has children
            ParseError: Only when ``on_unparsed="error"`` and some input
                cannot be represented
        """
        if seed is None:
            seed = Document(range=Range.origin())
        elif seed.children:
            msg = "seed document must be empty"
            raise ValueError(msg)

        self._cursor = Cursor()
        self._emphasis_depth = 0
        self._emphasis_memo = {}
        self._emphasis_body_stops = {}
        blocks, span = self._parse_document()
        return replace(
            seed,
            range=span,
            value="",
            raw_value=self._source,
            heading_level=HeadingLevel.NIL,
            children=blocks,
        )
