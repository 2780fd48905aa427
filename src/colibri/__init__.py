"""
Colibri: a small Markdown parser with exact source ranges.

Parses a Markdown dialect of ATX headers, paragraphs and nested ``*``
emphasis into an immutable tree. Every node records the line, column and
offset span of the source it came from. Zero runtime dependencies.

Quick Start:
    >>> from colibri import parse, render_debug
    >>> doc = parse("# Hello\\nWorld")
    >>> render_debug(doc)
    '<document><header><text>Hello</text></header><paragraph><text>World</text></paragraph></document>'

    >>> doc.children[0].range.end
    Position(line=1, column=8, offset=7)

Malformed input never raises: unterminated emphasis, stray punctuation and
control characters all end up in the tree as literal text.
"""

from colibri.config import (
    ParseConfig,
    UnparsedPolicy,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from colibri.cursor import Cursor
from colibri.errors import ColibriError, GrammarInvariantError, ParseError, RenderError
from colibri.location import Position, Range
from colibri.nodes import (
    Block,
    Document,
    Emphasis,
    HardBreak,
    Heading,
    HeadingLevel,
    Inline,
    Node,
    NodeKind,
    Paragraph,
    SoftBreak,
    Text,
)
from colibri.parser import Parser
from colibri.renderers import ASTRenderer, DebugRenderer, render_debug
from colibri.serialization import from_dict, from_json, to_dict, to_json
from colibri.visitor import BaseVisitor, walk

__version__ = "0.1.0"


def parse(
    source: str,
    seed: Document | None = None,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Markdown source into a typed AST.

    Args:
        source: Markdown source text
        seed: Optional empty Document to finalize with the result
        source_file: Optional source file path for error messages
        config: Parse configuration (the context's config if None)

    Returns:
        Document AST root node

    Raises:
        ValueError: If ``seed`` already has children
        ParseError: Only under ``on_unparsed="error"``

    Example:
        >>> doc = parse("*hi*")
        >>> doc.children[0].children[0].kind
        <NodeKind.EMPHASIS: 'Emphasis'>
    """
    return Parser(source, source_file=source_file, config=config).parse(seed)


__all__ = [
    # API
    "parse",
    "render_debug",
    "Parser",
    "Cursor",
    # Config
    "ParseConfig",
    "UnparsedPolicy",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Location
    "Position",
    "Range",
    # Nodes
    "Node",
    "NodeKind",
    "HeadingLevel",
    "Block",
    "Inline",
    "Document",
    "Heading",
    "Paragraph",
    "HardBreak",
    "Text",
    "Emphasis",
    "SoftBreak",
    # Errors
    "ColibriError",
    "ParseError",
    "GrammarInvariantError",
    "RenderError",
    # Rendering
    "ASTRenderer",
    "DebugRenderer",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Visitor
    "BaseVisitor",
    "walk",
]
