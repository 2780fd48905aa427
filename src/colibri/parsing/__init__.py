"""Parsing subsystem for the Colibri Markdown parser.

Provides mixin classes for modular parsing functionality:
- `PrimitiveParsingMixin`: Single-character matchers and lookahead
- `StringParsingMixin`: Runs, soft/hard breaks and input bounds
- `InlineParsingMixin`: Text runs, nested emphasis, stray symbols
- `BlockParsingMixin`: Headers, paragraphs and the document loop

Architecture:
Every rule takes a source index and returns the index after its match
(or a ``(index, node)`` pair), or None when it does not match. All rules
of one parse share a single Cursor through the host Parser; rules that can
fail after consuming input are wrapped in ``@transactional``.

Example:
    >>> from colibri.parsing import (
    ...     PrimitiveParsingMixin,
    ...     StringParsingMixin,
    ...     InlineParsingMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(
    ...     PrimitiveParsingMixin, StringParsingMixin, InlineParsingMixin, BlockParsingMixin
    ... ):
    ...     pass

"""

from colibri.parsing.blocks import BlockParsingMixin
from colibri.parsing.inline import InlineParsingMixin
from colibri.parsing.primitives import PrimitiveParsingMixin
from colibri.parsing.strings import StringParsingMixin
from colibri.parsing.transactions import transactional

__all__ = [
    "PrimitiveParsingMixin",
    "StringParsingMixin",
    "InlineParsingMixin",
    "BlockParsingMixin",
    "transactional",
]
