"""Typed AST nodes for Colibri.

All AST nodes are frozen dataclasses with slots for:
- Immutability: a node never changes once appended to its parent
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: ``match node: case Emphasis(): ...`` works naturally

Every node carries the same fields regardless of kind, so a tree can be
reflected into a generic structure without per-kind special cases:

- ``range``: the span of source the node was built from
- ``value``: normalized text (a Text's run; empty for containers)
- ``raw_value``: the exact source substring, before normalization
- ``heading_level``: meaningful only for Heading
- ``children``: ordered child nodes, owned exclusively by this node

Node Hierarchy:
Node (base)
├── Block
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   └── HardBreak
└── Inline
    ├── Text
    ├── Emphasis
    └── SoftBreak

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from colibri.location import Range


class NodeKind(Enum):
    """Tag of the node union."""

    DOCUMENT = "Document"
    PARAGRAPH = "Paragraph"
    HEADERS = "Headers"
    TEXT = "Text"
    EMPHASIS = "Emphasis"
    SOFT_BREAK = "SoftBreak"
    HARD_BREAK = "HardBreak"


class HeadingLevel(Enum):
    """ATX heading level. NIL for every node that is not a heading."""

    NIL = "Nil"
    H1 = "H1"
    H2 = "H2"
    H3 = "H3"
    H4 = "H4"
    H5 = "H5"
    H6 = "H6"

    @classmethod
    def from_count(cls, count: int) -> HeadingLevel:
        """Map a run of ``count`` leading '#' characters to a level.

        Raises:
            ValueError: If count is outside 1..6
        """
        if not 1 <= count <= 6:
            msg = f"Heading level must be between 1 and 6, got {count}"
            raise ValueError(msg)
        return _LEVELS[count - 1]

    @property
    def depth(self) -> int:
        """Numeric level, 0 for NIL."""
        return 0 if self is HeadingLevel.NIL else int(self.value[1])


_LEVELS = (
    HeadingLevel.H1,
    HeadingLevel.H2,
    HeadingLevel.H3,
    HeadingLevel.H4,
    HeadingLevel.H5,
    HeadingLevel.H6,
)


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""

    kind: ClassVar[NodeKind]

    range: Range
    value: str = ""
    raw_value: str = ""
    heading_level: HeadingLevel = HeadingLevel.NIL
    children: tuple[Node, ...] = ()


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal run of text, or a single stray symbol.

    ``value`` and ``raw_value`` are both the matched run.

    """

    kind: ClassVar[NodeKind] = NodeKind.TEXT


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized text.

    Markdown: *text*, nestable and allowed to span soft breaks.
    ``raw_value`` includes both delimiters.

    """

    kind: ClassVar[NodeKind] = NodeKind.EMPHASIS


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """A single line ending inside a paragraph or emphasis span.

    ``raw_value`` keeps the literal ending (``\\n`` or ``\\r\\n``);
    ``value`` is always ``\\n``.

    """

    kind: ClassVar[NodeKind] = NodeKind.SOFT_BREAK


@dataclass(frozen=True, slots=True)
class HardBreak(Node):
    """Two or more consecutive line endings separating blocks.

    Only kept in the tree when ``ParseConfig.emit_hard_breaks`` is set.

    """

    kind: ClassVar[NodeKind] = NodeKind.HARD_BREAK


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading.

    Markdown: # Heading (levels 1-6)
    Children are the inline nodes of the heading text; a closing run of
    '#' characters stays in ``raw_value`` only.

    """

    kind: ClassVar[NodeKind] = NodeKind.HEADERS


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph: consecutive lines up to a structural boundary."""

    kind: ClassVar[NodeKind] = NodeKind.PARAGRAPH


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node.

    ``raw_value`` is the whole input and ``range`` the consumed span.

    """

    kind: ClassVar[NodeKind] = NodeKind.DOCUMENT


# =============================================================================
# Type Aliases
# =============================================================================

type Block = Heading | Paragraph | HardBreak
type Inline = Text | Emphasis | SoftBreak

LEAF_KINDS: frozenset[NodeKind] = frozenset(
    {NodeKind.TEXT, NodeKind.SOFT_BREAK, NodeKind.HARD_BREAK}
)

# Registry of node type names to classes
NODE_TYPES: dict[str, type[Node]] = {
    "Document": Document,
    "Paragraph": Paragraph,
    "Heading": Heading,
    "Text": Text,
    "Emphasis": Emphasis,
    "SoftBreak": SoftBreak,
    "HardBreak": HardBreak,
}
