"""Debug renderer: the tree as nested tags.

Each node kind maps to a fixed tag name and children nest inside it:

    <document><header><text>Title</text></header><paragraph>...</paragraph></document>

Breaks render as self-closing tags. Text values are emitted verbatim.
The output is a convenience view for tests and debugging, not an
interchange format.

Thread Safety:
Rendering is a pure function of the node; a DebugRenderer holds no
per-render state and can be shared across threads.

"""

from colibri.errors import RenderError
from colibri.nodes import (
    Document,
    Emphasis,
    HardBreak,
    Heading,
    Node,
    Paragraph,
    SoftBreak,
    Text,
)
from colibri.stringbuilder import StringBuilder


class DebugRenderer:
    """Render any node (not only a Document) as nested debug tags."""

    __slots__ = ()

    def render(self, node: Node) -> str:
        sb = StringBuilder()
        self._render_node(node, sb)
        return sb.build()

    def _render_node(self, node: Node, sb: StringBuilder) -> None:
        match node:
            case Text():
                sb.append("<text>").append(node.value).append("</text>")
            case SoftBreak():
                sb.append("<softbreak />")
            case HardBreak():
                sb.append("<hardbreak />")
            case Emphasis():
                self._render_tag("emphasis", node, sb)
            case Paragraph():
                self._render_tag("paragraph", node, sb)
            case Heading():
                self._render_tag("header", node, sb)
            case Document():
                self._render_tag("document", node, sb)
            case _:
                msg = f"No debug tag for node type {type(node).__name__}"
                raise RenderError(msg)

    def _render_tag(self, tag: str, node: Node, sb: StringBuilder) -> None:
        sb.append(f"<{tag}>")
        for child in node.children:
            self._render_node(child, sb)
        sb.append(f"</{tag}>")


def render_debug(node: Node) -> str:
    """Render ``node`` and its subtree as debug tags."""
    return DebugRenderer().render(node)
