"""Renderer protocol.

Anything with ``render(node) -> str`` is a renderer. Structural, so
third-party renderers need not inherit from a Colibri class.

Example:
    def dump(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol, runtime_checkable

from colibri.nodes import Node


@runtime_checkable
class ASTRenderer(Protocol):
    """Turns any node, usually a Document, into a string."""

    def render(self, node: Node) -> str: ...
