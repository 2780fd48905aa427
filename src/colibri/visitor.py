"""AST visitor for Colibri.

Provides a base visitor class with match-based dispatch and a pre-order
``walk`` generator over a frozen tree.

Example: collect all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    collector.visit(doc)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread.
    ``walk`` is pure and safe to call from any thread.

"""

from collections.abc import Iterator

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


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the matching ``visit_*`` method, then visit children."""
        result = self._dispatch(node)
        for child in node.children:
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` override."""
        return None  # type: ignore[return-value]

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_hard_break(self, node: HardBreak) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_soft_break(self, node: SoftBreak) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case HardBreak():
                return self.visit_hard_break(node)
            case Text():
                return self.visit_text(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case SoftBreak():
                return self.visit_soft_break(node)
            case _:
                return self.visit_default(node)


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every descendant in pre-order (document order)."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
