"""Colibri renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- DebugRenderer: Renders AST as nested tags for inspection and tests

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from colibri.renderers.debug import DebugRenderer, render_debug
from colibri.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "DebugRenderer", "render_debug"]
