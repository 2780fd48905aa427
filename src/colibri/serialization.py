"""AST serialization: JSON round-trip for Colibri AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts so a tree can cross
a process or language boundary without the consumer knowing the node
classes. Every node reflects to the same shape:

    {
        "_type": "Emphasis",
        "kind": "Emphasis",
        "heading_level": "Nil",
        "value": "",
        "raw_value": "*hi*",
        "range": {"begin": {"line": 1, "column": 1, "offset": 0},
                  "end": {"line": 1, "column": 5, "offset": 4}},
        "children": [...]
    }

``_type`` names the Python class and drives deserialization; ``kind`` is
the node tag (``Headers`` for a Heading) and is informational only.

All output is deterministic (sorted keys).

Example:
    from colibri import parse
    from colibri.serialization import to_json, from_json

    doc = parse("# Hello *World*")
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from colibri.location import Position, Range
from colibri.nodes import NODE_TYPES, Document, HeadingLevel, Node


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node (and its subtree) to a JSON-compatible dict.

    Args:
        node: Any Colibri AST node.

    Returns:
        Dict with ``_type``, ``kind`` and all node fields.

    """
    return {
        "_type": type(node).__name__,
        "kind": node.kind.value,
        "heading_level": node.heading_level.value,
        "value": node.value,
        "raw_value": node.raw_value,
        "range": _range_to_dict(node.range),
        "children": [to_dict(child) for child in node.children],
    }


def _range_to_dict(span: Range) -> dict[str, dict[str, int]]:
    return {"begin": _position_to_dict(span.begin), "end": _position_to_dict(span.end)}


def _position_to_dict(pos: Position) -> dict[str, int]:
    return {"line": pos.line, "column": pos.column, "offset": pos.offset}


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Missing optional fields take the node defaults; ``range`` is required.

    Args:
        data: Dict as produced by to_dict.

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown, ``heading_level`` is
            not a level name, or ``range`` is missing.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    if "range" not in data:
        msg = f"Missing 'range' field in serialized {type_name}"
        raise ValueError(msg)

    return node_cls(
        range=_range_from_dict(data["range"]),
        value=data.get("value", ""),
        raw_value=data.get("raw_value", ""),
        heading_level=HeadingLevel(data.get("heading_level", HeadingLevel.NIL.value)),
        children=tuple(from_dict(child) for child in data.get("children", ())),
    )


def _range_from_dict(data: dict[str, Any]) -> Range:
    return Range(_position_from_dict(data["begin"]), _position_from_dict(data["end"]))


def _position_from_dict(data: dict[str, Any]) -> Position:
    return Position(line=data["line"], column=data["column"], offset=data["offset"])


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string.

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
