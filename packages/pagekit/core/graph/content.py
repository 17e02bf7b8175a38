"""Content-key routing by node type.

A node's ``style`` map mixes presentational properties with a few keys that
carry content. Which content keys are meaningful depends on the node type:
an image never renders ``text`` and a text node never renders ``src``.
"""

from __future__ import annotations

from typing import Any

from pagekit.core.graph.models import NodeType, StyleMap

CONTENT_KEYS: tuple[str, ...] = ("src", "text", "backgroundImage", "backgroundVideo")

_CONTENT_KEYS_BY_TYPE: dict[NodeType, tuple[str, ...]] = {
    NodeType.TEXT: ("text",),
    NodeType.IMAGE: ("src",),
    NodeType.VIDEO: ("src",),
    NodeType.FRAME: ("backgroundImage", "backgroundVideo"),
    NodeType.VIEWPORT_ROOT: ("backgroundImage", "backgroundVideo"),
}


def content_keys_for(node_type: NodeType) -> tuple[str, ...]:
    """Return the content keys a node of ``node_type`` renders."""
    return _CONTENT_KEYS_BY_TYPE[node_type]


def extract_content(node_type: NodeType, style: StyleMap) -> dict[str, Any]:
    """Pick the content values relevant to ``node_type`` out of a style map.

    Args:
        node_type: Type of the node the style belongs to
        style: Resolved style map

    Returns:
        Content keys present in ``style`` for this type, in routing order

    Example:
        >>> extract_content(NodeType.IMAGE, {"src": "a.png", "text": "x", "width": "1px"})
        {'src': 'a.png'}
    """
    return {key: style[key] for key in content_keys_for(node_type) if key in style}
