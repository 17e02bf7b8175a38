"""Node graph model and query helpers."""

from pagekit.core.graph.content import CONTENT_KEYS, content_keys_for, extract_content
from pagekit.core.graph.models import (
    Breakpoint,
    Connection,
    EventType,
    GraphSnapshot,
    Node,
    NodeId,
    NodeType,
    PagekitError,
    SnapshotError,
    StyleMap,
    VariantInfo,
)
from pagekit.core.graph.node_graph import NodeGraph, breakpoints_from_nodes

__all__ = [
    # Models
    "Breakpoint",
    "Connection",
    "EventType",
    "GraphSnapshot",
    "Node",
    "NodeId",
    "NodeType",
    "StyleMap",
    "VariantInfo",
    # Errors
    "PagekitError",
    "SnapshotError",
    # Queries
    "NodeGraph",
    "breakpoints_from_nodes",
    # Content
    "CONTENT_KEYS",
    "content_keys_for",
    "extract_content",
]
