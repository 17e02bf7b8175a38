"""Indexed, read-only view over one graph snapshot.

NodeGraph answers the structural questions the resolver and the variant
state machine ask: children of a node, which breakpoint a node belongs to,
which records share a logical id, where the nearest dynamic ancestor is and
which connections apply to an event.

All indices are built once in ``__init__``. A new snapshot means a new
NodeGraph; nothing here is mutated after construction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pagekit.core.graph.models import (
    Breakpoint,
    Connection,
    EventType,
    GraphSnapshot,
    Node,
    SnapshotError,
)

logger = logging.getLogger(__name__)


def breakpoints_from_nodes(nodes: Iterable[Node]) -> list[Breakpoint]:
    """Derive the breakpoint list from viewport-root nodes.

    Args:
        nodes: Document nodes

    Returns:
        One breakpoint per viewport root, sorted descending by width.
        Viewports without a declared width count as width 0.
    """
    breakpoints = [
        Breakpoint(
            id=node.id,
            width=node.viewport_width or 0,
            name=node.viewport_name or "",
        )
        for node in nodes
        if node.is_viewport
    ]
    return sorted(breakpoints, key=lambda bp: bp.width, reverse=True)


class NodeGraph:
    """Query helpers over a flat node list.

    Example:
        graph = NodeGraph(snapshot)
        graph.children_of("viewport-1440")
        graph.connections_of("card", EventType.CLICK, "viewport-768")
    """

    def __init__(self, snapshot: GraphSnapshot):
        """Index a snapshot.

        Args:
            snapshot: Document snapshot from the editor

        Raises:
            SnapshotError: If two nodes share the same id
        """
        self.snapshot = snapshot

        self._nodes: dict[str, Node] = {}
        for node in snapshot.nodes:
            if node.id in self._nodes:
                raise SnapshotError(f"Duplicate node id in snapshot: {node.id!r}")
            self._nodes[node.id] = node

        if snapshot.breakpoints is not None:
            self.breakpoints: tuple[Breakpoint, ...] = tuple(
                sorted(snapshot.breakpoints, key=lambda bp: bp.width, reverse=True)
            )
        else:
            self.breakpoints = tuple(breakpoints_from_nodes(snapshot.nodes))

        self._children: dict[str, list[Node]] = {}
        self._by_shared_id: dict[str, list[Node]] = {}
        for node in snapshot.nodes:
            if node.parent_id is not None:
                self._children.setdefault(node.parent_id, []).append(node)
            if node.shared_id is not None and not node.is_viewport:
                self._by_shared_id.setdefault(node.shared_id, []).append(node)

        self._breakpoint_of: dict[str, str | None] = {
            node_id: self._compute_breakpoint_of(node) for node_id, node in self._nodes.items()
        }
        self._warn_duplicate_shared_records()

        logger.debug(
            f"NodeGraph indexed {len(self._nodes)} nodes, "
            f"{len(self.breakpoints)} breakpoints, {len(self._by_shared_id)} shared ids"
        )

    # ========================================================================
    # Lookups
    # ========================================================================

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def nodes(self) -> list[Node]:
        """Nodes in document order."""
        return list(self._nodes.values())

    def get(self, node_id: str | None) -> Node | None:
        if node_id is None:
            return None
        return self._nodes.get(node_id)

    def children_of(self, parent_id: str | None) -> list[Node]:
        """Direct children of ``parent_id`` in document order."""
        if parent_id is None:
            return []
        return list(self._children.get(parent_id, []))

    def viewport_root(self, breakpoint_id: str | None) -> Node | None:
        """Viewport-root node for a breakpoint, if the document has one."""
        node = self.get(breakpoint_id)
        if node is None or not node.is_viewport:
            return None
        return node

    def breakpoint_of(self, node_id: str) -> str | None:
        """Breakpoint a concrete node belongs to.

        ``dynamic_viewport_id`` wins when set; otherwise the nearest
        ancestor that is a viewport root or carries a ``dynamic_viewport_id``
        (a viewport root belongs to itself).
        """
        return self._breakpoint_of.get(node_id)

    # ========================================================================
    # Shared-id records
    # ========================================================================

    def records_for(self, ref: str) -> list[Node]:
        """Concrete records of one logical element.

        Args:
            ref: A node id or a shared id

        Returns:
            Records in document order. For a node id with a shared id, the
            siblings of the same kind (base or variant) as that node. For a
            node without a shared id, just that node. For a bare shared id,
            the base records, or the variant records if there are no base
            records. Empty when ``ref`` is unknown.
        """
        node = self._nodes.get(ref)
        if node is not None:
            if node.shared_id is None or node.is_viewport:
                return [node]
            return [n for n in self._by_shared_id[node.shared_id] if n.is_variant == node.is_variant]

        records = self._by_shared_id.get(ref, [])
        base_records = [n for n in records if not n.is_variant]
        return base_records or list(records)

    def find_by_shared_id(
        self,
        shared_id: str,
        viewport_id: str | None,
        *,
        is_variant: bool | None = None,
    ) -> Node | None:
        """First record carrying ``shared_id`` that belongs to ``viewport_id``.

        Args:
            shared_id: Logical id to search for
            viewport_id: Breakpoint the record must belong to
            is_variant: Restrict to base (False) or variant (True) records

        Returns:
            Matching node, or None
        """
        for node in self._by_shared_id.get(shared_id, []):
            if is_variant is not None and node.is_variant != is_variant:
                continue
            if self._breakpoint_of.get(node.id) == viewport_id:
                return node
        return None

    # ========================================================================
    # Interaction wiring
    # ========================================================================

    def find_dynamic_ancestor(self, node_id: str) -> Node | None:
        """Walk upward from ``node_id`` to the nearest dynamic node.

        Each step follows ``dynamic_parent_id`` when set, otherwise
        ``parent_id``. The starting node itself is not considered.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return None

        seen = {node.id}
        next_id = node.dynamic_parent_id or node.parent_id
        while next_id is not None:
            if next_id in seen:
                logger.warning(f"Parent cycle detected while walking up from {node_id!r}")
                return None
            seen.add(next_id)

            current = self._nodes.get(next_id)
            if current is None:
                return None
            if current.is_dynamic:
                return current
            next_id = current.dynamic_parent_id or current.parent_id
        return None

    def connections_of(
        self,
        node_id: str,
        event_type: EventType | str,
        current_breakpoint_id: str | None,
    ) -> list[Connection]:
        """Connections on ``node_id`` that fire for ``event_type``.

        Connections scoped to ``current_breakpoint_id`` come first, then
        viewport-agnostic ones, each group in declared order. Connections
        scoped to any other breakpoint are left out.
        """
        node = self._nodes.get(node_id)
        if node is None:
            return []

        event = EventType(event_type)
        matching = [c for c in node.dynamic_connections if c.event_type == event]
        scoped = [
            c
            for c in matching
            if c.viewport_id is not None and c.viewport_id == current_breakpoint_id
        ]
        agnostic = [c for c in matching if c.viewport_id is None]
        return scoped + agnostic

    def variants_of(self, node_id: str) -> list[Node]:
        """Variant nodes that belong to a dynamic node's family."""
        node = self._nodes.get(node_id)
        if node is None:
            return []
        family_id = node.dynamic_family_id
        return [
            n
            for n in self._nodes.values()
            if n.is_variant
            and n.id != node_id
            and (
                n.variant_parent_id == node_id
                or (family_id is not None and n.dynamic_family_id == family_id)
            )
        ]

    def load_sources(self) -> list[Node]:
        """Dynamic base nodes declaring a ``load`` connection, in document order.

        Variants never fire ``load``; their wiring only applies once they
        are displayed.
        """
        return [
            n
            for n in self._nodes.values()
            if n.is_dynamic
            and not n.is_variant
            and any(c.event_type == EventType.LOAD for c in n.dynamic_connections)
        ]

    # ========================================================================
    # Private Methods
    # ========================================================================

    def _compute_breakpoint_of(self, node: Node) -> str | None:
        seen: set[str] = set()
        current: Node | None = node
        while current is not None:
            if current.is_viewport:
                return current.id
            if current.dynamic_viewport_id is not None:
                return current.dynamic_viewport_id
            if current.id in seen:
                logger.warning(f"Parent cycle detected above node {node.id!r}")
                return None
            seen.add(current.id)
            current = self.get(current.parent_id)
        return None

    def _warn_duplicate_shared_records(self) -> None:
        for shared_id, records in self._by_shared_id.items():
            seen: set[tuple[str | None, bool]] = set()
            for record in records:
                key = (self._breakpoint_of[record.id], record.is_variant)
                if key[0] is None:
                    continue
                if key in seen:
                    logger.warning(
                        f"Shared id {shared_id!r} appears more than once in breakpoint "
                        f"{key[0]!r}; the first record wins"
                    )
                seen.add(key)
