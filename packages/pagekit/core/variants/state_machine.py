"""Variant state machine - per-document interaction state for dynamic nodes.

Every dynamic node is either in Base state (no entry in ``active_variant``)
or displays a variant (entry present). Events move nodes between the two:

    Base --event--> Variant(target) --event--> Variant(other) ...
      ^                                   |
      +------- target is the node itself -+

Connections are looked up on the displayed variant first, so a pair of
nodes wired A -> B and B -> A toggles on repeated clicks. Hover is special:
leaving a node that was swapped by hover and has no ``mouseLeave`` wiring
returns it to Base.

Variants are tied to the breakpoint they were set under. Crossing into
another breakpoint clears them; resizing within one breakpoint does not.

One instance belongs to one open document. Calls are synchronous and must
be serialized by the caller.
"""

from __future__ import annotations

import logging

from pagekit.core.graph.models import Connection, EventType, Node
from pagekit.core.graph.node_graph import NodeGraph
from pagekit.core.resolvers.breakpoints import BreakpointResolver
from pagekit.core.variants.models import VariantRecord

logger = logging.getLogger(__name__)


class VariantStateMachine:
    """Tracks which variant each dynamic node displays.

    Example:
        machine = VariantStateMachine(graph, width=1440)

        machine.transition("card", "click")      # card -> card-expanded
        machine.variant_for("card").target_id    # "card-expanded"

        machine.transition("card", "click")      # back to Base
        machine.is_base("card")                  # True

        machine.set_current_width(375)           # clears variants set at 1440
    """

    def __init__(
        self,
        graph: NodeGraph,
        *,
        width: float = 1440.0,
        apply_load_transitions: bool = True,
        reapply_load_on_breakpoint_change: bool = True,
    ):
        """Initialize state for a document.

        Args:
            graph: Node graph of the document
            width: Initial viewport width in px
            apply_load_transitions: Fire ``load`` connections once on construction
            reapply_load_on_breakpoint_change: After a breakpoint crossing clears
                variants, fire ``load`` connections again for the cleared nodes
        """
        self.graph = graph
        self.resolver = BreakpointResolver(graph)
        self.apply_load_transitions = apply_load_transitions
        self.reapply_load_on_breakpoint_change = reapply_load_on_breakpoint_change

        self.current_width = width
        self.current_breakpoint_id = self._breakpoint_id_for(width)

        self.active_variant: dict[str, VariantRecord] = {}
        self.last_breakpoint_id_at_set: dict[str, str | None] = {}
        self.was_hovered: dict[str, bool] = {}

        if self.apply_load_transitions:
            self._apply_load()

        logger.debug(
            f"VariantStateMachine initialized at width={width} "
            f"(breakpoint={self.current_breakpoint_id}, "
            f"{len(self.active_variant)} load variants)"
        )

    # ========================================================================
    # Read access
    # ========================================================================

    def variant_for(self, node_id: str) -> VariantRecord | None:
        return self.active_variant.get(node_id)

    def is_base(self, node_id: str) -> bool:
        return node_id not in self.active_variant

    # ========================================================================
    # Events
    # ========================================================================

    def transition(self, source_id: str, event_type: EventType | str) -> bool:
        """Apply one interaction event.

        Args:
            source_id: Node the event fired on
            event_type: ``click``, ``hover``, ``mouseLeave`` or ``load``

        Returns:
            True if a connection fired (a variant was set or the node
            reverted to Base), False for a no-op

        Raises:
            ValueError: If ``event_type`` is not a known event
        """
        event = EventType(event_type)

        source = self.graph.get(source_id)
        if source is None:
            logger.debug(f"Ignoring {event.value} on unknown node {source_id!r}")
            return False

        if event == EventType.MOUSE_LEAVE:
            return self._handle_mouse_leave(source)

        owner = self._actual_source(source, event)
        candidates = self._candidates(source, owner, event)
        if not candidates:
            logger.debug(f"No {event.value} connection for {source_id!r} (acting as {owner.id!r})")
            return False

        fired = self._fire(owner, candidates[0])
        if fired and event == EventType.HOVER:
            self.was_hovered[owner.id] = True
        return fired

    def set_current_width(self, width: float) -> list[str]:
        """Apply a viewport resize.

        Crossing into another breakpoint clears every variant that was set
        under a different breakpoint. Must run before any later event is
        handled at the new width.

        Args:
            width: New viewport width in px

        Returns:
            Ids of the dynamic nodes whose variants were cleared
        """
        previous_id = self.current_breakpoint_id
        self.current_width = width
        new_id = self._breakpoint_id_for(width)
        if new_id == previous_id:
            return []

        cleared = self._invalidate(new_id)
        logger.debug(
            f"Breakpoint changed {previous_id!r} -> {new_id!r} at width={width}; "
            f"cleared {len(cleared)} variants"
        )
        return cleared

    def reset(self) -> None:
        """Return every node to its initial state."""
        self.active_variant.clear()
        self.last_breakpoint_id_at_set.clear()
        self.was_hovered.clear()
        if self.apply_load_transitions:
            self._apply_load()

    def refresh(self, graph: NodeGraph) -> None:
        """Adopt a new snapshot of the document.

        Variants whose node or target disappeared are dropped, the rest are
        re-resolved against the new graph. A breakpoint list change that
        moves the current width into another breakpoint invalidates like a
        resize.
        """
        self.graph = graph
        self.resolver = BreakpointResolver(graph)

        new_id = self._breakpoint_id_for(self.current_width)
        if new_id != self.current_breakpoint_id:
            self._invalidate(new_id)

        for node_id, record in list(self.active_variant.items()):
            if node_id not in graph or record.target_id not in graph:
                logger.debug(f"Dropping variant of {node_id!r}: node or target removed")
                self._clear(node_id)
                continue
            self.active_variant[node_id] = record.model_copy(
                update={
                    "resolved_style": self.resolver.resolve_style(
                        record.target_id, self.current_width
                    )
                }
            )

        for node_id in list(self.was_hovered):
            if node_id not in graph:
                del self.was_hovered[node_id]

    # ========================================================================
    # Private Methods
    # ========================================================================

    def _breakpoint_id_for(self, width: float) -> str | None:
        breakpoint = self.resolver.active_breakpoint(width)
        return breakpoint.id if breakpoint is not None else None

    def _connections(self, node_id: str, event: EventType) -> list[Connection]:
        return self.graph.connections_of(node_id, event, self.current_breakpoint_id)

    def _actual_source(self, source: Node, event: EventType) -> Node:
        """Node whose variant an event on ``source`` changes.

        Child triggers always act for their nearest dynamic ancestor.
        Nodes that opted into bubbling act for it only when they have no
        wiring of their own.
        """
        if source.dynamic_parent_id is not None:
            return self.graph.find_dynamic_ancestor(source.id) or source

        if source.allow_event_bubbling and not source.is_dynamic:
            own_events = (event, EventType.HOVER) if event == EventType.MOUSE_LEAVE else (event,)
            if not any(self._connections(source.id, e) for e in own_events):
                return self.graph.find_dynamic_ancestor(source.id) or source

        return source

    def _candidates(self, source: Node, owner: Node, event: EventType) -> list[Connection]:
        """Connections that may fire, best first.

        A child trigger's own wiring wins. Otherwise connections on the
        displayed variant come before those on the owner's base node.
        """
        if source.id != owner.id and source.dynamic_parent_id is not None:
            own = self._connections(source.id, event)
            if own:
                return own

        record = self.active_variant.get(owner.id)
        if record is not None:
            from_variant = self._connections(record.target_id, event)
            if from_variant:
                return from_variant
        return self._connections(owner.id, event)

    def _fire(self, owner: Node, connection: Connection) -> bool:
        target = self.graph.get(connection.target_id)
        if target is None:
            logger.warning(
                f"Connection {connection.source_id!r} -> {connection.target_id!r} "
                f"({connection.event_type.value}) points at a missing node"
            )
            return False

        target = self._substitute_target(target)

        if self._is_base_of(target, owner):
            self._clear(owner.id)
            logger.debug(f"{owner.id!r} reverted to base")
            return True

        self.active_variant[owner.id] = VariantRecord(
            display_node_id=owner.id,
            target_id=target.id,
            resolved_style=self.resolver.resolve_style(target.id, self.current_width),
            resolved_children_root_id=target.id,
        )
        self.last_breakpoint_id_at_set[owner.id] = self.current_breakpoint_id
        logger.debug(f"{owner.id!r} now displays {target.id!r}")
        return True

    def _substitute_target(self, target: Node) -> Node:
        """Prefer the copy of ``target`` that belongs to the current breakpoint."""
        if target.shared_id is None or self.current_breakpoint_id is None:
            return target
        sibling = self.graph.find_by_shared_id(
            target.shared_id, self.current_breakpoint_id, is_variant=target.is_variant
        )
        return sibling or target

    @staticmethod
    def _is_base_of(target: Node, owner: Node) -> bool:
        if target.id == owner.id:
            return True
        return (
            owner.shared_id is not None
            and target.shared_id == owner.shared_id
            and target.is_variant == owner.is_variant
        )

    def _handle_mouse_leave(self, source: Node) -> bool:
        owner = self._actual_source(source, EventType.MOUSE_LEAVE)

        fired = False
        leave_candidates = self._candidates(source, owner, EventType.MOUSE_LEAVE)
        if leave_candidates:
            fired = self._fire(owner, leave_candidates[0])
        elif self.was_hovered.get(owner.id) and self._candidates(source, owner, EventType.HOVER):
            self._clear(owner.id)
            logger.debug(f"{owner.id!r} reverted to base on mouse leave")
            fired = True

        self.was_hovered[owner.id] = False
        return fired

    def _invalidate(self, new_id: str | None) -> list[str]:
        """Enter breakpoint ``new_id`` and clear variants set under another one.

        Load transitions are re-run for the cleared nodes when enabled.

        Returns:
            Ids of the nodes whose variants were cleared
        """
        self.current_breakpoint_id = new_id
        cleared = [
            node_id
            for node_id in list(self.active_variant)
            if self.last_breakpoint_id_at_set.get(node_id) != new_id
        ]
        for node_id in cleared:
            self._clear(node_id)
            self.was_hovered.pop(node_id, None)

        if cleared and self.reapply_load_on_breakpoint_change:
            self._apply_load(only=set(cleared))
        return cleared

    def _clear(self, node_id: str) -> None:
        self.active_variant.pop(node_id, None)
        self.last_breakpoint_id_at_set.pop(node_id, None)

    def _apply_load(self, only: set[str] | None = None) -> None:
        for node in self.graph.load_sources():
            if only is not None and self._actual_source(node, EventType.LOAD).id not in only:
                continue
            self.transition(node.id, EventType.LOAD)
