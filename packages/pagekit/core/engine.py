"""Resolution engine - single entry point for renderers and serializers.

The engine owns one document: its current node graph, the breakpoint
resolver over that graph, and the variant state machine. Consumers only
call ``resolve`` (renderer), ``resolve_style`` / ``resolve_breakpoint_styles``
(serializer), ``transition`` (input layer) and ``set_current_width``
(resize). The editor calls ``load_snapshot`` after every edit.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TypeVar
from uuid import uuid4

from pagekit.core.config.loader import load_document
from pagekit.core.config.models import ConfigBase, EngineConfig
from pagekit.core.graph.content import extract_content
from pagekit.core.graph.models import Breakpoint, EventType, GraphSnapshot, Node, StyleMap
from pagekit.core.graph.node_graph import NodeGraph
from pagekit.core.models import EffectiveNode, ResolvedTree
from pagekit.core.resolvers.breakpoints import BreakpointResolver
from pagekit.core.utils.logging import get_logger
from pagekit.core.variants.models import VariantRecord
from pagekit.core.variants.state_machine import VariantStateMachine

T = TypeVar("T", bound=ConfigBase)


class ResolutionEngine:
    """Resolves nodes of one open document for any width and interaction state.

    Example:
        engine = ResolutionEngine(load_document("page.json"), width=1440)

        engine.transition("card", "click")
        node = engine.resolve("card")           # variant style and children
        engine.set_current_width(375)           # crossing clears the variant
        tree = engine.resolve_tree()            # whole page at 375px
    """

    def __init__(
        self,
        snapshot: GraphSnapshot | Path | str,
        *,
        config: EngineConfig | Path | str | None = None,
        width: float | None = None,
        document_id: str | None = None,
    ):
        """Initialize the engine for a document.

        Args:
            snapshot: GraphSnapshot, or path to a JSON/YAML document
            config: EngineConfig instance, path, or None (default path / defaults)
            width: Initial viewport width. Defaults to ``config.initial_width``.
            document_id: Identifier used in log context. Generated if None.

        Raises:
            FileNotFoundError: If a document path doesn't exist
            ValidationError: If the document or config is invalid
            SnapshotError: If the document contains duplicate node ids
        """
        self.config: EngineConfig = self._resolve_config(config, EngineConfig)
        self.document_id = document_id or str(uuid4())
        self.logger = get_logger(__name__, document_id=self.document_id)

        self.graph = NodeGraph(self._resolve_snapshot(snapshot))
        self.resolver = BreakpointResolver(self.graph)
        self.variants = VariantStateMachine(
            self.graph,
            width=width if width is not None else self.config.initial_width,
            apply_load_transitions=self.config.apply_load_transitions,
            reapply_load_on_breakpoint_change=self.config.reapply_load_on_breakpoint_change,
        )

        self.logger.debug(
            f"Engine ready: {len(self.graph)} nodes, "
            f"breakpoint={self.current_breakpoint_id}, width={self.current_width}"
        )

    @staticmethod
    def _resolve_config(value: Any, config_cls: type[T]) -> T:
        """Resolve config from value, path, or default.

        Raises:
            TypeError: If value is wrong type
        """
        if value is None:
            return config_cls.load_or_default()
        elif isinstance(value, (Path, str)):
            return config_cls.load_or_default(Path(value))
        elif isinstance(value, config_cls):
            return value
        else:
            raise TypeError(
                f"Expected {config_cls.__name__}, Path, str, or None; got {type(value).__name__}"
            )

    @staticmethod
    def _resolve_snapshot(value: Any) -> GraphSnapshot:
        if isinstance(value, GraphSnapshot):
            return value
        elif isinstance(value, (Path, str)):
            return load_document(value)
        else:
            raise TypeError(f"Expected GraphSnapshot, Path, or str; got {type(value).__name__}")

    # ========================================================================
    # State
    # ========================================================================

    @property
    def current_width(self) -> float:
        return self.variants.current_width

    @property
    def current_breakpoint_id(self) -> str | None:
        return self.variants.current_breakpoint_id

    @property
    def breakpoints(self) -> tuple[Breakpoint, ...]:
        return self.graph.breakpoints

    @property
    def active_variant(self) -> dict[str, VariantRecord]:
        return self.variants.active_variant

    def variant_for(self, node_id: str) -> VariantRecord | None:
        return self.variants.variant_for(node_id)

    def load_snapshot(self, snapshot: GraphSnapshot | Path | str) -> None:
        """Replace the document with a fresh snapshot from the editor."""
        self.graph = NodeGraph(self._resolve_snapshot(snapshot))
        self.resolver = BreakpointResolver(self.graph)
        self.variants.refresh(self.graph)
        self.logger.debug(f"Snapshot reloaded: {len(self.graph)} nodes")

    # ========================================================================
    # Input
    # ========================================================================

    def transition(self, source_id: str, event_type: EventType | str) -> bool:
        return self.variants.transition(source_id, event_type)

    def set_current_width(self, width: float) -> list[str]:
        return self.variants.set_current_width(width)

    def reset(self) -> None:
        self.variants.reset()

    # ========================================================================
    # Resolution
    # ========================================================================

    def active_breakpoint(self, width: float | None = None) -> Breakpoint | None:
        return self.resolver.active_breakpoint(self._width(width))

    def resolve_style(self, ref: str, width: float | None = None) -> StyleMap:
        """Base style of a logical element, ignoring interaction state."""
        return self.resolver.resolve_style(ref, self._width(width))

    def resolve_breakpoint_styles(self, ref: str) -> dict[str, StyleMap]:
        return self.resolver.resolve_breakpoint_styles(ref)

    def resolve(self, node_id: str, width: float | None = None) -> EffectiveNode | None:
        """Effective node for rendering.

        Args:
            node_id: Node to resolve
            width: Viewport width (defaults to the current width)

        Returns:
            EffectiveNode, or None if ``node_id`` is unknown
        """
        node = self.graph.get(node_id)
        if node is None:
            self.logger.debug(f"resolve: unknown node {node_id!r}")
            return None

        width = self._width(width)
        breakpoint = self.resolver.active_breakpoint(width)
        breakpoint_id = breakpoint.id if breakpoint is not None else None

        record = self._variant_record(node)
        target = self.graph.get(record.target_id) if record is not None else None
        if record is not None and target is not None:
            if breakpoint_id == self.variants.current_breakpoint_id:
                style = dict(record.resolved_style)
                children_root_id = record.resolved_children_root_id
            else:
                style = self.resolver.resolve_style(target.id, width)
                display = self.resolver.record_for(target.id, width) or target
                children_root_id = display.id

            return EffectiveNode(
                id=node.id,
                type=target.type,
                style=style,
                children_ids=[c.id for c in self.graph.children_of(children_root_id)],
                content=extract_content(target.type, style),
                variant_target_id=target.id,
                breakpoint_id=breakpoint_id,
            )

        style = self.resolver.resolve_style(node.id, width)
        display = self.resolver.record_for(node.id, width) or node
        return EffectiveNode(
            id=node.id,
            type=node.type,
            style=style,
            children_ids=[c.id for c in self.graph.children_of(display.id)],
            content=extract_content(node.type, style),
            breakpoint_id=breakpoint_id,
        )

    def viewport_root_id(self, width: float | None = None) -> str | None:
        root = self.graph.viewport_root(self.breakpoint_id_for(width))
        return root.id if root is not None else None

    def breakpoint_id_for(self, width: float | None = None) -> str | None:
        breakpoint = self.active_breakpoint(width)
        return breakpoint.id if breakpoint is not None else None

    def resolve_tree(self, width: float | None = None) -> list[ResolvedTree]:
        """Resolve the whole page as the renderer would walk it.

        Starts at the viewport root of the breakpoint that owns ``width``.
        Documents without viewport roots start from every top-level node
        that is not a detached variant.
        """
        width = self._width(width)
        root_id = self.viewport_root_id(width)
        if root_id is not None:
            root_ids = [root_id]
        else:
            root_ids = [
                n.id
                for n in self.graph.nodes
                if n.parent_id is None and not n.is_variant and n.dynamic_viewport_id is None
            ]

        visited: set[str] = set()
        trees = [self._build_tree(node_id, width, visited) for node_id in root_ids]
        return [tree for tree in trees if tree is not None]

    # ========================================================================
    # Private Methods
    # ========================================================================

    def _width(self, width: float | None) -> float:
        return self.current_width if width is None else width

    def _variant_record(self, node: Node) -> VariantRecord | None:
        """Variant held by ``node`` or by another breakpoint's copy of it."""
        record = self.variants.variant_for(node.id)
        if record is not None:
            return record
        for sibling in self.graph.records_for(node.id):
            record = self.variants.variant_for(sibling.id)
            if record is not None:
                return record
        return None

    def _build_tree(self, node_id: str, width: float, visited: set[str]) -> ResolvedTree | None:
        if node_id in visited:
            self.logger.warning(f"Node {node_id!r} reached twice while walking the tree")
            return None
        visited.add(node_id)

        effective = self.resolve(node_id, width)
        if effective is None:
            return None

        children = [self._build_tree(child_id, width, visited) for child_id in effective.children_ids]
        return ResolvedTree(node=effective, children=[c for c in children if c is not None])
