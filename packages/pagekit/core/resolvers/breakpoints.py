"""Breakpoint resolution - maps widths to breakpoints and merges per-breakpoint styles.

The breakpoint list partitions the width domain. Sorted descending by
width, breakpoint ``bp[i]`` owns the half-open range
``(bp[i+1].width, bp[i].width]``; the smallest breakpoint also owns every
width below it and the largest every width above it. A width exactly equal
to a declared width therefore belongs to that breakpoint.

``active_breakpoint`` is the only place this rule is written down. Every
other component asks it.

Style resolution merges the primary (largest breakpoint) record of a
logical element with the record for the active breakpoint: the primary
style is the base and only properties the record flags in
``independent_styles`` are taken from the record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pagekit.core.graph.models import Breakpoint, Node, StyleMap
from pagekit.core.graph.node_graph import NodeGraph

logger = logging.getLogger(__name__)


def sort_breakpoints(breakpoints: Iterable[Breakpoint]) -> list[Breakpoint]:
    """Return breakpoints sorted descending by width (stable for equal widths)."""
    return sorted(breakpoints, key=lambda bp: bp.width, reverse=True)


def active_breakpoint(width: float, breakpoints: Sequence[Breakpoint]) -> Breakpoint | None:
    """Resolve the breakpoint that owns ``width``.

    Args:
        width: Viewport width in px
        breakpoints: Breakpoint list in any order

    Returns:
        Exactly one breakpoint for a non-empty list; None for an empty list

    Example:
        >>> bps = [Breakpoint(id="d", width=1440), Breakpoint(id="t", width=768)]
        >>> active_breakpoint(768, bps).id
        't'
        >>> active_breakpoint(769, bps).id
        'd'
    """
    ordered = sort_breakpoints(breakpoints)
    if not ordered:
        return None

    for current, following in zip(ordered, ordered[1:]):
        if following.width < width <= current.width:
            return current

    if width <= ordered[-1].width:
        return ordered[-1]
    return ordered[0]


class BreakpointResolver:
    """Resolves effective styles of logical elements against one node graph.

    Example:
        resolver = BreakpointResolver(graph)

        # Style of the "hero" element on a 700px viewport
        style = resolver.resolve_style("hero", 700)

        # One merged style map per breakpoint (stylesheet input)
        table = resolver.resolve_breakpoint_styles("hero")
    """

    def __init__(self, graph: NodeGraph):
        self.graph = graph

    def active_breakpoint(self, width: float) -> Breakpoint | None:
        return active_breakpoint(width, self.graph.breakpoints)

    def resolve_style(self, ref: str, width: float) -> StyleMap:
        """Effective style of a logical element at ``width``.

        Args:
            ref: Node id or shared id of the element
            width: Viewport width in px

        Returns:
            Merged style map (a fresh dict). Empty if ``ref`` is unknown.
        """
        records = self.graph.records_for(ref)
        if not records:
            logger.debug(f"No records for {ref!r}; resolving to an empty style")
            return {}

        breakpoint = self.active_breakpoint(width)
        chosen, primary = self._select_records(records, breakpoint)
        return self._merge(primary, chosen)

    def resolve_breakpoint_styles(self, ref: str) -> dict[str, StyleMap]:
        """Merged style of a logical element for every breakpoint.

        Args:
            ref: Node id or shared id of the element

        Returns:
            Mapping breakpoint id -> style map, largest breakpoint first.
            Empty when the element is unknown or the graph has no breakpoints.
        """
        records = self.graph.records_for(ref)
        if not records:
            return {}

        table: dict[str, StyleMap] = {}
        for breakpoint in self.graph.breakpoints:
            chosen, primary = self._select_records(records, breakpoint)
            table[breakpoint.id] = self._merge(primary, chosen)
        return table

    def record_for(self, ref: str, width: float) -> Node | None:
        """Concrete record that represents a logical element at ``width``."""
        records = self.graph.records_for(ref)
        if not records:
            return None
        chosen, _ = self._select_records(records, self.active_breakpoint(width))
        return chosen

    # ========================================================================
    # Private Methods
    # ========================================================================

    def _select_records(
        self, records: list[Node], breakpoint: Breakpoint | None
    ) -> tuple[Node, Node]:
        """Pick (chosen, primary) records for a breakpoint.

        The chosen record is the one for ``breakpoint``, else the one for the
        nearest smaller breakpoint that has a record, else the primary.
        """
        by_breakpoint: dict[str, Node] = {}
        for record in records:
            bp_id = self.graph.breakpoint_of(record.id)
            if bp_id is not None:
                by_breakpoint.setdefault(bp_id, record)

        primary = records[0]
        for bp in self.graph.breakpoints:
            if bp.id in by_breakpoint:
                primary = by_breakpoint[bp.id]
                break

        if breakpoint is None:
            return primary, primary

        ordered = self.graph.breakpoints
        start = next((i for i, bp in enumerate(ordered) if bp.id == breakpoint.id), None)
        if start is None:
            return primary, primary

        for bp in ordered[start:]:
            record = by_breakpoint.get(bp.id)
            if record is not None:
                if bp.id != breakpoint.id:
                    logger.debug(
                        f"No record for {record.logical_id!r} at {breakpoint.id!r}; "
                        f"falling back to {bp.id!r}"
                    )
                return record, primary
        return primary, primary

    @staticmethod
    def _merge(primary: Node, chosen: Node) -> StyleMap:
        style = dict(primary.style)
        if chosen is primary:
            return style

        for key, independent in chosen.independent_styles.items():
            if independent is True and key in chosen.style:
                style[key] = chosen.style[key]
        return style


def resolve_style(ref: str, width: float, graph: NodeGraph) -> StyleMap:
    """Functional form of ``BreakpointResolver.resolve_style``."""
    return BreakpointResolver(graph).resolve_style(ref, width)
