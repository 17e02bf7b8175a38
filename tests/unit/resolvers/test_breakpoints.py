"""Tests for breakpoint and style resolution."""

from __future__ import annotations

import pytest

from pagekit.core.graph.models import Breakpoint
from pagekit.core.graph.node_graph import NodeGraph
from pagekit.core.resolvers.breakpoints import (
    BreakpointResolver,
    active_breakpoint,
    resolve_style,
    sort_breakpoints,
)
from tests.fixtures.documents import snapshot_of, viewport


@pytest.fixture
def resolver(page_graph):
    return BreakpointResolver(page_graph)


class TestActiveBreakpoint:
    """Test suite for the width -> breakpoint rule."""

    @pytest.mark.parametrize(
        "width,expected",
        [
            (2000, "viewport-1440"),
            (1440, "viewport-1440"),
            (1000, "viewport-1440"),
            (768.5, "viewport-1440"),
            (768, "viewport-768"),
            (767.9, "viewport-768"),
            (500, "viewport-768"),
            (376, "viewport-768"),
            (375, "viewport-375"),
            (0, "viewport-375"),
            (-5, "viewport-375"),
        ],
    )
    def test_width_table(self, breakpoints, width, expected):
        """Test boundaries belong to the breakpoint with that width."""
        assert active_breakpoint(width, breakpoints).id == expected

    def test_empty_list(self):
        """Test no breakpoints means no active breakpoint."""
        assert active_breakpoint(800, []) is None

    def test_single_breakpoint_owns_everything(self):
        """Test a lone breakpoint owns every width."""
        only = [Breakpoint(id="only", width=1024)]

        assert active_breakpoint(0, only).id == "only"
        assert active_breakpoint(5000, only).id == "only"

    def test_every_width_has_one_owner(self, breakpoints):
        """Test the breakpoints partition the width domain."""
        ordered = sort_breakpoints(breakpoints)

        for width in range(-10, 2500, 3):
            owners = [
                bp
                for i, bp in enumerate(ordered)
                if (i == len(ordered) - 1 or ordered[i + 1].width < width)
                and (i == 0 or width <= bp.width)
            ]
            assert len(owners) == 1
            assert active_breakpoint(width, breakpoints) == owners[0]

    def test_sort_is_descending(self, breakpoints):
        """Test breakpoints sort largest first."""
        assert [bp.width for bp in sort_breakpoints(breakpoints)] == [1440, 768, 375]


class TestResolveStyle:
    """Test suite for per-breakpoint style merging."""

    def test_primary_at_largest(self, resolver):
        """Test the largest breakpoint resolves to the primary style."""
        assert resolver.resolve_style("card", 1440) == {"width": "100%", "color": "red"}

    def test_independent_property_isolated(self, resolver):
        """Test only independent properties come from the breakpoint record."""
        assert resolver.resolve_style("card", 700) == {"width": "50%", "color": "red"}

    def test_text_override(self, resolver):
        """Test an independent text property with an inherited font size."""
        assert resolver.resolve_style("title", 768) == {"text": "Hi", "fontSize": "32px"}

    def test_node_id_reference(self, resolver):
        """Test a node id resolves the whole logical element."""
        assert resolver.resolve_style("card-768", 1440) == {"width": "100%", "color": "red"}
        assert resolver.resolve_style("card-1440", 700) == {"width": "50%", "color": "red"}

    def test_record_without_overrides(self, resolver):
        """Test a record with no independent flags inherits everything."""
        assert resolver.resolve_style("card", 300) == {"width": "100%", "color": "red"}

    def test_unknown_ref(self, resolver):
        """Test unknown refs resolve to an empty style."""
        assert resolver.resolve_style("missing", 700) == {}

    def test_result_is_fresh(self, resolver, page_graph):
        """Test mutating the result leaves the node untouched."""
        style = resolver.resolve_style("card", 1440)
        style["color"] = "black"

        assert page_graph.get("card-1440").style["color"] == "red"

    def test_fallback_to_smaller_breakpoint(self):
        """Test a missing record falls back to the nearest smaller breakpoint."""
        graph = NodeGraph(
            snapshot_of(
                viewport(1440),
                viewport(768),
                viewport(375),
                {
                    "id": "hero-1440",
                    "type": "frame",
                    "parentId": "viewport-1440",
                    "sharedId": "hero",
                    "style": {"height": "600px", "color": "navy"},
                },
                {
                    "id": "hero-375",
                    "type": "frame",
                    "parentId": "viewport-375",
                    "sharedId": "hero",
                    "style": {"height": "300px", "color": "navy"},
                    "independentStyles": {"height": True},
                },
            )
        )
        resolver = BreakpointResolver(graph)

        assert resolver.resolve_style("hero", 700) == {"height": "300px", "color": "navy"}
        assert resolver.record_for("hero", 700).id == "hero-375"

    def test_falls_back_to_primary(self, resolver):
        """Test no record at or below the breakpoint yields the primary."""
        assert resolver.resolve_style("card-open", 300) == {"width": "100%", "color": "green"}

    def test_non_independent_flags_ignored(self):
        """Test false flags and flags for absent properties change nothing."""
        graph = NodeGraph(
            snapshot_of(
                viewport(1440),
                viewport(768),
                {
                    "id": "a",
                    "type": "frame",
                    "parentId": "viewport-1440",
                    "sharedId": "box",
                    "style": {"color": "red", "padding": "8px"},
                },
                {
                    "id": "b",
                    "type": "frame",
                    "parentId": "viewport-768",
                    "sharedId": "box",
                    "style": {"color": "blue"},
                    "independentStyles": {"color": False, "padding": True},
                },
            )
        )

        assert resolve_style("box", 500, graph) == {"color": "red", "padding": "8px"}

    def test_no_breakpoints(self):
        """Test a document without breakpoints resolves to the primary style."""
        graph = NodeGraph(snapshot_of({"id": "a", "type": "frame", "style": {"color": "red"}}))

        assert resolve_style("a", 500, graph) == {"color": "red"}


class TestResolveBreakpointStyles:
    """Test suite for the per-breakpoint style table."""

    def test_table(self, resolver):
        """Test one merged style per breakpoint, largest first."""
        table = resolver.resolve_breakpoint_styles("card")

        assert list(table) == ["viewport-1440", "viewport-768", "viewport-375"]
        assert table["viewport-768"] == {"width": "50%", "color": "red"}
        assert table["viewport-375"] == {"width": "100%", "color": "red"}

    def test_table_matches_resolve_style(self, resolver, page_graph):
        """Test each table entry equals resolution at that breakpoint's width."""
        table = resolver.resolve_breakpoint_styles("title")

        for bp in page_graph.breakpoints:
            assert table[bp.id] == resolver.resolve_style("title", bp.width)

    def test_unknown_ref(self, resolver):
        """Test unknown refs produce an empty table."""
        assert resolver.resolve_breakpoint_styles("missing") == {}
