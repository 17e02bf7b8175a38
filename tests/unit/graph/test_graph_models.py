"""Tests for node graph models."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from pagekit.core.graph.content import content_keys_for, extract_content
from pagekit.core.graph.models import (
    Breakpoint,
    Connection,
    EventType,
    GraphSnapshot,
    Node,
    NodeType,
    PagekitError,
    SnapshotError,
)


class TestNode:
    """Test suite for Node parsing."""

    def test_camel_case_keys(self):
        """Test editor camelCase keys map onto snake_case fields."""
        node = Node.model_validate(
            {
                "id": "card",
                "type": "frame",
                "parentId": "viewport-1440",
                "sharedId": "card-shared",
                "isDynamic": True,
                "independentStyles": {"width": True},
                "dynamicViewportId": "viewport-1440",
            }
        )

        assert node.parent_id == "viewport-1440"
        assert node.shared_id == "card-shared"
        assert node.is_dynamic is True
        assert node.independent_styles == {"width": True}
        assert node.dynamic_viewport_id == "viewport-1440"

    def test_snake_case_keys(self):
        """Test field names are accepted as well as aliases."""
        node = Node(id="a", type=NodeType.TEXT, parent_id="b", is_variant=True)

        assert node.parent_id == "b"
        assert node.is_variant is True

    def test_defaults(self):
        """Test optional fields default to what the editor omits."""
        node = Node.model_validate({"id": "a", "type": "image"})

        assert node.style == {}
        assert node.independent_styles == {}
        assert node.dynamic_connections == []
        assert node.is_dynamic is False
        assert node.allow_event_bubbling is False
        assert node.shared_id is None
        assert node.variant_info is None

    def test_numeric_ids_are_coerced(self):
        """Test numeric ids become strings."""
        node = Node.model_validate({"id": 17, "type": "frame", "parentId": 3})

        assert node.id == "17"
        assert node.parent_id == "3"

    def test_unknown_type_rejected(self):
        """Test node type is a closed set."""
        with pytest.raises(ValidationError):
            Node.model_validate({"id": "a", "type": "button"})

    def test_unknown_keys_ignored(self):
        """Test unknown editor keys are dropped."""
        node = Node.model_validate({"id": "a", "type": "frame", "locked": True})

        assert not hasattr(node, "locked")

    def test_frozen(self):
        """Test nodes cannot be mutated."""
        node = Node(id="a", type=NodeType.FRAME)

        with pytest.raises(ValidationError):
            node.id = "b"

    def test_logical_id(self):
        """Test logical id prefers the shared id."""
        assert Node(id="a", type=NodeType.FRAME, shared_id="s").logical_id == "s"
        assert Node(id="a", type=NodeType.FRAME).logical_id == "a"


class TestConnection:
    """Test suite for Connection parsing."""

    @pytest.mark.parametrize("key", ["eventType", "event_type", "type"])
    def test_event_key_variants(self, key):
        """Test every event key spelling is accepted."""
        connection = Connection.model_validate({"sourceId": "a", "targetId": "b", key: "hover"})

        assert connection.event_type == EventType.HOVER

    def test_mouse_leave_value(self):
        """Test mouseLeave keeps its camelCase wire value."""
        connection = Connection.model_validate(
            {"sourceId": "a", "targetId": "b", "type": "mouseLeave"}
        )

        assert connection.event_type == EventType.MOUSE_LEAVE
        assert connection.event_type.value == "mouseLeave"

    def test_viewport_scope(self):
        """Test viewport scope defaults to None."""
        agnostic = Connection.model_validate({"sourceId": "a", "targetId": "b", "type": "click"})
        scoped = Connection.model_validate(
            {"sourceId": "a", "targetId": "b", "type": "click", "viewportId": "viewport-768"}
        )

        assert agnostic.viewport_id is None
        assert scoped.viewport_id == "viewport-768"

    def test_unknown_event_rejected(self):
        """Test unknown events fail validation."""
        with pytest.raises(ValidationError):
            Connection.model_validate({"sourceId": "a", "targetId": "b", "type": "doubleClick"})


class TestSnapshot:
    """Test suite for GraphSnapshot and Breakpoint."""

    def test_breakpoints_optional(self):
        """Test breakpoints are None unless supplied."""
        snapshot = GraphSnapshot.model_validate({"nodes": [{"id": "a", "type": "frame"}]})

        assert snapshot.breakpoints is None
        assert len(snapshot.nodes) == 1

    def test_negative_breakpoint_width_rejected(self):
        """Test breakpoint widths are non-negative."""
        with pytest.raises(ValidationError):
            Breakpoint(id="bp", width=-1)

    def test_snapshot_error_hierarchy(self):
        """Test SnapshotError derives from the package base error."""
        assert issubclass(SnapshotError, PagekitError)


class TestContentRouting:
    """Test suite for content-key routing."""

    def test_keys_per_type(self):
        """Test each node type renders its own content keys."""
        assert content_keys_for(NodeType.TEXT) == ("text",)
        assert content_keys_for(NodeType.IMAGE) == ("src",)
        assert content_keys_for(NodeType.VIDEO) == ("src",)
        assert content_keys_for(NodeType.FRAME) == ("backgroundImage", "backgroundVideo")

    def test_irrelevant_keys_dropped(self):
        """Test content keys of other types are not extracted."""
        style = {"src": "a.png", "text": "caption", "width": "10px"}

        assert extract_content(NodeType.IMAGE, style) == {"src": "a.png"}
        assert extract_content(NodeType.TEXT, style) == {"text": "caption"}
        assert extract_content(NodeType.FRAME, style) == {}
