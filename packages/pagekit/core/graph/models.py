"""Node graph data model.

Pydantic models for one snapshot of the design document: nodes, the
dynamic connections between them, and the breakpoint list. Documents
written by the editor use camelCase keys (``sharedId``, ``isDynamic``);
every model accepts those aliases as well as the snake_case field names.

Models are frozen. The editor owns the document and replaces the whole
snapshot on every edit; nothing in the engine mutates a node.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _coerce_id(value: Any) -> Any:
    # The editor emits numeric ids for some generated nodes
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


NodeId = Annotated[str, BeforeValidator(_coerce_id)]
StyleMap = dict[str, Any]


class NodeType(str, Enum):
    """Closed set of design element types."""

    FRAME = "frame"
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    VIEWPORT_ROOT = "viewport-root"


class EventType(str, Enum):
    """Interaction events that can fire a dynamic connection."""

    CLICK = "click"
    HOVER = "hover"
    MOUSE_LEAVE = "mouseLeave"
    LOAD = "load"


_GRAPH_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    frozen=True,
)


class Connection(BaseModel):
    """Directed, event-typed edge from a source node to a variant target."""

    model_config = _GRAPH_MODEL_CONFIG

    source_id: NodeId = Field(description="Node the event is declared on")
    target_id: NodeId = Field(description="Node to display when the connection fires")
    event_type: EventType = Field(
        validation_alias=AliasChoices("eventType", "event_type", "type"),
        description="Event that fires the connection",
    )
    viewport_id: NodeId | None = Field(
        default=None,
        description="Breakpoint the connection is scoped to (None = every breakpoint)",
    )


class VariantInfo(BaseModel):
    """Editor bookkeeping attached to a variant node."""

    model_config = _GRAPH_MODEL_CONFIG

    name: str = ""
    id: NodeId = ""


class Node(BaseModel):
    """A design element.

    Only ``id`` and ``type`` are required. Everything else defaults to the
    value the editor would omit.
    """

    model_config = _GRAPH_MODEL_CONFIG

    id: NodeId = Field(description="Unique node identifier")
    type: NodeType = Field(description="Element type")
    parent_id: NodeId | None = Field(default=None, description="Containing node")
    shared_id: NodeId | None = Field(
        default=None, description="Groups per-breakpoint copies of one logical element"
    )
    style: StyleMap = Field(default_factory=dict, description="Ordered property map")
    independent_styles: dict[str, bool] = Field(
        default_factory=dict,
        description="Properties this record overrides instead of inheriting from primary",
    )

    # Viewport roots
    is_viewport: bool = False
    viewport_width: float | None = None
    viewport_name: str | None = None

    # Interaction wiring
    is_dynamic: bool = False
    dynamic_parent_id: NodeId | None = None
    allow_event_bubbling: bool = False
    dynamic_connections: list[Connection] = Field(default_factory=list)
    dynamic_viewport_id: NodeId | None = Field(
        default=None, description="Breakpoint tag for nodes outside a viewport subtree"
    )

    # Variant bookkeeping
    is_variant: bool = False
    variant_parent_id: NodeId | None = None
    variant_info: VariantInfo | None = None
    dynamic_family_id: NodeId | None = None
    custom_name: str | None = None

    @property
    def logical_id(self) -> str:
        """Identifier shared by every per-breakpoint copy of this element."""
        return self.shared_id or self.id


class Breakpoint(BaseModel):
    """One tier of the responsive width partition."""

    model_config = ConfigDict(frozen=True)

    id: NodeId = Field(description="Breakpoint id (the viewport-root node id)")
    width: float = Field(ge=0, description="Declared viewport width in px")
    name: str = Field(default="", description="Display name")


class GraphSnapshot(BaseModel):
    """Authoritative copy of the document handed over by the editor.

    ``breakpoints`` may be omitted, in which case they are derived from the
    viewport-root nodes.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    nodes: list[Node] = Field(default_factory=list)
    breakpoints: list[Breakpoint] | None = None


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PagekitError(Exception):
    """Base exception for pagekit."""


class SnapshotError(PagekitError):
    """Raised when a document parses but cannot form a node graph."""
