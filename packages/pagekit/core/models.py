"""Resolved output handed to renderers and serializers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pagekit.core.graph.models import NodeId, NodeType, StyleMap


class EffectiveNode(BaseModel):
    """A node as it should be drawn at one width and interaction state.

    ``id`` is always the id the caller asked for, even when a variant is
    displayed; ``variant_target_id`` names the variant in that case.
    """

    model_config = ConfigDict(frozen=True)

    id: NodeId = Field(description="Requested node id")
    type: NodeType = Field(description="Type to render (the variant's type when active)")
    style: StyleMap = Field(default_factory=dict, description="Effective style map")
    children_ids: list[NodeId] = Field(default_factory=list, description="Children to render")
    content: dict[str, Any] = Field(
        default_factory=dict, description="Content keys relevant to the node type"
    )
    variant_target_id: NodeId | None = Field(default=None, description="Displayed variant")
    breakpoint_id: NodeId | None = Field(default=None, description="Breakpoint resolved against")


class ResolvedTree(BaseModel):
    """EffectiveNode with its resolved children, for whole-page walks."""

    model_config = ConfigDict(frozen=True)

    node: EffectiveNode
    children: list[ResolvedTree] = Field(default_factory=list)
