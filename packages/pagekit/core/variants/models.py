"""Variant state records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pagekit.core.graph.models import NodeId, StyleMap


class VariantRecord(BaseModel):
    """Active variant of one dynamic node.

    The dynamic node keeps its identity and position (``display_node_id``)
    while style and children come from the variant target.

    Attributes:
        display_node_id: Dynamic node the record is keyed by
        target_id: Variant node currently displayed in its place
        resolved_style: Target style resolved at the width the record was set
        resolved_children_root_id: Node whose children render under the
            dynamic node while the variant is active
    """

    model_config = ConfigDict(frozen=True)

    display_node_id: NodeId = Field(description="Dynamic node that holds the variant")
    target_id: NodeId = Field(description="Variant node displayed")
    resolved_style: StyleMap = Field(default_factory=dict)
    resolved_children_root_id: NodeId = Field(description="Children lookup root")
