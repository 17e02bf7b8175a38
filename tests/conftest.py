"""Shared pytest fixtures for pagekit tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from pagekit.core.config.models import EngineConfig
from pagekit.core.engine import ResolutionEngine
from pagekit.core.graph.models import Breakpoint, GraphSnapshot, Node
from pagekit.core.graph.node_graph import NodeGraph
from tests.fixtures.documents import load_card_page_nodes, snapshot_of


@pytest.fixture
def reset_logging():
    """Drop handlers installed by configure_logging() once the test ends."""
    yield
    logging.basicConfig(level=logging.WARNING, handlers=[logging.NullHandler()], force=True)


# ============================================================================
# Breakpoint Fixtures
# ============================================================================


@pytest.fixture
def breakpoints() -> list[Breakpoint]:
    """Desktop / tablet / mobile breakpoints, deliberately unsorted."""
    return [
        Breakpoint(id="viewport-768", width=768, name="Tablet"),
        Breakpoint(id="viewport-1440", width=1440, name="Desktop"),
        Breakpoint(id="viewport-375", width=375, name="Mobile"),
    ]


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def page_nodes() -> list[dict[str, Any]]:
    return load_card_page_nodes()


@pytest.fixture
def page_snapshot(page_nodes: list[dict[str, Any]]) -> GraphSnapshot:
    return snapshot_of(*page_nodes)


@pytest.fixture
def page_graph(page_snapshot: GraphSnapshot) -> NodeGraph:
    return NodeGraph(page_snapshot)


@pytest.fixture
def make_node():
    """Factory for single Node models from keyword arguments."""

    def _make(node_id: str, node_type: str = "frame", **fields: Any) -> Node:
        return Node.model_validate({"id": node_id, "type": node_type, **fields})

    return _make


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def engine_config() -> EngineConfig:
    """Defaults, without touching a config file on disk."""
    return EngineConfig()


@pytest.fixture
def engine(page_snapshot: GraphSnapshot, engine_config: EngineConfig) -> ResolutionEngine:
    return ResolutionEngine(page_snapshot, config=engine_config, width=1440, document_id="doc-1")
