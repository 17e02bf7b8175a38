"""Design document fixtures and builders."""

import json
from pathlib import Path
from typing import Any

from pagekit.core.graph.models import GraphSnapshot

CARD_PAGE_PATH = Path(__file__).parent / "card_page.json"


def load_card_page_nodes() -> list[dict[str, Any]]:
    """Raw node payloads of the card page document.

    A card that expands on click, laid out for three breakpoints:

    - ``card`` exists once per breakpoint; the tablet copy overrides width.
    - ``title`` is a child trigger inside the card.
    - ``card-open`` is the expanded variant, tagged per breakpoint (none for
      mobile), and clicking it collapses back to the card.
    """
    return json.loads(CARD_PAGE_PATH.read_text())["nodes"]


def viewport(width: int, name: str = "") -> dict[str, Any]:
    """Viewport-root node payload with id ``viewport-<width>``."""
    return {
        "id": f"viewport-{width}",
        "type": "viewport-root",
        "isViewport": True,
        "viewportWidth": width,
        "viewportName": name,
    }


def click(source: str, target: str, **extra: Any) -> dict[str, Any]:
    return {"sourceId": source, "targetId": target, "type": "click", **extra}


def connection(source: str, target: str, event: str, **extra: Any) -> dict[str, Any]:
    return {"sourceId": source, "targetId": target, "type": event, **extra}


def snapshot_of(*nodes: dict[str, Any], breakpoints: list[dict] | None = None) -> GraphSnapshot:
    payload: dict[str, Any] = {"nodes": list(nodes)}
    if breakpoints is not None:
        payload["breakpoints"] = breakpoints
    return GraphSnapshot.model_validate(payload)


__all__ = [
    "CARD_PAGE_PATH",
    "click",
    "connection",
    "load_card_page_nodes",
    "snapshot_of",
    "viewport",
]
