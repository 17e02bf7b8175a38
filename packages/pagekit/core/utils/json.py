"""JSON utilities with Path support."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json(path: str | Path, *, allow_array: bool = False) -> Any:
    """Read and parse JSON file.

    Args:
        path: Input file path
        allow_array: Accept a top-level array as well as an object

    Returns:
        Parsed JSON (a dict unless ``allow_array`` is set)

    Raises:
        ValueError: If the top-level value has the wrong type
    """
    data: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    allowed: tuple[type, ...] = (dict, list) if allow_array else (dict,)
    if not isinstance(data, allowed):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")
    return data
