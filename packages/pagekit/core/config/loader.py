"""Configuration and document loading with JSON and YAML support."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pagekit.core.config.models import EngineConfig
from pagekit.core.graph.models import GraphSnapshot
from pagekit.core.utils.json import read_json
from pagekit.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("pagekit.json")
        'json'
        >>> detect_format("page.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def _read(path: Path, *, allow_array: bool) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    if fmt == "json":
        try:
            return read_json(path, allow_array=allow_array)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    allowed: tuple[type, ...] = (dict, list) if allow_array else (dict,)
    if not isinstance(content, allowed):
        raise ValueError(f"Invalid YAML in {path}: expected a mapping, got {type(content).__name__}")
    return content


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Format is auto-detected from the file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    return _read(Path(path), allow_array=False)


def load_engine_config(path: str | Path | None = None) -> EngineConfig:
    """Load and validate engine configuration.

    Args:
        path: Path to config file. Defaults to ``pagekit.json``; a missing
              file yields the defaults.

    Returns:
        Validated EngineConfig

    Raises:
        ValueError: If the file exists but cannot be parsed
        ValidationError: If config is invalid
    """
    config = EngineConfig.load_or_default(path)
    logger.debug(f"Engine config loaded: initial_width={config.initial_width}")
    return config


def load_document(path: str | Path) -> GraphSnapshot:
    """Load a design document snapshot.

    Accepts ``{"nodes": [...], "breakpoints": [...]}`` or a bare node list.

    Args:
        path: Path to document (.json, .yaml, or .yml)

    Returns:
        Validated GraphSnapshot

    Raises:
        FileNotFoundError: If the document does not exist
        ValueError: If format is not supported or file content is invalid
        ValidationError: If a node or breakpoint is malformed

    Example:
        >>> snapshot = load_document("landing-page.json")
        >>> engine = ResolutionEngine(snapshot)
    """
    raw = _read(Path(path), allow_array=True)
    if isinstance(raw, list):
        raw = {"nodes": raw}
    snapshot = GraphSnapshot.model_validate(raw)
    logger.debug(f"Loaded document {path} with {len(snapshot.nodes)} nodes")
    return snapshot


def configure_logging(config: EngineConfig | None = None) -> None:
    """Configure Python logging from engine config.

    Args:
        config: EngineConfig instance (loads default if None)
    """
    if config is None:
        config = load_engine_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        structured=config.logging.structured,
    )
