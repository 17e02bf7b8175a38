"""Configuration management for pagekit."""

from pagekit.core.config.loader import (
    configure_logging,
    detect_format,
    load_config,
    load_document,
    load_engine_config,
)
from pagekit.core.config.models import ConfigBase, EngineConfig, LoggingConfig

__all__ = [
    # Models
    "ConfigBase",
    "EngineConfig",
    "LoggingConfig",
    # Loading
    "configure_logging",
    "detect_format",
    "load_config",
    "load_document",
    "load_engine_config",
]
