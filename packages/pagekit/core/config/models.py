"""Configuration models for pagekit."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit one JSON object per log line")


class ConfigBase(BaseModel):
    """Base class for pagekit configurations.

    Provides common functionality for loading from files with defaults.
    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type.

        Subclasses must override this to provide their default location.

        Returns:
            Path to the default config file
        """
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path, or defaults if the file does not exist.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            ValueError: If the file format is unsupported or unparsable
            ValidationError: If config is invalid
        """
        from pagekit.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        if not Path(path).exists():
            return cls()
        raw = load_config(path)
        return cls.model_validate(raw)


class EngineConfig(ConfigBase):
    """Resolution engine configuration.

    Example:
        >>> config = EngineConfig(initial_width=768)
        >>> config.apply_load_transitions
        True
    """

    initial_width: float = Field(
        default=1440.0, gt=0, description="Viewport width the engine starts at (px)"
    )
    apply_load_transitions: bool = Field(
        default=True, description="Fire 'load' connections once when a document is loaded"
    )
    reapply_load_on_breakpoint_change: bool = Field(
        default=True,
        description="Fire 'load' connections again for variants cleared by a breakpoint crossing",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("pagekit.json")
