"""Shared utilities for pagekit."""

from pagekit.core.utils.json import read_json

__all__ = [
    "read_json",
]
