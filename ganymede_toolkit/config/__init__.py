"""Configuration files (YAML) and the helpers that load them."""

from .manager import ConfigManager

__all__ = [
    "ConfigManager",
]
