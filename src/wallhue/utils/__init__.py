"""Utility modules for wallhue."""

from .color import hex_to_rgb, rgb_to_hex
from .config import Config, ConfigManager
from .logging import setup_logging

__all__ = [
    "ConfigManager",
    "Config",
    "setup_logging",
    "hex_to_rgb",
    "rgb_to_hex",
]
