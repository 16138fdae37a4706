"""Data models for the LED mapper."""

from .config import AppConfig
from .controller import SUPPORTED_REVISION, ControllerConfig, OutputSegment
from .ledmap import LEDMAP_FILENAME, LedMap
from .node import PixelNode, PlacedNode

__all__ = [
    "AppConfig",
    "ControllerConfig",
    "LEDMAP_FILENAME",
    "LedMap",
    "OutputSegment",
    "PixelNode",
    "PlacedNode",
    "SUPPORTED_REVISION",
]
