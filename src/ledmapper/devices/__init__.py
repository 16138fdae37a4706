"""Mapping devices: a live WLED controller and an in-memory simulator."""

from .client import WledClient, normalize_base_url
from .factory import create_device, describe_device
from .highlight import HighlightChannel
from .protocols import DeviceType, MappingDevice, WriteResult
from .standalone import StandaloneDevice, parse_mapping, parse_pixel_count
from .sync import mapping_differs, parse_controller_config, parse_ledmap, seed_nodes
from .wled import WledDevice

__all__ = [
    "DeviceType",
    "HighlightChannel",
    "MappingDevice",
    "StandaloneDevice",
    "WledClient",
    "WledDevice",
    "WriteResult",
    "create_device",
    "describe_device",
    "mapping_differs",
    "normalize_base_url",
    "parse_controller_config",
    "parse_ledmap",
    "parse_mapping",
    "parse_pixel_count",
    "seed_nodes",
]
