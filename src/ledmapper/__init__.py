"""ledmapper: reorder addressable LED pixels on a WLED controller."""

__version__ = "0.1.0"

# Mapping model
from .mapping import MappingModel

# Devices
from .devices import DeviceType, StandaloneDevice, WledDevice, create_device

# Session
from .services import MappingSession

__all__ = [
    "DeviceType",
    "MappingModel",
    "MappingSession",
    "StandaloneDevice",
    "WledDevice",
    "create_device",
]
