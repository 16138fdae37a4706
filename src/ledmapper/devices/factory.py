"""Device construction and variant dispatch."""

import logging

import httpx

from ledmapper.exceptions import SetupValidationError
from ledmapper.models import AppConfig

from .protocols import DeviceType, MappingDevice
from .standalone import StandaloneDevice
from .wled import WledDevice

logger = logging.getLogger(__name__)


def create_device(
    config: AppConfig | None = None,
    *,
    host: str | None = None,
    pixel_count: int | str | None = None,
    mapping: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> MappingDevice:
    """
    Build the device variant that matches the given input.

    Standalone input (a mapping or a pixel count) wins; otherwise the
    explicit host, then the configured host, selects a WLED controller.

    Args:
        config: Application settings (timeouts, configured host)
        host: Controller address overriding config.host
        pixel_count: Standalone pixel count
        mapping: Standalone ledmap.json content
        transport: httpx transport override for the networked variant

    Raises:
        SetupValidationError: If the standalone input is invalid or nothing
            identifies a device
    """
    config = config or AppConfig()

    if mapping is not None or pixel_count is not None:
        device = StandaloneDevice.from_setup(pixel_count=pixel_count, mapping=mapping)
        logger.debug(f"Created standalone device with {device.total_pixels} pixels")
        return device

    host = host or config.host
    if not host:
        raise SetupValidationError("setup", "no controller host configured and no standalone input given")

    logger.debug(f"Created WLED device for {host}")
    return WledDevice(
        host,
        timeout=config.request_timeout,
        segment_id=config.highlight_segment_id,
        transport=transport,
    )


def describe_device(device: MappingDevice) -> str:
    """Short human-readable description of a device."""
    match device.type:
        case DeviceType.WLED:
            return f"WLED controller at {device.host}"
        case DeviceType.STANDALONE:
            return f"Standalone simulator ({device.total_pixels} pixels)"
        case _:
            return f"Unknown device ({device.type})"
