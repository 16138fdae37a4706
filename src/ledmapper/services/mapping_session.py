"""Mapping session: one device, one node set, one operator."""

import logging

from ledmapper.devices import MappingDevice, WriteResult
from ledmapper.exceptions import DeviceNotConnectedError, ErrorContext
from ledmapper.mapping import MappingModel
from ledmapper.models import AppConfig, LedMap, PlacedNode

logger = logging.getLogger(__name__)


class MappingSession:
    """
    Ties a mapping device to the node set being edited.

    The session owns its device handle explicitly; nothing is stored in
    module or process globals, so several sessions (for example in tests)
    never interfere.

    Threading:
        Not thread-safe. Calls are expected from a single asyncio task, one
        interaction at a time.

    Usage:
        session = MappingSession(device, config)
        await session.start()
        session.move(led_index=4, new_pos=0)
        await session.highlight(4)
        if session.pending_changes:
            result = await session.save()
    """

    def __init__(self, device: MappingDevice, config: AppConfig | None = None):
        """
        Initialize the session.

        Args:
            device: Device to synchronize with (not connected yet)
            config: Application configuration (layout settings)
        """
        self.device = device
        self.config = config or AppConfig()
        self._model: MappingModel | None = None

    @property
    def model(self) -> MappingModel:
        """Get the mapping model being edited."""
        if self._model is None:
            raise DeviceNotConnectedError("edit the mapping")
        return self._model

    @property
    def is_started(self) -> bool:
        return self._model is not None

    @property
    def pending_changes(self) -> bool:
        """True if local edits differ from the device's stored mapping."""
        return self.device.has_pending_changes(self.model.nodes)

    @property
    def commit_pending(self) -> bool:
        """True if an uploaded mapping still needs a controller-side commit."""
        return self.device.commit_pending

    async def start(self) -> None:
        """
        Connect the device and seed the node set from it.

        Raises:
            ConfigRevisionMismatch, ControllerConfigError, TransportError:
                If the device could not be connected
        """
        with ErrorContext("connect mapping device", logger_instance=logger):
            await self.device.connect()
        self._model = MappingModel(self.device.current_nodes())
        logger.info(f"Mapping session started with {self._model.total} pixels")

    def reset(self) -> None:
        """Discard local edits and reseed from the device's known mapping."""
        self._model = MappingModel(self.device.current_nodes())
        logger.debug("Mapping session reset to device state")

    def move(self, led_index: int, new_pos: int) -> int:
        """
        Move a physical pixel to a logical position.

        Returns:
            The position the pixel ended up at (after clamping)
        """
        return self.model.reorder(led_index, new_pos)

    async def highlight(self, led_index: int) -> bool:
        """Light a physical pixel on the device (dropped if one is in flight)."""
        return await self.device.highlight_pixel(led_index)

    async def save(self) -> WriteResult:
        """Write the current mapping to the device (no-op if unchanged)."""
        with ErrorContext("write LED map", logger_instance=logger):
            return await self.device.write_mapping(self.model.nodes)

    def to_ledmap(self) -> LedMap:
        """Persisted form of the current local order."""
        return self.model.to_ledmap()

    def layout(self) -> list[PlacedNode]:
        """Preview coordinates using the configured spacing."""
        return self.model.layout(
            spacing=self.config.layout_spacing,
            top_padding=self.config.layout_top_padding,
        )

    async def close(self) -> None:
        """Release the device."""
        await self.device.aclose()
