"""Networked mapping device backed by a WLED controller."""

import asyncio
import logging
import warnings
from collections.abc import Sequence

import httpx

from ledmapper.exceptions import CommitPending, DeviceNotConnectedError, MappingAbsent, TransportError
from ledmapper.mapping import to_ledmap, validate_nodes
from ledmapper.models import LEDMAP_FILENAME, ControllerConfig, LedMap, PixelNode

from .client import CONFIG_PATH, EDIT_PATH, HIGHLIGHT_PATH, LED_SETTINGS_PATH, WledClient
from .highlight import HighlightChannel
from .protocols import DeviceType, WriteResult
from .sync import mapping_differs, parse_controller_config, parse_ledmap, seed_nodes

logger = logging.getLogger(__name__)


class WledDevice:
    """
    LED controller reached over HTTP.

    All state (controller config, stored LED map) is fetched by connect();
    nothing is assumed. Writing a map only uploads ledmap.json: the
    controller applies it after its LED settings are saved, which this class
    leaves to the operator (see ``commit_pending`` and ``commit_hint``).

    Usage:
        async with WledDevice("192.168.1.50") as device:
            await device.connect()
            nodes = device.current_nodes()
            ...
            result = await device.write_mapping(nodes)
            if result.commit_pending:
                print(device.commit_hint)
    """

    type = DeviceType.WLED

    def __init__(
        self,
        host: str,
        timeout: float = 5.0,
        segment_id: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize device (no I/O happens until connect()).

        Args:
            host: Controller address
            timeout: HTTP timeout in seconds
            segment_id: Controller segment used for highlighting
            transport: Optional httpx transport override
        """
        self.host = host
        self._client = WledClient(host, timeout=timeout, transport=transport)
        self._config: ControllerConfig | None = None
        self._ledmap: LedMap | None = None
        self._uncommitted: LedMap | None = None
        self._highlight = HighlightChannel(self._send_highlight, segment_id=segment_id)

    async def __aenter__(self) -> "WledDevice":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    # =================================================================
    # State
    # =================================================================

    @property
    def config(self) -> ControllerConfig | None:
        """Controller configuration from the last successful connect."""
        return self._config

    @property
    def ledmap(self) -> LedMap | None:
        """Last known persisted mapping."""
        return self._ledmap

    @property
    def is_connected(self) -> bool:
        return self._config is not None

    @property
    def total_pixels(self) -> int:
        if self._config is None:
            raise DeviceNotConnectedError("read the pixel count", host=self.host)
        return self._config.total_pixels

    @property
    def commit_pending(self) -> bool:
        return self._uncommitted is not None

    @property
    def commit_hint(self) -> str:
        """Instructions for applying an uploaded map on the controller."""
        return (
            f"{LEDMAP_FILENAME} was uploaded but is not active yet. Open "
            f"{self._client.url_for(LED_SETTINGS_PATH)} and press Save to apply it."
        )

    @property
    def highlight_in_flight(self) -> bool:
        return self._highlight.in_flight

    def mark_committed(self) -> None:
        """Record that the operator applied the uploaded map on the controller."""
        self._uncommitted = None

    # =================================================================
    # Synchronization
    # =================================================================

    async def connect(self) -> None:
        """
        Fetch controller config and stored LED map concurrently.

        Both requests run to completion before this returns or raises. A
        bad or unreachable config is fatal and leaves the device
        unconnected; a missing or unusable LED map is logged and treated as
        absent.

        A map uploaded but not yet committed stays pending across a
        reconnect as long as the controller still stores that map.

        Raises:
            ConfigRevisionMismatch: If the controller's config revision is not [1, 0]
            ControllerConfigError: If /cfg.json has an unexpected shape
            TransportError: If /cfg.json could not be fetched
        """
        logger.info(f"Connecting to controller at {self._client.base_url}")
        config, ledmap = await asyncio.gather(
            self._fetch_config(),
            self._fetch_ledmap(),
            return_exceptions=True,
        )

        for result in (config, ledmap):
            if isinstance(result, BaseException):
                self._config = None
                self._ledmap = None
                raise result

        self._config = config
        self._ledmap = ledmap
        if self._uncommitted is not None and ledmap != self._uncommitted:
            logger.info("Stored map differs from the uploaded one, dropping the pending commit")
            self._uncommitted = None
        logger.info(
            f"Connected to {self.host}: {config.total_pixels} pixels, "
            f"{'stored map of ' + str(len(ledmap)) + ' entries' if ledmap else 'no stored map'}"
        )

    async def _fetch_config(self) -> ControllerConfig:
        data = await self._client.get_json(CONFIG_PATH)
        return parse_controller_config(data, host=self.host)

    async def _fetch_ledmap(self) -> LedMap | None:
        try:
            try:
                data = await self._client.get_json(EDIT_PATH, params={"edit": LEDMAP_FILENAME})
            except TransportError as e:
                raise MappingAbsent(e.technical_message, host=self.host) from e
            return parse_ledmap(data, host=self.host)
        except MappingAbsent as e:
            logger.warning(f"No usable LED map on {self.host}: {e.technical_message}")
            return None

    def current_nodes(self) -> list[PixelNode]:
        """
        Node set for all controller pixels.

        Raises:
            DeviceNotConnectedError: Before a successful connect()
        """
        return seed_nodes(self.total_pixels, self._ledmap)

    def has_pending_changes(self, nodes: Sequence[PixelNode]) -> bool:
        return mapping_differs(nodes, self._ledmap)

    async def write_mapping(self, nodes: Sequence[PixelNode]) -> WriteResult:
        """
        Upload the node set as ledmap.json if it changed.

        An unchanged mapping returns immediately without any request. After
        a successful upload the known mapping is replaced locally (no
        re-fetch) and a CommitPending warning is issued.

        Raises:
            DeviceNotConnectedError: Before a successful connect()
            MappingInvariantError: If nodes are not a valid node set
            TransportError: If the upload failed (local state is unchanged)
        """
        if not self.is_connected:
            raise DeviceNotConnectedError("write the LED map", host=self.host)

        validate_nodes(nodes)
        ledmap = to_ledmap(nodes)
        if ledmap == self._ledmap:
            logger.debug("LED map unchanged, nothing to write")
            return WriteResult(written=False, commit_pending=self.commit_pending, ledmap=ledmap)

        await self._client.upload_file(EDIT_PATH, "data", LEDMAP_FILENAME, ledmap.to_json())

        self._ledmap = ledmap
        self._uncommitted = ledmap
        logger.info(f"Uploaded {LEDMAP_FILENAME} ({len(ledmap)} entries) to {self.host}")
        warnings.warn(CommitPending(self.commit_hint), stacklevel=2)
        return WriteResult(written=True, commit_pending=True, ledmap=ledmap)

    # =================================================================
    # Highlight
    # =================================================================

    async def highlight_pixel(self, led_index: int) -> bool:
        """
        Light a physical pixel (dropped while another highlight is in flight).

        Raises:
            TransportError: If the request failed
        """
        return await self._highlight.highlight(led_index, self._ledmap)

    async def _send_highlight(self, command: dict) -> None:
        await self._client.post_json(HIGHLIGHT_PATH, command)

    async def aclose(self) -> None:
        await self._client.aclose()
