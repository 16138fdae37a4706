"""Standalone (in-memory) mapping device for offline editing and tests."""

import logging
from collections.abc import Sequence

from pydantic import ValidationError

from ledmapper.exceptions import SetupValidationError
from ledmapper.mapping import to_ledmap, validate_nodes
from ledmapper.models import LedMap, PixelNode

from .protocols import DeviceType, WriteResult
from .sync import mapping_differs, seed_nodes

logger = logging.getLogger(__name__)


def parse_pixel_count(value: int | str) -> int:
    """
    Validate a standalone pixel count.

    Raises:
        SetupValidationError: If value is not a non-negative whole number
    """
    if isinstance(value, bool):
        raise SetupValidationError("pixel_count", f"{value!r} is not a whole number")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise SetupValidationError("pixel_count", f"{value!r} is not a whole number") from None
    if value < 0:
        raise SetupValidationError("pixel_count", f"must not be negative (got {value})")
    return value


def parse_mapping(text: str) -> LedMap:
    """
    Validate a standalone mapping payload such as ``{"map": [2, 0, 1]}``.

    Raises:
        SetupValidationError: If the text is not JSON with a non-empty
            array of integers under "map" forming a permutation of 0..n-1
    """
    try:
        ledmap = LedMap.model_validate_json(text)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(loc) for loc in first.get("loc", ())) or "payload"
        raise SetupValidationError("mapping", f"{location}: {first.get('msg')}") from e

    if not ledmap.map:
        raise SetupValidationError("mapping", '"map" must be a non-empty array of integers')
    if not ledmap.is_permutation():
        raise SetupValidationError(
            "mapping", f'"map" must contain each index 0..{len(ledmap) - 1} exactly once'
        )
    return ledmap


class StandaloneDevice:
    """
    Mapping device that lives entirely in memory.

    Behaves like a controller that accepts every write and has nothing to
    light up: connect() succeeds at once, highlight_pixel() is a no-op and
    write_mapping() replaces the stored map without needing a commit.
    """

    type = DeviceType.STANDALONE

    def __init__(self, ledmap: LedMap):
        self._ledmap = ledmap

    @classmethod
    def from_pixel_count(cls, pixel_count: int | str) -> "StandaloneDevice":
        """Create a device holding the identity map for ``pixel_count`` pixels."""
        return cls(LedMap.identity(parse_pixel_count(pixel_count)))

    @classmethod
    def from_mapping(cls, mapping: str) -> "StandaloneDevice":
        """Create a device from ledmap.json content."""
        return cls(parse_mapping(mapping))

    @classmethod
    def from_setup(
        cls,
        pixel_count: int | str | None = None,
        mapping: str | None = None,
    ) -> "StandaloneDevice":
        """
        Create a device from setup input; a mapping takes precedence over a count.

        Raises:
            SetupValidationError: If the input is invalid or both are absent
        """
        if mapping is not None and mapping.strip():
            return cls.from_mapping(mapping)
        if isinstance(pixel_count, str):
            pixel_count = pixel_count.strip() or None
        if pixel_count is not None:
            return cls.from_pixel_count(pixel_count)
        raise SetupValidationError("setup", "provide a pixel count or a mapping")

    async def __aenter__(self) -> "StandaloneDevice":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def ledmap(self) -> LedMap:
        return self._ledmap

    @property
    def is_connected(self) -> bool:
        return True

    @property
    def total_pixels(self) -> int:
        return len(self._ledmap)

    @property
    def commit_pending(self) -> bool:
        return False

    async def connect(self) -> None:
        logger.info(f"Standalone device ready with {len(self._ledmap)} pixels")

    def current_nodes(self) -> list[PixelNode]:
        return seed_nodes(len(self._ledmap), self._ledmap)

    def has_pending_changes(self, nodes: Sequence[PixelNode]) -> bool:
        return mapping_differs(nodes, self._ledmap)

    async def highlight_pixel(self, led_index: int) -> bool:
        return False

    async def write_mapping(self, nodes: Sequence[PixelNode]) -> WriteResult:
        validate_nodes(nodes)
        ledmap = to_ledmap(nodes)
        written = ledmap != self._ledmap
        self._ledmap = ledmap
        return WriteResult(written=written, commit_pending=False, ledmap=ledmap)

    async def aclose(self) -> None:
        pass
