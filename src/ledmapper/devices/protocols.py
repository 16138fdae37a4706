"""Device capability protocol shared by the networked and standalone variants."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field

from ledmapper.models import LedMap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ledmapper.models import PixelNode


class DeviceType(str, Enum):
    """Variant tag for mapping devices."""

    WLED = "wled"  # Live controller over HTTP
    STANDALONE = "standalone"  # In-memory simulator, no hardware


class WriteResult(BaseModel):
    """Outcome of write_mapping()."""

    model_config = ConfigDict(frozen=True)

    written: bool = Field(description="True if the mapping was sent/stored, False if unchanged")
    commit_pending: bool = Field(
        description="True while the controller still needs a manual commit to apply the map"
    )
    ledmap: LedMap = Field(description="The mapping the device now knows as persisted")


class MappingDevice(Protocol):
    """
    Capability interface for anything that stores an LED map.

    Implementations are plain classes tagged with ``type``; callers that
    need variant-specific behaviour dispatch on that tag.
    """

    type: DeviceType

    @property
    def is_connected(self) -> bool:
        """True once connect() has succeeded."""
        ...

    @property
    def total_pixels(self) -> int:
        """Number of pixels on the device."""
        ...

    @property
    def ledmap(self) -> LedMap | None:
        """Last known persisted mapping (None if the device has none)."""
        ...

    @property
    def commit_pending(self) -> bool:
        """True if a written mapping still awaits a controller-side commit."""
        ...

    async def connect(self) -> None:
        """Fetch device state. Raises on hard failures."""
        ...

    def current_nodes(self) -> list[PixelNode]:
        """Build the node set for editing from the known device state."""
        ...

    async def highlight_pixel(self, led_index: int) -> bool:
        """
        Light up one physical pixel.

        Returns:
            True if a request was sent, False if it was dropped
        """
        ...

    async def write_mapping(self, nodes: Sequence[PixelNode]) -> WriteResult:
        """Persist the node set if it differs from the known mapping."""
        ...

    def has_pending_changes(self, nodes: Sequence[PixelNode]) -> bool:
        """Check whether nodes differ from the known mapping (no I/O)."""
        ...

    async def aclose(self) -> None:
        """Release resources."""
        ...
