"""Pixel node models."""

from pydantic import BaseModel, ConfigDict, Field


class PixelNode(BaseModel):
    """One pixel: fixed physical index plus its logical display position.

    The model is frozen; reordering produces new nodes instead of mutating
    existing ones.
    """

    model_config = ConfigDict(frozen=True)

    led_index: int = Field(ge=0, description="Physical index in wiring order (immutable)")
    pos_index: int = Field(ge=0, description="Logical display position (0-based)")

    def moved_to(self, pos_index: int) -> "PixelNode":
        """Return a copy of this node at another logical position."""
        return PixelNode(led_index=self.led_index, pos_index=pos_index)


class PlacedNode(PixelNode):
    """Pixel node with display coordinates for a preview surface.

    Coordinates are derived from the node set by layout and carry no
    authority over led_index/pos_index.
    """

    row: int = Field(ge=0, description="Preview row")
    x: float = Field(description="Horizontal centre coordinate")
    y: float = Field(description="Vertical centre coordinate")

    @property
    def position(self) -> tuple[float, float]:
        """Get (x, y) coordinates as tuple."""
        return (self.x, self.y)
