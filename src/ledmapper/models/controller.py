"""Controller configuration model (subset of WLED's /cfg.json)."""

from pydantic import BaseModel, ConfigDict, Field

SUPPORTED_REVISION: tuple[int, int] = (1, 0)


class OutputSegment(BaseModel):
    """One LED output pin as reported under hw.led.ins."""

    model_config = ConfigDict(populate_by_name=True)

    start: int = Field(default=0, ge=0, description="First pixel driven by this output")
    length: int = Field(default=0, ge=0, alias="len", description="Pixels on this output")
    order: int = Field(default=0, description="Color order code")
    rev: bool = Field(default=False, description="Output runs reversed")


class LedHardware(BaseModel):
    """LED hardware block (hw.led)."""

    total: int = Field(ge=0, description="Total pixel count across all outputs")
    ins: list[OutputSegment] = Field(default_factory=list, description="Output segments")


class Hardware(BaseModel):
    """Hardware block (hw)."""

    led: LedHardware


class ControllerConfig(BaseModel):
    """Controller configuration as fetched from /cfg.json.

    Only ``rev`` and ``hw.led.total`` drive behaviour; everything else the
    controller sends is ignored.
    """

    rev: tuple[int, int] = Field(description="Config revision (major, minor)")
    hw: Hardware

    @property
    def total_pixels(self) -> int:
        """Total pixel count."""
        return self.hw.led.total

    @property
    def outputs(self) -> list[OutputSegment]:
        """Configured output segments."""
        return self.hw.led.ins

    @property
    def is_supported(self) -> bool:
        """Check if this revision is the supported one."""
        return self.rev == SUPPORTED_REVISION
