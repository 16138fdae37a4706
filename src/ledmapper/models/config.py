"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ledmapper.utils.persistence import PydanticPersistence

DEFAULT_CONFIG_PATH = Path.home() / ".ledmapper" / "config.json"


class AppConfig(BaseModel):
    """Operator settings for ledmapper."""

    # Controller
    host: str | None = Field(
        default=None,
        description="Controller address (IP or hostname, optionally with http:// prefix)",
    )
    request_timeout: float = Field(
        default=5.0, gt=0, description="HTTP timeout for controller requests (seconds)"
    )
    highlight_segment_id: int = Field(
        default=1, ge=0, description="Controller segment used to highlight a pixel"
    )

    # Preview layout
    layout_spacing: int = Field(default=50, gt=0, description="Distance between preview slots")
    layout_top_padding: int = Field(default=0, ge=0, description="Space above the first row")

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str | None) -> str | None:
        """Strip whitespace and trailing slashes; treat empty as unset."""
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.ledmapper/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
