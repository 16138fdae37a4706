"""Mapping model and setup-input exceptions."""

from .base import LedMapperError


class MappingError(LedMapperError):
    """A node set operation could not be applied."""
    pass


class UnknownPixelError(MappingError):
    """The requested physical index is not part of the node set."""

    def __init__(self, led_index: int, total: int):
        super().__init__(
            user_message=f"Pixel {led_index} does not exist (mapping has {total} pixels)",
            recoverable=True,
            recovery_hint=f"Use a pixel index between 0 and {max(total - 1, 0)}",
        )
        self.led_index = led_index
        self.total = total


class MappingInvariantError(MappingError):
    """Index values of a node set are not a dense permutation."""

    def __init__(self, field: str, detail: str):
        super().__init__(
            user_message=f"Invalid mapping: {field} values {detail}",
            recoverable=False,
        )
        self.field = field
        self.detail = detail


class SetupValidationError(LedMapperError):
    """Standalone device input was rejected before any state was created."""

    def __init__(self, field: str, error_msg: str):
        """
        Initialize setup validation error.

        Args:
            field: Which input was rejected ("pixel_count", "mapping" or "setup")
            error_msg: Why it was rejected
        """
        super().__init__(
            user_message=f"Invalid {field}: {error_msg}",
            recoverable=True,
            recovery_hint=(
                'Pass a pixel count (e.g. --leds 60) or a mapping such as '
                '--mapping \'{"map": [2, 0, 1]}\''
            ),
        )
        self.field = field
        self.error_msg = error_msg
