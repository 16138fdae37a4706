"""Single-flight pixel highlight channel."""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from ledmapper.exceptions import LedMapperError
from ledmapper.models import LedMap

logger = logging.getLogger(__name__)


class HighlightChannel:
    """
    Sends "light this pixel" commands, at most one at a time.

    While a request is outstanding further requests are dropped, not
    queued. The in-flight flag is released whether the request succeeds
    or fails.

    The controller applies segments after its LED map, so a physical index
    is translated to the logical position that currently shows it before
    sending.
    """

    def __init__(
        self,
        send: Callable[[dict[str, Any]], Awaitable[Any]],
        segment_id: int = 1,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize channel.

        Args:
            send: Coroutine function that delivers one command payload
            segment_id: Controller segment used for highlighting
            clock: Source of unix time (seconds)
        """
        self._send = send
        self.segment_id = segment_id
        self._clock = clock
        self._in_flight = False
        self._last_timestamp = 0

    @property
    def in_flight(self) -> bool:
        """True while a highlight request is outstanding."""
        return self._in_flight

    @staticmethod
    def resolve_position(led_index: int, ledmap: LedMap | None) -> int:
        """
        Translate a physical index into the logical position addressed on the controller.

        Falls back to using led_index unchanged when the map is missing or
        does not contain it. That fallback assumes the controller addresses
        unmapped pixels by their physical index.
        """
        if ledmap is not None:
            position = ledmap.position_of(led_index)
            if position is not None:
                return position
        return led_index

    def next_timestamp(self) -> int:
        """Whole unix seconds, never lower than the previous command's."""
        self._last_timestamp = max(int(self._clock()), self._last_timestamp)
        return self._last_timestamp

    def build_command(self, position: int) -> dict[str, Any]:
        """Command payload selecting exactly one logical position."""
        return {
            "seg": {
                "id": self.segment_id,
                "start": position,
                "stop": position + 1,
                "grp": 1,
                "spc": 0,
                "of": 0,
            },
            "v": True,
            "time": self.next_timestamp(),
        }

    async def highlight(self, led_index: int, ledmap: LedMap | None) -> bool:
        """
        Highlight a physical pixel unless a request is already in flight.

        Returns:
            True if a command was sent, False if the request was dropped

        Raises:
            TransportError: If sending failed (the channel is released first)
        """
        if self._in_flight:
            logger.debug(f"Highlight of pixel {led_index} dropped, request in flight")
            return False

        self._in_flight = True
        try:
            position = self.resolve_position(led_index, ledmap)
            await self._send(self.build_command(position))
        except LedMapperError as e:
            logger.warning(f"Highlight of pixel {led_index} failed: {e.technical_message}")
            raise
        finally:
            self._in_flight = False
        return True
