"""Root of the ledmapper error tree.

Errors raised while talking to a controller, editing a mapping or reading
the settings file all derive from LedMapperError. The CLI catches this one
type, prints ``user_message`` and ``recovery_hint`` and exits with status 1;
``technical_message`` goes to the log file only.

``recoverable`` tells a caller whether trying again can help: an unreachable
controller may come back, an unsupported config revision will not.
"""

from typing import Optional


class LedMapperError(Exception):
    """
    Base class for controller, mapping and settings errors.

    Attributes:
        user_message: One-line message shown on the terminal
        technical_message: Message written to the log (URL, status, raw value)
        recoverable: True if repeating the operation may succeed
        recovery_hint: What the operator can do about it, if anything
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        """
        Args:
            user_message: Message for the operator
            technical_message: Message for the log (defaults to user_message)
            recoverable: True if a retry may succeed
            recovery_hint: Next step for the operator
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint on its own paragraph."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nHint: {self.recovery_hint}"
