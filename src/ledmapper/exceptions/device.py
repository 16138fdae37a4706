"""Controller and transport exceptions.

This module defines exceptions raised while talking to an LED controller:
- DeviceError: Base class for device errors
- ControllerConfigError: /cfg.json has an unexpected shape
- ConfigRevisionMismatch: /cfg.json reports an unsupported revision
- TransportError: HTTP request failed or returned a non-success status
- MappingAbsent: Controller has no usable ledmap.json (soft)
- DeviceNotConnectedError: Operation needs a connected device
- CommitPending: Advisory warning after a successful write
"""

from typing import Any

from .base import LedMapperError


class DeviceError(LedMapperError):
    """LED controller operation failed."""

    def __init__(self, user_message: str, host: str | None = None, **kwargs):
        """
        Initialize device error.

        Args:
            user_message: User-friendly error message
            host: The controller host involved (if applicable)
        """
        super().__init__(user_message, **kwargs)
        self.host = host


class ControllerConfigError(DeviceError):
    """Controller configuration could not be understood."""

    def __init__(self, reason: str, host: str | None = None):
        super().__init__(
            user_message=f"Controller configuration is not usable: {reason}",
            host=host,
            recoverable=False,
            recovery_hint="Make sure the address points at a WLED controller",
        )
        self.reason = reason


class ConfigRevisionMismatch(ControllerConfigError):
    """Controller reports a config revision this tool does not support."""

    def __init__(self, revision: Any, supported: tuple[int, int], host: str | None = None):
        """
        Initialize revision mismatch error.

        Args:
            revision: The "rev" value reported by the controller (may be missing/None)
            supported: The one supported (major, minor) revision
        """
        super().__init__(
            reason=f"unsupported config revision {revision!r}, expected {list(supported)}",
            host=host,
        )
        self.revision = revision
        self.supported = supported
        self.recovery_hint = "Update the controller firmware or use a matching ledmapper release"


class TransportError(DeviceError):
    """Network or HTTP failure while talking to the controller."""

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: int | None = None,
        host: str | None = None,
    ):
        """
        Initialize transport error.

        Args:
            url: The request URL
            reason: Why the request failed
            status_code: HTTP status code if a response was received
        """
        if status_code is not None:
            user_msg = f"Controller returned HTTP {status_code} for {url}"
        else:
            user_msg = f"Could not reach controller at {url}"

        super().__init__(
            user_message=user_msg,
            technical_message=f"{user_msg}: {reason}",
            host=host,
            recoverable=True,
            recovery_hint="Check the controller is powered and reachable, then try again",
        )
        self.url = url
        self.reason = reason
        self.status_code = status_code


class MappingAbsent(DeviceError):
    """Controller has no stored LED map (soft: identity mapping is used)."""

    def __init__(self, reason: str, host: str | None = None):
        super().__init__(
            user_message="Controller has no stored LED map, starting from identity order",
            technical_message=f"ledmap.json unavailable: {reason}",
            host=host,
            recoverable=True,
        )
        self.reason = reason


class DeviceNotConnectedError(DeviceError):
    """Operation requires a successful connect() first."""

    def __init__(self, operation: str, host: str | None = None):
        super().__init__(
            user_message=f"Cannot {operation}: device is not connected",
            host=host,
            recoverable=True,
            recovery_hint="Call connect() and make sure it succeeds",
        )
        self.operation = operation


class CommitPending(UserWarning):
    """A mapping was written but the controller has not applied it yet."""

    def __init__(self, hint: str):
        super().__init__(hint)
        self.hint = hint
