"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

```
CLI            formats user_message / recovery_hint, logs details
   ^
   | LedMapperError
Devices/Services  catch httpx / pydantic errors, convert them here
   ^
   | httpx.HTTPError, pydantic.ValidationError, ...
Libraries
```

| Scenario | Use This |
|----------|----------|
| httpx request failed | `raise wrap_http_error(e, url) from e` |
| Settings file rejected by pydantic | `raise wrap_pydantic_error(e, path) from e` |
| Critical section with auto-logging | `with ErrorContext("connect to controller"): ...` |
| Show an error in the CLI | `message, hint = format_error_for_display(e)` |
"""

import logging
from typing import Optional

import httpx

from .base import LedMapperError
from .config import ConfigFileInvalidError, ConfigValidationError
from .device import TransportError

logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Example:
        ```python
        with ErrorContext("connect to controller"):
            await device.connect()
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[Exception] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, LedMapperError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)

        return not self.re_raise


def wrap_http_error(error: Exception, url: str, host: Optional[str] = None) -> TransportError:
    """
    Convert httpx errors into TransportError.

    Args:
        error: The httpx exception (HTTPStatusError, RequestError, ...)
        url: The request URL
        host: Controller host for context

    Returns:
        TransportError carrying the status code when a response was received
    """
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return TransportError(
            url=url,
            reason=response.reason_phrase or str(error),
            status_code=response.status_code,
            host=host,
        )

    if isinstance(error, httpx.TimeoutException):
        return TransportError(url=url, reason=f"timed out ({type(error).__name__})", host=host)

    return TransportError(url=url, reason=str(error) or type(error).__name__, host=host)


def wrap_pydantic_error(error: Exception, file_path: str) -> LedMapperError:
    """
    Convert Pydantic validation errors to ledmapper exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg
        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input'),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")
            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(field="unknown", value=None, error_msg=error_msg, file_path=file_path)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LedMapperError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
