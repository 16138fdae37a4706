"""
Custom exception hierarchy for ledmapper.

## Exception Hierarchy

```
LedMapperError (base)
├── DeviceError
│   ├── ControllerConfigError
│   │   └── ConfigRevisionMismatch
│   ├── TransportError
│   ├── MappingAbsent
│   └── DeviceNotConnectedError
├── MappingError
│   ├── UnknownPixelError
│   └── MappingInvariantError
├── SetupValidationError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError

CommitPending (UserWarning, advisory only)
```

All custom exceptions inherit from `LedMapperError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Unsupported controller firmware

```python
from ledmapper.exceptions import ConfigRevisionMismatch

try:
    await device.connect()
except ConfigRevisionMismatch as e:
    print(e.user_message)   # "Controller configuration is not usable: unsupported ..."
```

`MappingAbsent` is never raised out of `connect()`; it is logged and the
device falls back to the identity order. `CommitPending` is issued through
`warnings.warn` after a successful write, because the controller only applies
a new ledmap.json once the LED settings are saved on the controller.

See `ledmapper.exceptions.handlers` for the conversion helpers.
"""

from .base import LedMapperError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import (
    CommitPending,
    ConfigRevisionMismatch,
    ControllerConfigError,
    DeviceError,
    DeviceNotConnectedError,
    MappingAbsent,
    TransportError,
)
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_http_error,
    wrap_pydantic_error,
)
from .mapping import (
    MappingError,
    MappingInvariantError,
    SetupValidationError,
    UnknownPixelError,
)

__all__ = [
    # Base
    "LedMapperError",
    # Device
    "CommitPending",
    "ConfigRevisionMismatch",
    "ControllerConfigError",
    "DeviceError",
    "DeviceNotConnectedError",
    "MappingAbsent",
    "TransportError",
    # Mapping
    "MappingError",
    "MappingInvariantError",
    "SetupValidationError",
    "UnknownPixelError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_http_error",
    "wrap_pydantic_error",
]
