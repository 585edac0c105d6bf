"""Core module exports."""

from propbind.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    InvalidInputArgumentError,
    PropBindError,
)
from propbind.core.logging import (
    clear_binding_id,
    configure_logging,
    get_binding_id,
    get_logger,
    set_binding_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "InvalidInputArgumentError",
    "PropBindError",
    # Logging
    "clear_binding_id",
    "configure_logging",
    "get_binding_id",
    "get_logger",
    "set_binding_id",
]
