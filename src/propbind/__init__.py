"""PropBind - runtime property introspection and type-checked binding."""

from propbind.binding import Accessor
from propbind.config import BindingConfig, PropBindConfig, load_config
from propbind.core import (
    ConfigError,
    ErrorCode,
    InternalError,
    InvalidInputArgumentError,
    PropBindError,
    configure_logging,
    get_logger,
)
from propbind.http import is_application_graphql

__all__ = [
    "Accessor",
    "BindingConfig",
    "PropBindConfig",
    "load_config",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "InvalidInputArgumentError",
    "PropBindError",
    "configure_logging",
    "get_logger",
    "is_application_graphql",
]
