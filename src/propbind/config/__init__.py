"""Config module exports."""

from propbind.config.loader import load_config
from propbind.config.models import (
    BindingConfig,
    LoggingConfig,
    LogOutputConfig,
    PropBindConfig,
)

__all__ = [
    "load_config",
    "BindingConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "PropBindConfig",
]
