"""Property binding - locate, resolve and write properties of target classes."""

from propbind.binding import locator, resolver
from propbind.binding.accessor import Accessor
from propbind.binding.models import (
    AccessorKind,
    FieldAccessor,
    PropertyAccessor,
    SetterAccessor,
    SetterStyle,
)
from propbind.config.models import BindingConfig


def configure_caches(config: BindingConfig) -> None:
    """Resize the accessor and binding-map caches from config."""
    locator.configure_cache(config.cache_size)
    resolver.configure_cache(config.cache_size)


def clear_caches() -> None:
    locator.clear_cache()
    resolver.clear_cache()


__all__ = [
    "Accessor",
    "AccessorKind",
    "FieldAccessor",
    "PropertyAccessor",
    "SetterAccessor",
    "SetterStyle",
    "clear_caches",
    "configure_caches",
]
