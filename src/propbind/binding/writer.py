"""Property writer: validate a value against the raw type, then write it."""

from __future__ import annotations

from typing import Any, Literal, get_args, get_origin, is_typeddict

from propbind.binding.models import PropertyAccessor, SetterAccessor, SetterStyle
from propbind.binding.resolver import is_union
from propbind.core.errors import InvalidInputArgumentError
from propbind.core.logging import get_logger

log = get_logger(__name__)

# Numeric tower: an int is acceptable where a float is declared, and so on.
_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int,),
    complex: (int, float),
}


def type_name(cls: type) -> str:
    """Fully qualified name of a class, e.g. ``tests.binding.inputobjects.InputObject``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def is_assignable(value: Any, raw: Any) -> bool:
    """Whether ``value`` may be stored in a property whose raw type is ``raw``."""
    if raw is object:
        return True
    if is_union(raw):
        return any(is_assignable(value, member) for member in get_args(raw))
    if get_origin(raw) is Literal:
        return value in get_args(raw)
    if is_typeddict(raw):
        return isinstance(value, dict)
    if isinstance(raw, type):
        try:
            if isinstance(value, raw):
                return True
        except TypeError:
            # Protocols without @runtime_checkable refuse isinstance
            return True
        promoted = _PROMOTIONS.get(raw, ())
        return not isinstance(value, bool) and isinstance(value, promoted)
    # Other hint forms (callables, special forms) are not checked
    return True


def check_assignable(target: Any, name: str, raw: Any, value: Any) -> None:
    """Raise InvalidInputArgumentError unless ``value`` is None or fits ``raw``."""
    if value is None or is_assignable(value, raw):
        return
    owner = type_name(type(target))
    log.debug("invalid_input_argument", property=name, type=owner, value_type=type(value).__name__)
    raise InvalidInputArgumentError.for_value(value, name, owner)


def write(target: Any, accessor: PropertyAccessor, value: Any, *, bypass_visibility: bool = True) -> None:
    """Store ``value`` through the accessor. The value must already be validated."""
    if isinstance(accessor, SetterAccessor):
        if accessor.style is SetterStyle.PROPERTY:
            prop = vars(accessor.owner)[accessor.attribute]
            prop.fset(target, value)
        else:
            getattr(target, accessor.attribute)(value)
    elif bypass_visibility:
        object.__setattr__(target, accessor.attribute, value)
    else:
        setattr(target, accessor.attribute, value)

    log.debug(
        "property_written",
        type=type(target).__qualname__,
        property=accessor.name,
        kind=accessor.kind.value,
    )
