"""Property locator.

Finds the accessor for a property name anywhere in a class's MRO:

1. A setter: a method named ``"set" + Capitalize(name)`` taking exactly one
   argument, or a ``property`` named ``name`` with an ``fset``. Among setter
   methods the most-derived one whose parameter is annotated supplies the type.
2. A field: an annotation or ``__slots__`` entry named exactly ``name``,
   including name-mangled private fields when visibility is bypassed.
   ``find_instance_field`` extends this to attributes set on an instance.

Lookups are memoized per (class, name, bypass_visibility) and never raise.
"""

from __future__ import annotations

import dataclasses
import inspect
import sys
import typing
from collections.abc import Iterator
from functools import lru_cache
from typing import Annotated, Any, ClassVar, ForwardRef, get_args, get_origin

from propbind.binding.models import (
    FieldAccessor,
    PropertyAccessor,
    SetterAccessor,
    SetterStyle,
)
from propbind.core.logging import get_logger

log = get_logger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

_UNRESOLVABLE = (NameError, AttributeError, TypeError, SyntaxError)

# Unevaluated annotations, as written in source
_CLASS_VAR_NAMES = frozenset(("ClassVar", "typing.ClassVar", "t.ClassVar"))


def setter_name(name: str) -> str:
    """Name of the setter method for a property: ``simpleString`` -> ``setSimpleString``."""
    return "set" + name[:1].upper() + name[1:]


def mangled_name(owner: type, name: str) -> str:
    """Storage name of a ``__name`` attribute declared on ``owner``."""
    return f"_{owner.__name__.lstrip('_')}__{name}"


def ancestry(cls: type) -> Iterator[type]:
    """Classes of the MRO, most-derived first, without ``object``."""
    for klass in cls.__mro__:
        if klass is not object:
            yield klass


def normalize_hint(hint: Any) -> Any:
    """Strip ``Annotated`` metadata; unresolvable forward references become ``Any``."""
    if hint is inspect.Parameter.empty or isinstance(hint, (str, ForwardRef)):
        return Any
    while get_origin(hint) is Annotated:
        hint = get_args(hint)[0]
    return hint


def _namespaces(obj: Any) -> tuple[dict[str, Any], dict[str, Any] | None]:
    if isinstance(obj, type):
        module = sys.modules.get(obj.__module__)
        return dict(vars(module)) if module else {}, dict(vars(obj))
    return getattr(obj, "__globals__", {}), None


def _resolve_annotation(obj: Any, name: str, hint: Any) -> Any:
    """Evaluate one annotation of ``obj``; the raw hint is kept when it cannot be."""
    globalns, localns = _namespaces(obj)
    holder = type(
        getattr(obj, "__name__", "holder"),
        (),
        {"__annotations__": {name: hint}, "__module__": getattr(obj, "__module__", None)},
    )
    try:
        return typing.get_type_hints(
            holder, globalns=globalns, localns=localns, include_extras=True
        )[name]
    except _UNRESOLVABLE as e:
        log.debug(
            "annotation_unresolved",
            owner=getattr(obj, "__qualname__", repr(obj)),
            annotation=name,
            error=str(e),
        )
        return hint


def _evaluated_annotations(obj: Any) -> dict[str, Any]:
    """Own annotations of a class or function, evaluated one by one on failure."""
    raw = dict(inspect.get_annotations(obj))
    if not raw:
        return raw
    try:
        hints = typing.get_type_hints(obj, include_extras=True)
    except _UNRESOLVABLE:
        return {name: _resolve_annotation(obj, name, hint) for name, hint in raw.items()}
    # get_type_hints merges the MRO for classes; keep the declaring class's view
    return {name: hints.get(name, hint) for name, hint in raw.items()}


def _single_parameter(func: Any) -> inspect.Parameter | None:
    """The value parameter of a one-argument mutator, or None."""
    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError):
        return None
    if len(params) != 2 or params[1].kind not in _POSITIONAL:
        return None
    return params[1]


def _method_hint(func: Any, param: inspect.Parameter) -> Any:
    return _evaluated_annotations(func).get(param.name, inspect.Parameter.empty)


def _property_setter(owner: type, name: str, prop: property) -> SetterAccessor | None:
    param = _single_parameter(prop.fset)
    if param is None:
        return None
    hint = _method_hint(prop.fset, param)
    if hint is inspect.Parameter.empty and prop.fget is not None:
        hint = _evaluated_annotations(prop.fget).get("return", inspect.Parameter.empty)
    return SetterAccessor(
        name=name,
        owner=owner,
        attribute=name,
        hint=normalize_hint(hint),
        style=SetterStyle.PROPERTY,
    )


def _find_setter_method(cls: type, name: str) -> SetterAccessor | None:
    method = setter_name(name)
    fallback: SetterAccessor | None = None

    for klass in ancestry(cls):
        func = vars(klass).get(method)
        if not inspect.isfunction(func):
            continue
        param = _single_parameter(func)
        if param is None:
            continue
        hint = _method_hint(func, param)
        accessor = SetterAccessor(
            name=name, owner=klass, attribute=method, hint=normalize_hint(hint)
        )
        if hint is not inspect.Parameter.empty:
            return accessor
        fallback = fallback or accessor

    return fallback


def _find_property_setter(cls: type, name: str) -> SetterAccessor | None:
    # Only the most-derived definition of `name` is reachable at runtime
    for klass in ancestry(cls):
        if name in vars(klass):
            attr = vars(klass)[name]
            if isinstance(attr, property) and attr.fset is not None:
                return _property_setter(klass, name, attr)
            return None
    return None


def find_setter(cls: type, name: str) -> SetterAccessor | None:
    return _find_setter_method(cls, name) or _find_property_setter(cls, name)


def _is_frozen_dataclass(cls: type) -> bool:
    return dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen  # type: ignore[attr-defined]


def _slot_names(klass: type) -> tuple[str, ...]:
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.partition("[")[0].strip() in _CLASS_VAR_NAMES
    return hint is ClassVar or get_origin(hint) is ClassVar


def find_field(cls: type, name: str, *, bypass_visibility: bool = True) -> FieldAccessor | None:
    if not bypass_visibility and _is_frozen_dataclass(cls):
        return None

    for klass in ancestry(cls):
        candidates = [name]
        if bypass_visibility:
            candidates.append(mangled_name(klass, name))

        declared = inspect.get_annotations(klass)
        annotations = (
            _evaluated_annotations(klass) if any(c in declared for c in candidates) else {}
        )
        slots = _slot_names(klass)

        for attribute in candidates:
            if attribute in annotations:
                hint = annotations[attribute]
                if _is_class_var(hint):
                    continue
                return FieldAccessor(
                    name=name, owner=klass, attribute=attribute, hint=normalize_hint(hint)
                )
            if attribute in slots:
                return FieldAccessor(name=name, owner=klass, attribute=attribute, hint=Any)

    return None


def find_instance_field(
    instance: Any, name: str, *, bypass_visibility: bool = True
) -> FieldAccessor | None:
    """Field assigned on ``instance`` itself (``self.title = ...``) with no class declaration.

    Typed ``Any``; never memoized since it depends on the instance's state.
    """
    cls = type(instance)
    if not name or (not bypass_visibility and _is_frozen_dataclass(cls)):
        return None
    attributes = getattr(instance, "__dict__", {})

    candidates = [name]
    if bypass_visibility:
        candidates.extend(mangled_name(klass, name) for klass in ancestry(cls))
    for attribute in candidates:
        if attribute in attributes:
            return FieldAccessor(name=name, owner=cls, attribute=attribute, hint=Any)
    return None


def _locate(cls: type, name: str, bypass_visibility: bool) -> PropertyAccessor | None:
    if not name:
        return None
    accessor: PropertyAccessor | None = find_setter(cls, name)
    if accessor is None:
        accessor = find_field(cls, name, bypass_visibility=bypass_visibility)
    log.debug(
        "accessor_resolved",
        type=cls.__qualname__,
        property=name,
        kind=accessor.kind.value if accessor else None,
        owner=accessor.owner.__qualname__ if accessor else None,
    )
    return accessor


_locate_cached = lru_cache(maxsize=1024)(_locate)


def locate(cls: type, name: str, *, bypass_visibility: bool = True) -> PropertyAccessor | None:
    """Find the accessor for ``name`` on ``cls``; setters take priority over fields."""
    return _locate_cached(cls, name, bypass_visibility)


def configure_cache(maxsize: int) -> None:
    """Rebuild the lookup cache with a new size. 0 disables memoization."""
    global _locate_cached
    _locate_cached = lru_cache(maxsize=maxsize)(_locate)


def clear_cache() -> None:
    _locate_cached.cache_clear()
