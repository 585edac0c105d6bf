"""Generic type resolution for located properties.

The effective type of a property unwraps one level of single-argument generic
(``list[Bar]`` -> ``Bar``) and substitutes type variables that a generic
ancestor declares and a subclass binds::

    class SortBy(Generic[T]):
        field: T

    class MovieSortBy(SortBy[MovieSortByField]):
        pass

    effective_type(MovieSortBy, locate(MovieSortBy, "field"))  # MovieSortByField

Bindings are collected once per concrete class by walking its MRO
most-derived first. Each class contributes the arguments its
``__orig_bases__`` (or pydantic generic metadata) supply for the parameters of
its generic bases, keyed by ``(generic base, TypeVar)`` so that two classes
reusing the same ``TypeVar`` object never collide.
"""

from __future__ import annotations

import types
from collections.abc import Mapping
from functools import lru_cache
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    Generic,
    Literal,
    NewType,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from propbind.binding.models import PropertyAccessor
from propbind.core.logging import get_logger

log = get_logger(__name__)

BindingMap = Mapping[tuple[type, TypeVar], Any]

_UNION_ORIGINS = (Union, types.UnionType)
_NOT_CONTAINERS = (*_UNION_ORIGINS, Literal, Annotated, ClassVar, Final)


def is_union(hint: Any) -> bool:
    return get_origin(hint) in _UNION_ORIGINS


def strip_optional(hint: Any) -> Any:
    """``Optional[X]`` / ``X | None`` -> ``X``; other unions lose their ``None`` member."""
    if not is_union(hint):
        return hint
    members = tuple(arg for arg in get_args(hint) if arg is not type(None))
    if len(members) == len(get_args(hint)):
        return hint
    if len(members) == 1:
        return members[0]
    return Union[members]  # noqa: UP007


def declared_type(accessor: PropertyAccessor, *, unwrap_optional: bool = True) -> Any:
    """The accessor's declared hint, before any unwrapping or substitution."""
    hint = accessor.hint
    if unwrap_optional:
        hint = strip_optional(hint)
    return hint


def _generic_bases(klass: type) -> list[tuple[type, tuple[Any, ...]]]:
    """(generic origin, arguments) pairs that ``klass`` itself supplies."""
    pairs: list[tuple[type, tuple[Any, ...]]] = []
    for base in vars(klass).get("__orig_bases__", ()):
        origin = get_origin(base)
        if isinstance(origin, type) and origin not in (Generic, Protocol):
            pairs.append((origin, get_args(base)))

    # pydantic parametrizes generic models by creating real subclasses
    metadata = vars(klass).get("__pydantic_generic_metadata__")
    if metadata and metadata.get("origin") is not None:
        pairs.append((metadata["origin"], tuple(metadata.get("args", ()))))
    return pairs


def _type_parameters(origin: type) -> tuple[Any, ...]:
    metadata = vars(origin).get("__pydantic_generic_metadata__")
    if metadata and metadata.get("parameters"):
        return tuple(metadata["parameters"])
    return tuple(getattr(origin, "__parameters__", ()))


def _substitute(hint: Any, owner: type, bindings: Mapping[tuple[type, TypeVar], Any]) -> Any:
    """Replace ``owner``'s type variables inside ``hint`` with their bindings."""
    if isinstance(hint, TypeVar):
        return bindings.get((owner, hint), hint)
    parameters = getattr(hint, "__parameters__", ())
    if parameters and get_origin(hint) is not None:
        return hint[tuple(bindings.get((owner, p), p) for p in parameters)]
    return hint


def _build_binding_map(cls: type) -> BindingMap:
    bindings: dict[tuple[type, TypeVar], Any] = {}
    for klass in cls.__mro__:
        for origin, args in _generic_bases(klass):
            parameters = _type_parameters(origin)
            for parameter, arg in zip(parameters, args):
                if isinstance(parameter, TypeVar):
                    bindings[(origin, parameter)] = _substitute(arg, klass, bindings)
    return types.MappingProxyType(bindings)


_binding_map_cached = lru_cache(maxsize=1024)(_build_binding_map)


def binding_map(cls: type) -> BindingMap:
    """Type-variable substitutions contributed by ``cls`` and its ancestors."""
    return _binding_map_cached(cls)


def configure_cache(maxsize: int) -> None:
    """Rebuild the binding-map cache with a new size. 0 disables memoization."""
    global _binding_map_cached
    _binding_map_cached = lru_cache(maxsize=maxsize)(_build_binding_map)


def clear_cache() -> None:
    _binding_map_cached.cache_clear()


def erase(hint: Any) -> Any:
    """Reduce a hint to something ``isinstance`` can check.

    Parameterized generics erase to their origin, type variables to their bound
    (or the union of their constraints, or ``object``), ``Any`` to ``object``.
    Unions erase member-wise; ``Literal`` aliases are kept as they are.
    """
    if hint is Any or hint is None:
        return object if hint is Any else type(None)
    if isinstance(hint, TypeVar):
        if hint.__bound__ is not None:
            return erase(hint.__bound__)
        if hint.__constraints__:
            return erase(Union[hint.__constraints__])  # noqa: UP007
        return object
    if isinstance(hint, NewType):
        return erase(hint.__supertype__)

    origin = get_origin(hint)
    if origin is None:
        return hint
    if origin in _UNION_ORIGINS:
        members = tuple(erase(arg) for arg in get_args(hint))
        if object in members:
            return object
        return Union[members]  # noqa: UP007
    if origin is Literal:
        return hint
    if origin in (Annotated, ClassVar, Final):
        return erase(get_args(hint)[0])
    return origin


def resolve_type_var(cls: type, owner: type, var: TypeVar) -> Any:
    """Concrete type bound to ``owner``'s ``var`` somewhere below ``cls``.

    Falls back to the variable's erasure when no subclass binds it.
    """
    bound = binding_map(cls).get((owner, var), var)
    if isinstance(bound, TypeVar):
        log.debug(
            "type_variable_unbound",
            type=cls.__qualname__,
            owner=owner.__qualname__,
            variable=var.__name__,
        )
        return erase(bound)
    return bound


def _single_argument(hint: Any) -> Any | None:
    origin = get_origin(hint)
    if origin is None or origin in _NOT_CONTAINERS:
        return None
    args = get_args(hint)
    if len(args) != 1:
        return None
    return args[0]


def effective_type(cls: type, accessor: PropertyAccessor, *, unwrap_optional: bool = True) -> Any:
    """Type used to coerce values for the property.

    1. A single-argument generic yields its argument, with the declaring
       class's type variables substituted.
    2. A bare type variable is resolved through the inheritance bindings.
    3. Anything else yields the raw type.
    """
    hint = declared_type(accessor, unwrap_optional=unwrap_optional)

    element = _single_argument(hint)
    if element is not None:
        if isinstance(element, TypeVar):
            return resolve_type_var(cls, accessor.owner, element)
        return _substitute(element, accessor.owner, binding_map(cls))

    if isinstance(hint, TypeVar):
        return resolve_type_var(cls, accessor.owner, hint)

    return erase(hint)


def raw_type(accessor: PropertyAccessor, *, unwrap_optional: bool = True) -> Any:
    """Declared container or class without unwrapping or substitution."""
    return erase(declared_type(accessor, unwrap_optional=unwrap_optional))
