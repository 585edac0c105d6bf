"""Accessor - property introspection and binding for one target.

An Accessor is built for a class (type-only queries) or for a live instance
(queries plus ``set``). An instance-bound accessor also sees attributes the
instance holds without a class-level declaration, typed ``Any``. Callers check ``has_property`` before asking for
types or writing; asking about a missing property is a programming error and
raises ``InternalError``, while a value of the wrong type raises
``InvalidInputArgumentError``.

Typical use by an input binder::

    accessor = Accessor(MovieFilter)
    if accessor.has_property(name):
        value = coerce(raw_value, accessor.get_property_type(name))
        accessor.try_set(instance, name, value)
"""

from __future__ import annotations

from typing import Any

from propbind.binding import locator, resolver, writer
from propbind.binding.models import PropertyAccessor
from propbind.config.models import BindingConfig
from propbind.core.errors import InternalError
from propbind.core.logging import get_logger

log = get_logger(__name__)


class Accessor:
    """Introspects and writes the properties of one target class or instance."""

    def __init__(self, target: Any, *, config: BindingConfig | None = None) -> None:
        """Bind to a class or an instance.

        Args:
            target: Class for type-only queries, or an instance to also write to.
            config: Binding behavior; defaults to ``BindingConfig()``.
        """
        self._config = config or BindingConfig()
        if isinstance(target, type):
            self._target_type = target
            self._instance: Any | None = None
        else:
            self._target_type = type(target)
            self._instance = target
        self._accessors: dict[str, PropertyAccessor | None] = {}

    @property
    def target_type(self) -> type:
        return self._target_type

    @property
    def instance(self) -> Any | None:
        """The bound instance, or None for a type-only accessor."""
        return self._instance

    @property
    def config(self) -> BindingConfig:
        return self._config

    def _find(self, cls: type, name: str) -> PropertyAccessor | None:
        if cls is not self._target_type:
            return locator.locate(cls, name, bypass_visibility=self._config.bypass_visibility)
        if name not in self._accessors:
            self._accessors[name] = locator.locate(
                cls, name, bypass_visibility=self._config.bypass_visibility
            )
        accessor = self._accessors[name]
        if accessor is None and self._instance is not None:
            # Attributes assigned in __init__ without a class-level declaration
            accessor = locator.find_instance_field(
                self._instance, name, bypass_visibility=self._config.bypass_visibility
            )
        return accessor

    def _require(self, cls: type, name: str) -> PropertyAccessor:
        accessor = self._find(cls, name)
        if accessor is None:
            raise InternalError.property_not_found(name, writer.type_name(cls))
        return accessor

    def has_property(self, name: str) -> bool:
        """True if a setter or field named ``name`` exists on the target."""
        return self._find(self._target_type, name) is not None

    def get_accessor(self, name: str) -> PropertyAccessor:
        """The located setter or field for ``name``.

        Raises:
            InternalError: No such property (check ``has_property`` first).
        """
        return self._require(self._target_type, name)

    def get_property_type(self, name: str) -> Any:
        """Effective type: element type of single-argument generics, type
        variables substituted from the inheritance chain, else the raw type.

        Raises:
            InternalError: No such property (check ``has_property`` first).
        """
        accessor = self._require(self._target_type, name)
        return resolver.effective_type(
            self._target_type, accessor, unwrap_optional=self._config.unwrap_optional
        )

    def get_raw_property_type(self, name: str) -> Any:
        """Declared class or container (``list``, ``set``...) without unwrapping.

        Raises:
            InternalError: No such property (check ``has_property`` first).
        """
        accessor = self._require(self._target_type, name)
        return resolver.raw_type(accessor, unwrap_optional=self._config.unwrap_optional)

    def try_set(self, target: Any, name: str, value: Any) -> None:
        """Validate ``value`` against the raw property type and write it.

        Setters are preferred over fields. Nothing is written when validation
        fails. When no accessor exists the ``missing_property`` policy applies.

        Raises:
            InvalidInputArgumentError: ``value`` is not assignable to the raw type.
            InternalError: No such property and the policy is ``"raise"``.
        """
        cls = type(target)
        accessor = self._find(cls, name)
        if accessor is None:
            if self._config.missing_property == "ignore":
                log.debug("missing_property_ignored", type=cls.__qualname__, property=name)
                return
            raise InternalError.property_not_found(name, writer.type_name(cls))

        raw = resolver.raw_type(accessor, unwrap_optional=self._config.unwrap_optional)
        writer.check_assignable(target, name, raw, value)
        writer.write(target, accessor, value, bypass_visibility=self._config.bypass_visibility)

    def set(self, name: str, value: Any) -> None:
        """``try_set`` on the bound instance.

        Raises:
            InternalError: The accessor was built for a class, not an instance.
        """
        if self._instance is None:
            raise InternalError.unbound_target(writer.type_name(self._target_type))
        self.try_set(self._instance, name, value)

    def __repr__(self) -> str:
        bound = "instance" if self._instance is not None else "type"
        return f"Accessor({self._target_type.__qualname__}, {bound})"
