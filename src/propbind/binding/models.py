"""Property accessor models.

A located property is either a setter (a one-argument mutator method, or a
``property`` with an ``fset``) or a field (a class annotation or slot). Both
variants carry the class that declares them and the evaluated annotation of
the value they accept (``typing.Any`` when there is none).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AccessorKind(str, Enum):
    """How a property is written."""

    SETTER = "setter"
    FIELD = "field"


class SetterStyle(str, Enum):
    """Where a setter came from."""

    METHOD = "method"  # def setFoo(self, value)
    PROPERTY = "property"  # @foo.setter


@dataclass(frozen=True, slots=True)
class SetterAccessor:
    """A setter located for a property name."""

    name: str
    owner: type
    attribute: str
    hint: Any
    style: SetterStyle = SetterStyle.METHOD

    @property
    def kind(self) -> AccessorKind:
        return AccessorKind.SETTER


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """A directly writable field located for a property name.

    ``attribute`` is the storage name, which differs from ``name`` for
    name-mangled private fields (``_Owner__name``).
    """

    name: str
    owner: type
    attribute: str
    hint: Any

    @property
    def kind(self) -> AccessorKind:
        return AccessorKind.FIELD


PropertyAccessor = SetterAccessor | FieldAccessor
