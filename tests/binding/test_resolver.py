"""Tests for binding/resolver.py module."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, Literal, NewType, Optional, TypeVar, Union, get_args, get_origin

import pytest
from pydantic import BaseModel

from propbind.binding import Accessor, locator, resolver
from propbind.config.models import BindingConfig
from tests.binding.inputobjects import (
    BarInput,
    Base,
    Bounded,
    Filter,
    HintVariety,
    Item,
    Leaf,
    Middle,
    MovieSortBy,
    MovieSortByField,
    SortBy,
    T,
    U,
)

UserId = NewType("UserId", int)
S = TypeVar("S", int, str)


class PydanticSortBy(BaseModel, Generic[T]):
    field: Optional[T] = None  # noqa: UP007


class PydanticMovieSortBy(PydanticSortBy[MovieSortByField]):
    pass


class TestStripOptional:
    """Tests for strip_optional()."""

    @pytest.mark.parametrize(
        ("hint", "expected"),
        [
            (Optional[int], int),  # noqa: UP007
            (int | None, int),
            (int, int),
            (int | str, int | str),
        ],
    )
    def test_strips_none_member(self, hint: Any, expected: Any) -> None:
        assert resolver.strip_optional(hint) == expected

    def test_keeps_remaining_union(self) -> None:
        assert resolver.strip_optional(int | str | None) == Union[int, str]  # noqa: UP007


class TestErase:
    """Tests for erase()."""

    @pytest.mark.parametrize(
        ("hint", "expected"),
        [
            (list[int], list),
            (set[Item], set),
            (dict[str, int], dict),
            (Sequence[Filter], Sequence),
            (SortBy[int], SortBy),
            (Any, object),
            (T, object),
            (UserId, int),
            (str, str),
        ],
    )
    def test_erases_to_checkable_type(self, hint: Any, expected: Any) -> None:
        assert resolver.erase(hint) is expected

    def test_bounded_type_variable_erases_to_bound(self) -> None:
        assert resolver.erase(TypeVar("B", bound=BarInput)) is BarInput

    def test_constrained_type_variable_erases_to_union(self) -> None:
        assert resolver.erase(S) == Union[int, str]  # noqa: UP007

    def test_union_erases_member_wise(self) -> None:
        assert resolver.erase(list[int] | None) == Union[list, None]  # noqa: UP007

    def test_union_with_any_is_object(self) -> None:
        assert resolver.erase(Union[int, Any]) is object  # noqa: UP007

    def test_literal_is_kept(self) -> None:
        hint = Literal["asc", "desc"]
        assert resolver.erase(hint) is hint


class TestBindingMap:
    """Tests for binding_map()."""

    def test_direct_binding(self) -> None:
        assert resolver.binding_map(MovieSortBy)[(SortBy, T)] is MovieSortByField

    def test_chained_binding(self) -> None:
        bindings = resolver.binding_map(Leaf)

        assert bindings[(Middle, U)] is MovieSortByField
        assert bindings[(Base, T)] is MovieSortByField

    def test_intermediate_class_leaves_variable_open(self) -> None:
        assert resolver.binding_map(Middle)[(Base, T)] is U

    def test_non_generic_class_has_no_bindings(self) -> None:
        assert dict(resolver.binding_map(BarInput)) == {}

    def test_nested_arguments_are_substituted(self) -> None:
        class Wrapper(Base[list[U]], Generic[U]):
            pass

        class Concrete(Wrapper[Item]):
            pass

        assert resolver.binding_map(Concrete)[(Base, T)] == list[Item]

    def test_map_is_memoized_and_read_only(self) -> None:
        first = resolver.binding_map(MovieSortBy)

        assert resolver.binding_map(MovieSortBy) is first
        with pytest.raises(TypeError):
            first[(SortBy, T)] = int  # type: ignore[index]

    def test_pydantic_generic_model(self) -> None:
        assert resolver.binding_map(PydanticMovieSortBy)[(PydanticSortBy, T)] is MovieSortByField


class TestEffectiveType:
    """Tests for effective_type() through the Accessor surface."""

    def test_resolves_chained_type_variable(self) -> None:
        accessor = Accessor(Leaf)

        assert accessor.get_property_type("value") is MovieSortByField
        assert accessor.get_raw_property_type("value") is object

    def test_substitutes_type_variable_inside_container(self) -> None:
        accessor = Accessor(Leaf)

        assert accessor.get_property_type("values") is MovieSortByField
        assert accessor.get_raw_property_type("values") is list

    def test_unbound_type_variable_falls_back_to_erasure(self) -> None:
        assert Accessor(SortBy).get_property_type("field") is object
        assert Accessor(Bounded).get_property_type("count") is int

    def test_optional_is_unwrapped(self) -> None:
        accessor = Accessor(HintVariety)

        assert accessor.get_property_type("maybe") is int
        assert accessor.get_property_type("maybe_bars") is BarInput
        assert accessor.get_raw_property_type("maybe_bars") is list

    def test_optional_kept_when_disabled(self) -> None:
        accessor = Accessor(HintVariety, config=BindingConfig(unwrap_optional=False))

        assert accessor.get_property_type("maybe") == Union[int, None]  # noqa: UP007

    def test_multi_argument_generic_falls_back_to_raw(self) -> None:
        accessor = Accessor(HintVariety)

        assert accessor.get_property_type("mapping") is dict
        assert accessor.get_raw_property_type("mapping") is dict

    def test_abstract_container(self) -> None:
        accessor = Accessor(HintVariety)

        assert accessor.get_property_type("sequence") is Filter
        assert accessor.get_raw_property_type("sequence") is Sequence

    def test_annotated_and_literal(self) -> None:
        accessor = Accessor(HintVariety)

        assert accessor.get_property_type("annotated") is Item
        assert accessor.get_raw_property_type("annotated") is list
        assert get_origin(accessor.get_property_type("mode")) is Literal
        assert get_args(accessor.get_raw_property_type("mode")) == ("asc", "desc")

    def test_any_is_object(self) -> None:
        assert Accessor(HintVariety).get_property_type("untyped") is object

    def test_pydantic_generic_model_field(self) -> None:
        assert Accessor(PydanticMovieSortBy).get_property_type("field") is MovieSortByField

    def test_effective_type_function(self) -> None:
        accessor = locator.locate(MovieSortBy, "field")

        assert accessor is not None
        assert resolver.effective_type(MovieSortBy, accessor) is MovieSortByField
        assert resolver.raw_type(accessor) is object
