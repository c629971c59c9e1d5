"""Go type resolution tests."""

from __future__ import annotations

import pytest
from es2go.codegen.core.config import OverrideTables
from es2go.codegen.core.schema import PropertyNode
from es2go.codegen.languages.go.types import (
    DEFAULT_TYPE_MAPPING,
    GoType,
    GoTypeMapper,
    format_go_imports,
)


@pytest.mark.parametrize(
    ("text", "base", "pointer", "slice_"),
    [
        ("*Foo", "Foo", True, False),
        ("[]Foo", "Foo", False, True),
        ("[]*Foo", "Foo", False, True),
        ("Foo", "Foo", False, False),
        ("*map[string]interface{}", "map[string]interface{}", True, False),
    ],
)
def test_parse_strips_decorations(text: str, base: str, pointer: bool, slice_: bool) -> None:
    go_type = GoType.parse(text)

    assert go_type.name == text
    assert go_type.base_name == base
    assert go_type.is_pointer is pointer
    assert go_type.is_slice is slice_


def test_qualified_types_need_imports() -> None:
    assert GoType.parse("*time.Time").imports_needed == {'"time"'}
    assert GoType.parse("json.RawMessage").imports_needed == {'"encoding/json"'}
    assert GoType.parse("*decimal.Decimal").unknown_packages == {"decimal"}
    assert GoType.parse("*string").packages == frozenset()


def test_pointer_and_slice_wrapping() -> None:
    ref = GoType.struct_ref("MenuItems")

    assert ref.as_pointer().name == "*MenuItems"
    assert ref.as_pointer().as_pointer().name == "*MenuItems"
    assert ref.as_slice().name == "[]MenuItems"
    assert ref.as_slice().base_name == "MenuItems"


@pytest.mark.parametrize(("declared", "expected"), sorted(DEFAULT_TYPE_MAPPING.items()))
def test_default_mapping(declared: str, expected: str) -> None:
    assert GoTypeMapper().resolve(declared, "field").name == expected


def test_unknown_type_falls_back() -> None:
    assert GoTypeMapper().resolve("dense_vector", "embedding").name == "interface{}"
    assert GoTypeMapper(unknown_type="any").resolve("", "blank").name == "any"


def test_type_exception_wins_over_mapping() -> None:
    mapper = GoTypeMapper(
        OverrideTables(
            type_mapping={"text": "string"},
            type_exceptions={"cafe_name": "CafeTitle"},
        )
    )

    assert mapper.resolve("text", "cafe_name").name == "CafeTitle"
    assert mapper.resolve("text", "street").name == "string"


def test_user_mapping_overlays_defaults() -> None:
    mapper = GoTypeMapper(OverrideTables(type_mapping={"integer": "*int64"}))

    assert mapper.resolve("integer", "count").name == "*int64"
    assert mapper.resolve("keyword", "tag").name == "*string"


def test_composite_defaults_to_pointer_named_after_field() -> None:
    node = PropertyNode("menu_items", "nested", {"a": PropertyNode("a", "text")})

    go_type, struct_name = GoTypeMapper().resolve_composite(node)
    assert (go_type.name, struct_name) == ("*MenuItems", "MenuItems")

    go_type, struct_name = GoTypeMapper(nested_as_slice=True).resolve_composite(node)
    assert (go_type.name, struct_name) == ("[]MenuItems", "MenuItems")


def test_composite_type_exception_names_the_struct() -> None:
    mapper = GoTypeMapper(
        OverrideTables(
            type_exceptions={"menu_items": "[]MenuItem", "extra": "map[string]any"}
        )
    )

    go_type, struct_name = mapper.resolve_composite(PropertyNode("menu_items", "nested"))
    assert (go_type.name, struct_name) == ("[]MenuItem", "MenuItem")

    go_type, struct_name = mapper.resolve_composite(PropertyNode("extra", "object"))
    assert (go_type.name, struct_name) == ("map[string]any", None)


def test_format_go_imports() -> None:
    assert format_go_imports([]) == ""
    assert format_go_imports(['"time"']) == 'import "time"'
    assert format_go_imports(['"time"', '"encoding/json"']) == (
        'import (\n\t"encoding/json"\n\t"time"\n)'
    )
