"""Mapping document parsing tests."""

from __future__ import annotations

import pytest
from es2go.codegen.core.schema import MappingError, PropertyNode, parse_mapping


def test_parses_properties_in_document_order(cafe_mapping) -> None:
    mapping = parse_mapping(cafe_mapping)

    assert list(mapping.properties) == ["cafe_name", "average_rating", "menu_items"]
    menu_items = mapping.properties["menu_items"]
    assert menu_items.declared_type == "nested"
    assert menu_items.is_composite
    assert menu_items.children == {
        "item_name": PropertyNode(name="item_name", declared_type="text")
    }


def test_ignores_unrecognized_descriptor_keys() -> None:
    mapping = parse_mapping(
        {
            "mappings": {
                "properties": {
                    "title": {
                        "type": "text",
                        "analyzer": "kuromoji",
                        "fields": {"raw": {"type": "keyword", "ignore_above": 256}},
                    }
                }
            }
        }
    )

    title = mapping.properties["title"]
    assert title.declared_type == "text"
    assert title.children == {}


def test_drops_children_of_non_composite_types() -> None:
    mapping = parse_mapping(
        {
            "mappings": {
                "properties": {
                    "odd": {"type": "keyword", "properties": {"x": {"type": "text"}}}
                }
            }
        }
    )

    assert mapping.properties["odd"].children == {}
    assert not mapping.properties["odd"].is_composite


def test_typeless_field_with_properties_is_an_object() -> None:
    mapping = parse_mapping(
        {
            "mappings": {
                "properties": {
                    "owner": {"properties": {"name": {"type": "text"}}},
                    "blank": {},
                }
            }
        }
    )

    assert mapping.properties["owner"].declared_type == "object"
    assert "name" in mapping.properties["owner"].children
    assert mapping.properties["blank"].declared_type == ""


def test_unwraps_single_index_mapping_response(cafe_mapping) -> None:
    mapping = parse_mapping({"cafes": cafe_mapping})

    assert set(mapping.properties) == {"cafe_name", "average_rating", "menu_items"}


def test_walk_visits_every_property_depth_first(cafe_mapping) -> None:
    paths = [path for path, _ in parse_mapping(cafe_mapping).walk()]

    assert paths == [
        "cafe_name",
        "average_rating",
        "menu_items",
        "menu_items.item_name",
    ]


@pytest.mark.parametrize(
    ("document", "message"),
    [
        ([], "must be a JSON object"),
        ({"settings": {}}, "missing 'mappings' object"),
        ({"mappings": {"dynamic": "strict"}}, "missing 'mappings.properties'"),
        ({"mappings": {"properties": {"a": "text"}}}, "property 'mappings.a'"),
        ({"mappings": {"properties": {"a": {"type": 3}}}}, "'mappings.a.type'"),
        (
            {"mappings": {"properties": {"a": {"type": "object", "properties": []}}}},
            "'mappings.a.properties'",
        ),
    ],
)
def test_rejects_malformed_documents(document, message: str) -> None:
    with pytest.raises(MappingError, match=message) as excinfo:
        parse_mapping(document, source="cafe.json")

    assert "cafe.json" in str(excinfo.value)
