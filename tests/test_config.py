"""Override document loading tests."""

from __future__ import annotations

import pytest
from es2go.codegen.core.config import (
    ConfigError,
    GeneratorOptions,
    load_config,
    load_override_tables,
    load_skip_fields,
    load_string_table,
)
from es2go.utils import JSONLoaderError


def test_load_string_table(write_json) -> None:
    path = write_json("fields.json", {"cafe_name": "Title", "id": "ID"})

    assert load_string_table(path, "field exception") == {
        "cafe_name": "Title",
        "id": "ID",
    }


def test_string_table_rejects_non_string_values(write_json) -> None:
    path = write_json("fields.json", {"cafe_name": 1})

    with pytest.raises(ConfigError, match="'cafe_name' must be a string"):
        load_string_table(path, "field exception")


def test_string_table_rejects_non_objects(write_json) -> None:
    path = write_json("fields.json", ["cafe_name"])

    with pytest.raises(ConfigError, match="must contain a JSON object"):
        load_string_table(path, "field exception")


def test_skip_fields_keeps_only_true_entries(write_json) -> None:
    path = write_json("skip.json", {"average_rating": True, "cafe_name": False})

    assert load_skip_fields(path) == frozenset({"average_rating"})


def test_skip_fields_rejects_non_boolean(write_json) -> None:
    path = write_json("skip.json", {"average_rating": "yes"})

    with pytest.raises(ConfigError, match="must be a boolean"):
        load_skip_fields(path)


def test_missing_override_file_is_a_load_error(tmp_path) -> None:
    with pytest.raises(JSONLoaderError, match="File not found"):
        load_override_tables(type_mapping_path=tmp_path / "nope.json")


def test_absent_overrides_are_empty() -> None:
    tables = load_override_tables()

    assert dict(tables.type_mapping) == {}
    assert tables.skip_fields == frozenset()


def test_override_tables_are_read_only(write_json) -> None:
    tables = load_override_tables(
        field_comment_path=write_json("comments.json", {"a": "b"})
    )

    with pytest.raises(TypeError):
        tables.field_comments["a"] = "c"


def test_load_config_reads_every_document(write_json, tmp_path) -> None:
    template = tmp_path / "custom.go.j2"
    template.write_text("package {{ package_name }}\n", encoding="utf-8")

    config = load_config(
        "searchmodel",
        "CafeDoc",
        GeneratorOptions(
            wrapper_name="CafeDocWrapper",
            type_mapping_path=write_json("types.json", {"float": "float32"}),
            exception_field_path=write_json("fields.json", {"cafe_name": "Title"}),
            exception_type_path=write_json("etypes.json", {"menu_items": "[]MenuItem"}),
            skip_field_path=write_json("skip.json", {"average_rating": True}),
            field_comment_path=write_json("comments.json", {"cafe_name": "display"}),
            template_path=template,
            nested_as_slice=True,
        ),
    )

    assert config.wrapper_name == "CafeDocWrapper"
    assert config.overrides.type_mapping["float"] == "float32"
    assert config.overrides.field_name_exceptions["cafe_name"] == "Title"
    assert config.overrides.type_exceptions["menu_items"] == "[]MenuItem"
    assert "average_rating" in config.overrides.skip_fields
    assert config.overrides.field_comments["cafe_name"] == "display"
    assert config.custom_template == "package {{ package_name }}\n"
    assert config.nested_as_slice


def test_load_config_treats_empty_wrapper_as_absent() -> None:
    config = load_config("searchmodel", "CafeDoc", GeneratorOptions(wrapper_name=""))

    assert config.wrapper_name is None


def test_load_config_rejects_empty_struct_name() -> None:
    with pytest.raises(ConfigError, match="struct_name"):
        load_config("searchmodel", "")
