"""
Configuration management for code generation.

Holds the immutable per-run configuration (names, override tables, output
options) and loads the optional override documents from JSON files.
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from ...logging_config import get_logger
from ...utils import load_json_from_file, read_text_file

logger = get_logger(__name__)

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass(frozen=True)
class OverrideTables:
    """User supplied override tables, read-only for the duration of a run."""

    type_mapping: Mapping[str, str] = field(default_factory=dict)
    field_name_exceptions: Mapping[str, str] = field(default_factory=dict)
    type_exceptions: Mapping[str, str] = field(default_factory=dict)
    skip_fields: FrozenSet[str] = frozenset()
    field_comments: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        for name in (
            "type_mapping",
            "field_name_exceptions",
            "type_exceptions",
            "field_comments",
        ):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        object.__setattr__(self, "skip_fields", frozenset(self.skip_fields))


@dataclass(frozen=True)
class GeneratorConfig:
    """Complete configuration for one generation run."""

    package_name: str
    struct_name: str
    wrapper_name: Optional[str] = None
    overrides: OverrideTables = field(default_factory=OverrideTables)

    # Type handling
    unknown_type: str = "interface{}"
    nested_as_slice: bool = False
    emit_support_types: bool = True

    # Fail on same-named structs of different shape instead of keeping the first
    strict_collisions: bool = False

    # Replaces the built-in file templates when set
    custom_template: Optional[str] = None

    def __post_init__(self):
        if not self.package_name:
            raise ConfigError("package_name must not be empty")
        if not self.struct_name:
            raise ConfigError("struct_name must not be empty")


@dataclass(frozen=True)
class GeneratorOptions:
    """Optional inputs of a generation run, given as file paths."""

    wrapper_name: Optional[str] = None
    type_mapping_path: Optional[PathLike] = None
    exception_field_path: Optional[PathLike] = None
    exception_type_path: Optional[PathLike] = None
    skip_field_path: Optional[PathLike] = None
    field_comment_path: Optional[PathLike] = None
    template_path: Optional[PathLike] = None
    unknown_type: str = "interface{}"
    nested_as_slice: bool = False
    emit_support_types: bool = True
    strict_collisions: bool = False


def _load_object(path: PathLike, description: str) -> Dict[str, Any]:
    """Load a JSON document that must be a flat object."""
    _, document = load_json_from_file(path)
    if not isinstance(document, dict):
        raise ConfigError(f"{description} file must contain a JSON object: {path}")
    return document


def load_string_table(path: PathLike, description: str) -> Dict[str, str]:
    """
    Load a flat ``name -> string`` override document.

    Raises:
        ConfigError: If a value is not a string
    """
    table = _load_object(path, description)
    for key, value in table.items():
        if not isinstance(value, str):
            raise ConfigError(
                f"{description} file {path}: value for '{key}' must be a string, "
                f"got {type(value).__name__}"
            )
    logger.info(f"Loaded {len(table)} {description} entries from {path}")
    return table


def load_skip_fields(path: PathLike) -> FrozenSet[str]:
    """
    Load a ``name -> bool`` skip document; only ``true`` entries are skipped.

    Raises:
        ConfigError: If a value is not a boolean
    """
    table = _load_object(path, "skip fields")
    skipped = set()
    for key, value in table.items():
        if not isinstance(value, bool):
            raise ConfigError(
                f"skip fields file {path}: value for '{key}' must be a boolean, "
                f"got {type(value).__name__}"
            )
        if value:
            skipped.add(key)
    logger.info(f"Loaded {len(skipped)} skipped fields from {path}")
    return frozenset(skipped)


def load_override_tables(
    type_mapping_path: Optional[PathLike] = None,
    exception_field_path: Optional[PathLike] = None,
    exception_type_path: Optional[PathLike] = None,
    skip_field_path: Optional[PathLike] = None,
    field_comment_path: Optional[PathLike] = None,
) -> OverrideTables:
    """Load every override document that was given; absent ones stay empty."""
    return OverrideTables(
        type_mapping=(
            load_string_table(type_mapping_path, "type mapping")
            if type_mapping_path
            else {}
        ),
        field_name_exceptions=(
            load_string_table(exception_field_path, "field exception")
            if exception_field_path
            else {}
        ),
        type_exceptions=(
            load_string_table(exception_type_path, "type exception")
            if exception_type_path
            else {}
        ),
        skip_fields=load_skip_fields(skip_field_path) if skip_field_path else frozenset(),
        field_comments=(
            load_string_table(field_comment_path, "field comment")
            if field_comment_path
            else {}
        ),
    )


def load_config(
    package_name: str,
    struct_name: str,
    options: Optional[GeneratorOptions] = None,
) -> GeneratorConfig:
    """
    Build the run configuration, reading every referenced document.

    Args:
        package_name: Go package of the generated file
        struct_name: Name of the root struct
        options: Optional paths and settings

    Returns:
        Immutable configuration for one run
    """
    options = options or GeneratorOptions()

    overrides = load_override_tables(
        type_mapping_path=options.type_mapping_path,
        exception_field_path=options.exception_field_path,
        exception_type_path=options.exception_type_path,
        skip_field_path=options.skip_field_path,
        field_comment_path=options.field_comment_path,
    )

    custom_template = None
    if options.template_path:
        custom_template = read_text_file(options.template_path)
        logger.info(f"Using custom template {options.template_path}")

    return GeneratorConfig(
        package_name=package_name,
        struct_name=struct_name,
        wrapper_name=options.wrapper_name or None,
        overrides=overrides,
        unknown_type=options.unknown_type,
        nested_as_slice=options.nested_as_slice,
        emit_support_types=options.emit_support_types,
        strict_collisions=options.strict_collisions,
        custom_template=custom_template,
    )
