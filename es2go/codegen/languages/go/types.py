"""
Go-specific type system for code generation.

Maps Elasticsearch declared types to Go types, honouring user type
mappings and per-field type exceptions.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Set, Tuple

from ...core.config import OverrideTables
from ...core.naming import to_pascal_case
from ...core.schema import PropertyNode, ResolvedField, StructDefinition

DEFAULT_TYPE_MAPPING: Dict[str, str] = {
    "integer": "*uint64",
    "float": "*float64",
    "boolean": "bool",
    "text": "*string",
    "keyword": "*string",
    "date": "*time.Time",
    "geo_point": "*GeoPoint",
    "object": "*map[string]interface{}",
    "nested": "[]interface{}",
}

# Package qualifier -> import path
KNOWN_IMPORTS: Dict[str, str] = {
    "time": "time",
    "json": "encoding/json",
    "big": "math/big",
    "sql": "database/sql",
}

_QUALIFIED_NAME = re.compile(r"\b([a-z][a-z0-9]*)\.[A-Z]\w*")


@dataclass(frozen=True)
class GoType:
    """
    Immutable representation of a Go type.

    ``name`` is the text written into the struct; ``base_name`` is the
    same type with every leading pointer and slice decoration removed.
    """

    name: str
    base_name: str = field(default="")
    is_pointer: bool = field(default=False)
    is_slice: bool = field(default=False)
    packages: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.base_name:
            object.__setattr__(self, "base_name", _strip_decorations(self.name))

    @classmethod
    def parse(cls, text: str) -> "GoType":
        """Build a GoType from a type string such as ``*Foo`` or ``[]time.Time``."""
        stripped = text.strip()
        return cls(
            name=text,
            base_name=_strip_decorations(stripped),
            is_pointer=stripped.startswith("*"),
            is_slice=stripped.startswith("[]"),
            packages=frozenset(_QUALIFIED_NAME.findall(stripped)),
        )

    @classmethod
    def struct_ref(cls, struct_name: str) -> "GoType":
        """Plain reference to a generated struct."""
        return cls(name=struct_name, base_name=struct_name)

    @property
    def is_struct_name(self) -> bool:
        """Whether the base name could name a struct declared in this file."""
        return self.base_name.isidentifier()

    @property
    def imports_needed(self) -> Set[str]:
        return {f'"{KNOWN_IMPORTS[p]}"' for p in self.packages if p in KNOWN_IMPORTS}

    @property
    def unknown_packages(self) -> Set[str]:
        return {p for p in self.packages if p not in KNOWN_IMPORTS}

    def as_pointer(self) -> "GoType":
        """Return a pointer version of this type."""
        if self.is_pointer:
            return self
        return replace(self, name=f"*{self.name}", is_pointer=True, is_slice=False)

    def as_slice(self) -> "GoType":
        """Return a slice of this type."""
        return replace(self, name=f"[]{self.name}", is_pointer=False, is_slice=True)

    def __str__(self) -> str:
        return self.name


def _strip_decorations(text: str) -> str:
    while True:
        if text.startswith("*"):
            text = text[1:]
        elif text.startswith("[]"):
            text = text[2:]
        else:
            return text


# Helper structs referenced by the default type table
SUPPORT_STRUCTS: Dict[str, StructDefinition] = {
    "GeoPoint": StructDefinition(
        name="GeoPoint",
        fields=[
            ResolvedField("Lat", GoType.parse("float64"), "lat"),
            ResolvedField("Lon", GoType.parse("float64"), "lon"),
        ],
    ),
}


class GoTypeMapper:
    """
    Resolves the Go type of each mapping field.

    Lookup order: per-field type exception, then the declared type in the
    type mapping (user entries over defaults), then the unknown type.
    """

    def __init__(
        self,
        overrides: Optional[OverrideTables] = None,
        unknown_type: str = "interface{}",
        nested_as_slice: bool = False,
    ):
        overrides = overrides or OverrideTables()
        self.type_mapping: Mapping[str, str] = {
            **DEFAULT_TYPE_MAPPING,
            **overrides.type_mapping,
        }
        self.type_exceptions = overrides.type_exceptions
        self.unknown_type = GoType.parse(unknown_type)
        self.nested_as_slice = nested_as_slice

    def is_known(self, declared_type: str) -> bool:
        return declared_type in self.type_mapping

    def resolve(self, declared_type: str, field_name: str) -> GoType:
        """
        Resolve the Go type for a scalar field.

        Args:
            declared_type: Type tag from the mapping
            field_name: Source field name, used for type exceptions

        Returns:
            Resolved GoType; unknown declared types fall back to the unknown type
        """
        if field_name in self.type_exceptions:
            return GoType.parse(self.type_exceptions[field_name])

        if declared_type in self.type_mapping:
            return GoType.parse(self.type_mapping[declared_type])

        return self.unknown_type

    def resolve_composite(
        self, node: PropertyNode, fallback_name: str = ""
    ) -> Tuple[GoType, Optional[str]]:
        """
        Resolve the field type of an object/nested field and the struct it needs.

        A type exception names the struct through its base name (``*Foo`` and
        ``[]Foo`` both generate ``Foo``). Without one the struct is named
        after the field, or ``fallback_name`` when the field name has no
        segments (``"_"``).

        Returns:
            Tuple of (field type, struct name to emit or None)
        """
        if node.name in self.type_exceptions:
            hint = GoType.parse(self.type_exceptions[node.name])
            if hint.is_struct_name:
                return hint, hint.base_name
            return hint, None

        struct_name = to_pascal_case(node.name) or fallback_name
        if not struct_name:
            return self.unknown_type, None

        ref = GoType.struct_ref(struct_name)
        if node.declared_type == "nested" and self.nested_as_slice:
            return ref.as_slice(), struct_name
        return ref.as_pointer(), struct_name


def get_all_imports(types: Iterable[GoType]) -> Set[str]:
    """Extract all unique imports needed for a list of types."""
    imports = set()
    for go_type in types:
        imports.update(go_type.imports_needed)
    return imports


def format_go_imports(imports: Iterable[str]) -> str:
    """Format import statements for Go."""
    imports = sorted(imports)
    if not imports:
        return ""

    if len(imports) == 1:
        return f"import {imports[0]}"

    lines = ["import ("]
    for imp in imports:
        lines.append(f"\t{imp}")
    lines.append(")")
    return "\n".join(lines)
