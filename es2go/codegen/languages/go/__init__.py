"""
Go code generator module.

Generates Go structs with JSON tags from Elasticsearch index mappings.
"""

from .generator import GoGenerator, StructEmitter, create_go_generator
from .types import (
    DEFAULT_TYPE_MAPPING,
    SUPPORT_STRUCTS,
    GoType,
    GoTypeMapper,
    format_go_imports,
)

__all__ = [
    "GoGenerator",
    "StructEmitter",
    "create_go_generator",
    "GoType",
    "GoTypeMapper",
    "DEFAULT_TYPE_MAPPING",
    "SUPPORT_STRUCTS",
    "format_go_imports",
]
