"""
Core code generation components.

Provides the data model, configuration, naming and template utilities
shared by the language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    COMPOSITE_TYPES,
    IndexMapping,
    MappingError,
    PropertyNode,
    ResolvedField,
    StructDefinition,
    parse_mapping,
)
from .naming import NameResolver, NamingCase, to_camel_case, to_pascal_case
from .config import (
    ConfigError,
    GeneratorConfig,
    GeneratorOptions,
    OverrideTables,
    load_config,
    load_override_tables,
)
from .templates import (
    BuiltinTemplateRenderer,
    CustomTemplateRenderer,
    TemplateBindings,
    TemplateEngine,
    TemplateError,
    TemplateRenderer,
)

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Mapping model
    "COMPOSITE_TYPES",
    "IndexMapping",
    "MappingError",
    "PropertyNode",
    "ResolvedField",
    "StructDefinition",
    "parse_mapping",
    # Naming utilities
    "NameResolver",
    "NamingCase",
    "to_camel_case",
    "to_pascal_case",
    # Configuration system
    "ConfigError",
    "GeneratorConfig",
    "GeneratorOptions",
    "OverrideTables",
    "load_config",
    "load_override_tables",
    # Template system
    "BuiltinTemplateRenderer",
    "CustomTemplateRenderer",
    "TemplateBindings",
    "TemplateEngine",
    "TemplateError",
    "TemplateRenderer",
]
