"""
es2go - generate Go structs from Elasticsearch index mappings.
"""

__version__ = "0.1.0"

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    GeneratorOptions,
    generate_datamodel,
    generate_from_mapping,
    load_config,
)

__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorOptions",
    "generate_datamodel",
    "generate_from_mapping",
    "load_config",
    "__version__",
]
