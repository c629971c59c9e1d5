"""
Code generation from Elasticsearch index mappings.

The pipeline is: mapping document -> :func:`parse_mapping` -> Go struct
emission -> template rendering -> output file.
"""

from pathlib import Path
from typing import Any, Optional, Union

from ..logging_config import get_logger
from ..utils import load_json, write_text_atomic
from .core.config import (
    ConfigError,
    GeneratorConfig,
    GeneratorOptions,
    OverrideTables,
    load_config,
)
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import IndexMapping, MappingError, PropertyNode, parse_mapping
from .core.templates import TemplateError
from .languages.go import GoGenerator, create_go_generator

logger = get_logger(__name__)


def generate_from_mapping(
    document: Any, config: GeneratorConfig, source: str = "<mapping>"
) -> GenerationResult:
    """
    Generate Go code from an already parsed mapping document.

    Args:
        document: Mapping document (JSON object)
        config: Run configuration
        source: Description of the document origin, used in errors

    Returns:
        GenerationResult with generated code

    Raises:
        MappingError: If the document does not have the mapping shape
    """
    mapping = parse_mapping(document, source)
    generator = create_go_generator(config)
    return generate_code(generator, mapping)


def generate_datamodel(
    input_path: Optional[Union[str, Path]],
    output_path: Union[str, Path],
    package_name: str,
    struct_name: str,
    options: Optional[GeneratorOptions] = None,
    url: Optional[str] = None,
) -> GenerationResult:
    """
    Read a mapping, generate Go structs and write them to ``output_path``.

    Nothing is written unless every step succeeds.

    Args:
        input_path: Mapping JSON file (or None when ``url`` is given)
        output_path: Destination Go file
        package_name: Go package name
        struct_name: Root struct name
        options: Optional override documents and settings
        url: URL to fetch the mapping from instead of a file

    Returns:
        Successful GenerationResult

    Raises:
        JSONLoaderError: Input or override document unreadable
        ConfigError: Override document malformed
        MappingError: Mapping document malformed
        GeneratorError: Generation failed
        OutputWriteError: Output could not be written
    """
    config = load_config(package_name, struct_name, options)
    source, document = load_json(file_path=input_path, url=url)

    result = generate_from_mapping(document, config, source)
    if not result.success:
        raise GeneratorError(result.error_message) from result.exception

    write_text_atomic(output_path, result.code)
    logger.info(f"Generated Go struct for {source} and saved to {output_path}")
    result.metadata["output_path"] = str(output_path)
    return result


__all__ = [
    "CodeGenerator",
    "ConfigError",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorOptions",
    "GoGenerator",
    "IndexMapping",
    "MappingError",
    "OverrideTables",
    "PropertyNode",
    "TemplateError",
    "generate_code",
    "generate_datamodel",
    "generate_from_mapping",
    "load_config",
    "parse_mapping",
]
