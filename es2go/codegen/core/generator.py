"""
Base generator interface for all code generation targets.

Defines the contract that language generators implement and the
result container returned by :func:`generate_code`.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import IndexMapping
from .templates import TemplateError, TemplateRenderer

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: GeneratorConfig):
        """Initialize generator with its run configuration."""
        self.config = config

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.go')."""
        pass

    @abstractmethod
    def generate(self, mapping: IndexMapping) -> "GenerationResult":
        """
        Generate the complete output file for a mapping.

        Each call builds its own result; nothing about the run is kept on
        the generator.

        Args:
            mapping: Parsed index mapping

        Returns:
            GenerationResult with the code, run warnings and run metadata
        """
        pass

    @abstractmethod
    def select_renderer(self) -> TemplateRenderer:
        """Return the rendering strategy for the configured output."""
        pass

    def format_code(self, code: str) -> str:
        """
        Normalize whitespace of generated code.

        Strips trailing whitespace, keeps at most one blank line in a row
        and ends the file with exactly one newline.
        """
        formatted_lines = []
        blank_count = 0

        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, mapping: IndexMapping) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        mapping: Parsed index mapping

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        result = generator.generate(mapping)
    except (GeneratorError, TemplateError) as e:
        logger.error(f"Code generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "root_struct": generator.config.struct_name,
        "property_count": sum(1 for _ in mapping.walk()),
        "custom_template": generator.config.custom_template is not None,
    }
    metadata.update(result.metadata)
    result.metadata = metadata

    for warning in result.warnings:
        logger.info(f"Generation warning: {warning}")

    return result
