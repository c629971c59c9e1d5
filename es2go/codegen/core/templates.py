"""
Template engine wrapper for code generation.

Provides a small interface over Jinja2 plus the rendering strategies used
to turn emitted struct definitions into a complete output file.
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    TemplateError as JinjaError,
    Undefined,
)

from .naming import to_camel_case, to_pascal_case


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, strict_undefined: bool = False):
        """
        Initialize template engine.

        Templates are registered afterwards with :meth:`add_template`.

        Args:
            strict_undefined: Raise on variables the context does not define
        """
        self._env = Environment(
            loader=DictLoader({}),
            undefined=StrictUndefined if strict_undefined else Undefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        # Filters available to built-in and custom templates
        self._env.filters["camel_case"] = to_camel_case
        self._env.filters["pascal_case"] = to_pascal_case
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a registered template with the given context.

        Args:
            template_name: Name of the template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except JinjaError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """Add an in-memory template."""
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return template_name in self._env.loader.mapping

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


@dataclass(frozen=True)
class TemplateBindings:
    """Variables every file template receives."""

    package_name: str
    struct_name: str
    struct_definitions: str
    wrapper_name: Optional[str] = None
    imports: str = ""

    def as_context(self) -> Dict[str, Any]:
        context = asdict(self)
        context["wrapper_name"] = self.wrapper_name or ""
        return context


class TemplateRenderer(ABC):
    """Strategy that turns bindings into the final output text."""

    # Built-in output is whitespace-normalized, custom output is not
    normalize_output = False

    @abstractmethod
    def render(self, bindings: TemplateBindings) -> str:
        pass


class BuiltinTemplateRenderer(TemplateRenderer):
    """Renders one of the templates registered on an engine."""

    normalize_output = True

    def __init__(self, engine: TemplateEngine, template_name: str):
        if not engine.template_exists(template_name):
            raise TemplateError(f"Template {template_name} not found")
        self.engine = engine
        self.template_name = template_name

    def render(self, bindings: TemplateBindings) -> str:
        return self.engine.render_template(self.template_name, bindings.as_context())


class CustomTemplateRenderer(TemplateRenderer):
    """Renders caller supplied template text.

    Variables the template does not reference are simply left out of the
    output; referencing an unknown variable is a :class:`TemplateError`.
    """

    def __init__(self, template_text: str):
        self.template_text = template_text
        self.engine = TemplateEngine(strict_undefined=True)

    def render(self, bindings: TemplateBindings) -> str:
        return self.engine.render_string(self.template_text, bindings.as_context())
