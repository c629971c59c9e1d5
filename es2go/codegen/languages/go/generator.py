"""
Go code generator implementation.

Generates Go structs with JSON tags from an Elasticsearch index mapping.
"""

from typing import Any, Dict, List, Mapping, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator, GenerationResult, GeneratorError
from ...core.naming import NameResolver
from ...core.schema import IndexMapping, PropertyNode, ResolvedField, StructDefinition
from ...core.templates import (
    BuiltinTemplateRenderer,
    CustomTemplateRenderer,
    TemplateBindings,
    TemplateEngine,
    TemplateRenderer,
)
from .templates import create_go_template_engine
from .types import (
    SUPPORT_STRUCTS,
    GoType,
    GoTypeMapper,
    format_go_imports,
    get_all_imports,
)

logger = get_logger(__name__)


class StructEmitter:
    """
    Walks a property tree and emits Go struct definitions.

    One emitter serves one generation run: its registry remembers every
    struct name already emitted so that repeated or recursive sub-mappings
    produce a single definition. The first definition of a name wins.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        type_mapper: GoTypeMapper,
        name_resolver: NameResolver,
        template_engine: TemplateEngine,
    ):
        self.config = config
        self.overrides = config.overrides
        self.type_mapper = type_mapper
        self.name_resolver = name_resolver
        self.template_engine = template_engine

        # struct name -> properties it was first emitted from
        self.registry: Dict[str, Mapping[str, PropertyNode]] = {}
        self.types_used: List[GoType] = []
        self.warnings: List[str] = []
        self.collisions = 0

    def emit(self, struct_name: str, properties: Mapping[str, PropertyNode]) -> str:
        """
        Emit a struct and every nested struct it introduces.

        Args:
            struct_name: Name of the struct to emit
            properties: Fields of the struct

        Returns:
            Struct definitions text; empty if the name was already emitted
        """
        definition = self.build(struct_name, properties)
        if definition is None:
            return ""
        return "".join(
            self.render_struct(item) for item in definition.iter_definitions()
        )

    def build(
        self,
        struct_name: str,
        properties: Mapping[str, PropertyNode],
        path: str = "",
    ) -> Optional[StructDefinition]:
        """Resolve the fields of a struct, recursing into composite fields."""
        if struct_name in self.registry:
            self._handle_repeat(struct_name, properties, path)
            return None

        # Register before recursing so self-similar mappings terminate
        self.registry[struct_name] = properties
        logger.debug(f"Emitting struct {struct_name} ({len(properties)} properties)")

        definition = StructDefinition(name=struct_name)

        for name, node in properties.items():
            if name in self.overrides.skip_fields:
                logger.debug(f"Skipping field {path or struct_name}.{name}")
                continue

            field_path = f"{path}.{name}" if path else name
            emitted_name = self.name_resolver.resolve(name)

            if not emitted_name:
                self.warnings.append(
                    f"Field {field_path} has no usable Go name and was skipped; "
                    f"add it to the field exceptions to keep it"
                )
                continue

            if node.is_composite:
                go_type, nested_name = self.type_mapper.resolve_composite(
                    node, fallback_name=emitted_name
                )
                if nested_name is not None:
                    nested = self.build(nested_name, node.children, field_path)
                    if nested is not None:
                        definition.nested.append(nested)
            else:
                go_type = self._resolve_scalar(node, field_path)

            self.types_used.append(go_type)
            definition.fields.append(
                ResolvedField(
                    emitted_name=emitted_name,
                    emitted_type=go_type,
                    source_key=name,
                    comment=self.overrides.field_comments.get(name),
                )
            )

        definition.fields.sort(key=lambda f: f.emitted_name)
        return definition

    def emit_support_structs(self) -> str:
        """Emit helper structs referenced by emitted fields but not yet defined."""
        parts = []
        for go_type in self.types_used:
            name = go_type.base_name
            if name in SUPPORT_STRUCTS and name not in self.registry:
                self.registry[name] = {}
                logger.debug(f"Adding support struct {name}")
                parts.append(self.render_struct(SUPPORT_STRUCTS[name]))
        return "".join(parts)

    def render_struct(self, definition: StructDefinition) -> str:
        """Render one struct block without its nested structs."""
        fields = [
            {
                "name": f.emitted_name,
                "type": str(f.emitted_type),
                "json_name": f.source_key,
                "comment": f.comment,
            }
            for f in definition.fields
        ]
        return self.template_engine.render_template(
            "struct.go.j2", {"struct_name": definition.name, "fields": fields}
        )

    def _resolve_scalar(self, node: PropertyNode, field_path: str) -> GoType:
        go_type = self.type_mapper.resolve(node.declared_type, node.name)

        if node.name not in self.type_mapper.type_exceptions and not (
            self.type_mapper.is_known(node.declared_type)
        ):
            if node.declared_type:
                self.warnings.append(
                    f"Unknown type '{node.declared_type}' for field {field_path}, "
                    f"using {go_type}"
                )
            else:
                self.warnings.append(
                    f"Field {field_path} has no type, using {go_type}"
                )
        return go_type

    def _handle_repeat(
        self, struct_name: str, properties: Mapping[str, PropertyNode], path: str
    ):
        if self.registry[struct_name] == properties:
            logger.debug(f"Struct {struct_name} already emitted, reused for {path}")
            return

        message = (
            f"Struct {struct_name} is already defined with a different shape; "
            f"the definition for {path or struct_name} was dropped"
        )
        if self.config.strict_collisions:
            raise GeneratorError(message)

        self.collisions += 1
        self.warnings.append(message)


class GoGenerator(CodeGenerator):
    """Code generator for Go structs with JSON tags."""

    def __init__(self, config: GeneratorConfig):
        """Initialize Go generator with configuration."""
        super().__init__(config)

        self.template_engine = create_go_template_engine()
        self.type_mapper = GoTypeMapper(
            config.overrides,
            unknown_type=config.unknown_type,
            nested_as_slice=config.nested_as_slice,
        )
        self.name_resolver = NameResolver(config.overrides.field_name_exceptions)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def select_renderer(self) -> TemplateRenderer:
        """Pick the custom template, or the built-in one matching the wrapper setting."""
        if self.config.custom_template is not None:
            return CustomTemplateRenderer(self.config.custom_template)
        if self.config.wrapper_name:
            return BuiltinTemplateRenderer(
                self.template_engine, "file_with_wrapper.go.j2"
            )
        return BuiltinTemplateRenderer(self.template_engine, "file.go.j2")

    def create_emitter(self) -> StructEmitter:
        """Create a fresh emitter, and with it a fresh registry, for one run."""
        return StructEmitter(
            self.config, self.type_mapper, self.name_resolver, self.template_engine
        )

    def generate(self, mapping: IndexMapping) -> GenerationResult:
        """Generate the complete Go file for a mapping."""
        emitter = self.create_emitter()

        struct_definitions = emitter.emit(self.config.struct_name, mapping.properties)
        if self.config.emit_support_types:
            struct_definitions += emitter.emit_support_structs()

        warnings = list(emitter.warnings)
        for go_type in emitter.types_used:
            for package in sorted(go_type.unknown_packages):
                warning = f"No known import for package '{package}' used by {go_type}"
                if warning not in warnings:
                    warnings.append(warning)

        imports = sorted(get_all_imports(emitter.types_used))

        bindings = TemplateBindings(
            package_name=self.config.package_name,
            struct_name=self.config.struct_name,
            struct_definitions=struct_definitions,
            wrapper_name=self.config.wrapper_name,
            imports=format_go_imports(imports),
        )
        renderer = self.select_renderer()
        code = renderer.render(bindings)

        if renderer.normalize_output:
            code = self.format_code(code)
        return GenerationResult(code, warnings, self._build_metadata(emitter, imports))

    def _build_metadata(self, emitter: StructEmitter, imports: List[str]) -> Dict[str, Any]:
        return {
            "struct_count": len(emitter.registry),
            "field_count": len(emitter.types_used),
            "collisions": emitter.collisions,
            "imports": imports,
            "wrapper": self.config.wrapper_name,
        }


def create_go_generator(config: GeneratorConfig) -> GoGenerator:
    """Create a Go generator for a run configuration."""
    return GoGenerator(config)
