"""
Core schema representation for code generation.

Converts an Elasticsearch mapping document into a read-only property tree
and defines the intermediate structures the emitters produce.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)

# Declared types whose fields carry a sub-mapping of their own
COMPOSITE_TYPES = frozenset({"object", "nested"})


class MappingError(Exception):
    """Raised when a mapping document does not have the expected shape."""

    pass


@dataclass(frozen=True)
class PropertyNode:
    """One field of an index mapping."""

    name: str
    declared_type: str
    children: Dict[str, "PropertyNode"] = field(default_factory=dict)

    @property
    def is_composite(self) -> bool:
        return self.declared_type in COMPOSITE_TYPES


@dataclass(frozen=True)
class IndexMapping:
    """Root properties of a parsed mapping document, in document order."""

    properties: Dict[str, PropertyNode] = field(default_factory=dict)

    def walk(self):
        """Yield ``(path, node)`` for every property, depth first."""
        stack: List[Tuple[str, PropertyNode]] = [
            (name, node) for name, node in reversed(list(self.properties.items()))
        ]
        while stack:
            path, node = stack.pop()
            yield path, node
            for child_name, child in reversed(list(node.children.items())):
                stack.append((f"{path}.{child_name}", child))


@dataclass(frozen=True)
class ResolvedField:
    """A field after naming and type resolution."""

    emitted_name: str
    emitted_type: Any  # language specific type descriptor
    source_key: str  # original mapping key, used as the wire name
    comment: Optional[str] = None


@dataclass
class StructDefinition:
    """A named struct with its fields and the nested structs it introduced."""

    name: str
    fields: List[ResolvedField] = field(default_factory=list)
    nested: List["StructDefinition"] = field(default_factory=list)

    def iter_definitions(self):
        """Yield this definition followed by nested ones in recursion order."""
        yield self
        for child in self.nested:
            yield from child.iter_definitions()


def parse_mapping(document: Any, source: str = "<mapping>") -> IndexMapping:
    """
    Convert a mapping document into an :class:`IndexMapping`.

    Accepts ``{"mappings": {"properties": {...}}}`` as well as the response
    of ``GET <index>/_mapping`` for a single index, which wraps that object
    under the index name.

    Args:
        document: Parsed JSON document
        source: Description of where the document came from, for errors

    Returns:
        IndexMapping with the root properties

    Raises:
        MappingError: If the document does not have the expected shape
    """
    if not isinstance(document, dict):
        raise MappingError(f"{source}: mapping document must be a JSON object")

    if "mappings" not in document and len(document) == 1:
        index_name, inner = next(iter(document.items()))
        if isinstance(inner, dict) and "mappings" in inner:
            logger.debug(f"Unwrapping _mapping response for index '{index_name}'")
            document = inner

    mappings = document.get("mappings")
    if not isinstance(mappings, dict):
        raise MappingError(f"{source}: missing 'mappings' object")

    properties = mappings.get("properties")
    if not isinstance(properties, dict):
        raise MappingError(f"{source}: missing 'mappings.properties' object")

    return IndexMapping(properties=_parse_properties(properties, source, "mappings"))


def _parse_properties(
    properties: Mapping[str, Any], source: str, path: str
) -> Dict[str, PropertyNode]:
    nodes = {}
    for name, descriptor in properties.items():
        nodes[name] = _parse_property(name, descriptor, source, f"{path}.{name}")
    return nodes


def _parse_property(name: str, descriptor: Any, source: str, path: str) -> PropertyNode:
    if not isinstance(descriptor, dict):
        raise MappingError(f"{source}: property '{path}' must be a JSON object")

    sub_properties = descriptor.get("properties")
    if sub_properties is not None and not isinstance(sub_properties, dict):
        raise MappingError(f"{source}: '{path}.properties' must be a JSON object")

    declared_type = descriptor.get("type")
    if declared_type is None:
        # Elasticsearch treats a typeless field with sub-properties as an object
        declared_type = "object" if sub_properties is not None else ""
    elif not isinstance(declared_type, str):
        raise MappingError(f"{source}: '{path}.type' must be a string")

    children = {}
    if declared_type in COMPOSITE_TYPES and sub_properties:
        children = _parse_properties(sub_properties, source, f"{path}.properties")

    return PropertyNode(name=name, declared_type=declared_type, children=children)
