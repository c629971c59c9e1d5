"""
Naming utilities for code generation.

Turns mapping field names into target-language identifiers, honouring a
per-field exception table before falling back to case conversion.
"""

from enum import Enum
from typing import Mapping, Optional


class NamingCase(Enum):
    """Identifier case styles."""

    PASCAL_CASE = "pascal"  # UserName
    CAMEL_CASE = "camel"  # userName


def _segments(name: str) -> list[str]:
    # Consecutive, leading and trailing underscores yield no segment
    return [part for part in name.split("_") if part]


def to_pascal_case(name: str) -> str:
    """Convert ``user_name`` to ``UserName``."""
    return "".join(part.capitalize() for part in _segments(name))


def to_camel_case(name: str) -> str:
    """Convert ``user_name`` to ``userName``."""
    parts = _segments(name)
    if not parts:
        return ""
    return parts[0].lower() + "".join(part.capitalize() for part in parts[1:])


class NameResolver:
    """Resolves mapping field names to identifiers."""

    def __init__(self, exceptions: Optional[Mapping[str, str]] = None):
        """
        Initialize name resolver.

        Args:
            exceptions: Source field name -> identifier, used verbatim
        """
        self.exceptions = exceptions or {}

    def resolve(
        self, source_name: str, target_case: NamingCase = NamingCase.PASCAL_CASE
    ) -> str:
        """
        Resolve the identifier for a source field name.

        Args:
            source_name: Field name as it appears in the mapping
            target_case: Case style used when no exception applies

        Returns:
            Identifier for the generated code
        """
        if source_name in self.exceptions:
            return self.exceptions[source_name]

        if target_case == NamingCase.CAMEL_CASE:
            return to_camel_case(source_name)
        return to_pascal_case(source_name)
