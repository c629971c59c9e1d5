"""
Language-specific code generators.
"""

from .go import GoGenerator

__all__ = ["GoGenerator"]
