"""
Core Models Package

Immutable, validated data models handed across collaborator boundaries.

All models in this package are frozen dataclasses, so they are safe to
share between the per-file worker threads of the layout stage.
"""

from .spans import DEFAULT_COLOR, DEFAULT_STYLE, TextStyle, StyleSpan, SourceLine
from .sources import SourceFile, CrateSource

__all__ = [
    "DEFAULT_COLOR",
    "DEFAULT_STYLE",
    "TextStyle",
    "StyleSpan",
    "SourceLine",
    "SourceFile",
    "CrateSource",
]
