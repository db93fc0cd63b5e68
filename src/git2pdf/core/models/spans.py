"""
Module: spans

Purpose:
    Styled text produced by the highlighter. A SourceLine is the ordered
    list of StyleSpans for one logical line of a file, numbered from 1.

Key Classes:
    - TextStyle: (color, bold, italic) triple
    - StyleSpan: Run of characters sharing one TextStyle
    - SourceLine: Numbered sequence of StyleSpans

Dependencies:
    - dataclasses (std)

Used By:
    - builder.highlight: Produces SourceLines
    - builder.layout.line_breaker: Consumes SourceLines
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Tuple

DEFAULT_COLOR = "#000000"

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True, slots=True)
class TextStyle:
    """
    Foreground colour plus bold/italic bits.

    Attributes:
        color: Hex colour string "#rrggbb"
        bold: Bold weight
        italic: Italic slant

    Example:
        >>> TextStyle("#a31515", bold=True).is_default
        False
    """

    color: str = DEFAULT_COLOR
    bold: bool = False
    italic: bool = False

    def __post_init__(self) -> None:
        if not _HEX_COLOR.match(self.color):
            raise ValueError(f"color must be '#rrggbb': {self.color!r}")

    @property
    def is_default(self) -> bool:
        """True for the unstyled default."""
        return self == DEFAULT_STYLE


DEFAULT_STYLE = TextStyle()


@dataclass(frozen=True, slots=True)
class StyleSpan:
    """A run of characters sharing one style."""

    text: str
    style: TextStyle = DEFAULT_STYLE


@dataclass(frozen=True, slots=True)
class SourceLine:
    """
    One logical line of a file.

    Attributes:
        number: 1-based line number within the file
        spans: Ordered StyleSpans (may be empty for a blank line)
    """

    number: int
    spans: Tuple[StyleSpan, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"line number must be >= 1: {self.number}")

    @property
    def text(self) -> str:
        """Concatenated text of all spans."""
        return "".join(span.text for span in self.spans)

    @property
    def is_empty(self) -> bool:
        return not any(span.text for span in self.spans)
