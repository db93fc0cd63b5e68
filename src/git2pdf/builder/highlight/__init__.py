"""
Module: builder.highlight

Purpose:
    Syntax highlighting capability consumed by the layout stage.

Key Classes:
    - Highlighter: Abstract highlighter interface
    - PlainHighlighter: No styling
    - PygmentsHighlighter: Pygments-backed styling

Key Functions:
    - create_highlighter(): Pick a highlighter for a theme name
    - split_lines(): Shared line splitting
"""

from .highlighter import (
    DEFAULT_THEME,
    THEME_NONE,
    Highlighter,
    PlainHighlighter,
    PygmentsHighlighter,
    create_highlighter,
    split_lines,
)

__all__ = [
    "DEFAULT_THEME",
    "THEME_NONE",
    "Highlighter",
    "PlainHighlighter",
    "PygmentsHighlighter",
    "create_highlighter",
    "split_lines",
]
