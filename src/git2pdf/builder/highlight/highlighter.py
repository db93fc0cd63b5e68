"""
Module: builder.highlight.highlighter

Purpose:
    Turn file content into numbered, styled source lines. The layout
    engine consumes highlighting as a capability; the Pygments variant
    and the plain variant are interchangeable.

Key Classes:
    - Highlighter: Abstract base class for highlighters
    - PlainHighlighter: Every span in the default style
    - PygmentsHighlighter: Pygments lexers and styles

Key Functions:
    - split_lines(): Line splitting shared by all highlighters
    - create_highlighter(): Highlighter for a theme name

Dependencies:
    - pygments: Lexers and colour styles
    - git2pdf.core.models: SourceLine, StyleSpan, TextStyle

Used By:
    - builder.layout.composer: Per-file layout tasks
    - builder.controller: Highlighter selection
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from threading import Lock
from typing import Dict, List, Optional

from pygments.lexers import get_lexer_by_name, guess_lexer_for_filename
from pygments.lexers.special import TextLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from git2pdf.core.models import DEFAULT_COLOR, SourceLine, StyleSpan, TextStyle
from git2pdf.errors import HighlightFailure

logger = logging.getLogger(__name__)

THEME_NONE = "none"
DEFAULT_THEME = "default"

_BOM = "\ufeff"
_HEX = re.compile(r"^[0-9a-fA-F]{6}$")


def split_lines(content: str) -> List[str]:
    """
    Split content into logical lines.

    Windows and old-Mac line endings become newlines, leading byte
    order marks are dropped, and a trailing newline does not open an
    extra empty line.

    Example:
        >>> split_lines("a\\r\\nb\\n")
        ['a', 'b']
        >>> split_lines("")
        []
    """
    content = content.lstrip(_BOM)
    content = content.replace("\r\n", "\n").replace("\r", "\n")
    if not content:
        return []
    if content.endswith("\n"):
        content = content[:-1]
    return content.split("\n")


class Highlighter(ABC):
    """
    Abstract interface for syntax highlighting.

    Implementations must be deterministic: the same content, path and
    language always give the same lines.
    """

    name: str = "abstract"

    @abstractmethod
    def highlight(
        self,
        content: str,
        path: str,
        language: Optional[str] = None,
    ) -> List[SourceLine]:
        """
        Highlight one file.

        Args:
            content: Full file text
            path: File path (used to pick a lexer)
            language: Optional language hint

        Returns:
            SourceLines numbered contiguously from 1

        Raises:
            HighlightFailure: If tokenizing fails
        """


class PlainHighlighter(Highlighter):
    """Highlighter that leaves every span in the default style."""

    name = THEME_NONE

    def highlight(
        self,
        content: str,
        path: str,
        language: Optional[str] = None,
    ) -> List[SourceLine]:
        return [
            SourceLine(number, (StyleSpan(text),) if text else ())
            for number, text in enumerate(split_lines(content), start=1)
        ]


class PygmentsHighlighter(Highlighter):
    """
    Highlighter backed by Pygments.

    The lexer is chosen by language hint, then by filename, then falls
    back to plain text. Unknown theme names fall back to the default
    Pygments style.

    Example:
        >>> lines = PygmentsHighlighter("friendly").highlight("fn main() {}\\n", "main.rs")
        >>> lines[0].text
        'fn main() {}'
    """

    def __init__(self, theme: str = DEFAULT_THEME) -> None:
        try:
            self._style = get_style_by_name(theme)
            self.name = theme
        except ClassNotFound:
            logger.warning(f"Unknown theme {theme!r}, falling back to {DEFAULT_THEME!r}")
            self._style = get_style_by_name(DEFAULT_THEME)
            self.name = DEFAULT_THEME
        self._styles: Dict[object, TextStyle] = {}
        self._lock = Lock()

    def highlight(
        self,
        content: str,
        path: str,
        language: Optional[str] = None,
    ) -> List[SourceLine]:
        raw_lines = split_lines(content)
        if not raw_lines:
            return []
        text = "\n".join(raw_lines)

        try:
            lexer = self._lexer_for(path, text, language)
            tokens = list(lexer.get_tokens(text))
        except Exception as e:
            raise HighlightFailure(path, e) from e

        lines: List[List[StyleSpan]] = [[]]
        for token_type, value in tokens:
            style = self._style_for(token_type)
            parts = value.split("\n")
            for i, part in enumerate(parts):
                if i > 0:
                    lines.append([])
                if part:
                    lines[-1].append(StyleSpan(part, style))

        result = [
            SourceLine(number, tuple(spans))
            for number, spans in enumerate(lines, start=1)
        ]
        if [line.text for line in result] != raw_lines:
            raise HighlightFailure(path, ValueError("token stream does not reproduce the source"))

        logger.debug(f"Highlighted {path} with {type(lexer).__name__} ({len(result)} lines)")
        return result

    def _lexer_for(self, path: str, text: str, language: Optional[str]):
        options = {"stripnl": False, "ensurenl": False}
        if language:
            try:
                return get_lexer_by_name(language, **options)
            except ClassNotFound:
                logger.debug(f"No lexer named {language!r}; guessing from {path}")
        try:
            return guess_lexer_for_filename(path, text, **options)
        except ClassNotFound:
            return TextLexer(**options)

    def _style_for(self, token_type) -> TextStyle:
        cached = self._styles.get(token_type)
        if cached is not None:
            return cached

        token_style = self._style.style_for_token(token_type)
        color = token_style.get("color")
        style = TextStyle(
            color=f"#{color.lower()}" if color and _HEX.match(color) else DEFAULT_COLOR,
            bold=bool(token_style.get("bold")),
            italic=bool(token_style.get("italic")),
        )
        with self._lock:
            self._styles[token_type] = style
        return style


def create_highlighter(theme: Optional[str]) -> Highlighter:
    """
    Highlighter for a theme name.

    Args:
        theme: Pygments style name, or None / "none" for no highlighting

    Returns:
        PlainHighlighter or PygmentsHighlighter
    """
    if theme is None or theme.strip().lower() == THEME_NONE:
        return PlainHighlighter()
    return PygmentsHighlighter(theme)
