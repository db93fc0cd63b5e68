"""
Unit tests for the highlighters.
"""

import logging

import pytest

from git2pdf.builder.highlight import (
    PlainHighlighter,
    PygmentsHighlighter,
    create_highlighter,
    split_lines,
)
from git2pdf.core.models import DEFAULT_STYLE
from git2pdf.errors import HighlightFailure

PYTHON_SOURCE = 'def greet(name):\n    return "hi " + name  # say hi\n\n\tpass\n'


class TestSplitLines:
    """Tests for split_lines()."""

    @pytest.mark.parametrize(
        "content,expected",
        [
            ("", []),
            ("\n", [""]),
            ("a", ["a"]),
            ("a\n", ["a"]),
            ("a\n\n", ["a", ""]),
            ("a\r\nb\rc", ["a", "b", "c"]),
            ("\ufeffa\nb", ["a", "b"]),
            ("\ufeff\ufeffa\nb", ["a", "b"]),
        ],
    )
    def test_split_lines(self, content, expected):
        assert split_lines(content) == expected


class TestPlainHighlighter:

    def test_when_content_then_numbered_default_spans(self):
        lines = PlainHighlighter().highlight("a\n\nb\n", "x.txt")

        assert [l.number for l in lines] == [1, 2, 3]
        assert [l.text for l in lines] == ["a", "", "b"]
        assert lines[1].spans == ()
        assert all(s.style == DEFAULT_STYLE for l in lines for s in l.spans)


class TestPygmentsHighlighter:
    """Tests for PygmentsHighlighter."""

    def test_when_python_file_then_text_round_trips(self):
        lines = PygmentsHighlighter().highlight(PYTHON_SOURCE, "greet.py")

        assert [l.text for l in lines] == split_lines(PYTHON_SOURCE)
        assert [l.number for l in lines] == [1, 2, 3, 4]

    def test_when_python_keyword_then_styled(self):
        """The default style draws keywords bold and coloured."""
        lines = PygmentsHighlighter("default").highlight(PYTHON_SOURCE, "greet.py")

        keyword = next(s for s in lines[0].spans if s.text == "def")
        assert keyword.style.bold is True
        assert keyword.style.color != DEFAULT_STYLE.color

    def test_when_language_hint_then_used_over_filename(self):
        lines = PygmentsHighlighter().highlight("fn main() {}\n", "snippet.txt", language="rust")

        keyword = next(s for s in lines[0].spans if s.text == "fn")
        assert not keyword.style.is_default

    def test_when_unknown_extension_then_plain_text(self):
        lines = PygmentsHighlighter().highlight("just words\n", "NOTES.unknownext")

        assert lines[0].text == "just words"

    def test_when_same_input_then_deterministic(self):
        highlighter = PygmentsHighlighter()
        first = highlighter.highlight(PYTHON_SOURCE, "greet.py")
        second = highlighter.highlight(PYTHON_SOURCE, "greet.py")

        assert first == second

    def test_when_unknown_theme_then_falls_back_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            highlighter = PygmentsHighlighter("no-such-theme")

        assert highlighter.name == "default"
        assert any("no-such-theme" in r.message for r in caplog.records)

    def test_when_lexer_raises_then_highlight_failure(self, monkeypatch):
        highlighter = PygmentsHighlighter()

        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(highlighter, "_lexer_for", explode)

        with pytest.raises(HighlightFailure, match="boom") as exc_info:
            highlighter.highlight("x = 1\n", "a.py")
        assert exc_info.value.path == "a.py"

    def test_when_content_starts_with_repeated_bom_then_highlighted(self):
        """Every leading BOM is dropped before lexing, so lines still match."""
        lines = PygmentsHighlighter().highlight("\ufeff\ufeffdef f():\n    pass\n", "bom.py")

        assert [l.text for l in lines] == ["def f():", "    pass"]
        keyword = next(s for s in lines[0].spans if s.text == "def")
        assert not keyword.style.is_default

    def test_when_empty_content_then_no_lines(self):
        assert PygmentsHighlighter().highlight("", "a.py") == []


class TestCreateHighlighter:

    @pytest.mark.parametrize("theme", [None, "none", "NONE"])
    def test_when_theme_none_then_plain(self, theme):
        assert isinstance(create_highlighter(theme), PlainHighlighter)

    def test_when_named_theme_then_pygments(self):
        highlighter = create_highlighter("friendly")
        assert isinstance(highlighter, PygmentsHighlighter)
        assert highlighter.name == "friendly"
