"""
Unit Tests for Core Models

Tests for TextStyle, StyleSpan, SourceLine, SourceFile and CrateSource.
"""

import pytest

from git2pdf.core.models import (
    DEFAULT_STYLE,
    CrateSource,
    SourceFile,
    SourceLine,
    StyleSpan,
    TextStyle,
)


class TestTextStyle:
    """Tests for TextStyle dataclass."""

    def test_init_when_defaults_then_is_default(self):
        """Default style is black, upright, regular weight."""
        style = TextStyle()
        assert style.color == "#000000"
        assert style.is_default is True

    def test_init_when_bold_then_not_default(self):
        assert TextStyle(bold=True).is_default is False

    def test_init_when_color_not_hex_then_raises_error(self):
        """Colours must be #rrggbb."""
        with pytest.raises(ValueError, match="#rrggbb"):
            TextStyle("red")

    def test_init_when_frozen_then_cannot_modify(self):
        style = TextStyle()
        with pytest.raises(AttributeError):
            style.bold = True


class TestSourceLine:
    """Tests for SourceLine dataclass."""

    def test_text_when_multiple_spans_then_concatenated(self):
        line = SourceLine(3, (StyleSpan("fn "), StyleSpan("main", TextStyle(bold=True))))
        assert line.text == "fn main"
        assert line.is_empty is False

    def test_is_empty_when_no_spans_then_true(self):
        assert SourceLine(1).is_empty is True

    def test_init_when_number_zero_then_raises_error(self):
        """Line numbers are 1-based."""
        with pytest.raises(ValueError, match=">= 1"):
            SourceLine(0)

    def test_span_default_style_when_omitted_then_default(self):
        assert StyleSpan("x").style == DEFAULT_STYLE


class TestCrateSource:
    """Tests for CrateSource dataclass."""

    def test_init_when_list_of_files_then_stored_as_tuple(self):
        crate = CrateSource("demo", [SourceFile("src/lib.rs", "")])
        assert isinstance(crate.files, tuple)
        assert crate.file_count == 1

    def test_init_when_blank_name_then_raises_error(self):
        with pytest.raises(ValueError, match="must not be empty"):
            CrateSource("  ")

    def test_eligible_files_when_tests_excluded_then_filtered_in_order(self):
        """Test files are dropped, order of the rest is preserved."""
        # Arrange
        files = (
            SourceFile("src/b.rs", "b"),
            SourceFile("tests/it.rs", "t", is_test=True),
            SourceFile("src/a.rs", "a"),
        )
        crate = CrateSource("demo", files)

        # Act
        eligible = crate.eligible_files(include_tests=False)

        # Assert
        assert [f.path for f in eligible] == ["src/b.rs", "src/a.rs"]

    def test_eligible_files_when_tests_included_then_all(self):
        files = (SourceFile("src/a.rs", "a"), SourceFile("tests/it.rs", "t", is_test=True))
        assert CrateSource("demo", files).eligible_files(include_tests=True) == files
