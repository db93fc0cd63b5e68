"""
Unit tests for layout configuration.
"""

import pytest

from git2pdf.builder.layout import ColumnLayout, LayoutConfig, PaperSpec
from git2pdf.errors import ConfigurationError


class TestPaperSpec:
    """Tests for PaperSpec dataclass."""

    def test_init_when_defaults_then_a4_with_usable_area(self):
        paper = PaperSpec()
        assert paper.width == pytest.approx(595.2756)
        assert paper.usable_width > 0
        assert paper.usable_height > 0

    def test_usable_area_when_uniform_margins_then_correct(self):
        paper = PaperSpec.uniform(210, 297, 10)
        assert paper.usable_width == 190
        assert paper.usable_height == 277

    def test_init_when_margins_exceed_width_then_raises_error(self):
        with pytest.raises(ConfigurationError, match="exceed paper width"):
            PaperSpec(100, 100, 0, 60, 0, 40)

    def test_init_when_margins_exceed_height_then_raises_error(self):
        with pytest.raises(ConfigurationError, match="exceed paper height"):
            PaperSpec(100, 100, 50, 0, 50, 0)

    def test_init_when_negative_margin_then_raises_error(self):
        with pytest.raises(ConfigurationError, match="margin_left"):
            PaperSpec(100, 100, 0, 0, 0, -1)

    def test_error_when_raised_then_is_value_error(self):
        """ConfigurationError is also a ValueError."""
        with pytest.raises(ValueError):
            PaperSpec(0, 100)


class TestColumnLayout:
    """Tests for ColumnLayout dataclass."""

    def test_init_when_zero_columns_then_raises_error(self):
        with pytest.raises(ConfigurationError, match="at least 1"):
            ColumnLayout(count=0)

    def test_required_width_when_three_columns_then_includes_gutters(self):
        layout = ColumnLayout(count=3, gutter=5, min_column_width=20)
        assert layout.required_width() == 70


class TestLayoutConfig:
    """Tests for LayoutConfig dataclass."""

    def test_line_height_when_multiplier_then_product(self):
        config = LayoutConfig(font_size=8, line_height_multiplier=1.25)
        assert config.line_height == 10.0

    def test_init_when_font_size_zero_then_raises_error(self):
        with pytest.raises(ConfigurationError, match="font_size"):
            LayoutConfig(font_size=0)

    def test_init_when_negative_min_lines_then_raises_error(self):
        with pytest.raises(ConfigurationError, match="min_lines_after_header"):
            LayoutConfig(min_lines_after_header=-1)

    @pytest.mark.parametrize("tab_width", [0, -1])
    def test_init_when_tab_width_below_one_then_raises_error(self, tab_width):
        """A tab must always expand to at least one space."""
        with pytest.raises(ConfigurationError, match="tab_width"):
            LayoutConfig(tab_width=tab_width)

    def test_init_when_defaults_then_marker_set(self):
        assert LayoutConfig().continuation_marker == "»"
