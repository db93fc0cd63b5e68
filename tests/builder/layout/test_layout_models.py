"""
Unit tests for layout models.
"""

import pytest

from git2pdf.builder.layout import Column, CrateDocument, GlyphRun, Page, PlacedLine, VisualLine
from git2pdf.core.models import DEFAULT_STYLE


def line(*texts):
    x = 0.0
    runs = []
    for text in texts:
        runs.append(GlyphRun(text, DEFAULT_STYLE, x, float(len(text))))
        x += len(text)
    return VisualLine(runs=tuple(runs), height=10.0, baseline=8.0)


class TestVisualLine:

    def test_text_and_width_when_runs_then_summed(self):
        visual = line("fn ", "main")
        assert visual.text == "fn main"
        assert visual.width == 7.0

    def test_init_when_frozen_then_cannot_modify(self):
        visual = line("x")
        with pytest.raises(AttributeError):
            visual.height = 5.0


class TestColumn:

    def test_used_height_when_lines_then_bottom_of_last(self):
        column = Column(0, (PlacedLine(line("a"), 0.0), PlacedLine(line("b"), 10.0)))
        assert column.used_height == 20.0
        assert column.is_empty is False

    def test_used_height_when_empty_then_zero(self):
        assert Column(1).used_height == 0.0


class TestCrateDocument:

    def test_page_count_when_title_and_content_then_both_counted(self):
        pages = (
            Page(0, (Column(0),), kind="title"),
            Page(1, (Column(0), Column(1))),
        )
        document = CrateDocument("demo", pages, file_count=1)

        assert document.page_count == 2
        assert document.content_pages == (pages[1],)
