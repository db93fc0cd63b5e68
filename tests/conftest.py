import sys
from pathlib import Path
from typing import Dict, Optional

import pytest

# Add src to sys.path so we can import git2pdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from git2pdf.builder.layout import (  # noqa: E402
    ColumnLayout,
    FontSet,
    GlyphMetrics,
    LayoutConfig,
    LineBreaker,
    MetricsProvider,
    PaperSpec,
    resolve_geometry,
)
from git2pdf.builder.highlight import PlainHighlighter  # noqa: E402
from git2pdf.builder.layout.composer import compose_file  # noqa: E402
from git2pdf.core.models import SourceFile, TextStyle  # noqa: E402


class FixedMetrics(MetricsProvider):
    """Every glyph advances by `advance` (1.0 by default) regardless of size."""

    def __init__(self, advance: float = 1.0, wide: Optional[Dict[str, float]] = None):
        self.advance = advance
        self.wide = wide or {}
        self.fonts = FontSet()

    def measure(self, char: str, style: TextStyle, size: float) -> GlyphMetrics:
        return GlyphMetrics(
            advance=self.wide.get(char, self.advance),
            ascent=0.8 * size,
            descent=0.2 * size,
        )

    def font_name(self, style: TextStyle) -> str:
        return self.fonts.font_for(style)


def scenario_config(**overrides) -> LayoutConfig:
    """210x297 paper, 10 margins, 2 columns, font 8, line height 10."""
    values = dict(
        paper=PaperSpec.uniform(210, 297, 10),
        columns=ColumnLayout(count=2, gutter=4, min_column_width=10),
        font_size=8,
        line_height_multiplier=1.25,
    )
    values.update(overrides)
    return LayoutConfig(**values)


def narrow_config(content_width: float = 80, **overrides) -> LayoutConfig:
    """
    One column whose content width is exactly `content_width` glyphs
    under FixedMetrics (1-digit gutter of 1 + padding 4, inner padding 2).
    """
    values = dict(
        paper=PaperSpec(width=content_width + 7, height=100, margin_top=0,
                        margin_right=0, margin_bottom=0, margin_left=0),
        columns=ColumnLayout(count=1, gutter=0, min_column_width=1),
        font_size=8,
        line_height_multiplier=1.25,
    )
    values.update(overrides)
    return LayoutConfig(**values)


@pytest.fixture
def fixed_metrics():
    return FixedMetrics()


@pytest.fixture
def make_breaker(fixed_metrics):
    """Factory: LineBreaker for a config (scenario config by default)."""
    def _create(config: Optional[LayoutConfig] = None, max_line_number: int = 1, metrics=None):
        config = config or scenario_config()
        metrics = metrics or fixed_metrics
        geometry = resolve_geometry(config, metrics, max_line_number)
        return LineBreaker(geometry, metrics, config)
    return _create


@pytest.fixture
def make_section():
    """Factory: FileSection from plain text using a given breaker."""
    def _create(breaker: LineBreaker, path: str, line_count: int, text: str = "let x = 1;"):
        content = "\n".join(text for _ in range(line_count)) + "\n"
        return compose_file(SourceFile(path, content), PlainHighlighter(), breaker)
    return _create
