"""
Module: builder.layout.geometry

Purpose:
    Resolve a LayoutConfig into concrete column boxes. Geometry is
    computed once per run, before any layout work, and shared read-only
    by every worker.

Key Classes:
    - Geometry: Resolved column and gutter dimensions

Key Functions:
    - resolve_geometry(): Validate configuration and compute Geometry
    - digit_count(): Number of digits needed for a line number

Dependencies:
    - builder.layout.config: LayoutConfig
    - builder.layout.metrics: MetricsProvider

Used By:
    - builder.layout.line_breaker: content_width, gutter_width
    - builder.layout.paginator: column_height, line_height
    - builder.output.instructions: Absolute column positions
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from git2pdf.core.models import DEFAULT_STYLE
from git2pdf.errors import ConfigurationError

from .config import LayoutConfig
from .metrics import MetricsProvider

logger = logging.getLogger(__name__)

# Tolerance for float comparisons of accumulated lengths
EPSILON = 1e-6


@dataclass(frozen=True)
class Geometry:
    """
    Resolved geometry for one run (immutable).

    All coordinates are measured from the page's top-left corner.

    Attributes:
        page_width: Paper width
        page_height: Paper height
        origin_x: Left edge of the usable area
        origin_y: Top edge of the usable area
        usable_width: Width inside the margins
        usable_height: Height inside the margins
        column_count: Number of columns per page
        column_gutter: Gap between adjacent columns
        column_width: Width of one column
        column_height: Height of one column
        font_size: Code font size
        line_height: Height of one visual row
        ascent: Font ascent at font_size
        descent: Font descent at font_size (positive)
        digits: Line-number digit slots
        digit_advance: Advance of one digit
        gutter_width: Width reserved for line numbers
        content_width: Width available for code text
    """

    page_width: float
    page_height: float
    origin_x: float
    origin_y: float
    usable_width: float
    usable_height: float
    column_count: int
    column_gutter: float
    column_width: float
    column_height: float
    font_size: float
    line_height: float
    ascent: float
    descent: float
    digits: int
    digit_advance: float
    gutter_width: float
    content_width: float

    @property
    def rows_per_column(self) -> int:
        """Number of visual rows that fit in one column."""
        return int(math.floor(self.column_height / self.line_height + EPSILON))

    @property
    def rows_per_page(self) -> int:
        return self.rows_per_column * self.column_count

    @property
    def baseline_offset(self) -> float:
        """Distance from the top of a row to its text baseline."""
        return (self.line_height - self.ascent - self.descent) / 2 + self.ascent

    def column_x(self, index: int) -> float:
        """Left edge of column `index`."""
        return self.origin_x + index * (self.column_width + self.column_gutter)


def digit_count(max_line_number: int) -> int:
    """Digits needed to print line numbers up to `max_line_number`."""
    return len(str(max(1, max_line_number)))


def resolve_geometry(
    config: LayoutConfig,
    metrics: MetricsProvider,
    max_line_number: int = 1,
) -> Geometry:
    """
    Compute column and gutter dimensions.

    The line-number gutter is sized to the widest line number across
    every file about to be rendered, so all columns share one gutter.

    Args:
        config: Layout configuration
        metrics: Metrics provider for digit and glyph widths
        max_line_number: Largest line number of any file in the run

    Returns:
        Resolved Geometry

    Raises:
        ConfigurationError: If the configuration leaves no usable layout
    """
    paper = config.paper
    columns = config.columns

    usable_width = paper.usable_width
    usable_height = paper.usable_height
    if usable_width <= 0 or usable_height <= 0:
        raise ConfigurationError(
            f"Margins leave no usable area ({usable_width:.2f}x{usable_height:.2f})"
        )

    column_width = (usable_width - (columns.count - 1) * columns.gutter) / columns.count
    if column_width <= 0:
        raise ConfigurationError(
            f"{columns.count} columns with gutter {columns.gutter} do not fit "
            f"in usable width {usable_width:.2f}"
        )
    if usable_width + EPSILON < columns.required_width():
        raise ConfigurationError(
            f"Column width {column_width:.2f} is below the minimum "
            f"{columns.min_column_width:.2f}"
        )

    line_height = config.line_height
    if line_height > usable_height + EPSILON:
        raise ConfigurationError(
            f"Line height {line_height:.2f} exceeds column height {usable_height:.2f}"
        )

    digits = digit_count(max_line_number)
    digit_advance = max(
        metrics.measure(d, DEFAULT_STYLE, config.font_size).advance for d in "0123456789"
    )
    gutter_width = digits * digit_advance + config.line_number_padding

    content_width = column_width - gutter_width - config.inner_padding
    widest_glyph = metrics.measure("M", DEFAULT_STYLE, config.font_size).advance
    if content_width <= 0 or content_width + EPSILON < widest_glyph:
        raise ConfigurationError(
            f"Content width {content_width:.2f} cannot hold one glyph "
            f"(column {column_width:.2f}, gutter {gutter_width:.2f})"
        )

    ascent, descent = metrics.line_metrics(DEFAULT_STYLE, config.font_size)

    geometry = Geometry(
        page_width=paper.width,
        page_height=paper.height,
        origin_x=paper.margin_left,
        origin_y=paper.margin_top,
        usable_width=usable_width,
        usable_height=usable_height,
        column_count=columns.count,
        column_gutter=columns.gutter,
        column_width=column_width,
        column_height=usable_height,
        font_size=config.font_size,
        line_height=line_height,
        ascent=ascent,
        descent=descent,
        digits=digits,
        digit_advance=digit_advance,
        gutter_width=gutter_width,
        content_width=content_width,
    )
    logger.debug(
        f"Geometry: {columns.count} columns of {column_width:.2f}, "
        f"content width {content_width:.2f}, {geometry.rows_per_column} rows per column, "
        f"{geometry.rows_per_page} per page"
    )
    return geometry
