"""
Module: builder.output.instructions

Purpose:
    Convert a finished CrateDocument into a flat, absolutely positioned
    instruction stream for a document writer. Coordinates are measured
    from the page's top-left corner; PlaceText.y is the text baseline.

Key Classes:
    - BeginPage, EndPage: Page boundaries
    - BeginColumn, EndColumn: Column boundaries
    - PlaceText: One styled text run
    - FillRect: Filled rectangle (header band, column rule)

Key Functions:
    - emit_instructions(): Document to instruction stream

Dependencies:
    - builder.layout: CrateDocument, Geometry, MetricsProvider

Used By:
    - builder.output.renderer: Writers consume the stream
    - builder.controller: Per-crate build
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple, Union

from git2pdf.builder.layout.config import LayoutConfig
from git2pdf.builder.layout.geometry import Geometry
from git2pdf.builder.layout.metrics import MetricsProvider
from git2pdf.builder.layout.models import (
    LINE_KIND_HEADER,
    LINE_KIND_TITLE,
    Column,
    CrateDocument,
    GlyphRun,
    Page,
)
from git2pdf.core.models import TextStyle

logger = logging.getLogger(__name__)

ROLE_CODE = "code"
ROLE_GUTTER = "gutter"
ROLE_HEADER = "header"
ROLE_TITLE = "title"
ROLE_DECORATION = "decoration"

HEADER_BAND_COLOR = "#e0e0e0"
COLUMN_RULE_COLOR = "#dddddd"
COLUMN_RULE_WIDTH = 0.5
DECORATION_STYLE = TextStyle("#666666")


@dataclass(frozen=True)
class BeginPage:
    index: int
    width: float
    height: float
    kind: str


@dataclass(frozen=True)
class BeginColumn:
    index: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PlaceText:
    """
    One text run at an absolute position.

    Attributes:
        x: Left edge of the run
        y: Baseline, measured down from the page top
        text: Characters to draw
        font: Font name from the metrics provider
        size: Font size
        color: Hex colour "#rrggbb"
        bold: Bold style bit
        italic: Italic style bit
        role: "code", "gutter", "header", "title" or "decoration"
    """

    x: float
    y: float
    text: str
    font: str
    size: float
    color: str
    bold: bool
    italic: bool
    role: str


@dataclass(frozen=True)
class FillRect:
    """Filled rectangle; (x, y) is its top-left corner."""

    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class EndColumn:
    index: int


@dataclass(frozen=True)
class EndPage:
    index: int


Instruction = Union[BeginPage, BeginColumn, PlaceText, FillRect, EndColumn, EndPage]


def emit_instructions(
    document: CrateDocument,
    geometry: Geometry,
    config: LayoutConfig,
    metrics: MetricsProvider,
) -> Tuple[Instruction, ...]:
    """
    Flatten a document into draw instructions in emission order.

    The result depends only on its inputs, so identical inputs give
    identical streams.

    Args:
        document: Finished crate document
        geometry: Geometry the document was laid out with
        config: Layout configuration (decorations)
        metrics: Metrics provider (font names, decoration widths)

    Returns:
        Tuple of instructions
    """
    out: List[Instruction] = []
    for page in document.pages:
        out.append(BeginPage(page.index, geometry.page_width, geometry.page_height, page.kind))
        if not page.is_title:
            _emit_decorations(out, page, document, geometry, config, metrics)
        for column in page.columns:
            _emit_column(out, column, page, geometry, metrics)
        out.append(EndPage(page.index))

    logger.debug(f"Emitted {len(out)} instructions for {document.name}")
    return tuple(out)


def _emit_column(
    out: List[Instruction],
    column: Column,
    page: Page,
    geometry: Geometry,
    metrics: MetricsProvider,
) -> None:
    if page.is_title:
        x, width = geometry.origin_x, geometry.usable_width
    else:
        x, width = geometry.column_x(column.index), geometry.column_width
    top = geometry.origin_y

    out.append(BeginColumn(column.index, x, top, width, geometry.column_height))
    for placed in column.lines:
        line = placed.line
        row_top = top + placed.y
        baseline = row_top + line.baseline

        if line.kind == LINE_KIND_HEADER:
            out.append(FillRect(x, row_top, width, line.height, HEADER_BAND_COLOR))
            role = ROLE_HEADER
        elif line.kind == LINE_KIND_TITLE:
            role = ROLE_TITLE
        else:
            role = ROLE_CODE

        if line.gutter is not None:
            out.append(_text(line.gutter, x, baseline, geometry, metrics, ROLE_GUTTER))
        for run in line.runs:
            out.append(_text(run, x, baseline, geometry, metrics, role))
    out.append(EndColumn(column.index))


def _emit_decorations(
    out: List[Instruction],
    page: Page,
    document: CrateDocument,
    geometry: Geometry,
    config: LayoutConfig,
    metrics: MetricsProvider,
) -> None:
    """Column rules, running header and page number of a content page."""
    if geometry.column_gutter > COLUMN_RULE_WIDTH:
        for index in range(1, geometry.column_count):
            rule_x = geometry.column_x(index) - (geometry.column_gutter + COLUMN_RULE_WIDTH) / 2
            out.append(
                FillRect(
                    rule_x,
                    geometry.origin_y,
                    COLUMN_RULE_WIDTH,
                    geometry.column_height,
                    COLUMN_RULE_COLOR,
                )
            )

    size = geometry.font_size
    top_margin = geometry.origin_y
    bottom_margin = geometry.page_height - geometry.origin_y - geometry.column_height

    if config.running_header and top_margin >= size:
        text = config.running_header.format(name=document.name)
        out.append(
            _decoration(text, geometry.origin_x, top_margin / 2 + size * 0.35, size, metrics)
        )

    if config.page_numbers and bottom_margin >= size:
        text = f"Page {page.index + 1} / {document.page_count}"
        width = metrics.text_width(text, DECORATION_STYLE, size)
        x = geometry.origin_x + (geometry.usable_width - width) / 2
        y = geometry.page_height - bottom_margin / 2 + size * 0.35
        out.append(_decoration(text, x, y, size, metrics))


def _text(
    run: GlyphRun,
    column_x: float,
    baseline: float,
    geometry: Geometry,
    metrics: MetricsProvider,
    role: str,
) -> PlaceText:
    return PlaceText(
        x=column_x + run.x,
        y=baseline,
        text=run.text,
        font=metrics.font_name(run.style),
        size=run.size if run.size is not None else geometry.font_size,
        color=run.style.color,
        bold=run.style.bold,
        italic=run.style.italic,
        role=role,
    )


def _decoration(text: str, x: float, y: float, size: float, metrics: MetricsProvider) -> PlaceText:
    return PlaceText(
        x=x,
        y=y,
        text=text,
        font=metrics.font_name(DECORATION_STYLE),
        size=size,
        color=DECORATION_STYLE.color,
        bold=False,
        italic=False,
        role=ROLE_DECORATION,
    )
