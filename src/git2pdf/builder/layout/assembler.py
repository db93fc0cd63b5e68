"""
Module: builder.layout.assembler

Purpose:
    Assemble one crate's FileSections into a finished CrateDocument:
    optional title page first, then the paginated content pages.

Key Functions:
    - assemble_document(): Build the CrateDocument for a crate
    - build_title_page(): Centered full-page title block

Dependencies:
    - builder.layout.paginator: Column/page placement
    - builder.layout.line_breaker: fit_text for title lines

Used By:
    - builder.controller: Per-crate build
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from git2pdf.core.models import CrateSource, TextStyle
from git2pdf.errors import EmptyCrate

from .config import LayoutConfig
from .geometry import Geometry
from .line_breaker import fit_text
from .metrics import MetricsProvider
from .models import (
    LINE_KIND_TITLE,
    PAGE_KIND_TITLE,
    Column,
    CrateDocument,
    FileSection,
    GlyphRun,
    Page,
    PlacedLine,
    VisualLine,
)
from .paginator import paginate

logger = logging.getLogger(__name__)

# (style, size relative to the code font size) per title line role
TITLE_NAME = (TextStyle("#000000", bold=True), 3.0)
TITLE_VERSION = (TextStyle("#555555"), 1.5)
TITLE_DESCRIPTION = (TextStyle("#333333", italic=True), 1.25)
TITLE_DETAIL = (TextStyle("#666666"), 1.0)

TITLE_LINE_SPACING = 1.6


def build_title_page(
    crate: CrateSource,
    file_count: int,
    geometry: Geometry,
    metrics: MetricsProvider,
    details: Sequence[str] = (),
) -> Page:
    """
    Build a title page that bypasses column flow.

    Shows the crate name, version, description, file count, commit and
    any generation parameters, centered in the usable area.

    Args:
        crate: Crate whose metadata is shown
        file_count: Number of files rendered
        geometry: Resolved geometry
        metrics: Metrics provider
        details: Extra lines (generation parameters)

    Returns:
        Page of kind "title" with one full-width column
    """
    entries: List[Tuple[str, Tuple[TextStyle, float]]] = [(crate.name, TITLE_NAME)]
    if crate.version:
        entries.append((f"Version {crate.version}", TITLE_VERSION))
    if crate.description:
        entries.append((crate.description, TITLE_DESCRIPTION))
    noun = "file" if file_count == 1 else "files"
    entries.append((f"{file_count} {noun}", TITLE_DETAIL))
    if crate.commit:
        entries.append((f"Commit {crate.commit}", TITLE_DETAIL))
    entries.extend((detail, TITLE_DETAIL) for detail in details)

    lines: List[VisualLine] = []
    for text, (style, scale) in entries:
        size = geometry.font_size * scale
        text = fit_text(text, style, size, geometry.usable_width, metrics, keep_end=False)
        width = metrics.text_width(text, style, size)
        ascent, _ = metrics.line_metrics(style, size)
        lines.append(
            VisualLine(
                runs=(GlyphRun(text, style, (geometry.usable_width - width) / 2, width, size),),
                height=size * TITLE_LINE_SPACING,
                baseline=ascent,
                kind=LINE_KIND_TITLE,
            )
        )

    total = sum(line.height for line in lines)
    while lines and total > geometry.usable_height:
        dropped = lines.pop()
        total -= dropped.height
        logger.warning(f"Title line {dropped.text!r} does not fit on the title page")

    y = (geometry.usable_height - total) / 3
    placed: List[PlacedLine] = []
    for line in lines:
        placed.append(PlacedLine(line, y))
        y += line.height

    return Page(index=0, columns=(Column(index=0, lines=tuple(placed)),), kind=PAGE_KIND_TITLE)


def assemble_document(
    crate: CrateSource,
    sections: Sequence[FileSection],
    geometry: Geometry,
    config: LayoutConfig,
    metrics: MetricsProvider,
    *,
    details: Sequence[str] = (),
) -> CrateDocument:
    """
    Assemble a crate document from composed sections.

    Args:
        crate: Crate being rendered
        sections: Composed files in output order
        geometry: Resolved geometry
        config: Layout configuration
        metrics: Metrics provider (title page measurement)
        details: Generation parameters shown on the title page

    Returns:
        Finished CrateDocument

    Raises:
        EmptyCrate: If there are no sections
    """
    if not sections:
        raise EmptyCrate(crate.name)

    pages: List[Page] = []
    if config.title_page:
        pages.append(build_title_page(crate, len(sections), geometry, metrics, details))

    pages.extend(paginate(sections, geometry, config, first_index=len(pages)))

    warnings = tuple(w for section in sections for w in section.warnings)
    document = CrateDocument(
        name=crate.name,
        pages=tuple(pages),
        file_count=len(sections),
        warnings=warnings,
    )
    logger.info(
        f"Assembled {crate.name}: {document.file_count} files on {document.page_count} pages"
    )
    return document
