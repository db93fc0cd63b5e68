"""
Module: builder.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for glyph runs, visual lines, columns, pages
    and the finished crate document.

Key Classes:
    - GlyphRun: Styled text positioned within a column
    - VisualLine: One fixed-height row
    - PlacedLine: VisualLine positioned within a column
    - Column: Ordered placed lines
    - Page: N columns (or one full-width block for a title page)
    - FileSection: Header line plus the file's visual lines
    - CrateDocument: Final layout output for one crate

Dependencies:
    - dataclasses (std)
    - git2pdf.core.models: TextStyle

Used By:
    - builder.layout.line_breaker: Creates VisualLines
    - builder.layout.paginator: Creates Pages
    - builder.output.instructions: Consumes CrateDocument
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from git2pdf.core.models import TextStyle

LINE_KIND_CODE = "code"
LINE_KIND_HEADER = "header"
LINE_KIND_TITLE = "title"

PAGE_KIND_CONTENT = "content"
PAGE_KIND_TITLE = "title"


@dataclass(frozen=True)
class GlyphRun:
    """
    Styled text at a horizontal offset.

    Attributes:
        text: Characters of the run (already normalized)
        style: Colour and weight
        x: Offset from the column's left edge
        width: Summed advance width
        size: Font size override (None means the code font size)
    """

    text: str
    style: TextStyle
    x: float
    width: float
    size: Optional[float] = None

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass(frozen=True)
class VisualLine:
    """
    One row of fixed height (immutable).

    Attributes:
        runs: Ordered glyph runs
        height: Row height
        baseline: Distance from the row top to the text baseline
        kind: "code", "header" or "title"
        line_number: Source line number, None on continuation rows
        source_number: Source line this row was broken from (0 for
            header and title rows)
        gutter: Line number or continuation marker run, if any
        is_continuation: True for the second and later rows of a wrapped line

    Example:
        >>> line.text
        'fn main() {'
    """

    runs: Tuple[GlyphRun, ...]
    height: float
    baseline: float
    kind: str = LINE_KIND_CODE
    line_number: Optional[int] = None
    source_number: int = 0
    gutter: Optional[GlyphRun] = None
    is_continuation: bool = False

    @property
    def text(self) -> str:
        """Concatenated text of all runs (gutter excluded)."""
        return "".join(run.text for run in self.runs)

    @property
    def width(self) -> float:
        """Summed advance width of all runs (gutter excluded)."""
        return sum(run.width for run in self.runs)


@dataclass(frozen=True)
class PlacedLine:
    """A VisualLine at a vertical offset from the column top."""

    line: VisualLine
    y: float

    @property
    def bottom(self) -> float:
        return self.y + self.line.height


@dataclass(frozen=True)
class Column:
    """
    Ordered placed lines of one column.

    Attributes:
        index: Column index within its page
        lines: Placed lines in reading order
    """

    index: int
    lines: Tuple[PlacedLine, ...] = ()

    @property
    def used_height(self) -> float:
        """Bottom of the last placed line."""
        if not self.lines:
            return 0.0
        return self.lines[-1].bottom

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class Page:
    """
    One page of a crate document.

    Content pages carry one Column per configured column (trailing
    columns may be empty); a title page carries one full-width column.
    """

    index: int
    columns: Tuple[Column, ...]
    kind: str = PAGE_KIND_CONTENT

    @property
    def is_title(self) -> bool:
        return self.kind == PAGE_KIND_TITLE

    @property
    def line_count(self) -> int:
        return sum(len(col.lines) for col in self.columns)


@dataclass(frozen=True)
class FileSection:
    """
    Laid-out file ready for pagination.

    Attributes:
        path: File path shown in the header
        header: Header VisualLine (bold path on a grey band)
        lines: The file's VisualLines in order
        source_line_count: Number of logical source lines
        highlighted: False when the file fell back to plain text
        warnings: Recoverable problems met while laying out this file
    """

    path: str
    header: VisualLine
    lines: Tuple[VisualLine, ...]
    source_line_count: int
    highlighted: bool = True
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CrateDocument:
    """
    Finished layout of one crate (immutable).

    Example:
        >>> document.page_count
        4
    """

    name: str
    pages: Tuple[Page, ...]
    file_count: int
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def content_pages(self) -> Tuple[Page, ...]:
        return tuple(p for p in self.pages if not p.is_title)
