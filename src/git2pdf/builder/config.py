"""
Module: builder.config

Purpose:
    Caller-facing configuration for a rendering run. Immutable
    configuration with validation on construction. Lengths are given in
    millimetres and converted to PDF points for the layout engine.

Key Classes:
    - BuildConfig: Main configuration for building crate documents

Key Functions:
    - parse_paper_size(): "WIDTHxHEIGHT" in mm
    - parse_margins(): CSS-style 1, 2 or 4 margin values in mm

Dependencies:
    - reportlab.lib.units: mm to point conversion
    - builder.layout.config: LayoutConfig, PaperSpec, ColumnLayout

Used By:
    - builder.controller: Main build controller
    - git2pdf.cli: Command-line entry point
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from reportlab.lib.units import mm

from git2pdf.builder.highlight import DEFAULT_THEME
from git2pdf.builder.layout.composer import HIGHLIGHT_FAILURE_POLICIES, ON_FAILURE_PLAIN
from git2pdf.builder.layout.config import (
    DEFAULT_CONTINUATION_MARKER,
    ColumnLayout,
    LayoutConfig,
    PaperSpec,
)
from git2pdf.errors import ConfigurationError

RUNNING_HEADER_TEMPLATE = "{name} - Code Review"

_FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def parse_paper_size(value: str) -> Tuple[float, float]:
    """
    Parse a paper size given as "WIDTHxHEIGHT" in millimetres.

    Example:
        >>> parse_paper_size("210x297")
        (210.0, 297.0)

    Raises:
        ConfigurationError: If the value is malformed
    """
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise ConfigurationError(
            f"Invalid paper size {value!r}. Expected WIDTHxHEIGHT (e.g., 210x297)"
        )
    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError as e:
        raise ConfigurationError(f"Invalid paper size {value!r}: {e}") from e


def parse_margins(value: str) -> Tuple[float, float, float, float]:
    """
    Parse CSS-style margins in millimetres.

    Accepts "all", "vertical horizontal" or "top right bottom left".

    Returns:
        (top, right, bottom, left)

    Example:
        >>> parse_margins("10 20")
        (10.0, 20.0, 10.0, 20.0)

    Raises:
        ConfigurationError: If the value is malformed
    """
    try:
        parts = [float(p) for p in value.split()]
    except ValueError as e:
        raise ConfigurationError(f"Invalid margin value in {value!r}: {e}") from e

    if len(parts) == 1:
        return parts[0], parts[0], parts[0], parts[0]
    if len(parts) == 2:
        return parts[0], parts[1], parts[0], parts[1]
    if len(parts) == 4:
        return parts[0], parts[1], parts[2], parts[3]
    raise ConfigurationError(
        f"Invalid margins {value!r}. Expected 1, 2, or 4 values "
        f'(e.g., "10", "10 20", or "10 20 10 20")'
    )


def output_filename(crate_name: str) -> str:
    """File name for a crate's document, e.g. "my_crate.pdf"."""
    safe = _FILENAME_UNSAFE.sub("_", crate_name.strip()).strip("._")
    return f"{safe or 'crate'}.pdf"


@dataclass(frozen=True)
class BuildConfig:
    """
    Configuration for a rendering run (immutable).

    Attributes:
        output_dir: Directory receiving one PDF per crate
        paper_size_mm: (width, height) in mm
        margins_mm: (top, right, bottom, left) in mm
        font_size: Code font size in points
        line_height: Line-height multiplier
        columns: Columns per page
        column_gap_mm: Gap between columns in mm
        min_column_width_mm: Narrowest acceptable column in mm
        line_number_padding: Space between line numbers and code, in points
        theme: Pygments style name, or "none" / None for no highlighting
        include_tests: Render files flagged as tests
        min_lines_after_header: Lines kept with each file header
        tab_width: Spaces per tab
        continuation_marker: Gutter marker on wrapped rows ("" omits it)
        title_page: Emit a title page per crate
        running_header: Draw "<crate> - Code Review" in the top margin
        page_numbers: Draw "Page n / m" in the bottom margin
        max_workers: Threads for per-file highlighting and line breaking
        on_highlight_failure: "plain" or "abort"
        font_path: Optional TrueType font used instead of Courier

    Example:
        >>> config = BuildConfig(output_dir=Path("out"), columns=3, theme="none")
        >>> config.to_layout_config().columns.count
        3
    """

    # Output
    output_dir: Path = Path(".")

    # Page
    paper_size_mm: Tuple[float, float] = (210.0, 297.0)
    margins_mm: Tuple[float, float, float, float] = (10.0, 10.0, 10.0, 10.0)
    columns: int = 2
    column_gap_mm: float = 4.0
    min_column_width_mm: float = 15.0

    # Typesetting
    font_size: float = 8.0
    line_height: float = 1.2
    line_number_padding: float = 4.0
    tab_width: int = 4
    continuation_marker: str = DEFAULT_CONTINUATION_MARKER
    min_lines_after_header: int = 2
    font_path: Optional[Path] = None

    # Content
    theme: Optional[str] = DEFAULT_THEME
    include_tests: bool = False

    # Decorations
    title_page: bool = True
    running_header: bool = True
    page_numbers: bool = True

    # Execution
    max_workers: int = 4
    on_highlight_failure: str = ON_FAILURE_PLAIN

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if len(self.paper_size_mm) != 2:
            raise ConfigurationError(f"paper_size_mm must be (width, height): {self.paper_size_mm}")
        if len(self.margins_mm) != 4:
            raise ConfigurationError(
                f"margins_mm must be (top, right, bottom, left): {self.margins_mm}"
            )
        if self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1: {self.max_workers}")
        if self.on_highlight_failure not in HIGHLIGHT_FAILURE_POLICIES:
            raise ConfigurationError(
                f"on_highlight_failure must be one of {HIGHLIGHT_FAILURE_POLICIES}: "
                f"{self.on_highlight_failure!r}"
            )
        if self.font_path is not None and not Path(self.font_path).is_file():
            raise ConfigurationError(f"Font file not found: {self.font_path}")
        # Surface paper/column/font errors now rather than mid-run
        self.to_layout_config()

    def to_layout_config(self) -> LayoutConfig:
        """
        Convert to the layout engine's configuration (points).

        Raises:
            ConfigurationError: If the values leave no usable layout
        """
        width, height = self.paper_size_mm
        top, right, bottom, left = self.margins_mm
        return LayoutConfig(
            paper=PaperSpec(
                width=width * mm,
                height=height * mm,
                margin_top=top * mm,
                margin_right=right * mm,
                margin_bottom=bottom * mm,
                margin_left=left * mm,
            ),
            columns=ColumnLayout(
                count=self.columns,
                gutter=self.column_gap_mm * mm,
                min_column_width=self.min_column_width_mm * mm,
            ),
            font_size=self.font_size,
            line_height_multiplier=self.line_height,
            line_number_padding=self.line_number_padding,
            min_lines_after_header=self.min_lines_after_header,
            tab_width=self.tab_width,
            continuation_marker=self.continuation_marker,
            title_page=self.title_page,
            running_header=RUNNING_HEADER_TEMPLATE if self.running_header else None,
            page_numbers=self.page_numbers,
        )

    def output_path_for(self, crate_name: str) -> Path:
        """Target PDF path for a crate."""
        return Path(self.output_dir) / output_filename(crate_name)
