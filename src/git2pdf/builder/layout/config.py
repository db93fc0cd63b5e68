"""
Module: builder.layout.config

Purpose:
    Configuration for the layout engine.
    Defines paper dimensions, margins, columns and typesetting settings.
    All lengths share one linear unit (points when driven by BuildConfig).

Key Classes:
    - PaperSpec: Paper size and margins (immutable)
    - ColumnLayout: Column count and inter-column gutter (immutable)
    - LayoutConfig: Complete layout configuration (immutable)

Dependencies:
    - dataclasses (std)
    - git2pdf.errors: ConfigurationError

Used By:
    - builder.layout.geometry: Geometry resolution
    - builder.layout.line_breaker: Tab width, continuation marker
    - builder.layout.assembler: Orphan control, title page, decorations
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from git2pdf.errors import ConfigurationError


# A4 in points
DEFAULT_PAPER_WIDTH = 595.2756
DEFAULT_PAPER_HEIGHT = 841.8898
DEFAULT_MARGIN = 28.3465  # 10 mm

DEFAULT_CONTINUATION_MARKER = "»"


@dataclass(frozen=True)
class PaperSpec:
    """
    Paper size and margins (immutable).

    Attributes:
        width: Paper width
        height: Paper height
        margin_top: Top margin
        margin_right: Right margin
        margin_bottom: Bottom margin
        margin_left: Left margin

    Example:
        >>> PaperSpec(210, 297, 10, 10, 10, 10).usable_height
        277
    """

    width: float = DEFAULT_PAPER_WIDTH
    height: float = DEFAULT_PAPER_HEIGHT
    margin_top: float = DEFAULT_MARGIN
    margin_right: float = DEFAULT_MARGIN
    margin_bottom: float = DEFAULT_MARGIN
    margin_left: float = DEFAULT_MARGIN

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"paper size must be positive: {self.width}x{self.height}"
            )
        for name in ("margin_top", "margin_right", "margin_bottom", "margin_left"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative: {getattr(self, name)}")
        if self.usable_width <= 0:
            raise ConfigurationError("Left and right margins exceed paper width")
        if self.usable_height <= 0:
            raise ConfigurationError("Top and bottom margins exceed paper height")

    @classmethod
    def uniform(cls, width: float, height: float, margin: float) -> "PaperSpec":
        """Paper with the same margin on all four sides."""
        return cls(width, height, margin, margin, margin, margin)

    @property
    def usable_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def usable_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.height - self.margin_top - self.margin_bottom


@dataclass(frozen=True)
class ColumnLayout:
    """
    Column arrangement within the usable area (immutable).

    Attributes:
        count: Number of columns (>= 1)
        gutter: Horizontal gap between adjacent columns
        min_column_width: Narrowest acceptable column
    """

    count: int = 2
    gutter: float = 11.34  # 4 mm
    min_column_width: float = 36.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.count < 1:
            raise ConfigurationError(f"column count must be at least 1: {self.count}")
        if self.gutter < 0:
            raise ConfigurationError(f"column gutter must be non-negative: {self.gutter}")
        if self.min_column_width < 0:
            raise ConfigurationError(
                f"min_column_width must be non-negative: {self.min_column_width}"
            )

    def required_width(self) -> float:
        """Smallest usable width that satisfies min_column_width."""
        return self.count * self.min_column_width + (self.count - 1) * self.gutter


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for the layout engine (immutable).

    Attributes:
        paper: Paper size and margins
        columns: Column arrangement
        font_size: Code font size
        line_height_multiplier: Row height as a multiple of font_size
        line_number_padding: Space between line number and code
        inner_padding: Space reserved at the right edge of each column
        min_lines_after_header: Lines of a file that must follow its header
            in the same column
        tab_width: Spaces substituted for a tab
        continuation_marker: Gutter text on wrapped continuation rows
            (empty string omits it)
        title_page: Emit a dedicated title page first
        running_header: Text drawn in the top margin of content pages;
            "{name}" is replaced by the crate name
        page_numbers: Draw "Page n / m" in the bottom margin

    Example:
        >>> config = LayoutConfig(font_size=8, line_height_multiplier=1.25)
        >>> config.line_height
        10.0
    """

    paper: PaperSpec = field(default_factory=PaperSpec)
    columns: ColumnLayout = field(default_factory=ColumnLayout)
    font_size: float = 8.0
    line_height_multiplier: float = 1.2
    line_number_padding: float = 4.0
    inner_padding: float = 2.0
    min_lines_after_header: int = 2
    tab_width: int = 4
    continuation_marker: str = DEFAULT_CONTINUATION_MARKER
    title_page: bool = False
    running_header: Optional[str] = None
    page_numbers: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.font_size <= 0:
            raise ConfigurationError(f"font_size must be positive: {self.font_size}")
        if self.line_height_multiplier <= 0:
            raise ConfigurationError(
                f"line_height_multiplier must be positive: {self.line_height_multiplier}"
            )
        if self.line_number_padding < 0 or self.inner_padding < 0:
            raise ConfigurationError("paddings must be non-negative")
        if self.min_lines_after_header < 0:
            raise ConfigurationError(
                f"min_lines_after_header must be non-negative: {self.min_lines_after_header}"
            )
        if self.tab_width < 1:
            raise ConfigurationError(f"tab_width must be at least 1: {self.tab_width}")

    @property
    def line_height(self) -> float:
        """Height of one visual row."""
        return self.font_size * self.line_height_multiplier
