"""
Module: builder.layout

Purpose:
    Layout and pagination engine.
    Converts highlighted source lines into positioned pages.

Key Functions:
    - resolve_geometry(): Column and gutter dimensions
    - compose_sections(): Highlight and break files in parallel
    - paginate(): Place visual lines into columns and pages
    - assemble_document(): Build a CrateDocument

Key Classes:
    - LayoutConfig: Configuration for page layout
    - LineBreaker: Width-bounded line breaking
    - ReportLabMetrics: Font metrics provider

Used By:
    - builder.controller: Main build controller
"""

from .config import ColumnLayout, LayoutConfig, PaperSpec
from .metrics import (
    FontSet,
    GlyphMetrics,
    MetricsProvider,
    ReportLabMetrics,
    register_ttf_font,
)
from .geometry import Geometry, resolve_geometry
from .models import (
    Column,
    CrateDocument,
    FileSection,
    GlyphRun,
    Page,
    PlacedLine,
    VisualLine,
)
from .line_breaker import LineBreaker
from .paginator import PagerState, Placement, advance, paginate, place, reserve
from .composer import compose_file, compose_sections
from .assembler import assemble_document, build_title_page

__all__ = [
    # Config
    "ColumnLayout",
    "LayoutConfig",
    "PaperSpec",
    # Metrics
    "FontSet",
    "GlyphMetrics",
    "MetricsProvider",
    "ReportLabMetrics",
    "register_ttf_font",
    # Geometry
    "Geometry",
    "resolve_geometry",
    # Models
    "Column",
    "CrateDocument",
    "FileSection",
    "GlyphRun",
    "Page",
    "PlacedLine",
    "VisualLine",
    # Functions
    "LineBreaker",
    "PagerState",
    "Placement",
    "advance",
    "paginate",
    "place",
    "reserve",
    "compose_file",
    "compose_sections",
    "assemble_document",
    "build_title_page",
]
