"""
Module: builder.layout.paginator

Purpose:
    Place visual lines into columns and pages by remaining vertical
    space. Placement is a pure state function so it can be tested
    without rendering.

Key Classes:
    - PagerState: Current page, column and vertical cursor
    - Placement: Where one visual line landed

Key Functions:
    - place(): Place one line, advancing column/page on overflow
    - reserve(): Keep a header together with its first lines
    - advance(): Move to the next column or page
    - paginate(): Run FileSections through the pager

Algorithm:
    For each visual line:
    1. If y + line height exceeds the column height, move to the next
       column (or column 0 of a new page) and reset y
    2. Place the line at y
    3. y += line height

Dependencies:
    - builder.layout.models: VisualLine, Page, Column
    - builder.layout.geometry: Geometry

Used By:
    - builder.layout.assembler: Crate assembly
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .config import LayoutConfig
from .geometry import EPSILON, Geometry
from .models import Column, FileSection, Page, PlacedLine, VisualLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PagerState:
    """
    Pager cursor (immutable).

    Attributes:
        page: Page index (0-indexed, relative to the first content page)
        column: Column index within the page
        y: Used height of the current column
    """

    page: int = 0
    column: int = 0
    y: float = 0.0

    @property
    def column_is_empty(self) -> bool:
        return self.y <= EPSILON


@dataclass(frozen=True)
class Placement:
    """Position of one placed line."""

    page: int
    column: int
    y: float


def advance(state: PagerState, geometry: Geometry) -> PagerState:
    """Move to the top of the next column, opening a page after the last."""
    if state.column + 1 < geometry.column_count:
        return PagerState(page=state.page, column=state.column + 1, y=0.0)
    return PagerState(page=state.page + 1, column=0, y=0.0)


def fits(state: PagerState, height: float, geometry: Geometry) -> bool:
    """Whether `height` fits below the cursor in the current column."""
    return state.y + height <= geometry.column_height + EPSILON


def place(
    state: PagerState,
    line: VisualLine,
    geometry: Geometry,
) -> Tuple[PagerState, Placement]:
    """
    Place one visual line.

    Args:
        state: Current cursor
        line: Line to place
        geometry: Resolved geometry

    Returns:
        (next state, placement of the line)
    """
    if not fits(state, line.height, geometry) and not state.column_is_empty:
        state = advance(state, geometry)
    placement = Placement(page=state.page, column=state.column, y=state.y)
    return PagerState(state.page, state.column, state.y + line.height), placement


def reserve(state: PagerState, height: float, geometry: Geometry) -> PagerState:
    """
    Ensure `height` fits in the current column before placing a block.

    A non-empty column that cannot hold the block is abandoned; an empty
    column is kept since advancing would not gain any space.
    """
    if state.column_is_empty or fits(state, height, geometry):
        return state
    return advance(state, geometry)


def header_reservation(section: FileSection, config: LayoutConfig) -> float:
    """Height of a header plus the lines that must follow it in its column."""
    follow = min(config.min_lines_after_header, len(section.lines))
    return section.header.height + sum(line.height for line in section.lines[:follow])


def paginate(
    sections: Sequence[FileSection],
    geometry: Geometry,
    config: LayoutConfig,
    *,
    first_index: int = 0,
) -> Tuple[Page, ...]:
    """
    Arrange file sections onto content pages.

    Sections are placed in the supplied order; each header is kept
    together with its first `min_lines_after_header` lines.

    Args:
        sections: Laid-out files in output order
        geometry: Resolved geometry
        config: Layout configuration
        first_index: Index given to the first content page

    Returns:
        Tuple of Pages, each with `geometry.column_count` columns
    """
    if not sections:
        return ()

    placed: Dict[Tuple[int, int], List[PlacedLine]] = {}
    state = PagerState()
    last_page = 0

    for section in sections:
        state = reserve(state, header_reservation(section, config), geometry)
        for line in (section.header, *section.lines):
            state, placement = place(state, line, geometry)
            placed.setdefault((placement.page, placement.column), []).append(
                PlacedLine(line, placement.y)
            )
            last_page = placement.page
        logger.debug(f"Placed {section.path}; cursor at page {state.page} column {state.column}")

    pages = tuple(
        Page(
            index=first_index + page,
            columns=tuple(
                Column(index=col, lines=tuple(placed.get((page, col), ())))
                for col in range(geometry.column_count)
            ),
        )
        for page in range(last_page + 1)
    )
    logger.debug(f"Paginated {len(sections)} sections onto {len(pages)} pages")
    return pages
