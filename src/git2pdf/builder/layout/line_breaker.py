"""
Module: builder.layout.line_breaker

Purpose:
    Break one styled source line into visual lines that each fit the
    column content width, and build the gutter (line number or
    continuation marker) for each of them.

Key Classes:
    - LineBreaker: Greedy span-boundary breaker with character fallback

Key Functions:
    - normalize_text(): Expand tabs and blank out control characters
    - fit_text(): Shorten text with an ellipsis to fit a width

Algorithm:
    Greedy:
    1. Append spans while the projected width fits
    2. On overflow, start a new row with the overflowing span
    3. A span too wide for any row fills the remaining space of the
       current row character by character, then continues on new rows

Dependencies:
    - builder.layout.geometry: content_width, gutter_width
    - builder.layout.metrics: Glyph advances

Used By:
    - builder.layout.composer: Per-file layout tasks
    - builder.layout.assembler: Title lines
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Sequence, Tuple

from git2pdf.core.models import SourceLine, StyleSpan, TextStyle

from .config import LayoutConfig
from .geometry import EPSILON, Geometry
from .metrics import MetricsProvider
from .models import (
    LINE_KIND_CODE,
    LINE_KIND_HEADER,
    GlyphRun,
    VisualLine,
)

logger = logging.getLogger(__name__)

LINE_NUMBER_STYLE = TextStyle("#888888")
CONTINUATION_STYLE = TextStyle("#bbbbbb")
HEADER_STYLE = TextStyle("#333333", bold=True)

# Horizontal inset of the file path inside its header band
HEADER_INSET = 2.0
ELLIPSIS = "..."

# C0/C1 control characters except tab, which is expanded separately
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def normalize_text(text: str, tab_width: int) -> str:
    """
    Expand tabs to `tab_width` spaces and replace other control
    characters with a single space.

    Example:
        >>> normalize_text("\\tx\\x0c", 4)
        '    x '
    """
    return _CONTROL_CHARS.sub(" ", text.replace("\t", " " * tab_width))


def fit_text(
    text: str,
    style: TextStyle,
    size: float,
    max_width: float,
    metrics: MetricsProvider,
    *,
    keep_end: bool = True,
) -> str:
    """
    Shorten `text` with an ellipsis until it fits `max_width`.

    Args:
        text: Text to fit
        style: Style used for measurement
        size: Font size
        max_width: Available width
        metrics: Metrics provider
        keep_end: Drop characters from the start (paths) rather than the end

    Returns:
        The text unchanged if it fits, otherwise the shortened text
        (empty if not even the ellipsis fits)
    """
    if metrics.text_width(text, style, size) <= max_width + EPSILON:
        return text
    if metrics.text_width(ELLIPSIS, style, size) > max_width + EPSILON:
        return ""

    remaining = text
    while remaining:
        remaining = remaining[1:] if keep_end else remaining[:-1]
        candidate = ELLIPSIS + remaining if keep_end else remaining + ELLIPSIS
        if metrics.text_width(candidate, style, size) <= max_width + EPSILON:
            return candidate
    return ELLIPSIS


class LineBreaker:
    """
    Break source lines into width-bounded visual lines.

    Stateless once constructed; safe to share between worker threads.

    Example:
        >>> breaker = LineBreaker(geometry, metrics, config)
        >>> rows = breaker.break_line(SourceLine(1, (StyleSpan("x" * 500),)))
        >>> [len(r.text) for r in rows]
        [80, 80, 80, 80, 80, 80, 20]
    """

    def __init__(
        self,
        geometry: Geometry,
        metrics: MetricsProvider,
        config: LayoutConfig,
    ) -> None:
        self.geometry = geometry
        self.metrics = metrics
        self.config = config
        self._size = geometry.font_size
        self._limit = geometry.content_width + EPSILON

    def normalize_spans(self, spans: Iterable[StyleSpan]) -> Tuple[StyleSpan, ...]:
        """Normalize span text and drop spans left empty."""
        normalized = []
        for span in spans:
            text = normalize_text(span.text, self.config.tab_width)
            if text:
                normalized.append(StyleSpan(text, span.style))
        return tuple(normalized)

    def break_line(self, source: SourceLine) -> Tuple[VisualLine, ...]:
        """
        Break one source line into visual lines.

        Args:
            source: Styled source line

        Returns:
            Non-empty tuple of VisualLines; the first carries the line
            number, the rest are continuation rows
        """
        rows: List[List[GlyphRun]] = [[]]
        x = 0.0

        for span in self.normalize_spans(source.spans):
            width = self.metrics.text_width(span.text, span.style, self._size)

            if x + width <= self._limit:
                rows[-1].append(self._run(span.text, span.style, x, width))
                x += width
                continue

            if width <= self._limit and rows[-1]:
                # Span fits a fresh row: wrap at the span boundary
                rows.append([self._run(span.text, span.style, 0.0, width)])
                x = width
                continue

            x = self._hard_wrap(span, rows, x, source.number)

        return tuple(
            self._visual_line(runs, source.number, continuation=i > 0)
            for i, runs in enumerate(rows)
        )

    def break_lines(self, lines: Sequence[SourceLine]) -> Tuple[VisualLine, ...]:
        """Break every line of a file, preserving order."""
        result: List[VisualLine] = []
        for source in lines:
            result.extend(self.break_line(source))
        return tuple(result)

    def header_line(self, path: str) -> VisualLine:
        """
        Build the header row for a file: bold path on a grey band,
        truncated from the left when wider than the column.
        """
        available = self.geometry.column_width - 2 * HEADER_INSET
        text = fit_text(path, HEADER_STYLE, self._size, available, self.metrics)
        if text != path:
            logger.debug(f"Header for {path} truncated to {text!r}")
        width = self.metrics.text_width(text, HEADER_STYLE, self._size)
        runs = (GlyphRun(text, HEADER_STYLE, HEADER_INSET, width),) if text else ()
        return VisualLine(
            runs=runs,
            height=self.geometry.line_height,
            baseline=self.geometry.baseline_offset,
            kind=LINE_KIND_HEADER,
        )

    def _hard_wrap(
        self,
        span: StyleSpan,
        rows: List[List[GlyphRun]],
        x: float,
        number: int,
    ) -> float:
        """Place a span character by character, opening rows as needed."""
        chunk: List[str] = []
        chunk_x = x
        chunk_width = 0.0

        for ch in span.text:
            advance = self.metrics.measure(ch, span.style, self._size).advance
            if x + advance > self._limit and (rows[-1] or chunk):
                if chunk:
                    rows[-1].append(self._run("".join(chunk), span.style, chunk_x, chunk_width))
                rows.append([])
                chunk, chunk_x, chunk_width, x = [], 0.0, 0.0, 0.0
            if advance > self._limit:
                logger.warning(
                    f"Glyph U+{ord(ch):04X} on line {number} is wider than the "
                    f"content width; placed alone"
                )
            chunk.append(ch)
            chunk_width += advance
            x += advance

        if chunk:
            rows[-1].append(self._run("".join(chunk), span.style, chunk_x, chunk_width))
        return x

    def _run(self, text: str, style: TextStyle, offset: float, width: float) -> GlyphRun:
        return GlyphRun(text, style, self.geometry.gutter_width + offset, width)

    def _visual_line(
        self,
        runs: List[GlyphRun],
        number: int,
        *,
        continuation: bool,
    ) -> VisualLine:
        if continuation:
            gutter = self._gutter(self.config.continuation_marker, CONTINUATION_STYLE)
        else:
            gutter = self._gutter(str(number), LINE_NUMBER_STYLE)
        return VisualLine(
            runs=tuple(runs),
            height=self.geometry.line_height,
            baseline=self.geometry.baseline_offset,
            kind=LINE_KIND_CODE,
            line_number=None if continuation else number,
            source_number=number,
            gutter=gutter,
            is_continuation=continuation,
        )

    def _gutter(self, text: str, style: TextStyle):
        """Right-aligned gutter run, or None for an empty marker."""
        if not text:
            return None
        width = self.metrics.text_width(text, style, self._size)
        right = self.geometry.gutter_width - self.config.line_number_padding
        return GlyphRun(text, style, max(0.0, right - width), width)
