"""
Module: builder.layout.metrics

Purpose:
    Font metrics for text measurement. The layout engine only depends on
    the MetricsProvider interface; ReportLabMetrics is the standard
    implementation backed by reportlab's pdfmetrics.

Key Classes:
    - GlyphMetrics: Advance width, ascent and descent of one glyph
    - FontSet: Font names for the four style variants
    - MetricsProvider: Abstract base class for metric lookup
    - ReportLabMetrics: pdfmetrics-backed provider with fallback widths

Key Functions:
    - register_ttf_font(): Register a TrueType file as the code font

Dependencies:
    - reportlab: Font metrics and TrueType registration
    - git2pdf.core.models: TextStyle

Used By:
    - builder.layout.geometry: Line-number gutter width
    - builder.layout.line_breaker: Text measurement
    - builder.layout.assembler: Header and title measurement
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Set, Tuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError

from git2pdf.core.models import TextStyle
from git2pdf.errors import ConfigurationError, MetricsUnavailable

logger = logging.getLogger(__name__)

# Advance used for glyphs the font cannot measure (Courier is 0.6 em)
FALLBACK_ADVANCE_EM = 0.6
FALLBACK_ASCENT_EM = 0.8
FALLBACK_DESCENT_EM = 0.2


@dataclass(frozen=True, slots=True)
class GlyphMetrics:
    """Advance width plus ascent/descent (both positive) of one glyph."""

    advance: float
    ascent: float
    descent: float


@dataclass(frozen=True)
class FontSet:
    """
    Font names for the four style variants of the code font.

    Example:
        >>> FontSet().font_for(TextStyle(bold=True))
        'Courier-Bold'
    """

    regular: str = "Courier"
    bold: str = "Courier-Bold"
    italic: str = "Courier-Oblique"
    bold_italic: str = "Courier-BoldOblique"

    @classmethod
    def single(cls, name: str) -> "FontSet":
        """Use one face for every variant."""
        return cls(name, name, name, name)

    def font_for(self, style: TextStyle) -> str:
        if style.bold and style.italic:
            return self.bold_italic
        if style.bold:
            return self.bold
        if style.italic:
            return self.italic
        return self.regular


class MetricsProvider(ABC):
    """
    Abstract interface for glyph measurement.

    Implementations must return a usable fallback for unknown glyphs
    rather than failing.
    """

    @abstractmethod
    def measure(self, char: str, style: TextStyle, size: float) -> GlyphMetrics:
        """
        Measure one character.

        Args:
            char: Single character
            style: Style the character is drawn in
            size: Font size

        Returns:
            GlyphMetrics for the character
        """

    @abstractmethod
    def font_name(self, style: TextStyle) -> str:
        """Name of the font used to draw text in the given style."""

    @property
    def missing_glyphs(self) -> Set[str]:
        """Characters measured with a fallback width so far."""
        return set()

    def text_width(self, text: str, style: TextStyle, size: float) -> float:
        """Summed advance width of a string."""
        return sum(self.measure(ch, style, size).advance for ch in text)

    def line_metrics(self, style: TextStyle, size: float) -> Tuple[float, float]:
        """(ascent, descent) of the font at the given size."""
        sample = self.measure("M", style, size)
        return sample.ascent, sample.descent


class ReportLabMetrics(MetricsProvider):
    """
    Metrics from reportlab's registered fonts.

    Standard Type1 fonts (the Courier family by default) only cover the
    WinAnsi character set; characters outside it get the fallback
    advance and are recorded in `missing_glyphs`. Thread-safe.

    Example:
        >>> metrics = ReportLabMetrics()
        >>> metrics.measure("a", TextStyle(), 10).advance
        6.0
    """

    def __init__(self, fonts: Optional[FontSet] = None) -> None:
        self.fonts = fonts or FontSet()
        self._cache: Dict[Tuple[str, str, float], GlyphMetrics] = {}
        self._missing: Set[str] = set()
        self._lock = Lock()
        for name in {self.fonts.regular, self.fonts.bold, self.fonts.italic, self.fonts.bold_italic}:
            try:
                pdfmetrics.getFont(name)
            except KeyError as e:
                raise ConfigurationError(f"Font {name!r} is not registered") from e

    @property
    def missing_glyphs(self) -> Set[str]:
        """Characters that were measured with the fallback advance."""
        with self._lock:
            return set(self._missing)

    def font_name(self, style: TextStyle) -> str:
        return self.fonts.font_for(style)

    def measure(self, char: str, style: TextStyle, size: float) -> GlyphMetrics:
        font_name = self.fonts.font_for(style)
        key = (char, font_name, size)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        try:
            metrics = self._measure_glyph(char, font_name, size)
        except MetricsUnavailable as e:
            metrics = GlyphMetrics(
                advance=size * FALLBACK_ADVANCE_EM,
                ascent=size * FALLBACK_ASCENT_EM,
                descent=size * FALLBACK_DESCENT_EM,
            )
            with self._lock:
                if char not in self._missing:
                    logger.warning(f"{e}; using fallback width")
                self._missing.add(char)

        with self._lock:
            self._cache[key] = metrics
        return metrics

    def _measure_glyph(self, char: str, font_name: str, size: float) -> GlyphMetrics:
        font = pdfmetrics.getFont(font_name)
        if not _has_glyph(font, char):
            raise MetricsUnavailable(char, font_name)
        advance = pdfmetrics.stringWidth(char, font_name, size)
        if advance <= 0 and char.isprintable():
            raise MetricsUnavailable(char, font_name)
        ascent, descent = pdfmetrics.getAscentDescent(font_name, size)
        return GlyphMetrics(advance=advance, ascent=ascent, descent=abs(descent))


def _has_glyph(font, char: str) -> bool:
    """Whether the font can draw the character."""
    if isinstance(font, TTFont):
        return ord(char) in font.face.charWidths
    try:
        char.encode("cp1252")
    except UnicodeEncodeError:
        return False
    return True


def register_ttf_font(path: Path, name: str = "Git2PdfCode") -> FontSet:
    """
    Register a TrueType font file for code rendering.

    The same face is used for all style variants.

    Args:
        path: Path to a .ttf file
        name: Name to register the font under

    Returns:
        FontSet using the registered face

    Raises:
        ConfigurationError: If the file cannot be loaded
    """
    if name not in pdfmetrics.getRegisteredFontNames():
        try:
            pdfmetrics.registerFont(TTFont(name, str(path)))
        except (OSError, TTFError) as e:
            raise ConfigurationError(f"Cannot load font {path}: {e}") from e
        logger.info(f"Registered TrueType font {name} from {path}")
    return FontSet.single(name)
