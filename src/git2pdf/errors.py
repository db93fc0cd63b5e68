"""
Module: errors

Purpose:
    Error taxonomy for the rendering pipeline. Errors are grouped by how
    far they propagate:

    - ConfigurationError: fatal for the whole run, raised before layout
    - MetricsUnavailable: recoverable, a fallback advance is used
    - HighlightFailure: recoverable per file
    - EmptyCrate: recoverable per crate (crate is skipped)
    - WriterFailure: fatal per crate, other crates continue

Used By:
    - builder.layout: Geometry validation, metrics fallback
    - builder.highlight: Tokenizer failures
    - builder.output.renderer: Writer failures
    - builder.controller: Per-crate isolation and summary
"""

from __future__ import annotations

from typing import Optional


class Git2PdfError(Exception):
    """Base class for all pipeline errors."""
    pass


class ConfigurationError(Git2PdfError, ValueError):
    """Paper, margin, column or font configuration leaves no usable layout."""
    pass


class MetricsUnavailable(Git2PdfError):
    """A glyph has no usable metric in the active font."""

    def __init__(self, char: str, font_name: str) -> None:
        super().__init__(f"No metrics for U+{ord(char):04X} in font {font_name}")
        self.char = char
        self.font_name = font_name


class HighlightFailure(Git2PdfError):
    """Tokenizing one file failed."""

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        message = f"Failed to highlight {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause


class EmptyCrate(Git2PdfError):
    """A crate has no eligible files after filtering."""

    def __init__(self, crate_name: str) -> None:
        super().__init__(f"Crate {crate_name!r} has no files to render")
        self.crate_name = crate_name


class WriterFailure(Git2PdfError):
    """The document writer could not produce the output artifact."""
    pass
