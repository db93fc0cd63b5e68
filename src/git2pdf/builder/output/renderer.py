"""
Module: builder.output.renderer

Purpose:
    Render an instruction stream to PDF using ReportLab.
    Instructions use top-down coordinates; ReportLab's origin is the
    bottom-left corner, so every y is flipped against the page height.

Key Classes:
    - DocumentWriter: Abstract base class for writers
    - ReportLabWriter: Canvas-based PDF writer

Dependencies:
    - reportlab: PDF generation
    - builder.output.instructions: Instruction types

Used By:
    - builder.controller: Pipeline orchestration
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from reportlab.lib.colors import HexColor
from reportlab.pdfgen import canvas

from git2pdf.errors import WriterFailure

from .instructions import (
    BeginColumn,
    BeginPage,
    EndColumn,
    EndPage,
    FillRect,
    Instruction,
    PlaceText,
)

logger = logging.getLogger(__name__)


class DocumentWriter(ABC):
    """Consumes an instruction stream and produces one artifact."""

    @abstractmethod
    def write(
        self,
        instructions: Sequence[Instruction],
        output_path: Path,
        *,
        title: Optional[str] = None,
    ) -> Path:
        """
        Write one document.

        Args:
            instructions: Instruction stream for the whole document
            output_path: Target file
            title: Document title metadata

        Returns:
            Path of the written artifact

        Raises:
            WriterFailure: If the artifact cannot be produced
        """


class ReportLabWriter(DocumentWriter):
    """
    PDF writer on a ReportLab canvas.

    Runs in invariant mode so identical instruction streams produce
    byte-identical files.

    Example:
        >>> ReportLabWriter().write(instructions, Path("out/demo.pdf"), title="demo")
        PosixPath('out/demo.pdf')
    """

    def __init__(self, *, invariant: bool = True, compress: bool = True) -> None:
        self.invariant = invariant
        self.compress = compress

    def write(
        self,
        instructions: Sequence[Instruction],
        output_path: Path,
        *,
        title: Optional[str] = None,
    ) -> Path:
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            pages = self._render(instructions, output_path, title)
        except WriterFailure:
            raise
        except (OSError, ValueError, KeyError, AttributeError) as e:
            raise WriterFailure(f"Failed to write {output_path}: {e}") from e

        logger.info(f"Rendered {pages} pages to {output_path}")
        return output_path

    def _render(
        self,
        instructions: Sequence[Instruction],
        output_path: Path,
        title: Optional[str],
    ) -> int:
        c: Optional[canvas.Canvas] = None
        page_height = 0.0
        pages = 0

        for ins in instructions:
            if isinstance(ins, BeginPage):
                if c is None:
                    c = canvas.Canvas(
                        str(output_path),
                        pagesize=(ins.width, ins.height),
                        invariant=1 if self.invariant else 0,
                        pageCompression=1 if self.compress else 0,
                    )
                    if title:
                        c.setTitle(title)
                else:
                    c.setPageSize((ins.width, ins.height))
                page_height = ins.height
            elif c is None:
                raise WriterFailure(f"{type(ins).__name__} before the first page")
            elif isinstance(ins, PlaceText):
                c.setFillColor(HexColor(ins.color))
                c.setFont(ins.font, ins.size)
                c.drawString(ins.x, _transform_y(ins.y, page_height), ins.text)
            elif isinstance(ins, FillRect):
                c.setFillColor(HexColor(ins.color))
                c.rect(
                    ins.x,
                    _transform_y(ins.y + ins.height, page_height),
                    ins.width,
                    ins.height,
                    stroke=0,
                    fill=1,
                )
            elif isinstance(ins, EndPage):
                c.showPage()
                pages += 1
            elif isinstance(ins, (BeginColumn, EndColumn)):
                continue

        if c is None:
            raise WriterFailure(f"No pages to write to {output_path}")
        c.save()
        return pages


def _transform_y(y: float, page_height: float) -> float:
    """Convert a top-down y coordinate to ReportLab's bottom-up system."""
    return page_height - y
