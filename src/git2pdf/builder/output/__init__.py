"""
Module: builder.output

Purpose:
    Instruction stream and PDF output.

Key Functions:
    - emit_instructions(): CrateDocument to draw instructions

Key Classes:
    - DocumentWriter: Writer interface
    - ReportLabWriter: ReportLab PDF writer
"""

from .instructions import (
    BeginColumn,
    BeginPage,
    EndColumn,
    EndPage,
    FillRect,
    Instruction,
    PlaceText,
    emit_instructions,
)
from .renderer import DocumentWriter, ReportLabWriter

__all__ = [
    "BeginColumn",
    "BeginPage",
    "EndColumn",
    "EndPage",
    "FillRect",
    "Instruction",
    "PlaceText",
    "emit_instructions",
    "DocumentWriter",
    "ReportLabWriter",
]
