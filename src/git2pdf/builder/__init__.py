"""
Module: builder

Purpose:
    Rendering pipeline: highlighting, layout, pagination and PDF output.

Key Functions:
    - build_crate(): Render one crate
    - build_all(): Render every crate and summarize

Key Classes:
    - BuildConfig: Run configuration
    - BuildSummary: Per-crate outcomes
"""

from .config import BuildConfig, parse_margins, parse_paper_size
from .controller import BuildSummary, CrateResult, build_all, build_crate

__all__ = [
    "BuildConfig",
    "BuildSummary",
    "CrateResult",
    "build_all",
    "build_crate",
    "parse_margins",
    "parse_paper_size",
]
