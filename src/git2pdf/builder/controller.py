"""
Module: builder.controller

Purpose:
    Orchestrate the complete rendering pipeline.
    Filter → Highlight/Break → Paginate → Assemble → Emit → Write

Key Functions:
    - build_crate(): Render one crate to PDF
    - build_all(): Render every crate and summarize the run
    - create_metrics(): Metrics provider for a BuildConfig
    - unique_output_path(): Collision-free PDF path within a run

Key Classes:
    - CrateResult: Outcome for one crate
    - BuildSummary: Outcome for the whole run

Dependencies:
    - builder.highlight: Highlighter selection
    - builder.layout: Geometry, composition and pagination
    - builder.output: Instruction stream and PDF rendering

Used By:
    - git2pdf.cli: Command-line entry point
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple

from git2pdf.core.models import CrateSource, SourceFile
from git2pdf.errors import EmptyCrate, HighlightFailure, WriterFailure

from .config import BuildConfig
from .highlight import Highlighter, create_highlighter, split_lines
from .layout import (
    Geometry,
    LineBreaker,
    MetricsProvider,
    ReportLabMetrics,
    assemble_document,
    compose_sections,
    register_ttf_font,
    resolve_geometry,
)
from .output import DocumentWriter, ReportLabWriter, emit_instructions

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class CrateResult:
    """
    Outcome for one crate (immutable).

    Attributes:
        name: Crate name
        status: "success", "skipped" or "failed"
        output_path: Written PDF (success only)
        page_count: Pages in the document
        file_count: Files rendered
        warnings: Recoverable problems met while building
        error: Reason for a skip or failure
    """

    name: str
    status: str
    output_path: Optional[Path] = None
    page_count: int = 0
    file_count: int = 0
    warnings: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SUCCESS


@dataclass(frozen=True)
class BuildSummary:
    """
    Outcome for a whole run (immutable).

    Example:
        >>> summary = build_all(crates, config)
        >>> print(f"{len(summary.succeeded)} of {len(summary.results)} crates rendered")
    """

    results: Tuple[CrateResult, ...]
    elapsed: float = 0.0

    @property
    def succeeded(self) -> Tuple[CrateResult, ...]:
        return tuple(r for r in self.results if r.status == STATUS_SUCCESS)

    @property
    def skipped(self) -> Tuple[CrateResult, ...]:
        return tuple(r for r in self.results if r.status == STATUS_SKIPPED)

    @property
    def failed(self) -> Tuple[CrateResult, ...]:
        return tuple(r for r in self.results if r.status == STATUS_FAILED)

    @property
    def ok(self) -> bool:
        """True when no crate failed."""
        return not self.failed


def create_metrics(config: BuildConfig) -> MetricsProvider:
    """Metrics for the configured font (Courier unless font_path is set)."""
    if config.font_path is not None:
        return ReportLabMetrics(register_ttf_font(Path(config.font_path)))
    return ReportLabMetrics()


def max_line_number(files: Sequence[SourceFile]) -> int:
    """Largest line number among `files` (at least 1)."""
    return max((len(split_lines(f.content)) for f in files), default=1) or 1


def unique_output_path(config: BuildConfig, crate_name: str, used: Set[Path]) -> Path:
    """
    Output path for a crate that no earlier crate in the run has claimed.

    Names that sanitize to the same file get a numeric suffix:
    "my crate" and "my/crate" become my_crate.pdf and my_crate-2.pdf.
    The returned path is added to `used`.
    """
    path = config.output_path_for(crate_name)
    candidate = path
    suffix = 2
    while candidate in used:
        candidate = path.with_name(f"{path.stem}-{suffix}{path.suffix}")
        suffix += 1
    if candidate != path:
        logger.warning(f"{crate_name!r} collides with an earlier crate; writing {candidate.name}")
    used.add(candidate)
    return candidate


def build_crate(
    crate: CrateSource,
    config: BuildConfig,
    *,
    geometry: Optional[Geometry] = None,
    metrics: Optional[MetricsProvider] = None,
    highlighter: Optional[Highlighter] = None,
    writer: Optional[DocumentWriter] = None,
    output_path: Optional[Path] = None,
) -> CrateResult:
    """
    Render one crate to `<output_dir>/<crate>.pdf`.

    Recoverable failures (empty crate, highlight failure under the
    "abort" policy, writer failure) are reported in the result rather
    than raised, so other crates can continue.

    Args:
        crate: Crate to render
        config: Build configuration
        geometry: Shared geometry (resolved from this crate when omitted)
        metrics: Metrics provider (created from config when omitted)
        highlighter: Highlighter (created from config.theme when omitted)
        writer: Document writer (ReportLabWriter when omitted)
        output_path: Target PDF (derived from the crate name when omitted)

    Returns:
        CrateResult for the crate

    Raises:
        ConfigurationError: If the configuration leaves no usable layout
    """
    start_time = time.perf_counter()
    layout_config = config.to_layout_config()
    metrics = metrics or create_metrics(config)
    highlighter = highlighter or create_highlighter(config.theme)
    writer = writer or ReportLabWriter()

    files = crate.eligible_files(config.include_tests)
    if not files:
        notice = str(EmptyCrate(crate.name))
        logger.info(f"Skipping: {notice}")
        return CrateResult(name=crate.name, status=STATUS_SKIPPED, error=notice)

    if geometry is None:
        geometry = resolve_geometry(layout_config, metrics, max_line_number(files))

    logger.info(f"Building {crate.name}: {len(files)} files")
    breaker = LineBreaker(geometry, metrics, layout_config)
    try:
        sections = compose_sections(
            files,
            highlighter,
            breaker,
            max_workers=config.max_workers,
            on_highlight_failure=config.on_highlight_failure,
        )
        document = assemble_document(
            crate,
            sections,
            geometry,
            layout_config,
            metrics,
            details=_title_details(config, highlighter),
        )
    except HighlightFailure as e:
        logger.error(f"{crate.name}: {e}")
        return CrateResult(name=crate.name, status=STATUS_FAILED, error=str(e))
    except EmptyCrate as e:
        logger.info(f"Skipping: {e}")
        return CrateResult(name=crate.name, status=STATUS_SKIPPED, error=str(e))

    instructions = emit_instructions(document, geometry, layout_config, metrics)
    output_path = output_path or config.output_path_for(crate.name)
    try:
        writer.write(instructions, output_path, title=f"{crate.name} - Code Review")
    except WriterFailure as e:
        logger.error(f"{crate.name}: {e}")
        return CrateResult(
            name=crate.name,
            status=STATUS_FAILED,
            page_count=document.page_count,
            file_count=document.file_count,
            warnings=document.warnings,
            error=str(e),
        )

    warnings = list(document.warnings)
    missing = metrics.missing_glyphs
    if missing:
        listed = " ".join(f"U+{ord(ch):04X}" for ch in sorted(missing))
        warnings.append(f"No glyph metrics for {listed}; fallback widths used")

    elapsed = time.perf_counter() - start_time
    logger.info(f"Built {crate.name} in {elapsed:.2f}s: {document.page_count} pages")
    return CrateResult(
        name=crate.name,
        status=STATUS_SUCCESS,
        output_path=output_path,
        page_count=document.page_count,
        file_count=document.file_count,
        warnings=tuple(warnings),
    )


def build_all(
    crates: Sequence[CrateSource],
    config: BuildConfig,
    *,
    metrics: Optional[MetricsProvider] = None,
    highlighter: Optional[Highlighter] = None,
    writer: Optional[DocumentWriter] = None,
) -> BuildSummary:
    """
    Render every crate.

    Geometry is resolved once, before any layout work, with the gutter
    sized to the longest file across all crates.
    Crates whose names sanitize to the same file name get distinct
    output paths (see unique_output_path).

    Args:
        crates: Crates in output order
        config: Build configuration
        metrics: Metrics provider (created from config when omitted)
        highlighter: Highlighter (created from config.theme when omitted)
        writer: Document writer (ReportLabWriter when omitted)

    Returns:
        BuildSummary with one result per crate

    Raises:
        ConfigurationError: If the configuration leaves no usable layout
    """
    start_time = time.perf_counter()
    metrics = metrics or create_metrics(config)
    highlighter = highlighter or create_highlighter(config.theme)
    writer = writer or ReportLabWriter()

    all_files: List[SourceFile] = [
        f for crate in crates for f in crate.eligible_files(config.include_tests)
    ]
    geometry = resolve_geometry(config.to_layout_config(), metrics, max_line_number(all_files))

    results: List[CrateResult] = []
    used_paths: Set[Path] = set()
    for crate in crates:
        results.append(
            build_crate(
                crate,
                config,
                geometry=geometry,
                metrics=metrics,
                highlighter=highlighter,
                writer=writer,
                output_path=unique_output_path(config, crate.name, used_paths),
            )
        )
    summary = BuildSummary(results=tuple(results), elapsed=time.perf_counter() - start_time)
    logger.info(
        f"Run finished in {summary.elapsed:.2f}s: {len(summary.succeeded)} built, "
        f"{len(summary.skipped)} skipped, {len(summary.failed)} failed"
    )
    return summary


def _title_details(config: BuildConfig, highlighter: Highlighter) -> Tuple[str, ...]:
    """Generation parameters shown on the title page."""
    width, height = config.paper_size_mm
    return (
        f"Paper {width:g}x{height:g} mm, {config.columns} columns",
        f"Font {config.font_size:g} pt, line height {config.line_height:g}",
        f"Theme {highlighter.name}",
    )
