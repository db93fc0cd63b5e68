"""
Module: builder.layout.composer

Purpose:
    Compose FileSections from source files. Highlighting and line
    breaking are independent per file and run on a thread pool; results
    are gathered back into input order before pagination.

Key Functions:
    - compose_file(): Highlight and break one file
    - compose_sections(): Compose every file of a crate in parallel

Dependencies:
    - concurrent.futures: Thread pool execution
    - builder.highlight: Highlighter capability
    - builder.layout.line_breaker: LineBreaker

Used By:
    - builder.controller: Per-crate build
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Sequence

from git2pdf.builder.highlight import Highlighter, PlainHighlighter
from git2pdf.core.models import SourceFile
from git2pdf.errors import ConfigurationError, HighlightFailure

from .line_breaker import LineBreaker
from .models import FileSection

logger = logging.getLogger(__name__)

ON_FAILURE_PLAIN = "plain"
ON_FAILURE_ABORT = "abort"
HIGHLIGHT_FAILURE_POLICIES = (ON_FAILURE_PLAIN, ON_FAILURE_ABORT)

_PLAIN = PlainHighlighter()


def compose_file(
    source: SourceFile,
    highlighter: Highlighter,
    breaker: LineBreaker,
    *,
    on_highlight_failure: str = ON_FAILURE_PLAIN,
) -> FileSection:
    """
    Highlight one file and break it into visual lines.

    Args:
        source: File to compose
        highlighter: Highlighter to apply
        breaker: Line breaker bound to the run's geometry
        on_highlight_failure: "plain" renders the file unstyled,
            "abort" re-raises

    Returns:
        FileSection with header and visual lines

    Raises:
        HighlightFailure: If highlighting fails and the policy is "abort"
    """
    warnings: List[str] = []
    highlighted = True
    try:
        lines = highlighter.highlight(source.content, source.path, source.language)
    except HighlightFailure as e:
        if on_highlight_failure == ON_FAILURE_ABORT:
            raise
        logger.warning(f"{e}; rendering as plain text")
        warnings.append(str(e))
        highlighted = False
        lines = _PLAIN.highlight(source.content, source.path, source.language)

    section = FileSection(
        path=source.path,
        header=breaker.header_line(source.path),
        lines=breaker.break_lines(lines),
        source_line_count=len(lines),
        highlighted=highlighted,
        warnings=tuple(warnings),
    )
    logger.debug(
        f"Composed {source.path}: {section.source_line_count} lines, "
        f"{len(section.lines)} rows"
    )
    return section


def compose_sections(
    files: Sequence[SourceFile],
    highlighter: Highlighter,
    breaker: LineBreaker,
    *,
    max_workers: int = 4,
    on_highlight_failure: str = ON_FAILURE_PLAIN,
) -> List[FileSection]:
    """
    Compose every file, one task per file.

    Args:
        files: Files in output order
        highlighter: Highlighter to apply
        breaker: Line breaker bound to the run's geometry
        max_workers: Thread pool size (1 runs sequentially)
        on_highlight_failure: Policy passed to compose_file()

    Returns:
        FileSections in the same order as `files`

    Raises:
        HighlightFailure: If a file fails under the "abort" policy
    """
    if on_highlight_failure not in HIGHLIGHT_FAILURE_POLICIES:
        raise ConfigurationError(
            f"on_highlight_failure must be one of {HIGHLIGHT_FAILURE_POLICIES}: "
            f"{on_highlight_failure!r}"
        )
    if not files:
        return []

    if max_workers <= 1 or len(files) == 1:
        return [
            compose_file(f, highlighter, breaker, on_highlight_failure=on_highlight_failure)
            for f in files
        ]

    with ThreadPoolExecutor(max_workers=min(max_workers, len(files))) as pool:
        futures: List[Future] = [
            pool.submit(
                compose_file,
                f,
                highlighter,
                breaker,
                on_highlight_failure=on_highlight_failure,
            )
            for f in files
        ]
        # Gather in submission order, not completion order
        return [future.result() for future in futures]
