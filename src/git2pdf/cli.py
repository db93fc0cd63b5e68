"""
Module: cli

Purpose:
    Command-line entry point. Renders an explicit list of files as one
    crate; crate discovery and file classification are left to the
    caller.

Key Functions:
    - main(): Parse arguments, configure logging, run the build
    - build_parser(): Argument parser

Dependencies:
    - argparse (std)
    - git2pdf.builder: BuildConfig, build_all

Used By:
    - git2pdf.__main__ and the `git2pdf` console script
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from git2pdf import __version__
from git2pdf.builder import BuildConfig, build_all, parse_margins, parse_paper_size
from git2pdf.core.models import CrateSource, SourceFile
from git2pdf.errors import ConfigurationError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git2pdf",
        description="Print source files to a multi-column PDF for code review",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s my_crate src/lib.rs src/parser.rs
  %(prog)s my_crate src/*.rs --columns 3 --font-size 7 -o out/
  %(prog)s my_crate src/lib.rs --test-file tests/it.rs --include-tests
        """,
    )
    parser.add_argument("name", help="Crate name (also names the output file)")
    parser.add_argument("files", nargs="+", type=Path, help="Files to render, in order")

    parser.add_argument(
        "-o", "--output", type=Path, default=Path("."),
        help="Output directory for generated PDFs (default: current directory)",
    )
    parser.add_argument(
        "--paper-size", default="210x297",
        help="Paper size as WIDTHxHEIGHT in mm (default: 210x297 for A4)",
    )
    parser.add_argument(
        "--margins", default="10",
        help='Margins in mm, CSS-style: "all", "vertical horizontal", '
             'or "top right bottom left" (default: 10)',
    )
    parser.add_argument("--font-size", type=float, default=8.0, help="Code font size in points")
    parser.add_argument("--line-height", type=float, default=1.2, help="Line-height multiplier")
    parser.add_argument("--columns", type=int, default=2, help="Columns per page (default: 2)")
    parser.add_argument(
        "--theme", default="default",
        help='Pygments style name, or "none" to disable highlighting (default: default)',
    )
    parser.add_argument("--include-tests", action="store_true", help="Include test files in output")
    parser.add_argument(
        "--test-file", action="append", type=Path, default=[], metavar="PATH",
        help="File holding tests; rendered after FILES only with --include-tests (repeatable)",
    )
    parser.add_argument("--no-title-page", action="store_true", help="Omit the title page")
    parser.add_argument("--workers", type=int, default=4, help="Worker threads (default: 4)")
    parser.add_argument("--font", type=Path, help="TrueType font to use instead of Courier")
    parser.add_argument("--crate-version", help="Version shown on the title page")
    parser.add_argument("--description", help="Description shown on the title page")
    parser.add_argument("--commit", help="Commit shown on the title page")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def read_sources(paths: Sequence[Path], *, is_test: bool = False) -> List[SourceFile]:
    """Read files as UTF-8 (undecodable bytes are replaced)."""
    sources = []
    for path in paths:
        content = path.read_text(encoding="utf-8", errors="replace")
        sources.append(SourceFile(path=path.as_posix(), content=content, is_test=is_test))
    return sources


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = BuildConfig(
            output_dir=args.output,
            paper_size_mm=parse_paper_size(args.paper_size),
            margins_mm=parse_margins(args.margins),
            font_size=args.font_size,
            line_height=args.line_height,
            columns=args.columns,
            theme=args.theme,
            include_tests=args.include_tests,
            title_page=not args.no_title_page,
            max_workers=args.workers,
            font_path=args.font,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    try:
        files = read_sources(args.files) + read_sources(args.test_file, is_test=True)
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return EXIT_CONFIG

    try:
        crate = CrateSource(
            name=args.name,
            files=files,
            version=args.crate_version,
            description=args.description,
            commit=args.commit,
        )
        summary = build_all([crate], config)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_CONFIG

    for result in summary.results:
        if result.ok:
            print(f"{result.name}: {result.page_count} pages -> {result.output_path}")
        else:
            print(f"{result.name}: {result.status} ({result.error})")
        for warning in result.warnings:
            print(f"  warning: {warning}")

    return EXIT_OK if summary.ok else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
