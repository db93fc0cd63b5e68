"""
Module: sources

Purpose:
    Input handed over by the file/crate source collaborator: an ordered
    list of already-filtered files per crate, plus crate metadata shown
    on the title page.

Key Classes:
    - SourceFile: Path, content and test flag of one file
    - CrateSource: Named, ordered collection of SourceFiles

Dependencies:
    - dataclasses (std)

Used By:
    - builder.controller: Crate orchestration
    - builder.layout.composer: Per-file layout tasks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class SourceFile:
    """
    One file of a crate.

    Attributes:
        path: Path relative to the crate root, shown in the file header
        content: Full text content
        is_test: Whether the file holds tests (skipped unless tests are included)
        language: Optional language hint for the highlighter (e.g. "rust")
    """

    path: str
    content: str
    is_test: bool = False
    language: Optional[str] = None


@dataclass(frozen=True)
class CrateSource:
    """
    Ordered files of one crate; one document is produced per crate.

    Example:
        >>> crate = CrateSource("demo", (SourceFile("src/lib.rs", "fn main() {}"),))
        >>> crate.file_count
        1
    """

    name: str
    files: Tuple[SourceFile, ...] = field(default_factory=tuple)
    version: Optional[str] = None
    description: Optional[str] = None
    commit: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("crate name must not be empty")
        # Accept any sequence but store a tuple
        object.__setattr__(self, "files", tuple(self.files))

    @property
    def file_count(self) -> int:
        return len(self.files)

    def eligible_files(self, include_tests: bool) -> Tuple[SourceFile, ...]:
        """Files to render under the given test policy, in supplied order."""
        if include_tests:
            return self.files
        return tuple(f for f in self.files if not f.is_test)
