"""
Tests for the build controller: per-crate isolation and the run summary.
"""

from pathlib import Path
from typing import List

import pytest

from git2pdf.builder import BuildConfig, build_all, build_crate
from git2pdf.builder.controller import max_line_number, unique_output_path
from git2pdf.builder.highlight import PlainHighlighter
from git2pdf.builder.output import DocumentWriter, PlaceText
from git2pdf.core.models import CrateSource, SourceFile
from git2pdf.errors import HighlightFailure, WriterFailure

try:
    from pypdf import PdfReader
    PYPDF_AVAILABLE = True
except ImportError:
    PYPDF_AVAILABLE = False


LIB_RS = "pub fn add(a: i32, b: i32) -> i32 {\n    a + b\n}\n"


class RecordingWriter(DocumentWriter):
    """Keeps instruction streams in memory; fails for names in `fail_for`."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.written: List[tuple] = []

    def write(self, instructions, output_path, *, title=None):
        if Path(output_path).stem in self.fail_for:
            raise WriterFailure(f"disk full writing {output_path}")
        self.written.append((Path(output_path), tuple(instructions)))
        return Path(output_path)


class FailingHighlighter(PlainHighlighter):
    """Fails for paths containing "bad"."""

    name = "failing"

    def highlight(self, content, path, language=None):
        if "bad" in path:
            raise HighlightFailure(path, RuntimeError("lexer exploded"))
        return super().highlight(content, path, language)


@pytest.fixture
def config(tmp_path):
    return BuildConfig(output_dir=tmp_path, theme="none", max_workers=2)


def crate(name: str, *files: SourceFile) -> CrateSource:
    return CrateSource(name, files)


class TestBuildCrate:
    """Tests for build_crate()."""

    def test_when_files_then_pdf_written(self, config, tmp_path):
        result = build_crate(crate("demo", SourceFile("src/lib.rs", LIB_RS)), config)

        assert result.ok
        assert result.output_path == tmp_path / "demo.pdf"
        assert result.output_path.exists()
        assert result.page_count == 2  # title page + one content page
        assert result.file_count == 1

    def test_when_only_test_files_then_skipped(self, config):
        result = build_crate(crate("demo", SourceFile("tests/it.rs", LIB_RS, is_test=True)), config)

        assert result.status == "skipped"
        assert "no files" in result.error
        assert not (config.output_dir / "demo.pdf").exists()

    def test_when_include_tests_then_test_files_rendered(self, tmp_path):
        config = BuildConfig(output_dir=tmp_path, theme="none", include_tests=True)
        writer = RecordingWriter()

        result = build_crate(
            crate("demo", SourceFile("tests/it.rs", LIB_RS, is_test=True)), config, writer=writer
        )

        assert result.ok
        headers = [i.text for i in writer.written[0][1] if isinstance(i, PlaceText) and i.role == "header"]
        assert headers == ["tests/it.rs"]

    def test_when_highlight_fails_and_abort_then_failed(self, tmp_path):
        config = BuildConfig(output_dir=tmp_path, on_highlight_failure="abort")

        result = build_crate(
            crate("demo", SourceFile("src/bad.rs", LIB_RS)),
            config,
            highlighter=FailingHighlighter(),
            writer=RecordingWriter(),
        )

        assert result.status == "failed"
        assert "src/bad.rs" in result.error

    def test_when_highlight_fails_and_plain_then_success_with_warning(self, tmp_path):
        config = BuildConfig(output_dir=tmp_path)

        result = build_crate(
            crate("demo", SourceFile("src/bad.rs", LIB_RS)),
            config,
            highlighter=FailingHighlighter(),
            writer=RecordingWriter(),
        )

        assert result.ok
        assert any("lexer exploded" in w for w in result.warnings)

    def test_when_files_in_given_order_then_headers_follow_it(self, config):
        writer = RecordingWriter()
        files = (SourceFile("src/z.rs", "z\n"), SourceFile("src/a.rs", "a\n"), SourceFile("src/m.rs", "m\n"))

        build_crate(CrateSource("demo", files), config, writer=writer)

        headers = [i.text for i in writer.written[0][1] if isinstance(i, PlaceText) and i.role == "header"]
        assert headers == ["src/z.rs", "src/a.rs", "src/m.rs"]

    @pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
    def test_when_written_then_pdf_has_title_and_code(self, config):
        result = build_crate(
            CrateSource("demo", (SourceFile("src/lib.rs", LIB_RS),), version="1.0.0"), config
        )

        reader = PdfReader(str(result.output_path))
        assert len(reader.pages) == 2
        assert "demo" in reader.pages[0].extract_text()
        assert "Version 1.0.0" in reader.pages[0].extract_text()
        assert "pub fn add" in reader.pages[1].extract_text()


class TestBuildAll:
    """Tests for build_all()."""

    def test_when_mixed_outcomes_then_summary_per_crate(self, config):
        """A writer failure or an empty crate does not stop other crates."""
        # Arrange
        writer = RecordingWriter(fail_for={"broken"})
        crates = [
            crate("alpha", SourceFile("src/lib.rs", LIB_RS)),
            crate("empty"),
            crate("broken", SourceFile("src/lib.rs", LIB_RS)),
            crate("omega", SourceFile("src/main.rs", "fn main() {}\n")),
        ]

        # Act
        summary = build_all(crates, config, writer=writer)

        # Assert
        assert [r.status for r in summary.results] == ["success", "skipped", "failed", "success"]
        assert [r.name for r in summary.succeeded] == ["alpha", "omega"]
        assert [r.name for r in summary.skipped] == ["empty"]
        assert "disk full" in summary.failed[0].error
        assert summary.ok is False
        assert [p.name for p, _ in writer.written] == ["alpha.pdf", "omega.pdf"]

    def test_when_all_succeed_then_ok(self, config):
        summary = build_all([crate("one", SourceFile("a.rs", "x\n"))], config, writer=RecordingWriter())

        assert summary.ok is True
        assert summary.elapsed >= 0

    def test_when_same_input_then_identical_streams(self, config):
        crates = [crate("demo", SourceFile("src/lib.rs", LIB_RS * 40))]
        first, second = RecordingWriter(), RecordingWriter()

        build_all(crates, config, writer=first)
        build_all(crates, config, writer=second)

        assert first.written == second.written

    def test_geometry_when_crates_differ_in_length_then_shared_gutter(self, config):
        """The gutter is sized once for the longest file in the run."""
        writer = RecordingWriter()
        crates = [
            crate("short", SourceFile("a.rs", "x\n")),
            crate("long", SourceFile("b.rs", "y\n" * 1200)),
        ]

        build_all(crates, config, writer=writer)

        def first_code_x(stream):
            return next(i.x for i in stream if isinstance(i, PlaceText) and i.role == "code")

        short_stream, long_stream = (s for _, s in writer.written)
        assert first_code_x(short_stream) == pytest.approx(first_code_x(long_stream))

    def test_when_names_sanitize_to_same_file_then_distinct_outputs(self, config, tmp_path):
        """Two crates never share one PDF."""
        # Arrange
        crates = [
            crate("my crate", SourceFile("a.rs", "first\n")),
            crate("my/crate", SourceFile("b.rs", "second\n")),
        ]

        # Act
        summary = build_all(crates, config)

        # Assert
        paths = [r.output_path for r in summary.results]
        assert [r.status for r in summary.results] == ["success", "success"]
        assert paths == [tmp_path / "my_crate.pdf", tmp_path / "my_crate-2.pdf"]
        assert all(p.exists() for p in paths)

    @pytest.mark.skipif(not PYPDF_AVAILABLE, reason="pypdf not installed")
    def test_when_names_collide_then_each_pdf_holds_its_own_crate(self, tmp_path):
        config = BuildConfig(output_dir=tmp_path, theme="none", title_page=False)
        crates = [
            crate("my crate", SourceFile("a.rs", "let first = 1;\n")),
            crate("my/crate", SourceFile("b.rs", "let second = 2;\n")),
        ]

        first, second = build_all(crates, config).results

        assert "let first" in PdfReader(str(first.output_path)).pages[0].extract_text()
        assert "let second" in PdfReader(str(second.output_path)).pages[0].extract_text()


class TestUniqueOutputPath:

    def test_when_unused_then_plain_name(self, config, tmp_path):
        used = set()

        assert unique_output_path(config, "demo", used) == tmp_path / "demo.pdf"
        assert used == {tmp_path / "demo.pdf"}

    def test_when_taken_repeatedly_then_next_free_suffix(self, config, tmp_path):
        used = set()

        paths = [unique_output_path(config, name, used) for name in ("a b", "a/b", "a?b", "a_b-2")]

        assert [p.name for p in paths] == ["a_b.pdf", "a_b-2.pdf", "a_b-3.pdf", "a_b-2-2.pdf"]


class TestMaxLineNumber:

    def test_when_files_then_longest_line_count(self):
        files = [SourceFile("a", "1\n2\n3\n"), SourceFile("b", "1\n")]
        assert max_line_number(files) == 3

    def test_when_no_files_then_one(self):
        assert max_line_number([]) == 1
