"""Tests for formatters/diagnostics.py - compiler-style error output."""

import io

from rich.console import Console

from unsafe_ratio.exceptions import FileAccessError, MalformedInputError
from unsafe_ratio.formatters import DiagnosticRenderer
from unsafe_ratio.models import FileFailure


def _render(failure, source=None):
    buf = io.StringIO()
    renderer = DiagnosticRenderer(Console(file=buf, width=200, force_terminal=False))
    renderer.render(failure, source=source)
    return buf.getvalue()


class TestMalformedDiagnostics:

    def test_caret_under_column(self):
        source = "fn f() {\n    }\n}\n"
        error = MalformedInputError("unmatched closing brace '}'", 3, 1, "lib.rs")
        output = _render(FileFailure("lib.rs", error), source=source).splitlines()
        assert output[0] == "error: unable to parse file"
        assert output[1] == " --> lib.rs:3:1"
        assert output[3] == "3 | }"
        assert output[4] == "  | ^ unmatched closing brace '}'"

    def test_caret_offset(self):
        error = MalformedInputError("unclosed '{'", 1, 8, "a.rs")
        output = _render(FileFailure("a.rs", error), source="fn f() { let x = 1;")
        assert "1 | fn f() { let x = 1;" in output
        assert "  |        ^ unclosed '{'" in output

    def test_reads_source_from_disk(self, write_rust):
        path = write_rust("on_disk.rs", "fn f() {\n    let s = \"oops;\n}\n")
        error = MalformedInputError("unterminated string literal", 2, 13, path)
        output = _render(FileFailure(str(path), error))
        assert '2 |     let s = "oops;' in output

    def test_without_location(self):
        error = MalformedInputError("unclosed '{'", filepath="a.rs")
        output = _render(FileFailure("a.rs", error))
        assert output.strip() == "error: unable to parse file a.rs: unclosed '{'"

    def test_line_out_of_range(self):
        error = MalformedInputError("unclosed '{'", 9, 1, "a.rs")
        output = _render(FileFailure("a.rs", error), source="fn f() {")
        assert output.strip() == "error: unable to parse file a.rs:9:1: unclosed '{'"


class TestAccessDiagnostics:

    def test_missing_file(self):
        error = FileAccessError("gone.rs", "No such file")
        output = _render(FileFailure("gone.rs", error))
        assert output.strip() == "error: cannot read file gone.rs: No such file"
