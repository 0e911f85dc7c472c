"""Tests for the //export marker scanner."""

import logging

import pytest

from godll.build.export_scanner import ExportScanner, comment_group_text, export_name

MATH_GO = """package main

import "C"

//export Add
func Add(a, b C.int) C.int {
	return a + b
}

//export Multiply
func Multiply(a, b C.int) C.int {
	return a * b
}

func main() {}
"""

PLAIN_GO = """package main

// helper is not exported.
func helper() int {
	return 1
}
"""


class TestExportScanner:
    """Test export extraction from Go sources."""

    @pytest.fixture
    def scanner(self):
        return ExportScanner()

    def test_no_markers_yields_nothing(self, scanner, go_source):
        path = go_source("plain.go", PLAIN_GO)

        assert scanner.scan([path]) == []

    def test_empty_file_set(self, scanner):
        assert scanner.scan([]) == []

    def test_exports_in_source_order(self, scanner, go_source):
        path = go_source("math.go", MATH_GO)

        assert scanner.scan([path]) == ["Add", "Multiply"]

    def test_file_order_is_preserved(self, scanner, go_source):
        first = go_source("b.go", "package main\n\n//export Beta\nfunc Beta() {}\n")
        second = go_source("a.go", "package main\n\n//export Alpha\nfunc Alpha() {}\n")

        assert scanner.scan([first, second]) == ["Beta", "Alpha"]
        assert scanner.scan([second, first]) == ["Alpha", "Beta"]

    def test_accepts_string_paths(self, scanner, go_source):
        path = go_source("math.go", MATH_GO)

        assert scanner.scan([str(path)]) == ["Add", "Multiply"]

    def test_space_after_slashes_is_accepted(self, scanner, go_source):
        path = go_source("spaced.go", "package main\n\n// export Spaced\nfunc Spaced() {}\n")

        assert scanner.scan([path]) == ["Spaced"]

    @pytest.mark.parametrize(
        "marker",
        ["//exports Foo", "//Export Foo", "//exportFoo", "// the export Foo"],
    )
    def test_near_miss_markers_are_ignored(self, scanner, go_source, marker):
        path = go_source("near.go", f"package main\n\n{marker}\nfunc Foo() {{}}\n")

        assert scanner.scan([path]) == []

    def test_surrounding_whitespace_is_trimmed(self, scanner, go_source):
        path = go_source("ws.go", "package main\n\n//export   Padded   \nfunc Padded() {}\n")

        assert scanner.scan([path]) == ["Padded"]

    def test_duplicates_pass_through(self, scanner, go_source):
        path = go_source("math.go", MATH_GO)

        assert scanner.scan([path, path]) == ["Add", "Multiply", "Add", "Multiply"]

    def test_name_is_not_validated(self, scanner, go_source):
        path = go_source("odd.go", "package main\n\n//export not-an-identifier\nfunc Odd() {}\n")

        assert scanner.scan([path]) == ["not-an-identifier"]

    def test_detached_comment_is_ignored(self, scanner, go_source):
        source = "package main\n\n//export Lonely\n\nfunc Lonely() {}\n"
        path = go_source("detached.go", source)

        assert scanner.scan([path]) == []

    def test_marker_must_begin_doc_comment(self, scanner, go_source):
        source = "package main\n\n// Add adds two ints.\n//export Add\nfunc Add(a, b int) int { return a + b }\n"
        path = go_source("doc.go", source)

        assert scanner.scan([path]) == []

    def test_directives_before_marker_are_dropped(self, scanner, go_source):
        source = "package main\n\n//go:noinline\n//export Fast\nfunc Fast() {}\n"
        path = go_source("directive.go", source)

        assert scanner.scan([path]) == ["Fast"]

    def test_trailing_comment_is_not_a_doc_comment(self, scanner, go_source):
        source = "package main\n\nvar x = 1 //export Trailing\nfunc Trailing() {}\n"
        path = go_source("trailing.go", source)

        assert scanner.scan([path]) == []

    def test_comments_inside_functions_are_ignored(self, scanner, go_source):
        source = "package main\n\nfunc main() {\n\t//export Inner\n\tinner := 1\n\t_ = inner\n}\n"
        path = go_source("inner.go", source)

        assert scanner.scan([path]) == []

    def test_unparseable_file_is_skipped(self, scanner, go_source, caplog):
        broken = go_source("broken.go", "package main\n\n//export Broken\nfunc Broken( {\n")
        good = go_source("math.go", MATH_GO)

        with caplog.at_level(logging.WARNING, logger="godll"):
            exports = scanner.scan([broken, good])

        assert exports == ["Add", "Multiply"]
        assert scanner.skipped_files == [broken]
        assert "broken.go" in caplog.text

    def test_file_without_package_clause_is_skipped(self, scanner, go_source):
        nopkg = go_source("nopkg.go", "//export NoPkg\nfunc NoPkg() {}\n")
        good = go_source("math.go", MATH_GO)

        assert scanner.scan([nopkg, good]) == ["Add", "Multiply"]
        assert scanner.skipped_files == [nopkg]

    def test_empty_file_is_skipped(self, scanner, go_source):
        empty = go_source("empty.go", "")

        assert scanner.scan([empty]) == []
        assert scanner.skipped_files == [empty]

    def test_comment_before_package_clause(self, scanner, go_source):
        source = "// Package main builds a DLL.\npackage main\n\n//export Documented\nfunc Documented() {}\n"
        path = go_source("doc.go", source)

        assert scanner.scan([path]) == ["Documented"]
        assert scanner.skipped_files == []

    def test_missing_file_is_skipped(self, scanner, go_source, tmp_path):
        good = go_source("math.go", MATH_GO)
        missing = tmp_path / "missing.go"

        assert scanner.scan([missing, good]) == ["Add", "Multiply"]
        assert scanner.skipped_files == [missing]

    def test_crlf_line_endings(self, scanner, tmp_path):
        path = tmp_path / "crlf.go"
        path.write_bytes(b"package main\r\n\r\n//export Windows\r\nfunc Windows() {}\r\n")

        assert scanner.scan([path]) == ["Windows"]


class TestCommentGroupText:
    """Test go/ast style comment text normalization."""

    def test_line_comments(self):
        assert comment_group_text(["// hello", "//world"]) == "hello\nworld\n"

    def test_block_comment(self):
        assert comment_group_text(["/*export Foo*/"]) == "export Foo\n"

    def test_only_directives(self):
        assert comment_group_text(["//go:generate stringer"]) == ""

    def test_leading_blank_lines_removed(self):
        assert comment_group_text(["//", "//export Foo"]) == "export Foo\n"


class TestExportName:
    """Test marker matching on normalized comment text."""

    def test_match(self):
        assert export_name("export Foo\n") == "Foo"

    def test_no_match(self):
        assert export_name("exports Foo\n") is None

    def test_only_first_line_is_used(self):
        assert export_name("export Foo\nmore text\n") == "Foo"
