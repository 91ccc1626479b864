"""Tests for extension-based extractor dispatch."""

from __future__ import annotations

from briefly.extractors import SourceKind, extract_file, source_kind


def test_source_kind_by_extension() -> None:
    assert source_kind("a.js") is SourceKind.ECMASCRIPT
    assert source_kind("a.mjs") is SourceKind.ECMASCRIPT
    assert source_kind("a.tsx") is SourceKind.ECMASCRIPT
    assert source_kind("a.py") is SourceKind.PYTHON
    assert source_kind("a.json") is SourceKind.JSON
    assert source_kind("a.go") is SourceKind.UNSUPPORTED
    assert source_kind("Makefile") is SourceKind.UNSUPPORTED


def test_unsupported_files_get_basic_fields_only() -> None:
    content = "package main\n\nfunc main() {}\n"

    record = extract_file("/src/cmd/main.go", content)

    assert record.name == "main.go"
    assert record.extension == ".go"
    assert record.lines == 4
    assert record.size == len(content.encode("utf-8"))
    assert record.functions == ()
    assert record.structure is None
    assert record.parse_error is None


def test_size_counts_utf8_bytes() -> None:
    record = extract_file("notes.txt", "héllo")

    assert record.size == 6
    assert record.lines == 1
    assert record.extension == ".txt"
