"""CLI parser and entrypoint behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from briefly.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "summary", "."])
    assert args.verbose is True
    assert args.command == "summary"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["module", "app.js", "--verbose"])
    assert args.verbose is True
    assert args.command == "module"


def test_summary_defaults() -> None:
    args = _build_parser().parse_args(["summary", "src"])
    assert args.path == "src"
    assert args.depth is None
    assert args.output is None
    assert args.use_ai is True


def test_summary_flags() -> None:
    args = _build_parser().parse_args(["summary", ".", "-d", "5", "-o", "out.txt", "--no-ai"])
    assert args.depth == 5
    assert args.output == "out.txt"
    assert args.use_ai is False


def test_module_accepts_show_ast() -> None:
    args = _build_parser().parse_args(["module", "app.js", "--show-ast"])
    assert args.file == "app.js"
    assert args.show_ast is True


def test_export_defaults() -> None:
    args = _build_parser().parse_args(["export"])
    assert args.path == "."
    assert args.output == "SUMMARY.md"
    assert args.include_code is False


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_main_summary_prints_report(tmp_path: Path, capsys) -> None:
    (tmp_path / "index.js").write_text("export function start() {}\n", encoding="utf-8")

    main(["summary", str(tmp_path), "--no-ai"])

    out = capsys.readouterr().out
    assert f"Project: {tmp_path.name}" in out
    assert "-> index.js" in out


def test_main_module_writes_output(tmp_path: Path, capsys) -> None:
    source = tmp_path / "tool.py"
    source.write_text("import os\n\ndef run(argv):\n    return 0\n", encoding="utf-8")
    target = tmp_path / "reports" / "tool.txt"

    main(["module", str(source), "--no-ai", "-o", str(target)])

    assert "File: tool.py" in capsys.readouterr().out
    assert "f run(argv)" in target.read_text(encoding="utf-8")


def test_main_exits_with_status_one_for_missing_directory(tmp_path: Path, capsys) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(SystemExit) as excinfo:
        main(["summary", str(missing), "--no-ai"])

    assert excinfo.value.code == 1
    assert "Directory not found" in capsys.readouterr().err


def test_main_exits_with_status_one_for_missing_module(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["module", str(tmp_path / "nope.js"), "--no-ai"])

    assert excinfo.value.code == 1


def test_log_file_defaults_to_none() -> None:
    args = _build_parser().parse_args(["summary", "."])
    assert args.log_file is None


def test_main_writes_debug_records_to_log_file(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    (project / "index.js").write_text("export function start() {}\n", encoding="utf-8")
    log_file = tmp_path / "briefly.log"

    main(["--log-file", str(log_file), "-v", "summary", str(project), "--no-ai"])

    assert "Scanner discovered 1 files" in log_file.read_text(encoding="utf-8")
