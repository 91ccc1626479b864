"""Tests for Markdown rendering and report writing."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from briefly.extractors import extract_file
from briefly.markdown import FileDoc, generate_markdown_docs, language_for_extension
from briefly.models import DependencyInfo, DirectoryStructure, ProjectFacts, ProjectStats
from briefly.output import write_output

_GENERATED_AT = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


def _facts(**overrides) -> ProjectFacts:
    values = dict(
        name="demo",
        root="/p",
        files=["/p/src/app.js", "/p/README.md"],
        stats=ProjectStats(
            total=2, by_extension={".js": 1, ".md": 1}, by_directory={".": 1, "src": 1}, total_size=10
        ),
        categories={
            "code": ["/p/src/app.js"],
            "config": [],
            "docs": ["/p/README.md"],
            "tests": [],
            "assets": [],
            "other": [],
        },
        structure=DirectoryStructure(directories=["src", "src/lib"], depth=3),
        dependencies=DependencyInfo(
            manager="npm", dependencies={"express": "^4.0.0"}, dev_dependencies={"jest": "^29.0.0"}
        ),
        entry_points=["src/app.js"],
        tech_stack=["JavaScript", "Express", "Jest"],
    )
    values.update(overrides)
    return ProjectFacts(**values)


def test_report_contains_overview_tables_and_footer() -> None:
    markdown = generate_markdown_docs(_facts(), generated_at=_GENERATED_AT)

    assert markdown.startswith("# demo\n")
    assert "> Generated: 2024-01-02T03:04:05Z" in markdown
    assert "demo is a project containing 2 files." in markdown
    assert "| Total Size | 10 Bytes |" in markdown
    assert "| Source Files | 1 |" in markdown
    assert "## Tech Stack\n\n- JavaScript\n- Express\n- Jest\n" in markdown
    assert "```\ndemo/\n  ├── src/\n    ├── lib/\n```" in markdown
    assert "- `src/app.js`" in markdown
    assert "| express | ^4.0.0 |" in markdown
    assert "### Dev Dependencies" in markdown
    assert "| jest | ^29.0.0 |" in markdown
    assert "## File Documentation" not in markdown
    assert "| .js | 1 |" in markdown
    assert markdown.rstrip().endswith("*Generated with [briefly](https://github.com/Skanda-Nagaraja/briefly)*")


def test_project_summary_replaces_default_overview() -> None:
    markdown = generate_markdown_docs(
        _facts(), project_summary="An HTTP service.", generated_at=_GENERATED_AT
    )

    assert "## Overview\n\nAn HTTP service.\n" in markdown
    assert "is a project containing" not in markdown


def test_dependency_tables_are_truncated() -> None:
    deps = {f"pkg{index:02d}": "1.0.0" for index in range(33)}
    markdown = generate_markdown_docs(
        _facts(dependencies=DependencyInfo(manager="npm", dependencies=deps)),
        generated_at=_GENERATED_AT,
    )

    assert "| pkg29 | 1.0.0 |" in markdown
    assert "| pkg30 |" not in markdown
    assert "| ... | 3 more |" in markdown
    assert "### Dev Dependencies" not in markdown


def test_file_documentation_sections() -> None:
    source = "export async function start(port) {}\nfunction helper() {}\n"
    record = extract_file("/p/src/app.js", source)
    docs = [FileDoc(record=record, content=source, summary="Starts the server.")]

    markdown = generate_markdown_docs(
        _facts(), files=docs, include_code=True, generated_at=_GENERATED_AT
    )

    assert "### `src/app.js`" in markdown
    assert "- **Functions:** 2" in markdown
    assert "#### Summary\n\nStarts the server.\n" in markdown
    assert "- `start` (function)" in markdown
    assert "- `start(port)` *(async, exported)*" in markdown
    assert "- `helper()`\n" in markdown
    assert "```javascript\nexport async function start(port) {}\nfunction helper() {}\n```" in markdown


def test_language_for_extension() -> None:
    assert language_for_extension(".py") == "python"
    assert language_for_extension(".unknown") == ""


def test_write_output_creates_parent_directories(tmp_path: Path) -> None:
    target = tmp_path / "out" / "nested" / "SUMMARY.md"

    written = write_output(target, "\x1b[1mhello\x1b[0m")

    assert written == target.resolve()
    assert target.read_text(encoding="utf-8") == "hello"
