"""Tests for briefly.manifests."""

from __future__ import annotations

import json
from pathlib import Path

from briefly.manifests import load_dependencies, package_entry_points, parse_requirements


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_package_json_wins_over_python_manifests(tmp_path: Path) -> None:
    _write(
        tmp_path / "package.json",
        json.dumps(
            {
                "dependencies": {"express": "^4.18.0"},
                "devDependencies": {"jest": "^29.0.0"},
            }
        ),
    )
    _write(tmp_path / "requirements.txt", "flask==2.0\n")

    info = load_dependencies(tmp_path)

    assert info.manager == "npm"
    assert info.dependencies == {"express": "^4.18.0"}
    assert info.dev_dependencies == {"jest": "^29.0.0"}


def test_empty_package_json_still_selects_npm(tmp_path: Path) -> None:
    _write(tmp_path / "package.json", "{}")

    info = load_dependencies(tmp_path)

    assert info.manager == "npm"
    assert info.dependencies == {}


def test_invalid_package_json_falls_through(tmp_path: Path) -> None:
    _write(tmp_path / "package.json", "{ nope")
    _write(tmp_path / "requirements.txt", "requests\n")

    info = load_dependencies(tmp_path)

    assert info.manager == "pip"
    assert info.dependencies == {"requests": "*"}


def test_parse_requirements_skips_comments_and_options() -> None:
    content = """
# web stack
flask==2.0
requests>=2.31,<3  # http client
uvicorn[standard]~=0.23
-r base.txt
--index-url https://example.invalid/simple
pywin32; sys_platform == "win32"

"""

    assert parse_requirements(content) == {
        "flask": "==2.0",
        "requests": ">=2.31,<3",
        "uvicorn": "~=0.23",
        "pywin32": "*",
    }


def test_pyproject_dependencies_are_read(tmp_path: Path) -> None:
    _write(
        tmp_path / "pyproject.toml",
        """
[project]
name = "demo"
dependencies = ["fastapi>=0.110", "pydantic"]

[project.optional-dependencies]
test = ["pytest>=7"]

[tool.poetry.dependencies]
python = "^3.11"
rich = { version = "^13.0" }
""",
    )

    info = load_dependencies(tmp_path)

    assert info.manager == "poetry/pip"
    assert info.dependencies == {"fastapi": ">=0.110", "pydantic": "*", "rich": "^13.0"}
    assert info.dev_dependencies == {"pytest": ">=7"}


def test_unparsable_pyproject_still_sets_manager(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[project\n")

    info = load_dependencies(tmp_path)

    assert info.manager == "poetry/pip"
    assert info.dependencies == {}


def test_missing_manifests_yield_empty_info(tmp_path: Path) -> None:
    info = load_dependencies(tmp_path)

    assert info.manager is None
    assert info.dependencies == {}
    assert info.dev_dependencies == {}


def test_package_entry_points_reads_main_and_bin(tmp_path: Path) -> None:
    _write(
        tmp_path / "package.json",
        json.dumps({"main": "./lib/index.js", "bin": {"tool": "./bin/tool.js"}}),
    )

    assert package_entry_points(tmp_path) == ["./lib/index.js", "./bin/tool.js"]
