"""File categorization heuristics."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import Dict, Iterable, List, Optional

CATEGORIES: tuple[str, ...] = ("code", "config", "docs", "tests", "assets", "other")

CODE_EXTENSIONS = {
    ".js",
    ".mjs",
    ".cjs",
    ".ts",
    ".jsx",
    ".tsx",
    ".py",
    ".rb",
    ".go",
    ".java",
    ".c",
    ".cpp",
    ".rs",
}

CONFIG_FILENAMES: tuple[str, ...] = (
    "package.json",
    "tsconfig.json",
    ".eslintrc",
    ".prettierrc",
    "webpack.config.js",
    "vite.config.js",
    "pyproject.toml",
    "setup.cfg",
    "tox.ini",
    ".babelrc",
)

CONFIG_EXTENSIONS = {".json", ".yaml", ".yml"}
DOC_EXTENSIONS = {".md", ".txt", ".rst", ".adoc"}
ASSET_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".woff", ".woff2", ".ttf"}

_TEST_INFIXES = (".test.", ".spec.")
_TEST_DIRECTORIES = {"test", "tests", "__tests__"}


def categorize_file(path: str, root: Optional[str] = None) -> str:
    """Return the category for a single path."""
    pure = PurePath(path)
    basename = pure.name
    extension = pure.suffix

    if _is_test_path(pure, root):
        return "tests"
    if extension in CODE_EXTENSIONS:
        return "code"
    if any(name in basename for name in CONFIG_FILENAMES) or extension in CONFIG_EXTENSIONS:
        return "config"
    if extension in DOC_EXTENSIONS:
        return "docs"
    if extension in ASSET_EXTENSIONS:
        return "assets"
    return "other"


def categorize_files(files: Iterable[str], root: Optional[str] = None) -> Dict[str, List[str]]:
    """Group paths by category, preserving input order within each group."""
    categories: Dict[str, List[str]] = {name: [] for name in CATEGORIES}
    for path in files:
        categories[categorize_file(path, root)].append(path)
    return categories


def _is_test_path(path: PurePath, root: Optional[str]) -> bool:
    if any(infix in path.name for infix in _TEST_INFIXES):
        return True
    relative = path
    if root is not None:
        try:
            relative = PurePath(os.path.relpath(path, root))
        except ValueError:
            relative = path
    return any(part in _TEST_DIRECTORIES for part in relative.parts[:-1])


__all__ = ["CATEGORIES", "categorize_file", "categorize_files"]
