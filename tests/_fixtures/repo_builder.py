"""Helper utilities for constructing temporary projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from briefly.aggregator import analyze_project
from briefly.models import ProjectFacts
from briefly.scanner import DirectoryScanner


class RepoBuilder:
    """Utility for writing files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def scan(self, *, max_depth: int = 10) -> list[str]:
        """Return the sorted file list for the project."""
        return DirectoryScanner(max_depth=max_depth).scan(self.root)

    def analyze(self, *, max_depth: int = 10) -> ProjectFacts:
        """Scan and aggregate the project in one step."""
        return analyze_project(self.root, self.scan(max_depth=max_depth))

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["RepoBuilder"]
