"""Project-level aggregation of scan results and manifests."""

from __future__ import annotations

import os
import posixpath
from collections import Counter
from pathlib import Path
from typing import List, Sequence

from .categorizer import categorize_files
from .logging import get_logger
from .manifests import load_dependencies, package_entry_points
from .models import DirectoryStructure, ProjectFacts, ProjectStats
from .techstack import detect_tech_stack

NO_EXTENSION = "(no extension)"
ROOT_DIRECTORY = "."

COMMON_ENTRY_POINTS: tuple[str, ...] = (
    "index.js",
    "index.ts",
    "main.js",
    "main.ts",
    "app.js",
    "app.ts",
    "server.js",
    "server.ts",
    "src/index.js",
    "src/index.ts",
    "src/main.js",
    "src/main.ts",
    "src/app.js",
    "src/app.ts",
    "main.py",
    "app.py",
    "__main__.py",
    "cmd/main.go",
    "main.go",
)


class ProjectAggregator:
    """Combines a scanned file list into a single ProjectFacts bundle."""

    def __init__(self) -> None:
        self.logger = get_logger("aggregator")

    def aggregate(self, root: str | Path, files: Sequence[str]) -> ProjectFacts:
        root_path = Path(root).expanduser().resolve()
        relative = [_relative_posix(root_path, path) for path in files]

        stats = self._collect_stats(files, relative)
        dependencies = load_dependencies(root_path)
        facts = ProjectFacts(
            name=root_path.name,
            root=str(root_path),
            files=list(files),
            stats=stats,
            categories=categorize_files(files, str(root_path)),
            structure=self._collect_structure(relative),
            dependencies=dependencies,
            entry_points=self._find_entry_points(root_path, relative),
            tech_stack=detect_tech_stack(stats.by_extension, dependencies),
        )
        self.logger.debug(
            "Aggregated %s: %d files, stack=%s", facts.name, stats.total, ", ".join(facts.tech_stack)
        )
        return facts

    @staticmethod
    def _collect_stats(files: Sequence[str], relative: Sequence[str]) -> ProjectStats:
        by_extension: Counter[str] = Counter()
        by_directory: Counter[str] = Counter()
        total_size = 0

        for path, rel_path in zip(files, relative):
            by_extension[os.path.splitext(path)[1] or NO_EXTENSION] += 1
            parts = rel_path.split("/")
            by_directory[parts[0] if len(parts) > 1 else ROOT_DIRECTORY] += 1
            try:
                total_size += os.stat(path).st_size
            except OSError:
                continue

        return ProjectStats(
            total=len(files),
            by_extension=dict(by_extension),
            by_directory=dict(by_directory),
            total_size=total_size,
        )

    @staticmethod
    def _collect_structure(relative: Sequence[str]) -> DirectoryStructure:
        directories = set()
        depth = 0
        for rel_path in relative:
            parts = rel_path.split("/")
            for index in range(1, len(parts)):
                directories.add("/".join(parts[:index]))
            depth = max(depth, len(parts))
        return DirectoryStructure(directories=sorted(directories), depth=depth)

    @staticmethod
    def _find_entry_points(root: Path, relative: Sequence[str]) -> List[str]:
        present = set(relative)
        entries: List[str] = [entry for entry in COMMON_ENTRY_POINTS if entry in present]
        entries.extend(_normalise_entry(entry) for entry in package_entry_points(root))
        return list(dict.fromkeys(entry for entry in entries if entry))


def analyze_project(root: str | Path, files: Sequence[str]) -> ProjectFacts:
    """Build ProjectFacts for ``files`` scanned under ``root``."""
    return ProjectAggregator().aggregate(root, files)


def _relative_posix(root: Path, path: str) -> str:
    try:
        return Path(path).resolve().relative_to(root).as_posix()
    except ValueError:
        return Path(os.path.relpath(path, root)).as_posix()


def _normalise_entry(entry: str) -> str:
    normalised = posixpath.normpath(entry.replace("\\", "/"))
    return "" if normalised == "." else normalised


__all__ = ["COMMON_ENTRY_POINTS", "ProjectAggregator", "analyze_project"]
