"""Directory scanning utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .logging import get_logger

DEFAULT_MAX_DEPTH = 10

DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = (
    "node_modules/",
    ".git/",
    "dist/",
    "build/",
    ".next/",
    "coverage/",
    "__pycache__/",
    "venv/",
    "*.min.js",
    "*.map",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
)

logger = get_logger("scanner")


class ScanError(RuntimeError):
    """Raised when the scan root cannot be enumerated."""


class DirectoryNotFoundError(ScanError, FileNotFoundError):
    """Raised when the scan root does not exist."""


class NotADirectoryScanError(ScanError, NotADirectoryError):
    """Raised when the scan root is not a directory."""


@dataclass
class IgnoreRule:
    """Represents a glob-style exclusion rule."""

    pattern: str
    directory_only: bool
    anchored: bool
    floating: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.has_slash:
            if self.floating and not self.anchored:
                parts = rel_path.split("/")
                return any(
                    fnmatchcase("/".join(parts[index:]), self.pattern)
                    for index in range(len(parts))
                )
            return fnmatchcase(rel_path, self.pattern)

        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)

        for part in rel_path.split("/"):
            if fnmatchcase(part, self.pattern):
                return True
        return False


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    """Parse a single exclusion pattern, returning None for blank input."""
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = False
    if pattern.endswith("/**"):
        pattern = pattern[: -len("/**")]
        directory_only = True
    elif pattern.endswith("/"):
        pattern = pattern[:-1]
        directory_only = True

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    floating = False
    while pattern.startswith("**/"):
        pattern = pattern[len("**/") :]
        floating = True

    if not pattern:
        return None

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        floating=floating,
        has_slash="/" in pattern,
    )


def build_ignore_rules(patterns: Iterable[str]) -> List[IgnoreRule]:
    rules: List[IgnoreRule] = []
    for pattern in patterns:
        rule = build_ignore_rule(pattern)
        if rule is not None:
            rules.append(rule)
    return rules


def _should_ignore(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _iter_files(root: Path, rules: Sequence[IgnoreRule], max_depth: int) -> Iterator[Path]:
    limit = max(max_depth, 1)
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
        level = len(rel_dir.split("/")) if rel_dir else 0

        if level + 2 > limit:
            dirnames[:] = []
        else:
            kept = []
            for name in sorted(dirnames):
                if _is_hidden(name):
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if _should_ignore(rel_path, True, rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

        if level + 1 > limit:
            continue

        for filename in filenames:
            if _is_hidden(filename):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _should_ignore(rel_path, False, rules):
                continue
            yield current_dir / filename


class DirectoryScanner:
    """Enumerates candidate files under a project root."""

    def __init__(self, *, max_depth: int = DEFAULT_MAX_DEPTH, ignore: Sequence[str] = ()) -> None:
        self.max_depth = max_depth
        self.rules = build_ignore_rules([*DEFAULT_IGNORE_PATTERNS, *ignore])

    def scan(self, root: str | Path) -> List[str]:
        """Return the sorted absolute paths of files under ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise DirectoryNotFoundError(f"Directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryScanError(f"{root} is not a directory")

        files = sorted(
            str(path) for path in _iter_files(root_path, self.rules, self.max_depth)
        )
        logger.debug("Scanned %s: %d files (max depth %d)", root_path, len(files), self.max_depth)
        return files


def scan_directory(
    root: str | Path,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore: Sequence[str] = (),
) -> List[str]:
    """Scan ``root`` with the default exclusions plus ``ignore``."""
    return DirectoryScanner(max_depth=max_depth, ignore=ignore).scan(root)


__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "DEFAULT_MAX_DEPTH",
    "DirectoryNotFoundError",
    "DirectoryScanner",
    "IgnoreRule",
    "NotADirectoryScanError",
    "ScanError",
    "build_ignore_rule",
    "scan_directory",
]
