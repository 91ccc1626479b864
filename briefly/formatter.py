"""Plain-text console rendering for project and module summaries."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .models import FileRecord, ProjectFacts

RULE = "=" * 60
DIVIDER = "-" * 40
TREE_PREVIEW_CHARS = 2000

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")


def format_bytes(size: int) -> str:
    """Return ``size`` on the Bytes/KB/MB/GB scale with up to two decimals."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[index]}"


def sorted_extensions(by_extension: dict[str, int], limit: int) -> List[tuple[str, int]]:
    """Return the ``limit`` most common extensions, most common first."""
    return sorted(by_extension.items(), key=lambda item: item[1], reverse=True)[:limit]


def _section(lines: List[str], title: str, body: Iterable[str]) -> None:
    lines.append(title)
    lines.append(DIVIDER)
    lines.extend(body)
    lines.append("")


def _indent(text: str) -> List[str]:
    return ["  " + line for line in text.splitlines()]


def _more(count: int, limit: int, noun: str = "more", indent: str = "  ") -> List[str]:
    if count > limit:
        return [f"{indent}... and {count - limit} {noun}"]
    return []


def format_project_summary(facts: ProjectFacts, summary: Optional[str] = None) -> str:
    lines: List[str] = [RULE, f"  Project: {facts.name}", RULE, ""]

    if summary:
        _section(lines, "AI Summary", _indent(summary))

    if facts.tech_stack:
        _section(lines, "Tech Stack", ["  " + ", ".join(facts.tech_stack)])

    _section(
        lines,
        "Statistics",
        [
            f"  Files: {facts.stats.total}",
            f"  Size: {format_bytes(facts.stats.total_size)}",
            f"  Depth: {facts.structure.depth} levels",
        ],
    )

    extensions = sorted_extensions(facts.stats.by_extension, 8)
    if extensions:
        _section(
            lines,
            "File Types",
            [f"  {ext:<15} {'#' * min(count, 20)} {count}" for ext, count in extensions],
        )

    if facts.entry_points:
        _section(lines, "Entry Points", [f"  -> {entry}" for entry in facts.entry_points])

    deps = list(facts.dependencies.dependencies)
    if deps:
        _section(lines, "Key Dependencies", ["  " + ", ".join(deps[:12]), *_more(len(deps), 12)])

    directories = facts.structure.directories
    if directories:
        _section(
            lines,
            "Key Directories",
            [*(f"  - {directory}" for directory in directories[:10]), *_more(len(directories), 10)],
        )

    lines.append(RULE)
    return "\n".join(lines)


def format_module_summary(
    record: FileRecord, summary: Optional[str] = None, *, show_tree: bool = False
) -> str:
    lines: List[str] = [RULE, f"  File: {record.name}", RULE, ""]

    _section(
        lines,
        "Info",
        [
            f"  Path: {record.path}",
            f"  Lines: {record.lines}",
            f"  Size: {format_bytes(record.size)}",
        ],
    )

    if summary:
        _section(lines, "AI Summary", _indent(summary))

    if record.imports:
        _section(
            lines,
            f"Imports ({len(record.imports)})",
            [
                *(f"  <- {entry.source}" for entry in record.imports[:10]),
                *_more(len(record.imports), 10),
            ],
        )

    if record.exports:
        _section(
            lines,
            f"Exports ({len(record.exports)})",
            [
                f"  {'*' if export.kind == 'default' else '->'} {export.name} ({export.kind})"
                for export in record.exports
            ],
        )

    if record.functions:
        body = []
        for function in record.functions[:15]:
            badges = [
                label
                for label, flag in (
                    ("async", function.is_async),
                    ("exported", function.exported),
                    ("arrow", function.is_arrow),
                )
                if flag
            ]
            suffix = f" [{', '.join(badges)}]" if badges else ""
            body.append(f"  f {function.name}({', '.join(function.params)}){suffix}")
        body.extend(_more(len(record.functions), 15))
        _section(lines, f"Functions ({len(record.functions)})", body)

    if record.classes:
        body = []
        for cls in record.classes:
            extends = f" extends {cls.superclass}" if cls.superclass else ""
            body.append(f"  class {cls.name}{extends}")
            for method in cls.methods[:5]:
                marker = "+" if method.kind == "constructor" else "."
                body.append(f"    {marker} {method.name}()")
            body.extend(_more(len(cls.methods), 5, "more methods", "    "))
        _section(lines, f"Classes ({len(record.classes)})", body)

    if 0 < len(record.variables) <= 20:
        _section(
            lines,
            f"Variables ({len(record.variables)})",
            [
                *(f"  {variable.kind or 'var'} {variable.name}" for variable in record.variables[:10]),
                *_more(len(record.variables), 10),
            ],
        )

    if record.parse_error:
        _section(lines, "Parse Warning", [f"  {record.parse_error}"])

    if show_tree and record.tree is not None:
        _section(lines, "Syntax Tree", [tree_preview(record.tree)])

    lines.append(RULE)
    return "\n".join(lines)


def tree_preview(tree: object, limit: int = TREE_PREVIEW_CHARS) -> str:
    """Render a parse tree as an S-expression cut at ``limit`` characters."""
    root = getattr(tree, "root_node", tree)
    return str(root)[:limit]


__all__ = [
    "format_bytes",
    "format_module_summary",
    "format_project_summary",
    "sorted_extensions",
    "tree_preview",
]
