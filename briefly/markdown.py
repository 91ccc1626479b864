"""Markdown report rendering backed by Jinja2 templates."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from .formatter import format_bytes, sorted_extensions
from .models import FileRecord, FunctionRecord, ProjectFacts

TEMPLATE_NAME = "summary.md.j2"

_LANGUAGE_BY_EXTENSION: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".py": "python",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
}


@dataclass(frozen=True)
class FileDoc:
    """A documented file: its record, source and optional AI summary."""

    record: FileRecord
    content: str = ""
    summary: Optional[str] = None


@dataclass(frozen=True)
class _TreeEntry:
    depth: int
    name: str


@dataclass(frozen=True)
class _FileView:
    relative_path: str
    record: FileRecord
    summary: Optional[str]
    functions: List[str]
    hidden_functions: int
    language: str
    content: str


def language_for_extension(extension: str) -> str:
    return _LANGUAGE_BY_EXTENSION.get(extension, "")


def _signature(function: FunctionRecord) -> str:
    modifiers = [
        label for label, flag in (("async", function.is_async), ("exported", function.exported)) if flag
    ]
    suffix = f" *({', '.join(modifiers)})*" if modifiers else ""
    return f"`{function.name}({', '.join(function.params)})`{suffix}"


def _file_view(root: str, doc: FileDoc) -> _FileView:
    record = doc.record
    return _FileView(
        relative_path=Path(os.path.relpath(record.path, root)).as_posix(),
        record=record,
        summary=doc.summary,
        functions=[_signature(function) for function in record.functions[:10]],
        hidden_functions=max(len(record.functions) - 10, 0),
        language=language_for_extension(record.extension),
        content=doc.content.rstrip("\n"),
    )


def _create_env(templates_dir: Path | None) -> Environment:
    loader = FileSystemLoader(str(templates_dir or Path(__file__).with_name("templates")))
    return Environment(
        loader=loader,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def generate_markdown_docs(
    facts: ProjectFacts,
    *,
    project_summary: Optional[str] = None,
    files: Sequence[FileDoc] = (),
    include_code: bool = False,
    generated_at: datetime | None = None,
    templates_dir: Path | None = None,
) -> str:
    """Render the Markdown report for ``facts`` and the documented ``files``."""
    timestamp = (generated_at or datetime.now(UTC)).isoformat().replace("+00:00", "Z")
    directories = facts.structure.directories
    dependencies = list(facts.dependencies.dependencies.items())
    dev_dependencies = list(facts.dependencies.dev_dependencies.items())

    template = _create_env(templates_dir).get_template(TEMPLATE_NAME)
    return template.render(
        project_name=facts.name,
        generated_at=timestamp,
        facts=facts,
        project_summary=project_summary,
        total_size=format_bytes(facts.stats.total_size),
        tree=[
            _TreeEntry(depth=len(directory.split("/")), name=directory.rsplit("/", 1)[-1])
            for directory in directories[:20]
        ],
        hidden_directories=max(len(directories) - 20, 0),
        dependencies=dependencies[:30],
        hidden_dependencies=max(len(dependencies) - 30, 0),
        dev_dependencies=dev_dependencies[:20],
        hidden_dev_dependencies=max(len(dev_dependencies) - 20, 0),
        files=[_file_view(facts.root, doc) for doc in files],
        include_code=include_code,
        extensions=sorted_extensions(facts.stats.by_extension, 15),
    )


__all__ = ["FileDoc", "generate_markdown_docs", "language_for_extension"]
