"""Prompt construction and AI summarization of extracted facts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .formatter import format_bytes
from .llm import LLMRunner
from .logging import get_logger
from .models import FileRecord, ProjectFacts

PROJECT = "project"
MODULE = "module"

PROJECT_SYSTEM_PROMPT = """You are a technical documentation expert. Your task is to analyze project information and generate a clear, concise summary. Focus on:
- What the project does (purpose)
- Key technologies used
- Architecture overview
- Main components and their relationships
- Notable patterns or design decisions

Be concise but comprehensive. Use bullet points for clarity. Avoid obvious statements."""

MODULE_SYSTEM_PROMPT = """You are a technical documentation expert. Your task is to analyze a source file and generate a clear, concise summary. Focus on:
- What this file/module does
- Key functions and their purposes
- Important exports
- Dependencies and how they're used
- Edge cases or important considerations
- How this module fits into a larger system

Be concise but comprehensive. Highlight anything unusual or important for developers to know."""

CODE_PREVIEW_LINES = 100


@dataclass(frozen=True)
class ModuleBundle:
    """A parsed file together with the source it was parsed from."""

    record: FileRecord
    content: str


Bundle = Union[ProjectFacts, ModuleBundle]


def build_project_prompt(facts: ProjectFacts) -> str:
    sections: List[str] = [
        f"# Project: {facts.name}",
        "\n## File Statistics",
        f"- Total files: {facts.stats.total}",
        f"- Total size: {format_bytes(facts.stats.total_size)}",
    ]

    if facts.stats.by_extension:
        sections.append("\n## File Types")
        for extension, count in list(facts.stats.by_extension.items())[:10]:
            sections.append(f"- {extension}: {count} files")

    if facts.tech_stack:
        sections.append("\n## Detected Technologies")
        sections.append(", ".join(facts.tech_stack))

    if facts.entry_points:
        sections.append("\n## Entry Points")
        sections.append(", ".join(facts.entry_points))

    if facts.dependencies.dependencies:
        sections.append("\n## Key Dependencies")
        sections.append(", ".join(list(facts.dependencies.dependencies)[:15]))

    sections.append("\n## Directory Structure")
    sections.append(f"- Depth: {facts.structure.depth} levels")
    sections.append(f"- Directories: {', '.join(facts.structure.directories[:10])}")

    code_files = facts.categories.get("code", [])
    if code_files:
        sections.append("\n## Key Source Files")
        sections.append("\n".join(f"- {path}" for path in code_files[:10]))

    return "\n".join(sections)


def build_module_prompt(bundle: ModuleBundle) -> str:
    record = bundle.record
    sections: List[str] = [
        f"# File: {record.name}",
        f"- Path: {record.path}",
        f"- Lines: {record.lines}",
        f"- Size: {format_bytes(record.size)}",
    ]

    if record.imports:
        sections.append(f"\n## Imports ({len(record.imports)})")
        sections.extend(f"- {entry.source}" for entry in record.imports[:10])

    if record.exports:
        sections.append(f"\n## Exports ({len(record.exports)})")
        sections.extend(f"- {export.kind}: {export.name}" for export in record.exports)

    if record.functions:
        sections.append(f"\n## Functions ({len(record.functions)})")
        for function in record.functions[:15]:
            modifiers = ", ".join(
                label
                for label, flag in (
                    ("async", function.is_async),
                    ("exported", function.exported),
                    ("arrow", function.is_arrow),
                )
                if flag
            )
            suffix = f" [{modifiers}]" if modifiers else ""
            sections.append(f"- {function.name}({', '.join(function.params)}){suffix}")

    if record.classes:
        sections.append(f"\n## Classes ({len(record.classes)})")
        for cls in record.classes:
            extends = f" extends {cls.superclass}" if cls.superclass else ""
            sections.append(f"- {cls.name}{extends}")
            sections.extend(f"  - {method.name}()" for method in cls.methods[:5])

    preview = "\n".join(bundle.content.split("\n")[:CODE_PREVIEW_LINES])
    sections.append(f"\n## Code Preview\n```\n{preview}\n```")

    return "\n".join(sections)


class Summarizer:
    """Turns fact bundles into prose through an explicit LLM runner."""

    def __init__(self, runner: LLMRunner) -> None:
        self.runner = runner
        self.logger = get_logger("summarizer")

    def summarize(self, bundle: Bundle, kind: str) -> Optional[str]:
        """Return a summary for ``bundle`` or ``None`` when the runner fails."""
        if kind == PROJECT and isinstance(bundle, ProjectFacts):
            prompt, system = build_project_prompt(bundle), PROJECT_SYSTEM_PROMPT
        elif kind == MODULE and isinstance(bundle, ModuleBundle):
            prompt, system = build_module_prompt(bundle), MODULE_SYSTEM_PROMPT
        else:
            raise ValueError(f"Cannot summarize {type(bundle).__name__} as {kind!r}")

        try:
            return self.runner.run(prompt, system=system)
        except RuntimeError as exc:
            self.logger.warning("AI summarization unavailable: %s", exc)
            return None


__all__ = [
    "MODULE",
    "PROJECT",
    "ModuleBundle",
    "Summarizer",
    "build_module_prompt",
    "build_project_prompt",
]
