"""Tech-stack inference from file extensions and declared dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping

from .models import DependencyInfo


@dataclass(frozen=True)
class StackRule:
    """Fires ``tag`` when any of ``keys`` is observed in the rule's source."""

    tag: str
    source: str
    keys: tuple[str, ...]


STACK_RULES: tuple[StackRule, ...] = (
    # Languages
    StackRule("JavaScript", "extension", (".js", ".mjs", ".cjs")),
    StackRule("TypeScript", "extension", (".ts", ".tsx")),
    StackRule("Python", "extension", (".py",)),
    StackRule("Go", "extension", (".go",)),
    StackRule("Rust", "extension", (".rs",)),
    # Frameworks
    StackRule("React", "dependency", ("react", "react-dom")),
    StackRule("Vue", "dependency", ("vue",)),
    StackRule("Angular", "dependency", ("@angular/core",)),
    StackRule("Next.js", "dependency", ("next",)),
    StackRule("Express", "dependency", ("express",)),
    StackRule("Fastify", "dependency", ("fastify",)),
    StackRule("NestJS", "dependency", ("nestjs", "@nestjs/core")),
    StackRule("FastAPI", "dependency", ("fastapi",)),
    StackRule("Django", "dependency", ("django",)),
    StackRule("Flask", "dependency", ("flask",)),
    # Tools
    StackRule("Webpack", "dependency", ("webpack",)),
    StackRule("Vite", "dependency", ("vite",)),
    StackRule("Jest", "dependency", ("jest",)),
    StackRule("Mocha", "dependency", ("mocha",)),
    StackRule("Tailwind CSS", "dependency", ("tailwindcss",)),
    StackRule("pytest", "dependency", ("pytest",)),
)


def detect_tech_stack(
    extensions: Iterable[str],
    dependencies: DependencyInfo,
    rules: Iterable[StackRule] = STACK_RULES,
) -> List[str]:
    """Return every tag whose rule matches, in rule-table order."""
    observed = {
        "extension": set(extensions),
        "dependency": _dependency_names(dependencies.dependencies, dependencies.dev_dependencies),
    }
    return [
        rule.tag
        for rule in rules
        if any(key in observed.get(rule.source, set()) for key in rule.keys)
    ]


def _dependency_names(*mappings: Mapping[str, str]) -> set[str]:
    return {name.lower() for mapping in mappings for name in mapping}


__all__ = ["STACK_RULES", "StackRule", "detect_tech_stack"]
