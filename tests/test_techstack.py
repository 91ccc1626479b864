"""Tests for briefly.techstack."""

from __future__ import annotations

from briefly.models import DependencyInfo
from briefly.techstack import detect_tech_stack


def test_languages_and_frameworks_fire_in_table_order() -> None:
    deps = DependencyInfo(
        manager="npm",
        dependencies={"react": "^18.0.0", "express": "^4.0.0"},
        dev_dependencies={"vite": "^5.0.0", "jest": "^29.0.0"},
    )

    stack = detect_tech_stack([".tsx", ".js", ".md"], deps)

    assert stack == ["JavaScript", "TypeScript", "React", "Express", "Vite", "Jest"]


def test_dependency_matching_is_case_insensitive() -> None:
    deps = DependencyInfo(manager="pip", dependencies={"Django": ">=4", "Flask": "*"})

    assert detect_tech_stack([".py"], deps) == ["Python", "Django", "Flask"]


def test_scoped_packages_map_to_frameworks() -> None:
    deps = DependencyInfo(
        dependencies={"@angular/core": "^17.0.0", "@nestjs/core": "^10.0.0"},
        dev_dependencies={"tailwindcss": "^3.0.0"},
    )

    assert detect_tech_stack([], deps) == ["Angular", "NestJS", "Tailwind CSS"]


def test_nothing_observed_yields_no_tags() -> None:
    assert detect_tech_stack([".txt"], DependencyInfo()) == []
