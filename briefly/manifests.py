"""Dependency manifest helpers."""

from __future__ import annotations

import json
import re
import tomllib
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .logging import get_logger
from .models import DependencyInfo

logger = get_logger("manifests")

_REQUIREMENT = re.compile(
    r"^(?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*(?P<spec>[<>=!~].*)?$"
)
_PEP508_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*(.*)$")

_PYPROJECT_DEV_GROUPS = ("dev", "test", "tests")


# Node.js helpers


def _read_package_json(root: Path) -> Optional[Dict[str, Any]]:
    package_json = root / "package.json"
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValueError):
        return None
    if isinstance(data, dict):
        return data
    return None


def load_package_json(root: Path) -> Dict[str, Any]:
    """Return the parsed package.json contents or an empty dict."""
    return _read_package_json(root) or {}


def _probe_package_json(root: Path) -> Optional[DependencyInfo]:
    data = _read_package_json(root)
    if data is None:
        return None
    return DependencyInfo(
        manager="npm",
        dependencies=_as_version_map(data.get("dependencies")),
        dev_dependencies=_as_version_map(data.get("devDependencies")),
    )


def _as_version_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(name): str(version) for name, version in value.items()}


# Python helpers


def parse_requirements(content: str) -> Dict[str, str]:
    """Map requirement names to version specifiers (``*`` when unpinned)."""
    packages: Dict[str, str] = {}
    for line in content.splitlines():
        stripped = line.split(" #", 1)[0].split(";", 1)[0].strip()
        if not stripped or stripped.startswith(("#", "-")):
            continue
        match = _REQUIREMENT.match(stripped)
        if match:
            spec = (match.group("spec") or "").strip()
            packages[match.group("name")] = spec or "*"
    return packages


def _probe_requirements(root: Path) -> Optional[DependencyInfo]:
    requirements = root / "requirements.txt"
    try:
        content = requirements.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return DependencyInfo(manager="pip", dependencies=parse_requirements(content))


def _probe_pyproject(root: Path) -> Optional[DependencyInfo]:
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        return None

    info = DependencyInfo(manager="poetry/pip")
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.debug("Unable to parse %s: %s", pyproject, exc)
        return info

    project = data.get("project")
    if isinstance(project, dict):
        info.dependencies.update(_pep508_map(project.get("dependencies")))
        optional = project.get("optional-dependencies")
        if isinstance(optional, dict):
            for group in _PYPROJECT_DEV_GROUPS:
                info.dev_dependencies.update(_pep508_map(optional.get(group)))

    tool = data.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict):
        info.dependencies.update(_poetry_map(poetry.get("dependencies")))
        info.dev_dependencies.update(_poetry_map(poetry.get("dev-dependencies")))
        groups = poetry.get("group")
        if isinstance(groups, dict):
            for group in _PYPROJECT_DEV_GROUPS:
                group_data = groups.get(group)
                if isinstance(group_data, dict):
                    info.dev_dependencies.update(_poetry_map(group_data.get("dependencies")))
    return info


def _pep508_map(values: Any) -> Dict[str, str]:
    result: Dict[str, str] = {}
    if not isinstance(values, list):
        return result
    for entry in values:
        if not isinstance(entry, str):
            continue
        match = _PEP508_NAME.match(entry.split(";", 1)[0])
        if match:
            result[match.group(1)] = match.group(2).strip() or "*"
    return result


def _poetry_map(values: Any) -> Dict[str, str]:
    result: Dict[str, str] = {}
    if not isinstance(values, dict):
        return result
    for name, spec in values.items():
        if str(name).lower() == "python":
            continue
        if isinstance(spec, dict):
            spec = spec.get("version", "*")
        result[str(name)] = str(spec)
    return result


_PROBES: tuple[Callable[[Path], Optional[DependencyInfo]], ...] = (
    _probe_package_json,
    _probe_requirements,
    _probe_pyproject,
)


def load_dependencies(root: Path) -> DependencyInfo:
    """Return dependencies from the first manifest found, in priority order."""
    for probe in _PROBES:
        info = probe(root)
        if info is not None:
            logger.debug("Dependency manifest detected (%s) in %s", info.manager, root)
            return info
    return DependencyInfo()


def package_entry_points(root: Path) -> List[str]:
    """Return the ``main`` and ``bin`` targets declared in package.json."""
    data = load_package_json(root)
    entries: List[str] = []
    main = data.get("main")
    if isinstance(main, str) and main:
        entries.append(main)
    bins = data.get("bin")
    if isinstance(bins, str) and bins:
        entries.append(bins)
    elif isinstance(bins, dict):
        entries.extend(str(target) for target in bins.values() if target)
    return entries


__all__ = [
    "load_dependencies",
    "load_package_json",
    "package_entry_points",
    "parse_requirements",
]
