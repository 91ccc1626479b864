"""Line-oriented heuristic extractor for Python sources.

This is deliberately shallow: every physical line is tested against a small
set of patterns, and the first pattern that matches wins. Multi-line
signatures, decorators, ``async def`` and nested scopes are not tracked.
"""

from __future__ import annotations

import re
from typing import List

from .base import Extraction, Extractor
from ..models import (
    ClassRecord,
    ExtractOptions,
    FunctionRecord,
    ImportRecord,
    StructuralFacts,
    VariableRecord,
)

_IMPORT = re.compile(r"^(?:from\s+(\S+)\s+)?import\s+(.+)$")
_FUNCTION = re.compile(r"^(\s*)def\s+(\w+)\s*\(([^)]*)\)")
_CLASS = re.compile(r"^class\s+(\w+)(?:\(([^)]*)\))?:")
_CONSTANT = re.compile(r"^([A-Z_][A-Z0-9_]*)\s*=")


class PythonExtractor(Extractor):
    """Extracts imports, functions, classes and module constants line by line."""

    def extract(self, content: str, extension: str, options: ExtractOptions) -> Extraction:
        imports: List[ImportRecord] = []
        functions: List[FunctionRecord] = []
        classes: List[ClassRecord] = []
        variables: List[VariableRecord] = []

        for number, raw_line in enumerate(content.split("\n"), start=1):
            line = raw_line.rstrip("\r")

            match = _IMPORT.match(line)
            if match:
                source = match.group(1) or match.group(2).strip()
                imports.append(ImportRecord(source=source, line=number))
                continue

            match = _FUNCTION.match(line)
            if match:
                indent, name, params = match.groups()
                functions.append(
                    FunctionRecord(
                        name=name,
                        params=tuple(p.strip() for p in params.split(",") if p.strip()),
                        line=number,
                        is_method=len(indent) > 0,
                    )
                )
                continue

            match = _CLASS.match(line)
            if match:
                name, bases = match.groups()
                superclass = None
                if bases:
                    superclass = bases.split(",")[0].strip() or None
                classes.append(ClassRecord(name=name, line=number, superclass=superclass))
                continue

            match = _CONSTANT.match(line)
            if match:
                variables.append(VariableRecord(name=match.group(1), line=number, kind="constant"))

        return Extraction(
            facts=StructuralFacts(
                imports=tuple(imports),
                functions=tuple(functions),
                classes=tuple(classes),
                variables=tuple(variables),
            )
        )


__all__ = ["PythonExtractor"]
