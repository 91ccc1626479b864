"""Structural extractors and extension-based dispatch."""

from __future__ import annotations

import os
from enum import Enum
from typing import Dict, Optional

from .base import Extraction, Extractor
from .ecmascript import ECMASCRIPT_EXTENSIONS, EcmaScriptExtractor
from .json_shape import JsonExtractor
from .python import PythonExtractor
from ..logging import get_logger
from ..models import ExtractOptions, FileRecord


class SourceKind(Enum):
    """Extraction strategy selected for a file extension."""

    ECMASCRIPT = "ecmascript"
    PYTHON = "python"
    JSON = "json"
    UNSUPPORTED = "unsupported"


_KIND_BY_EXTENSION: Dict[str, SourceKind] = {
    **{extension: SourceKind.ECMASCRIPT for extension in ECMASCRIPT_EXTENSIONS},
    ".py": SourceKind.PYTHON,
    ".json": SourceKind.JSON,
}

_EXTRACTORS: Dict[SourceKind, Extractor] = {
    SourceKind.ECMASCRIPT: EcmaScriptExtractor(),
    SourceKind.PYTHON: PythonExtractor(),
    SourceKind.JSON: JsonExtractor(),
}

logger = get_logger("extractors")


def source_kind(path: str) -> SourceKind:
    """Return the extraction strategy for ``path``."""
    extension = os.path.splitext(path)[1]
    return _KIND_BY_EXTENSION.get(extension, SourceKind.UNSUPPORTED)


def extract_file(path: str, content: str, options: Optional[ExtractOptions] = None) -> FileRecord:
    """Extract structural facts from ``content``; never raises for malformed input."""
    options = options or ExtractOptions()
    extension = os.path.splitext(path)[1]
    kind = source_kind(path)

    extraction = Extraction()
    extractor = _EXTRACTORS.get(kind)
    if extractor is not None:
        extraction = extractor.extract(content, extension, options)
        if extraction.parse_error:
            logger.debug("Parse error in %s: %s", path, extraction.parse_error)

    facts = extraction.facts
    return FileRecord(
        path=path,
        name=os.path.basename(path),
        extension=extension,
        lines=content.count("\n") + 1,
        size=len(content.encode("utf-8", errors="replace")),
        imports=facts.imports,
        exports=facts.exports,
        functions=facts.functions,
        classes=facts.classes,
        variables=facts.variables,
        comments=facts.comments,
        structure=extraction.structure,
        parse_error=extraction.parse_error,
        tree=extraction.tree,
    )


__all__ = [
    "Extraction",
    "Extractor",
    "SourceKind",
    "extract_file",
    "source_kind",
]
