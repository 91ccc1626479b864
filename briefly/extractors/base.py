"""Base classes for per-language structural extractors."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from ..models import ExtractOptions, JsonShape, StructuralFacts


@dataclass(frozen=True)
class Extraction:
    """Language-specific output folded into a FileRecord by the dispatcher."""

    facts: StructuralFacts = field(default_factory=StructuralFacts)
    structure: Optional[JsonShape] = None
    parse_error: Optional[str] = None
    tree: Optional[Any] = None


class Extractor(ABC):
    """Contract for extractors that turn file content into structural facts."""

    @abstractmethod
    def extract(self, content: str, extension: str, options: ExtractOptions) -> Extraction:
        """Return the facts for ``content``; malformed input must not raise."""
