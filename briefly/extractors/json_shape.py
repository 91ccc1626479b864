"""Shape descriptors for JSON documents."""

from __future__ import annotations

import json
from typing import Any

from .base import Extraction, Extractor
from ..models import ExtractOptions, JsonArrayShape, JsonObjectShape, JsonShape

MAX_DEPTH = 3
MAX_KEYS = 10
PLACEHOLDER = "..."


def describe_json(value: Any, depth: int = 0) -> JsonShape:
    """Return the shape of ``value``; nothing below ``MAX_DEPTH`` is inspected."""
    if depth > MAX_DEPTH:
        return PLACEHOLDER

    if isinstance(value, list):
        items = describe_json(value[0], depth + 1) if value else None
        return JsonArrayShape(length=len(value), items=items)

    if isinstance(value, dict):
        names = list(value)
        keys = {name: describe_json(value[name], depth + 1) for name in names[:MAX_KEYS]}
        return JsonObjectShape(keys=keys, remaining_keys=max(len(names) - MAX_KEYS, 0))

    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "null"


class JsonExtractor(Extractor):
    """Parses JSON content and records its bounded shape."""

    def extract(self, content: str, extension: str, options: ExtractOptions) -> Extraction:
        try:
            value = json.loads(content)
        except (ValueError, RecursionError) as exc:
            return Extraction(parse_error=str(exc))
        return Extraction(structure=describe_json(value))


__all__ = ["JsonExtractor", "MAX_DEPTH", "MAX_KEYS", "PLACEHOLDER", "describe_json"]
