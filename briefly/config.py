"""Configuration loading for briefly (.briefly.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".briefly.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SummarizerConfig:
    """AI summarization settings from .briefly.yml."""

    enabled: bool = True
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    request_timeout: Optional[float] = None


@dataclass
class ScanConfig:
    """Directory scan bounds and extra exclusions."""

    max_depth: Optional[int] = None
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class ExportConfig:
    """Limits applied by the Markdown export command."""

    max_files: int = 20
    max_summaries: int = 10


@dataclass
class BrieflyConfig:
    """Represents the settings defined in .briefly.yml."""

    root: Path
    summarizer: SummarizerConfig = field(default_factory=SummarizerConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(config_path: Path) -> BrieflyConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BrieflyConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    summarizer = SummarizerConfig()
    summarizer_data = _as_dict(data.get("summarizer"))
    if summarizer_data:
        enabled = _as_bool(summarizer_data.get("enabled"))
        summarizer = SummarizerConfig(
            enabled=True if enabled is None else enabled,
            model=_as_str(summarizer_data.get("model")),
            base_url=_as_str(summarizer_data.get("base_url")),
            api_key=_as_str(summarizer_data.get("api_key")),
            temperature=_as_float(summarizer_data.get("temperature")),
            max_tokens=_as_int(summarizer_data.get("max_tokens")),
            request_timeout=_as_float(summarizer_data.get("request_timeout")),
        )

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        scan.max_depth = _as_int(scan_data.get("max_depth"))
        scan.exclude_paths = _as_str_list(scan_data.get("exclude_paths"))

    export = ExportConfig()
    export_data = _as_dict(data.get("export"))
    if export_data:
        max_files = _as_int(export_data.get("max_files"))
        max_summaries = _as_int(export_data.get("max_summaries"))
        if max_files is not None:
            export.max_files = max_files
        if max_summaries is not None:
            export.max_summaries = max_summaries

    return BrieflyConfig(root=root, summarizer=summarizer, scan=scan, export=export)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
