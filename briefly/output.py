"""Report file writing."""

from __future__ import annotations

import re
from pathlib import Path

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def write_output(path: str | Path, text: str) -> Path:
    """Write ``text`` to ``path`` as UTF-8, creating parent directories."""
    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(_ANSI_ESCAPE.sub("", text), encoding="utf-8")
    return target


__all__ = ["write_output"]
