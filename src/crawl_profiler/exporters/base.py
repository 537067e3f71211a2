"""
Shared helpers for crawl result exporters.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


class TextSink(Protocol):
    """Minimal writable text destination."""

    def write(self, text: str, /) -> object:
        ...


def _normalise_output_path(path_like: str | os.PathLike[str]) -> Path:
    """Normalize and ensure the parent directory of the output path exists."""
    path = Path(path_like).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
