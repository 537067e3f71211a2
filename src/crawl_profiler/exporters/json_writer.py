"""
JSON exporter for crawl results.

A :class:`CrawlResult` is written as a single JSON object with two fields,
``wordCounts`` and ``urlsVisited``.

Writing to a path appends to any existing file rather than replacing it.
Appending a second result therefore produces two concatenated JSON documents,
not one valid document; callers that need a single document must write to a
fresh path.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from crawl_profiler.core.models import CrawlResult
from crawl_profiler.errors import ResultWriteError

from .base import TextSink, _normalise_output_path

logger = logging.getLogger("crawl_profiler.exporters.json")


class CrawlResultWriter:
    """Formats a :class:`CrawlResult` as JSON and writes it to a path or sink."""

    def __init__(self, result: CrawlResult, pretty_print: bool = False) -> None:
        if result is None:
            raise TypeError("result must not be None")
        self.result = result
        self._indent = 2 if pretty_print else None

    def write(self, destination: str | os.PathLike[str] | TextSink) -> None:
        """
        Write the result to ``destination``.

        Args:
            destination: A file path, appended to and created if missing, or
                an open text sink, which is written to but never closed.

        Raises:
            ResultWriteError: the result could not be written.
        """
        if isinstance(destination, (str, os.PathLike)):
            self._write_path(destination)
            return
        try:
            self._dump(destination)
        except OSError as exc:
            logger.error("Failed to write crawl result: %s", exc, exc_info=True)
            raise ResultWriteError(f"Failed to write crawl result: {exc}") from exc

    def _write_path(self, path_like: str | os.PathLike[str]) -> None:
        try:
            path = _normalise_output_path(path_like)
            logger.info("Appending crawl result JSON to %s", path)
            with path.open("a", encoding="utf-8") as handle:
                self._dump(handle)
        except OSError as exc:
            logger.error("Failed to write crawl result to %s: %s", path_like, exc, exc_info=True)
            raise ResultWriteError(f"Failed to write crawl result to {path_like}: {exc}") from exc

    def _dump(self, sink: TextSink) -> None:
        sink.write(json.dumps(self.result.to_dict(), ensure_ascii=False, indent=self._indent))


def export_crawl_result(
    output_path: str | os.PathLike[str],
    result: CrawlResult,
    pretty_print: bool = False,
) -> Path:
    """
    Append ``result`` as JSON to ``output_path`` and return the resolved path.

    Args:
        output_path: Path to the output JSON file.
        result: The crawl result to export.
        pretty_print: If True, indent the JSON output.

    Raises:
        ResultWriteError: the result could not be written.
    """
    CrawlResultWriter(result, pretty_print=pretty_print).write(output_path)
    return Path(output_path).expanduser().resolve()
