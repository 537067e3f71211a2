"""
Export helpers for crawl results.
"""

from __future__ import annotations

from .json_writer import CrawlResultWriter, export_crawl_result

__all__ = [
    "CrawlResultWriter",
    "export_crawl_result",
]
