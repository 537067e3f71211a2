"""
Typed models shared with the crawler.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """
    Outcome of a crawl: word occurrence counts and the URLs that were visited.

    Both fields are frozen on construction. ``word_counts`` keeps the order it
    was given in, which the crawler uses to rank the most frequent words.
    """

    word_counts: Mapping[str, int] = field(default_factory=dict, hash=False)
    urls_visited: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "word_counts", MappingProxyType(dict(self.word_counts)))
        object.__setattr__(self, "urls_visited", frozenset(self.urls_visited))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping with ``wordCounts`` and ``urlsVisited``."""
        return {
            "wordCounts": dict(self.word_counts),
            "urlsVisited": sorted(self.urls_visited),
        }
