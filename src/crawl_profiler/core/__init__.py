"""Crawl data models."""

from .models import CrawlResult

__all__ = ["CrawlResult"]
