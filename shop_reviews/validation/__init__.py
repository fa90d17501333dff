"""
Run tracking for crawls.

Modules:
    crawl_tracker - CrawlTracker (per-stage counts, failures, summary report)
"""

from .crawl_tracker import CrawlTracker

__all__ = ['CrawlTracker']
