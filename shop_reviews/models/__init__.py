"""
Data models for the review crawl.

This module contains pure data classes with no business logic.
"""

from .review import (
    UNKNOWN_PRODUCT,
    CrawlFailure,
    CrawlResult,
    EnrichmentResult,
    PageFetchOutcome,
    ProductReference,
    ShopReviewRecord,
)

__all__ = [
    'UNKNOWN_PRODUCT',
    'ProductReference',
    'ShopReviewRecord',
    'PageFetchOutcome',
    'EnrichmentResult',
    'CrawlFailure',
    'CrawlResult',
]
