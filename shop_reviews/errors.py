"""
Crawl Errors

Exception hierarchy for the review crawl.

Fatal errors (ResolutionError, ListingFetchError) unwind to the caller.
Enrichment errors are isolated to one record and collected into the run result.
"""

from typing import Optional


class ShopReviewsError(Exception):
    """Base class for all crawl errors."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class ResolutionError(ShopReviewsError):
    """The maximum page count could not be determined."""


class ListingFetchError(ShopReviewsError):
    """A listing page request failed or returned a non-2xx status."""

    def __init__(self, message: str, url: str = "", page: Optional[int] = None):
        super().__init__(message, url)
        self.page = page


class EnrichmentError(ShopReviewsError):
    """Base class for per-product detail page failures."""


class DetailFetchError(EnrichmentError):
    """The detail page request failed, timed out or returned non-2xx."""


class DetailParseError(EnrichmentError):
    """The detail page was fetched but could not be parsed."""


class ExtractionWarning(UserWarning):
    """A page parsed but yielded no matching elements."""
