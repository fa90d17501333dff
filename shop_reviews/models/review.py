"""
Review crawl data models.

Pure data classes for listing references, aggregated records and run results.
No business logic - only data structure definitions.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional

UNKNOWN_PRODUCT = "Unknown Product"


@dataclass(frozen=True)
class ProductReference:
    """A (URL, name) pair extracted from one review entry on a listing page."""
    product_url: str
    product_name: str = UNKNOWN_PRODUCT


@dataclass
class ShopReviewRecord:
    """
    One unique product seen across the crawled listing pages.

    Enrichment fields stay None until a detail page has been parsed
    successfully; a failed enrichment leaves them None rather than empty.
    """

    product_url: str
    product_name: str
    occurrence_count: int = 0

    # Detail page enrichment
    currency: Optional[str] = None
    price_amount: Optional[str] = None
    image_url: Optional[str] = None

    @property
    def is_enriched(self) -> bool:
        return any(v is not None for v in (self.currency, self.price_amount, self.image_url))

    def with_enrichment(
        self,
        currency: Optional[str] = None,
        price_amount: Optional[str] = None,
        image_url: Optional[str] = None,
    ) -> "ShopReviewRecord":
        """Return a copy carrying detail page fields. Key and count are kept."""
        return replace(self, currency=currency, price_amount=price_amount, image_url=image_url)


@dataclass
class PageFetchOutcome:
    """Result of fetching one listing page."""
    page: int
    references: List[ProductReference] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class EnrichmentResult:
    """
    Tagged result of enriching one record.

    On success ``record`` carries the detail page fields and ``error`` is None.
    On failure ``record`` is the untouched input and ``error`` holds the reason.
    """

    record: ShopReviewRecord
    error: Optional[Exception] = None
    warning: Optional[str] = None  # page parsed but no fields matched
    skipped: bool = False          # not attempted because the run was cancelled

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CrawlFailure:
    """A non-fatal problem recorded during a run."""
    stage: str      # "listing" or "detail"
    url: str
    error: str
    warning: bool = False  # ExtractionWarning rather than a failed request or parse


@dataclass
class CrawlResult:
    """
    Final output of a pipeline run.

    Field Groups:
    - Bounds: shop name, resolved max pages, pages requested / fetched
    - Records: ranked ShopReviewRecord list
    - Diagnostics: collected non-fatal failures
    - Flags: ``incomplete`` when the run was cancelled, ``lower_bound_counts``
      when listing pages were skipped and counts may be undercounted
    """

    shop_name: str
    max_pages: int
    pages_requested: int
    pages_fetched: int = 0
    records: List[ShopReviewRecord] = field(default_factory=list)
    failures: List[CrawlFailure] = field(default_factory=list)
    incomplete: bool = False
    lower_bound_counts: bool = False

    @property
    def failed_enrichments(self) -> int:
        return sum(1 for f in self.failures if f.stage == "detail" and not f.warning)

    @property
    def failed_urls(self) -> List[str]:
        return [f.url for f in self.failures if not f.warning]
