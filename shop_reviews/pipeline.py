"""
Review Crawl Pipeline

Runs the full crawl for one shop:

    PageCountResolver -> ListingPageFetcher (x pages) -> ReviewAggregator
        -> DetailEnricher -> rank_records

Features:
- One explicitly owned HTTP client per run (closed with the pipeline)
- Optional concurrent listing fetches, bounded by listing_workers
- Fatal listing failures by default, opt-in skip-and-warn
- Cancellation via threading.Event, checked between requests
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .aggregation import ReviewAggregator, rank_records
from .common.config_loader import CrawlerConfig
from .errors import ListingFetchError
from .extraction import DetailEnricher, ListingPageFetcher, PageCountResolver
from .http import ShopHttpClient
from .models import CrawlResult, PageFetchOutcome
from .validation import CrawlTracker

logger = logging.getLogger(__name__)


class ReviewPipeline:
    """
    Crawl-aggregate-enrich pipeline for one shop.

    Usage:
        config = load_crawler_config()
        with ReviewPipeline(config) as pipeline:
            max_pages = pipeline.resolve_max_pages("MyShop")
            result = pipeline.run("MyShop", pages=3, max_pages=max_pages)
        for record in result.records:
            print(record.product_name, record.occurrence_count)
    """

    def __init__(
        self,
        config: CrawlerConfig,
        client: Optional[ShopHttpClient] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Crawler settings
            client: HTTP client to use; one is created (and owned) if omitted
            cancel_event: External cancellation signal
        """
        self.config = config
        self._owns_client = client is None
        self.client = client or ShopHttpClient(config)
        self.cancel_event = cancel_event or threading.Event()
        self.tracker = CrawlTracker()

        self.resolver = PageCountResolver(self.client, config)
        self.listing_fetcher = ListingPageFetcher(self.client, config)
        self.enricher = DetailEnricher(
            self.client,
            max_workers=config.detail_workers,
            cancel_event=self.cancel_event,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self._owns_client:
            self.client.close()

    def cancel(self) -> None:
        """Stop issuing new requests at the next page or product boundary."""
        logger.warning("Cancellation requested")
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def resolve_max_pages(self, shop_name: str) -> int:
        """Resolve the shop's last listing page. Raises ResolutionError."""
        return self.resolver.resolve(shop_name)

    def run(self, shop_name: str, pages: Optional[int] = None, max_pages: Optional[int] = None) -> CrawlResult:
        """
        Crawl, aggregate, enrich and rank.

        Args:
            shop_name: Shop identifier
            pages: Number of listing pages to crawl (default: all pages)
            max_pages: Already-resolved page bound; resolved here when None

        Returns:
            CrawlResult with ranked records. ``incomplete`` is set when the
            run was cancelled before every request was issued.

        Raises:
            ResolutionError: If the page bound cannot be determined
            ListingFetchError: If a listing page fails and skip_failed_pages is off
            ValueError: If pages is outside 1..max_pages
        """
        self.tracker = CrawlTracker()

        if max_pages is None:
            max_pages = self.resolve_max_pages(shop_name)
        if pages is None:
            pages = max_pages
        if pages < 1 or pages > max_pages:
            raise ValueError(f"Page count must be between 1 and {max_pages}, got {pages}")

        result = CrawlResult(shop_name=shop_name, max_pages=max_pages, pages_requested=pages)

        outcomes = self._fetch_pages(shop_name, pages)

        aggregator = ReviewAggregator()
        for outcome in outcomes:
            if outcome.ok:
                aggregator.add_page(outcome.references)
                result.pages_fetched += 1
            else:
                result.lower_bound_counts = True

        records = aggregator.records()
        logger.info("Aggregated %d references into %d unique products",
                    aggregator.total_references, len(aggregator))

        results = self.enricher.enrich_all(records, on_result=self.tracker.record_enrichment)
        enriched = [r.record for r in results]
        logger.info("Enriched %d of %d products",
                    sum(1 for r in enriched if r.is_enriched), len(enriched))

        result.records = rank_records(enriched)
        result.failures = list(self.tracker.failures)
        result.incomplete = self.cancelled and (
            result.pages_fetched + self.tracker.pages_failed < pages or self.enricher.skipped > 0
        )

        logger.info("Done: %d products, %d failed enrichments, %d requests%s",
                    len(result.records), result.failed_enrichments, self.client.requests_made,
                    " (incomplete)" if result.incomplete else "")
        return result

    def _fetch_pages(self, shop_name: str, pages: int) -> list[PageFetchOutcome]:
        """
        Fetch listing pages 1..pages.

        Returns outcomes for the pages that were attempted, sorted by page.
        Under the default policy the first failing page (lowest number)
        is re-raised once in-flight fetches have settled.
        """
        abort = threading.Event()

        def fetch_one(page: int) -> Optional[PageFetchOutcome]:
            if self.cancelled or abort.is_set():
                return None
            try:
                references = self.listing_fetcher.fetch(shop_name, page)
            except ListingFetchError as e:
                if not self.config.skip_failed_pages:
                    abort.set()
                return PageFetchOutcome(page=page, error=e)
            self.tracker.record_page(page, self.config.listing_url(shop_name, page), len(references))
            return PageFetchOutcome(page=page, references=references)

        if self.config.listing_workers == 1:
            attempted = []
            for page in range(1, pages + 1):
                outcome = fetch_one(page)
                if outcome is None:
                    break
                attempted.append(outcome)
        else:
            with ThreadPoolExecutor(max_workers=self.config.listing_workers) as executor:
                attempted = list(executor.map(fetch_one, range(1, pages + 1)))
            attempted = [o for o in attempted if o is not None]

        attempted.sort(key=lambda o: o.page)

        for outcome in attempted:
            if outcome.ok:
                continue
            if not self.config.skip_failed_pages:
                logger.error("Aborting crawl: %s", outcome.error)
                raise outcome.error
            logger.warning("Skipping page %d: %s (sales counts become lower bounds)",
                           outcome.page, outcome.error)
            self.tracker.record_page_failure(outcome.error)

        return attempted
