"""
Detail Enricher

Fetches each unique product's detail page and reads price, currency and
the primary image.

Features:
- Bounded worker pool (fixed concurrency, never one thread per product)
- Per-product failure isolation: one bad page never stops its siblings
- Cancellation checked before each request
- Tagged results: every record comes back as an EnrichmentResult
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

import requests

from ..errors import DetailFetchError, DetailParseError, ExtractionWarning
from ..http import ShopHttpClient, is_success
from ..models import EnrichmentResult, ShopReviewRecord
from .parsers import IMAGE_STRATEGIES, PRICE_STRATEGIES, DocumentParser, first_match, parse_price

logger = logging.getLogger(__name__)


class DetailEnricher:
    """
    Enriches aggregated records with detail page data.

    Usage:
        enricher = DetailEnricher(client, max_workers=4)
        results = enricher.enrich_all(records)
        enriched = [r.record for r in results]
    """

    def __init__(
        self,
        client: ShopHttpClient,
        max_workers: int = 4,
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the enricher.

        Args:
            client: Per-run HTTP client
            max_workers: Concurrency limit for detail requests
            cancel_event: When set, no further detail requests are issued
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.client = client
        self.max_workers = max_workers
        self.cancel_event = cancel_event
        self.skipped = 0

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def enrich(self, record: ShopReviewRecord) -> EnrichmentResult:
        """
        Fetch and parse one product's detail page.

        The input record is never modified. On success the result carries a
        new record with the detail fields filled in; on failure it carries
        the input record and the error.

        Args:
            record: Aggregated record to enrich

        Returns:
            EnrichmentResult
        """
        url = record.product_url

        try:
            response = self.client.get(url)
        except requests.RequestException as e:
            return self._failed(record, DetailFetchError(f"{type(e).__name__}: {e}", url=url))

        if not is_success(response):
            return self._failed(record, DetailFetchError(f"HTTP {response.status_code}", url=url))

        try:
            currency, amount, image_url = parse_detail_page(response.text)
        except Exception as e:
            # Any parser failure stays local to this product
            return self._failed(record, DetailParseError(f"{type(e).__name__}: {e}", url=url))

        warning = None
        if currency is None and image_url is None:
            warning = f"{ExtractionWarning.__name__}: no price or image found"
            logger.warning("%s on %s", warning, url)

        logger.debug("Fetched details for: %s", record.product_name)
        return EnrichmentResult(
            record=record.with_enrichment(currency=currency, price_amount=amount, image_url=image_url),
            warning=warning,
        )

    def enrich_all(
        self,
        records: list[ShopReviewRecord],
        on_result: Optional[Callable[[EnrichmentResult], None]] = None,
    ) -> list[EnrichmentResult]:
        """
        Enrich every record through the bounded worker pool.

        Blocks until each submitted record has either succeeded or failed.
        Records not started because of cancellation come back unchanged,
        flagged ``skipped`` and counted in ``self.skipped``.

        Args:
            records: Records in aggregation order
            on_result: Optional callback invoked as each result completes

        Returns:
            One EnrichmentResult per input record, in input order
        """
        self.skipped = 0
        if not records:
            return []

        logger.info("Fetching product details for %d products (%d workers)...",
                    len(records), self.max_workers)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [executor.submit(self._enrich_unless_cancelled, r, on_result) for r in records]
            results = [future.result() for future in futures]

        self.skipped = sum(1 for r in results if r is None)
        if self.skipped:
            logger.warning("Cancelled: %d products were not enriched", self.skipped)

        return [
            result if result is not None else EnrichmentResult(record=record, skipped=True)
            for record, result in zip(records, results)
        ]

    def _enrich_unless_cancelled(
        self,
        record: ShopReviewRecord,
        on_result: Optional[Callable[[EnrichmentResult], None]],
    ) -> Optional[EnrichmentResult]:
        if self.cancelled:
            return None
        result = self.enrich(record)
        if on_result is not None:
            on_result(result)
        return result

    @staticmethod
    def _failed(record: ShopReviewRecord, error: Exception) -> EnrichmentResult:
        logger.error("Error fetching details for %s: %s: %s",
                     record.product_url, type(error).__name__, error)
        return EnrichmentResult(record=record, error=error)


def parse_detail_page(html: str) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """
    Read price and image fields from detail page markup.

    Args:
        html: Detail page HTML

    Returns:
        (currency, price_amount, image_url); each None when not found
    """
    doc = DocumentParser(html)
    currency, amount = parse_price(first_match(PRICE_STRATEGIES, doc))
    image_url = first_match(IMAGE_STRATEGIES, doc)
    return currency, amount, image_url
