"""
CrawlTracker

Tracks per-stage outcomes across a crawl and prints the run summary.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from typing import TYPE_CHECKING

from ..models import CrawlFailure

if TYPE_CHECKING:
    from ..errors import ListingFetchError
    from ..models import EnrichmentResult


class CrawlTracker:
    """
    Aggregate outcome tracker for one pipeline run.

    Records listing page results and enrichment results, keeps every
    non-fatal failure with its URL and stage, and prints a final report.
    Enrichment results arrive from worker threads, so recording is locked.

    Usage::

        tracker = CrawlTracker()
        tracker.record_page(1, url, n_references)
        enricher.enrich_all(records, on_result=tracker.record_enrichment)
        tracker.print_final_report()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

        self.pages_fetched: int = 0
        self.pages_failed: int = 0
        self.empty_pages: int = 0
        self.references: int = 0

        self.enriched: int = 0
        self.enrichment_failed: int = 0
        self.enrichment_warnings: int = 0

        # Error type name -> count
        self.error_counts: dict[str, int] = defaultdict(int)
        self.failures: list[CrawlFailure] = []

    # ── Listing stage ─────────────────────────────────────────────────────────

    def record_page(self, page: int, url: str, n_references: int) -> None:
        """Record a successfully fetched listing page."""
        with self._lock:
            self.pages_fetched += 1
            self.references += n_references
            if n_references == 0:
                self.empty_pages += 1
                self.failures.append(CrawlFailure(
                    stage="listing",
                    url=url,
                    error=f"ExtractionWarning: no reviews found on page {page}",
                    warning=True,
                ))

    def record_page_failure(self, error: "ListingFetchError") -> None:
        """Record a listing page that was skipped under skip-and-warn."""
        with self._lock:
            self.pages_failed += 1
            self.error_counts[type(error).__name__] += 1
            self.failures.append(CrawlFailure(stage="listing", url=error.url, error=str(error)))

    # ── Detail stage ──────────────────────────────────────────────────────────

    def record_enrichment(self, result: "EnrichmentResult") -> None:
        """Record one enrichment result (called from worker threads)."""
        with self._lock:
            url = result.record.product_url
            if result.skipped:
                return
            if result.error is not None:
                self.enrichment_failed += 1
                self.error_counts[type(result.error).__name__] += 1
                self.failures.append(CrawlFailure(
                    stage="detail",
                    url=url,
                    error=f"{type(result.error).__name__}: {result.error}",
                ))
                return

            self.enriched += 1
            if result.warning:
                self.enrichment_warnings += 1
                self.failures.append(CrawlFailure(
                    stage="detail", url=url, error=result.warning, warning=True,
                ))

    # ── Reporting ─────────────────────────────────────────────────────────────

    def has_critical_failures(self, threshold_pct: float = 50.0) -> bool:
        """Return True if the enrichment failure rate exceeds threshold_pct."""
        attempted = self.enriched + self.enrichment_failed
        if attempted == 0:
            return False
        return (self.enrichment_failed / attempted * 100) > threshold_pct

    def print_final_report(
        self,
        unique_products: int,
        incomplete: bool = False,
        lower_bound_counts: bool = False,
    ) -> None:
        """Print the crawl summary table."""
        print("\n" + "=" * 60)
        print("Crawl Summary" + ("  [INCOMPLETE]" if incomplete else ""))
        print("=" * 60)
        print("\n  Listing pages:")
        print(f"     Fetched:            {self.pages_fetched}")
        print(f"     Empty:              {self.empty_pages}")
        if self.pages_failed:
            print(f"     Skipped (failed):   {self.pages_failed}")
        print(f"     Review references:  {self.references}")
        print("\n  Products:")
        print(f"     Unique products:    {unique_products}")
        print(f"     Enriched:           {self.enriched}")
        print(f"     Failed enrichments: {self.enrichment_failed}")
        if self.enrichment_warnings:
            print(f"     No price/image:     {self.enrichment_warnings}")

        if self.error_counts:
            print("\n  Errors by type:")
            for name, count in sorted(self.error_counts.items(), key=lambda x: -x[1]):
                print(f"     {name:<20} {count:>5}")

        failed = [f for f in self.failures if not f.warning]
        if failed:
            print("\n  Failed URLs:")
            for failure in failed[:10]:
                print(f"     [{failure.stage}] {failure.url}")
            if len(failed) > 10:
                print(f"     ... and {len(failed) - 10} more")

        if lower_bound_counts:
            print("\n  NOTE: listing pages were skipped; sales counts are lower bounds")
        if incomplete:
            print("\n  NOTE: run was cancelled; results are partial")
        print("=" * 60)
