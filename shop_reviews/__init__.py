"""
Shop Review Sales Crawler

Estimates product sales for a storefront by counting how often each product
appears in the shop's review listing, then enriches each product with price,
currency and image data from its own page.

Modules:
    models      - Data models (ProductReference, ShopReviewRecord, CrawlResult)
    common      - Shared utilities (config loader, logging, URL helpers)
    http        - Per-run HTTP client
    extraction  - Page count probe, listing and detail page extraction
    aggregation - Dedupe/count and ranking
    validation  - Run tracking and summary report
    export      - JSON / CSV writers
    pipeline    - ReviewPipeline wiring the stages together
"""

from .pipeline import ReviewPipeline

__all__ = ['ReviewPipeline']
