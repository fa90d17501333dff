"""
Listing Page Fetcher

Fetches one page of a shop's review listing and extracts the product
referenced by each review entry, in page order.
"""

from __future__ import annotations

import logging

import requests

from ..common.config_loader import CrawlerConfig
from ..common.url_utils import make_absolute
from ..errors import ListingFetchError
from ..http import ShopHttpClient, is_success
from ..models import UNKNOWN_PRODUCT, ProductReference
from .parsers import DocumentParser, has_classes

logger = logging.getLogger(__name__)

REVIEW_ITEM_SELECTOR = "div.review-item"
LISTING_GROUP_CLASSES = "wt-grid__item-xs-12 wt-grid__item-lg-10 listing-group wt-pl-xs-0 wt-pr-xs-0"
PRODUCT_LINK_CLASSES = "wt-display-block wt-text-link-no-underline"


def extract_references(html: str, origin: str) -> list[ProductReference]:
    """
    Extract product references from listing page markup.

    Args:
        html: Listing page HTML
        origin: Site origin used to absolutize relative hrefs

    Returns:
        References in document order. Entries without an href are dropped.
        An empty list is returned when the page has no review entries.
    """
    doc = DocumentParser(html)
    is_listing_group = has_classes("div", LISTING_GROUP_CLASSES)
    is_product_link = has_classes("a", PRODUCT_LINK_CLASSES)

    # Nested review items share descendants; keep each container once
    containers = []
    seen = set()
    for item in doc.select_all(REVIEW_ITEM_SELECTOR):
        for container in doc.find_all(is_listing_group, root=item):
            if id(container) not in seen:
                seen.add(id(container))
                containers.append(container)

    references = []
    for container in containers:
        link = doc.find_first(is_product_link, root=container)
        href = (doc.attr(link, "href") or "").strip()
        if not href:
            logger.debug("Skipping review entry without a product link")
            continue

        name = (doc.attr(link, "aria-label") or "").strip() or UNKNOWN_PRODUCT
        references.append(ProductReference(
            product_url=make_absolute(href, origin),
            product_name=name,
        ))

    return references


class ListingPageFetcher:
    """Retrieves listing pages and returns their product references."""

    def __init__(self, client: ShopHttpClient, config: CrawlerConfig):
        self.client = client
        self.config = config

    def fetch(self, shop_name: str, page: int) -> list[ProductReference]:
        """
        Fetch a listing page and extract its references.

        Args:
            shop_name: Shop identifier
            page: 1-based page number

        Returns:
            Ordered list of ProductReference (possibly empty)

        Raises:
            ListingFetchError: On request failure or non-2xx status
        """
        url = self.config.listing_url(shop_name, page)
        logger.info("Processing page %d...", page)

        try:
            response = self.client.get(url)
        except requests.RequestException as e:
            raise ListingFetchError(
                f"Request error on page {page}: {type(e).__name__}: {e}",
                url=url, page=page,
            ) from e

        if not is_success(response):
            raise ListingFetchError(
                f"Request error on page {page}: HTTP {response.status_code}",
                url=url, page=page,
            )

        references = extract_references(response.text, self.config.origin)
        if not references:
            logger.info("No reviews found on page %d (%s)", page, url)
        else:
            logger.info("Page %d: %d reviews", page, len(references))
        for ref in references:
            logger.debug("Product URL: %s, Product Name: %s", ref.product_url, ref.product_name)

        return references
