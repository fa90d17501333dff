"""
Page Count Resolver

Learns how many review listing pages a shop has by requesting a page far
past the end. The server clamps the request and redirects to the real last
page; the page number is read back from the final URL.
"""

import logging

import requests

from ..common.config_loader import CrawlerConfig
from ..common.url_utils import page_number_from_url
from ..errors import ResolutionError
from ..http import ShopHttpClient, is_success

logger = logging.getLogger(__name__)


class PageCountResolver:
    """Resolves the maximum listing page count for a shop."""

    def __init__(self, client: ShopHttpClient, config: CrawlerConfig):
        self.client = client
        self.config = config

    def resolve(self, shop_name: str) -> int:
        """
        Determine the last listing page number.

        Args:
            shop_name: Shop identifier (e.g., "MyShop")

        Returns:
            Maximum page count (positive integer)

        Raises:
            ResolutionError: On request failure, non-2xx status, or when the
                redirected URL carries no page number
        """
        probe_url = self.config.listing_url(shop_name, self.config.probe_page)
        logger.info("Probing max page count for shop %s", shop_name)

        try:
            response = self.client.get(probe_url)
        except requests.RequestException as e:
            raise ResolutionError(
                f"Failed to determine the maximum page count: {type(e).__name__}: {e}",
                url=probe_url,
            ) from e

        if not is_success(response):
            raise ResolutionError(
                f"Failed to determine the maximum page count: HTTP {response.status_code}",
                url=probe_url,
            )

        final_url = response.url or probe_url
        max_pages = page_number_from_url(final_url)
        if max_pages is None or max_pages < 1:
            raise ResolutionError(
                f"Could not determine the maximum page count from {final_url}",
                url=final_url,
            )

        logger.info("Maximum possible pages: %d", max_pages)
        return max_pages
