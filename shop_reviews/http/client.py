"""
Shop HTTP Client

Explicitly owned HTTP session for one pipeline run.
Handles browser-like headers, cookies, redirects and per-request timeouts.
"""

import logging
import threading

import requests
from requests.adapters import HTTPAdapter

from ..common.config_loader import CrawlerConfig

logger = logging.getLogger(__name__)


class ShopHttpClient:
    """
    HTTP client shared by every stage of a single crawl.

    Lifetime is one full pipeline run: the cookie jar and connection pool
    are reused across listing and detail requests and released on close().

    requests follows redirects, keeps cookies in the session jar and
    decompresses gzip/deflate bodies on its own.

    Usage:
        with ShopHttpClient(config) as client:
            response = client.get("https://www.etsy.com/ca/shop/x/reviews")
            response.url  # final URL after redirects
    """

    def __init__(self, config: CrawlerConfig, session: requests.Session = None):
        """
        Initialize the client.

        Args:
            config: Crawler settings (headers, timeout, worker limits)
            session: Pre-built session (tests inject a mock here)
        """
        self.config = config
        self.timeout = config.request_timeout
        # Incremented from listing and detail worker threads
        self._count_lock = threading.Lock()
        self.requests_made = 0

        if session is None:
            session = requests.Session()
            # One pooled connection per concurrent worker
            pool_size = max(config.listing_workers, config.detail_workers, 10)
            adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
        session.headers.update(config.headers)
        self.session = session

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.session.close()

    def get(self, url: str) -> requests.Response:
        """
        Send a GET request, following redirects.

        Args:
            url: Absolute URL

        Returns:
            Response (status is not checked here)

        Raises:
            requests.RequestException: On connection errors or timeouts
        """
        with self._count_lock:
            self.requests_made += 1
        logger.debug("GET %s", url)
        return self.session.get(url, timeout=self.timeout, allow_redirects=True)


def is_success(response: requests.Response) -> bool:
    """True for 2xx responses."""
    return 200 <= response.status_code < 300
