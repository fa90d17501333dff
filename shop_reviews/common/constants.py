"""
Shared constants for the crawler.

Site defaults and the browser-like header set sent with every request.
"""

DEFAULT_ORIGIN = "https://www.etsy.com"
DEFAULT_LOCALE = "ca"

# Deliberately past the last page; the server redirects to the real last page
DEFAULT_PROBE_PAGE = 10000

DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_LISTING_WORKERS = 1
DEFAULT_DETAIL_WORKERS = 4

# requests decodes gzip/deflate itself; "br" needs the brotli package
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/84.0.4147.105 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
}

TOP_N_PRODUCTS = 10
