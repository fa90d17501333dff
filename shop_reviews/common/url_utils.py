"""
URL helpers for shop and product links.
"""

import re
from urllib.parse import parse_qs, urljoin, urlparse

SHOP_URL_PATTERN = re.compile(r'etsy\.com/(?:[a-z]{2}/)?shop/([^/?#]+)')
PAGE_PARAM_PATTERN = re.compile(r'page=(\d+)')


def parse_shop_name(url: str) -> str:
    """
    Extract the shop name from a storefront URL.

    Args:
        url: Shop URL (e.g., "https://www.etsy.com/ca/shop/MyShop?ref=x")

    Returns:
        Shop name (e.g., "MyShop")

    Raises:
        ValueError: If the URL is not a shop URL
    """
    match = SHOP_URL_PATTERN.search(url or '')
    if not match:
        raise ValueError(f"Invalid shop URL: {url!r}")
    return match.group(1)


def make_absolute(href: str, origin: str) -> str:
    """Prefix relative links with the site origin."""
    if href.startswith('https://'):
        return href
    return urljoin(origin.rstrip('/') + '/', href)


def page_number_from_url(url: str):
    """
    Read the ``page`` query parameter from a URL.

    Returns:
        Page number as int, or None if the URL carries no page parameter
    """
    values = parse_qs(urlparse(url).query).get('page')
    if values and values[0].isdigit():
        return int(values[0])

    # Fall back to a raw scan for malformed query strings
    match = PAGE_PARAM_PATTERN.search(url)
    return int(match.group(1)) if match else None
