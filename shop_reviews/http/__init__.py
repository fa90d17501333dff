"""
HTTP access for the crawler.

Modules:
    client - ShopHttpClient, the per-run session owner
"""

from .client import ShopHttpClient, is_success

__all__ = [
    'ShopHttpClient',
    'is_success',
]
