"""
Markup parsing for listing and detail pages.

- DocumentParser: BeautifulSoup wrapper with structural queries
- strategies: ordered field extractors for detail pages (price, image)
"""

from .document import DocumentParser, has_classes
from .strategies import (
    IMAGE_STRATEGIES,
    PRICE_STRATEGIES,
    first_match,
    parse_price,
)

__all__ = [
    'DocumentParser',
    'has_classes',
    'PRICE_STRATEGIES',
    'IMAGE_STRATEGIES',
    'first_match',
    'parse_price',
]
