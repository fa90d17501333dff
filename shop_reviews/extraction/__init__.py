"""
Page extraction for shop review crawls.

Modules:
    page_count - PageCountResolver (max listing page via redirect probe)
    listing - ListingPageFetcher and extract_references
    detail - DetailEnricher and parse_detail_page
    parsers - DocumentParser and ordered extraction strategies
"""

from .detail import DetailEnricher, parse_detail_page
from .listing import ListingPageFetcher, extract_references
from .page_count import PageCountResolver
from .parsers import DocumentParser, parse_price

__all__ = [
    'PageCountResolver',
    'ListingPageFetcher',
    'extract_references',
    'DetailEnricher',
    'parse_detail_page',
    'DocumentParser',
    'parse_price',
]
