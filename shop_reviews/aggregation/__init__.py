"""
Aggregation and ranking of review references.

Modules:
    aggregator - ReviewAggregator (dedupe + occurrence counts)
    ranking - rank_records / top_products (stable count-descending order)
"""

from .aggregator import ReviewAggregator, aggregate_references
from .ranking import rank_records, top_products

__all__ = [
    'ReviewAggregator',
    'aggregate_references',
    'rank_records',
    'top_products',
]
