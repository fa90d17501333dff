"""
Ranked Result Builder

Orders enriched records by occurrence count for export and charting.
"""

from typing import Iterable, List

from ..common.constants import TOP_N_PRODUCTS
from ..models import ShopReviewRecord


def rank_records(records: Iterable[ShopReviewRecord]) -> List[ShopReviewRecord]:
    """
    Sort records by occurrence count, highest first.

    The sort is stable: records with equal counts keep their aggregation
    order. The input is not modified.

    Example:
        counts [5, 5, 3, 8] -> [8, 5, 5, 3] (the two 5s keep their order)
    """
    return sorted(records, key=lambda r: r.occurrence_count, reverse=True)


def top_products(records: Iterable[ShopReviewRecord], n: int = TOP_N_PRODUCTS) -> List[ShopReviewRecord]:
    """Return the n most-reviewed records (the data behind the top-products chart)."""
    if n < 0:
        raise ValueError("n must not be negative")
    return rank_records(records)[:n]
