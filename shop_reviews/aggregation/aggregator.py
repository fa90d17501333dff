"""
Review Aggregator

Collapses product references from every fetched listing page into one
record per product URL, counting how often each product was reviewed.
"""

from typing import Dict, Iterable, List

from ..models import ProductReference, ShopReviewRecord


class ReviewAggregator:
    """
    Deduplicates references by product URL and counts occurrences.

    The key is compared by exact string equality. The first reference seen
    for a key supplies the product name; later names are discarded. Records
    come out in first-seen order, which is the tie order used by ranking.

    Usage:
        aggregator = ReviewAggregator()
        aggregator.add_page(page_1_refs)
        aggregator.add_page(page_2_refs)
        records = aggregator.records()
    """

    def __init__(self) -> None:
        self._records: Dict[str, ShopReviewRecord] = {}
        self.total_references: int = 0

    def add_page(self, references: Iterable[ProductReference]) -> None:
        """Merge one page's references. Pages must be added in page order."""
        for ref in references:
            self.total_references += 1
            record = self._records.get(ref.product_url)
            if record is None:
                self._records[ref.product_url] = ShopReviewRecord(
                    product_url=ref.product_url,
                    product_name=ref.product_name,
                    occurrence_count=1,
                )
            else:
                record.occurrence_count += 1

    def records(self) -> List[ShopReviewRecord]:
        """Return one record per distinct product URL, in first-seen order."""
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)


def aggregate_references(references: Iterable[ProductReference]) -> List[ShopReviewRecord]:
    """
    Aggregate a concatenated reference list in one call.

    Args:
        references: All references, in page order

    Returns:
        One ShopReviewRecord per distinct product URL (empty for empty input)
    """
    aggregator = ReviewAggregator()
    aggregator.add_page(references)
    return aggregator.records()
