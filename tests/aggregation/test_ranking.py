"""Tests for shop_reviews/aggregation/ranking.py"""

import pytest

from shop_reviews.aggregation import rank_records, top_products
from shop_reviews.models import ShopReviewRecord


def records_with_counts(counts):
    return [
        ShopReviewRecord(product_url=f"https://x/{i}", product_name=f"P{i}", occurrence_count=c)
        for i, c in enumerate(counts)
    ]


class TestRankRecords:
    def test_descending_and_stable(self):
        records = records_with_counts([5, 5, 3, 8])
        ranked = rank_records(records)
        assert [r.occurrence_count for r in ranked] == [8, 5, 5, 3]
        # The two 5s keep their aggregation order
        assert [r.product_name for r in ranked] == ["P3", "P0", "P1", "P2"]

    def test_returns_new_list(self):
        records = records_with_counts([1, 2])
        ranked = rank_records(records)
        assert ranked is not records
        assert [r.occurrence_count for r in records] == [1, 2]

    def test_all_ties_keep_order(self):
        records = records_with_counts([2, 2, 2, 2])
        assert rank_records(records) == records


class TestTopProducts:
    def test_top_ten(self):
        records = records_with_counts(range(15))
        top = top_products(records)
        assert len(top) == 10
        assert top[0].occurrence_count == 14
        assert top[-1].occurrence_count == 5

    def test_fewer_than_n(self):
        assert len(top_products(records_with_counts([1, 2]), n=10)) == 2

    def test_negative_n(self):
        with pytest.raises(ValueError):
            top_products([], n=-1)
