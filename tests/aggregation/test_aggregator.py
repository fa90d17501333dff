"""Tests for shop_reviews/aggregation/aggregator.py"""

from collections import Counter

from shop_reviews.aggregation import ReviewAggregator, aggregate_references, rank_records
from shop_reviews.models import ProductReference


class TestAggregateReferences:
    def test_counts_and_rank_scenario(self, sample_references):
        records = aggregate_references(sample_references)
        counts = {r.product_name: r.occurrence_count for r in records}
        assert counts == {"Product A": 3, "Product B": 2, "Product C": 1}
        assert [r.product_name for r in rank_records(records)] == ["Product A", "Product B", "Product C"]

    def test_one_record_per_distinct_url(self, sample_references):
        records = aggregate_references(sample_references)
        assert len(records) == len({r.product_url for r in sample_references})

    def test_count_equals_multiplicity(self):
        urls = ["u1", "u2", "u1", "u3", "u1", "u2", "u4", "u4", "u4", "u4"]
        records = aggregate_references(ProductReference(u, u.upper()) for u in urls)
        multiplicity = Counter(urls)
        assert {r.product_url: r.occurrence_count for r in records} == dict(multiplicity)

    def test_first_seen_name_wins(self):
        refs = [
            ProductReference("https://x/listing/1", "Original name"),
            ProductReference("https://x/listing/1", "Renamed later"),
        ]
        records = aggregate_references(refs)
        assert len(records) == 1
        assert records[0].product_name == "Original name"
        assert records[0].occurrence_count == 2

    def test_exact_key_comparison(self):
        refs = [
            ProductReference("https://x/listing/1", "A"),
            ProductReference("https://x/listing/1/", "A"),
            ProductReference("https://x/listing/1?ref=x", "A"),
        ]
        assert len(aggregate_references(refs)) == 3

    def test_first_seen_order(self):
        refs = [ProductReference(u, u) for u in ["c", "a", "c", "b", "a"]]
        assert [r.product_url for r in aggregate_references(refs)] == ["c", "a", "b"]

    def test_empty_input(self):
        assert aggregate_references([]) == []
        assert rank_records([]) == []

    def test_enrichment_fields_start_absent(self, sample_references):
        for record in aggregate_references(sample_references):
            assert record.currency is None
            assert record.price_amount is None
            assert record.image_url is None

    def test_idempotent(self, sample_references):
        first = rank_records(aggregate_references(sample_references))
        second = rank_records(aggregate_references(sample_references))
        assert first == second


class TestReviewAggregator:
    def test_counts_across_pages(self):
        a = ProductReference("https://x/a", "A from page 1")
        a_renamed = ProductReference("https://x/a", "A from page 2")
        b = ProductReference("https://x/b", "B")

        aggregator = ReviewAggregator()
        aggregator.add_page([a, b])
        aggregator.add_page([a_renamed, a_renamed])

        records = aggregator.records()
        assert len(aggregator) == 2
        assert aggregator.total_references == 4
        assert records[0].occurrence_count == 3
        assert records[0].product_name == "A from page 1"
        assert records[1].occurrence_count == 1

    def test_empty_pages(self):
        aggregator = ReviewAggregator()
        aggregator.add_page([])
        aggregator.add_page([])
        assert aggregator.records() == []
        assert aggregator.total_references == 0
