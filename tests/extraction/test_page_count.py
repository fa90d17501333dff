"""Tests for shop_reviews/extraction/page_count.py"""

import pytest
import requests

from conftest import make_response
from shop_reviews.errors import ResolutionError
from shop_reviews.extraction.page_count import PageCountResolver

PROBE_URL = "https://www.etsy.com/ca/shop/MyShop/reviews?ref=pagination&page=10000"


class TestPageCountResolver:
    def test_reads_page_from_redirect(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = make_response(
            200, "", "https://www.etsy.com/ca/shop/MyShop/reviews?ref=pagination&page=47"
        )
        assert PageCountResolver(client, config).resolve("MyShop") == 47

    def test_probe_uses_configured_page(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = make_response(200, "", PROBE_URL.replace("10000", "3"))
        PageCountResolver(client, config).resolve("MyShop")
        assert fake_session.calls == [PROBE_URL]

    def test_page_param_not_last(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = make_response(
            200, "", "https://www.etsy.com/ca/shop/MyShop/reviews?page=12&ref=pagination"
        )
        assert PageCountResolver(client, config).resolve("MyShop") == 12

    def test_non_2xx_raises(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = make_response(403, "", PROBE_URL)
        with pytest.raises(ResolutionError, match="403"):
            PageCountResolver(client, config).resolve("MyShop")

    def test_no_page_in_final_url_raises(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = make_response(200, "", "https://www.etsy.com/ca/shop/MyShop")
        with pytest.raises(ResolutionError) as exc_info:
            PageCountResolver(client, config).resolve("MyShop")
        assert exc_info.value.url == "https://www.etsy.com/ca/shop/MyShop"

    def test_page_zero_raises(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = make_response(200, "", PROBE_URL.replace("10000", "0"))
        with pytest.raises(ResolutionError):
            PageCountResolver(client, config).resolve("MyShop")

    def test_connection_error_raises(self, config, client, fake_session):
        fake_session.routes[PROBE_URL] = requests.exceptions.ConnectionError("refused")
        with pytest.raises(ResolutionError, match="ConnectionError"):
            PageCountResolver(client, config).resolve("MyShop")
