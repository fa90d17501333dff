"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest
from requests.structures import CaseInsensitiveDict

from shop_reviews.common.config_loader import CrawlerConfig
from shop_reviews.http import ShopHttpClient
from shop_reviews.models import ProductReference, ShopReviewRecord

ORIGIN = "https://www.etsy.com"
LISTING_GROUP = "wt-grid__item-xs-12 wt-grid__item-lg-10 listing-group wt-pl-xs-0 wt-pr-xs-0"
PRODUCT_LINK = "wt-display-block wt-text-link-no-underline"


def make_response(status_code=200, text="", url=""):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.url = url
    return response


def review_item(href, name=None):
    """One review entry as it appears on a listing page."""
    label = f' aria-label="{name}"' if name is not None else ""
    return f"""
    <div class="review-item wt-grid__item-xs-12">
      <div class="{LISTING_GROUP}">
        <a class="{PRODUCT_LINK}" href="{href}"{label}>
          <img src="thumb.jpg">
        </a>
      </div>
    </div>
    """


def listing_page(*items):
    """Wrap review entries in a listing page."""
    return "<html><body><div class='reviews'>" + "".join(items) + "</div></body></html>"


def detail_page(price_text=None, image_src=None, price_class="wt-text-title-larger"):
    """A product detail page with an optional price node and primary image."""
    parts = ["<html><body>"]
    if price_text is not None:
        parts.append(
            f'<div data-appears-component-name="price">'
            f'<p class="{price_class}">{price_text}</p></div>'
        )
    if image_src is not None:
        parts.append(f'<ul><li><img data-index="1" src="other.jpg"><img data-index="0" src="{image_src}"></li></ul>')
    parts.append("</body></html>")
    return "".join(parts)


class FakeSession:
    """
    Session stand-in serving canned responses by URL.

    Values may be a response, an exception instance to raise, or a callable
    taking the URL and returning either.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.headers = CaseInsensitiveDict()
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None, allow_redirects=True):
        self.calls.append(url)
        value = self.routes.get(url)
        if callable(value) and not isinstance(value, MagicMock):
            value = value(url)
        if value is None:
            return make_response(404, "", url)
        if isinstance(value, Exception):
            raise value
        return value

    def close(self):
        self.closed = True


@pytest.fixture
def config():
    """Default crawler config with small worker pools."""
    return CrawlerConfig(listing_workers=1, detail_workers=2)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client(config, fake_session):
    return ShopHttpClient(config, session=fake_session)


@pytest.fixture
def sample_references():
    """References {A,B,A,C,B,A} across two pages."""
    a = ProductReference(f"{ORIGIN}/listing/1/a", "Product A")
    b = ProductReference(f"{ORIGIN}/listing/2/b", "Product B")
    c = ProductReference(f"{ORIGIN}/listing/3/c", "Product C")
    return [a, b, a, c, b, a]


@pytest.fixture
def sample_record():
    return ShopReviewRecord(
        product_url=f"{ORIGIN}/listing/1/a",
        product_name="Product A",
        occurrence_count=3,
    )
