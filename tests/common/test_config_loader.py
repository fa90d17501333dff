"""Tests for shop_reviews/common/config_loader.py"""

import pytest

from shop_reviews.common.config_loader import CrawlerConfig, load_config, load_crawler_config
from shop_reviews.common.constants import DEFAULT_HEADERS


@pytest.fixture
def yaml_config(tmp_path):
    path = tmp_path / "crawler.yaml"
    path.write_text(
        "crawler:\n"
        "  origin: https://shop.example/\n"
        "  locale: ''\n"
        "  detail_workers: 6\n"
        "  skip_failed_pages: true\n"
        "  headers:\n"
        "    Accept-Language: fr-CA\n",
        encoding="utf-8",
    )
    return path


class TestCrawlerConfig:
    def test_defaults(self):
        config = CrawlerConfig()
        assert config.origin == "https://www.etsy.com"
        assert config.probe_page == 10000
        assert config.skip_failed_pages is False
        assert config.headers["User-Agent"].startswith("Mozilla/5.0")

    def test_listing_url(self):
        config = CrawlerConfig()
        assert config.listing_url("MyShop", 3) == (
            "https://www.etsy.com/ca/shop/MyShop/reviews?ref=pagination&page=3"
        )

    def test_listing_url_without_locale(self):
        config = CrawlerConfig(locale="")
        assert config.listing_url("MyShop", 1) == (
            "https://www.etsy.com/shop/MyShop/reviews?ref=pagination&page=1"
        )

    def test_origin_trailing_slash_stripped(self):
        assert CrawlerConfig(origin="https://www.etsy.com/").origin == "https://www.etsy.com"

    @pytest.mark.parametrize("kwargs", [
        {"detail_workers": 0},
        {"listing_workers": 0},
        {"request_timeout": 0},
        {"probe_page": 0},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            CrawlerConfig(**kwargs)

    def test_headers_not_shared_between_instances(self):
        first = CrawlerConfig()
        first.headers["X-Test"] = "1"
        assert "X-Test" not in CrawlerConfig().headers


class TestLoadCrawlerConfig:
    def test_yaml_values(self, yaml_config):
        config = load_crawler_config(str(yaml_config), environ={})
        assert config.origin == "https://shop.example"
        assert config.locale == ""
        assert config.detail_workers == 6
        assert config.skip_failed_pages is True

    def test_yaml_headers_merged_with_defaults(self, yaml_config):
        config = load_crawler_config(str(yaml_config), environ={})
        assert config.headers["Accept-Language"] == "fr-CA"
        assert config.headers["User-Agent"] == DEFAULT_HEADERS["User-Agent"]

    def test_env_overrides_yaml(self, yaml_config):
        config = load_crawler_config(str(yaml_config), environ={
            "SHOP_REVIEWS_DETAIL_WORKERS": "9",
            "SHOP_REVIEWS_REQUEST_TIMEOUT": "12.5",
            "SHOP_REVIEWS_SKIP_FAILED_PAGES": "false",
        })
        assert config.detail_workers == 9
        assert config.request_timeout == 12.5
        assert config.skip_failed_pages is False

    def test_explicit_overrides_win(self, yaml_config):
        config = load_crawler_config(
            str(yaml_config),
            overrides={"detail_workers": 2, "listing_workers": None},
            environ={"SHOP_REVIEWS_DETAIL_WORKERS": "9"},
        )
        assert config.detail_workers == 2
        assert config.listing_workers == 1

    def test_missing_explicit_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_crawler_config(str(tmp_path / "nope.yaml"), environ={})

    def test_unknown_key_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("crawler:\n  turbo: true\n", encoding="utf-8")
        with pytest.raises(ValueError, match="turbo"):
            load_crawler_config(str(path), environ={})

    def test_bundled_config_loads(self):
        config = load_crawler_config(environ={})
        assert config.listing_url("X", 1).endswith("/shop/X/reviews?ref=pagination&page=1")

    def test_bundled_yaml_has_crawler_section(self):
        assert "crawler" in load_config("crawler.yaml")
