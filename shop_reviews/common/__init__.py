# Common utilities
from .config_loader import CrawlerConfig, load_config, load_crawler_config
from .log_config import setup_logging
from .url_utils import make_absolute, page_number_from_url, parse_shop_name
