"""
Configuration Loader

Loads the crawler YAML configuration (site origin, request headers, timeouts,
worker limits and the listing failure policy) and applies environment overrides.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    DEFAULT_DETAIL_WORKERS,
    DEFAULT_HEADERS,
    DEFAULT_LISTING_WORKERS,
    DEFAULT_LOCALE,
    DEFAULT_ORIGIN,
    DEFAULT_PROBE_PAGE,
    DEFAULT_REQUEST_TIMEOUT,
)

CONFIG_FILENAME = 'crawler.yaml'
ENV_PREFIX = 'SHOP_REVIEWS_'


@dataclass
class CrawlerConfig:
    """Settings for one pipeline run."""
    origin: str = DEFAULT_ORIGIN
    locale: str = DEFAULT_LOCALE
    probe_page: int = DEFAULT_PROBE_PAGE
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    listing_workers: int = DEFAULT_LISTING_WORKERS
    detail_workers: int = DEFAULT_DETAIL_WORKERS
    skip_failed_pages: bool = False
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))

    def __post_init__(self):
        """Validate numeric limits after initialization."""
        self.origin = self.origin.rstrip('/')
        if self.probe_page < 1:
            raise ValueError("probe_page must be positive")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.listing_workers < 1 or self.detail_workers < 1:
            raise ValueError("Worker limits must be at least 1")

    @property
    def shop_base_url(self) -> str:
        """Origin plus locale prefix, e.g. https://www.etsy.com/ca"""
        if self.locale:
            return f"{self.origin}/{self.locale}"
        return self.origin

    def listing_url(self, shop_name: str, page: int) -> str:
        """Build the review listing URL for a shop page."""
        return f"{self.shop_base_url}/shop/{shop_name}/reviews?ref=pagination&page={page}"


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file from the config directory.

    Args:
        filename: Name of the config file (e.g., 'crawler.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return _read_yaml(config_path)


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _env_overrides(environ) -> Dict[str, Any]:
    """
    Collect SHOP_REVIEWS_* environment variables as config values.

    Example:
        SHOP_REVIEWS_DETAIL_WORKERS=8 -> {'detail_workers': 8}
    """
    overrides: Dict[str, Any] = {}
    for f in fields(CrawlerConfig):
        if f.name == 'headers':
            continue
        raw = environ.get(ENV_PREFIX + f.name.upper())
        if raw is None or raw == '':
            continue
        if f.type in (int, 'int'):
            overrides[f.name] = int(raw)
        elif f.type in (float, 'float'):
            overrides[f.name] = float(raw)
        elif f.type in (bool, 'bool'):
            overrides[f.name] = raw.strip().lower() in ('1', 'true', 'yes', 'on')
        else:
            overrides[f.name] = raw
    return overrides


def load_crawler_config(
    path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ=None,
) -> CrawlerConfig:
    """
    Build a CrawlerConfig from YAML, environment and explicit overrides.

    Precedence (lowest to highest): built-in defaults, YAML file,
    SHOP_REVIEWS_* environment variables, ``overrides``.

    Args:
        path: Explicit YAML path. If None, config/crawler.yaml is used when present.
        overrides: Values that win over everything else (e.g. CLI flags).
            Keys with a None value are ignored.
        environ: Mapping to read overrides from (default: os.environ)

    Returns:
        CrawlerConfig instance

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If a setting is out of range or unknown
    """
    values: Dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        values.update(_read_yaml(config_path).get('crawler', {}))
    else:
        try:
            values.update(load_config(CONFIG_FILENAME).get('crawler', {}))
        except FileNotFoundError:
            pass

    values.update(_env_overrides(os.environ if environ is None else environ))

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(CrawlerConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown crawler settings: {', '.join(sorted(unknown))}")

    if 'headers' in values:
        headers = dict(DEFAULT_HEADERS)
        headers.update(values['headers'] or {})
        values['headers'] = headers

    return CrawlerConfig(**values)
