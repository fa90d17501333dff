"""
Logging Configuration

Crawler log output goes to stderr so stdout stays free for the summary and
top-products tables. Verbose mode tags each line with the worker thread
name, since listing and detail requests run in pools.
"""

import logging
import sys

LOGGER_NAME = "shop_reviews"

BASE_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
THREADED_FORMAT = "%(levelname)-8s [%(threadName)s] %(name)s: %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure the ``shop_reviews`` logger hierarchy.

    Args:
        verbose: DEBUG level, thread names in the output and urllib3
            connection messages
        quiet: WARNING level only

    Returns:
        The configured package logger
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(THREADED_FORMAT if verbose else BASE_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)

    # Retry and pool messages from requests' transport
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger
