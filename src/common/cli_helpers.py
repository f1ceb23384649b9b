"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging
from urllib.parse import urlparse

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for CLI tools and handlers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def is_absolute_http_url(value: object) -> bool:
    """Return True for strings that are absolute http(s) URLs."""
    if not isinstance(value, str):
        return False
    parsed = urlparse(value.strip())
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_url(value: str) -> str:
    """Parse a URL argument for argparse.

    Raises:
        argparse.ArgumentTypeError: If the value is not an absolute http(s) URL.
    """
    if not is_absolute_http_url(value):
        raise argparse.ArgumentTypeError("url must be an absolute http(s) URL")
    return value.strip()
