"""Invocation entry point (AWS Lambda handler signature)."""

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Optional

from common.cli_helpers import is_absolute_http_url
from scrape_articles.config import ScrapeConfig, get_config
from scrape_articles.pipeline import run_pipeline

logger = logging.getLogger(__name__)


def _response(status_code: int, message: str) -> dict:
    return {"statusCode": status_code, "body": json.dumps(message)}


def handler(event: Any, context: Any = None, config: Optional[ScrapeConfig] = None) -> dict:
    """Run one refresh for ``event["url"]`` (or the configured index URL).

    Returns 200 for a completed run, even if some articles failed, 400 for a
    malformed event and 500 when the run failed as a whole.
    """
    if event is None:
        event = {}
    if not isinstance(event, Mapping):
        return _response(400, "Event must be an object")

    url = event.get("url") or None
    if isinstance(url, str):
        url = url.strip() or None
    if url is not None and not is_absolute_http_url(url):
        return _response(400, "URL must be an absolute http(s) URL")

    try:
        config = config or get_config()
        result = asyncio.run(run_pipeline(url=url, config=config))
    except Exception:
        logger.exception("Unexpected error during scraping")
        return _response(500, "An error occurred during scraping")

    if not result.ok:
        return _response(500, f"Scraping failed: {result.error}")

    return _response(200, "Scraping completed successfully")
