"""CLI for running the article refresh locally."""

from __future__ import annotations

import argparse
import json
import logging

from common.cli_helpers import parse_url, setup_logging
from scrape_articles.config import load_config, set_config
from scrape_articles.handler import handler

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for scrape_articles.'''

    parser = argparse.ArgumentParser(description="Refresh stored articles from a news-blog index page.")
    parser.add_argument("--url", type=parse_url, default=None, help="Index page URL (default: from config).")
    parser.add_argument("--config", default=None, help="Config name under configs/ (default: CONFIG_ENV or prod).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    args = parse_args(argv)

    set_config(load_config(args.config))

    event = {"url": args.url} if args.url else {}
    result = handler(event)
    logger.info("Handler result: %s", result)
    print(json.dumps(result))
    return 0 if result["statusCode"] == 200 else 1


if __name__ == "__main__":
    raise SystemExit(main())
