"""Index page loading and article stub extraction."""

import logging
import re
from typing import Any, Optional
from urllib.parse import urljoin

from common.cli_helpers import is_absolute_http_url
from scrape_articles.config import ScrapeConfig
from scrape_articles.errors import IndexUnavailableError
from scrape_articles.extract_list.fields import ElementFields, ItemFields
from scrape_articles.models import ArticleStub

logger = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r"[^a-z]")


def derive_slug(headline: str) -> str:
    """Slug from the first three words of the headline, letters a-z only."""
    return _NON_LETTERS.sub("", "".join(headline.split()[:3]).lower())


def summarize(text: Optional[str], words: int = 40) -> Optional[str]:
    """First ``words`` whitespace-separated tokens of ``text``."""
    if text is None:
        return None
    summary = " ".join(text.split()[:words]).strip()
    return summary or None


async def load_index(page: Any, url: str, timeout_ms: int) -> None:
    """Navigate ``page`` to the index URL, raising IndexUnavailableError on failure."""
    logger.info("Loading index page %s", url)
    try:
        await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
    except Exception as e:
        raise IndexUnavailableError(f"Failed to load index page {url}: {e}") from e


async def build_stub(fields: ItemFields, base_url: str, config: ScrapeConfig) -> Optional[ArticleStub]:
    """Build a stub from one list item, or None if it has no headline or link."""
    selectors = config.selectors

    headline = await fields.first(selectors.headline)
    href = await fields.first(selectors.link)
    link = urljoin(base_url, href) if href else None

    if not headline or not is_absolute_http_url(link):
        logger.warning("Skipping list item without headline or link: headline=%s, link=%s", headline, href)
        return None

    image = await fields.first(selectors.image)
    if image:
        image = urljoin(base_url, image)

    return ArticleStub(
        headline=headline,
        link=link,
        slug=derive_slug(headline),
        image=image or config.placeholder_image,
        author=await fields.first(selectors.author),
        date=await fields.first(selectors.date),
        summary=summarize(await fields.first(selectors.summary), config.summary_words),
    )


async def extract_stubs(page: Any, base_url: str, config: ScrapeConfig) -> list[ArticleStub]:
    """Extract article stubs from a loaded index page, in page order."""
    items = await page.query_selector_all(config.selectors.item)
    logger.info("Found %d list items on %s", len(items), base_url)

    stubs = []
    seen_links = set()
    for item in items:
        stub = await build_stub(ElementFields(item), base_url, config)
        if stub is None:
            continue
        if stub.link in seen_links:
            logger.warning("Skipping duplicate link: %s", stub.link)
            continue
        seen_links.add(stub.link)
        stubs.append(stub)

    logger.info("Extracted %d article stubs", len(stubs))
    return stubs
