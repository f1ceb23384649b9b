"""Fetch the body markup of a single article under a hard deadline."""

import asyncio
import logging
from typing import Any

from scrape_articles.config import ScrapeConfig
from scrape_articles.errors import ArticleTimeoutError, EmptyArticleBodyError
from scrape_articles.fetch_article.browser import new_isolated_context
from scrape_articles.models import ArticleStub

logger = logging.getLogger(__name__)

_INNER_HTML_JS = "(el) => el.innerHTML"


def _discard_outcome(task: asyncio.Task) -> None:
    # Mark the abandoned task's exception as retrieved.
    if not task.cancelled():
        task.exception()


async def _load_body(page: Any, stub: ArticleStub, config: ScrapeConfig) -> str:
    await page.goto(stub.link, wait_until="domcontentloaded", timeout=config.navigation_timeout_ms)
    logger.info("Loaded article: %s", stub.link)
    return await page.eval_on_selector(config.selectors.body, _INNER_HTML_JS)


async def race_deadline(operation, timeout: float):
    """Await ``operation`` unless ``timeout`` seconds pass first.

    On timeout the operation is cancelled and left behind; its eventual
    result or error is dropped and ArticleTimeoutError is raised.
    """
    task = asyncio.ensure_future(operation)
    done, _ = await asyncio.wait({task}, timeout=timeout)
    if task not in done:
        task.cancel()
        task.add_done_callback(_discard_outcome)
        raise ArticleTimeoutError()
    return task.result()


async def _log_page_content(
    page: Any, stub: ArticleStub, timeout: float, log_html: bool = True
) -> None:
    try:
        content = await asyncio.wait_for(page.content(), timeout=timeout)
    except Exception as e:
        logger.warning("Failed to retrieve HTML content of %s: %s", stub.link, e)
        return
    logger.warning("Captured %d characters of HTML from failed page %s", len(content), stub.link)
    level = logging.INFO if log_html else logging.DEBUG
    logger.log(level, "HTML content of the failed page %s: %s", stub.link, content)


async def fetch_article_body(browser: Any, stub: ArticleStub, config: ScrapeConfig) -> str:
    """Return the raw body markup of ``stub.link``.

    Runs in its own browsing context, which is always closed. Raises
    ArticleTimeoutError when the whole fetch exceeds ``config.article_timeout``
    seconds and EmptyArticleBodyError when the body container is blank.
    """
    logger.info("Navigating to article: %s", stub.link)
    context = await new_isolated_context(browser, config.browser)
    try:
        page = await context.new_page()
        try:
            body = await race_deadline(_load_body(page, stub, config), config.article_timeout)
            if not body or not body.strip():
                raise EmptyArticleBodyError()
            return body
        except Exception:
            await _log_page_content(
                page, stub, config.diagnostic_timeout, config.log_failed_page_html
            )
            raise
    finally:
        await context.close()
