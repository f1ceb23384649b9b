"""Run the article refresh: wipe, extract, fetch, sanitize, store."""

import asyncio
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from typing import Any, Optional

from scrape_articles.config import ScrapeConfig, get_config
from scrape_articles.errors import FatalRunError
from scrape_articles.extract_list.extract_list import extract_stubs, load_index
from scrape_articles.failures import FailureCollector
from scrape_articles.fetch_article.browser import launch_browser
from scrape_articles.fetch_article.fetch_article import fetch_article_body
from scrape_articles.models import Article, ArticleStub, RunResult, RunState, RunStatus
from scrape_articles.sanitize.sanitize import sanitize
from scrape_articles.store.db import open_store

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """State threaded through one run."""
    config: ScrapeConfig
    url: str
    store: Any = None
    browser: Any = None
    failures: FailureCollector = field(default_factory=FailureCollector)
    state: RunState = RunState.IDLE
    attempted: int = 0
    persisted: int = 0

    def advance(self, state: RunState) -> None:
        logger.info("Run state %s -> %s", self.state.value, state.value)
        self.state = state

    def result(self, status: RunStatus, state_reached: RunState, error: Optional[str] = None) -> RunResult:
        return RunResult(
            status=status,
            state_reached=state_reached,
            attempted=self.attempted,
            persisted=self.persisted,
            failures=self.failures.records,
            error=error,
        )


async def _extract(ctx: RunContext) -> list[ArticleStub]:
    page = await ctx.browser.new_page()
    try:
        await load_index(page, ctx.url, ctx.config.index_timeout_ms)
        return await extract_stubs(page, ctx.url, ctx.config)
    finally:
        await page.close()


async def process_article(ctx: RunContext, stub: ArticleStub) -> bool:
    """Fetch, sanitize and store one article. Failures are recorded, never raised."""
    ctx.attempted += 1
    try:
        raw_body = await fetch_article_body(ctx.browser, stub, ctx.config)
        body = sanitize(raw_body, stub.link, ctx.config.resource)
        article = Article.from_stub(stub, body=body, resource=ctx.config.resource)
        await asyncio.to_thread(ctx.store.insert, article)
    except Exception as e:
        logger.error("Error processing article: %s - %s: %s", stub.link, stub.headline, e)
        ctx.failures.record(stub, str(e) or type(e).__name__)
        return False

    ctx.persisted += 1
    return True


async def _run(ctx: RunContext, stack: AsyncExitStack) -> None:
    config = ctx.config

    ctx.store = await stack.enter_async_context(open_store(config.database_url()))
    ctx.browser = await stack.enter_async_context(launch_browser(config.browser))
    ctx.advance(RunState.CONNECTED)

    await asyncio.to_thread(ctx.store.wipe, config.resource)
    ctx.advance(RunState.WIPED)

    ctx.advance(RunState.EXTRACTING)
    stubs = await _extract(ctx)

    ctx.advance(RunState.PROCESSING_ARTICLES)
    for stub in stubs:
        await process_article(ctx, stub)

    ctx.advance(RunState.FINALIZING)
    ctx.failures.report()
    logger.info(
        "Processed %d articles: %d stored, %d failed",
        ctx.attempted,
        ctx.persisted,
        len(ctx.failures),
    )


async def run_pipeline(url: Optional[str] = None, config: Optional[ScrapeConfig] = None) -> RunResult:
    """Refresh the stored articles for the configured resource.

    The store connection and browser are released whatever happens. Fatal
    errors come back as a FATAL result rather than being raised.
    """
    config = config or get_config()
    ctx = RunContext(config=config, url=url or config.index_url)
    status = RunStatus.SUCCESS
    error = None

    try:
        async with AsyncExitStack() as stack:
            try:
                await _run(ctx, stack)
            except FatalRunError as e:
                logger.error("Run aborted in state %s: %s", ctx.state.value, e)
                status, error = RunStatus.FATAL, str(e)
            except Exception as e:
                logger.exception("Run failed in state %s", ctx.state.value)
                status, error = RunStatus.FATAL, str(e) or type(e).__name__
    except Exception as e:
        logger.exception("Failed to release run resources")
        status, error = RunStatus.FATAL, error or str(e) or type(e).__name__

    state_reached = ctx.state
    ctx.advance(RunState.CLOSED)
    return ctx.result(status, state_reached, error)
