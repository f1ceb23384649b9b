"""Headless Chromium launch for a pipeline run."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Browser, async_playwright

from scrape_articles.config import BrowserConfig

logger = logging.getLogger(__name__)


@asynccontextmanager
async def launch_browser(config: BrowserConfig) -> AsyncIterator[Browser]:
    """Launch one browser for the whole run and close it on exit."""
    async with async_playwright() as p:
        browser = await p.chromium.launch(
            headless=config.headless,
            args=config.args,
            executable_path=config.executable_path,
        )
        logger.info("Launched Chromium %s (headless=%s)", browser.version, config.headless)
        try:
            yield browser
        finally:
            await browser.close()
            logger.info("Browser closed")


async def new_isolated_context(browser: Browser, config: BrowserConfig):
    """Fresh browsing context; nothing is shared with other contexts."""
    options = {"ignore_https_errors": config.ignore_https_errors}
    if config.user_agent:
        options["user_agent"] = config.user_agent
    return await browser.new_context(**options)
