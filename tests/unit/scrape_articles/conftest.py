"""Shared fixtures: in-memory stand-ins for the browser and the article store."""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

import pytest

from scrape_articles.config import ScrapeConfig


@dataclass
class Route:
    """How a fake page responds to navigation to one URL."""
    body: Optional[str] = "<p>Body</p>"
    delay: float = 0.0
    error: Optional[Exception] = None


class FakeNode:
    def __init__(self, props: dict):
        self.props = props

    async def evaluate(self, js, prop):
        return self.props.get(prop)


class FakeItem:
    """List item; maps a CSS selector to the DOM properties of its first match."""

    def __init__(self, nodes: dict):
        self.nodes = nodes

    async def query_selector(self, selector):
        props = self.nodes.get(selector)
        return FakeNode(props) if props is not None else None


class FakePage:
    def __init__(self, routes, items=None, content_error=None):
        self.routes = routes
        self.items = items or []
        self.content_error = content_error
        self.url = None
        self.visited = []
        self.closed = False

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append(url)
        route = self.routes.get(url)
        if route is None:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")
        if route.delay:
            await asyncio.sleep(route.delay)
        if route.error is not None:
            raise route.error
        self.url = url

    async def eval_on_selector(self, selector, js):
        return self.routes[self.url].body

    async def query_selector_all(self, selector):
        return self.items

    async def content(self):
        if self.content_error is not None:
            raise self.content_error
        return "<html><body>partial</body></html>"

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, browser, options):
        self.browser = browser
        self.options = options
        self.pages = []
        self.closed = False

    async def new_page(self):
        page = FakePage(self.browser.routes, content_error=self.browser.content_error)
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, routes=None, items=None, content_error=None):
        self.routes = routes or {}
        self.items = items or []
        self.content_error = content_error
        self.contexts = []
        self.pages = []
        self.closed = False

    async def new_context(self, **options):
        context = FakeContext(self, options)
        self.contexts.append(context)
        return context

    async def new_page(self):
        page = FakePage(self.routes, items=self.items)
        self.pages.append(page)
        return page


class FakeStore:
    """Article table shared between runs; ``fail_links`` make insert raise."""

    def __init__(self, rows=None, fail_links=()):
        self.rows = rows if rows is not None else []
        self.fail_links = set(fail_links)
        self.wiped = []
        self.closed = False

    def wipe(self, resource):
        before = len(self.rows)
        self.rows[:] = [row for row in self.rows if row.resource != resource]
        self.wiped.append(resource)
        return before - len(self.rows)

    def insert(self, article):
        if article.link in self.fail_links:
            raise RuntimeError("duplicate key value violates unique constraint")
        self.rows.append(article)
        return f"id-{len(self.rows)}"

    def rows_for(self, resource):
        return [row for row in self.rows if row.resource == resource]


def make_item(headline=None, link=None, author=None, date=None, body_text=None, thumb=None, post_img=None):
    nodes = {}
    title = {}
    if headline is not None:
        title["innerText"] = headline
    if link is not None:
        title["href"] = link
    if title:
        nodes[".post-title a"] = title
    if author is not None:
        nodes[".meta_pbtauthor a"] = {"innerText": author}
    if date is not None:
        nodes[".meta_date"] = {"innerText": date}
    if body_text is not None:
        nodes[".post-body"] = {"innerText": body_text}
    if thumb is not None:
        nodes[".pbtthumbimg"] = {"src": thumb}
    if post_img is not None:
        nodes[".post img"] = {"src": post_img}
    return FakeItem(nodes)


@pytest.fixture
def config() -> ScrapeConfig:
    return ScrapeConfig(article_timeout=0.2, diagnostic_timeout=0.1)


@pytest.fixture
def route():
    return Route


@pytest.fixture
def item():
    return make_item


@pytest.fixture
def fake_item():
    return FakeItem


@pytest.fixture
def make_browser():
    return FakeBrowser


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def patch_resources(monkeypatch):
    """Route the pipeline's store and browser to the given fakes."""

    def _patch(store, browser):
        @asynccontextmanager
        async def fake_open_store(dsn):
            try:
                yield store
            finally:
                store.closed = True

        @asynccontextmanager
        async def fake_launch_browser(browser_config):
            try:
                yield browser
            finally:
                browser.closed = True

        monkeypatch.setenv("DATABASE_URL", "postgresql://scraper@localhost/articles")
        monkeypatch.setattr("scrape_articles.pipeline.open_store", fake_open_store)
        monkeypatch.setattr("scrape_articles.pipeline.launch_browser", fake_launch_browser)

    return _patch
