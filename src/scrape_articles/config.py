"""Configuration loader for scrape_articles."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from common.config import ConfigSingleton, find_config_path, load_yaml, section
from scrape_articles.errors import StoreUnavailableError
from scrape_articles.extract_list.fields import FieldStrategy

load_dotenv()

CONFIG_DIR = Path(__file__).parent / "configs"

DEFAULT_INDEX_URL = "https://www.borderlandbeat.com"
DEFAULT_RESOURCE = "Borderland Beat"
DEFAULT_PLACEHOLDER_IMAGE = (
    "https://blogger.googleusercontent.com/img/b/R29vZ2xl/AVvXsEiqWgv9a-GMfeFVR99PY7T29fcpWUc-"
    "Oa8HAekzlXDRInvZXoQIpjpWnkq4pQfieGT4SPMYu0RkDKiUb80irZ4n_PizrnqKz7HlCKVtWLpnEeEfldWY1z-"
    "LtkEANuFOhd0oYxHo9YIGaP2Ii9tGtVh8kWSErRvee2ewBKJa1PfidOM8nglZZvOBQ4UXxpMG/s320/telegram-bb.png"
)

DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-web-security",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-software-rasterizer",
    "--disable-extensions",
    "--disable-background-networking",
    "--disable-background-timer-throttling",
    "--disable-renderer-backgrounding",
    "--disable-infobars",
    "--disable-features=IsolateOrigins,site-per-process",
]


def _strategies(*pairs: tuple[str, str]) -> list[FieldStrategy]:
    return [FieldStrategy(selector=selector, prop=prop) for selector, prop in pairs]


@dataclass
class SelectorConfig:
    item: str = ".wrapfullpost .post"
    body: str = ".post-body"
    headline: list[FieldStrategy] = field(
        default_factory=lambda: _strategies((".post-title a", "innerText"), (".post-title", "innerText"))
    )
    link: list[FieldStrategy] = field(
        default_factory=lambda: _strategies((".post-title a", "href"), ("a[rel=bookmark]", "href"))
    )
    author: list[FieldStrategy] = field(
        default_factory=lambda: _strategies((".meta_pbtauthor a", "innerText"), (".post-author .fn", "innerText"))
    )
    date: list[FieldStrategy] = field(
        default_factory=lambda: _strategies((".meta_date", "innerText"), ("abbr.published", "title"))
    )
    summary: list[FieldStrategy] = field(
        default_factory=lambda: _strategies((".post-body", "innerText"), (".post-summary", "innerText"))
    )
    image: list[FieldStrategy] = field(
        default_factory=lambda: _strategies((".pbtthumbimg", "src"), (".post img", "src"))
    )


@dataclass
class BrowserConfig:
    headless: bool = True
    args: list[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    executable_path: Optional[str] = None
    ignore_https_errors: bool = True
    user_agent: Optional[str] = None


@dataclass
class ScrapeConfig:
    index_url: str = DEFAULT_INDEX_URL
    resource: str = DEFAULT_RESOURCE
    placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE
    index_timeout_ms: int = 30000
    navigation_timeout_ms: int = 3000
    article_timeout: float = 10.0  # seconds, whole per-article budget
    diagnostic_timeout: float = 2.0
    log_failed_page_html: bool = True  # markup at INFO, else DEBUG
    summary_words: int = 40
    database_url_env: str = "DATABASE_URL"
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    selectors: SelectorConfig = field(default_factory=SelectorConfig)

    def database_url(self) -> str:
        dsn = os.environ.get(self.database_url_env)
        if not dsn:
            raise StoreUnavailableError(f"{self.database_url_env} missing")
        return dsn


def load_config(config_name: str | None = None) -> ScrapeConfig:
    """Load configuration from YAML file.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CONFIG_ENV env var or "prod".

    Returns:
        Loaded ScrapeConfig object
    """
    config_path = find_config_path(config_name, CONFIG_DIR, env_var="CONFIG_ENV")
    return _parse_config(load_yaml(config_path))


def _parse_strategies(raw: Any, default: list[FieldStrategy]) -> list[FieldStrategy]:
    if raw is None:
        return default
    return [FieldStrategy(selector=item["selector"], prop=item.get("prop", "innerText")) for item in raw]


def _parse_selectors(data: dict) -> SelectorConfig:
    defaults = SelectorConfig()
    return SelectorConfig(
        item=data.get("item", defaults.item),
        body=data.get("body", defaults.body),
        headline=_parse_strategies(data.get("headline"), defaults.headline),
        link=_parse_strategies(data.get("link"), defaults.link),
        author=_parse_strategies(data.get("author"), defaults.author),
        date=_parse_strategies(data.get("date"), defaults.date),
        summary=_parse_strategies(data.get("summary"), defaults.summary),
        image=_parse_strategies(data.get("image"), defaults.image),
    )


def _parse_config(data: dict) -> ScrapeConfig:
    """Parse config dictionary into ScrapeConfig object."""
    defaults = ScrapeConfig()
    browser_data = section(data, "browser")

    browser = BrowserConfig(
        headless=browser_data.get("headless", True),
        args=browser_data.get("args", list(DEFAULT_BROWSER_ARGS)),
        executable_path=browser_data.get("executable_path") or os.environ.get("CHROMIUM_EXECUTABLE_PATH"),
        ignore_https_errors=browser_data.get("ignore_https_errors", True),
        user_agent=browser_data.get("user_agent"),
    )

    return ScrapeConfig(
        index_url=data.get("index_url", defaults.index_url),
        resource=data.get("resource", defaults.resource),
        placeholder_image=data.get("placeholder_image", defaults.placeholder_image),
        index_timeout_ms=int(data.get("index_timeout_ms", defaults.index_timeout_ms)),
        navigation_timeout_ms=int(data.get("navigation_timeout_ms", defaults.navigation_timeout_ms)),
        article_timeout=float(data.get("article_timeout", defaults.article_timeout)),
        diagnostic_timeout=float(data.get("diagnostic_timeout", defaults.diagnostic_timeout)),
        log_failed_page_html=bool(data.get("log_failed_page_html", defaults.log_failed_page_html)),
        summary_words=int(data.get("summary_words", defaults.summary_words)),
        database_url_env=data.get("database_url_env", defaults.database_url_env),
        browser=browser,
        selectors=_parse_selectors(section(data, "selectors")),
    )


_manager: ConfigSingleton[ScrapeConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
