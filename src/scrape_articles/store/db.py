"""Article storage in PostgreSQL."""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager, contextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Iterator

import psycopg2
from psycopg2.extras import RealDictCursor

from scrape_articles.models import Article

logger = logging.getLogger(__name__)

DEFAULT_AUTHOR = "Unknown"

DELETE_RESOURCE_SQL = 'DELETE FROM "Article" WHERE resource = %s'

INSERT_ARTICLE_SQL = """
    INSERT INTO "Article" (id, slug, headline, summary, body, author, resource, media, link, date)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
"""


def generate_article_id() -> str:
    """Fresh unique identifier for an inserted row."""
    return uuid.uuid4().hex


class ArticleStore:
    """Deletes and inserts articles over a single connection.

    Every statement runs in its own transaction, so a failed insert is rolled
    back without touching earlier rows or blocking later ones.
    """

    def __init__(self, conn):
        self.conn = conn

    @contextmanager
    def _cursor(self) -> Iterator:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def wipe(self, resource: str) -> int:
        """Delete every stored article for ``resource``; returns rows deleted."""
        with self._cursor() as cur:
            cur.execute(DELETE_RESOURCE_SQL, (resource,))
            deleted = cur.rowcount
        logger.info("Deleted %d existing articles for %s", deleted, resource)
        return deleted

    def insert(self, article: Article) -> str:
        """Insert one article and return its generated id."""
        article_id = generate_article_id()
        with self._cursor() as cur:
            cur.execute(
                INSERT_ARTICLE_SQL,
                (
                    article_id,
                    article.slug,
                    article.headline,
                    article.summary or "",
                    article.body,
                    article.author or DEFAULT_AUTHOR,
                    article.resource,
                    article.image,
                    article.link,
                    article.date or datetime.now(timezone.utc).isoformat(),
                ),
            )
        logger.info("Stored article %s: %s", article_id, article.headline)
        return article_id

    def close(self) -> None:
        self.conn.close()


def get_connection(dsn: str):
    """Create a new database connection."""
    return psycopg2.connect(dsn)


@asynccontextmanager
async def open_store(dsn: str) -> AsyncIterator[ArticleStore]:
    """Connect once for the run and always close the connection.

    Connecting and closing block, so both run in a worker thread.
    """
    store = ArticleStore(await asyncio.to_thread(get_connection, dsn))
    logger.info("Connected to article store")
    try:
        yield store
    finally:
        await asyncio.to_thread(store.close)
        logger.info("Article store connection closed")
