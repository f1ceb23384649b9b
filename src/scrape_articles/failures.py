"""Per-run collection of failed articles."""

import logging

from scrape_articles.models import ArticleStub, FailureRecord

logger = logging.getLogger(__name__)


class FailureCollector:
    """Append-only list of articles that failed during one run."""

    def __init__(self) -> None:
        self._records: list[FailureRecord] = []

    def record(self, stub: ArticleStub, reason: str) -> FailureRecord:
        failure = FailureRecord(headline=stub.headline, link=stub.link, reason=reason)
        self._records.append(failure)
        return failure

    @property
    def records(self) -> list[FailureRecord]:
        return list(self._records)

    def headlines(self) -> list[str]:
        return [record.headline for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def report(self) -> None:
        """Log the failed articles at the end of the run."""
        if not self._records:
            logger.info("Failed articles: none")
            return
        logger.warning("Failed articles: %s", self.headlines())
        for record in self._records:
            logger.warning("  %s (%s): %s", record.headline, record.link, record.reason)
