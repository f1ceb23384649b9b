"""Exception types raised by the scrape_articles pipeline.

Fatal errors abort the run after resources are released. Article errors are
recorded against a single article and the run carries on.
"""


class ScrapeError(Exception):
    """Base class for pipeline errors."""


class FatalRunError(ScrapeError):
    """The run cannot continue."""


class IndexUnavailableError(FatalRunError):
    """The index page could not be loaded."""


class StoreUnavailableError(FatalRunError):
    """The article store could not be reached or is not configured."""


class ArticleError(ScrapeError):
    """A single article failed; the rest of the batch is unaffected."""


class ArticleTimeoutError(ArticleError):
    def __init__(self, message: str = "Article timeout"):
        super().__init__(message)


class EmptyArticleBodyError(ArticleError):
    def __init__(self, message: str = "Article body is empty"):
        super().__init__(message)
