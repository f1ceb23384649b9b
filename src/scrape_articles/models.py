"""Data models for the scrape_articles pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass
class ArticleStub:
    """Article discovered on the index page, before its body is fetched."""
    headline: str
    link: str
    slug: str
    image: str
    author: Optional[str] = None
    date: Optional[str] = None
    summary: Optional[str] = None


@dataclass
class Article:
    """Article with sanitized body, ready to be stored."""
    headline: str
    link: str
    slug: str
    image: str
    body: str
    resource: str
    author: Optional[str] = None
    date: Optional[str] = None
    summary: Optional[str] = None

    @classmethod
    def from_stub(cls, stub: ArticleStub, body: str, resource: str) -> "Article":
        return cls(
            headline=stub.headline,
            link=stub.link,
            slug=stub.slug,
            image=stub.image,
            body=body,
            resource=resource,
            author=stub.author,
            date=stub.date,
            summary=stub.summary,
        )


@dataclass(frozen=True)
class FailureRecord:
    """An article that could not be fetched, sanitized or stored."""
    headline: str
    link: str
    reason: str


class RunStatus(str, Enum):
    SUCCESS = "success"
    FATAL = "fatal"


class RunState(str, Enum):
    IDLE = "idle"
    CONNECTED = "connected"
    WIPED = "wiped"
    EXTRACTING = "extracting"
    PROCESSING_ARTICLES = "processing_articles"
    FINALIZING = "finalizing"
    CLOSED = "closed"


@dataclass
class RunResult:
    """Outcome of one pipeline run."""
    status: RunStatus
    state_reached: RunState
    attempted: int = 0
    persisted: int = 0
    failures: list[FailureRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.SUCCESS
