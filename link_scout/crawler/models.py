"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional


@dataclass(slots=True)
class UrlRecord:
    """Crawl state of one normalized URL.

    ``referring_page`` is the page the URL was first discovered on and is
    never reassigned. ``broken`` stays ``None`` until the URL is classified.
    """

    url: str
    referring_page: str
    visited: bool = False
    broken: Optional[bool] = None
    status: Optional[int] = None
    error: Optional[str] = None


@dataclass(slots=True)
class FetchResult:
    """Outcome of one HTTP request; ``status`` is None when the request failed."""

    url: str
    status: Optional[int]
    body: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == 200


class WorkItem(NamedTuple):
    """Entry of the crawl worklist."""

    url: str
    referring_page: str


__all__ = ["UrlRecord", "FetchResult", "WorkItem"]
