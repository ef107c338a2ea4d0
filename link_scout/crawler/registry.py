"""
In-memory registry of every URL discovered during a crawl.
"""
from __future__ import annotations

from typing import Dict, Iterator, Optional

from link_scout.crawler.models import UrlRecord


class UrlRegistry:
    """Maps normalized URL -> :class:`UrlRecord`, one record per URL.

    Records are kept in discovery order and are never removed. Mutators are
    synchronous, so under asyncio they cannot interleave with each other.
    """

    def __init__(self) -> None:
        self._records: Dict[str, UrlRecord] = {}

    def register_if_absent(self, url: str, referring_page: str) -> None:
        """Create a record for *url* unless one already exists (first discoverer wins)."""
        if url not in self._records:
            self._records[url] = UrlRecord(url=url, referring_page=referring_page)

    def mark_visited(self, url: str) -> None:
        self._records[url].visited = True

    def set_broken(
        self,
        url: str,
        is_broken: bool,
        status: Optional[int] = None,
        error: Optional[str] = None,
    ) -> None:
        record = self._records[url]
        record.broken = is_broken
        record.status = status
        record.error = error

    def unvisited_urls(self) -> Iterator[str]:
        """Yield URLs not yet visited.

        Iterates over a snapshot taken when iteration starts, so records added
        meanwhile are not seen; call again to pick them up.
        """
        for record in list(self._records.values()):
            if not record.visited:
                yield record.url

    def all_records(self) -> Iterator[UrlRecord]:
        return iter(list(self._records.values()))

    def get(self, url: str) -> Optional[UrlRecord]:
        return self._records.get(url)

    @property
    def is_complete(self) -> bool:
        """True when every known URL has been visited."""
        return all(r.visited for r in self._records.values())

    def __contains__(self, url: object) -> bool:
        return url in self._records

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["UrlRegistry"]
