from __future__ import annotations

import asyncio
import time
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from link_scout.config import CheckerConfig
from link_scout.crawler.classifier import classify
from link_scout.crawler.fetcher import Fetcher
from link_scout.crawler.link_extractor import extract_links
from link_scout.crawler.models import FetchResult, WorkItem
from link_scout.crawler.registry import UrlRegistry
from link_scout.logger import get_logger

__all__ = ("CrawlError", "LinkChecker")


class CrawlError(RuntimeError):
    """The crawl cannot start: the base URL did not answer."""


class LinkChecker:
    """Асинхронный обход сайта: каждый найденный URL запрашивается и классифицируется ровно один раз."""

    def __init__(self, config: CheckerConfig, registry: Optional[UrlRegistry] = None) -> None:
        self.config = config
        self.origin = config.origin
        self.registry = registry if registry is not None else UrlRegistry()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> LinkChecker:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> UrlRegistry:
        """Crawl from the base URL until every discovered URL has been visited."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized, use 'async with LinkChecker(...)'")
        self.logger.info("Старт проверки: %s", self.origin)
        start = time.monotonic()

        root = await self.fetcher.fetch(self.origin)
        if root.status is None:
            raise CrawlError(f"Base URL {self.origin} is unreachable: {root.error}")
        if not root.ok:
            self.logger.warning("Base URL %s answered HTTP %s, nothing to crawl", self.origin, root.status)

        queue: asyncio.Queue[WorkItem] = asyncio.Queue()
        self._discover(root, queue)

        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        try:
            await queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        duration = time.monotonic() - start
        broken = sum(1 for r in self.registry.all_records() if r.broken)
        self.logger.info(
            "Завершено: %d ссылок, %d битых за %.2f с", len(self.registry), broken, duration
        )
        return self.registry

    async def _worker(self, queue: asyncio.Queue[WorkItem]) -> None:
        while True:
            try:
                item = await queue.get()
            except asyncio.CancelledError:
                break
            try:
                await self._visit(item, queue)
            except Exception as exc:
                self.logger.exception("Unexpected error while checking %s", item.url)
                record = self.registry.get(item.url)
                # a classification already stored stays as it is
                if record is not None and record.broken is None:
                    self.registry.set_broken(item.url, True, error=f"{type(exc).__name__}: {exc}")
            finally:
                queue.task_done()

    async def _visit(self, item: WorkItem, queue: asyncio.Queue[WorkItem]) -> None:
        record = self.registry.get(item.url)
        if record is None or record.visited:
            return
        self.registry.mark_visited(item.url)

        assert self.fetcher is not None
        result = await self.fetcher.fetch(item.url)
        broken = classify(result)
        self.registry.set_broken(item.url, broken, status=result.status, error=result.error)
        if broken:
            self.logger.debug("Broken: %s (%s) on %s", item.url, result.status or result.error, item.referring_page)
        self._discover(result, queue)

    def _discover(self, page: FetchResult, queue: asyncio.Queue[WorkItem]) -> List[str]:
        """Register and enqueue links of *page* unknown to the registry; returns them."""
        if not page.ok or page.body is None:
            return []
        new: List[str] = []
        for link in extract_links(page.url, page.body, self.origin, self.config.skip_marker):
            if link in self.registry:
                continue
            self.registry.register_if_absent(link, page.url)
            queue.put_nowait(WorkItem(link, page.url))
            new.append(link)
        if new:
            self.logger.debug("%s: %d new links", page.url, len(new))
        return new
