"""
Fetcher module: failure-tolerant HTTP GET with optional rate limiting.

Non-2xx responses are returned like any other result and transport errors
are folded into :class:`FetchResult` with ``status=None``; nothing is retried.
"""
from __future__ import annotations

import asyncio
import time
from typing import Optional

from aiohttp import ClientError, ClientSession

from link_scout.config import CheckerConfig
from link_scout.crawler.models import FetchResult
from link_scout.logger import get_logger

logger = get_logger("fetcher")


#: aiohttp reports this type when the server sends no Content-Type at all.
_UNKNOWN_TYPE = "application/octet-stream"


def _may_hold_links(mime: str) -> bool:
    return not mime or mime == _UNKNOWN_TYPE or mime.startswith("text/") or "html" in mime or "xml" in mime


class Fetcher:
    """Issues GET requests through a shared session, at most ``rate_limit`` per second."""

    def __init__(self, session: ClientSession, config: CheckerConfig) -> None:
        self.session = session
        self.config = config
        self._rate_lock = asyncio.Lock()
        self._last_request_ts = 0.0

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url* and return its status.

        The body is read only for 200 responses whose content type is textual
        or missing; clearly binary types (images, PDFs, archives) are skipped.
        """
        await self._wait_for_rate_limit()
        try:
            async with self.session.get(
                url,
                allow_redirects=self.config.follow_redirects,
                raise_for_status=False,
            ) as resp:
                status = resp.status
                body: Optional[str] = None
                if status == 200 and _may_hold_links(resp.content_type.lower()):
                    body = await resp.text(errors="replace")
                logger.debug("GET %s -> %s", url, status)
                return FetchResult(url, status, body)
        except asyncio.TimeoutError:
            logger.debug("GET %s timed out after %.1f s", url, self.config.timeout)
            return FetchResult(url, None, error=f"timeout after {self.config.timeout} s")
        except (ClientError, ValueError) as exc:
            logger.debug("GET %s failed: %s", url, exc)
            return FetchResult(url, None, error=str(exc) or type(exc).__name__)

    async def _wait_for_rate_limit(self) -> None:
        if not self.config.rate_limit:
            return
        interval = 1 / self.config.rate_limit
        async with self._rate_lock:
            wait = interval - (time.monotonic() - self._last_request_ts)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request_ts = time.monotonic()


__all__ = ["Fetcher"]
