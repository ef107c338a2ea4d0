# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections import Counter
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import web

from link_scout.config import CheckerConfig


@dataclass
class Route:
    body: str = ""
    status: int = 200
    content_type: Optional[str] = "text/html"
    delay: float = 0.0
    headers: Dict[str, str] = field(default_factory=dict)


class FakeSite:
    """
    Tiny aiohttp site: register pages with :meth:`add`, then :meth:`start`.
    Unknown paths answer 404; every request is counted in ``hits``.
    """

    def __init__(self, port: int) -> None:
        self.port = port
        self.routes: Dict[str, Route] = {}
        self.hits: Counter[str] = Counter()
        self._runner: Optional[web.AppRunner] = None

    @property
    def base(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    def add(self, path: str, body: str = "", **kwargs) -> "FakeSite":
        self.routes[path] = Route(body=body, **kwargs)
        return self

    def links(self, path: str, *hrefs: str, **kwargs) -> "FakeSite":
        """Add an HTML page at *path* that only contains anchors to *hrefs*."""
        anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
        return self.add(path, f"<html><body>{anchors}</body></html>", **kwargs)

    async def _handle(self, request: web.Request) -> web.StreamResponse:
        self.hits[request.path] += 1
        route = self.routes.get(request.path)
        if route is None:
            return web.Response(status=404, text="not found")
        if route.delay:
            await asyncio.sleep(route.delay)
        return web.Response(
            status=route.status,
            body=route.body.encode("utf-8"),
            content_type=route.content_type,
            headers=route.headers,
        )

    async def start(self) -> str:
        app = web.Application()
        app.router.add_route("GET", "/{tail:.*}", self._handle)
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        await web.TCPSite(self._runner, "127.0.0.1", self.port).start()
        return self.base

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()


@pytest_asyncio.fixture
async def site(unused_tcp_port: int) -> AsyncIterator[FakeSite]:
    fake = FakeSite(unused_tcp_port)
    try:
        yield fake
    finally:
        await fake.stop()


@pytest.fixture()
def make_config():
    """Factory for a CheckerConfig with test-friendly defaults."""

    def _make(base_url: str, **kwargs) -> CheckerConfig:
        params = {"timeout": 2.0, "user_agent": "TestAgent/1.0", "concurrency": 4}
        params.update(kwargs)
        return CheckerConfig(base_url=base_url, **params)

    return _make


@pytest.fixture()
def sample_html() -> str:
    """Page body with a duplicate, a cross-origin link and a Cloudflare e-mail link."""
    hrefs: List[str] = [
        "/about",
        "https://x.test/about/",
        "https://other.test/x",
        "/cdn-cgi/l/email-protection#3b5d54547b435e4f",
    ]
    anchors = "".join(f'<a href="{h}">link</a>' for h in hrefs)
    return f"<html><body>{anchors}<a>no href</a></body></html>"
