"""
Link extraction and URL normalization utilities for LinkScout.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from link_scout.logger import get_logger

logger = get_logger("extractor")

#: Substring of e-mail protection links injected by Cloudflare; they never point to a page.
DEFAULT_SKIP_MARKER = "cdn-cgi"


def normalize_link(href: str, origin: str) -> str:
    """
    Turn a raw href into the URL used as registry key.

    Root-relative hrefs are prefixed with *origin*, protocol-relative ones
    (``//host/path``) get the origin's scheme. Every trailing slash is
    stripped, not only the last one, so that normalizing an already
    normalized URL (even ``.../foo//``) changes nothing. Other relative hrefs are returned as they are and will be
    rejected by :func:`is_followable`.

    Raises ValueError for hrefs that cannot be parsed as URLs.
    """
    link = href.strip()
    if link.startswith("//"):
        link = f"{urlsplit(origin).scheme}:{link}"
    elif link.startswith("/"):
        link = origin + link
    urlsplit(link)
    return link.rstrip("/")


def is_followable(link: str, page_url: str, origin: str, skip_marker: str = DEFAULT_SKIP_MARKER) -> bool:
    """
    Decide whether a normalized link belongs to the crawl.

    Note the self-link check is a substring test: a link that is any
    substring of *page_url* (e.g. a parent path) is dropped too.
    """
    return link.startswith(origin) and skip_marker not in link and link not in page_url


def extract_links(
    page_url: str,
    body: str,
    origin: str,
    skip_marker: str = DEFAULT_SKIP_MARKER,
) -> List[str]:
    """
    Extract same-origin links from the anchors of an HTML page.

    Returns normalized links without duplicates, in document order. Markup
    that cannot be parsed yields an empty list.
    """
    try:
        soup = BeautifulSoup(body, "html.parser")
        anchors = soup.find_all("a", href=True)
    except Exception as exc:
        logger.warning("Cannot parse %s: %s", page_url, exc)
        return []

    seen: dict[str, None] = {}
    for tag in anchors:
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        try:
            link = normalize_link(href, origin)
        except ValueError as exc:
            logger.debug("Skipping malformed href %r on %s: %s", href, page_url, exc)
            continue
        if is_followable(link, page_url, origin, skip_marker):
            seen.setdefault(link, None)
    return list(seen)


__all__ = ["DEFAULT_SKIP_MARKER", "normalize_link", "is_followable", "extract_links"]
