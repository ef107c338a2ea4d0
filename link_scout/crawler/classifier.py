"""
Broken-link classification.

Anything above 200 counts as broken, including the other 2xx codes and
unfollowed 3xx redirects. A request that produced no response at all
(connection error, timeout) is broken as well.
"""
from __future__ import annotations

from typing import Final

from link_scout.crawler.models import FetchResult

BROKEN_ABOVE: Final[int] = 200


def is_broken_status(status: int) -> bool:
    return status > BROKEN_ABOVE


def classify(result: FetchResult) -> bool:
    """Return True if *result* marks its URL as broken."""
    if result.status is None:
        return True
    return is_broken_status(result.status)


__all__ = ["BROKEN_ABOVE", "is_broken_status", "classify"]
