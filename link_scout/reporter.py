"""link_scout.reporter: сбор битых ссылок из реестра в отчёт."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import List, Optional

from link_scout.crawler.registry import UrlRegistry
from link_scout.logger import logger as project_logger


@dataclass(slots=True)
class BrokenLink:
    """Битая ссылка и страница, на которой она была найдена впервые."""

    url: str
    referring_page: str
    status: Optional[int] = None
    error: Optional[str] = None


@dataclass(slots=True)
class LinkReport:
    """Итог проверки сайта."""

    base_url: str
    checked: int = 0
    broken: List[BrokenLink] = field(default_factory=list)

    @property
    def has_broken(self) -> bool:
        return bool(self.broken)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def broken_links(registry: UrlRegistry) -> List[BrokenLink]:
    """Все записи с broken=True в порядке обнаружения."""
    return [
        BrokenLink(r.url, r.referring_page, r.status, r.error)
        for r in registry.all_records()
        if r.broken
    ]


def build_report(registry: UrlRegistry, base_url: str) -> LinkReport:
    """Собирает LinkReport по завершённому обходу."""
    checked = sum(1 for r in registry.all_records() if r.visited)
    return LinkReport(base_url=base_url, checked=checked, broken=broken_links(registry))


def format_line(link: BrokenLink) -> str:
    return f"{link.url} *** {link.referring_page}"


def log_report(report: LinkReport, log: Optional[logging.Logger] = None) -> None:
    """Пишет в лог по строке на каждую битую ссылку."""
    log = log or project_logger
    if not report.broken:
        log.info("Битых ссылок не найдено (%d проверено)", report.checked)
        return
    log.info("Битые ссылки (%d из %d):", len(report.broken), report.checked)
    for link in report.broken:
        log.info(format_line(link))


__all__ = ["BrokenLink", "LinkReport", "broken_links", "build_report", "format_line", "log_report"]
