# File: link_scout/engine.py
"""link_scout.engine: запуск проверки ссылок и сборка отчёта."""

from __future__ import annotations

from link_scout.config import CheckerConfig
from link_scout.crawler.crawler import LinkChecker
from link_scout.logger import logger
from link_scout.reporter import LinkReport, build_report

__all__ = ["start_check"]


async def start_check(cfg: CheckerConfig) -> LinkReport:
    """
    Обходит сайт из cfg.base_url и возвращает отчёт о битых ссылках.

    Parameters
    ----------
    cfg : CheckerConfig
        Конфигурация проверки.

    Raises
    ------
    CrawlError
        Если базовый URL недоступен.
    """
    logger.info("Starting link check…")
    async with LinkChecker(cfg) as checker:
        registry = await checker.crawl()
    return build_report(registry, cfg.origin)
