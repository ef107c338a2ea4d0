"""link_scout.crawler: обход сайта, извлечение ссылок и классификация ответов."""

from link_scout.crawler.classifier import classify, is_broken_status
from link_scout.crawler.crawler import CrawlError, LinkChecker
from link_scout.crawler.link_extractor import extract_links, is_followable, normalize_link
from link_scout.crawler.models import FetchResult, UrlRecord, WorkItem
from link_scout.crawler.registry import UrlRegistry

__all__ = [
    "CrawlError",
    "FetchResult",
    "LinkChecker",
    "UrlRecord",
    "UrlRegistry",
    "WorkItem",
    "classify",
    "extract_links",
    "is_broken_status",
    "is_followable",
    "normalize_link",
]
