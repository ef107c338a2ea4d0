"""link_scout.report: Утилиты для генерации отчётов (JSON и HTML), используемые CLI."""

from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
