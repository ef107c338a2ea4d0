# link_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта LinkScout.

Сериализация объекта LinkReport в файл.
"""
import json
from dataclasses import asdict
from pathlib import Path

from link_scout.reporter import LinkReport


def render_json(report: LinkReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект LinkReport с результатами проверки
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from link_scout.report.json_report import render_json
    report_path = render_json(report, 'reports/links.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(asdict(report), f, ensure_ascii=False, indent=2)

    return output
