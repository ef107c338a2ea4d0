#!/usr/bin/env python3
"""
Точка входа для запуска LinkScout через командную строку.

Команды:
  check     Обойти сайт, найти битые ссылки и вывести/сохранить отчёты
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH         Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --base-url URL        Корневой URL сайта (перекрывает base_url из конфига)
  --concurrency INT     Число одновременных запросов
  --timeout SEC         Таймаут одного запроса
  --log-level LEVEL     Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH       Файл для логов (только stderr, если не указан)
  --log-format FORMAT   Формат логирования

Команда check опции:
  --format text|json    Формат вывода в stdout
  --pretty              Преформатировать JSON-вывод (отступ 2)
  --json PATH           Сохранить JSON-отчёт в файл
  --html PATH           Сохранить HTML-отчёт в файл
  --template DIR        Папка с Jinja2-шаблоном report.html.j2
  --scan-timeout SEC    Таймаут всей проверки (секунд)
  --fail-on-broken / --no-fail-on-broken
                        Код выхода 1, если найдены битые ссылки (по умолчанию да)

Пример:
  link-scout --base-url https://example.com check --json reports/links.json
"""
import asyncio
import sys
from pathlib import Path

import click

from link_scout import __version__
from link_scout.config import load_config
from link_scout.crawler.crawler import CrawlError
from link_scout.engine import start_check
from link_scout.logger import init_logging
from link_scout.report.html_report import render_html
from link_scout.report.json_report import render_json
from link_scout.reporter import format_line, log_report

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='LinkScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option('--base-url', '-u', 'base_url', default=None, help='Корневой URL сайта.')
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='Число одновременных запросов.')
@click.option('--timeout', type=float, default=None, help='Таймаут одного запроса (секунд).')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, base_url, concurrency, timeout, log_level, log_file, log_format):
    """Группа команд LinkScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    overrides = {'base_url': base_url, 'concurrency': concurrency, 'timeout': timeout}
    try:
        cfg = load_config(config_path, overrides)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('check', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--format', '-f', 'output_format',
    default='text', show_default=True,
    type=click.Choice(['text', 'json']),
    help='Формат вывода в stdout'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном (по умолчанию встроенный)'
)
@click.option('--scan-timeout', 'scan_timeout', type=float, default=None, help='Таймаут всей проверки (секунд)')
@click.option(
    '--fail-on-broken/--no-fail-on-broken', default=True, show_default=True,
    help='Завершаться с кодом 1, если найдены битые ссылки'
)
@click.pass_context
def check(ctx, output_format, pretty, json_output, html_output, template_dir, scan_timeout, fail_on_broken):
    """Проверить сайт и вывести битые ссылки."""
    cfg = ctx.obj['config']
    try:
        if scan_timeout:
            report = asyncio.run(
                asyncio.wait_for(start_check(cfg), timeout=scan_timeout)
            )
        else:
            report = asyncio.run(start_check(cfg))
    except asyncio.TimeoutError:
        print_error(f'Проверка не завершена за {scan_timeout} секунд')
    except CrawlError as e:
        print_error(f'Сайт недоступен: {e}')
    except Exception as e:
        print_error(f'Ошибка при проверке: {e}')

    log_report(report)

    if output_format == 'json':
        click.echo(report.json(pretty=pretty))
    else:
        for link in report.broken:
            click.echo(format_line(link))

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if report.has_broken and fail_on_broken:
        ctx.exit(1)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
