# === FILE: dump_it/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска DumpIt через командную строку.

Команды:
  scrape    Найти страницы сайта, выгрузить их и сохранить JSON-отчёт
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда scrape опции:
  --url, -u           URL сайта или sitemap.xml
  --concurrency, -n   Максимум одновременных запросов (10)
  --timeout, -t       Таймаут запроса в секундах (30)
  --output, -o        Путь к JSON-отчёту (output/scraped.json)
  --max-depth, -d     Глубина обхода без sitemap (3, 0 = одна страница)
  --max-pages, -m     Лимит страниц при обходе (1000)

Дополнительно:
  --version, -v       Показать версию DumpIt

Пример:
  dump-it scrape --url https://example.com --concurrency 20 -o output/site.json
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from dump_it import __version__
from dump_it.config import load_config, read_config_file
from dump_it.engine import start_scrape
from dump_it.logger import DEFAULT_FORMAT, init_logging
from dump_it.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _resolve_config(ctx, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except ValidationError as e:
        print_error(f'Некорректная конфигурация: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='DumpIt, version %(version)s')
@click.option('--config', '-c', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='YAML или JSON с параметрами запуска; опции команды имеют приоритет.')
@click.option('--log-level', 'log_level', default='INFO', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
              help='Порог логгера DumpIt')
@click.option('--log-file', 'log_file', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Дублировать лог в файл с ротацией')
@click.option('--log-format', 'log_format', default=DEFAULT_FORMAT, show_default=True,
              help='Формат записи logging.Formatter')
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Высокопроизводительная выгрузка сайтов с поддержкой sitemap."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    try:
        read_config_file(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='URL сайта или sitemap.xml')
@click.option('--concurrency', '-n', 'concurrency', type=int, default=None,
              help='Максимум одновременных запросов [default: 10]')
@click.option('--timeout', '-t', 'timeout', type=float, default=None,
              help='Таймаут запроса в секундах [default: 30]')
@click.option('--output', '-o', 'output', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Путь к JSON-отчёту [default: output/scraped.json]')
@click.option('--max-depth', '-d', 'max_depth', type=int, default=None,
              help='Глубина обхода, если sitemap нет (0 = одна страница) [default: 3]')
@click.option('--max-pages', '-m', 'max_pages', type=int, default=None,
              help='Лимит страниц при обходе [default: 1000]')
@click.pass_context
def scrape(ctx, url, concurrency, timeout, output, max_depth, max_pages):
    """Найти страницы сайта, выгрузить их и сохранить JSON-отчёт."""
    cfg = _resolve_config(
        ctx,
        url=url,
        concurrency=concurrency,
        timeout=timeout,
        output=output,
        max_depth=max_depth,
        max_pages=max_pages,
    )
    click.echo(f'Starting scraper: {cfg.url}')
    try:
        result = asyncio.run(start_scrape(cfg))
    except OSError as e:
        print_error(f'Ошибка подготовки каталога вывода: {e}')

    try:
        saved = render_json(result, cfg.output)
    except (OSError, TypeError) as e:
        print_error(f'Ошибка при сохранении JSON: {e}')

    click.echo(f'Done! Scraped {result.total_pages} pages')
    click.echo(f'Output saved to: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='URL сайта или sitemap.xml')
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _resolve_config(ctx, url=url)
    click.echo(json.dumps(cfg.model_dump(mode='json'), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
