# === FILE: site_mapper/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteMapper через командную строку.

Команды:
  crawl     Обойти сайт, напечатать дерево страниц и сохранить отчёты
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Опции конфигурации (crawl, config):
  --url, -u URL           Стартовый URL
  --depth, -d INT         Максимальная глубина обхода
  --max-concurrency INT   Лимит одновременных запросов
  --timeout SEC           Таймаут одного запроса
  --user-agent STR        Заголовок User-Agent

Команда crawl опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON (отступ 2)
  --quiet             Не печатать дерево страниц

Пример:
  site-mapper crawl -u https://example.com -d 3 --json sitemap.json --pretty
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Callable

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import CrawlConfig, load_config
from site_mapper.errors import SeedParseError
from site_mapper.logger import DEFAULT_FORMAT, init_logging
from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json
from site_mapper.report.text_report import render_tree
from site_mapper.scanner import start_scan

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def config_options(func: Callable) -> Callable:
    """Опции, перекрывающие значения из файла конфигурации."""
    options = [
        click.option('--url', '-u', 'seed_url', default=None, help='Стартовый URL обхода'),
        click.option(
            '--depth', '-d', 'max_depth',
            type=click.IntRange(min=0), default=None,
            help='Максимальная глубина обхода (default: 5)'
        ),
        click.option(
            '--max-concurrency', 'max_concurrency',
            type=click.IntRange(min=1), default=None,
            help='Лимит одновременных запросов (без ограничения, если не указан)'
        ),
        click.option('--timeout', 'timeout', type=float, default=None, help='Таймаут одного запроса (секунд)'),
        click.option('--user-agent', 'user_agent', default=None, help='Заголовок User-Agent'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _load(ctx: click.Context, **overrides: Any) -> CrawlConfig:
    try:
        return load_config(ctx.obj['config_path'], overrides)
    except ValidationError as e:
        print_error(f'Ошибка конфигурации: {e}')
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
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
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteMapper CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@config_options
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами (default: встроенные)'
)
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.option('--quiet', '-q', is_flag=True, help='Не печатать дерево страниц')
@click.pass_context
def crawl(ctx, seed_url, max_depth, max_concurrency, timeout, user_agent,
          json_output, html_output, template_dir, pretty, quiet):
    """Обойти сайт и вывести дерево страниц."""
    cfg = _load(
        ctx,
        seed_url=seed_url,
        max_depth=max_depth,
        max_concurrency=max_concurrency,
        timeout=timeout,
        user_agent=user_agent,
    )
    try:
        result = asyncio.run(start_scan(cfg))
    except SeedParseError as e:
        print_error(str(e))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if not quiet:
        click.echo(render_tree(result.root))
    click.echo(f'Unique links crawled: {result.claimed}', err=True)

    if json_output:
        try:
            saved_json = render_json(result, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(result, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@config_options
@click.pass_context
def show_config(ctx, seed_url, max_depth, max_concurrency, timeout, user_agent):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _load(
        ctx,
        seed_url=seed_url,
        max_depth=max_depth,
        max_concurrency=max_concurrency,
        timeout=timeout,
        user_agent=user_agent,
    )
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
