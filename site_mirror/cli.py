#!/usr/bin/env python3
"""
Точка входа SiteMirror для командной строки.

Команды:
  mirror    Зеркалировать один или несколько сайтов в локальную директорию
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию встроенные значения)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда mirror опции:
  --root DIR              Корневая директория хранилища
  --overwrite skip|fail   Пропустить существующий файл или завершиться с ошибкой
  --max-depth INT         Максимальная глубина ссылок
  --max-pages INT         Максимум сохранённых ресурсов на сайт
  --timeout DURATION      Дедлайн обхода одного сайта (30, 30s, 5m, 1h)
  --on-fetch-error MODE   abort — остановить обход, skip — пропустить ресурс
  --manifest PATH         Сохранить JSON-манифест обхода

Пример:
  site-mirror mirror https://example.com --root mirror --overwrite fail --max-depth 3
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mirror import __version__
from site_mirror.config import FetchErrorPolicy, OverwritePolicy, MirrorConfig, load_config
from site_mirror.engine import start_mirror
from site_mirror.errors import MirrorError
from site_mirror.logger import DEFAULT_FORMAT, init_logging
from site_mirror.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMirror, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML или JSON.'
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
    """Группа команд SiteMirror CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('mirror', context_settings=CONTEXT_SETTINGS)
@click.argument('urls', nargs=-1)
@click.option(
    '--root', '-r', 'root',
    default=None,
    type=click.Path(path_type=Path),
    help='Корневая директория хранилища (override root)'
)
@click.option(
    '--overwrite', 'overwrite',
    default=None,
    type=click.Choice([p.value for p in OverwritePolicy]),
    help='skip — пропустить существующий файл, fail — завершиться с ошибкой'
)
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Максимальная глубина ссылок')
@click.option('--max-pages', 'max_pages', type=int, default=None, help='Лимит сохранённых ресурсов')
@click.option(
    '--timeout', 'timeout',
    default=None,
    help='Дедлайн обхода одного сайта: 30, 30s, 5m, 1h'
)
@click.option(
    '--on-fetch-error', 'on_fetch_error',
    default=None,
    type=click.Choice([p.value for p in FetchErrorPolicy]),
    help='abort — остановить обход, skip — пропустить ресурс'
)
@click.option(
    '--manifest', '-m', 'manifest',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-манифест обхода в файл'
)
@click.pass_context
def mirror(ctx, urls, root, overwrite, max_depth, max_pages, timeout, on_fetch_error, manifest):
    """Зеркалировать сайты URLS в локальную директорию."""
    overrides = {
        'root': root,
        'overwrite': overwrite,
        'max_depth': max_depth,
        'max_pages': max_pages,
        'timeout': timeout,
        'on_fetch_error': on_fetch_error,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    try:
        cfg = MirrorConfig(**{**ctx.obj['config'].model_dump(), **overrides})
    except ValidationError as e:
        print_error(f'Неверные параметры: {e}')

    if not urls:
        click.echo('Nothing to mirror: no URLs given')
        return

    try:
        summaries = asyncio.run(start_mirror(cfg, urls))
    except MirrorError as e:
        print_error(f'Ошибка при зеркалировании: {e}')
    except OSError as e:
        print_error(f'Ошибка файловой системы: {e}')

    for summary in summaries:
        click.echo(
            f'{summary.homepage}: stored {len(summary.stored)}, '
            f'skipped {len(summary.skipped)}, failed {len(summary.failed)}'
        )

    if manifest:
        try:
            saved = render_json(summaries, manifest)
            click.echo(f'Manifest: {saved}')
        except OSError as e:
            print_error(f'Ошибка при сохранении манифеста: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.model_dump(mode='json'), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    cli()
