# === FILE: serp_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа SerpScout для командной строки.

Команды:
  analyze FILE     Полный SEO-отчёт по HTML-файлу (или '-' для stdin)
  title TEXT       Проверка длины meta title в пикселях
  description TEXT Проверка длины meta description в пикселях
  preview          Превью сниппета в выдаче Google (--suggest: советы по CTR)
  headings FILE    Структура заголовков H1-H6
  outline TOPIC    Шаблон структуры заголовков для темы
  keywords FILE    Плотность ключевых слов и фраз
  robots FILE      Директивы robots (noindex, nofollow, ...)
  canonical FILE   Проверка canonical URL
  sitemap FILE     Подсчёт и проверка URL в sitemap.xml
  robots-txt FILE  Проверка robots.txt и доступа к URL
  config           Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Пример:
  serp-scout analyze page.html --url https://example.com/page --json report.json
"""
import json
import sys
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from serp_scout import __version__
from serp_scout.aggregator import analyze_page
from serp_scout.checks.canonical import check_canonical
from serp_scout.checks.headings import analyze_headings, suggest_heading_structure
from serp_scout.checks.keyword_density import analyze_keyword_density
from serp_scout.checks.meta_description import check_meta_description
from serp_scout.checks.meta_title import check_meta_title
from serp_scout.checks.robots_meta import check_robots_meta
from serp_scout.checks.robots_txt import is_url_allowed, validate_robots_txt
from serp_scout.checks.serp_preview import generate_serp_preview, get_serp_suggestions
from serp_scout.checks.sitemap import analyze_sitemap
from serp_scout.config import AnalyzerConfig, load_config
from serp_scout.logger import DEFAULT_FORMAT, init_logging
from serp_scout.report.html_report import render_html
from serp_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
_CONFIG_ERRORS = (OSError, ValueError, TypeError, ValidationError)


def print_error(message: str) -> NoReturn:
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def echo_json(data: Any, pretty: bool = False) -> None:
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    elif isinstance(data, list):
        data = [asdict(item) if is_dataclass(item) else item for item in data]
    click.echo(json.dumps(data, ensure_ascii=False, indent=2 if pretty else None))


def get_config(ctx: click.Context, **overrides: Any) -> AnalyzerConfig:
    """Загружает конфиг из пути группы, применяя переопределения из опций команды."""
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except _CONFIG_ERRORS as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


pretty_option = click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SerpScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SerpScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('analyze', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--url', '-u', 'page_url', default=None, help='URL страницы (перекрывает page_url)')
@click.option(
    '--device', type=click.Choice(['desktop', 'mobile']), default=None,
    help='Лимиты какого устройства использовать для превью'
)
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
@pretty_option
@click.pass_context
def analyze(ctx, source, page_url, device, json_output, html_output, pretty):
    """Полный SEO-отчёт по HTML-странице."""
    cfg = get_config(ctx, page_url=page_url, device=device)
    try:
        report = analyze_page(source.read(), cfg)
    except ValueError as e:
        print_error(f'Ошибка анализа: {e}')

    # Без файлов вывода печатаем отчёт в stdout
    if not json_output and not html_output:
        click.echo(report.json(pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, html_output, cfg.template_dir)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('title', context_settings=CONTEXT_SETTINGS)
@click.argument('text')
@pretty_option
@click.pass_context
def title_cmd(ctx, text, pretty):
    """Проверить meta title: ширина в пикселях, обрезка, рекомендации."""
    cfg = get_config(ctx)
    try:
        echo_json(check_meta_title(text, cfg.ellipsis), pretty)
    except ValueError as e:
        print_error(str(e))


@cli.command('description', context_settings=CONTEXT_SETTINGS)
@click.argument('text')
@pretty_option
@click.pass_context
def description_cmd(ctx, text, pretty):
    """Проверить meta description."""
    cfg = get_config(ctx)
    try:
        echo_json(check_meta_description(text, cfg.ellipsis), pretty)
    except ValueError as e:
        print_error(str(e))


@cli.command('preview', context_settings=CONTEXT_SETTINGS)
@click.option('--title', '-t', 'title', required=True, help='Заголовок страницы')
@click.option('--description', '-d', 'description', default='', help='Meta description')
@click.option('--url', '-u', 'url', default='', help='URL страницы')
@click.option('--device', type=click.Choice(['desktop', 'mobile']), default=None)
@click.option('--suggest', is_flag=True, help='Добавить советы по улучшению сниппета')
@pretty_option
@click.pass_context
def preview_cmd(ctx, title, description, url, device, suggest, pretty):
    """Превью сниппета в выдаче Google."""
    cfg = get_config(ctx, device=device)
    try:
        result = generate_serp_preview(title, description, url, cfg.device, cfg.ellipsis)
    except ValueError as e:
        print_error(str(e))
    if not suggest:
        echo_json(result, pretty)
        return
    echo_json(
        {
            'preview': asdict(result),
            'suggestions': get_serp_suggestions(title, description, url, cfg.device),
        },
        pretty,
    )


@cli.command('headings', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--tree', is_flag=True, help='Вывести структуру текстом вместо JSON')
@pretty_option
@click.pass_context
def headings_cmd(ctx, source, tree, pretty):
    """Структура заголовков H1-H6 и найденные проблемы."""
    cfg = get_config(ctx)
    try:
        analysis = analyze_headings(source.read(), cfg.max_heading_length)
    except ValueError as e:
        print_error(str(e))
    if tree:
        for line in analysis.structure:
            click.echo(line)
        for issue in analysis.issues:
            click.secho(f'! {issue}', fg='yellow')
        return
    echo_json(analysis, pretty)


@cli.command('outline', context_settings=CONTEXT_SETTINGS)
@click.argument('topic')
def outline_cmd(topic):
    """Шаблон структуры заголовков для статьи на тему TOPIC."""
    if not topic.strip():
        print_error('Тема не может быть пустой')
    for line in suggest_heading_structure(topic.strip()):
        click.echo(line)


@cli.command('keywords', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--keyword', '-k', 'target_keyword', default=None, help='Целевое ключевое слово или фраза')
@click.option('--html/--text', 'is_html', default=True, show_default=True, help='Удалить HTML-разметку перед подсчётом')
@click.option('--stop-words', 'include_stop_words', is_flag=True, help='Не отбрасывать стоп-слова')
@click.option('--top', 'top_count', type=click.IntRange(min=1), default=20, show_default=True, help='Сколько слов и фраз выводить')
@pretty_option
def keywords_cmd(source, target_keyword, is_html, include_stop_words, top_count, pretty):
    """Плотность ключевых слов, двух- и трёхсловных фраз."""
    try:
        result = analyze_keyword_density(
            source.read(),
            target_keyword,
            is_html=is_html,
            include_stop_words=include_stop_words,
            top_count=top_count,
        )
    except ValueError as e:
        print_error(str(e))
    echo_json(result, pretty)


@cli.command('robots', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--x-robots-tag', 'x_robots_tag', default=None, help='Значение заголовка X-Robots-Tag')
@pretty_option
@click.pass_context
def robots_cmd(ctx, source, x_robots_tag, pretty):
    """Проверить noindex/nofollow в meta robots и X-Robots-Tag."""
    cfg = get_config(ctx, x_robots_tag=x_robots_tag)
    try:
        echo_json(check_robots_meta(source.read(), cfg.x_robots_tag), pretty)
    except ValueError as e:
        print_error(str(e))


@cli.command('canonical', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--url', '-u', 'page_url', default=None, help='URL страницы (перекрывает page_url)')
@pretty_option
@click.pass_context
def canonical_cmd(ctx, source, page_url, pretty):
    """Проверить canonical URL относительно адреса страницы."""
    cfg = get_config(ctx, page_url=page_url)
    if cfg.page_url_str is None:
        print_error('Нужен URL страницы: --url или page_url в конфиге')
    try:
        echo_json(check_canonical(source.read(), cfg.page_url_str), pretty)
    except ValueError as e:
        print_error(str(e))


@cli.command('sitemap', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@pretty_option
def sitemap_cmd(source, pretty):
    """Посчитать и проверить URL в sitemap.xml."""
    try:
        echo_json(analyze_sitemap(source.read()), pretty)
    except ValueError as e:
        print_error(str(e))


@cli.command('robots-txt', context_settings=CONTEXT_SETTINGS)
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--check-url', 'check_url', default=None, help='Проверить доступ к этому URL вместо валидации')
@click.option('--user-agent', 'user_agent', default='*', show_default=True, help='User-Agent для --check-url')
@pretty_option
def robots_txt_cmd(source, check_url, user_agent, pretty):
    """Проверить robots.txt или доступ краулера к URL."""
    content = source.read()
    if check_url is None:
        echo_json(validate_robots_txt(content), pretty)
        return
    echo_json(
        {
            'url': check_url,
            'user_agent': user_agent,
            'allowed': is_url_allowed(content, check_url, user_agent),
        },
        pretty,
    )


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = get_config(ctx)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
