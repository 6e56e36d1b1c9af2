"""serp_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from serp_scout.aggregator import PageReport

#: Шаблоны, поставляемые вместе с пакетом.
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def render_html(
    report: PageReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект PageReport.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с ``report.html.j2``; по умолчанию шаблон пакета.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from serp_scout.report.html_report import render_html
    html_path = render_html(report, 'reports/report.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "url": report.url,
        "meta": report.meta,
        "links": report.links,
        "word_count": report.word_count,
        "headings": report.headings,
        "robots": report.robots,
        "title_check": report.title_check,
        "description_check": report.description_check,
        "serp": report.serp_preview,
        "canonical": report.canonical,
        "issues": report.issues,
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
