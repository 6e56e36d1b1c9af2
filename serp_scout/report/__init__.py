"""serp_scout.report: JSON и HTML отчёты по результатам анализа страницы."""

from __future__ import annotations

from serp_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from serp_scout.report.json_report import render_json

__all__ = ["DEFAULT_TEMPLATE_DIR", "render_html", "render_json"]
