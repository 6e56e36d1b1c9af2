# File: serp_scout/aggregator.py
"""serp_scout.aggregator: сводный SEO-отчёт по одной HTML-странице."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, TypedDict
from urllib.parse import urlparse

from serp_scout.checks.canonical import check_canonical
from serp_scout.checks.headings import analyze_headings
from serp_scout.checks.meta_description import check_meta_description
from serp_scout.checks.meta_title import check_meta_title
from serp_scout.checks.models import (
    CanonicalResult,
    HeadingAnalysis,
    MetaDescriptionResult,
    MetaTitleResult,
    RobotsMetaResult,
    SerpPreview,
)
from serp_scout.checks.robots_meta import check_robots_meta
from serp_scout.checks.serp_preview import generate_serp_preview
from serp_scout.config import AnalyzerConfig
from serp_scout.logger import logger
from serp_scout.parser.html_parser import (
    Link,
    extract_canonical,
    extract_links,
    extract_title,
    get_meta_content,
    strip_html,
)


class MetaInfo(TypedDict, total=False):
    """Мета-данные страницы в том виде, в каком они найдены в HTML."""

    title: Optional[str]
    description: Optional[str]
    keywords: Optional[str]
    robots: Optional[str]
    canonical: Optional[str]
    og_title: Optional[str]
    og_description: Optional[str]
    og_image: Optional[str]


class LinkSummary(TypedDict):
    total: int
    internal: int
    external: int


@dataclass(slots=True)
class PageReport:
    """Результаты всех проверок одной страницы."""

    url: Optional[str]
    meta: MetaInfo
    links: LinkSummary
    word_count: int
    headings: HeadingAnalysis
    robots: RobotsMetaResult
    title_check: Optional[MetaTitleResult] = None
    description_check: Optional[MetaDescriptionResult] = None
    serp_preview: Optional[SerpPreview] = None
    canonical: Optional[CanonicalResult] = None
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _collect_meta(html: str) -> MetaInfo:
    og_title = get_meta_content(html, "og:title")
    return {
        "title": extract_title(html) or og_title,
        "description": get_meta_content(html, "description")
        or get_meta_content(html, "og:description"),
        "keywords": get_meta_content(html, "keywords"),
        "robots": get_meta_content(html, "robots"),
        "canonical": extract_canonical(html),
        "og_title": og_title,
        "og_description": get_meta_content(html, "og:description"),
        "og_image": get_meta_content(html, "og:image"),
    }


def summarize_links(links: List[Link], page_url: Optional[str]) -> LinkSummary:
    """Делит ссылки на внутренние (``/…`` или хост страницы) и внешние."""
    host = urlparse(page_url).hostname if page_url else None
    internal = sum(1 for link in links if link.href.startswith("/") or (host and host in link.href))
    return {"total": len(links), "internal": internal, "external": len(links) - internal}


def analyze_page(html: str, config: Optional[AnalyzerConfig] = None) -> PageReport:
    """Прогоняет все HTML-проверки и собирает :class:`PageReport`.

    Raises:
        ValueError: если *html* пустой.
    """
    if not html or not html.strip():
        raise ValueError("HTML content is required")

    cfg = config or AnalyzerConfig()
    page_url = cfg.page_url_str
    logger.info("Analyzing page %s", page_url or "<no url>")

    meta = _collect_meta(html)
    report = PageReport(
        url=page_url,
        meta=meta,
        links=summarize_links(extract_links(html), page_url),
        word_count=len(strip_html(html).split()),
        headings=analyze_headings(html, cfg.max_heading_length),
        robots=check_robots_meta(html, cfg.x_robots_tag),
    )

    title = meta.get("title")
    description = meta.get("description")
    if title and title.strip():
        report.title_check = check_meta_title(title, cfg.ellipsis)
        report.serp_preview = generate_serp_preview(
            title, description or "", page_url or "", cfg.device, cfg.ellipsis
        )
        report.issues.extend(report.title_check.warnings)
    else:
        report.issues.append("Missing <title> tag")

    if description and description.strip():
        report.description_check = check_meta_description(description, cfg.ellipsis)
        report.issues.extend(report.description_check.warnings)
    else:
        report.issues.append("Missing meta description")

    report.issues.extend(report.headings.issues)
    if report.robots.has_noindex:
        report.issues.append("Page is set to NOINDEX")

    if page_url:
        report.canonical = check_canonical(html, page_url)
        report.issues.extend(report.canonical.issues)

    logger.info("Page analysis finished: %d issue(s)", len(report.issues))
    return report
