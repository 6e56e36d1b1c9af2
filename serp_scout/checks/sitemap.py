# File: serp_scout/checks/sitemap.py
"""XML sitemap URL counter and validator."""

from __future__ import annotations

import re
from typing import Iterable, List, Literal, Optional
from xml.sax.saxutils import escape

from serp_scout.checks.models import SitemapResult, SitemapStats
from serp_scout.logger import logger
from serp_scout.parser.sitemap_parser import parse_sitemap

__all__ = ["MAX_SITEMAP_URLS", "analyze_sitemap", "generate_sitemap", "get_sitemap_stats"]

#: Sitemaps protocol limit per file.
MAX_SITEMAP_URLS = 50_000
_LISTED_URLS = 100
_XML_QUOTES = {'"': "&quot;", "'": "&apos;"}

ChangeFreq = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]


def _structure_errors(xml: str) -> List[str]:
    errors: List[str] = []
    if not xml.strip().startswith("<?xml"):
        errors.append("Missing XML declaration")
    if "xmlns" not in xml:
        errors.append("Missing XML namespace declaration")

    has_urlset = re.search(r"<urlset", xml, re.IGNORECASE) is not None
    has_index = re.search(r"<sitemapindex", xml, re.IGNORECASE) is not None
    if not has_urlset and not has_index:
        errors.append("Missing <urlset> or <sitemapindex> root element")
    if has_urlset and not re.search(r"</urlset>", xml, re.IGNORECASE):
        errors.append("Missing closing </urlset> tag")
    if has_index and not re.search(r"</sitemapindex>", xml, re.IGNORECASE):
        errors.append("Missing closing </sitemapindex> tag")
    return errors


def _is_valid_url(url: str) -> bool:
    return re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^\s/?#]+", url) is not None


def analyze_sitemap(content: str) -> SitemapResult:
    """Count and validate the URLs of a sitemap or sitemap index.

    Raises:
        ValueError: if *content* is empty or blank.
    """
    if not content or not content.strip():
        raise ValueError("Sitemap content is required")

    errors = _structure_errors(content)
    doc = parse_sitemap(content)
    urls = doc.locs

    warnings: List[str] = []
    if not urls:
        warnings.append("No URLs found in sitemap")
    if len(urls) > MAX_SITEMAP_URLS:
        warnings.append(
            f"Sitemap contains {len(urls)} URLs, exceeding the recommended maximum of {MAX_SITEMAP_URLS:,}"
        )
    duplicates = len(urls) - len(set(urls))
    if duplicates:
        warnings.append(f"Found {duplicates} duplicate URLs")
    invalid = sum(1 for url in urls if not _is_valid_url(url))
    if invalid:
        warnings.append(f"Found {invalid} invalid URL(s)")

    logger.info("Sitemap: %d URL(s), index=%s, %d error(s)", len(urls), doc.is_index, len(errors))
    return SitemapResult(
        is_valid=not errors,
        is_index=doc.is_index,
        url_count=len(urls),
        urls=[] if doc.is_index else urls[:_LISTED_URLS],
        nested_sitemaps=urls if doc.is_index else [],
        errors=errors,
        last_mod_dates=doc.lastmods[:_LISTED_URLS],
        warnings=warnings,
    )


def get_sitemap_stats(content: str) -> SitemapStats:
    doc = parse_sitemap(content) if content and content.strip() else None
    urls = doc.locs if doc else []
    unique = len(set(urls))
    return SitemapStats(
        total_urls=len(urls),
        unique_urls=unique,
        duplicates=len(urls) - unique,
        has_lastmod=re.search(r"<lastmod>", content or "", re.IGNORECASE) is not None,
        has_priority=re.search(r"<priority>", content or "", re.IGNORECASE) is not None,
        has_changefreq=re.search(r"<changefreq>", content or "", re.IGNORECASE) is not None,
        is_sitemap_index=bool(doc and doc.is_index),
    )


def generate_sitemap(
    urls: Iterable[str],
    *,
    lastmod: Optional[str] = None,
    changefreq: Optional[ChangeFreq] = None,
    priority: Optional[float] = None,
) -> str:
    """Render a minimal ``<urlset>`` for *urls*."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for url in urls:
        lines.append("  <url>")
        lines.append(f"    <loc>{escape(url, _XML_QUOTES)}</loc>")
        if lastmod:
            lines.append(f"    <lastmod>{lastmod}</lastmod>")
        if changefreq:
            lines.append(f"    <changefreq>{changefreq}</changefreq>")
        if priority is not None:
            lines.append(f"    <priority>{priority:.1f}</priority>")
        lines.append("  </url>")
    lines.append("</urlset>")
    return "\n".join(lines)
