# File: serp_scout/checks/canonical.py
"""Canonical URL checker."""

from __future__ import annotations

from html import escape
from typing import List, Optional
from urllib.parse import SplitResult, parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from serp_scout.checks.models import CanonicalResult
from serp_scout.logger import logger
from serp_scout.parser.html_parser import extract_canonical, extract_tags

__all__ = ["check_canonical", "generate_canonical_tag", "normalize_url"]

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _split_absolute(url: str) -> Optional[SplitResult]:
    """Split *url*; ``None`` unless it has a scheme and a host."""
    try:
        parts = urlsplit(url.strip())
        parts.port  # raises ValueError on a bad port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    return parts


def _netloc(parts: SplitResult) -> str:
    host = parts.hostname or ""
    if ":" in host:
        # IPv6 literal
        host = f"[{host}]"
    if parts.port is not None and parts.port != _DEFAULT_PORTS.get(parts.scheme.lower()):
        host = f"{host}:{parts.port}"
    if parts.username:
        auth = parts.username + (f":{parts.password}" if parts.password else "")
        host = f"{auth}@{host}"
    return host


def _href(parts: SplitResult) -> str:
    """Serialise like a browser would: lowercase scheme/host, ``/`` for empty path."""
    return urlunsplit(
        (parts.scheme.lower(), _netloc(parts), parts.path or "/", parts.query, parts.fragment)
    )


def check_canonical(html: str, page_url: str) -> CanonicalResult:
    """Find the canonical link of *html* and compare it with *page_url*.

    Raises:
        ValueError: on blank input or a page URL without scheme and host.
    """
    if not html or not html.strip():
        raise ValueError("HTML content is required")
    if not page_url or not page_url.strip():
        raise ValueError("Page URL is required")

    page = _split_absolute(page_url)
    if page is None:
        raise ValueError("Invalid page URL format")

    issues: List[str] = []
    recommendations: List[str] = []

    canonical_url = extract_canonical(html)
    has_canonical = canonical_url is not None
    if not has_canonical:
        issues.append("No canonical URL found")
        recommendations.append("Add a canonical URL to prevent duplicate content issues")

    canonical: Optional[SplitResult] = None
    if canonical_url is not None:
        # relative canonicals resolve against the page
        canonical = _split_absolute(urljoin(page_url.strip(), canonical_url))
        if canonical is None:
            issues.append("Invalid canonical URL format")

    is_self_referencing = canonical is not None and _href(canonical) == _href(page)

    if canonical is not None:
        page_scheme, canonical_scheme = page.scheme.lower(), canonical.scheme.lower()
        page_host, canonical_host = page.hostname or "", canonical.hostname or ""
        page_path, canonical_path = page.path or "/", canonical.path or "/"

        if canonical_scheme != page_scheme:
            issues.append("Protocol mismatch between canonical and page URL")
            recommendations.append("Ensure both URLs use the same protocol (HTTPS recommended)")

        if page_host.startswith("www.") != canonical_host.startswith("www."):
            issues.append("WWW prefix mismatch between canonical and page URL")

        if (
            page_path.endswith("/") != canonical_path.endswith("/")
            and page_path != "/"
            and canonical_path != "/"
        ):
            issues.append("Trailing slash inconsistency between canonical and page URL")

        if canonical_host != page_host:
            recommendations.append("Cross-domain canonical detected - ensure this is intentional")

        if canonical_scheme == "http" and page_scheme == "https":
            issues.append("Canonical uses HTTP while page uses HTTPS")
            recommendations.append("Update canonical to use HTTPS")

    canonical_tags = [
        tag
        for tag in extract_tags(html, "link")
        if tag.attributes.get("rel", "").lower() == "canonical"
    ]
    if len(canonical_tags) > 1:
        issues.append(f"Multiple canonical tags found ({len(canonical_tags)})")
        recommendations.append("Remove duplicate canonical tags - only one should exist")

    if not issues:
        if is_self_referencing:
            recommendations.append("Self-referencing canonical is correctly implemented")
        elif canonical_url:
            recommendations.append("Canonical URL is present and valid")

    logger.debug("Canonical %r for %s: %d issue(s)", canonical_url, page_url, len(issues))
    return CanonicalResult(
        has_canonical=has_canonical,
        canonical_url=canonical_url,
        is_self_referencing=is_self_referencing,
        page_url=page_url,
        issues=issues,
        recommendations=recommendations,
    )


def generate_canonical_tag(url: str) -> str:
    return f'<link rel="canonical" href="{escape(url, quote=True)}" />'


def normalize_url(url: str) -> str:
    """Normalise a URL for canonical comparison.

    Drops the trailing slash (except for the root), default ports and the
    fragment, and sorts query parameters.  Unparseable input comes back as-is.
    """
    parts = _split_absolute(url)
    if parts is None:
        return url

    path = parts.path or "/"
    if path != "/" and path.endswith("/"):
        path = path[:-1]
    query = urlencode(sorted(parse_qsl(parts.query, keep_blank_values=True)))
    return urlunsplit((parts.scheme.lower(), _netloc(parts), path, query, ""))
