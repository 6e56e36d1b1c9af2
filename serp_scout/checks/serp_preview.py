# File: serp_scout/checks/serp_preview.py
"""SERP preview: how a title, description and URL show up in Google results."""

from __future__ import annotations

import re
from typing import List, Literal
from urllib.parse import urlparse

from serp_scout.checks.models import SerpPreview, SerpSnippet
from serp_scout.checks.snippet import preview
from serp_scout.logger import logger
from serp_scout.pixel_width import (
    SERP_LIMITS,
    FieldLimits,
    calculate_description_pixel_width,
    calculate_title_pixel_width,
    will_be_truncated,
)

__all__ = ["Device", "format_serp_url", "generate_serp_preview", "get_serp_suggestions"]

Device = Literal["desktop", "mobile"]


def format_serp_url(url: str) -> str:
    """Breadcrumb form used by Google: ``host › Path part › Other part``.

    Anything without a scheme and host is returned as-is.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if not parsed.scheme or not parsed.hostname:
        return url

    parts = [part for part in parsed.path.split("/") if part]
    if not parts:
        return parsed.hostname

    crumbs = []
    for part in parts:
        part = part.replace("-", " ")
        crumbs.append(part[:1].upper() + part[1:])
    return f"{parsed.hostname} › {' › '.join(crumbs)}"


def _budget(limits: FieldLimits, device: Device) -> int:
    return limits.mobile if device == "mobile" else limits.desktop


def generate_serp_preview(
    title: str,
    description: str = "",
    url: str = "",
    device: Device = "desktop",
    ellipsis: str = "...",
) -> SerpPreview:
    """Build a :class:`SerpPreview` for *device*.

    Raises:
        ValueError: if the title is empty or blank.
    """
    if not title or not title.strip():
        raise ValueError("Title is required")

    title_limits, desc_limits = SERP_LIMITS.title, SERP_LIMITS.description
    title_max = _budget(title_limits, device)
    desc_max = _budget(desc_limits, device)

    title_snippet = SerpSnippet(
        text=title,
        display_text=preview(title, title_max, title_limits, ellipsis),
        is_truncated=will_be_truncated(title, title_max, title_limits.font_size),
        pixel_width=calculate_title_pixel_width(title),
    )

    description = description or ""
    desc_snippet = SerpSnippet(
        text=description,
        display_text=preview(description, desc_max, desc_limits, ellipsis) if description else "",
        is_truncated=bool(description)
        and will_be_truncated(description, desc_max, desc_limits.font_size),
        pixel_width=calculate_description_pixel_width(description),
    )

    logger.debug(
        "SERP preview (%s): title truncated=%s, description truncated=%s",
        device,
        title_snippet.is_truncated,
        desc_snippet.is_truncated,
    )
    return SerpPreview(
        device=device,
        title=title_snippet,
        description=desc_snippet,
        url=url or "",
        url_display=format_serp_url(url) if url else "",
        title_max_width=title_max,
        description_max_width=desc_max,
        desktop={"title_max_width": title_limits.desktop, "description_max_width": desc_limits.desktop},
        mobile={"title_max_width": title_limits.mobile, "description_max_width": desc_limits.mobile},
    )


def get_serp_suggestions(
    title: str,
    description: str = "",
    url: str = "",
    device: Device = "desktop",
) -> List[str]:
    """Click-through tips for a result; a blank title gives ``[]``."""
    try:
        result = generate_serp_preview(title, description, url, device)
    except ValueError:
        return []

    suggestions: List[str] = []
    title_snippet, desc_snippet = result.title, result.description

    if title_snippet.is_truncated:
        suggestions.append(
            f"Title will be truncated on {device}. Shorten to under "
            f"{SERP_LIMITS.title.max_characters} characters."
        )
    elif title_snippet.pixel_width < 300:
        suggestions.append("Title is short. Consider making it more descriptive for better CTR.")

    if not re.search(r"\d", title_snippet.text):
        suggestions.append('Consider adding numbers to your title (e.g., "Top 10...", "2024...")')

    if not desc_snippet.text:
        suggestions.append("Add a meta description to control your SERP snippet.")
    elif desc_snippet.is_truncated:
        suggestions.append("Description will be truncated. Front-load important keywords.")
    elif desc_snippet.pixel_width < 400:
        suggestions.append("Description is short. Add more compelling content.")

    if desc_snippet.text and "|" not in desc_snippet.text and "-" not in desc_snippet.text:
        suggestions.append("Consider adding a call-to-action in your description.")

    return suggestions
