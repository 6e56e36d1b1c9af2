# File: serp_scout/checks/robots_meta.py
"""Noindex / nofollow checker for robots meta tags and the X-Robots-Tag header."""

from __future__ import annotations

from typing import Final, List, Optional

from serp_scout.checks.models import RobotsMetaResult, RobotsMetaTag
from serp_scout.logger import logger
from serp_scout.parser.html_parser import extract_tags

__all__ = [
    "ROBOTS_DIRECTIVES",
    "check_robots_meta",
    "explain_directive",
    "generate_robots_meta_tag",
    "get_all_robots_directives",
    "is_page_indexable",
    "parse_robots_content",
]

ROBOTS_DIRECTIVES: Final[tuple[str, ...]] = (
    "index", "noindex",
    "follow", "nofollow",
    "archive", "noarchive",
    "snippet", "nosnippet",
    "noimageindex",
    "nocache",
    "none", "all",
    "max-snippet",
    "max-image-preview",
    "max-video-preview",
    "notranslate",
    "noodp",
    "noydir",
    "unavailable_after",
)

_EXPLANATIONS: Final[dict[str, str]] = {
    "index": "Allow search engines to index this page",
    "noindex": "Prevent search engines from indexing this page",
    "follow": "Allow search engines to follow links on this page",
    "nofollow": "Prevent search engines from following links on this page",
    "archive": "Allow cached versions of this page",
    "noarchive": "Prevent cached versions of this page",
    "snippet": "Allow snippets in search results",
    "nosnippet": "Prevent snippets in search results",
    "noimageindex": "Prevent images on this page from being indexed",
    "none": "Equivalent to noindex, nofollow",
    "all": "Equivalent to index, follow (default)",
    "notranslate": "Prevent translation of this page in search results",
    "nocache": "Same as noarchive",
}


def parse_robots_content(content: Optional[str]) -> List[str]:
    """Split ``"noindex, NoFollow"`` into ``["noindex", "nofollow"]``."""
    if not content:
        return []
    return [part.strip() for part in content.lower().split(",") if part.strip()]


def _is_robots_name(name: str) -> bool:
    # "robots", "googlebot", "bingbot", "googlebot-news-robots" ...
    return name == "robots" or name.endswith("bot") or "robots" in name


def _summarize(
    directives: List[str],
    meta_tags: List[RobotsMetaTag],
    x_robots_tag: Optional[str],
) -> List[str]:
    has_noindex = "noindex" in directives or "none" in directives
    has_nofollow = "nofollow" in directives or "none" in directives

    summary: List[str] = []
    if not meta_tags and not x_robots_tag:
        summary.append("No robots meta tags found - page allows full indexing by default")

    if has_noindex:
        summary.append("Page is set to NOINDEX - search engines will not index this page")
    else:
        summary.append("Page is indexable")

    if has_nofollow:
        summary.append("Page is set to NOFOLLOW - links will not pass PageRank")
    elif not has_noindex:
        summary.append("Links will be followed")

    if "noarchive" in directives or "nocache" in directives:
        summary.append("NOARCHIVE is set - cached version will not be available")
    if "nosnippet" in directives:
        summary.append("NOSNIPPET is set - no snippet will show in search results")
    if x_robots_tag:
        summary.append(f"X-Robots-Tag header detected: {x_robots_tag}")

    if "index" in directives and "noindex" in directives:
        summary.append("Conflicting directives: both INDEX and NOINDEX found")
    if "follow" in directives and "nofollow" in directives:
        summary.append("Conflicting directives: both FOLLOW and NOFOLLOW found")

    # "max-snippet:50" is known, only the part before the colon matters
    unknown = [d for d in dict.fromkeys(directives) if d.split(":", 1)[0].strip() not in ROBOTS_DIRECTIVES]
    if unknown:
        summary.append(f"Unknown directive(s): {', '.join(unknown)}")
    return summary


def check_robots_meta(html: str, x_robots_tag: Optional[str] = None) -> RobotsMetaResult:
    """Collect robots directives from meta tags and an optional header value.

    Raises:
        ValueError: if *html* is empty or blank.
    """
    if not html or not html.strip():
        raise ValueError("HTML content is required")

    meta_tags: List[RobotsMetaTag] = []
    directives: List[str] = []

    for meta in extract_tags(html, "meta"):
        name = meta.attributes.get("name", "").lower()
        if not name or not _is_robots_name(name):
            continue
        content = meta.attributes.get("content", "")
        parsed = parse_robots_content(content)
        meta_tags.append(RobotsMetaTag(name=name, content=content, directives=parsed))
        directives.extend(parsed)

    if x_robots_tag:
        directives.extend(parse_robots_content(x_robots_tag))

    has_noindex = "noindex" in directives or "none" in directives
    result = RobotsMetaResult(
        has_noindex=has_noindex,
        has_nofollow="nofollow" in directives or "none" in directives,
        has_noarchive="noarchive" in directives or "nocache" in directives,
        has_nosnippet="nosnippet" in directives,
        is_indexable=not has_noindex,
        meta_tags=meta_tags,
        x_robots_tag=x_robots_tag or None,
        summary=_summarize(directives, meta_tags, x_robots_tag),
    )
    logger.debug("Robots directives: %s", directives)
    return result


def generate_robots_meta_tag(
    *,
    index: bool = True,
    follow: bool = True,
    archive: bool = True,
    snippet: bool = True,
) -> str:
    """Render a robots meta tag for the given permissions."""
    directives = [
        name
        for name, allowed in (
            ("noindex", index),
            ("nofollow", follow),
            ("noarchive", archive),
            ("nosnippet", snippet),
        )
        if not allowed
    ]
    content = ", ".join(directives) if directives else "index, follow"
    return f'<meta name="robots" content="{content}" />'


def is_page_indexable(html: str) -> bool:
    try:
        return check_robots_meta(html).is_indexable
    except ValueError:
        return False


def get_all_robots_directives(html: str, x_robots_tag: Optional[str] = None) -> List[str]:
    """Unique directives in first-seen order; blank *html* gives ``[]``."""
    try:
        result = check_robots_meta(html, x_robots_tag)
    except ValueError:
        return []

    directives: List[str] = []
    for meta in result.meta_tags:
        directives.extend(meta.directives)
    directives.extend(parse_robots_content(result.x_robots_tag))
    return list(dict.fromkeys(directives))


def explain_directive(directive: str) -> str:
    return _EXPLANATIONS.get(directive.lower(), "Unknown directive")
