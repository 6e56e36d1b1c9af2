# === FILE: serp_scout/parser/html_parser.py ===
"""Lightweight HTML extraction helpers for SEO checks.

This module deliberately avoids a real HTML parser: everything is done with a
handful of regular expressions so that pulling a title, a few meta tags or the
heading outline out of a page stays cheap and dependency-free.

Known limitations (by contract, callers rely on them):

* :func:`extract_tags` runs two passes.  The first one matches **every** opening
  tag of the given name (the shape of void elements such as ``<meta>``), the
  second one matches ``<tag>…</tag>`` pairs.  For non-void names (``title``,
  ``div``) each physical tag therefore shows up twice: once with empty content
  and once with its content.
* Nested elements of the same name are not supported; a paired match stops at
  the first closing tag.
* No entity decoding and no nesting validation.

Every function here is total: malformed input degrades to empty results,
``None`` or ``False`` and never raises.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

__all__: Sequence[str] = (
    "ParsedTag",
    "Heading",
    "Link",
    "extract_tags",
    "parse_attributes",
    "get_meta_content",
    "extract_headings",
    "extract_canonical",
    "extract_title",
    "strip_html",
    "extract_links",
    "has_meta_robots_directive",
)


@dataclass(frozen=True, slots=True)
class ParsedTag:
    """One matched tag occurrence."""

    tag: str
    attributes: Mapping[str, str]
    content: str
    full_match: str


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    text: str
    index: int


@dataclass(frozen=True, slots=True)
class Link:
    href: str
    text: str
    rel: Optional[str] = None


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_ATTR_RE = re.compile(r"""(\w+[-\w]*)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|(\S+)))?""")
_HEADING_RE = re.compile(
    r"<h([1-6])(?:\s[^>]*)?>([^<]*(?:<(?!/h[1-6]>)[^<]*)*)</h[1-6]>",
    re.IGNORECASE,
)
_ANCHOR_RE = re.compile(r"<a\s+([^>]*)>([^<]*(?:<(?!/a>)[^<]*)*)</a>", re.IGNORECASE)
_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def _tag_patterns(tag_name: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    # (?![\w:-]) keeps "meta" from matching "<metadata>"
    name = re.escape(tag_name) + r"(?![\w:-])"
    self_closing = re.compile(rf"<{name}\s*([^>]*?)\s*/?>", re.IGNORECASE)
    paired = re.compile(rf"<{name}\s*([^>]*)>([\s\S]*?)</{name}>", re.IGNORECASE)
    return self_closing, paired


def _strip_tags(fragment: str) -> str:
    return _TAG_RE.sub("", fragment).strip()


# ---------------------------------------------------------------------------
# Tag extraction
# ---------------------------------------------------------------------------


def _scan_self_closing(html: str, tag_name: str) -> list[ParsedTag]:
    pattern, _ = _tag_patterns(tag_name)
    return [
        ParsedTag(
            tag=tag_name.lower(),
            attributes=MappingProxyType(parse_attributes(match.group(1))),
            content="",
            full_match=match.group(0),
        )
        for match in pattern.finditer(html)
    ]


def _scan_paired(html: str, tag_name: str) -> list[ParsedTag]:
    _, pattern = _tag_patterns(tag_name)
    return [
        ParsedTag(
            tag=tag_name.lower(),
            attributes=MappingProxyType(parse_attributes(match.group(1))),
            content=match.group(2).strip(),
            full_match=match.group(0),
        )
        for match in pattern.finditer(html)
    ]


def extract_tags(html: str, tag_name: str) -> list[ParsedTag]:
    """Return every occurrence of *tag_name* in *html*.

    Self-closing-shape matches come first, then paired matches, each group in
    document order.  No de-duplication is performed (see module docstring).
    """
    if not html or not tag_name:
        return []
    return _scan_self_closing(html, tag_name) + _scan_paired(html, tag_name)


def parse_attributes(attr_string: str) -> dict[str, str]:
    """Parse ``key="v" key='v' key=v key`` into a dict with lowercase keys.

    Valueless attributes map to ``""``; a repeated key keeps its last value.
    """
    attributes: dict[str, str] = {}
    if not attr_string:
        return attributes

    for match in _ATTR_RE.finditer(attr_string):
        key = match.group(1).lower()
        double, single, bare = match.group(2, 3, 4)
        if double is not None:
            value = double
        elif single is not None:
            value = single
        else:
            value = bare or ""
        attributes[key] = value

    return attributes


# ---------------------------------------------------------------------------
# SEO accessors
# ---------------------------------------------------------------------------


def get_meta_content(html: str, name_or_property: str) -> Optional[str]:
    """Content of the first ``<meta>`` whose name (or property) matches.

    The comparison is case-insensitive.  An empty ``content`` is returned as
    ``""``; ``None`` means no matching tag or no content attribute.
    """
    wanted = name_or_property.lower()
    for meta in extract_tags(html, "meta"):
        name = meta.attributes.get("name") or meta.attributes.get("property")
        if name is not None and name.lower() == wanted:
            return meta.attributes.get("content")
    return None


def extract_headings(html: str) -> list[Heading]:
    """All ``<h1>``–``<h6>`` elements in document order with nested markup removed."""
    if not html:
        return []
    return [
        Heading(level=int(match.group(1)), text=_strip_tags(match.group(2)), index=index)
        for index, match in enumerate(_HEADING_RE.finditer(html))
    ]


def extract_canonical(html: str) -> Optional[str]:
    """``href`` of the first ``rel="canonical"`` link; an empty href counts as missing."""
    for link in extract_tags(html, "link"):
        if link.attributes.get("rel", "").lower() == "canonical":
            return link.attributes.get("href") or None
    return None


def extract_title(html: str) -> Optional[str]:
    """Text of the document ``<title>``.

    Only the paired shape carries content.  If nothing but a bare opening tag
    was found the result is ``""``; ``None`` means there is no title tag.
    """
    if not html:
        return None
    paired = _scan_paired(html, "title")
    if paired:
        return paired[0].content
    return "" if _scan_self_closing(html, "title") else None


def strip_html(html: str) -> str:
    """Visible text of *html* as one whitespace-normalised line."""
    if not html:
        return ""
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


def extract_links(html: str) -> list[Link]:
    """``<a href>`` elements with their text; anchors without href are skipped."""
    if not html:
        return []

    links: list[Link] = []
    for match in _ANCHOR_RE.finditer(html):
        attributes = parse_attributes(match.group(1))
        href = attributes.get("href")
        if not href:
            continue
        links.append(Link(href=href, text=_strip_tags(match.group(2)), rel=attributes.get("rel")))
    return links


def has_meta_robots_directive(html: str, directive: str) -> bool:
    """Check whether the robots meta tag lists *directive* (case-insensitive)."""
    content = get_meta_content(html, "robots")
    if content is None:
        return False
    directives = [part.strip() for part in content.lower().split(",")]
    return directive.lower() in directives
