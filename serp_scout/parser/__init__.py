"""serp_scout.parser: regex HTML extraction and sitemap XML parsing."""

from serp_scout.parser.html_parser import (
    Heading,
    Link,
    ParsedTag,
    extract_canonical,
    extract_headings,
    extract_links,
    extract_tags,
    extract_title,
    get_meta_content,
    has_meta_robots_directive,
    parse_attributes,
    strip_html,
)

__all__ = [
    "Heading",
    "Link",
    "ParsedTag",
    "extract_canonical",
    "extract_headings",
    "extract_links",
    "extract_tags",
    "extract_title",
    "get_meta_content",
    "has_meta_robots_directive",
    "parse_attributes",
    "strip_html",
]
