# serp_scout/checks/models.py
"""
Result models returned by the SEO checkers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from serp_scout.parser.html_parser import Heading


@dataclass(slots=True)
class SnippetLengthResult:
    """Pixel/character analysis of a meta title or meta description."""

    text: str
    pixel_width: int
    max_pixel_width: int
    character_count: int
    max_character_count: int
    is_truncated: bool
    percent_used: int
    recommendation: str
    desktop_preview: str
    mobile_preview: str
    warnings: List[str] = field(default_factory=list)


MetaTitleResult = SnippetLengthResult
MetaDescriptionResult = SnippetLengthResult


@dataclass(slots=True)
class LengthSuggestion:
    current: int
    optimal_min: int
    optimal_max: int
    adjustment: int


@dataclass(slots=True)
class SerpSnippet:
    text: str
    display_text: str
    is_truncated: bool
    pixel_width: int


@dataclass(slots=True)
class SerpPreview:
    """Everything needed to draw one Google result."""

    device: str
    title: SerpSnippet
    description: SerpSnippet
    url: str
    url_display: str
    title_max_width: int
    description_max_width: int
    desktop: Dict[str, int] = field(default_factory=dict)
    mobile: Dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class HeadingNode:
    level: int
    text: str
    children: List["HeadingNode"] = field(default_factory=list)


@dataclass(slots=True)
class HeadingAnalysis:
    headings: List[Heading]
    structure: List[str]
    has_h1: bool
    h1_count: int
    issues: List[str]
    hierarchy: List[HeadingNode]


@dataclass(slots=True)
class HeadingStats:
    total: int
    by_level: Dict[int, int]
    average_length: int
    longest_heading: str
    shortest_heading: str


@dataclass(slots=True)
class RobotsMetaTag:
    name: str
    content: str
    directives: List[str]


@dataclass(slots=True)
class RobotsMetaResult:
    has_noindex: bool
    has_nofollow: bool
    has_noarchive: bool
    has_nosnippet: bool
    is_indexable: bool
    meta_tags: List[RobotsMetaTag]
    x_robots_tag: Optional[str]
    summary: List[str]


@dataclass(slots=True)
class CanonicalResult:
    has_canonical: bool
    canonical_url: Optional[str]
    is_self_referencing: bool
    page_url: str
    issues: List[str]
    recommendations: List[str]


@dataclass(slots=True)
class SitemapResult:
    is_valid: bool
    is_index: bool
    url_count: int
    urls: List[str]
    nested_sitemaps: List[str]
    errors: List[str]
    last_mod_dates: List[str]
    warnings: List[str] = field(default_factory=list)


@dataclass(slots=True)
class SitemapStats:
    total_urls: int
    unique_urls: int
    duplicates: int
    has_lastmod: bool
    has_priority: bool
    has_changefreq: bool
    is_sitemap_index: bool


@dataclass(slots=True)
class KeywordDensityItem:
    keyword: str
    count: int
    density: float


@dataclass(slots=True)
class TargetKeywordResult:
    keyword: str
    count: int
    density: float
    recommendation: str


@dataclass(slots=True)
class KeywordDensityResult:
    """Word and phrase frequencies of a text, top entries first."""

    total_words: int
    unique_words: int
    single_words: List[KeywordDensityItem]
    two_word_phrases: List[KeywordDensityItem]
    three_word_phrases: List[KeywordDensityItem]
    target_keyword: Optional[TargetKeywordResult] = None


@dataclass(slots=True)
class RobotsTxtDirective:
    """One non-comment line of robots.txt."""

    directive: str
    value: str
    line_number: int
    is_valid: bool
    error: Optional[str] = None


@dataclass(slots=True)
class RobotsTxtResult:
    is_valid: bool
    directives: List[RobotsTxtDirective]
    user_agents: List[str]
    sitemaps: List[str]
    errors: List[str]
    warnings: List[str]
