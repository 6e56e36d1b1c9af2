"""serp_scout.checks: SEO checkers built on the HTML extractor and pixel width estimator."""

from serp_scout.checks.canonical import check_canonical
from serp_scout.checks.headings import analyze_headings, suggest_heading_structure
from serp_scout.checks.keyword_density import analyze_keyword_density
from serp_scout.checks.meta_description import check_meta_description
from serp_scout.checks.meta_title import check_meta_title
from serp_scout.checks.robots_meta import check_robots_meta
from serp_scout.checks.robots_txt import is_url_allowed, validate_robots_txt
from serp_scout.checks.serp_preview import generate_serp_preview, get_serp_suggestions
from serp_scout.checks.sitemap import analyze_sitemap

__all__ = [
    "analyze_headings",
    "analyze_keyword_density",
    "analyze_sitemap",
    "check_canonical",
    "check_meta_description",
    "check_meta_title",
    "check_robots_meta",
    "generate_serp_preview",
    "get_serp_suggestions",
    "is_url_allowed",
    "suggest_heading_structure",
    "validate_robots_txt",
]
