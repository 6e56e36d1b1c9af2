# File: tests/test_html_checks.py
"""Heading, robots meta and canonical checkers."""
import pytest

from serp_scout.checks.canonical import check_canonical, generate_canonical_tag, normalize_url
from serp_scout.checks.headings import analyze_headings, get_heading_stats, suggest_heading_structure
from serp_scout.checks.robots_meta import (
    check_robots_meta,
    explain_directive,
    generate_robots_meta_tag,
    get_all_robots_directives,
    is_page_indexable,
    parse_robots_content,
)

MESSY_HEADINGS = "<h2>Intro</h2><h4>Deep</h4><h1>Main</h1><h1>main</h1><h3></h3>"


# --------------------------------------------------------------------------- #
#                                   Headings                                  #
# --------------------------------------------------------------------------- #


def test_analyze_headings_clean_page(sample_html):
    analysis = analyze_headings(sample_html)
    assert analysis.has_h1 is True
    assert analysis.h1_count == 1
    assert analysis.issues == []
    assert analysis.structure == ["H1: Best Coffee Beans", "  H2: Arabica beans"]
    assert len(analysis.hierarchy) == 1
    assert analysis.hierarchy[0].children[0].text == "Arabica beans"


def test_analyze_headings_reports_issues():
    analysis = analyze_headings(MESSY_HEADINGS)
    assert analysis.h1_count == 2
    assert analysis.issues == [
        "Multiple H1 tags found (2) - consider using only one H1 per page",
        "First heading is H2 - consider starting with H1",
        'Skipped heading level: H2 to H4 (at "Deep...")',
        'Skipped heading level: H1 to H3 (at "...")',
        "Found 1 empty heading(s)",
        'Duplicate H1 heading: "main"',
    ]


def test_analyze_headings_hierarchy():
    roots = analyze_headings(MESSY_HEADINGS).hierarchy
    assert [(n.level, n.text) for n in roots] == [(2, "Intro"), (1, "Main"), (1, "main")]
    assert [c.text for c in roots[0].children] == ["Deep"]
    assert [c.level for c in roots[2].children] == [3]


def test_analyze_headings_without_any_heading():
    analysis = analyze_headings("<p>text</p>")
    assert analysis.has_h1 is False
    assert analysis.issues == ["No H1 tag found - every page should have exactly one H1"]


def test_analyze_headings_long_heading_threshold():
    html = f"<h1>{'x' * 20}</h1>"
    assert analyze_headings(html).issues == []
    assert analyze_headings(html, max_heading_length=10).issues == [
        "Found 1 heading(s) longer than 10 characters"
    ]


def test_analyze_headings_requires_html():
    with pytest.raises(ValueError, match="HTML content is required"):
        analyze_headings("  \n")


def test_heading_stats():
    stats = get_heading_stats("<h1>Main title</h1><h2>Sub</h2><h2>Other</h2>")
    assert stats.total == 3
    assert stats.by_level == {1: 1, 2: 2, 3: 0, 4: 0, 5: 0, 6: 0}
    assert stats.average_length == 6  # (10 + 3 + 5) / 3
    assert stats.longest_heading == "Main title"
    assert stats.shortest_heading == "Sub"


def test_heading_stats_empty():
    stats = get_heading_stats("")
    assert (stats.total, stats.average_length, stats.longest_heading) == (0, 0, "")


# --------------------------------------------------------------------------- #
#                                 Robots meta                                 #
# --------------------------------------------------------------------------- #

ROBOTS_HTML = (
    '<meta name="robots" content="NoIndex, follow">'
    '<meta name="googlebot" content="nosnippet">'
    '<meta name="description" content="x">'
)


def test_parse_robots_content():
    assert parse_robots_content(" NOINDEX , ,nofollow ") == ["noindex", "nofollow"]
    assert parse_robots_content(None) == []


def test_check_robots_meta():
    result = check_robots_meta(ROBOTS_HTML)
    assert result.has_noindex is True
    assert result.has_nofollow is False
    assert result.has_nosnippet is True
    assert result.has_noarchive is False
    assert result.is_indexable is False
    assert [(t.name, t.directives) for t in result.meta_tags] == [
        ("robots", ["noindex", "follow"]),
        ("googlebot", ["nosnippet"]),
    ]
    assert result.x_robots_tag is None
    assert "Page is set to NOINDEX - search engines will not index this page" in result.summary
    assert "Links will be followed" not in result.summary


def test_check_robots_meta_defaults_to_indexable():
    result = check_robots_meta("<p>hello</p>")
    assert result.is_indexable is True
    assert result.summary == [
        "No robots meta tags found - page allows full indexing by default",
        "Page is indexable",
        "Links will be followed",
    ]


def test_check_robots_meta_x_robots_tag_and_none():
    result = check_robots_meta("<p>hello</p>", x_robots_tag="none, noarchive")
    assert result.has_noindex and result.has_nofollow and result.has_noarchive
    assert result.x_robots_tag == "none, noarchive"
    assert "X-Robots-Tag header detected: none, noarchive" in result.summary


def test_check_robots_meta_conflicts_and_unknown():
    html = '<meta name="robots" content="index, noindex, follow, nofollow, max-snippet:50, bogus">'
    summary = check_robots_meta(html).summary
    assert "Conflicting directives: both INDEX and NOINDEX found" in summary
    assert "Conflicting directives: both FOLLOW and NOFOLLOW found" in summary
    assert "Unknown directive(s): bogus" in summary


def test_check_robots_meta_requires_html():
    with pytest.raises(ValueError):
        check_robots_meta("")


def test_robots_helpers():
    assert is_page_indexable(ROBOTS_HTML) is False
    assert is_page_indexable("<p>x</p>") is True
    assert is_page_indexable("") is False
    assert get_all_robots_directives(ROBOTS_HTML, "noindex, noarchive") == [
        "noindex",
        "follow",
        "nosnippet",
        "noarchive",
    ]
    assert explain_directive("NOFOLLOW") == "Prevent search engines from following links on this page"
    assert explain_directive("whatever") == "Unknown directive"


@pytest.mark.parametrize(
    "kwargs,expected",
    [
        ({}, '<meta name="robots" content="index, follow" />'),
        ({"index": False}, '<meta name="robots" content="noindex" />'),
        ({"follow": False, "snippet": False}, '<meta name="robots" content="nofollow, nosnippet" />'),
    ],
)
def test_generate_robots_meta_tag(kwargs, expected):
    assert generate_robots_meta_tag(**kwargs) == expected


# --------------------------------------------------------------------------- #
#                                  Canonical                                  #
# --------------------------------------------------------------------------- #

PAGE = "https://example.com/coffee"


def test_self_referencing_canonical(sample_html):
    result = check_canonical(sample_html, PAGE)
    assert result.has_canonical is True
    assert result.canonical_url == PAGE
    assert result.is_self_referencing is True
    assert result.issues == []
    assert result.recommendations == ["Self-referencing canonical is correctly implemented"]


def test_relative_canonical_resolves_against_page():
    result = check_canonical('<link rel="canonical" href="/coffee">', PAGE)
    assert result.is_self_referencing is True
    assert result.canonical_url == "/coffee"


def test_missing_canonical():
    result = check_canonical("<p>no head</p>", PAGE)
    assert result.has_canonical is False
    assert result.canonical_url is None
    assert result.issues == ["No canonical URL found"]
    assert result.recommendations == ["Add a canonical URL to prevent duplicate content issues"]


def test_http_canonical_on_https_page():
    result = check_canonical('<link rel="canonical" href="http://www.example.com/coffee/">', PAGE)
    assert result.is_self_referencing is False
    assert result.issues == [
        "Protocol mismatch between canonical and page URL",
        "WWW prefix mismatch between canonical and page URL",
        "Trailing slash inconsistency between canonical and page URL",
        "Canonical uses HTTP while page uses HTTPS",
    ]
    assert "Cross-domain canonical detected - ensure this is intentional" in result.recommendations


def test_multiple_canonical_tags():
    html = '<link rel="canonical" href="/coffee"><link rel="canonical" href="/tea">'
    result = check_canonical(html, PAGE)
    assert result.issues == ["Multiple canonical tags found (2)"]


@pytest.mark.parametrize(
    "html,url,message",
    [
        ("", PAGE, "HTML content is required"),
        ("<p>x</p>", " ", "Page URL is required"),
        ("<p>x</p>", "example.com/coffee", "Invalid page URL format"),
    ],
)
def test_canonical_input_errors(html, url, message):
    with pytest.raises(ValueError, match=message):
        check_canonical(html, url)


def test_generate_canonical_tag_escapes():
    assert generate_canonical_tag('https://example.com/?a=1&b="2"') == (
        '<link rel="canonical" href="https://example.com/?a=1&amp;b=&quot;2&quot;" />'
    )


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://Example.com:443/a/b/?z=1&a=2#frag", "https://example.com/a/b?a=2&z=1"),
        ("http://example.com:8080/", "http://example.com:8080/"),
        ("https://example.com", "https://example.com/"),
        ("http://[::1]:8080/", "http://[::1]:8080/"),
        ("https://[2001:db8::1]:443/a/", "https://[2001:db8::1]/a"),
        ("not a url", "not a url"),
    ],
)
def test_normalize_url(url, expected):
    assert normalize_url(url) == expected


def test_empty_canonical_href_is_missing():
    result = check_canonical('<link rel="canonical" href="">', "https://example.com/page")
    assert result.has_canonical is False
    assert result.canonical_url is None
    assert result.is_self_referencing is False
    assert result.issues == ["No canonical URL found"]


def test_suggest_heading_structure():
    outline = suggest_heading_structure("Cold Brew")
    assert outline[0] == "H1: Cold Brew"
    assert "  H2: What is Cold Brew?" in outline
    assert "  H2: How to Use Cold Brew" in outline
    assert outline[-1] == "    H3: Common Question 2"
    assert len(outline) == 11
