# File: tests/conftest.py
from pathlib import Path

import pytest

from serp_scout.config import AnalyzerConfig

PAGE_URL = "https://example.com/coffee"

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Best Coffee Beans 2024 | Example</title>
  <meta name="description" content="Short description.">
  <meta name="robots" content="index, follow">
  <meta property="og:title" content="Coffee">
  <link rel="canonical" href="https://example.com/coffee">
  <style>body { color: red; }</style>
</head>
<body>
  <h1>Best Coffee Beans</h1>
  <h2 class="section">Arabica <small>beans</small></h2>
  <p>Read <a href="/arabica">more</a> or visit
     <a href="https://other.org/x" rel="nofollow">other</a>.</p>
  <script>var hidden = "do not count";</script>
</body>
</html>
"""


@pytest.fixture()
def sample_html() -> str:
    """A small but complete page with title, meta tags, headings and links."""
    return SAMPLE_HTML


@pytest.fixture()
def html_file(tmp_path) -> Path:
    path = tmp_path / "page.html"
    path.write_text(SAMPLE_HTML, encoding="utf-8")
    return path


@pytest.fixture()
def page_config() -> AnalyzerConfig:
    return AnalyzerConfig(page_url=PAGE_URL)


@pytest.fixture()
def sitemap_xml() -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
        "  <url><loc>https://example.com/</loc><lastmod>2024-01-01</lastmod></url>\n"
        "  <url><loc> https://example.com/a </loc></url>\n"
        "  <url><loc>https://example.com/a</loc></url>\n"
        "</urlset>\n"
    )
