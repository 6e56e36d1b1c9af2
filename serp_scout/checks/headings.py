# File: serp_scout/checks/headings.py
"""H1-H6 heading structure analyzer."""

from __future__ import annotations

from typing import Dict, List, Sequence

from serp_scout.checks.models import HeadingAnalysis, HeadingNode, HeadingStats
from serp_scout.logger import logger
from serp_scout.parser.html_parser import Heading, extract_headings

__all__ = ["analyze_headings", "build_hierarchy", "get_heading_stats", "suggest_heading_structure"]


def build_hierarchy(headings: Sequence[Heading]) -> List[HeadingNode]:
    """Nest a flat heading list: each heading becomes a child of the nearest
    preceding heading with a smaller level."""
    roots: List[HeadingNode] = []
    stack: List[HeadingNode] = []

    for heading in headings:
        node = HeadingNode(level=heading.level, text=heading.text)
        while stack and stack[-1].level >= heading.level:
            stack.pop()
        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots


def _structure_lines(headings: Sequence[Heading]) -> List[str]:
    return [f"{'  ' * (h.level - 1)}H{h.level}: {h.text}" for h in headings]


def _find_issues(headings: Sequence[Heading], max_heading_length: int) -> List[str]:
    issues: List[str] = []

    h1_count = sum(1 for h in headings if h.level == 1)
    if h1_count == 0:
        issues.append("No H1 tag found - every page should have exactly one H1")
    elif h1_count > 1:
        issues.append(f"Multiple H1 tags found ({h1_count}) - consider using only one H1 per page")

    if headings and headings[0].level != 1:
        issues.append(f"First heading is H{headings[0].level} - consider starting with H1")

    for previous, current in zip(headings, headings[1:]):
        if current.level - previous.level > 1:
            issues.append(
                f"Skipped heading level: H{previous.level} to H{current.level} "
                f'(at "{current.text[:30]}...")'
            )

    empty = sum(1 for h in headings if not h.text.strip())
    if empty:
        issues.append(f"Found {empty} empty heading(s)")

    too_long = sum(1 for h in headings if len(h.text) > max_heading_length)
    if too_long:
        issues.append(f"Found {too_long} heading(s) longer than {max_heading_length} characters")

    seen: Dict[int, set[str]] = {}
    for h in headings:
        texts = seen.setdefault(h.level, set())
        key = h.text.lower()
        if key in texts:
            issues.append(f'Duplicate H{h.level} heading: "{h.text}"')
        texts.add(key)

    return issues


def analyze_headings(html: str, max_heading_length: int = 70) -> HeadingAnalysis:
    """Analyze the heading outline of *html*.

    Raises:
        ValueError: if *html* is empty or blank.
    """
    if not html or not html.strip():
        raise ValueError("HTML content is required")

    headings = extract_headings(html)
    h1_count = sum(1 for h in headings if h.level == 1)
    issues = _find_issues(headings, max_heading_length)
    logger.debug("Found %d headings, %d issues", len(headings), len(issues))

    return HeadingAnalysis(
        headings=headings,
        structure=_structure_lines(headings),
        has_h1=h1_count > 0,
        h1_count=h1_count,
        issues=issues,
        hierarchy=build_hierarchy(headings),
    )


def get_heading_stats(html: str) -> HeadingStats:
    headings = extract_headings(html)
    by_level = {level: 0 for level in range(1, 7)}
    for h in headings:
        by_level[h.level] += 1

    texts = [h.text for h in headings]
    total_length = sum(len(t) for t in texts)
    return HeadingStats(
        total=len(headings),
        by_level=by_level,
        average_length=int(total_length / len(texts) + 0.5) if texts else 0,
        # first wins on ties
        longest_heading=max(texts, key=len, default=""),
        shortest_heading=min(texts, key=len, default=""),
    )


def suggest_heading_structure(topic: str) -> List[str]:
    """Outline template for an article about *topic*, in the ``structure`` line format."""
    return [
        f"H1: {topic}",
        f"  H2: What is {topic}?",
        f"  H2: Benefits of {topic}",
        "    H3: Key Advantage 1",
        "    H3: Key Advantage 2",
        f"  H2: How to Use {topic}",
        "    H3: Step 1",
        "    H3: Step 2",
        "  H2: FAQ",
        "    H3: Common Question 1",
        "    H3: Common Question 2",
    ]
