# File: serp_scout/checks/keyword_density.py
"""Keyword density: word and phrase frequencies plus an optional target keyword."""

from __future__ import annotations

import math
import re
from collections import Counter
from typing import Dict, Final, FrozenSet, List, Optional

from serp_scout.checks.models import KeywordDensityItem, KeywordDensityResult, TargetKeywordResult
from serp_scout.logger import logger
from serp_scout.parser.html_parser import strip_html

__all__ = [
    "OPTIMAL_DENSITY",
    "STOP_WORDS",
    "analyze_keyword_density",
    "calculate_keyword_density",
    "suggest_related_keywords",
]

STOP_WORDS: Final[FrozenSet[str]] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
        "to", "was", "were", "will", "with", "this", "but", "they",
        "have", "had", "what", "when", "where", "who", "which", "why", "how",
        "all", "each", "every", "both", "few", "more", "most", "other", "some",
        "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
        "very", "just", "can", "should", "now", "i", "you", "we", "our", "your",
    }
)

#: Density range in percent considered natural for a target keyword.
OPTIMAL_DENSITY: Final[Dict[str, float]] = {"min": 0.5, "max": 2.5, "ideal": 1.5}

_WORD_RE = re.compile(r"\b[\w'-]+\b")


def _round2(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def _words(text: str) -> List[str]:
    return _WORD_RE.findall(text.lower())


def _ngrams(words: List[str], n: int) -> Counter[str]:
    return Counter(" ".join(words[i:i + n]) for i in range(len(words) - n + 1))


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(keyword.lower())}\b")


def _density_items(
    frequency: Counter[str],
    total_words: int,
    include_stop_words: bool,
    top_count: int,
) -> List[KeywordDensityItem]:
    items = [
        KeywordDensityItem(
            keyword=keyword,
            count=count,
            density=_round2(count / total_words * 100) if total_words else 0.0,
        )
        for keyword, count in frequency.items()
        if len(keyword) > 1 and (include_stop_words or keyword not in STOP_WORDS)
    ]
    # stable: equal counts keep first-seen order
    items.sort(key=lambda item: item.count, reverse=True)
    return items[:top_count]


def calculate_keyword_density(text: str, keyword: str) -> float:
    """Share of *text* words taken by *keyword* occurrences, in percent (unrounded)."""
    if not text or not keyword:
        return 0.0
    total_words = len(text.split())
    if not total_words:
        return 0.0
    matches = len(_keyword_pattern(keyword).findall(text.lower()))
    return matches * len(keyword.split()) / total_words * 100


def _recommend(density: float) -> str:
    if density < OPTIMAL_DENSITY["min"]:
        return "Keyword density is low. Consider using the keyword more naturally in your content."
    if density <= OPTIMAL_DENSITY["max"]:
        return "Keyword density is optimal for SEO."
    if density <= 4:
        return "Keyword density is slightly high. Reduce usage to avoid keyword stuffing."
    return "Keyword density is too high. This may be seen as keyword stuffing by search engines."


def analyze_keyword_density(
    content: str,
    target_keyword: Optional[str] = None,
    *,
    is_html: bool = False,
    include_stop_words: bool = False,
    top_count: int = 20,
) -> KeywordDensityResult:
    """Count single words, two- and three-word phrases of *content*.

    Stop words are only filtered from single words; phrases keep them.
    With *is_html* the markup is stripped first.

    Raises:
        ValueError: if *content* is empty or blank.
    """
    if not content or not content.strip():
        raise ValueError("Content is required")

    text = strip_html(content) if is_html else content
    total_words = len(text.split())
    words = _words(text)
    single = Counter(words)

    target: Optional[TargetKeywordResult] = None
    if target_keyword and target_keyword.strip():
        density = calculate_keyword_density(text, target_keyword)
        target = TargetKeywordResult(
            keyword=target_keyword,
            count=len(_keyword_pattern(target_keyword).findall(text.lower())),
            density=_round2(density),
            recommendation=_recommend(density),
        )

    logger.debug("Keyword density: %d words, %d unique", total_words, len(single))
    return KeywordDensityResult(
        total_words=total_words,
        unique_words=len(single),
        single_words=_density_items(single, total_words, include_stop_words, top_count),
        two_word_phrases=_density_items(_ngrams(words, 2), total_words, True, top_count),
        three_word_phrases=_density_items(_ngrams(words, 3), total_words, True, top_count),
        target_keyword=target,
    )


def suggest_related_keywords(content: str, main_keyword: str) -> List[str]:
    """Top two-word phrases sharing a word with *main_keyword* (at most 10)."""
    try:
        result = analyze_keyword_density(content, top_count=50)
    except ValueError:
        return []

    main_words = set(main_keyword.lower().split())
    related = [
        phrase.keyword
        for phrase in result.two_word_phrases
        if phrase.keyword != main_keyword.lower() and main_words & set(phrase.keyword.split())
    ]
    return related[:10]
