# File: serp_scout/checks/meta_title.py
"""Meta title pixel length checker.

Google cuts titles at roughly 580px on desktop and 920px on mobile.
"""

from __future__ import annotations

from typing import Iterable, List

from serp_scout.checks.models import LengthSuggestion, MetaTitleResult
from serp_scout.checks.snippet import check_snippet_length
from serp_scout.logger import logger
from serp_scout.pixel_width import SERP_LIMITS, calculate_title_pixel_width

__all__ = ["check_meta_title", "check_meta_titles", "suggest_title_length"]

_TOO_SHORT_PX = 300
_SLIGHTLY_OVER_PX = 650
_OPTIMAL_MIN_PX = 400


def _recommend(pixel_width: int) -> str:
    if pixel_width < _TOO_SHORT_PX:
        return "Title is too short. Aim for 50-60 characters for better CTR."
    if pixel_width <= SERP_LIMITS.title.desktop:
        return "Perfect! Your title fits within Google's display limit."
    if pixel_width <= _SLIGHTLY_OVER_PX:
        return "Title may be slightly truncated on desktop. Consider shortening by a few characters."
    return "Title will be significantly truncated. Reduce length to under 60 characters."


def _character_warnings(character_count: int) -> List[str]:
    if character_count > SERP_LIMITS.title.max_characters:
        return [f"Character count exceeds recommended {SERP_LIMITS.title.max_characters} characters"]
    return []


def check_meta_title(title: str, ellipsis: str = "...") -> MetaTitleResult:
    """Check *title* against the SERP title limits.

    Raises:
        ValueError: if the title is empty or blank.
    """
    if not title or not title.strip():
        raise ValueError("Title is required")

    result = check_snippet_length(
        title,
        SERP_LIMITS.title,
        recommend=_recommend,
        extra_warnings=_character_warnings,
        label="Title",
        ellipsis=ellipsis,
    )
    logger.debug("Title %r: %dpx, truncated=%s", title, result.pixel_width, result.is_truncated)
    return result


def check_meta_titles(titles: Iterable[str]) -> List[MetaTitleResult]:
    """Batch variant; blank titles are skipped."""
    return [check_meta_title(title) for title in titles if title and title.strip()]


def suggest_title_length(title: str) -> LengthSuggestion:
    pixel_width = calculate_title_pixel_width(title)
    limit = SERP_LIMITS.title.desktop
    return LengthSuggestion(
        current=pixel_width,
        optimal_min=_OPTIMAL_MIN_PX,
        optimal_max=limit,
        adjustment=max(pixel_width - limit, 0),
    )
