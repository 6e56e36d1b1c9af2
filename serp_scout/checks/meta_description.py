# File: serp_scout/checks/meta_description.py
"""Meta description pixel length checker (about 920px desktop, 680px mobile)."""

from __future__ import annotations

from typing import Iterable, List

from serp_scout.checks.models import LengthSuggestion, MetaDescriptionResult
from serp_scout.checks.snippet import check_snippet_length
from serp_scout.logger import logger
from serp_scout.pixel_width import SERP_LIMITS, calculate_description_pixel_width

__all__ = ["check_meta_description", "check_meta_descriptions", "suggest_description_length"]

_TOO_SHORT_PX = 400
_SLIGHTLY_OVER_PX = 1000
_OPTIMAL_MIN_PX = 600
_MIN_CHARACTERS = 120


def _recommend(pixel_width: int) -> str:
    if pixel_width < _TOO_SHORT_PX:
        return "Description is too short. Aim for 150-160 characters for better CTR."
    if pixel_width <= SERP_LIMITS.description.desktop:
        return "Excellent! Your description fits within Google's display limit."
    if pixel_width <= _SLIGHTLY_OVER_PX:
        return "Description may be slightly truncated on desktop. Consider shortening."
    return "Description will be significantly truncated. Reduce length to under 160 characters."


def _character_warnings(character_count: int) -> List[str]:
    warnings: List[str] = []
    if character_count > SERP_LIMITS.description.max_characters:
        warnings.append(
            f"Character count exceeds recommended {SERP_LIMITS.description.max_characters} characters"
        )
    if character_count < _MIN_CHARACTERS:
        warnings.append(
            f"Description is shorter than recommended {_MIN_CHARACTERS} character minimum"
        )
    return warnings


def check_meta_description(description: str, ellipsis: str = "...") -> MetaDescriptionResult:
    """Check *description* against the SERP description limits.

    Raises:
        ValueError: if the description is empty or blank.
    """
    if not description or not description.strip():
        raise ValueError("Description is required")

    result = check_snippet_length(
        description,
        SERP_LIMITS.description,
        recommend=_recommend,
        extra_warnings=_character_warnings,
        label="Description",
        ellipsis=ellipsis,
    )
    logger.debug("Description: %dpx, truncated=%s", result.pixel_width, result.is_truncated)
    return result


def check_meta_descriptions(descriptions: Iterable[str]) -> List[MetaDescriptionResult]:
    return [check_meta_description(d) for d in descriptions if d and d.strip()]


def suggest_description_length(description: str) -> LengthSuggestion:
    pixel_width = calculate_description_pixel_width(description)
    limit = SERP_LIMITS.description.desktop
    return LengthSuggestion(
        current=pixel_width,
        optimal_min=_OPTIMAL_MIN_PX,
        optimal_max=limit,
        adjustment=max(pixel_width - limit, 0),
    )
