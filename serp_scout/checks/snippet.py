# File: serp_scout/checks/snippet.py
"""Shared pixel-length analysis behind the meta title and description checkers."""

from __future__ import annotations

import math
from typing import Callable, List

from serp_scout.checks.models import SnippetLengthResult
from serp_scout.pixel_width import (
    FieldLimits,
    calculate_pixel_width,
    truncate_to_pixel_width,
    will_be_truncated,
)


def preview(text: str, max_pixel_width: int, limits: FieldLimits, ellipsis: str = "...") -> str:
    """What the search engine would display for *text* within *max_pixel_width*."""
    if will_be_truncated(text, max_pixel_width, limits.font_size):
        return truncate_to_pixel_width(text, max_pixel_width, limits.font_size, ellipsis)
    return text


def percent_of(value: int, limit: int) -> int:
    return math.floor(value / limit * 100 + 0.5)


def check_snippet_length(
    text: str,
    limits: FieldLimits,
    recommend: Callable[[int], str],
    extra_warnings: Callable[[int], List[str]],
    label: str,
    ellipsis: str = "...",
) -> SnippetLengthResult:
    """Measure *text* against *limits* and build the common result shape.

    *recommend* maps the pixel width to advice; *extra_warnings* maps the
    character count to field-specific warnings.
    """
    pixel_width = calculate_pixel_width(text, limits.font_size)
    max_pixel_width = limits.desktop
    character_count = len(text)

    warnings = extra_warnings(character_count)
    if pixel_width > max_pixel_width:
        warnings.append(
            f"{label} exceeds {max_pixel_width}px desktop limit by {pixel_width - max_pixel_width}px"
        )

    return SnippetLengthResult(
        text=text,
        pixel_width=pixel_width,
        max_pixel_width=max_pixel_width,
        character_count=character_count,
        max_character_count=limits.max_characters,
        is_truncated=will_be_truncated(text, max_pixel_width, limits.font_size),
        percent_used=percent_of(pixel_width, max_pixel_width),
        recommendation=recommend(pixel_width),
        desktop_preview=preview(text, limits.desktop, limits, ellipsis),
        mobile_preview=preview(text, limits.mobile, limits, ellipsis),
        warnings=warnings,
    )
