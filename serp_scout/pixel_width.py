# File: serp_scout/pixel_width.py
"""Pixel width estimation for SERP titles and descriptions.

Widths are approximated from Arial glyph metrics: every character has a
relative width factor (the advance width at a 1px font size), so multiplying
by the font size gives an approximate rendered width in pixels. Google renders
titles at 20px and descriptions at 14px; both values live in
:data:`SERP_LIMITS` and every helper below reads them from there.

Example
-------
```python
from serp_scout.pixel_width import SERP_LIMITS, truncate_to_pixel_width

preview = truncate_to_pixel_width(title, SERP_LIMITS.title.desktop)
```
"""
from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

__all__: Sequence[str] = (
    "ARIAL_CHAR_WIDTHS",
    "DEFAULT_CHAR_WIDTH",
    "FieldLimits",
    "SerpLimits",
    "SERP_LIMITS",
    "char_width",
    "calculate_pixel_width",
    "calculate_title_pixel_width",
    "calculate_description_pixel_width",
    "truncate_to_pixel_width",
    "will_be_truncated",
)

# Arial advance widths at 1px.
ARIAL_CHAR_WIDTHS: Final[Mapping[str, float]] = MappingProxyType(
    {
        # Uppercase letters
        "A": 0.722, "B": 0.667, "C": 0.722, "D": 0.722, "E": 0.667,
        "F": 0.611, "G": 0.778, "H": 0.722, "I": 0.278, "J": 0.556,
        "K": 0.722, "L": 0.611, "M": 0.833, "N": 0.722, "O": 0.778,
        "P": 0.667, "Q": 0.778, "R": 0.722, "S": 0.667, "T": 0.611,
        "U": 0.722, "V": 0.667, "W": 0.944, "X": 0.667, "Y": 0.667,
        "Z": 0.611,
        # Lowercase letters
        "a": 0.556, "b": 0.611, "c": 0.556, "d": 0.611, "e": 0.556,
        "f": 0.333, "g": 0.611, "h": 0.611, "i": 0.278, "j": 0.278,
        "k": 0.556, "l": 0.278, "m": 0.889, "n": 0.611, "o": 0.611,
        "p": 0.611, "q": 0.611, "r": 0.389, "s": 0.556, "t": 0.333,
        "u": 0.611, "v": 0.556, "w": 0.778, "x": 0.556, "y": 0.556,
        "z": 0.500,
        # Digits
        "0": 0.556, "1": 0.556, "2": 0.556, "3": 0.556, "4": 0.556,
        "5": 0.556, "6": 0.556, "7": 0.556, "8": 0.556, "9": 0.556,
        # Punctuation and symbols
        " ": 0.278, "!": 0.333, '"': 0.474, "#": 0.556, "$": 0.556,
        "%": 0.889, "&": 0.722, "'": 0.238, "(": 0.333, ")": 0.333,
        "*": 0.389, "+": 0.584, ",": 0.278, "-": 0.333, ".": 0.278,
        "/": 0.278, ":": 0.333, ";": 0.333, "<": 0.584, "=": 0.584,
        ">": 0.584, "?": 0.611, "@": 0.975, "[": 0.333, "\\": 0.278,
        "]": 0.333, "^": 0.584, "_": 0.556, "`": 0.333, "{": 0.389,
        "|": 0.280, "}": 0.389, "~": 0.584,
    }
)

#: Factor used for every character missing from the table.
DEFAULT_CHAR_WIDTH: Final[float] = 0.6


@dataclass(frozen=True, slots=True)
class FieldLimits:
    """Pixel budgets and font size for one SERP field."""

    desktop: int
    mobile: int
    max_characters: int
    font_size: int


@dataclass(frozen=True, slots=True)
class SerpLimits:
    title: FieldLimits
    description: FieldLimits


#: Google SERP limits. Update here when rendering conventions change.
SERP_LIMITS: Final[SerpLimits] = SerpLimits(
    title=FieldLimits(desktop=580, mobile=920, max_characters=60, font_size=20),
    description=FieldLimits(desktop=920, mobile=680, max_characters=160, font_size=14),
)


def char_width(char: str, font_size: float = 20) -> float:
    """Return the unrounded width of a single character in pixels."""
    return ARIAL_CHAR_WIDTHS.get(char, DEFAULT_CHAR_WIDTH) * font_size


def _round_half_up(value: float) -> int:
    # round() would use banker's rounding; widths round .5 upwards
    return math.floor(value + 0.5)


def calculate_pixel_width(text: str, font_size: float = 20) -> int:
    """Approximate rendered width of *text* in pixels.

    Characters are measured per code point and the sum is rounded once, so
    per-character rounding errors do not accumulate.
    """
    if not text:
        return 0

    total = 0.0
    for char in text:
        total += char_width(char, font_size)
    return _round_half_up(total)


def calculate_title_pixel_width(title: str) -> int:
    return calculate_pixel_width(title, SERP_LIMITS.title.font_size)


def calculate_description_pixel_width(description: str) -> int:
    return calculate_pixel_width(description, SERP_LIMITS.description.font_size)


def truncate_to_pixel_width(
    text: str,
    max_pixel_width: float,
    font_size: float = 20,
    ellipsis: str = "...",
) -> str:
    """Cut *text* so that it plus *ellipsis* fits into *max_pixel_width*.

    Text that already fits is returned unchanged, without an ellipsis. When the
    ellipsis alone is wider than the budget the result is just the ellipsis.
    """
    if calculate_pixel_width(text, font_size) <= max_pixel_width:
        return text

    target_width = max_pixel_width - calculate_pixel_width(ellipsis, font_size)

    current_width = 0.0
    kept: list[str] = []
    for char in text:
        width = char_width(char, font_size)
        if current_width + width > target_width:
            return "".join(kept).rstrip() + ellipsis
        current_width += width
        kept.append(char)

    return text


def will_be_truncated(text: str, max_pixel_width: float, font_size: float = 20) -> bool:
    """True when the full width of *text* exceeds *max_pixel_width*."""
    return calculate_pixel_width(text, font_size) > max_pixel_width
