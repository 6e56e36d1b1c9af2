# File: tests/test_pixel_width.py
"""Tests for the Arial based pixel width estimator."""
import dataclasses
import random

import pytest

from serp_scout.pixel_width import (
    ARIAL_CHAR_WIDTHS,
    DEFAULT_CHAR_WIDTH,
    SERP_LIMITS,
    calculate_description_pixel_width,
    calculate_pixel_width,
    calculate_title_pixel_width,
    truncate_to_pixel_width,
    will_be_truncated,
)


def test_table_is_read_only_and_positive():
    assert all(width > 0 for width in ARIAL_CHAR_WIDTHS.values())
    assert all(len(char) == 1 for char in ARIAL_CHAR_WIDTHS)
    with pytest.raises(TypeError):
        ARIAL_CHAR_WIDTHS["A"] = 1.0  # type: ignore[index]


def test_serp_limits_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        SERP_LIMITS.title.desktop = 1  # type: ignore[misc]


def test_serp_limits_values():
    assert (SERP_LIMITS.title.desktop, SERP_LIMITS.title.mobile) == (580, 920)
    assert (SERP_LIMITS.title.max_characters, SERP_LIMITS.title.font_size) == (60, 20)
    assert (SERP_LIMITS.description.desktop, SERP_LIMITS.description.mobile) == (920, 680)
    assert (SERP_LIMITS.description.max_characters, SERP_LIMITS.description.font_size) == (160, 14)


@pytest.mark.parametrize(
    "text,font_size,expected",
    [
        ("", 20, 0),
        ("A", 20, 14),  # 0.722 * 20 = 14.44
        ("Hello", 20, 49),  # 48.9
        ("...", 20, 17),  # 16.68
        ("W", 14, 13),  # 13.216
        ("i", 18, 5),  # 5.004
    ],
)
def test_calculate_pixel_width(text, font_size, expected):
    assert calculate_pixel_width(text, font_size) == expected


def test_calculate_pixel_width_rounds_once_at_the_end():
    # 0.278 * 20 = 5.56 -> per-char rounding would give 6 * 3 = 18
    assert calculate_pixel_width("lll", 20) == 17


def test_calculate_pixel_width_rounds_half_up():
    # 0.5 * 5 = 2.5 -> 3, not banker's 2
    assert calculate_pixel_width("z", 5) == 3


def test_unknown_characters_use_default_width():
    assert calculate_pixel_width("é", 10) == round(DEFAULT_CHAR_WIDTH * 10)
    # one code point, not two UTF-16 units
    assert calculate_pixel_width("😀", 10) == 6
    assert calculate_pixel_width("漢字", 10) == 12


def test_title_and_description_wrappers_use_serp_font_sizes():
    text = "Best Coffee Beans"
    assert calculate_title_pixel_width(text) == calculate_pixel_width(text, SERP_LIMITS.title.font_size)
    assert calculate_description_pixel_width(text) == calculate_pixel_width(
        text, SERP_LIMITS.description.font_size
    )


def test_zero_font_size_gives_zero_width():
    assert calculate_pixel_width("Hello", 0) == 0


# --------------------------------------------------------------------------- #
#                                  Truncation                                 #
# --------------------------------------------------------------------------- #


def test_truncate_returns_fitting_text_unchanged():
    assert truncate_to_pixel_width("Hello", 49) == "Hello"
    assert truncate_to_pixel_width("", 0) == ""


def test_truncate_cuts_and_appends_ellipsis():
    # target = 40 - 17 = 23: "H" (14.44) fits, "He" (25.56) does not
    assert truncate_to_pixel_width("Hello world", 40) == "H..."


def test_truncate_strips_trailing_whitespace_before_ellipsis():
    # target = 45 - 17 = 28: "Hi " is 25.56, "Hi t" is 32.22
    assert truncate_to_pixel_width("Hi there", 45) == "Hi..."


def test_truncate_with_budget_smaller_than_ellipsis():
    assert truncate_to_pixel_width("Hello", 10) == "..."


def test_truncate_custom_ellipsis():
    assert truncate_to_pixel_width("Hello world", 40, 20, "…") == "He…"


def test_will_be_truncated_uses_full_limit():
    assert will_be_truncated("Hello", 49) is False
    assert will_be_truncated("Hello", 48) is True


_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 .,-!?&éü漢😀"


def _random_case(seed: int) -> tuple[str, int, int]:
    rng = random.Random(seed)
    text = "".join(rng.choice(_ALPHABET) for _ in range(rng.randint(0, 80)))
    return text, rng.randint(20, 800), rng.choice([12, 14, 16, 18, 20])


@pytest.mark.parametrize("seed", range(200))
def test_will_be_truncated_matches_width(seed):
    text, limit, font_size = _random_case(seed)
    assert will_be_truncated(text, limit, font_size) == (calculate_pixel_width(text, font_size) > limit)


@pytest.mark.parametrize("seed", range(200))
def test_truncation_law(seed):
    text, limit, font_size = _random_case(seed)
    result = truncate_to_pixel_width(text, limit, font_size)

    if calculate_pixel_width(text, font_size) <= limit:
        assert result == text
        return

    assert result.endswith("...")
    kept = result[: -len("...")]
    assert text.startswith(kept)
    target = limit - calculate_pixel_width("...", font_size)
    assert calculate_pixel_width(kept, font_size) <= max(target, 0)
