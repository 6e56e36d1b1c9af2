# File: tests/test_snippet_checks.py
"""Meta title / description checkers and the SERP preview."""
import pytest

from serp_scout.checks.meta_description import (
    check_meta_description,
    check_meta_descriptions,
    suggest_description_length,
)
from serp_scout.checks.meta_title import check_meta_title, check_meta_titles, suggest_title_length
from serp_scout.checks.serp_preview import format_serp_url, generate_serp_preview, get_serp_suggestions

LONG_TITLE = "A" * 50  # 50 * 14.44 = 722px


def test_short_title():
    result = check_meta_title("Hello")
    assert result.pixel_width == 49
    assert result.max_pixel_width == 580
    assert result.character_count == 5
    assert result.max_character_count == 60
    assert result.is_truncated is False
    assert result.percent_used == 8
    assert result.recommendation.startswith("Title is too short")
    assert result.desktop_preview == result.mobile_preview == "Hello"
    assert result.warnings == []


def test_long_title_is_truncated_on_desktop_only():
    result = check_meta_title(LONG_TITLE)
    assert result.pixel_width == 722
    assert result.is_truncated is True
    assert result.recommendation.startswith("Title will be significantly truncated")
    assert result.desktop_preview == "A" * 38 + "..."
    assert result.mobile_preview == LONG_TITLE
    assert result.warnings == ["Title exceeds 580px desktop limit by 142px"]


def test_title_character_warning():
    result = check_meta_title("i" * 61)  # narrow glyphs: 61 * 5.56 = 339px
    assert result.is_truncated is False
    assert "Character count exceeds recommended 60 characters" in result.warnings


@pytest.mark.parametrize("title", ["", "   "])
def test_blank_title_raises(title):
    with pytest.raises(ValueError, match="Title is required"):
        check_meta_title(title)


def test_batch_titles_skip_blank():
    results = check_meta_titles(["Hello", "", LONG_TITLE])
    assert [r.text for r in results] == ["Hello", LONG_TITLE]


def test_suggest_title_length():
    suggestion = suggest_title_length(LONG_TITLE)
    assert (suggestion.current, suggestion.optimal_min, suggestion.optimal_max) == (722, 400, 580)
    assert suggestion.adjustment == 142
    assert suggest_title_length("Hello").adjustment == 0


def test_short_description():
    result = check_meta_description("Short description.")
    assert result.max_pixel_width == 920
    assert result.max_character_count == 160
    assert result.recommendation.startswith("Description is too short")
    assert result.warnings == ["Description is shorter than recommended 120 character minimum"]


def test_long_description():
    text = "W" * 170  # 170 * 13.216 = 2246.72px
    result = check_meta_description(text)
    assert result.pixel_width == 2247
    assert result.is_truncated is True
    assert result.desktop_preview.endswith("...")
    assert result.mobile_preview.endswith("...")
    assert len(result.mobile_preview) < len(result.desktop_preview)
    assert "Character count exceeds recommended 160 characters" in result.warnings
    assert "Description exceeds 920px desktop limit by 1327px" in result.warnings


def test_blank_description_raises():
    with pytest.raises(ValueError, match="Description is required"):
        check_meta_description(" ")


def test_description_batch_and_suggestion():
    assert len(check_meta_descriptions(["one", "", "two"])) == 2
    suggestion = suggest_description_length("W" * 170)
    assert (suggestion.optimal_min, suggestion.optimal_max, suggestion.adjustment) == (600, 920, 1327)


# --------------------------------------------------------------------------- #
#                                 SERP preview                                #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://example.com/blog/my-first-post", "example.com › Blog › My first post"),
        ("https://Example.com/", "example.com"),
        ("https://example.com", "example.com"),
        ("not a url", "not a url"),
    ],
)
def test_format_serp_url(url, expected):
    assert format_serp_url(url) == expected


def test_serp_preview_desktop():
    preview = generate_serp_preview(LONG_TITLE, "Short description.", "https://example.com/a-b")
    assert preview.device == "desktop"
    assert preview.title.is_truncated is True
    assert preview.title.display_text == "A" * 38 + "..."
    assert preview.title.pixel_width == 722
    assert preview.description.is_truncated is False
    assert preview.description.display_text == "Short description."
    assert preview.url_display == "example.com › A b"
    assert (preview.title_max_width, preview.description_max_width) == (580, 920)
    assert preview.mobile == {"title_max_width": 920, "description_max_width": 680}


def test_serp_preview_mobile_uses_mobile_budget():
    preview = generate_serp_preview(LONG_TITLE, device="mobile")
    assert preview.title.is_truncated is False
    assert preview.title.display_text == LONG_TITLE
    assert preview.title_max_width == 920


def test_serp_preview_without_description_and_url():
    preview = generate_serp_preview("Hello")
    assert preview.description.text == ""
    assert preview.description.display_text == ""
    assert preview.description.pixel_width == 0
    assert preview.description.is_truncated is False
    assert preview.url_display == ""


def test_serp_preview_requires_title():
    with pytest.raises(ValueError):
        generate_serp_preview("  ", "desc")


def test_serp_suggestions_for_short_result():
    assert get_serp_suggestions("Hello") == [
        "Title is short. Consider making it more descriptive for better CTR.",
        'Consider adding numbers to your title (e.g., "Top 10...", "2024...")',
        "Add a meta description to control your SERP snippet.",
    ]


def test_serp_suggestions_truncated_title():
    assert get_serp_suggestions(LONG_TITLE, "Buy now - free") == [
        "Title will be truncated on desktop. Shorten to under 60 characters.",
        'Consider adding numbers to your title (e.g., "Top 10...", "2024...")',
        "Description is short. Add more compelling content.",
    ]


def test_serp_suggestions_follow_device_budget():
    # 792px title fits the 920px mobile budget
    title = "Top 10 " + LONG_TITLE
    assert get_serp_suggestions(title, "W" * 170, device="mobile") == [
        "Description will be truncated. Front-load important keywords.",
        "Consider adding a call-to-action in your description.",
    ]


def test_serp_suggestions_blank_title():
    assert get_serp_suggestions("   ") == []
