"""Test markdown-to-slide parsing end to end."""

import re

import pytest
from slide_parser.markdown_parser import MarkdownSlideParser, parse_markdown_to_slides
from slide_parser.models import ElementType, ParserOptions
from slide_parser.export import slides_to_dicts


def test_basic_markdown_parsing(parser):
    """Headings, paragraphs and lists become typed elements."""
    markdown_text = """# Hello World

This is a paragraph.

## Section 2

- Item 1
- Item 2"""

    slides = parser.parse(markdown_text)

    # The level-2 heading follows content, so it starts a second slide
    assert len(slides) == 2

    first, second = slides
    assert [e.type for e in first.elements] == [ElementType.TITLE, ElementType.MARKDOWN]
    assert first.elements[0].content == "Hello World"
    assert first.elements[1].content == "This is a paragraph."

    assert [e.type for e in second.elements] == [
        ElementType.SUBTITLE,
        ElementType.BULLETS,
        ElementType.BULLETS,
    ]
    assert second.elements[1].content == ["Item 1"]
    assert second.elements[2].content == ["Item 2"]


def test_page_breaks_horizontal_rule():
    """Delimiter lines split slides even with heading pagination off."""
    parser = MarkdownSlideParser({"useHeadingPagination": False})

    markdown_text = """# Page 1

Content for page 1.

---

# Page 2

Content for page 2."""

    slides = parser.parse(markdown_text)

    assert len(slides) == 2
    assert slides[0].elements[0].content == "Page 1"
    assert slides[0].elements[1].content == "Content for page 1."
    assert slides[1].elements[0].content == "Page 2"
    assert slides[1].elements[1].content == "Content for page 2."


def test_empty_content_handling(parser):
    """Empty documents and documents of bare delimiters yield no slides."""
    assert parser.parse("") == []
    assert parser.parse("   \n\n   ") == []
    assert parser.parse("---\n\n---") == []


def test_parser_reset(parser):
    """Parsing is stateless between calls."""
    first = parser.parse("# First")
    assert first[0].elements[0].content == "First"

    second = parser.parse("# Second")
    assert second[0].elements[0].content == "Second"
    assert len(second) == 1


def test_crlf_matches_lf(parser):
    lf = "# A\ntext\n---\n# B\n- item"
    crlf = lf.replace("\n", "\r\n")

    assert slides_to_dicts(parser.parse(crlf)) == slides_to_dicts(parser.parse(lf))


def test_consecutive_headings_share_a_slide(parser):
    slides = parser.parse("# Deck\n## Agenda\n\n### Part one\nIntro text")

    assert len(slides) == 1
    types = [e.type for e in slides[0].elements]
    assert types == [ElementType.TITLE, ElementType.SUBTITLE, ElementType.SUBTITLE, ElementType.MARKDOWN]


def test_delimiter_boundary_with_empty_block(parser):
    """A block with no elements emits nothing but still separates its neighbours."""
    slides = parser.parse("# A\nalpha\n---\nlayout: center\n---\n# B\nbeta")

    assert [s.id for s in slides] == ["slide-0", "slide-2"]
    assert slides[0].elements[-1].content == "alpha"
    assert slides[1].elements[0].content == "B"


def test_fenced_heading_is_not_a_break(parser):
    markdown_text = "# Title\n```\n# Code comment\n```\n## Subtitle"

    slides = parser.parse(markdown_text)

    assert len(slides) == 2
    code = slides[0].elements[1]
    assert code.type == ElementType.CODE
    assert code.content == "# Code comment"
    assert slides[1].elements[0].type == ElementType.SUBTITLE


def test_heading_inside_inline_code_is_not_a_break(parser):
    slides = parser.parse("# Tips\nSome intro\nUse `## not a heading` here\nmore")

    assert len(slides) == 1
    assert slides[0].elements[2].type == ElementType.MARKDOWN
    assert slides[0].elements[2].content == "Use <code>## not a heading</code> here"


def test_min_heading_level():
    slides = parse_markdown_to_slides(
        "# A\ntext\n## B\ntext\n### C\ntext",
        ParserOptions(min_heading_level=2),
    )

    assert len(slides) == 3
    assert slides[0].elements[0].type == ElementType.TITLE
    assert slides[1].elements[0].content == "B"
    assert slides[2].elements[0].content == "C"


def test_pagination_disabled_keeps_one_slide():
    options = {"useDelimiter": False, "useHeadingPagination": False}
    slides = parse_markdown_to_slides("# A\ntext\n---\n# B\ntext", options)

    assert len(slides) == 1
    # With delimiters off, '---' is plain text
    assert "---" in [e.content for e in slides[0].elements]


@pytest.mark.parametrize("markdown_text", [
    "# A\n## B\ntext\n## C\n---\n---\n# D",
    "intro\n# A\n\n# B\ntext\n```\n# not\n---\n```\n## C",
    "---\n---\n# Only\n",
    "plain\n---\nplain\n## H\n## H2\n- x",
])
def test_slide_count_upper_bound(parser, markdown_text):
    """Slides never outnumber delimiters + heading breaks after content + 1."""
    in_fence = False
    boundaries = 0
    seen_content = False
    for line in markdown_text.split("\n"):
        stripped = line.strip()
        if stripped.startswith("```"):
            in_fence = not in_fence
            seen_content = True
            continue
        if in_fence:
            continue
        if re.match(r"^---\s*$", stripped):
            boundaries += 1
            seen_content = False
        elif re.match(r"^([^#]*?)(#{1,6})\s+", stripped):
            if seen_content:
                boundaries += 1
            seen_content = False
        elif stripped:
            seen_content = True

    assert len(parser.parse(markdown_text)) <= boundaries + 1


def test_click_states_increase_within_slide(parser):
    markdown_text = """## Overview
# Main title
- first
- second
> quoted
!image(chart.png)
closing words"""

    slides = parser.parse(markdown_text)
    assert len(slides) == 1

    clicks = [e.click_state for e in slides[0].elements if e.type != ElementType.TITLE]
    assert all(c >= 0 for c in clicks)
    assert clicks == sorted(set(clicks))
    assert slides[0].title.click_state == 0


def test_image_token_after_other_content(parser):
    slides = parser.parse("# Gallery\nSome text\n!image(https://example.com/a.png)")

    image = slides[0].elements[-1]
    assert image.type == ElementType.IMAGE
    assert image.content == "https://example.com/a.png"


def test_element_ids_use_slide_and_line_index(parser):
    slides = parser.parse("# A\n\nalpha\n---\n# B\nbeta")

    assert [e.id for e in slides[0].elements] == ["s0-e0", "s0-e2"]
    assert [e.id for e in slides[1].elements] == ["s1-e0", "s1-e1"]


def test_options_override_per_call():
    parser = MarkdownSlideParser()
    text = "# A\ntext\n# B\ntext"

    assert len(parser.parse(text)) == 2
    assert len(parser.parse(text, {"use_heading_pagination": False})) == 1


def test_null_option_values_use_defaults():
    slides = parse_markdown_to_slides("# A\ntext\n# B", {"minHeadingLevel": None})

    assert len(slides) == 2


class TestParseCache:
    """Memoized parsing returns equal, independent results."""

    def test_cached_results_are_copies(self):
        parser = MarkdownSlideParser(cache_size=4)
        text = "# Cached\n- item"

        first = parser.parse(text)
        first[0].elements.clear()

        second = parser.parse(text)
        assert len(second[0].elements) == 2

    def test_cache_keyed_on_options(self):
        parser = MarkdownSlideParser(cache_size=4)
        text = "# A\ntext\n# B\ntext"

        assert len(parser.parse(text)) == 2
        assert len(parser.parse(text, ParserOptions(use_heading_pagination=False))) == 1

    def test_clear_cache(self):
        parser = MarkdownSlideParser(cache_size=2)
        parser.parse("# A")
        parser.clear_cache()
        assert parser.parse("# A")[0].elements[0].content == "A"


def test_parse_toc_from_parser(parser):
    toc = parser.parse_toc("# Title\n## Subtitle")
    assert [item.text for item in toc] == ["Title", "Subtitle"]
    assert parser.parse_toc("") == []
