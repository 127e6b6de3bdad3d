"""Test splitting documents into slide blocks."""

from slide_parser.models import ParserOptions
from slide_parser.segmenter import split_slide_blocks


def test_delimiter_splits_blocks():
    blocks = split_slide_blocks("one\n---\ntwo\n---   \nthree")

    assert blocks == [["one"], ["two"], ["three"]]


def test_blank_blocks_are_dropped():
    assert split_slide_blocks("---\n\n   \n---\n") == []
    assert split_slide_blocks("") == []


def test_heading_break_requires_prior_content():
    blocks = split_slide_blocks("# A\n## B\n\ntext\n## C")

    assert blocks == [["# A", "## B", "", "text"], ["## C"]]


def test_min_heading_level_filters_breaks():
    options = ParserOptions(min_heading_level=3)
    blocks = split_slide_blocks("# A\ntext\n## B\ntext\n### C\ntext", options)

    assert len(blocks) == 2
    assert blocks[1][0] == "### C"


def test_fenced_code_is_opaque():
    text = "# A\n```\n---\n# not a heading\n```\nafter"
    blocks = split_slide_blocks(text)

    assert blocks == [text.split("\n")]


def test_unterminated_fence_swallows_rest():
    blocks = split_slide_blocks("intro\n```\n---\n# H\n")

    assert len(blocks) == 1


def test_inline_code_heading_is_not_a_break():
    blocks = split_slide_blocks("intro\nUse `## x` to make a heading")

    assert len(blocks) == 1


def test_decorated_heading_breaks():
    blocks = split_slide_blocks("intro\n🚀 ## Launch\nmore")

    assert blocks == [["intro"], ["🚀 ## Launch", "more"]]


def test_notes_marker_stays_with_its_slide():
    blocks = split_slide_blocks("# A\ntext\n### Notes:\nsay this")

    assert len(blocks) == 1


def test_options_disable_both_signals():
    options = ParserOptions(use_delimiter=False, use_heading_pagination=False)
    text = "# A\ntext\n---\n# B"

    assert split_slide_blocks(text, options) == [text.split("\n")]


def test_lines_are_kept_verbatim():
    blocks = split_slide_blocks("  indented  \n\ttabbed")

    assert blocks == [["  indented  ", "\ttabbed"]]
