"""
Markdown-to-slide parser: segmentation plus per-block element building.
"""
import copy
import logging
from functools import lru_cache
from typing import Any, List, Mapping, Union

from .element_builder import build_slide
from .inline import normalize_line_endings
from .models import ParserOptions, SlideContent, TOCItem
from .segmenter import split_slide_blocks
from .toc import parse_table_of_contents

logger = logging.getLogger(__name__)

OptionsLike = Union[ParserOptions, Mapping[str, Any], None]


def _coerce_options(options: OptionsLike) -> ParserOptions:
    if isinstance(options, ParserOptions):
        return options
    return ParserOptions.from_mapping(options)


def _parse(markdown_text: str, options: ParserOptions) -> List[SlideContent]:
    normalized = normalize_line_endings(markdown_text)
    blocks = split_slide_blocks(normalized, options)

    slides = []
    for index, block in enumerate(blocks):
        slide = build_slide(block, index)
        if slide is None:
            logger.debug("Block %d produced no elements, skipping", index)
            continue
        slides.append(slide)

    logger.debug("Parsed %d slides from %d blocks", len(slides), len(blocks))
    return slides


class MarkdownSlideParser:
    """
    Parse Markdown documents into slides.

    The parser holds no per-document state; one instance can be shared
    freely. Results are a pure function of ``(text, options)``, so an
    optional LRU cache can be switched on with ``cache_size``.
    """

    def __init__(self, options: OptionsLike = None, cache_size: int = 0):
        """
        Initialize the parser.

        Args:
            options: Default pagination options, a ``ParserOptions`` or a
                partial mapping (camelCase or snake_case keys)
            cache_size: Number of parse results to memoize; 0 disables caching
        """
        self.options = _coerce_options(options)
        self.cache_size = cache_size
        self._cached_parse = lru_cache(maxsize=cache_size)(_parse) if cache_size > 0 else None

    def parse(self, markdown_text: str, options: OptionsLike = None) -> List[SlideContent]:
        """
        Parse markdown text into slides.

        Args:
            markdown_text: Raw document (CRLF or LF)
            options: Overrides the parser's default options for this call

        Returns:
            Ordered list of slides; never raises on malformed input
        """
        if not markdown_text:
            return []

        effective = self.options if options is None else _coerce_options(options)

        if self._cached_parse is None:
            return _parse(markdown_text, effective)

        # Callers may mutate what they get back; keep the cached copy pristine
        return copy.deepcopy(self._cached_parse(markdown_text, effective))

    def parse_toc(self, markdown_text: str) -> List[TOCItem]:
        """Extract the table of contents from markdown text."""
        if not markdown_text:
            return []
        return parse_table_of_contents(markdown_text)

    def clear_cache(self) -> None:
        """Drop memoized parse results."""
        if self._cached_parse is not None:
            self._cached_parse.cache_clear()


def parse_markdown_to_slides(markdown_text: str, options: OptionsLike = None) -> List[SlideContent]:
    """
    Convenience function to parse markdown text into slides.

    Args:
        markdown_text: Raw document
        options: ``ParserOptions`` or a partial options mapping

    Returns:
        List of slides
    """
    return MarkdownSlideParser(options).parse(markdown_text)
