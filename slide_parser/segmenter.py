"""
Split a normalized document into slide blocks.

Two independent signals create boundaries:

1. Delimiter lines (``---``), which always cut.
2. Headings at or above ``min_heading_level``, which cut only when the
   current block already holds some content, so a run of headings with
   nothing between them stays on one slide.

Fenced code is opaque to both signals.
"""
import logging
import re
from typing import List

from .headings import heading_level, is_fence_line, is_notes_marker
from .models import ParserOptions

logger = logging.getLogger(__name__)

DELIMITER_PATTERN = re.compile(r'^---\s*$')


def split_slide_blocks(text: str, options: ParserOptions = None) -> List[List[str]]:
    """
    Split normalized text into slide blocks.

    Args:
        text: Document with LF line endings
        options: Pagination options (defaults apply when omitted)

    Returns:
        Ordered list of blocks, each a list of raw lines. Blocks with only
        blank lines are dropped.
    """
    options = options or ParserOptions()

    blocks: List[List[str]] = []
    current: List[str] = []
    has_content = False
    in_code_fence = False

    def flush():
        nonlocal current, has_content
        if any(line.strip() for line in current):
            blocks.append(current)
        current = []
        has_content = False

    for line in text.split('\n'):
        trimmed = line.strip()

        if is_fence_line(trimmed):
            in_code_fence = not in_code_fence
            current.append(line)
            has_content = True
            continue

        if in_code_fence:
            current.append(line)
            continue

        if options.use_delimiter and DELIMITER_PATTERN.match(trimmed):
            flush()
            continue

        # The speaker-notes marker belongs to the slide above it
        if options.use_heading_pagination and not is_notes_marker(trimmed):
            level = heading_level(trimmed)
            if level is not None and level >= options.min_heading_level:
                if has_content:
                    flush()
                current.append(line)
                continue

        current.append(line)
        if trimmed:
            has_content = True

    flush()

    logger.debug("Segmented document into %d slide blocks", len(blocks))
    return blocks
