"""
Table-of-contents extraction.

Runs over the whole document, independent of slide segmentation. Fenced
code is skipped using the same fence rule as the segmenter so a ``#``
comment inside a code sample never shows up as a heading.
"""
import logging
from typing import List

from .headings import HEADING_LINE_PATTERN, is_fence_line
from .inline import normalize_line_endings
from .models import TOCItem

logger = logging.getLogger(__name__)


def parse_table_of_contents(text: str) -> List[TOCItem]:
    """
    Collect every heading in document order.

    Args:
        text: Raw document; CRLF line endings are accepted

    Returns:
        Flat list of :class:`TOCItem`, ``line_index`` being the 0-based line
        in the normalized document
    """
    toc: List[TOCItem] = []
    in_code_fence = False

    for index, line in enumerate(normalize_line_endings(text).split('\n')):
        if is_fence_line(line):
            in_code_fence = not in_code_fence
            continue
        if in_code_fence:
            continue

        match = HEADING_LINE_PATTERN.match(line.strip())
        if match is None:
            continue

        toc.append(TOCItem(
            id=f"toc-{index}",
            text=f"{match.group(1)}{match.group(3)}".strip(),
            level=len(match.group(2)),
            line_index=index,
        ))

    logger.debug("Found %d TOC entries", len(toc))
    return toc
