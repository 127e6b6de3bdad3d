"""
Heading detection shared by the segmenter and the element builder.
"""
import re
from typing import NamedTuple, Optional

# The optional non-'#' prefix lets decorated headings like "🚀 ## Launch" count.
HEADING_PATTERN = re.compile(r'^([^#]*?)(#{1,6})\s+')
HEADING_LINE_PATTERN = re.compile(r'^([^#]*?)(#{1,6})\s+(.+)$')
INLINE_CODE_SPAN = re.compile(r'`[^`]*`')
FENCE_MARKER = '```'
NOTES_PATTERN = re.compile(r'^###\s+notes:?$', re.IGNORECASE)


class Heading(NamedTuple):
    level: int
    prefix: str
    text: str

    @property
    def display_text(self) -> str:
        """Prefix and heading text joined, e.g. ``"🚀 Launch"``."""
        return f"{self.prefix}{self.text}".strip()


def is_fence_line(line: str) -> bool:
    """True for lines that open or close a fenced code block."""
    return line.strip().startswith(FENCE_MARKER)


def _inside_inline_code(line: str, match) -> bool:
    # Textual containment only: a line with several similar spans can misfire.
    marker = match.group(0)[len(match.group(1)):]
    return any(marker in span for span in INLINE_CODE_SPAN.findall(line))


def heading_level(line: str) -> Optional[int]:
    """
    Return the heading level of a trimmed line, or ``None``.

    Headings whose marker sits inside an inline code span are rejected.
    """
    match = HEADING_PATTERN.match(line)
    if match is None or _inside_inline_code(line, match):
        return None
    return len(match.group(2))


def match_heading(line: str) -> Optional[Heading]:
    """Parse a trimmed line into a :class:`Heading`, or return ``None``."""
    if heading_level(line) is None:
        return None
    match = HEADING_LINE_PATTERN.match(line)
    if match is None:
        return None
    return Heading(len(match.group(2)), match.group(1), match.group(3))


def heading_font_size(level: int) -> Optional[str]:
    """Font-size override for deep headings: h3 = 24px, -2px per level, floor 18px."""
    if level < 3:
        return None
    return f"{max(18, 24 - 2 * (level - 3))}px"


def is_notes_marker(line: str) -> bool:
    """True for the ``### notes`` / ``### Notes:`` speaker-notes marker."""
    return NOTES_PATTERN.match(line) is not None
