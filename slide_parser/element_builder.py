"""
Turn one slide block into a :class:`SlideContent`.

Each non-blank line is matched against an ordered rule table; the first
rule whose predicate accepts the line consumes it (and, for multi-line
constructs, the lines after it) and returns the index of the last line it
used. Nothing in here raises on malformed input: unterminated constructs
run to the end of the block and unparseable micro-syntax is dropped.
"""
import logging
import re
from typing import Callable, List, Optional, Sequence, Tuple

from .auto_animate import parse_auto_animate
from .headings import FENCE_MARKER, heading_font_size, is_notes_marker, match_heading
from .inline import format_inline
from .models import ElementType, MathContent, SlideContent, SlideElement

logger = logging.getLogger(__name__)

LAYOUT_PATTERN = re.compile(r'^layout:\s*([a-z-]+)')
ORDERED_ITEM_PATTERN = re.compile(r'^(\d+)\.\s+(.*)$')
UNORDERED_PREFIXES = ('- ', '* ')
QUOTE_PREFIX = '> '
TABLE_MIN_LINES = 3
HTML_MARKER = '!html('
MATH_MARKER = '$$'

# Single-line media tokens: prefix -> (element type, argument pattern)
MEDIA_TOKENS = {
    '!icon(': (ElementType.ICON, re.compile(r'!icon\(([^)]+)\)')),
    '!image(': (ElementType.IMAGE, re.compile(r'!image\(([^)]+)\)')),
    '!video(': (ElementType.VIDEO, re.compile(r'!video\(([^)]+)\)')),
    '!audio(': (ElementType.AUDIO, re.compile(r'!audio\(([^)]+)\)')),
}

# Argument-less tokens
BARE_TOKENS = {
    '!grid': ElementType.GRID,
    '!vector': ElementType.VECTOR,
}


class _SlideBuilder:
    """Mutable state for a single block; never shared between blocks."""

    def __init__(self, lines: Sequence[str], slide_index: int):
        self.lines = lines
        self.slide_index = slide_index
        self.elements: List[SlideElement] = []
        self.click_state = 0
        self.notes: List[str] = []
        self.in_notes = False
        self.layout = "auto"

        # (predicate on trimmed line, consumer) in priority order
        self.rules: List[Tuple[Callable[[str], bool], Callable[[int, str], int]]] = [
            (lambda s: LAYOUT_PATTERN.match(s) is not None, self._layout),
            (is_notes_marker, self._notes_marker),
            (lambda s: match_heading(s) is not None, self._heading),
            (self._is_list_item, self._list_item),
            (lambda s: s.startswith(FENCE_MARKER), self._fenced_code),
            (lambda s: s.startswith(QUOTE_PREFIX), self._blockquote),
            (lambda s: s.startswith('|'), self._table),
            (lambda s: s.startswith(tuple(MEDIA_TOKENS)), self._media),
            (lambda s: s.startswith(tuple(BARE_TOKENS)), self._bare_token),
            (lambda s: s.startswith(HTML_MARKER), self._html),
            (lambda s: s.startswith(MATH_MARKER), self._math),
            (lambda s: True, self._markdown),
        ]

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def build(self) -> Optional[SlideContent]:
        i = 0
        while i < len(self.lines):
            raw = self.lines[i]

            if self.in_notes:
                self.notes.append(raw)
                i += 1
                continue

            line = raw.strip()
            if not line:
                i += 1
                continue

            for predicate, consume in self.rules:
                if predicate(line):
                    i = consume(i, line)
                    break
            i += 1

        if not self.elements:
            return None

        return SlideContent(
            id=f"slide-{self.slide_index}",
            elements=self.elements,
            notes='\n'.join(self.notes).strip(),
            layout=self.layout,
        )

    def _next_click(self) -> int:
        click = self.click_state
        self.click_state += 1
        return click

    def _emit(self, line_index: int, element_type: str, content, click_state: Optional[int] = None,
              **extra) -> SlideElement:
        element = SlideElement(
            id=f"s{self.slide_index}-e{line_index}",
            type=element_type,
            content=content,
            click_state=self._next_click() if click_state is None else click_state,
            **extra,
        )
        element.auto_animate = parse_auto_animate(self.lines[line_index])
        self.elements.append(element)
        return element

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def _layout(self, i: int, line: str) -> int:
        self.layout = LAYOUT_PATTERN.match(line).group(1)
        return i

    def _notes_marker(self, i: int, line: str) -> int:
        self.in_notes = True
        return i

    # ------------------------------------------------------------------
    # Single-line elements
    # ------------------------------------------------------------------

    def _heading(self, i: int, line: str) -> int:
        heading = match_heading(line)
        content = format_inline(heading.display_text)

        if heading.level == 1:
            self._emit(i, ElementType.TITLE, content, click_state=0)
            return i

        style = None
        font_size = heading_font_size(heading.level)
        if font_size:
            style = {"fontSize": font_size, "marginTop": "10px"}
        self._emit(i, ElementType.SUBTITLE, content, style=style)
        return i

    @staticmethod
    def _is_list_item(line: str) -> bool:
        return line.startswith(UNORDERED_PREFIXES) or ORDERED_ITEM_PATTERN.match(line) is not None

    def _list_item(self, i: int, line: str) -> int:
        if line.startswith(UNORDERED_PREFIXES):
            self._emit(i, ElementType.BULLETS, [format_inline(line[2:])], list_type="unordered")
            return i

        match = ORDERED_ITEM_PATTERN.match(line)
        self._emit(
            i,
            ElementType.BULLETS,
            [format_inline(match.group(2))],
            list_type="ordered",
            list_start=int(match.group(1)),
        )
        return i

    def _media(self, i: int, line: str) -> int:
        for prefix, (element_type, pattern) in MEDIA_TOKENS.items():
            if line.startswith(prefix):
                match = pattern.search(line)
                if match:
                    self._emit(i, element_type, match.group(1))
                else:
                    logger.debug("Dropping malformed %s token on line %d: %r", element_type, i, line)
                break
        return i

    def _bare_token(self, i: int, line: str) -> int:
        for prefix, element_type in BARE_TOKENS.items():
            if line.startswith(prefix):
                self._emit(i, element_type, "")
                break
        return i

    def _markdown(self, i: int, line: str) -> int:
        self._emit(i, ElementType.MARKDOWN, format_inline(line))
        return i

    # ------------------------------------------------------------------
    # Multi-line constructs (bounded lookahead over self.lines)
    # ------------------------------------------------------------------

    def _fenced_code(self, i: int, line: str) -> int:
        language = line[len(FENCE_MARKER):].strip() or None

        j = i + 1
        while j < len(self.lines) and not self.lines[j].strip().startswith(FENCE_MARKER):
            j += 1
        if j >= len(self.lines):
            logger.debug("Unterminated code fence at line %d, consuming to end of block", i)

        code = '\n'.join(self.lines[i + 1:j]).strip()
        self._emit(i, ElementType.CODE, code, language=language)
        return j

    def _blockquote(self, i: int, line: str) -> int:
        quoted = []
        j = i
        while j < len(self.lines) and self.lines[j].strip().startswith(QUOTE_PREFIX):
            quoted.append(self.lines[j].strip()[len(QUOTE_PREFIX):])
            j += 1

        self._emit(i, ElementType.QUOTE, '\n'.join(quoted))
        return j - 1

    def _table(self, i: int, line: str) -> int:
        rows = []
        j = i
        while j < len(self.lines):
            candidate = self.lines[j]
            if not candidate.strip().startswith(('|', '+-')):
                break
            rows.append(candidate)
            j += 1

        if len(rows) >= TABLE_MIN_LINES:
            self._emit(i, ElementType.TABLE, '\n'.join(rows))
            return j - 1

        # Too short for a table: render the first row as text, rescan the rest
        logger.debug("Table candidate at line %d has %d rows, treating as text", i, len(rows))
        self._emit(i, ElementType.MARKDOWN, format_inline(line))
        return i

    def _html(self, i: int, line: str) -> int:
        parts = []
        j = i
        while j < len(self.lines):
            segment = self.lines[j]
            if j == i:
                segment = segment[segment.index(HTML_MARKER) + len(HTML_MARKER):]

            trimmed = segment.rstrip()
            if trimmed.endswith(')'):
                parts.append(trimmed[:-1])
                break
            parts.append(segment)
            j += 1
        else:
            logger.debug("Unterminated !html( at line %d, consuming to end of block", i)
            j = len(self.lines) - 1

        self._emit(i, ElementType.HTML, '\n'.join(parts))
        return j

    def _math(self, i: int, line: str) -> int:
        parts = []
        j = i
        while j < len(self.lines):
            current = self.lines[j]
            if j == i:
                current = current[current.index(MATH_MARKER) + len(MATH_MARKER):]

            end = current.find(MATH_MARKER)
            if end != -1:
                parts.append(current[:end])
                break
            parts.append(current)
            j += 1
        else:
            logger.debug("Unterminated $$ at line %d, consuming to end of block", i)
            j = len(self.lines) - 1

        latex = '\n'.join(parts).strip()
        self._emit(i, ElementType.MATH, MathContent(latex=latex, display_mode=True))
        return j


def build_slide(block: Sequence[str], slide_index: int) -> Optional[SlideContent]:
    """
    Classify the lines of one slide block into elements.

    Args:
        block: Raw lines of the block, as produced by the segmenter
        slide_index: Position of the block in the document, used for ids

    Returns:
        The slide, or ``None`` when the block produced no elements
    """
    return _SlideBuilder(list(block), slide_index).build()
