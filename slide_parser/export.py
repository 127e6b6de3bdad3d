"""
Helpers for consumers of parsed slides: dict / JSON serialization and
plain-text views for exporters that cannot render HTML.
"""
import json
import re
from html import unescape
from typing import Any, Dict, List, Sequence

from markdown_it import MarkdownIt
from mdit_py_plugins.dollarmath import dollarmath_plugin

from .inline import strip_inline_markup
from .models import ElementType, MathContent, SlideContent, SlideElement, TOCItem

# Element types whose content is format_inline() output
_INLINE_TYPES = {
    ElementType.TITLE,
    ElementType.SUBTITLE,
    ElementType.MARKDOWN,
}

_notes_renderer = None


def _get_notes_renderer() -> MarkdownIt:
    global _notes_renderer

    if _notes_renderer is None:
        md = MarkdownIt('commonmark', {'html': True})
        md.enable(['table', 'strikethrough'])
        _notes_renderer = md.use(
            dollarmath_plugin,
            allow_space=False,
            allow_digits=False,
            double_inline=False,
        )
    return _notes_renderer


def slides_to_dicts(slides: Sequence[SlideContent]) -> List[Dict[str, Any]]:
    """Convert slides to the camelCase dict shape renderers consume."""
    return [slide.to_dict() for slide in slides]


def toc_to_dicts(toc: Sequence[TOCItem]) -> List[Dict[str, Any]]:
    return [item.to_dict() for item in toc]


def slides_to_json(slides: Sequence[SlideContent], indent: int = 2) -> str:
    """Serialize slides to JSON (UTF-8 safe, non-ASCII kept as-is)."""
    return json.dumps(slides_to_dicts(slides), indent=indent, ensure_ascii=False)


def element_plain_text(element: SlideElement) -> str:
    """
    Plain-text rendering of one element.

    Inline HTML produced by the formatter is stripped; math yields its
    LaTeX source; media tokens yield their argument.
    """
    content = element.content

    if isinstance(content, MathContent):
        return content.latex
    if isinstance(content, list):
        return '\n'.join(strip_inline_markup(item) for item in content)
    if element.type in _INLINE_TYPES:
        return strip_inline_markup(content)
    return content


def notes_to_text(notes: str) -> str:
    """
    Render speaker notes to plain text, keeping formatting hints.

    Notes go through markdown-it so lists, emphasis and links are
    normalized, then the HTML is mapped back to lightweight markers
    (``**bold**``, ``*italic*``, ``text (url)``) suitable for PPTX / DOCX
    notes panes.

    Args:
        notes: Raw notes text collected after a ``### notes`` marker

    Returns:
        Plain text, entities decoded and blank lines collapsed
    """
    if not notes or not notes.strip():
        return ""

    text = _get_notes_renderer().render(notes)

    text = re.sub(r'<strong[^>]*>(.*?)</strong>', r'**\1**', text, flags=re.DOTALL)
    text = re.sub(r'<em[^>]*>(.*?)</em>', r'*\1*', text, flags=re.DOTALL)
    text = re.sub(r'<code[^>]*>(.*?)</code>', r'`\1`', text, flags=re.DOTALL)
    text = re.sub(r'<(?:del|s)[^>]*>(.*?)</(?:del|s)>', r'~~\1~~', text, flags=re.DOTALL)
    text = re.sub(r'<a[^>]*href="([^"]*)"[^>]*>(.*?)</a>', r'\2 (\1)', text, flags=re.DOTALL)
    text = re.sub(r'<li[^>]*>', '- ', text)

    # Remove remaining HTML tags
    text = re.sub(r'<[^>]+>', '', text)
    text = unescape(text)

    text = re.sub(r'\n\s*\n', '\n\n', text)
    return text.strip()


def slide_outline(slides: Sequence[SlideContent]) -> str:
    """
    Text outline of a deck: one numbered line per slide plus its
    subtitles and bullets, indented.
    """
    out = []
    for number, slide in enumerate(slides, 1):
        title = slide.title
        heading = element_plain_text(title) if title else f"Slide {number}"
        out.append(f"{number}. {heading}")

        for element in slide.elements:
            if element is title:
                continue
            if element.type == ElementType.SUBTITLE:
                out.append(f"   {element_plain_text(element)}")
            elif element.type == ElementType.BULLETS:
                for item in element_plain_text(element).split('\n'):
                    out.append(f"     - {item}")
    return '\n'.join(out)
