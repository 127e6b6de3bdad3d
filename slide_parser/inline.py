"""
Line-ending normalization and inline Markdown formatting.

``format_inline`` emits a small, fixed HTML vocabulary:

    <img>, <span class="math-inline">, <strong>, <em>, <del>, <code>,
    <a>, <input type="checkbox">

Exporters that need plain text should run element content through
``strip_inline_markup`` rather than rolling their own tag removal.
"""
import re
from html import unescape

from bs4 import BeautifulSoup

# Order matters: later patterns must not re-match the output of earlier ones.
_INLINE_RULES = [
    (re.compile(r'!\[([^\]]*)\]\(([^)\s]+)\)'), r'<img src="\2" alt="\1" />'),
    (re.compile(r'\$([^$]+)\$'), r'<span class="math-inline">\1</span>'),
    (re.compile(r'\*\*(.+?)\*\*'), r'<strong>\1</strong>'),
    (re.compile(r'\*(.+?)\*'), r'<em>\1</em>'),
    (re.compile(r'~~(.+?)~~'), r'<del>\1</del>'),
    (re.compile(r'`([^`]+)`'), r'<code>\1</code>'),
    (re.compile(r'\[([^\]]+)\]\(([^)\s]+)\)'), r'<a href="\2">\1</a>'),
    (re.compile(r'^\[ \] '), '<input type="checkbox" disabled /> '),
    (re.compile(r'^\[[xX]\] '), '<input type="checkbox" checked disabled /> '),
]


def normalize_line_endings(text: str) -> str:
    """Replace CRLF with LF. Nothing else is touched."""
    return text.replace('\r\n', '\n')


def format_inline(text: str) -> str:
    """
    Apply inline Markdown substitutions to a single line.

    No HTML escaping is done; the caller owns the trust boundary.

    Args:
        text: Raw line (already stripped of any block marker)

    Returns:
        Line with inline markup converted to HTML
    """
    for pattern, replacement in _INLINE_RULES:
        text = pattern.sub(replacement, text)
    return text


def strip_inline_markup(html: str) -> str:
    """
    Reduce ``format_inline`` output back to readable plain text.

    Images become their alt text, checkboxes become ``[ ]`` / ``[x]``
    markers and inline math keeps its LaTeX source.
    """
    if not html or '<' not in html:
        return unescape(html or '')

    soup = BeautifulSoup(html, 'html.parser')

    for img in soup.find_all('img'):
        img.replace_with(img.get('alt', ''))

    for box in soup.find_all('input'):
        if box.get('type') == 'checkbox':
            box.replace_with('[x]' if box.has_attr('checked') else '[ ]')
        else:
            box.decompose()

    return soup.get_text()
