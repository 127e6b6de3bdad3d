"""Slide Parser – top-level package

Exposes the public API (`MarkdownSlideParser`, etc.) **and** sets up a minimal
logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDEPARSE_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise WARNING.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDEPARSE_LOG_LEVEL", "WARNING").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .markdown_parser import MarkdownSlideParser, parse_markdown_to_slides  # noqa: E402
from .toc import parse_table_of_contents  # noqa: E402
from .inline import format_inline, normalize_line_endings, strip_inline_markup  # noqa: E402
from .auto_animate import parse_auto_animate  # noqa: E402
from .models import (  # noqa: E402
    AutoAnimate,
    ElementType,
    MathContent,
    ParserOptions,
    SlideContent,
    SlideElement,
    TOCItem,
)

__all__ = [
    "MarkdownSlideParser",
    "parse_markdown_to_slides",
    "parse_table_of_contents",
    "format_inline",
    "normalize_line_endings",
    "strip_inline_markup",
    "parse_auto_animate",
    "AutoAnimate",
    "ElementType",
    "MathContent",
    "ParserOptions",
    "SlideContent",
    "SlideElement",
    "TOCItem",
]
