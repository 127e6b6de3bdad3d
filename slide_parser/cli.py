#!/usr/bin/env python3
"""
Command-line entry point: parse a markdown deck and print slides or TOC.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from .export import slide_outline, slides_to_json, toc_to_dicts
from .markdown_parser import MarkdownSlideParser
from .models import ParserOptions

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="slideparse", description="Parse a Markdown deck into slide JSON.")
    p.add_argument("markdown", type=Path, help="Markdown file to parse")
    p.add_argument("--output", "-o", type=Path, help="Write result here instead of stdout")
    p.add_argument("--toc", action="store_true", help="Emit the table of contents instead of slides")
    p.add_argument("--outline", action="store_true", help="Emit a plain-text outline instead of JSON")
    p.add_argument("--no-delimiter", action="store_true", help="Do not split slides on '---' lines")
    p.add_argument("--no-heading-pagination", action="store_true", help="Do not split slides on headings")
    p.add_argument("--min-heading-level", type=int, help="Smallest heading level that starts a new slide (1-6)")
    p.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    p.add_argument("--debug", action="store_true", help="Enable verbose logging")
    return p


def _resolve_options(args: argparse.Namespace) -> ParserOptions:
    # Environment supplies defaults, explicit flags win
    base = ParserOptions.from_env()
    return ParserOptions(
        use_delimiter=base.use_delimiter and not args.no_delimiter,
        use_heading_pagination=base.use_heading_pagination and not args.no_heading_pagination,
        min_heading_level=base.min_heading_level if args.min_heading_level is None else args.min_heading_level,
    )


def main(argv=None) -> int:
    """Parse arguments, run the parser and write the result."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s  %(message)s",
        force=True,
    )

    md_path: Path = args.markdown
    if not md_path.exists():
        logger.error(f"Markdown file '{md_path}' not found")
        return 1

    markdown_text = md_path.read_text(encoding="utf-8")
    parser = MarkdownSlideParser(_resolve_options(args))

    if args.toc:
        result = json.dumps(toc_to_dicts(parser.parse_toc(markdown_text)), indent=args.indent, ensure_ascii=False)
    else:
        slides = parser.parse(markdown_text)
        logger.debug(f"Parsed {len(slides)} slides from {md_path}")
        result = slide_outline(slides) if args.outline else slides_to_json(slides, indent=args.indent)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result + "\n", encoding="utf-8")
        logger.info("✅ Wrote %s", args.output)
    else:
        sys.stdout.write(result + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(main())
