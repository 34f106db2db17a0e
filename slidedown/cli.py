#!/usr/bin/env python3
"""
Command-line entry point: render a slidedown document to stdout.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .deck import Deck, DEFAULT_TITLE
from .highlighter import HighlighterError

logger = logging.getLogger(__name__)

USAGE = """\
slidedown takes a Markdown file with !SLIDE markers as its only required
argument and writes the slideshow HTML to standard output.

Options:
  -t, --template TEMPLATE  template to render with (default: "default", which
                           inlines stylesheets and javascripts). Accepts a
                           bundled template name, or an absolute path
                           (without the .html.j2 suffix) for templates
                           outside the bundled templates folder.
  -l, --local              look TEMPLATE up in the current directory.
      --title TITLE        document title (default: "Slides").
      --debug              verbose logging on stderr.
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="slidedown", description="Convert Markdown with !SLIDE markers to an HTML slideshow.")
    p.add_argument("source", type=Path, help="Markdown file to convert")
    p.add_argument("--template", "-t", default="default", help="Template name or absolute path (default: default)")
    p.add_argument("--local", "-l", action="store_true", help="Resolve the template in the current directory")
    p.add_argument("--title", default=DEFAULT_TITLE, help="Document title")
    p.add_argument("--debug", action="store_true", help="Enable verbose logging")
    return p


def run(argv: Optional[List[str]] = None, stdout=None) -> int:
    """Run the command with *argv*; return the process exit status."""
    argv = sys.argv[1:] if argv is None else argv
    stdout = stdout or sys.stdout

    if not argv:
        stdout.write(USAGE)
        return 0

    args = build_parser().parse_args(argv)
    if args.debug:
        logging.getLogger("slidedown").setLevel(logging.DEBUG)

    source: Path = args.source
    if not source.is_file():
        logger.error("Markdown file '%s' not found", source)
        return 1

    try:
        deck = Deck.from_file(source, title=args.title)
        output = deck.render(args.template, local=args.local)
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    except HighlighterError as exc:
        logger.error("Highlighting failed: %s", exc)
        return 1

    stdout.write(output)
    if not output.endswith("\n"):
        stdout.write("\n")
    return 0


def main():
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
