"""
Markup generator: one slide's Markdown body -> HTML fragment.

Code fences use a custom syntax::

    @@@ruby
    puts 1
    @@@

They are rewritten into ``<div class="code" rel="ruby">`` blocks *before*
Markdown conversion so markdown-it passes them through as raw HTML, then
each block is swapped for the external highlighter's output.
"""
import html
import logging
import re
from typing import List, Optional

from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from .config import DEFAULT_LEXER
from .highlighter import Highlighter, HighlightOutputError

logger = logging.getLogger(__name__)

FENCE_CLOSE = re.compile(r"(?:<p>)?@@@(?:</p>)?")
FENCE_OPEN = re.compile(r"(?:<p>)?@@@\s*([\w+]+)(?:</p>)?")

CODE_CLASSES = ("code", "highlight")


def _code_div(lexer: str, code: str) -> str:
    # Kept on one line so markdown-it's raw HTML block cannot end inside it
    escaped = html.escape(code, quote=False).replace("\n", "&#10;")
    return f'<div class="code" rel="{lexer}">{escaped}</div>'


def normalize_fences(text: str) -> str:
    """
    Turn ``@@@lexer`` ... ``@@@`` fences into sentinel ``div`` tags.

    A closed fence becomes a single line
    ``<div class="code" rel="<lexer>">...</div>`` holding the escaped source
    lines, so Markdown conversion never touches the code.  Fence lines may be
    wrapped in ``<p>...</p>``.  Nothing checks that fences are balanced: an
    unclosed ``@@@<lexer>`` becomes a bare opening tag and a stray ``@@@`` a
    bare ``</div>``.
    """
    lines = text.replace("\r\n", "\n").split("\n")
    out: List[str] = []

    index = 0
    while index < len(lines):
        line = lines[index]
        opening = FENCE_OPEN.fullmatch(line)
        if opening:
            close = next(
                (i for i in range(index + 1, len(lines)) if FENCE_CLOSE.fullmatch(lines[i])),
                None,
            )
            if close is not None:
                code = "".join(f"{code_line}\n" for code_line in lines[index + 1:close])
                out.append(_code_div(opening.group(1), code))
                index = close + 1
                continue
            out.append(f'<div class="code" rel="{opening.group(1)}">')
        elif FENCE_CLOSE.fullmatch(line):
            out.append("</div>")
        else:
            out.append(line)
        index += 1

    return "\n".join(out)


def _markdown() -> MarkdownIt:
    return MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


def merge_classes(*groups) -> List[str]:
    """Concatenate class lists, dropping repeats but keeping first-seen order."""
    merged: List[str] = []
    for group in groups:
        for name in group:
            if name and name not in merged:
                merged.append(name)
    return merged


class MarkupGenerator:
    """
    Converts Markdown (plus ``@@@`` code fences) to an HTML fragment.

    One instance handles one piece of Markdown; the converted markup and the
    parsed tree are computed on first use and cached on the instance.
    """

    def __init__(self, markdown: str, highlighter: Optional[Highlighter] = None):
        self.markdown = markdown
        self.highlighter = highlighter or Highlighter()
        self._markup = None
        self._soup = None

    @property
    def markup(self) -> str:
        """Markdown output with code fences turned into sentinel divs."""
        if self._markup is None:
            self._markup = _markdown().render(normalize_fences(self.markdown))
        return self._markup

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.markup, "html.parser")
        return self._soup

    def to_html(self) -> str:
        """Return the rendered fragment with every code block highlighted."""
        if not self.highlight():
            return self.markup
        return str(self.soup)

    def highlight(self) -> int:
        """
        Replace every ``div.code`` with highlighted HTML.

        Returns:
            Number of code blocks replaced

        Raises:
            HighlightOutputError: The highlighter returned no ``<div>``
        """
        # Materialise the selection so replaced nodes are never revisited
        blocks = self.soup.select("div.code")
        for div in blocks:
            lexer = div.get("rel") or DEFAULT_LEXER
            code = div.get_text()

            highlighted_html = self.highlighter.highlight(code, lexer)
            highlighted = BeautifulSoup(highlighted_html, "html.parser").find("div")
            if highlighted is None:
                raise HighlightOutputError(
                    f"Highlighter output for lexer '{lexer}' has no <div>: {highlighted_html[:80]!r}"
                )

            highlighted["class"] = merge_classes(highlighted.get("class", []), [lexer], CODE_CLASSES)
            div.replace_with(highlighted.extract())
            logger.debug("Highlighted %d chars of %s", len(code), lexer)

        return len(blocks)


def generate(markdown: str, highlighter: Optional[Highlighter] = None) -> str:
    """Convenience function: Markdown with ``@@@`` fences -> HTML fragment."""
    return MarkupGenerator(markdown, highlighter=highlighter).to_html()
