"""
Data models for slidedown.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .markup import MarkupGenerator

NOTES_TOKEN = "!NOTES"
NOTES_LINE = re.compile(r"^!NOTES\b")


def split_notes(text: str) -> Tuple[str, Optional[str]]:
    """
    Split *text* into ``(body, notes)`` at the first ``!NOTES`` line.

    Everything from that line to the end of *text* is the notes block; the
    token itself and surrounding whitespace are dropped.  ``notes`` is
    ``None`` when there is no notes line at all.
    """
    lines = text.splitlines(keepends=True)
    for index, line in enumerate(lines):
        if NOTES_LINE.match(line):
            block = "".join(lines[index:])
            return "".join(lines[:index]), block[len(NOTES_TOKEN):].strip()
    return text, None


@dataclass
class Slide:
    """
    One slide: Markdown body, CSS class tags and optional speaker notes.
    """
    text: str
    classes: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    def __post_init__(self):
        self.classes = list(self.classes)
        if self.notes is None:
            self.text, self.notes = split_notes(self.text)

    @property
    def class_name(self) -> str:
        """Classes joined for use in a ``class`` attribute."""
        return " ".join(self.classes)

    def has_notes(self) -> bool:
        return self.notes is not None

    def html(self, highlighter=None) -> str:
        """Render the body to an HTML fragment."""
        return MarkupGenerator(self.text, highlighter=highlighter).to_html()


# ----------------------------------------------------------------------
# Events produced by the deck scanner (see parser.scan)
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class SlideMarker:
    """A ``!SLIDE [classes]`` line."""
    classes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NotesBlock:
    """A ``!NOTES`` line plus every line up to the next marker."""
    text: str

    @property
    def notes(self) -> str:
        return self.text[len(NOTES_TOKEN):].strip()


@dataclass(frozen=True)
class ContentLine:
    """Any other line, line ending included."""
    text: str
