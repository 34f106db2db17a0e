"""
Deck parser: splits a slidedown document into ordered :class:`Slide` records.

Grammar (line based):

- ``!SLIDE`` optionally followed by whitespace separated lowercase class
  names starts a new slide.  A document that does not open with a marker
  gets one synthesized in front of it.
- ``!NOTES`` starts a speaker-notes block that runs up to (not including)
  the next marker line, or to the end of the document.  The notes belong to
  the slide whose marker precedes them.
- Every other line is slide content.
"""
import logging
import re
from typing import Iterator, List, Optional, Union

from .models import ContentLine, NotesBlock, Slide, SlideMarker, NOTES_LINE

logger = logging.getLogger(__name__)

MARKER_LINE = re.compile(r"^!SLIDE(?:[ \t]+([a-z \t]*))?[ \t]*$")

Event = Union[SlideMarker, NotesBlock, ContentLine]


def match_marker(line: str) -> Optional[SlideMarker]:
    """Return a :class:`SlideMarker` if *line* is a slide marker line."""
    match = MARKER_LINE.match(line.rstrip("\r\n"))
    if not match:
        return None
    return SlideMarker(tuple((match.group(1) or "").split()))


def scan(raw: str) -> Iterator[Event]:
    """Tokenize *raw* into marker, notes and content events in one pass."""
    lines = raw.splitlines(keepends=True)

    if not lines or match_marker(lines[0]) is None:
        yield SlideMarker()

    notes: Optional[List[str]] = None
    for line in lines:
        marker = match_marker(line)
        if marker is not None:
            if notes is not None:
                yield NotesBlock("".join(notes))
                notes = None
            yield marker
        elif notes is not None:
            notes.append(line)
        elif NOTES_LINE.match(line):
            notes = [line]
        else:
            yield ContentLine(line)

    if notes is not None:
        yield NotesBlock("".join(notes))


def parse(raw: str) -> List[Slide]:
    """
    Parse a whole document into slides.

    Args:
        raw: Document text

    Returns:
        One :class:`Slide` per marker (synthesized marker included), in
        document order
    """
    slides: List[Slide] = []
    buffer: Optional[List[str]] = None
    pending_classes: List[str] = []
    pending_notes: Optional[str] = None

    def flush():
        if buffer is not None:
            slides.append(Slide("".join(buffer), pending_classes, pending_notes))

    for event in scan(raw):
        if isinstance(event, SlideMarker):
            flush()
            buffer = []
            pending_classes = list(event.classes)
            pending_notes = None
        elif isinstance(event, NotesBlock):
            pending_notes = event.notes
        else:
            buffer.append(event.text)
    flush()

    logger.debug("Parsed %d slides", len(slides))
    return slides


def count_markers(raw: str) -> int:
    """Number of slides :func:`parse` will produce for *raw*."""
    return sum(1 for event in scan(raw) if isinstance(event, SlideMarker))
