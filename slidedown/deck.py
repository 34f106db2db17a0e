"""
Deck: the whole parsed document plus the deck-level settings a template needs.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from . import renderer
from .assets import find_javascripts, find_stylesheets
from .highlighter import Highlighter
from .models import Slide
from .parser import parse

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Slides"


class Deck:
    """
    A slideshow built from one slidedown document.

    Slides are parsed on first access and cached; nothing else changes after
    construction.
    """

    def __init__(
        self,
        raw: str,
        *,
        title: str = DEFAULT_TITLE,
        stylesheets: Optional[List[str]] = None,
        javascripts: Optional[List[str]] = None,
        highlighter: Optional[Highlighter] = None,
        asset_dir: Union[str, Path, None] = None,
    ):
        """Create a new :class:`Deck`.

        Parameters
        ----------
        raw
            Full document text.
        title
            Document title exposed to templates.
        stylesheets, javascripts
            Contents to inline.  When omitted they are discovered from
            ``*.css`` / ``*.js`` files in *asset_dir*.
        highlighter
            Highlighter used for ``@@@`` code blocks.  Defaults to one built
            from :data:`~slidedown.config.DEFAULT_HIGHLIGHTER_CONFIG`.
        asset_dir
            Folder searched for stylesheets/javascripts; defaults to the
            current working directory.
        """
        self.raw = raw
        self.title = title
        self.highlighter = highlighter or Highlighter()

        asset_dir = Path(asset_dir) if asset_dir else Path.cwd()
        self.stylesheets = list(stylesheets) if stylesheets is not None else find_stylesheets(asset_dir)
        self.javascripts = list(javascripts) if javascripts is not None else find_javascripts(asset_dir)

        self._slides = None

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs) -> "Deck":
        """Read *path* and build a deck from it.

        Raises:
            FileNotFoundError: If *path* does not exist
        """
        text = Path(path).read_text(encoding="utf-8")
        return cls(text, **kwargs)

    @property
    def slides(self) -> List[Slide]:
        if self._slides is None:
            self._slides = parse(self.raw)
            logger.debug("Deck '%s' has %d slides", self.title, len(self._slides))
        return self._slides

    @property
    def classes(self) -> List[List[str]]:
        """Class tags of every slide, in slide order."""
        return [slide.classes for slide in self.slides]

    def slide_html(self, slide: Slide) -> str:
        """Render one slide with this deck's highlighter."""
        return slide.html(highlighter=self.highlighter)

    def render(self, template: str = "default", local: bool = False) -> str:
        """Render the whole deck through *template*."""
        return renderer.render(self, template, local=local)

    def __len__(self):
        return len(self.slides)
