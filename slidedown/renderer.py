"""
Template renderer: binds a :class:`~slidedown.deck.Deck` into a Jinja2 template.

Templates are ``<name>.html.j2`` files looked up in one of three places:

1. ``name`` itself when it is an absolute path,
2. the current working directory when ``local`` is set,
3. the ``templates`` folder bundled with this package.
"""
import logging
import os
from pathlib import Path
from typing import Callable

from jinja2 import Environment

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html.j2"
BUNDLED_TEMPLATES = Path(__file__).parent / "templates"


def is_absolute_path(name: str) -> bool:
    """True if *name* is already in its own normalised absolute form."""
    return name == os.path.abspath(name)


def resolve_template(name: str = "default", local: bool = False) -> Path:
    """
    Find the template file for *name*.

    Raises:
        FileNotFoundError: If the template file doesn't exist
    """
    if is_absolute_path(name):
        path = Path(f"{name}{TEMPLATE_SUFFIX}")
    elif local:
        path = Path.cwd() / f"{name}{TEMPLATE_SUFFIX}"
    else:
        path = BUNDLED_TEMPLATES / f"{name}{TEMPLATE_SUFFIX}"

    if not path.is_file():
        raise FileNotFoundError(f"Template '{name}' not found at {path}")
    return path


def _reader(directory: Path) -> Callable[[str], str]:
    def read(path: str) -> str:
        """Read a file relative to the template's folder."""
        return (directory / path).read_text(encoding="utf-8")
    return read


def render(deck, name: str = "default", local: bool = False) -> str:
    """
    Render *deck* through template *name*.

    The template sees ``deck``, ``slides``, ``classes``, ``title``,
    ``stylesheets``, ``javascripts`` and a ``read(path)`` helper.  Slide HTML
    is inserted verbatim, so autoescaping is off.
    """
    path = resolve_template(name, local=local)
    logger.debug("Rendering %d slides with template %s", len(deck.slides), path)

    env = Environment(autoescape=False, keep_trailing_newline=True)
    template = env.from_string(path.read_text(encoding="utf-8"))

    return template.render(
        deck=deck,
        slides=deck.slides,
        classes=deck.classes,
        title=deck.title,
        stylesheets=deck.stylesheets,
        javascripts=deck.javascripts,
        read=_reader(path.parent),
    )
