"""Slidedown – top-level package

Turns a single Markdown document with ``!SLIDE`` markers into a
self-contained HTML slideshow.  Exposes the public API (`Deck`, `Slide`,
etc.) **and** sets up a minimal logging configuration so that every
sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `SLIDEDOWN_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise INFO.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("SLIDEDOWN_LOG_LEVEL", "INFO").upper()
if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

# Public API re-exports ------------------------------------------------
from .config import HighlighterConfig, DEFAULT_HIGHLIGHTER_CONFIG  # noqa: E402
from .highlighter import (  # noqa: E402
    Highlighter,
    HighlighterError,
    HighlighterUnavailable,
    HighlighterFailed,
    HighlighterTimeout,
    HighlightOutputError,
)
from .models import Slide  # noqa: E402
from .parser import parse  # noqa: E402
from .markup import MarkupGenerator  # noqa: E402
from .deck import Deck  # noqa: E402

__all__ = [
    "Deck",
    "Slide",
    "parse",
    "MarkupGenerator",
    "Highlighter",
    "HighlighterConfig",
    "DEFAULT_HIGHLIGHTER_CONFIG",
    "HighlighterError",
    "HighlighterUnavailable",
    "HighlighterFailed",
    "HighlighterTimeout",
    "HighlightOutputError",
]
