"""Configuration values for slidedown.

Everything here is resolved once, at import time, from the environment and
then treated as read-only.  Use :func:`dataclasses.replace` to derive a
variant (e.g. a different binary in tests) instead of mutating the default.
"""
from __future__ import annotations

import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional, Tuple

# Fallback when PYGMENTIZE_BIN is unset and nothing is found on PATH
FALLBACK_PYGMENTIZE_BIN = "/usr/local/bin/pygmentize"

DEFAULT_LEXER = "text"
DEFAULT_FORMAT = "html"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class HighlighterConfig:
    """How to call the external syntax highlighter.

    Attributes:
        bin: Path of the highlighter executable (``pygmentize`` compatible).
        lexer: Lexer used when the caller does not name one.
        format: Output formatter passed with ``-f``.
        timeout: Seconds to wait for the process before giving up.
        options: Extra ``(flag, value)`` pairs appended after ``-l``/``-f``.
            A mapping is accepted and stored as a tuple of pairs.
    """
    bin: str = FALLBACK_PYGMENTIZE_BIN
    lexer: str = DEFAULT_LEXER
    format: str = DEFAULT_FORMAT
    timeout: Optional[float] = DEFAULT_TIMEOUT
    options: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        options = self.options
        if isinstance(options, Mapping):
            options = options.items()
        object.__setattr__(self, "options", tuple((str(flag), str(value)) for flag, value in options))

    @classmethod
    def from_env(cls, environ=None) -> "HighlighterConfig":
        """Build a config from ``PYGMENTIZE_BIN`` / ``SLIDEDOWN_HIGHLIGHT_TIMEOUT``."""
        environ = os.environ if environ is None else environ

        bin_path = environ.get("PYGMENTIZE_BIN") or shutil.which("pygmentize") or FALLBACK_PYGMENTIZE_BIN

        raw_timeout = environ.get("SLIDEDOWN_HIGHLIGHT_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"SLIDEDOWN_HIGHLIGHT_TIMEOUT must be a number, got {raw_timeout!r}") from None
            # 0 disables the timeout
            timeout = timeout or None
        else:
            timeout = DEFAULT_TIMEOUT

        return cls(bin=bin_path, timeout=timeout)


DEFAULT_HIGHLIGHTER_CONFIG = HighlighterConfig.from_env()
