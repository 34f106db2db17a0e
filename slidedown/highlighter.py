#!/usr/bin/env python3
"""
Adapter around an external, ``pygmentize``-compatible syntax highlighter.

The process is invoked as ``<bin> -l <lexer> -f <format> [extra flags]``
with the code piped to stdin; the highlighted HTML is read back from stdout.
"""

import logging
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from .config import HighlighterConfig, DEFAULT_HIGHLIGHTER_CONFIG

logger = logging.getLogger(__name__)


class HighlighterError(RuntimeError):
    """Base class for everything that can go wrong while highlighting."""


class HighlighterUnavailable(HighlighterError):
    """The highlighter binary could not be started."""

    def __init__(self, bin_path: str, reason: str = ""):
        self.bin = bin_path
        self.reason = reason
        message = f"Syntax highlighter not available: {bin_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class HighlighterFailed(HighlighterError):
    """The highlighter ran but did not finish successfully."""

    def __init__(self, exit_code: Optional[int], stderr: str = "", message: str = ""):
        self.exit_code = exit_code
        self.stderr = stderr
        if not message:
            message = f"Syntax highlighter exited with status {exit_code}"
            if stderr.strip():
                message += f": {stderr.strip()}"
        super().__init__(message)


class HighlighterTimeout(HighlighterFailed):
    """The highlighter did not finish within the configured timeout."""

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(None, message=f"Syntax highlighter timed out after {timeout}s")


class HighlightOutputError(HighlighterError):
    """The highlighter output could not be used (e.g. no wrapping <div>)."""


class Highlighter:
    """
    Runs the configured highlighter process for one fragment at a time.
    """

    def __init__(self, config: Optional[HighlighterConfig] = None):
        self.config = config or DEFAULT_HIGHLIGHTER_CONFIG

    def payload(self, text: str) -> str:
        """Return what gets piped to the highlighter for *text*.

        *text* may name an existing file, in which case the file contents are
        used; anything else is treated as literal code with trailing
        whitespace removed.  A file path is recognised on a single line,
        surrounding whitespace ignored, as it arrives from a code fence.
        """
        candidate = text.strip()
        # os.path.isfile never raises for odd input (long strings, NUL bytes)
        if candidate and "\n" not in candidate and os.path.isfile(candidate):
            try:
                return Path(candidate).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise HighlighterError(f"Cannot read code from {candidate}: {exc}") from exc
        return text.rstrip()

    def command(self, lexer: Optional[str] = None, format: Optional[str] = None,
                options: Optional[Dict[str, str]] = None) -> List[str]:
        """Build the argv list.

        Precedence, lowest first: config defaults, ``config.options``, the
        explicit *lexer* / *format*, then per-call *options*.
        """
        flags = {"l": self.config.lexer, "f": self.config.format}
        flags.update(self.config.options)
        if lexer:
            flags["l"] = lexer
        if format:
            flags["f"] = format
        if options:
            flags.update(options)

        argv = [self.config.bin]
        for flag, value in flags.items():
            argv.extend([f"-{flag}", str(value)])
        return argv

    def highlight(self, text: str, lexer: Optional[str] = None, format: Optional[str] = None,
                  **options: str) -> str:
        """
        Highlight *text* (literal code or a file path) and return the output.

        Args:
            text: Code to highlight, or a path to a file containing it
            lexer: Lexer name passed with ``-l``
            format: Formatter name passed with ``-f``
            **options: Additional single-letter flags, e.g. ``O="linenos=1"``

        Returns:
            The highlighter's stdout with surrounding whitespace stripped

        Raises:
            HighlighterUnavailable: The binary is missing or not executable
            HighlighterFailed: The process exited with a non-zero status
            HighlighterTimeout: The process exceeded ``config.timeout``
        """
        argv = self.command(lexer, format, options)
        logger.debug("Running highlighter: %s", " ".join(argv))

        try:
            result = subprocess.run(
                argv,
                input=self.payload(text),
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except OSError as exc:  # missing, not executable, bad interpreter
            raise HighlighterUnavailable(self.config.bin, exc.strerror or str(exc)) from exc
        except subprocess.TimeoutExpired as exc:
            raise HighlighterTimeout(self.config.timeout) from exc

        if result.returncode != 0:
            raise HighlighterFailed(result.returncode, result.stderr)

        return result.stdout.strip()


def colorize(text: str, lexer: Optional[str] = None, format: Optional[str] = None) -> str:
    """Convenience function: highlight *text* with the default configuration."""
    return Highlighter().highlight(text, lexer, format)
