import html
import stat
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import slidedown` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from slidedown.config import HighlighterConfig  # noqa: E402


class FakeHighlighter:
    """Stands in for the external process; records every call."""

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def highlight(self, text, lexer=None, format=None, **options):
        self.calls.append((text, lexer))
        if self.error is not None:
            raise self.error
        if self.output is not None:
            return self.output
        return f'<div class="highlight"><pre>{html.escape(text.strip())}</pre></div>'


# Behaves like `pygmentize -l LEXER -f FORMAT`; `-x fail` / `-x sleep` simulate trouble.
STUB_PYGMENTIZE = '''#!{python}
import html
import sys
import time

args = sys.argv[1:]
flags = dict(zip(args[::2], args[1::2]))
code = sys.stdin.read()

if flags.get("-x") == "fail":
    sys.stderr.write("boom")
    sys.exit(3)
if flags.get("-x") == "sleep":
    time.sleep(10)

sys.stdout.write('\\n<div class="highlight" data-lexer="%s" data-format="%s"><pre>%s</pre></div>\\n\\n'
                 % (flags.get("-l"), flags.get("-f"), html.escape(code)))
'''


@pytest.fixture
def fake_highlighter():
    return FakeHighlighter()


@pytest.fixture
def stub_pygmentize(tmp_path):
    """Path of an executable pygmentize look-alike."""
    script = tmp_path / "pygmentize"
    script.write_text(STUB_PYGMENTIZE.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(script)


@pytest.fixture
def stub_config(stub_pygmentize):
    return HighlighterConfig(bin=stub_pygmentize, timeout=10)


@pytest.fixture
def in_tmp_dir(tmp_path, monkeypatch):
    """Run the test from an empty working directory (no stray assets)."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def make_highlighter():
    """Factory for :class:`FakeHighlighter` with canned output or error."""
    return FakeHighlighter
