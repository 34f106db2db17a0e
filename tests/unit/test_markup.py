"""Test Markdown + code fence rendering."""

import pytest
from bs4 import BeautifulSoup
from markdown_it import MarkdownIt

from slidedown.config import DEFAULT_LEXER
from slidedown.highlighter import HighlighterFailed, HighlightOutputError
from slidedown.markup import MarkupGenerator, generate, merge_classes, normalize_fences



def test_normalize_fences_open_and_close():
    text = "@@@ruby\nputs 1\n@@@"

    assert normalize_fences(text) == '<div class="code" rel="ruby">puts 1&#10;</div>'


def test_normalize_fences_paragraph_wrapped_and_spaced():
    text = "<p>@@@ python</p>\nx = 1\n<p>@@@</p>"

    assert normalize_fences(text) == '<div class="code" rel="python">x = 1&#10;</div>'


def test_normalize_fences_unbalanced_lines_become_bare_tags():
    assert normalize_fences("@@@c++") == '<div class="code" rel="c++">'
    assert normalize_fences("text\n@@@") == "text\n</div>"


def test_normalize_fences_ignores_inline_at_signs():
    text = "email me @@@ later\n  @@@\n"

    assert normalize_fences(text) == text


def test_plain_markdown_round_trips(fake_highlighter):
    """Without code blocks the converter's output comes back unchanged."""
    markdown = "# Title\n\nSome *text* and a [link](http://example.org).\n\n- a\n- b\n\n---\n"
    expected = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"]).render(markdown)

    assert generate(markdown, highlighter=fake_highlighter) == expected


def test_ruby_fence_becomes_single_highlighted_element(make_highlighter):
    highlighter = make_highlighter(output='<div class="highlight"><pre><span class="nb">puts</span> 1</pre></div>')

    html = generate("@@@ruby\nputs 1\n@@@\n", highlighter=highlighter)

    soup = BeautifulSoup(html, "html.parser")
    divs = soup.find_all("div")
    assert len(divs) == 1
    assert {"ruby", "code", "highlight"} <= set(divs[0]["class"])
    assert '<span class="nb">puts</span> 1' in html

    assert len(highlighter.calls) == 1
    code, lexer = highlighter.calls[0]
    assert code.strip() == "puts 1"
    assert lexer == "ruby"


def test_classes_are_merged_without_duplicates(make_highlighter):
    highlighter = make_highlighter(output='<div class="highlight"><pre>x</pre></div>')

    html = generate("@@@python\nx\n@@@\n", highlighter=highlighter)

    div = BeautifulSoup(html, "html.parser").find("div")
    assert div["class"] == ["highlight", "python", "code"]


def test_document_order_is_preserved(fake_highlighter):
    markdown = "# Before\n\n@@@python\nx = 1\n@@@\n\nAfter\n"

    html = generate(markdown, highlighter=fake_highlighter)

    assert html.index("<h1>Before</h1>") < html.index("x = 1") < html.index("<p>After</p>")
    assert "rel=" not in html


def test_each_block_highlighted_once_in_order(fake_highlighter):
    markdown = "@@@ruby\nputs 1\n@@@\n\ntext\n\n@@@python\nprint(2)\n@@@\n"

    html = generate(markdown, highlighter=fake_highlighter)

    assert [lexer for _, lexer in fake_highlighter.calls] == ["ruby", "python"]
    assert html.count('class="highlight') == 2


def test_missing_rel_uses_default_lexer(fake_highlighter):
    generate('<div class="code">\nfoo\n</div>\n', highlighter=fake_highlighter)

    assert fake_highlighter.calls[0][1] == DEFAULT_LEXER


def test_highlighter_output_without_div_is_fatal(make_highlighter):
    highlighter = make_highlighter(output="<pre>oops</pre>")

    with pytest.raises(HighlightOutputError):
        generate("@@@ruby\nputs 1\n@@@\n", highlighter=highlighter)


def test_highlighter_errors_propagate(make_highlighter):
    highlighter = make_highlighter(error=HighlighterFailed(2, "bad lexer"))

    with pytest.raises(HighlighterFailed):
        generate("@@@nope\nx\n@@@\n", highlighter=highlighter)


def test_generator_caches_markup_and_tree(fake_highlighter):
    generator = MarkupGenerator("# Hi\n", highlighter=fake_highlighter)

    assert generator.markup is generator.markup
    assert generator.soup is generator.soup
    assert generator.highlight() == 0


def test_merge_classes():
    assert merge_classes(["a", "b"], ["b", "c"], ("", "a", "d")) == ["a", "b", "c", "d"]


def test_fence_source_reaches_highlighter_verbatim(fake_highlighter):
    """Blank lines and Markdown-significant characters inside a fence survive."""
    code = "def f(*args, **kw):\n    return 1\n\n# comment\nx = a*b*c\nif a < b && c > d:\n    pass\n"

    html = generate(f"Intro\n\n@@@python\n{code}@@@\n\nOutro\n", highlighter=fake_highlighter)

    assert fake_highlighter.calls == [(code, "python")]
    assert "<p>Intro</p>" in html
    assert "<p>Outro</p>" in html
    assert "<h1>" not in html
    assert "<em>" not in html


def test_crlf_fences_are_highlighted(fake_highlighter):
    html = generate("@@@ruby\r\nputs 1\r\n\r\nputs 2\r\n@@@\r\n", highlighter=fake_highlighter)

    assert fake_highlighter.calls == [("puts 1\n\nputs 2\n", "ruby")]
    assert 'class="highlight ruby code"' in html
