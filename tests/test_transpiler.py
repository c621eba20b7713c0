"""
Transpiler tests

Tests HTML output for every directive, block grouping, the preformatted
state, end-of-document closing and link rewriting.
"""

import pytest

from twinsite.config import AppSettings
from twinsite.lib.classifier import line_classify
from twinsite.lib.transpiler import (
    Transpiler,
    gemtext_toHTML,
    directive_render,
    document_close,
    href_resolve,
    line_render,
)
from twinsite.models.directives import RenderState


def transpile(source: str) -> list:
    return Transpiler(source).transpile()


class TestSimpleLines:
    """Test single-line directives"""

    def test_empty_document(self):
        assert transpile("") == []

    @pytest.mark.parametrize("line,html", [
        ("# One", "<h1>One</h1>"),
        ("## Two", "<h2>Two</h2>"),
        ("### Three", "<h3>Three</h3>"),
    ])
    def test_headers(self, line, html):
        assert transpile(line) == [html]

    def test_paragraph(self):
        assert transpile("Just some text") == ["<p>Just some text</p>"]

    def test_blank_line_is_break(self):
        assert transpile("a\n\nb") == ["<p>a</p>", "<br/>", "<p>b</p>"]

    def test_whitespace_only_line_is_blank(self):
        assert transpile("   \t ") == ["<br/>"]

    def test_lines_are_trimmed(self):
        assert transpile("   ## Indented   ") == ["<h2>Indented</h2>"]

    def test_level_four_header_is_paragraph(self):
        assert transpile("#### Deep") == ["<p>#### Deep</p>"]

    def test_crlf_line_endings(self):
        assert transpile("# A\r\n* b\r\n") == ["<h1>A</h1>", "<ul>", "<li>b</li>", "</ul>"]

    @pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_only_newline_splits_lines(self, separator):
        """Form feeds and Unicode separators stay inside the paragraph"""
        assert transpile(f"a b{separator}c") == [f"<p>a b{separator}c</p>"]

    def test_lone_carriage_return_stays_in_line(self):
        assert transpile("a\rb") == ["<p>a\rb</p>"]

    def test_trailing_newline_adds_no_line(self):
        assert Transpiler("x\n").lines_get() == ["x"]
        assert Transpiler("x\n\n").lines_get() == ["x", ""]


class TestLists:
    """Test <ul> grouping"""

    def test_list_then_header(self):
        """List closes before the fragment of the next directive"""
        assert transpile("* a\n* b\n# Header") == [
            "<ul>",
            "<li>a</li>",
            "<li>b</li>",
            "</ul>",
            "<h1>Header</h1>",
        ]

    def test_blank_line_splits_lists(self):
        assert transpile("* a\n\n* b") == [
            "<ul>", "<li>a</li>", "</ul>",
            "<br/>",
            "<ul>", "<li>b</li>", "</ul>",
        ]

    def test_list_at_end_of_document_is_closed(self):
        """Deliberate fix: unterminated lists are closed at end of document"""
        assert transpile("* only") == ["<ul>", "<li>only</li>", "</ul>"]


class TestQuotes:
    """Test <blockquote> accumulation"""

    def test_consecutive_quotes_share_blockquote(self):
        assert transpile("> a\n> b\nafter") == [
            "<blockquote>",
            "a<br/>",
            "b<br/>",
            "</blockquote>",
            "<p>after</p>",
        ]

    def test_quote_then_list(self):
        assert transpile("> q\n* a") == [
            "<blockquote>", "q<br/>", "</blockquote>",
            "<ul>", "<li>a</li>", "</ul>",
        ]

    def test_list_then_quote(self):
        assert transpile("* a\n> q") == [
            "<ul>", "<li>a</li>", "</ul>",
            "<blockquote>", "q<br/>", "</blockquote>",
        ]

    def test_quote_at_end_of_document_is_closed(self):
        """Deliberate fix: unterminated quotes are closed at end of document"""
        assert transpile("> last") == ["<blockquote>", "last<br/>", "</blockquote>"]


class TestPreformatted:
    """Test ``` fenced blocks"""

    def test_lines_pass_through_verbatim(self):
        source = "```\n  * not a list\n# not a header\n=> not a link\n```"
        assert transpile(source) == [
            "<pre>",
            "  * not a list",
            "# not a header",
            "=> not a link",
            "</pre>",
        ]

    def test_fence_with_alt_text(self):
        assert transpile("```python\nx = 1\n```") == ["<pre>", "x = 1", "</pre>"]

    def test_fence_closes_open_list(self):
        assert transpile("* a\n```\nx\n```") == [
            "<ul>", "<li>a</li>", "</ul>",
            "<pre>", "x", "</pre>",
        ]

    def test_fence_closes_open_quote(self):
        assert transpile("> a\n```\n```") == [
            "<blockquote>", "a<br/>", "</blockquote>",
            "<pre>", "</pre>",
        ]

    def test_unterminated_fence_is_closed(self):
        """Deliberate fix: unterminated fences are closed at end of document"""
        assert transpile("```\ncode") == ["<pre>", "code", "</pre>"]

    def test_text_after_block_is_processed(self):
        assert transpile("```\nraw\n```\n# After") == ["<pre>", "raw", "</pre>", "<h1>After</h1>"]


class TestLinks:
    """Test => links and images"""

    def test_absolute_gemtext_link_rewritten(self):
        assert transpile("=> /about.gmi About") == ['<div><a href="/about.html">About</a></div>']

    def test_relative_gemtext_link_unchanged(self):
        assert transpile("=> about.gmi About") == ['<div><a href="about.gmi">About</a></div>']

    def test_external_link(self):
        assert transpile("=> https://example.org Example Site") == [
            '<div><a href="https://example.org">Example Site</a></div>'
        ]

    def test_link_without_description(self):
        assert transpile("=> gemini://host/a.gmi") == ['<div><a href="gemini://host/a.gmi"></a></div>']

    def test_image_extension_case_insensitive(self):
        """Mixed-case extension is an image; target and description keep their case"""
        assert transpile("=> http://x/pic.PNG My Picture") == [
            '<div><img src="http://x/pic.PNG">My Picture</img></div>'
        ]

    @pytest.mark.parametrize("ext", ["jpg", "gif", "png", "svg", "webp"])
    def test_image_extensions(self, ext):
        html = transpile(f"=> /img/a.{ext} A")[0]
        assert html.startswith("<div><img ")

    def test_link_closes_list(self):
        assert transpile("* a\n=> /b.gmi B") == [
            "<ul>", "<li>a</li>", "</ul>",
            '<div><a href="/b.html">B</a></div>',
        ]


class TestHrefResolve:
    """Test .gmi -> .html rewriting"""

    def test_only_suffix_replaced(self):
        assert href_resolve("/gmi.gmi/page.gmi") == "/gmi.gmi/page.html"

    def test_uppercase_extension(self):
        assert href_resolve("/ABOUT.GMI") == "/ABOUT.html"

    def test_non_markup_unchanged(self):
        assert href_resolve("/notes.txt") == "/notes.txt"

    def test_custom_extensions(self):
        settings = AppSettings(markup_extension="gem", html_extension="htm")
        assert href_resolve("/a.gem", settings) == "/a.htm"


class TestStateFunctions:
    """Test the pure step functions"""

    def test_directive_render_does_not_mutate_state(self):
        state = RenderState()
        new_state, fragments = directive_render(state, line_classify("* a"))
        assert state == RenderState()
        assert new_state.in_list is True
        assert fragments == ["<ul>", "<li>a</li>"]

    def test_line_render_inside_preformat(self):
        state = RenderState(in_preformat=True)
        assert line_render(state, "  # raw") == (state, ["  # raw"])

    def test_line_render_closing_fence(self):
        state, fragments = line_render(RenderState(in_preformat=True), "```")
        assert state == RenderState()
        assert fragments == ["</pre>"]

    def test_document_close_nothing_open(self):
        assert document_close(RenderState()) == []

    def test_document_close_all_flags(self):
        state = RenderState(in_list=True, in_quote=True, in_preformat=True)
        assert document_close(state) == ["</ul>", "</blockquote>", "</pre>"]


class TestDocumentProperties:
    """Properties over whole documents"""

    SAMPLE = """## About

This is a sample page displaying gemtext syntax

### Posts:
* Post 1
* Post 2
* Post 3

A quote
> The Earth is blue... how wonderful. It is amazing
- Yuri Gagarin

```
Some preformatted table or ascii art, perhaps?
```
=> /index.gmi Home
* trailing item"""

    def test_balanced_tags(self):
        html = gemtext_toHTML(self.SAMPLE)
        for tag in ("ul", "blockquote", "pre"):
            assert html.count(f"<{tag}>") == html.count(f"</{tag}>")

    def test_idempotent(self):
        assert transpile(self.SAMPLE) == transpile(self.SAMPLE)

    def test_render_joins_with_newlines(self):
        assert Transpiler("# A\ntext").render() == "<h1>A</h1>\n<p>text</p>"

    def test_custom_image_extensions(self):
        settings = AppSettings(image_extensions=["bmp"])
        assert Transpiler("=> a.bmp A", settings=settings).transpile() == [
            '<div><img src="a.bmp">A</img></div>'
        ]
        assert Transpiler("=> a.png A", settings=settings).transpile() == [
            '<div><a href="a.png">A</a></div>'
        ]
