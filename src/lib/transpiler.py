"""
Transpiler from gemtext to HTML

Converts a gemtext document into an ordered list of HTML fragments in a
single pass over its lines.

The transpiler is a small state machine:
1. Each line is trimmed and classified (see classifier.line_classify)
2. The (state, directive) pair is handed to directive_render(), which
   returns the next state and the fragments to emit
3. At end of document, document_close() emits the closing tags for any
   list, quote or preformatted block that is still open

Output style:
- Lists accumulate into one <ul>, quotes into one <blockquote>
- Links and images are wrapped in a <div>
- Blank lines become <br/>
- Lines inside a ``` fence are emitted untouched inside <pre>

Example:
    >>> Transpiler("* a\\n* b\\n# Header").transpile()
    ['<ul>', '<li>a</li>', '<li>b</li>', '</ul>', '<h1>Header</h1>']
"""

from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from ..config import AppSettings, appsettings
from ..models.directives import LineKind, LineDirective, RenderState
from .classifier import line_classify
from .log import LOG


Fragments = List[str]
Handler = Callable[[RenderState, LineDirective, AppSettings], Tuple[RenderState, Fragments]]


def list_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    """Handle '* item' - open <ul> on the first item of a run"""
    fragments = []
    if not state.in_list:
        fragments.append("<ul>")
        state = replace(state, in_list=True)
    fragments.append(f"<li>{directive.text}</li>")
    return state, fragments


def quote_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    """Handle '> quote' - consecutive quote lines share one <blockquote>"""
    fragments = []
    if not state.in_quote:
        fragments.append("<blockquote>")
        state = replace(state, in_quote=True)
    fragments.append(f"{directive.text}<br/>")
    return state, fragments


def header_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    level = directive.level
    return state, [f"<h{level}>{directive.text}</h{level}>"]


def link_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    """
    Handle '=> target description'

    Image targets become <img>; absolute links to gemtext pages are pointed
    at the matching HTML page; anything else is a plain link.
    """
    target = directive.target
    description = directive.description

    if settings.image_is(target):
        return state, [f'<div><img src="{target}">{description}</img></div>']

    return state, [f'<div><a href="{href_resolve(target, settings)}">{description}</a></div>']


def fence_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    """Handle '```' outside a preformatted block - open <pre>"""
    return replace(state, in_preformat=True), ["<pre>"]


def blank_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    return state, ["<br/>"]


def text_handler(state: RenderState, directive: LineDirective, settings: AppSettings) -> Tuple[RenderState, Fragments]:
    return state, [f"<p>{directive.text}</p>"]


HANDLERS: Dict[LineKind, Handler] = {
    LineKind.LIST_ITEM: list_handler,
    LineKind.QUOTE: quote_handler,
    LineKind.HEADER: header_handler,
    LineKind.LINK: link_handler,
    LineKind.FENCE: fence_handler,
    LineKind.BLANK: blank_handler,
    LineKind.TEXT: text_handler,
}


def href_resolve(target: str, settings: AppSettings = appsettings) -> str:
    """
    Point absolute gemtext links at their HTML counterpart

    Only the trailing extension is replaced, and only for targets that start
    with '/'. The extension test is case-insensitive.

    Example:
        >>> href_resolve("/about.gmi")
        '/about.html'
        >>> href_resolve("gemini://host/about.gmi")
        'gemini://host/about.gmi'
    """
    markup_suffix = f".{settings.markup_extension}"
    if target.startswith("/") and target.lower().endswith(markup_suffix.lower()):
        return f"{target[:-len(markup_suffix)]}.{settings.html_extension}"
    return target


def directive_render(
    state: RenderState, directive: LineDirective, settings: AppSettings = appsettings
) -> Tuple[RenderState, Fragments]:
    """
    Render one classified line outside a preformatted block

    Closes an open list when the directive is not a list item, and an open
    quote when the directive is not a quote, before dispatching to the
    directive's handler.

    Args:
        state: Flags carried over from the previous line
        directive: Classified line
        settings: Extension configuration for link handling

    Returns:
        (next state, fragments to append)
    """
    fragments: Fragments = []

    if state.in_list and directive.kind is not LineKind.LIST_ITEM:
        fragments.append("</ul>")
        state = replace(state, in_list=False)

    if state.in_quote and directive.kind is not LineKind.QUOTE:
        fragments.append("</blockquote>")
        state = replace(state, in_quote=False)

    state, emitted = HANDLERS[directive.kind](state, directive, settings)
    return state, fragments + emitted


def line_render(
    state: RenderState, line: str, settings: AppSettings = appsettings
) -> Tuple[RenderState, Fragments]:
    """
    Render one raw source line

    Inside a preformatted block the line passes through untouched unless it
    is a fence, which closes the block.
    """
    directive = line_classify(line.strip())

    if state.in_preformat:
        if directive.kind is LineKind.FENCE:
            return replace(state, in_preformat=False), ["</pre>"]
        return state, [line]

    return directive_render(state, directive, settings)


def document_close(state: RenderState) -> Fragments:
    """
    Closing tags for blocks still open at end of document

    Order: list, quote, preformatted block. At most one of list and quote
    can be open at a time, and neither can be open together with <pre>.
    """
    fragments: Fragments = []
    if state.in_list:
        fragments.append("</ul>")
    if state.in_quote:
        fragments.append("</blockquote>")
    if state.in_preformat:
        fragments.append("</pre>")
    return fragments


class Transpiler:
    """
    Gemtext to HTML transpiler for one document

    Handles:
    - Headers (#, ##, ###), list items (*), quotes (>)
    - Links and images (=>), with .gmi -> .html rewriting for absolute links
    - Preformatted blocks (```)
    - Closing any block left open at end of document
    """

    def __init__(self, source: str, settings: Optional[AppSettings] = None):
        """
        Initialize transpiler with source text

        Args:
            source: Raw gemtext source (.gmi file contents)
            settings: Optional settings override (defaults to appsettings)
        """
        self.source = source
        self.settings = settings or appsettings

    def lines_get(self) -> List[str]:
        """
        Source split into lines on '\\n' only, one trailing '\\r' removed per line

        Form feeds, vertical tabs and Unicode line separators stay inside
        their line. A final newline does not produce an extra empty line.
        """
        if not self.source:
            return []
        lines = self.source.split("\n")
        if self.source.endswith("\n"):
            lines.pop()
        return [line[:-1] if line.endswith("\r") else line for line in lines]

    def transpile(self) -> Fragments:
        """
        Transpile the whole document

        Returns:
            Ordered list of HTML fragments. Every opened <ul>, <blockquote>
            and <pre> is closed.
        """
        state = RenderState()
        fragments: Fragments = []

        for line in self.lines_get():
            state, emitted = line_render(state, line, self.settings)
            fragments.extend(emitted)

        if state.open_is():
            LOG(f"Closing blocks left open at end of document: {state}", level=3)
        fragments.extend(document_close(state))

        return fragments

    def render(self) -> str:
        """Transpile and join fragments with newlines"""
        return "\n".join(self.transpile())


def gemtext_toHTML(source: str, settings: Optional[AppSettings] = None) -> str:
    """Convenience wrapper: gemtext source in, HTML body out"""
    return Transpiler(source, settings=settings).render()
