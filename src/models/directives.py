"""
Line directive and render state models

Defines the classification of a single gemtext line and the mutable flags
the transpiler carries from one line to the next.
"""

from enum import Enum
from dataclasses import dataclass


class LineKind(Enum):
    """
    Kinds of gemtext lines

    Every trimmed line maps to exactly one kind.
    """
    HEADER = "header"          # #, ##, ###
    LIST_ITEM = "list_item"    # *
    QUOTE = "quote"            # >
    LINK = "link"              # => target [description]
    FENCE = "fence"            # ```
    BLANK = "blank"
    TEXT = "text"


@dataclass(frozen=True)
class LineDirective:
    """
    Classification of one trimmed gemtext line

    Attributes:
        kind: Which directive the line carries
        text: Content after the directive token (headers, list items, quotes),
              or the whole line for plain text
        level: Heading level 1..3 (HEADER only, 0 otherwise)
        target: Link target (LINK only)
        description: Link description, empty if the line has none (LINK only)

    Example:
        "## Posts" -> LineDirective(kind=LineKind.HEADER, text="Posts", level=2)
        "=> /about.gmi About" -> LineDirective(
            kind=LineKind.LINK, target="/about.gmi", description="About"
        )
    """
    kind: LineKind
    text: str = ""
    level: int = 0
    target: str = ""
    description: str = ""


@dataclass(frozen=True)
class RenderState:
    """
    Open-block flags for one document's transpilation

    Attributes:
        in_list: A <ul> has been emitted and not yet closed
        in_quote: A <blockquote> has been emitted and not yet closed
        in_preformat: A <pre> has been emitted and not yet closed; while set,
                      every non-fence line passes through verbatim

    A fresh RenderState() is used for every document.
    """
    in_list: bool = False
    in_quote: bool = False
    in_preformat: bool = False

    def open_is(self) -> bool:
        """Check whether any block is still waiting for its closing tag"""
        return self.in_list or self.in_quote or self.in_preformat
