"""
Line classifier for gemtext

Maps a single trimmed line to a LineDirective by looking at the token
before the first space.

Example:
    >>> line_classify("## Posts")
    LineDirective(kind=<LineKind.HEADER: 'header'>, text='Posts', level=2, target='', description='')
    >>> line_classify("####").kind
    <LineKind.TEXT: 'text'>
"""

from typing import Dict, Tuple

from ..models.directives import LineKind, LineDirective


FENCE_TOKEN = "```"

HEADER_LEVELS: Dict[str, int] = {
    "#": 1,
    "##": 2,
    "###": 3,
}


def prefix_split(line: str) -> Tuple[str, str]:
    """
    Split a line into directive token and content at the first space

    Returns ("", line) when the line has no space.
    """
    if " " not in line:
        return "", line
    prefix, content = line.split(" ", 1)
    return prefix, content


def line_classify(line: str) -> LineDirective:
    """
    Classify one trimmed gemtext line

    Precedence: fence, list item, quote, header, link, blank, plain text.
    Plain text keeps the whole line; every other kind keeps only the
    content after its token.

    Args:
        line: A line with surrounding whitespace already removed

    Returns:
        LineDirective describing the line. Never raises.
    """
    if line.startswith(FENCE_TOKEN):
        return LineDirective(kind=LineKind.FENCE)

    prefix, content = prefix_split(line)

    if prefix == "*":
        return LineDirective(kind=LineKind.LIST_ITEM, text=content)

    if prefix == ">":
        return LineDirective(kind=LineKind.QUOTE, text=content)

    if prefix in HEADER_LEVELS:
        return LineDirective(kind=LineKind.HEADER, text=content, level=HEADER_LEVELS[prefix])

    if prefix == "=>":
        target, _, description = content.partition(" ")
        return LineDirective(kind=LineKind.LINK, target=target, description=description)

    if not line:
        return LineDirective(kind=LineKind.BLANK)

    return LineDirective(kind=LineKind.TEXT, text=line)
