"""
File routing models

A source file is published into two output trees. For each tree the walker
decides independently what to do with the file.
"""

from enum import Enum


class OutputKind(Enum):
    """The two published trees"""
    HTML = "html"
    CAPSULE = "capsule"


class FileRoute(Enum):
    """
    Per-file, per-output processing decision

    TRANSPILE:         gemtext -> HTML fragments -> HTML wrapper
    PASSTHROUGH_WRAP:  gemtext body unchanged -> gemtext wrapper
    VERBATIM_COPY:     byte-for-byte copy
    IGNORE:            not published (hidden prefix)
    """
    TRANSPILE = "transpile"
    PASSTHROUGH_WRAP = "passthrough_wrap"
    VERBATIM_COPY = "verbatim_copy"
    IGNORE = "ignore"
