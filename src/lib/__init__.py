"""
twinsite - Build a static website and a gemtext capsule in parallel
"""

__version__ = "1.0.0"

from .classifier import line_classify
from .transpiler import Transpiler, gemtext_toHTML
from .template import template_split, template_load, content_splice
from .wrapper import capsule_wrap
from .walker import TreeWalker, route_decide
from .builder import site_build, site_buildFromState
from .scaffold import site_init
from .errors import BuildError, ConfigurationError, MalformedTemplateError, PathStructureError
from .log import LOG, state_connectToLogger

__all__ = [
    "line_classify",
    "Transpiler",
    "gemtext_toHTML",
    "template_split",
    "template_load",
    "content_splice",
    "capsule_wrap",
    "TreeWalker",
    "route_decide",
    "site_build",
    "site_buildFromState",
    "site_init",
    "BuildError",
    "ConfigurationError",
    "MalformedTemplateError",
    "PathStructureError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
