"""
twinsite - Dual-output static site generator

Builds an HTML website and a gemtext capsule from one tree of gemtext sources.
"""

__version__ = "1.0.0"

from .lib import Transpiler, TreeWalker, site_build, site_init, LOG, state_connectToLogger

__all__ = ["Transpiler", "TreeWalker", "site_build", "site_init", "LOG", "state_connectToLogger", "__version__"]
