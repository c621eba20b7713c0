"""
Exceptions raised while building a site

Fatal errors (ConfigurationError and its subclasses) abort the build.
PathStructureError is raised per file and handled by the tree walker.
"""


class BuildError(Exception):
    """Base class for all twinsite build errors"""
    pass


class ConfigurationError(BuildError):
    """Raised when the site layout is unusable (missing source dir or wrapper)"""
    pass


class MalformedTemplateError(ConfigurationError):
    """Raised when a wrapper template does not contain the content marker"""
    pass


class PathStructureError(BuildError):
    """Raised when a source path cannot be mapped into an output tree"""
    pass
