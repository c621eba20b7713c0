"""
Models package for twinsite

Contains data structures and type definitions for the build pipeline.
"""

from .state import ProgramState, BuildResult, BuildFailure, pipeline
from .directives import LineKind, LineDirective, RenderState
from .routes import OutputKind, FileRoute
from .template import WrapperTemplate

__all__ = [
    "ProgramState",
    "BuildResult",
    "BuildFailure",
    "pipeline",
    "LineKind",
    "LineDirective",
    "RenderState",
    "OutputKind",
    "FileRoute",
    "WrapperTemplate",
]
