"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing build stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field

from .routes import OutputKind
from .template import WrapperTemplate


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class BuildFailure:
    """
    A per-file failure recorded by the tree walker

    Attributes:
        path: Source file that could not be published
        output: Output tree that was affected, or None if both were skipped
        message: Human-readable reason
    """
    path: Path
    output: Optional[OutputKind]
    message: str


@dataclass
class BuildResult:
    """
    Counters collected while walking the source tree

    Attributes:
        html_pages: Gemtext files transpiled into the HTML tree
        capsule_pages: Gemtext files wrapped into the capsule tree
        files_copied: Individual file copies (one per output tree)
        failures: Per-file failures that were logged and skipped
    """
    html_pages: int = 0
    capsule_pages: int = 0
    files_copied: int = 0
    failures: List[BuildFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class ProgramState:
    """
    Central state container for the build pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the build progresses.

    Pipeline stages and their state additions:
        - Initial: basedir, verbosity
        - env_check: sourceDir, serveDir, htmlOutputdir, capsuleOutputdir,
                     htmlTemplate, capsuleTemplate, envOK
        - outputs_clean: (no additions, recreates output directories)
        - sources_build: buildResult
        - extras_overlay: extrasCopied
        - results_report: (no additions, terminal stage)

    Attributes:
        basedir: Site root containing src/, www/, gemini/
        verbosity: Logging verbosity level (0-3)
        envOK: Environment validation passed
        sourceDir: Resolved source directory
        serveDir: Output root, removed and recreated on every build
        htmlOutputdir: HTML website output tree
        capsuleOutputdir: Gemtext capsule output tree
        htmlTemplate: Split HTML wrapper
        capsuleTemplate: Split gemtext wrapper
        buildResult: Counters and failures from the tree walk
        extrasCopied: Extras directories that were overlaid
    """

    # CLI arguments
    basedir: Path = field(default=Path("."))
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    sourceDir: Path = field(default=Path("/"))
    serveDir: Path = field(default=Path("/"))
    htmlOutputdir: Path = field(default=Path("/"))
    capsuleOutputdir: Path = field(default=Path("/"))
    htmlTemplate: Optional[WrapperTemplate] = field(default=None)
    capsuleTemplate: Optional[WrapperTemplate] = field(default=None)
    buildResult: Optional[BuildResult] = field(default=None)
    extrasCopied: List[Path] = field(default_factory=list)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, basedir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and the site root.

        Args:
            options: Parsed CLI arguments (verbosity, ...)
            basedir: Site root directory

        Returns:
            ProgramState instance with all matching CLI options as attributes
        """
        # Get the dictionary of all attributes from the Namespace
        options_dict = vars(options)

        # Get the set of valid field names for ProgramState
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Filter options_dict to only include fields that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "basedir": basedir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            outputs_clean,
            sources_build,
            extras_overlay,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
