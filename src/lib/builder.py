"""
Build orchestrator

Runs the full, clean build of a site as a pipeline of stages over a
ProgramState:

    env_check -> outputs_clean -> sources_build -> extras_overlay -> results_report

Stages raise BuildError subclasses for fatal problems; per-file problems are
handled inside the TreeWalker and reported in the BuildResult.
"""

import shutil
from pathlib import Path

from ..config import appsettings
from ..models.state import ProgramState, pipeline
from .errors import ConfigurationError
from .log import LOG, WARN, state_connectToLogger
from .template import template_load
from .walker import TreeWalker


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the site layout and load both wrapper templates.

    Nothing on disk is modified by this stage, so a fatal error here leaves
    any previous output untouched.

    Args:
        inputstate: Initial program state with basedir set

    Returns:
        ProgramState with added fields:
            - sourceDir, serveDir, htmlOutputdir, capsuleOutputdir
            - htmlTemplate, capsuleTemplate
            - envOK: True

    Raises:
        ConfigurationError: Source directory or a wrapper template is missing
        MalformedTemplateError: A wrapper template lacks the content marker
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    state.sourceDir = state.basedir / appsettings.source_dirname
    if not state.sourceDir.is_dir():
        state.envOK = False
        raise ConfigurationError(f"Source directory ({state.sourceDir}) not found. Nothing to build")
    LOG(f"Source directory: {state.sourceDir}", level=2)

    state.serveDir = state.basedir / appsettings.serve_dirname
    state.htmlOutputdir = state.serveDir / appsettings.html_output_dirname
    state.capsuleOutputdir = state.serveDir / appsettings.capsule_output_dirname

    state.htmlTemplate = template_load(state.sourceDir / appsettings.html_wrapper_name)
    state.capsuleTemplate = template_load(state.sourceDir / appsettings.capsule_wrapper_name)

    state.envOK = True
    return state


def outputs_clean(inputstate: ProgramState) -> ProgramState:
    """
    Remove the previous output root and recreate both output trees.

    A missing output root is not an error.
    """
    state = inputstate.copy()

    LOG("Cleaning up...", level=1)
    if state.serveDir.exists():
        shutil.rmtree(state.serveDir)
        LOG(f"Removed {state.serveDir}", level=2)

    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    state.capsuleOutputdir.mkdir(parents=True, exist_ok=True)
    return state


def sources_build(inputstate: ProgramState) -> ProgramState:
    """
    Publish the source tree into both output trees.

    Returns:
        ProgramState with added field:
            - buildResult: counters and per-file failures
    """
    state = inputstate.copy()

    if state.htmlTemplate is None or state.capsuleTemplate is None:
        raise ConfigurationError("Wrapper templates were not loaded")

    walker = TreeWalker(
        source_dir=state.sourceDir,
        html_dir=state.htmlOutputdir,
        capsule_dir=state.capsuleOutputdir,
        html_template=state.htmlTemplate,
        capsule_template=state.capsuleTemplate,
    )
    state.buildResult = walker.walk()
    return state


def extras_overlay(inputstate: ProgramState) -> ProgramState:
    """
    Overlay static extras (stylesheets, icons, apps) onto the output trees.

    Runs after all pages are written, so an extra file replaces a generated
    file with the same relative path. A missing extras directory is skipped.

    Returns:
        ProgramState with added field:
            - extrasCopied: extras directories that were copied
    """
    state = inputstate.copy()
    state.extrasCopied = []

    overlays = [
        (state.basedir / appsettings.html_extras_dirname, state.htmlOutputdir),
        (state.basedir / appsettings.capsule_extras_dirname, state.capsuleOutputdir),
    ]
    for extras_dir, output_dir in overlays:
        if not extras_dir.is_dir():
            LOG(f"No extras directory at {extras_dir}, skipping", level=2)
            continue
        LOG(f"Copying extra files from {extras_dir}...", level=1)
        shutil.copytree(extras_dir, output_dir, dirs_exist_ok=True)
        state.extrasCopied.append(extras_dir)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Log a summary of the build.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state = inputstate.copy()
    result = state.buildResult
    if result is None:
        raise ConfigurationError("Build produced no result")

    LOG("\n✓ Build completed!", level=1)
    LOG(f"  HTML pages:    {result.html_pages} -> {state.htmlOutputdir}", level=1)
    LOG(f"  Capsule pages: {result.capsule_pages} -> {state.capsuleOutputdir}", level=1)
    LOG(f"  Files copied:  {result.files_copied}", level=1)
    if result.failures:
        WARN(f"{len(result.failures)} file(s) could not be published")
        for failure in result.failures:
            LOG(f"  {failure.path}: {failure.message}", level=2)
    return state


def site_build(basedir: Path, verbosity: int = 1) -> ProgramState:
    """
    Build a website and a gemtext capsule from a site root.

    Args:
        basedir: Directory containing src/ and the extras directories
        verbosity: Logging verbosity level (0-3)

    Returns:
        Final ProgramState (buildResult holds counters and failures)

    Raises:
        ConfigurationError: On any fatal layout or template problem
    """
    state = ProgramState(basedir=Path(basedir), verbosity=verbosity)
    return site_buildFromState(state)


def site_buildFromState(state: ProgramState) -> ProgramState:
    """Run the build pipeline for an already populated ProgramState"""
    state_connectToLogger(state)
    return pipeline(state, env_check, outputs_clean, sources_build, extras_overlay, results_report)
