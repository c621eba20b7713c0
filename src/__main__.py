#!/usr/bin/env python3
"""
twinsite - Build a static website and a gemtext capsule in parallel

Reads a tree of gemtext (.gmi) sources and publishes it twice: once as an
HTML website, once as a gemtext capsule, each wrapped in its own header and
footer template.

Layout:
    <site>/src/             gemtext pages, other files, _wrapper.html, _wrapper.gmi
    <site>/www/             static extras overlaid onto the website
    <site>/gemini/          static extras overlaid onto the capsule
    <site>/srv/www/         generated website   (wiped on every build)
    <site>/srv/gemini/      generated capsule   (wiped on every build)

Usage:
    twinsite init [path]
    twinsite build [path]

    Paths are optional and default to the current directory.

Examples:
    # Start a new site in ./mysite
    twinsite init mysite

    # Build it, with verbose output
    twinsite build mysite -v
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import site_init, __version__, LOG, state_connectToLogger
from .lib.builder import site_buildFromState
from .lib.errors import BuildError
from .models import ProgramState


DISPLAY_TITLE = r"""
  _             _         _ _
 | |___      __(_)_ __  ___(_) |_ ___
 | __\ \ /\ / /| | '_ \/ __| | __/ _ \
 | |_ \ V  V / | | | | \__ \ | ||  __/
  \__| \_/\_/  |_|_| |_|___/_|\__\___|

  Static website + gemtext capsule builder
"""

# Define CLI arguments
parser = ArgumentParser(
    prog="twinsite",
    description="twinsite - Build a static web site and a gemini capsule in parallel",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

# -v given after the subcommand is counted separately and added in options_parse()
common_parser = ArgumentParser(add_help=False)
common_parser.add_argument(
    "-v",
    "--verbosity",
    dest="verbosityExtra",
    action="count",
    default=0,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

subparsers = parser.add_subparsers(dest="command")

init_parser = subparsers.add_parser(
    "init",
    parents=[common_parser],
    help="Initialize directories and required files for a specified path",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
init_parser.add_argument("path", nargs="?", default=".", help="Site root directory")

build_parser = subparsers.add_parser(
    "build",
    parents=[common_parser],
    help="Build a website and a gemini capsule from a specified path",
    formatter_class=ArgumentDefaultsHelpFormatter,
)
build_parser.add_argument("path", nargs="?", default=".", help="Site root directory")


def init_run(options: Namespace) -> int:
    """
    Scaffold a new site.

    Returns:
        Process exit status
    """
    state = ProgramState.state_createFromNamespace(options=options, basedir=Path(options.path))
    state_connectToLogger(state)

    LOG(f"Initializing directory {state.basedir}", level=1)
    try:
        created = site_init(state.basedir)
    except OSError as e:
        print(f"Initialization error: {e}", file=sys.stderr)
        return 1

    LOG(f"Initialization completed! ({len(created)} new entries)", level=1)
    return 0


def build_run(options: Namespace) -> int:
    """
    Build the website and the capsule.

    Returns:
        Process exit status: 1 on fatal errors, and in strict mode also when
        any file could not be published
    """
    basedir = Path.cwd() / options.path
    state = ProgramState.state_createFromNamespace(options=options, basedir=basedir)

    if state.verbosity >= 2:
        state_connectToLogger(state)
        LOG(DISPLAY_TITLE, level=2)

    try:
        final = site_buildFromState(state)
    except (BuildError, OSError) as e:
        print(f"Build error: {e}", file=sys.stderr)
        return 1

    if appsettings.strict_mode and final.buildResult and not final.buildResult.ok:
        print("Build error: strict mode is on and some files failed", file=sys.stderr)
        return 1
    return 0


def options_parse(argv: Optional[List[str]] = None) -> Namespace:
    """
    Parse CLI arguments, merging -v counts given before and after the subcommand.
    """
    options = parser.parse_args(argv)
    options.verbosity += getattr(options, "verbosityExtra", 0)
    return options


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - dispatch to `init` or `build`.

    Without a command, prints usage and returns 0.
    """
    options = options_parse(argv)

    if options.command == "init":
        return init_run(options)
    if options.command == "build":
        return build_run(options)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
