"""
Tree walker and file router

Visits every entry under the source directory and publishes each file into
both output trees:

- Gemtext files are transpiled into the HTML tree and wrapped into the
  capsule tree, from a single read of the source
- Hidden files (and directories) are skipped
- Everything else is copied byte-for-byte into both trees

Per-file problems are logged, recorded in the BuildResult, and do not stop
the walk. The two output trees are independent failure domains: a failure
while producing the HTML page does not prevent the capsule page.
"""

import shutil
from pathlib import Path
from typing import Dict, Optional

from ..config import AppSettings, appsettings
from ..models.routes import OutputKind, FileRoute
from ..models.state import BuildResult, BuildFailure
from ..models.template import WrapperTemplate
from .errors import PathStructureError
from .log import LOG, ERROR
from .transpiler import Transpiler
from .wrapper import capsule_wrap


def route_decide(path: Path, output: OutputKind, settings: AppSettings = appsettings) -> FileRoute:
    """
    Decide how a source file is published into one output tree

    Args:
        path: Source file path
        output: Which tree is being populated
        settings: Naming configuration

    Returns:
        IGNORE for hidden files; for gemtext files TRANSPILE (HTML) or
        PASSTHROUGH_WRAP (capsule); VERBATIM_COPY otherwise
    """
    if settings.hidden_is(path.name):
        return FileRoute.IGNORE
    if settings.markup_is(path):
        return FileRoute.TRANSPILE if output is OutputKind.HTML else FileRoute.PASSTHROUGH_WRAP
    return FileRoute.VERBATIM_COPY


def text_read(path: Path) -> str:
    """Read UTF-8 text without newline translation"""
    return path.read_bytes().decode("utf-8")


def text_write(path: Path, text: str) -> None:
    """Write UTF-8 text without newline translation, creating parents"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))


class TreeWalker:
    """
    Publishes a source tree into the HTML and capsule output trees

    Responsibilities:
    - Recursive, sorted visit of the source directory
    - Per-file, per-output routing
    - Output path mapping (re-rooting, .gmi -> .html for the HTML tree)
    - Logging and recording per-file failures
    """

    def __init__(
        self,
        source_dir: Path,
        html_dir: Path,
        capsule_dir: Path,
        html_template: WrapperTemplate,
        capsule_template: WrapperTemplate,
        settings: Optional[AppSettings] = None,
    ) -> None:
        """
        Initialize walker

        Args:
            source_dir: Root of the source tree
            html_dir: Root of the HTML output tree
            capsule_dir: Root of the capsule output tree
            html_template: Split HTML wrapper
            capsule_template: Split gemtext wrapper
            settings: Optional settings override (defaults to appsettings)
        """
        self.source_dir = Path(source_dir)
        self.output_dirs: Dict[OutputKind, Path] = {
            OutputKind.HTML: Path(html_dir),
            OutputKind.CAPSULE: Path(capsule_dir),
        }
        self.templates: Dict[OutputKind, WrapperTemplate] = {
            OutputKind.HTML: html_template,
            OutputKind.CAPSULE: capsule_template,
        }
        self.settings = settings or appsettings
        self.result = BuildResult()

    def walk(self) -> BuildResult:
        """
        Publish every file under the source directory

        Returns:
            BuildResult with page/copy counters and recorded failures
        """
        LOG(f"Walking {self.source_dir}", level=2)
        self.dir_walk(self.source_dir)
        return self.result

    def dir_walk(self, directory: Path) -> None:
        """Recursively visit a directory in sorted name order"""
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            self.failure_record(directory, None, f"Could not list directory: {e}")
            return

        for entry in entries:
            if self.settings.hidden_is(entry.name):
                LOG(f"Skipping hidden entry {entry}", level=3)
                continue
            if entry.is_symlink() and entry.is_dir():
                # may point back up the tree
                LOG(f"Skipping symlinked directory {entry}", level=2)
                continue
            if entry.is_dir():
                self.dir_walk(entry)
            else:
                self.file_build(entry)

    def file_build(self, path: Path) -> None:
        """
        Publish one source file into both output trees

        The source is read at most once; each output tree is then produced
        in its own try block.
        """
        routes = {output: route_decide(path, output, self.settings) for output in OutputKind}

        source: Optional[str] = None
        if any(route in (FileRoute.TRANSPILE, FileRoute.PASSTHROUGH_WRAP) for route in routes.values()):
            try:
                source = text_read(path)
            except (OSError, UnicodeDecodeError) as e:
                self.failure_record(path, None, f"Could not read source: {e}")
                return

        for output, route in routes.items():
            try:
                if route is FileRoute.TRANSPILE:
                    self.htmlPage_build(path, source or "")
                elif route is FileRoute.PASSTHROUGH_WRAP:
                    self.capsulePage_build(path, source or "")
                elif route is FileRoute.VERBATIM_COPY:
                    self.file_copy(path, output)
            except (OSError, PathStructureError) as e:
                self.failure_record(path, output, str(e))

    def outputPath_resolve(self, path: Path, output: OutputKind, extension: Optional[str] = None) -> Path:
        """
        Map a source path into an output tree

        Args:
            path: Source file path (must live under the source directory)
            output: Target tree
            extension: Replacement extension without leading dot, or None to keep

        Raises:
            PathStructureError: If the path is not under the source directory
                                or cannot take the new extension
        """
        try:
            relative = path.relative_to(self.source_dir)
        except ValueError as e:
            raise PathStructureError(f"{path} is not inside {self.source_dir}") from e

        target = self.output_dirs[output] / relative
        if extension is not None:
            try:
                target = target.with_suffix(f".{extension}")
            except ValueError as e:
                raise PathStructureError(f"Cannot give {target} the .{extension} extension") from e
        return target

    def htmlPage_build(self, path: Path, source: str) -> Path:
        """Transpile a gemtext source into the HTML tree"""
        LOG(f"Building HTML page from {path}", level=1)
        target = self.outputPath_resolve(path, OutputKind.HTML, self.settings.html_extension)
        body = Transpiler(source, settings=self.settings).render()
        text_write(target, self.templates[OutputKind.HTML].splice(body))
        self.result.html_pages += 1
        LOG(f"Wrote {target}", level=2)
        return target

    def capsulePage_build(self, path: Path, source: str) -> Path:
        """Wrap a gemtext source into the capsule tree"""
        LOG(f"Building gemtext page from {path}", level=1)
        target = self.outputPath_resolve(path, OutputKind.CAPSULE)
        text_write(target, capsule_wrap(source, self.templates[OutputKind.CAPSULE]))
        self.result.capsule_pages += 1
        LOG(f"Wrote {target}", level=2)
        return target

    def file_copy(self, path: Path, output: OutputKind) -> Path:
        """Copy a non-markup file into one output tree"""
        target = self.outputPath_resolve(path, output)
        target.parent.mkdir(parents=True, exist_ok=True)
        LOG(f"Copying file {path} to {output.value} tree", level=1)
        shutil.copy2(path, target)
        self.result.files_copied += 1
        return target

    def failure_record(self, path: Path, output: Optional[OutputKind], message: str) -> None:
        """Log a per-file failure and keep going"""
        where = f" ({output.value})" if output is not None else ""
        ERROR(f"Failed to publish {path}{where}: {message}")
        self.result.failures.append(BuildFailure(path=path, output=output, message=message))
