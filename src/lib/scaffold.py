"""
Site scaffolding for `twinsite init`

Creates the directories and starter files a build needs. Existing files
are never overwritten.
"""

from pathlib import Path
from typing import List, Tuple

from ..config import appsettings
from .log import LOG


HTML_WRAPPER = """<!DOCTYPE html>
<html>
<head>
<meta charset='utf-8'>
<meta name='viewport' content='width=device-width, initial-scale=1'>
<link rel='stylesheet' type='text/css' href='/site.css'>
<title>twinsite</title>
</head>
<body>
<div class='header'>
<h1><a href='/'>twinsite</a></h1>
<a href='/about.html'>About</a>
</div>
<div class='content'>
{marker}
</div>
<div class='footer'>
Built with twinsite
</div>
</body>
</html>
"""

CAPSULE_WRAPPER = """# twinsite capsule
=> / Home
=> /about.gmi About

{marker}

Built with twinsite
"""

INDEX_PAGE = """# Welcome

This page is published both as HTML and as gemtext.
=> /about.gmi About this site
"""

ABOUT_PAGE = """## About

This is a sample page displaying gemtext syntax

### Posts:
* Post 1
* Post 2
* Post 3

A quote
> The Earth is blue... how wonderful. It is amazing
- Yuri Gagarin

```
Some preformatted table or ascii art, perhaps?
```
"""

SITE_CSS = """body {
    background-color: #ffc;
    color: #042161;
}
"""


def scaffold_plan(basedir: Path) -> Tuple[List[Path], List[Tuple[Path, str]]]:
    """
    Directories and files that make up a fresh site

    Returns:
        (directories, [(file path, contents), ...])
    """
    marker = appsettings.content_marker
    source_dir = basedir / appsettings.source_dirname
    html_extras = basedir / appsettings.html_extras_dirname
    capsule_extras = basedir / appsettings.capsule_extras_dirname
    ext = appsettings.markup_extension

    directories = [basedir, source_dir, html_extras, capsule_extras]
    files = [
        (source_dir / appsettings.html_wrapper_name, HTML_WRAPPER.format(marker=marker)),
        (source_dir / appsettings.capsule_wrapper_name, CAPSULE_WRAPPER.format(marker=marker)),
        (source_dir / f"index.{ext}", INDEX_PAGE),
        (source_dir / f"about.{ext}", ABOUT_PAGE),
        (html_extras / "site.css", SITE_CSS),
    ]
    return directories, files


def site_init(basedir: Path) -> List[Path]:
    """
    Scaffold a site under basedir

    Args:
        basedir: Site root (created if missing)

    Returns:
        Paths that were created (directories and files); already existing
        paths are left alone and not listed

    Raises:
        OSError: If a directory or file cannot be created
    """
    basedir = Path(basedir)
    created: List[Path] = []
    directories, files = scaffold_plan(basedir)

    for directory in directories:
        if directory.exists():
            LOG(f"Directory ({directory}) already exists", level=1)
            continue
        directory.mkdir(parents=True, exist_ok=True)
        LOG(f"Initialized directory ({directory})", level=1)
        created.append(directory)

    for path, contents in files:
        if path.exists():
            LOG(f"File ({path}) already exists", level=1)
            continue
        path.write_text(contents, encoding="utf-8")
        LOG(f"Initialized file ({path})", level=1)
        created.append(path)

    return created
