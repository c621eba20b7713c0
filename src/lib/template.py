"""
Wrapper template splitting and splicing

A wrapper template is any text file containing the content marker
(<!-- CONTENT --> by default). Text before the marker is the header, text
after it is the footer; generated page bodies are spliced in between.
"""

from pathlib import Path
from typing import Optional

from ..config import appsettings
from ..models.template import WrapperTemplate
from .errors import ConfigurationError, MalformedTemplateError
from .log import LOG, WARN


def template_split(text: str, marker: Optional[str] = None) -> WrapperTemplate:
    """
    Split template text at the first occurrence of the marker

    Args:
        text: Full template text
        marker: Literal marker (defaults to appsettings.content_marker)

    Returns:
        WrapperTemplate with header and footer

    Raises:
        MalformedTemplateError: If the marker does not occur in the text

    Example:
        >>> template_split("HEADER<!-- CONTENT -->FOOTER")
        WrapperTemplate(header='HEADER', footer='FOOTER')
    """
    marker = marker if marker is not None else appsettings.content_marker

    count = text.count(marker)
    if count < 1:
        raise MalformedTemplateError(f"Template does not contain the content marker '{marker}'")
    if count > 1:
        WARN(f"Template contains the content marker {count} times, splitting at the first one")

    header, footer = text.split(marker, 1)
    return WrapperTemplate(header=header, footer=footer)


def content_splice(template_text: str, content: str, marker: Optional[str] = None) -> str:
    """
    Split a template and place content between its header and footer

    Example:
        >>> content_splice("HEADER<!-- CONTENT -->FOOTER", "BODY")
        'HEADERBODYFOOTER'
    """
    return template_split(template_text, marker).splice(content)


def template_load(path: Path, marker: Optional[str] = None) -> WrapperTemplate:
    """
    Read and split a wrapper template file

    Raises:
        ConfigurationError: If the file is missing or unreadable
        MalformedTemplateError: If the marker is absent
    """
    if not path.is_file():
        raise ConfigurationError(f"Wrapper template ({path}) not found")

    try:
        # bytes, so CRLF headers and footers survive untranslated
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Wrapper template ({path}) could not be read: {e}") from e

    try:
        template = template_split(text, marker)
    except MalformedTemplateError as e:
        raise MalformedTemplateError(f"Wrapper template ({path}) is malformed: {e}") from e

    LOG(f"Loaded wrapper template {path.name}", level=2)
    return template
