"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use TWINSITE_ prefix (e.g., TWINSITE_STRICT_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use TWINSITE_ prefix.

    Examples:
        TWINSITE_SOURCE_DIRNAME=content
        TWINSITE_CONTENT_MARKER="<!-- BODY -->"
        TWINSITE_STRICT_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="TWINSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Source layout
    source_dirname: str = Field(
        default="src",
        description="Directory (relative to the site root) holding markup sources and wrappers",
    )

    html_extras_dirname: str = Field(
        default="www",
        description="Directory of static files overlaid onto the HTML output",
    )

    capsule_extras_dirname: str = Field(
        default="gemini",
        description="Directory of static files overlaid onto the capsule output",
    )

    html_wrapper_name: str = Field(
        default="_wrapper.html",
        description="HTML wrapper template filename inside the source directory",
    )

    capsule_wrapper_name: str = Field(
        default="_wrapper.gmi",
        description="Gemtext wrapper template filename inside the source directory",
    )

    # Output layout
    serve_dirname: str = Field(
        default="srv",
        description="Output root (relative to the site root), wiped on every build",
    )

    html_output_dirname: str = Field(
        default="www",
        description="HTML website subtree inside the output root",
    )

    capsule_output_dirname: str = Field(
        default="gemini",
        description="Gemtext capsule subtree inside the output root",
    )

    # Markup and routing
    content_marker: str = Field(
        default="<!-- CONTENT -->",
        description="Literal marker separating wrapper header from footer",
    )

    hidden_prefix: str = Field(
        default="_",
        description="Entries whose name starts with this prefix are not published",
    )

    markup_extension: str = Field(
        default="gmi",
        description="Extension of gemtext source files (without leading dot)",
    )

    html_extension: str = Field(
        default="html",
        description="Extension given to transpiled pages (without leading dot)",
    )

    image_extensions: List[str] = Field(
        default=["jpg", "gif", "png", "svg", "webp"],
        description="Link targets with these extensions are rendered as images",
    )

    # Build behaviour
    strict_mode: bool = Field(
        default=False,
        description="Strict mode: a build with per-file failures exits non-zero",
    )

    def image_is(self, target: str) -> bool:
        """
        Check whether a link target points at an image.

        The comparison is case-insensitive; the target itself is not modified.

        Example:
            >>> settings = AppSettings()
            >>> settings.image_is("http://x/pic.PNG")
            True
        """
        lowered = target.lower()
        return any(lowered.endswith(f".{ext.lower()}") for ext in self.image_extensions)

    def markup_is(self, path: Path) -> bool:
        """Check whether a file carries the markup extension"""
        return path.suffix == f".{self.markup_extension}"

    def hidden_is(self, name: str) -> bool:
        """Check whether an entry name is reserved (templates, drafts)"""
        return bool(self.hidden_prefix) and name.startswith(self.hidden_prefix)


# Singleton instance - import this in your code
appsettings = AppSettings()
