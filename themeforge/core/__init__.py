"""Theme transcoding core exports."""

from themeforge.core.css_reader import parse_css
from themeforge.core.css_writer import render_css
from themeforge.core.loader import (
    ConversionOptions,
    extract_theme,
    load_documents,
    load_from_archive,
    load_from_json,
)
from themeforge.core.models import (
    ArchiveError,
    KeyCollisionError,
    SemanticColor,
    SemanticStyle,
    ThemeDocument,
    ThemeLoadError,
    ThemeStructureError,
    TokenRule,
    TokenSettings,
    UnsupportedFormatError,
)
from themeforge.core.packager import build_archive

__all__ = [
    "ArchiveError",
    "ConversionOptions",
    "KeyCollisionError",
    "SemanticColor",
    "SemanticStyle",
    "ThemeDocument",
    "ThemeLoadError",
    "ThemeStructureError",
    "TokenRule",
    "TokenSettings",
    "UnsupportedFormatError",
    "build_archive",
    "extract_theme",
    "load_documents",
    "load_from_archive",
    "load_from_json",
    "parse_css",
    "render_css",
]
