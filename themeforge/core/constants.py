"""Transcoder constants."""

from __future__ import annotations

DEFAULT_THEME_NAME = "VS Code Theme"
DEFAULT_THEME_TYPE = "unknown"
PARSED_THEME_TYPE = "dark"

CSS_VARIABLE_PREFIX = "--vscode-"
SEMANTIC_SELECTOR_PREFIX = ".semantic-token-"
TOKEN_FALLBACK_PREFIX = ".token-"

SECTION_COLORS = "EDITOR COLORS"
SECTION_TOKENS = "SYNTAX HIGHLIGHTING"
SECTION_SEMANTIC = "SEMANTIC TOKENS"

# fontStyle token -> (css property, css value), order of evaluation is the token order.
FONT_STYLE_DECLARATIONS: dict[str, tuple[str, str]] = {
    "italic": ("font-style", "italic"),
    "bold": ("font-weight", "bold"),
    "underline": ("text-decoration", "underline"),
    "strikethrough": ("text-decoration", "line-through"),
}

JSON_EXTENSIONS: tuple[str, ...] = (".json", ".jsonc")
ARCHIVE_EXTENSIONS: tuple[str, ...] = (".vsix",)

ARCHIVE_PACKAGE_JSON = "extension/package.json"
ARCHIVE_THEME_JSON = "extension/themes/theme.json"
ARCHIVE_CONTENT_TYPES = "[Content_Types].xml"
ARCHIVE_VSIX_MANIFEST = "extension.vsixmanifest"
ARCHIVE_EXTENSION_ROOT = "extension"

PACKAGE_VERSION = "1.0.0"
ENGINE_RANGE = "^1.60.0"
PUBLISHER = "custom"
FALLBACK_SLUG = "custom-theme"
