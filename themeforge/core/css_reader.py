"""Best-effort inverse of css_writer for its own output subset."""

from __future__ import annotations

import re

from themeforge.core.constants import PARSED_THEME_TYPE
from themeforge.core.formatting import color_key_from_variable, scope_from_class_name
from themeforge.core.models import ThemeDocument, TokenRule, TokenSettings

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_VARIABLE_RE = re.compile(r"--vscode-([A-Za-z0-9_-]+)\s*:\s*([^;{}]+?)\s*;")
_RULE_RE = re.compile(r"(?:^|(?<=\}))([^{}]*)\{([^{}]*)\}")
_PROPERTY_RE = re.compile(r"([A-Za-z-]+)\s*:\s*([^;]+?)\s*;")
_CLASS_RE = re.compile(r"^\.([A-Za-z0-9_-]+)$")

# (css property, lowercased css value) -> fontStyle token
_FONT_STYLE_TOKENS: dict[tuple[str, str], str] = {
    ("font-weight", "bold"): "bold",
    ("font-style", "italic"): "italic",
    ("text-decoration", "underline"): "underline",
    ("text-decoration", "line-through"): "strikethrough",
}


def parse_css(css: str, theme_name: str) -> ThemeDocument:
    """Rebuild a theme document from CSS produced by render_css.

    Scope names and colour keys come back with every ``-`` read as ``.``,
    so keys or scopes that contained dashes are not restored exactly.
    """
    text = _COMMENT_RE.sub("", css)

    colors: dict[str, str] = {}
    for match in _VARIABLE_RE.finditer(text):
        colors[color_key_from_variable(match.group(1))] = match.group(2)

    token_colors: list[TokenRule] = []
    for match in _RULE_RE.finditer(text):
        class_names = _class_names(match.group(1))
        if not class_names:
            continue
        settings = _parse_body(match.group(2))
        if settings is None:
            continue
        scopes = tuple(scope_from_class_name(name) for name in class_names)
        token_colors.append(
            TokenRule(scope=scopes[0] if len(scopes) == 1 else scopes, settings=settings)
        )

    return ThemeDocument(
        name=theme_name,
        type=PARSED_THEME_TYPE,
        colors=colors,
        token_colors=token_colors,
    )


def _class_names(selector_text: str) -> list[str]:
    names: list[str] = []
    for part in selector_text.split(","):
        match = _CLASS_RE.match(part.strip())
        if match is None:
            continue
        name = match.group(1)
        if name.startswith("-") or "semantic-token" in name or name == "root":
            continue
        names.append(name)
    return names


def _parse_body(body: str) -> TokenSettings | None:
    foreground: str | None = None
    background: str | None = None
    font_styles: list[str] = []
    for match in _PROPERTY_RE.finditer(body):
        prop = match.group(1).lower()
        value = match.group(2)
        if prop == "color":
            foreground = value
        elif prop == "background-color":
            background = value
        else:
            token = _FONT_STYLE_TOKENS.get((prop, value.lower()))
            if token is not None and token not in font_styles:
                font_styles.append(token)

    if foreground is None and background is None and not font_styles:
        return None
    return TokenSettings(
        foreground=foreground,
        background=background,
        font_style=" ".join(font_styles) if font_styles else None,
    )
