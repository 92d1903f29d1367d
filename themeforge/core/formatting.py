"""CSS fragments for single colour keys, scopes and style declarations."""

from __future__ import annotations

import re

from themeforge.core.constants import (
    CSS_VARIABLE_PREFIX,
    FALLBACK_SLUG,
    FONT_STYLE_DECLARATIONS,
    SEMANTIC_SELECTOR_PREFIX,
    TOKEN_FALLBACK_PREFIX,
)
from themeforge.core.models import SemanticColor, SemanticValue, TokenSettings

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")
_SLUG_INVALID_RE = re.compile(r"[^a-z0-9]")
_SLUG_REPEAT_RE = re.compile(r"-+")

Declaration = tuple[str, str]


def css_variable_name(key: str) -> str:
    """``editor.background`` -> ``--vscode-editor-background``."""
    return CSS_VARIABLE_PREFIX + key.replace(".", "-")


def color_key_from_variable(suffix: str) -> str:
    """Reverse of css_variable_name for the part after the prefix.

    Lossy: a dash that was part of the original key comes back as a dot.
    """
    return suffix.replace("-", ".")


def scope_class_name(scope: str) -> str:
    """CSS class name for a TextMate scope."""
    return _NON_ALNUM_RE.sub("-", scope)


def scope_from_class_name(class_name: str) -> str:
    """Best-effort scope for a class name written by scope_class_name."""
    return class_name.replace("-", ".")


def token_selector(scope: str | tuple[str, ...] | list[str] | None, index: int) -> str:
    """Selector for a token rule; scope-less rules fall back to their position."""
    if isinstance(scope, str) and scope:
        return "." + scope_class_name(scope)
    if isinstance(scope, (tuple, list)) and scope:
        return ", ".join("." + scope_class_name(item) for item in scope)
    return f"{TOKEN_FALLBACK_PREFIX}{index}"


def semantic_selector(scope: str) -> str:
    """Selector for a semantic token entry."""
    return SEMANTIC_SELECTOR_PREFIX + scope_class_name(scope)


def font_style_declarations(font_style: str | None) -> list[Declaration]:
    """One declaration per recognised fontStyle token, in token order."""
    if not font_style:
        return []
    return [
        FONT_STYLE_DECLARATIONS[token]
        for token in font_style.split()
        if token in FONT_STYLE_DECLARATIONS
    ]


def token_declarations(settings: TokenSettings | None) -> list[Declaration]:
    """Declarations for a token rule's settings, fontStyle decomposed."""
    if settings is None:
        return []
    declarations: list[Declaration] = []
    if settings.foreground:
        declarations.append(("color", settings.foreground))
    if settings.background:
        declarations.append(("background-color", settings.background))
    declarations.extend(font_style_declarations(settings.font_style))
    return declarations


def semantic_declarations(value: SemanticValue) -> list[Declaration]:
    """Declarations for a semantic token value."""
    # fontStyle is emitted verbatim here, unlike token rules.
    if isinstance(value, SemanticColor):
        return [("color", value.color)]
    declarations: list[Declaration] = []
    if value.foreground:
        declarations.append(("color", value.foreground))
    if value.background:
        declarations.append(("background-color", value.background))
    if value.font_style:
        declarations.append(("font-style", value.font_style))
    return declarations


def declaration(prop: str, value: str) -> str:
    """One indented ``prop: value;`` line."""
    return f"  {prop}: {value};"


def comment(text: str) -> str:
    """Wrap ``text`` in a CSS comment."""
    return f"/* {text} */"


def slugify(name: str) -> str:
    """Lowercase, hyphen-normalised identifier for package names."""
    slug = _SLUG_INVALID_RE.sub("-", name.lower())
    slug = _SLUG_REPEAT_RE.sub("-", slug)
    return slug.strip("-")


def package_slug(name: str) -> str:
    """Slug for an extension package name, never empty."""
    return slugify(name) or FALLBACK_SLUG
