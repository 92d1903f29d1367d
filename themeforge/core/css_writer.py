"""Render a theme document as CSS custom properties and class rules."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Mapping

from themeforge.core.constants import SECTION_COLORS, SECTION_SEMANTIC, SECTION_TOKENS
from themeforge.core.formatting import (
    comment,
    css_variable_name,
    declaration,
    semantic_declarations,
    semantic_selector,
    token_declarations,
    token_selector,
)
from themeforge.core.models import KeyCollisionError, ThemeDocument


def render_css(
    doc: ThemeDocument,
    *,
    label: str | None = None,
    include_timestamp: bool = False,
    strict: bool = False,
    now: datetime | None = None,
) -> str:
    """Render ``doc`` to CSS text.

    Sections appear in a fixed order: header, ``:root`` colours, token
    rules, semantic token rules. Sections whose source mapping or list is empty are omitted.
    """
    if strict:
        check_color_collisions(doc.colors)

    lines: list[str] = [
        comment(f"Theme: {label or doc.name}"),
        comment(f"Type: {doc.type}"),
    ]
    if include_timestamp:
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        lines.append(comment(f"Generated: {stamp}"))
    lines.append("")

    if doc.colors:
        lines.append(comment(SECTION_COLORS))
        lines.append(":root {")
        for key, value in doc.colors.items():
            lines.append(declaration(css_variable_name(key), value))
        lines.append("}")
        lines.append("")

    if doc.token_colors:
        lines.append(comment(SECTION_TOKENS))
        for index, rule in enumerate(doc.token_colors):
            declarations = token_declarations(rule.settings)
            if not declarations:
                continue
            lines.append(f"{token_selector(rule.scope, index)} {{")
            lines.extend(declaration(prop, value) for prop, value in declarations)
            lines.append("}")
            lines.append("")

    if doc.semantic_token_colors:
        lines.append(comment(SECTION_SEMANTIC))
        for scope, value in doc.semantic_token_colors.items():
            lines.append(f"{semantic_selector(scope)} {{")
            lines.extend(declaration(prop, val) for prop, val in semantic_declarations(value))
            lines.append("}")
            lines.append("")

    return "\n".join(lines)


def render_mapping(raw: Mapping[str, object], **kwargs) -> str:
    """Render a raw theme mapping; structural errors surface before any output."""
    return render_css(ThemeDocument.from_mapping(raw), **kwargs)


def render_css_many(
    documents: Iterable[tuple[ThemeDocument, str | None]],
    **kwargs,
) -> str:
    """Render several documents (e.g. all themes of one archive) into one text."""
    return "\n".join(render_css(doc, label=label, **kwargs) for doc, label in documents)


def check_color_collisions(colors: Mapping[str, str]) -> None:
    seen: dict[str, list[str]] = {}
    for key in colors:
        seen.setdefault(css_variable_name(key), []).append(key)
    collisions = {prop: keys for prop, keys in seen.items() if len(keys) > 1}
    if collisions:
        raise KeyCollisionError(collisions)
