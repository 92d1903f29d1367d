"""Element template merging for fuller colour coverage."""

from __future__ import annotations

from pathlib import Path

from themeforge.core.jsonc import loads_jsonc
from themeforge.core.models import ThemeDocument, ThemeLoadError


def load_template(path: Path) -> ThemeDocument:
    """Load a JSONC element template."""
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeLoadError(f"Unable to read template {path}: {exc}") from exc
    return ThemeDocument.from_mapping(loads_jsonc(content, source=str(path)))


def merge_with_template(doc: ThemeDocument, template: ThemeDocument) -> ThemeDocument:
    """Fill gaps in ``doc`` from ``template``; entries of ``doc`` always win.

    Token rules are concatenated, template first, so the document's rules
    still come later and keep precedence downstream.
    """
    extras = dict(template.extras)
    extras.update(doc.extras)
    return ThemeDocument(
        name=doc.name,
        type=doc.type,
        colors={**template.colors, **doc.colors},
        token_colors=[*template.token_colors, *doc.token_colors],
        semantic_token_colors={**template.semantic_token_colors, **doc.semantic_token_colors},
        extras=extras,
        key_order=doc.key_order,
    )
