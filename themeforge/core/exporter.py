"""Conversion and export entry points used by the CLI and session layer."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

from themeforge.core.constants import ENGINE_RANGE, PACKAGE_VERSION, PUBLISHER
from themeforge.core.css_reader import parse_css
from themeforge.core.css_writer import render_css
from themeforge.core.formatting import package_slug
from themeforge.core.loader import ConversionOptions
from themeforge.core.models import ThemeDocument
from themeforge.core.packager import write_archive
from themeforge.core.template import load_template, merge_with_template

logger = logging.getLogger(__name__)

EXPORT_FORMATS: tuple[str, ...] = ("css", "json", "vsix")

ThemeLike = ThemeDocument | Mapping[str, Any]


def as_document(theme: ThemeLike) -> ThemeDocument:
    """Accept a document or a raw theme mapping."""
    if isinstance(theme, ThemeDocument):
        return theme
    return ThemeDocument.from_mapping(theme)


def convert_theme_to_css(theme: ThemeLike, options: ConversionOptions | None = None) -> str:
    """Render a theme to CSS, applying the optional template merge."""
    options = options or ConversionOptions()
    doc = as_document(theme)
    if options.merge_template is not None:
        doc = merge_with_template(doc, load_template(options.merge_template))
    return render_css(doc, include_timestamp=options.include_timestamp, strict=options.strict_keys)


def convert_css_to_theme(css: str, name: str) -> dict[str, Any]:
    """Rebuild a plain theme mapping from generated CSS."""
    return parse_css(css, name).to_dict()


def export_as_css(
    theme: ThemeLike,
    name: str,
    destination: Path,
    options: ConversionOptions | None = None,
) -> Path:
    """Write ``theme`` as CSS headed with ``name``."""
    options = options or ConversionOptions()
    doc = as_document(theme)
    css = render_css(
        doc,
        label=name,
        include_timestamp=options.include_timestamp,
        strict=options.strict_keys,
    )
    return _write_text(destination, css)


def export_as_json(theme: ThemeLike, name: str, destination: Path) -> Path:
    """Write ``theme`` as indented JSON under ``name``."""
    doc = as_document(theme).renamed(name)
    return _write_text(destination, json.dumps(doc.to_dict(), indent=2))


def export_as_vsix(
    theme: ThemeLike,
    name: str,
    destination: Path,
    *,
    publisher: str = PUBLISHER,
    version: str = PACKAGE_VERSION,
    engine_range: str = ENGINE_RANGE,
) -> Path:
    """Package ``theme`` as an installable archive under ``name``."""
    doc = as_document(theme).renamed(name)
    return write_archive(
        doc,
        name,
        destination,
        publisher=publisher,
        version=version,
        engine_range=engine_range,
    )


def export_path(directory: Path, name: str, fmt: str) -> Path:
    """Destination ``<slug>.<fmt>`` inside ``directory``."""
    return directory / f"{package_slug(name)}.{fmt}"


def export_all(
    theme: ThemeLike,
    name: str,
    directory: Path,
    formats: Iterable[str] = EXPORT_FORMATS,
    *,
    options: ConversionOptions | None = None,
    **package_kwargs: str,
) -> list[Path]:
    """Write ``theme`` in each requested format into ``directory``."""
    doc = as_document(theme)
    written: list[Path] = []
    for fmt in formats:
        written.append(export_one(doc, name, directory, fmt, options=options, **package_kwargs))
    return written


def export_one(
    doc: ThemeDocument,
    name: str,
    directory: Path,
    fmt: str,
    *,
    options: ConversionOptions | None = None,
    **package_kwargs: str,
) -> Path:
    """Write one format; unknown formats raise ValueError."""
    target = export_path(directory, name, fmt)
    if fmt == "css":
        path = export_as_css(doc, name, target, options)
    elif fmt == "json":
        path = export_as_json(doc, name, target)
    elif fmt == "vsix":
        path = export_as_vsix(doc, name, target, **package_kwargs)
    else:
        raise ValueError(f"Unknown export format {fmt!r}; expected one of {', '.join(EXPORT_FORMATS)}")
    logger.info("exported %s as %s to %s", name, fmt, path)
    return path


def _write_text(destination: Path, content: str) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(content, encoding="utf-8")
    return destination
