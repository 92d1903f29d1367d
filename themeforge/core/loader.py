"""Read theme documents from JSON/JSONC files and extension archives."""

from __future__ import annotations

import logging
import posixpath
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from themeforge.core.constants import (
    ARCHIVE_EXTENSION_ROOT,
    ARCHIVE_EXTENSIONS,
    ARCHIVE_PACKAGE_JSON,
    JSON_EXTENSIONS,
)
from themeforge.core.css_writer import render_css_many
from themeforge.core.jsonc import loads_jsonc
from themeforge.core.models import (
    ArchiveError,
    ThemeDocument,
    ThemeLoadError,
    UnsupportedFormatError,
)
from themeforge.core.template import load_template, merge_with_template

logger = logging.getLogger(__name__)

_MAX_THEME_BYTES = 16 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Per-call switches for the optional conversion behaviours."""

    include_timestamp: bool = False
    strict_keys: bool = False
    merge_template: Path | None = None


def check_format(path: Path) -> str:
    """Return ``"json"`` or ``"archive"`` for ``path`` or raise."""
    suffix = path.suffix.lower()
    if suffix in JSON_EXTENSIONS:
        return "json"
    if suffix in ARCHIVE_EXTENSIONS:
        return "archive"
    supported = ", ".join(JSON_EXTENSIONS + ARCHIVE_EXTENSIONS)
    raise UnsupportedFormatError(
        f"Unsupported file format {suffix or '(none)'!r} for {path.name}; expected one of {supported}"
    )


def load_from_json(path: Path) -> ThemeDocument:
    """Load a ``.json`` or ``.jsonc`` theme file."""
    content = _read_text_limited(path)
    return ThemeDocument.from_mapping(loads_jsonc(content, source=str(path)))


def load_from_archive(path: Path) -> list[tuple[ThemeDocument, str]]:
    """Load every theme contributed by a ``.vsix`` archive with its label."""
    try:
        with zipfile.ZipFile(path) as archive:
            names = set(archive.namelist())
            if ARCHIVE_PACKAGE_JSON not in names:
                raise ArchiveError(f"Invalid VSIX {path.name}: {ARCHIVE_PACKAGE_JSON} not found")
            package = _read_archive_json(archive, ARCHIVE_PACKAGE_JSON, path)
            contributions = _theme_contributions(package, path)

            results: list[tuple[ThemeDocument, str]] = []
            for contribution in contributions:
                entry = _resolve_theme_entry(contribution, names, path)
                logger.debug("reading theme %s from %s", entry, path)
                doc = ThemeDocument.from_mapping(_read_archive_json(archive, entry, path))
                label = contribution.get("label")
                results.append((doc, label if isinstance(label, str) and label else doc.name))
            return results
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"{path.name} is not a valid zip archive: {exc}") from exc
    except OSError as exc:
        raise ThemeLoadError(f"Unable to read {path}: {exc}") from exc


def load_documents(path: Path) -> list[tuple[ThemeDocument, str]]:
    """Load all documents from a theme source, dispatching on extension."""
    kind = check_format(path)
    if kind == "json":
        doc = load_from_json(path)
        return [(doc, doc.name)]
    return load_from_archive(path)


def extract_theme(path: Path, options: ConversionOptions | None = None) -> str:
    """Load a theme source and render it to CSS text."""
    options = options or ConversionOptions()
    documents = load_documents(path)
    if options.merge_template is not None:
        template = load_template(options.merge_template)
        documents = [(merge_with_template(doc, template), label) for doc, label in documents]
    return render_css_many(
        documents,
        include_timestamp=options.include_timestamp,
        strict=options.strict_keys,
    )


def _theme_contributions(package: Any, path: Path) -> list[Mapping[str, Any]]:
    contributes = package.get("contributes") if isinstance(package, Mapping) else None
    themes = contributes.get("themes") if isinstance(contributes, Mapping) else None
    if not isinstance(themes, list) or not themes:
        raise ArchiveError(f"No themes found in VSIX package {path.name}")
    contributions = [item for item in themes if isinstance(item, Mapping)]
    if len(contributions) != len(themes):
        raise ArchiveError(f"{path.name}: contributes.themes entries must be objects")
    return contributions


def _resolve_theme_entry(contribution: Mapping[str, Any], names: set[str], path: Path) -> str:
    theme_path = contribution.get("path")
    if not isinstance(theme_path, str) or not theme_path.strip():
        raise ArchiveError(f"{path.name}: theme contribution is missing a path")
    candidates = (
        posixpath.normpath(posixpath.join(ARCHIVE_EXTENSION_ROOT, theme_path)),
        posixpath.normpath(theme_path),
    )
    for candidate in candidates:
        if candidate in names:
            return candidate
    raise ArchiveError(f"Theme file {theme_path} not found in {path.name}")


def _read_archive_json(archive: zipfile.ZipFile, entry: str, path: Path) -> Any:
    info = archive.getinfo(entry)
    if info.file_size > _MAX_THEME_BYTES:
        raise ArchiveError(f"{path.name}: {entry} exceeds max size ({_MAX_THEME_BYTES} bytes)")
    try:
        content = archive.read(entry).decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ArchiveError(f"{path.name}: {entry} is not UTF-8: {exc}") from exc
    return loads_jsonc(content, source=f"{path.name}:{entry}")


def _read_text_limited(path: Path) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ThemeLoadError(f"Unable to stat {path}: {exc}") from exc
    if size > _MAX_THEME_BYTES:
        raise ThemeLoadError(f"{path}: file exceeds max size ({_MAX_THEME_BYTES} bytes)")
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeLoadError(f"Unable to read {path}: {exc}") from exc
