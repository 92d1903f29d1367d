"""Single-theme VSIX packaging."""

from __future__ import annotations

import io
import json
import logging
import zipfile
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from themeforge.core.constants import (
    ARCHIVE_CONTENT_TYPES,
    ARCHIVE_PACKAGE_JSON,
    ARCHIVE_THEME_JSON,
    ARCHIVE_VSIX_MANIFEST,
    ENGINE_RANGE,
    PACKAGE_VERSION,
    PUBLISHER,
)
from themeforge.core.formatting import package_slug
from themeforge.core.models import ThemeDocument

logger = logging.getLogger(__name__)

_CONTENT_TYPES_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
    <Default Extension="json" ContentType="application/json" />
    <Default Extension="vsixmanifest" ContentType="text/xml" />
</Types>"""

_VSIX_MANIFEST_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<PackageManifest Version="2.0.0" xmlns="http://schemas.microsoft.com/developer/vsx-schema/2011">
    <Metadata>
        <Identity Id={id} Version={version} Language="en-US" Publisher={publisher} />
        <DisplayName>{display_name}</DisplayName>
        <Description>{description}</Description>
        <Categories>Themes</Categories>
    </Metadata>
    <Installation>
        <InstallationTarget Id="Microsoft.VisualStudio.Code" Version={engine} />
    </Installation>
    <Dependencies />
    <Assets>
        <Asset Type="Microsoft.VisualStudio.Code.Manifest" Path="{manifest_path}" Addressable="true" />
    </Assets>
</PackageManifest>"""


def build_package_manifest(
    doc: ThemeDocument,
    theme_name: str,
    *,
    version: str = PACKAGE_VERSION,
    engine_range: str = ENGINE_RANGE,
) -> dict[str, Any]:
    """Return the ``extension/package.json`` content for one theme."""
    return {
        "name": package_slug(theme_name),
        "displayName": theme_name,
        "description": f"Custom VS Code theme: {theme_name}",
        "version": version,
        "engines": {"vscode": engine_range},
        "categories": ["Themes"],
        "contributes": {
            "themes": [
                {
                    "label": theme_name,
                    "uiTheme": "vs" if doc.type == "light" else "vs-dark",
                    "path": "./themes/theme.json",
                }
            ]
        },
    }


def content_types_xml() -> str:
    return _CONTENT_TYPES_TEMPLATE


def vsix_manifest_xml(manifest: dict[str, Any], *, publisher: str = PUBLISHER) -> str:
    return _VSIX_MANIFEST_TEMPLATE.format(
        id=quoteattr(manifest["name"]),
        version=quoteattr(manifest["version"]),
        publisher=quoteattr(publisher),
        display_name=escape(manifest["displayName"]),
        description=escape(manifest["description"]),
        engine=quoteattr(manifest["engines"]["vscode"]),
        manifest_path=ARCHIVE_PACKAGE_JSON,
    )


def build_archive(
    doc: ThemeDocument,
    theme_name: str,
    *,
    publisher: str = PUBLISHER,
    version: str = PACKAGE_VERSION,
    engine_range: str = ENGINE_RANGE,
) -> bytes:
    """Zip ``doc`` into an installable single-theme extension archive."""
    manifest = build_package_manifest(doc, theme_name, version=version, engine_range=engine_range)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(ARCHIVE_PACKAGE_JSON, json.dumps(manifest, indent=2))
        archive.writestr(ARCHIVE_THEME_JSON, json.dumps(doc.to_dict(), indent=2))
        archive.writestr(ARCHIVE_CONTENT_TYPES, content_types_xml())
        archive.writestr(ARCHIVE_VSIX_MANIFEST, vsix_manifest_xml(manifest, publisher=publisher))
    return buffer.getvalue()


def write_archive(doc: ThemeDocument, theme_name: str, dest: Path, **kwargs: str) -> Path:
    """Build the archive for ``doc`` and write it to ``dest``."""
    data = build_archive(doc, theme_name, **kwargs)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(data)
    logger.info("wrote archive %s (%d bytes)", dest, len(data))
    return dest
