"""Tests for themeforge.core.exporter."""

from __future__ import annotations

import json
from pathlib import Path
import zipfile

import pytest

from themeforge.core.exporter import (
    EXPORT_FORMATS,
    convert_css_to_theme,
    convert_theme_to_css,
    export_all,
    export_as_css,
    export_as_json,
    export_as_vsix,
    export_one,
    export_path,
)
from themeforge.core.loader import ConversionOptions
from themeforge.core.models import KeyCollisionError, ThemeDocument

_THEME = {
    "name": "Inner Name",
    "type": "dark",
    "colors": {"editor.background": "#1e1e1e"},
    "tokenColors": [{"scope": "comment", "settings": {"foreground": "#6a9955"}}],
}


def test_convert_accepts_mapping_and_document():
    assert convert_theme_to_css(_THEME) == convert_theme_to_css(ThemeDocument.from_mapping(_THEME))


def test_convert_strict_option():
    theme = {"colors": {"a.b": "#000", "a-b": "#fff"}}
    with pytest.raises(KeyCollisionError):
        convert_theme_to_css(theme, ConversionOptions(strict_keys=True))


def test_convert_css_to_theme_returns_plain_dict():
    theme = convert_css_to_theme(":root { --vscode-editor-background: #000; }", "Back")
    assert theme["name"] == "Back"
    assert theme["type"] == "dark"
    assert theme["colors"] == {"editor.background": "#000"}
    json.dumps(theme)


def test_export_as_css_uses_given_name(tmp_path: Path):
    path = export_as_css(_THEME, "Outer", tmp_path / "nested" / "out.css")
    assert path.read_text(encoding="utf-8").startswith("/* Theme: Outer */")


def test_export_as_json_renames(tmp_path: Path):
    path = export_as_json(_THEME, "Renamed", tmp_path / "out.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["name"] == "Renamed"
    assert data["colors"] == _THEME["colors"]


def test_export_as_vsix_package_kwargs(tmp_path: Path):
    path = export_as_vsix(_THEME, "Packed", tmp_path / "out.vsix", publisher="acme", version="0.2.0")
    with zipfile.ZipFile(path) as archive:
        manifest = json.loads(archive.read("extension/package.json"))
        theme = json.loads(archive.read("extension/themes/theme.json"))
        vsixmanifest = archive.read("extension.vsixmanifest").decode("utf-8")
    assert manifest["version"] == "0.2.0"
    assert theme["name"] == "Packed"
    assert 'Publisher="acme"' in vsixmanifest


def test_export_path_uses_slug(tmp_path: Path):
    assert export_path(tmp_path, "My Theme!", "css") == tmp_path / "my-theme.css"


def test_export_all_formats(tmp_path: Path):
    written = export_all(_THEME, "All Formats", tmp_path)
    assert [path.name for path in written] == ["all-formats.css", "all-formats.json", "all-formats.vsix"]
    assert all(path.exists() for path in written)


def test_export_all_subset(tmp_path: Path):
    written = export_all(_THEME, "Only", tmp_path, ["json"])
    assert [path.suffix for path in written] == [".json"]


def test_export_one_rejects_unknown_format(tmp_path: Path):
    with pytest.raises(ValueError, match="Unknown export format"):
        export_one(ThemeDocument.from_mapping(_THEME), "x", tmp_path, "pdf")


def test_export_formats_constant():
    assert EXPORT_FORMATS == ("css", "json", "vsix")


@pytest.mark.parametrize(
    "func",
    [convert_theme_to_css, convert_css_to_theme, export_as_css, export_as_json, export_as_vsix, export_path, export_one, export_all],
)
def test_public_functions_are_documented(func):
    assert func.__doc__ and func.__doc__.strip()
