"""Tests for the editing session."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from themeforge.core.loader import ConversionOptions
from themeforge.core.models import ThemeDocument, UnsupportedFormatError
from themeforge.session import ThemeSession


def _write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def theme_file(tmp_path: Path) -> Path:
    return _write_json(
        tmp_path / "night.json",
        {
            "name": "Night",
            "type": "dark",
            "colors": {"editor.background": "#000000"},
            "tokenColors": [{"scope": "comment", "settings": {"foreground": "#888888"}}],
        },
    )


class TestLoad:
    def test_load_returns_css_and_emits(self, theme_file: Path):
        session = ThemeSession()
        received = []
        session.document_changed.connect(lambda doc: received.append(doc))

        css = session.load(theme_file)

        assert css.startswith("/* Theme: Night */")
        assert session.label == "Night"
        assert session.current_document.colors == {"editor.background": "#000000"}
        assert received == [session.current_document]
        assert session.can_undo is False

    def test_load_error_emits_and_raises(self, tmp_path: Path):
        session = ThemeSession()
        messages = []
        session.error.connect(lambda message: messages.append(message))

        with pytest.raises(UnsupportedFormatError):
            session.load(tmp_path / "notes.txt")
        assert len(messages) == 1
        assert session.current_document is None

    def test_load_merges_template(self, theme_file: Path, tmp_path: Path):
        template = _write_json(tmp_path / "tpl.json", {"colors": {"editor.background": "#fff", "x.y": "#123"}})
        session = ThemeSession(ConversionOptions(merge_template=template))
        session.load(theme_file)
        assert session.current_document.colors == {"editor.background": "#000000", "x.y": "#123"}


class TestEditing:
    def test_set_color_and_undo(self, theme_file: Path):
        session = ThemeSession()
        session.load(theme_file)
        original = session.current_document

        session.set_color("editor.foreground", "#ffffff")

        assert session.current_document.colors["editor.foreground"] == "#ffffff"
        assert "editor.foreground" not in original.colors
        assert session.can_undo is True
        assert session.undo() is original
        assert session.undo() is None

    def test_undo_restores_label(self, theme_file: Path):
        session = ThemeSession()
        session.load(theme_file)
        session.apply_css(".keyword { color: #569cd6; }", "Edited")
        assert session.label == "Edited"

        restored = session.undo()

        assert restored.name == "Night"
        assert session.label == "Night"
        assert session.current_css().startswith("/* Theme: Night */")

    def test_set_color_without_document(self):
        with pytest.raises(RuntimeError):
            ThemeSession().set_color("a", "#000")

    def test_apply_css(self, theme_file: Path):
        session = ThemeSession()
        session.load(theme_file)
        doc = session.apply_css(".keyword { color: #569cd6; }")
        assert doc.name == "Night"
        assert doc.type == "dark"
        assert [rule.scope for rule in doc.token_colors] == ["keyword"]
        assert len(session.history) == 1

    def test_set_document_copies(self):
        session = ThemeSession()
        doc = ThemeDocument.from_mapping({"name": "Given", "colors": {"a": "#000"}})
        session.set_document(doc)
        doc.colors["a"] = "#fff"
        assert session.current_document.colors == {"a": "#000"}
        assert session.label == "Given"

    def test_history_limit(self, theme_file: Path):
        session = ThemeSession(history_limit=3)
        session.load(theme_file)
        for index in range(6):
            session.set_color("editor.background", f"#00000{index}")
        assert len(session.history) == 3
        assert session.history[0].colors["editor.background"] == "#000002"

    def test_current_css_empty_without_document(self):
        assert ThemeSession().current_css() == ""


class TestExport:
    def test_export_uses_label(self, theme_file: Path, tmp_path: Path):
        session = ThemeSession()
        session.load(theme_file)
        path = session.export("json", tmp_path / "out")
        assert path == tmp_path / "out" / "night.json"
        assert json.loads(path.read_text(encoding="utf-8"))["name"] == "Night"

    def test_export_vsix_with_name(self, theme_file: Path, tmp_path: Path):
        session = ThemeSession()
        session.load(theme_file)
        path = session.export("vsix", tmp_path, name="Night Owl", publisher="acme")
        assert path.name == "night-owl.vsix"

    def test_export_unknown_format(self, theme_file: Path, tmp_path: Path):
        session = ThemeSession()
        session.load(theme_file)
        with pytest.raises(ValueError):
            session.export("pdf", tmp_path)

    def test_export_without_document(self, tmp_path: Path):
        with pytest.raises(RuntimeError):
            ThemeSession().export("css", tmp_path)
