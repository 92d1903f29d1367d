"""Editing session: the current theme document and its undo history."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QObject, Signal

from themeforge.core.css_reader import parse_css
from themeforge.core.css_writer import render_css
from themeforge.core.exporter import EXPORT_FORMATS, export_one
from themeforge.core.loader import ConversionOptions, load_documents
from themeforge.core.models import ThemeDocument
from themeforge.core.template import load_template, merge_with_template

_DEFAULT_HISTORY_LIMIT = 50


class ThemeSession(QObject):
    """Owns one logical edit session; hosts create one per editor.

    Every change stores a fresh document, so documents handed out by
    ``current_document`` are never modified afterwards.
    """

    document_changed = Signal(object)
    error = Signal(str)

    def __init__(
        self,
        options: ConversionOptions | None = None,
        *,
        history_limit: int = _DEFAULT_HISTORY_LIMIT,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._options = options or ConversionOptions()
        self._history_limit = max(1, history_limit)
        self._current: ThemeDocument | None = None
        self._label = ""
        self._history: list[tuple[ThemeDocument, str]] = []

    @property
    def current_document(self) -> ThemeDocument | None:
        return self._current

    @property
    def label(self) -> str:
        return self._label

    @property
    def history(self) -> list[ThemeDocument]:
        return [doc for doc, _ in self._history]

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    def load(self, path: Path) -> str:
        """Load the first theme of ``path`` and return its CSS."""
        try:
            documents = load_documents(path)
        except ValueError as exc:
            self.error.emit(str(exc))
            raise
        doc, label = documents[0]
        if self._options.merge_template is not None:
            doc = merge_with_template(doc, load_template(self._options.merge_template))
        self._history = []
        self._set(doc, label)
        return self.current_css()

    def set_document(self, doc: ThemeDocument, label: str | None = None) -> None:
        self._push()
        self._set(doc.copy(), label or doc.name)

    def apply_css(self, css: str, name: str | None = None) -> ThemeDocument:
        """Replace the document with one parsed from edited CSS."""
        doc = parse_css(css, name or self._label or "Custom Theme")
        self._push()
        self._set(doc, doc.name)
        return doc

    def set_color(self, key: str, value: str) -> ThemeDocument:
        if self._current is None:
            raise RuntimeError("No theme loaded")
        doc = self._current.copy()
        doc.colors[key] = value
        self._push()
        self._set(doc, self._label)
        return doc

    def undo(self) -> ThemeDocument | None:
        """Restore the previous document together with its label."""
        if not self._history:
            return None
        doc, label = self._history.pop()
        self._set(doc, label)
        return self._current

    def current_css(self) -> str:
        if self._current is None:
            return ""
        return render_css(
            self._current,
            label=self._label or None,
            include_timestamp=self._options.include_timestamp,
            strict=self._options.strict_keys,
        )

    def export(self, fmt: str, directory: Path, name: str | None = None, **package_kwargs: str) -> Path:
        if self._current is None:
            raise RuntimeError("No theme loaded to export")
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format {fmt!r}")
        return export_one(
            self._current,
            name or self._label or self._current.name,
            directory,
            fmt,
            options=self._options,
            **package_kwargs,
        )

    def _push(self) -> None:
        if self._current is None:
            return
        self._history.append((self._current, self._label))
        if len(self._history) > self._history_limit:
            del self._history[0]

    def _set(self, doc: ThemeDocument, label: str) -> None:
        self._current = doc
        self._label = label
        self.document_changed.emit(doc)
