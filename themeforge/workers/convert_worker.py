"""Workers for extracting CSS and exporting themes in the background."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from themeforge.core.exporter import EXPORT_FORMATS, ThemeLike, as_document, export_one
from themeforge.core.loader import ConversionOptions, extract_theme
from themeforge.workers.base_worker import BaseWorker


class ExtractWorker(BaseWorker):
    """Loads a theme file and renders it to CSS."""

    def __init__(self, path: Path, options: ConversionOptions | None = None) -> None:
        super().__init__()
        self._path = Path(path)
        self._options = options

    def run(self) -> None:
        self.started.emit()
        self.progress.emit(0, 1, f"Reading {self._path.name}")
        try:
            css = extract_theme(self._path, self._options)
        except Exception as e:
            self._fail(e, self._path)
            return
        self.progress.emit(1, 1, "Done")
        self.finished.emit(css)


class ExportWorker(BaseWorker):
    """Writes one theme in several formats, checking for cancel between them."""

    def __init__(
        self,
        theme: ThemeLike,
        name: str,
        directory: Path,
        formats: Iterable[str] = EXPORT_FORMATS,
        options: ConversionOptions | None = None,
        **package_kwargs: str,
    ) -> None:
        super().__init__()
        self._theme = theme
        self._name = name
        self._directory = Path(directory)
        self._formats = list(formats)
        self._options = options
        self._package_kwargs = package_kwargs

    def run(self) -> None:
        self.started.emit()
        written: list[Path] = []
        try:
            doc = as_document(self._theme)
            total = len(self._formats)
            for index, fmt in enumerate(self._formats):
                if self._is_cancelled:
                    self.cancelled.emit()
                    return
                self.progress.emit(index, total, f"Exporting {fmt.upper()}")
                written.append(
                    export_one(
                        doc,
                        self._name,
                        self._directory,
                        fmt,
                        options=self._options,
                        **self._package_kwargs,
                    )
                )
            self.progress.emit(total, total, "Done")
        except Exception as e:
            self._fail(e)
            return
        self.finished.emit(written)
