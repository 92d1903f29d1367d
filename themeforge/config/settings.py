"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path

from PySide6.QtCore import QSettings

_MAX_RECENT_FILES = 10


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("ThemeForge", "ThemeForge")

    # -- paths --

    @property
    def last_input_path(self) -> str:
        return self._qs.value("paths/last_input", "", type=str)

    @last_input_path.setter
    def last_input_path(self, value: str) -> None:
        self._qs.setValue("paths/last_input", value)

    @property
    def export_dir(self) -> str:
        return self._qs.value("paths/export_dir", "", type=str)

    @export_dir.setter
    def export_dir(self, value: str) -> None:
        self._qs.setValue("paths/export_dir", value)

    # -- export profile --

    @property
    def profile_path(self) -> str:
        raw = self._qs.value("export/profile_path", "", type=str)
        return (raw or "").strip()

    @profile_path.setter
    def profile_path(self, value: str) -> None:
        self._qs.setValue("export/profile_path", (value or "").strip())

    # -- recent files --

    @property
    def recent_files(self) -> list[str]:
        raw = self._qs.value("paths/recent_files", [])
        if raw is None:
            return []
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)):
            return []
        return [item for item in raw if isinstance(item, str) and item][:_MAX_RECENT_FILES]

    def add_recent_file(self, path: str) -> None:
        cleaned = (path or "").strip()
        if not cleaned:
            return
        recent = [item for item in self.recent_files if item != cleaned]
        recent.insert(0, cleaned)
        self._qs.setValue("paths/recent_files", recent[:_MAX_RECENT_FILES])
        self.last_input_path = cleaned

    def sync(self) -> None:
        self._qs.sync()

    # -- helpers --

    @property
    def app_data_dir(self) -> Path:
        path = self._app_data_dir()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def logs_dir(self) -> Path:
        path = self.app_data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def _app_data_dir() -> Path:
        base = Path(os.environ.get("APPDATA", Path.home() / ".config"))
        return base / "themeforge"
