"""Tests for themeforge.workers base and conversion workers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from themeforge.workers.base_worker import BaseWorker
from themeforge.workers.convert_worker import ExportWorker, ExtractWorker

_THEME = {"name": "Worker Theme", "colors": {"editor.background": "#101010"}}


class _Recorder:
    """Collects every signal a worker emits."""

    def __init__(self, worker: BaseWorker) -> None:
        self.events: list[tuple[str, object]] = []
        worker.started.connect(lambda: self.events.append(("started", None)))
        worker.progress.connect(lambda cur, total, msg: self.events.append(("progress", (cur, total, msg))))
        worker.finished.connect(lambda result: self.events.append(("finished", result)))
        worker.error.connect(lambda message: self.events.append(("error", message)))
        worker.cancelled.connect(lambda: self.events.append(("cancelled", None)))

    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.events]

    def last(self, kind: str):
        return [payload for name, payload in self.events if name == kind][-1]


class TestBaseWorker:
    def test_cancel_sets_event(self):
        worker = BaseWorker()
        assert worker._is_cancelled is False
        worker.cancel()
        assert worker._is_cancelled is True

    def test_run_not_implemented(self):
        with pytest.raises(NotImplementedError):
            BaseWorker().run()


class TestExtractWorker:
    def test_emits_css(self, tmp_path: Path):
        path = tmp_path / "theme.json"
        path.write_text(json.dumps(_THEME), encoding="utf-8")
        worker = ExtractWorker(path)
        recorder = _Recorder(worker)

        worker.run()

        assert recorder.kinds()[0] == "started"
        assert recorder.kinds()[-1] == "finished"
        assert "--vscode-editor-background: #101010;" in recorder.last("finished")

    def test_error_is_user_facing(self, tmp_path: Path):
        worker = ExtractWorker(tmp_path / "theme.txt")
        recorder = _Recorder(worker)

        worker.run()

        assert "finished" not in recorder.kinds()
        message = recorder.last("error")
        assert "Hint:" in message
        assert message.endswith("File: theme.txt")


class TestExportWorker:
    def test_writes_requested_formats(self, tmp_path: Path):
        worker = ExportWorker(_THEME, "Worker Theme", tmp_path, ["css", "vsix"], publisher="acme")
        recorder = _Recorder(worker)

        worker.run()

        written = recorder.last("finished")
        assert [path.name for path in written] == ["worker-theme.css", "worker-theme.vsix"]
        assert recorder.last("progress") == (2, 2, "Done")

    def test_cancel_before_run(self, tmp_path: Path):
        worker = ExportWorker(_THEME, "Cancelled", tmp_path)
        recorder = _Recorder(worker)
        worker.cancel()

        worker.run()

        assert recorder.kinds() == ["started", "cancelled"]
        assert list(tmp_path.iterdir()) == []

    def test_bad_theme_reports_error(self, tmp_path: Path):
        worker = ExportWorker({"colors": []}, "Broken", tmp_path)
        recorder = _Recorder(worker)

        worker.run()

        assert recorder.kinds() == ["started", "error"]
        assert "colors must be an object" in recorder.last("error")
