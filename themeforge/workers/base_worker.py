"""Base worker with the signals shared by conversion and export jobs."""

from __future__ import annotations

import logging
from threading import Event

from PySide6.QtCore import QObject, Signal

from themeforge.errors import classify_exception, format_error_for_user

logger = logging.getLogger(__name__)


class BaseWorker(QObject):
    """Runs one transcoding job off the UI thread.

    Hosts move the worker onto a QThread and connect ``thread.started`` to
    ``run``; ``finished`` carries the job result, ``error`` a user-facing
    message.
    """

    started = Signal()
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # result data
    error = Signal(str)                 # user-facing message
    cancelled = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cancel_event = Event()

    def cancel(self) -> None:
        self._cancel_event.set()

    @property
    def _is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def run(self) -> None:
        """Override in subclass. Called when thread starts."""
        raise NotImplementedError

    def _fail(self, exc: Exception, path=None) -> None:
        classified = classify_exception(exc, path)
        logger.warning("%s failed: %s", type(self).__name__, classified.to_dict())
        self.error.emit(format_error_for_user(classified))
