from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot


class PendingCall(QObject):
    """
    Handle for one asynchronous Gateway operation.

    Emits exactly one of ``succeeded(result)`` or ``failed(message)``; later
    resolutions are ignored. Callbacks attached with ``then`` after the call
    has settled run immediately.
    """

    succeeded = pyqtSignal(object)
    failed = pyqtSignal(str)

    def __init__(self, name: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.name = name
        self._done = False
        self._ok = False
        self._result: Any = None
        self._error = ""

    @property
    def done(self) -> bool:
        return self._done

    @pyqtSlot(object)
    def resolve(self, result: Any = None) -> None:
        if self._done:
            return
        self._done, self._ok, self._result = True, True, result
        self.succeeded.emit(result)

    @pyqtSlot(str)
    def fail(self, message: str) -> None:
        if self._done:
            return
        self._done, self._ok, self._error = True, False, str(message)
        self.failed.emit(self._error)

    def then(
        self,
        on_success: Callable[[Any], None],
        on_failure: Callable[[str], None],
    ) -> PendingCall:
        if self._done:
            if self._ok:
                on_success(self._result)
            else:
                on_failure(self._error)
            return self
        self.succeeded.connect(on_success)
        self.failed.connect(on_failure)
        return self
