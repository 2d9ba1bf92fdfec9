from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QCoreApplication, QObject, QThreadPool, pyqtSignal

from niti.domain.errors import GatewayError
from niti.domain.interfaces import IBuildService, IFileService, ISerialPortService
from niti.services.pending import PendingCall

logger = logging.getLogger(__name__)


class _Relay(QObject):
    """Carries a worker-thread result back to the GUI thread (queued signals)."""

    succeeded = pyqtSignal(object)
    failed = pyqtSignal(str)


class LocalGateway(QObject):
    """
    In-process Gateway: each operation runs its blocking work on a
    QThreadPool and settles the returned PendingCall on the GUI thread.
    """

    def __init__(
        self,
        files: IFileService,
        serial_ports: ISerialPortService,
        builder: IBuildService,
        *,
        pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._files = files
        self._serial = serial_ports
        self._builder = builder
        self._pool = pool or QThreadPool.globalInstance()
        self._in_flight: set[PendingCall] = set()

    # ----------------------------- plumbing -----------------------------

    def _submit(self, name: str, fn: Callable[[], Any]) -> PendingCall:
        call = PendingCall(name, self)
        relay = _Relay(call)
        relay.succeeded.connect(call.resolve)
        relay.failed.connect(call.fail)
        self._in_flight.add(call)
        call.succeeded.connect(lambda _r, c=call: self._settled(c))
        call.failed.connect(lambda _e, c=call: self._settled(c))

        def job() -> None:
            try:
                result = fn()
            except GatewayError as e:
                logger.warning("%s failed: %s", name, e)
                relay.failed.emit(str(e))
            except Exception as e:
                logger.exception("%s raised unexpectedly", name)
                relay.failed.emit(f"Unexpected error: {e}")
            else:
                relay.succeeded.emit(result)

        self._pool.start(job)
        return call

    def _settled(self, call: PendingCall) -> None:
        self._in_flight.discard(call)
        call.deleteLater()

    def wait_for_idle(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    # ----------------------------- files -----------------------------

    def read_file(self, path: Path) -> PendingCall:
        return self._submit("read_file", lambda: self._files.read_text(Path(path)))

    def save_file(self, path: Path, content: str) -> PendingCall:
        return self._submit(
            "save_file", lambda: self._files.write_text_atomic(Path(path), content)
        )

    # ----------------------------- serial -----------------------------

    def list_serial_ports(self) -> PendingCall:
        return self._submit("list_serial_ports", self._serial.list_ports)

    def open_serial_port(self, port: str) -> PendingCall:
        return self._submit("open_serial_port", lambda: self._serial.open(port))

    def close_serial_port(self) -> PendingCall:
        return self._submit("close_serial_port", self._serial.close)

    def read_serial_port(self) -> PendingCall:
        return self._submit("read_serial_port", self._serial.read)

    def write_serial_port(self, data: str) -> PendingCall:
        return self._submit("write_serial_port", lambda: self._serial.write(data))

    def get_board_info(self) -> PendingCall:
        return self._submit("get_board_info", self._serial.board_info)

    # ----------------------------- project -----------------------------

    def build_project(self, main_file: Path) -> PendingCall:
        return self._submit("build_project", lambda: self._builder.build(Path(main_file)))

    def run_project(self, main_file: Path) -> PendingCall:
        return self._submit("run_project", lambda: self._builder.run(Path(main_file)))

    # ----------------------------- process -----------------------------

    def exit(self) -> PendingCall:
        call = PendingCall("exit", self)
        app = QCoreApplication.instance()
        if app is None:
            call.fail("No application instance to exit")
            return call
        logger.info("exit requested")
        app.quit()
        call.resolve(None)
        return call
