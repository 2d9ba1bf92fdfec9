from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from niti.core import serial_session as ss
from niti.domain.effects import (
    ClosePort,
    ListPorts,
    Notify,
    OpenPort,
    ReadPort,
    StartPolling,
    StopPolling,
    WritePort,
)
from niti.domain.interfaces import IGateway
from niti.domain.models import Notice, NoticeLevel, SerialSession, Transition
from niti.utils.constants import DEFAULT_POLL_INTERVAL_MS

logger = logging.getLogger(__name__)


class SerialSessionManager(QObject):
    """
    Owns the single serial-device session.

    The auto-read poll is a QTimer started on ``StartPolling`` and stopped on
    ``StopPolling``, disconnect and shutdown. Every tick goes through the
    same read transition as a manual read, so the ``read_in_flight`` guard
    keeps at most one Gateway read outstanding.
    """

    changed = pyqtSignal(object)  # SerialSession
    notice = pyqtSignal(object)  # Notice

    def __init__(
        self,
        gateway: IGateway,
        *,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._gateway = gateway
        self._state = SerialSession()
        # Bumped on every disconnect so late reads from a closed session are discarded.
        self._epoch = 0

        self._poll = QTimer(self)
        self._poll.setInterval(poll_interval_ms)
        self._poll.timeout.connect(self._on_poll_tick)

    @property
    def state(self) -> SerialSession:
        return self._state

    @property
    def is_polling(self) -> bool:
        return self._poll.isActive()

    @property
    def poll_interval_ms(self) -> int:
        return self._poll.interval()

    # ----------------------------- operations -----------------------------

    def refresh_port_list(self) -> None:
        self._apply(ss.request_port_list(self._state))

    def select_port(self, port: str | None) -> None:
        self._apply(ss.select_port(self._state, port))

    def connect_port(self, port: str) -> None:
        self._apply(ss.request_connect(self._state, port))

    def connect_selected(self) -> None:
        self.connect_port(self._state.selected_port or "")

    def disconnect_port(self) -> None:
        self._apply(ss.request_disconnect(self._state))

    def manual_read(self) -> None:
        self._apply(ss.request_read(self._state))

    def set_outbound(self, text: str) -> None:
        self._apply(ss.set_outbound(self._state, text))

    def write(self, data: str | None = None) -> None:
        if data is not None:
            self.set_outbound(data)
        self._apply(ss.request_write(self._state))

    def toggle_auto_read(self) -> None:
        self._apply(ss.toggle_auto_read(self._state))

    def toggle_line_mode(self) -> None:
        self._apply(ss.toggle_line_mode(self._state))

    def clear_receive_buffer(self) -> None:
        self._apply(ss.clear_receive_buffer(self._state))

    def shutdown(self) -> None:
        """Stop polling and close the connection if one is open. Used on exit."""
        self._poll.stop()
        if self._state.connected:
            self.disconnect_port()

    # ----------------------------- effects -----------------------------

    def _on_poll_tick(self) -> None:
        if not self._state.connected or not self._state.auto_read:
            self._poll.stop()
            return
        self._apply(ss.request_read(self._state, scheduled=True))

    def _on_read_settled(self, epoch: int, transition, payload: str) -> None:
        if epoch != self._epoch:
            self._apply(ss.read_discarded(self._state))
            return
        self._apply(transition(self._state, payload))

    def _apply(self, transition: Transition) -> None:
        new_state = transition.state
        if new_state is not self._state:
            self._state = new_state  # type: ignore[assignment]
            self.changed.emit(self._state)
        for effect in transition.effects:
            try:
                self._run(effect)
            except Exception as e:
                logger.exception("serial effect %r failed", effect)
                self.notice.emit(Notice(NoticeLevel.ERROR, "Unexpected Error", str(e)))

    def _run(self, effect: object) -> None:
        gw = self._gateway
        if isinstance(effect, Notify):
            self.notice.emit(effect.notice)
        elif isinstance(effect, StartPolling):
            self._poll.start()
        elif isinstance(effect, StopPolling):
            self._poll.stop()
        elif isinstance(effect, OpenPort):
            port = effect.port
            gw.open_serial_port(port).then(
                lambda _ack: self._apply(ss.connect_succeeded(self._state, port)),
                lambda err: self._apply(ss.connect_failed(self._state, port, err)),
            )
        elif isinstance(effect, ClosePort):
            port = effect.port
            self._epoch += 1
            gw.close_serial_port().then(
                lambda _ack: self._apply(ss.disconnect_succeeded(self._state, port)),
                lambda err: self._apply(ss.disconnect_failed(self._state, port, err)),
            )
        elif isinstance(effect, ReadPort):
            epoch = self._epoch
            gw.read_serial_port().then(
                lambda raw: self._on_read_settled(epoch, ss.read_succeeded, str(raw or "")),
                lambda err: self._on_read_settled(epoch, ss.read_failed, err),
            )
        elif isinstance(effect, WritePort):
            data = effect.data
            gw.write_serial_port(data).then(
                lambda _ack: self._apply(ss.write_succeeded(self._state, data)),
                lambda err: self._apply(ss.write_failed(self._state, err)),
            )
        elif isinstance(effect, ListPorts):
            gw.list_serial_ports().then(
                lambda ports: self._apply(ss.ports_listed(self._state, list(ports or []))),
                lambda err: self._apply(ss.ports_failed(self._state, err)),
            )
        else:
            raise TypeError(f"Unsupported serial effect: {effect!r}")
