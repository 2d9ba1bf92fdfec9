"""
Pure transitions for the single serial-device session.

States are ``DISCONNECTED`` and ``CONNECTED``. The ``read_in_flight`` flag is
the guard that keeps at most one device read outstanding: a poll tick or a
manual read that arrives while a read is in flight is skipped.
"""

from __future__ import annotations

from dataclasses import replace

from niti.core.framing import frame_inbound
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
from niti.domain.models import Notice, NoticeLevel, SerialSession, SerialStatus, Transition


def _notify(level: NoticeLevel, title: str, text: str = "") -> Notify:
    return Notify(Notice(level, title, text))


def _reject(state: SerialSession, text: str) -> Transition:
    return Transition(state, (_notify(NoticeLevel.WARNING, "Serial", text),))


# ----------------------------- connection -----------------------------


def request_connect(state: SerialSession, port: str | None) -> Transition:
    if state.connected:
        return _reject(state, f"Already connected to {state.port_name}.")
    if not port:
        return _reject(state, "Select a port first.")
    return Transition(state, (OpenPort(port),))


def connect_succeeded(state: SerialSession, port: str) -> Transition:
    state = replace(
        state,
        status=SerialStatus.CONNECTED,
        port_name=port,
        selected_port=port,
        auto_read=False,
    )
    return Transition(state, (_notify(NoticeLevel.SUCCESS, "Connected", f"Connected to {port}."),))


def connect_failed(state: SerialSession, port: str, error: str) -> Transition:
    return Transition(
        state,
        (_notify(NoticeLevel.ERROR, "Connection Error", f"Failed to connect to {port}:\n{error}"),),
    )


def request_disconnect(state: SerialSession) -> Transition:
    if not state.connected:
        return _reject(state, "No port is connected.")
    port = state.port_name or ""
    state = replace(
        state,
        status=SerialStatus.DISCONNECTED,
        port_name=None,
        auto_read=False,
    )
    return Transition(state, (StopPolling(), ClosePort(port)))


def disconnect_succeeded(state: SerialSession, port: str) -> Transition:
    return Transition(
        state, (_notify(NoticeLevel.INFO, "Disconnected", f"Disconnected from {port}."),)
    )


def disconnect_failed(state: SerialSession, port: str, error: str) -> Transition:
    return Transition(
        state,
        (
            _notify(
                NoticeLevel.ERROR,
                "Disconnect Error",
                f"Failed to close {port}; the session was closed locally.\n{error}",
            ),
        ),
    )


# ----------------------------- reads -----------------------------


def request_read(state: SerialSession, *, scheduled: bool = False) -> Transition:
    if not state.connected:
        if scheduled:
            return Transition(state)
        return _reject(state, "Connect to a port before reading.")
    if state.read_in_flight:
        return Transition(state)
    return Transition(replace(state, read_in_flight=True), (ReadPort(),))


def read_succeeded(state: SerialSession, raw: str) -> Transition:
    if not state.connected:
        return Transition(replace(state, read_in_flight=False))
    framed = frame_inbound(raw, state.line_mode)
    return Transition(
        replace(state, read_in_flight=False, receive_buffer=state.receive_buffer + framed)
    )


def read_discarded(state: SerialSession) -> Transition:
    """A read issued before the last disconnect settled; only release the guard."""
    return Transition(replace(state, read_in_flight=False))


def read_failed(state: SerialSession, error: str) -> Transition:
    state = replace(state, read_in_flight=False)
    if not state.connected:
        return Transition(state)
    return Transition(
        state, (_notify(NoticeLevel.ERROR, "Read Error", f"Failed to read from the port:\n{error}"),)
    )


# ----------------------------- writes -----------------------------


def set_outbound(state: SerialSession, text: str) -> Transition:
    return Transition(replace(state, pending_outbound=text))


def request_write(state: SerialSession) -> Transition:
    if not state.connected:
        return _reject(state, "Connect to a port before sending.")
    if not state.pending_outbound:
        return _reject(state, "Nothing to send.")
    return Transition(state, (WritePort(state.pending_outbound),))


def write_succeeded(state: SerialSession, data: str) -> Transition:
    if state.pending_outbound != data:
        return Transition(state)
    return Transition(replace(state, pending_outbound=""))


def write_failed(state: SerialSession, error: str) -> Transition:
    return Transition(
        state, (_notify(NoticeLevel.ERROR, "Write Error", f"Failed to write to the port:\n{error}"),)
    )


# ----------------------------- toggles -----------------------------


def toggle_auto_read(state: SerialSession) -> Transition:
    if state.auto_read:
        return Transition(replace(state, auto_read=False), (StopPolling(),))
    if not state.connected:
        return _reject(state, "Auto read needs an open connection.")
    return Transition(replace(state, auto_read=True), (StartPolling(),))


def toggle_line_mode(state: SerialSession) -> Transition:
    return Transition(replace(state, line_mode=not state.line_mode))


def clear_receive_buffer(state: SerialSession) -> Transition:
    return Transition(replace(state, receive_buffer=""))


# ----------------------------- ports -----------------------------


def request_port_list(state: SerialSession) -> Transition:
    return Transition(state, (ListPorts(),))


def ports_listed(state: SerialSession, ports: list[str]) -> Transition:
    ports_t = tuple(ports)
    selected = state.selected_port if state.selected_port in ports_t else None
    if selected is None and ports_t:
        selected = ports_t[0]
    if state.connected:
        selected = state.port_name
    state = replace(state, ports=ports_t, selected_port=selected)
    if not ports_t:
        return Transition(
            state, (_notify(NoticeLevel.INFO, "No Ports Found", "No serial ports are available."),)
        )
    return Transition(state)


def ports_failed(state: SerialSession, error: str) -> Transition:
    return Transition(
        state, (_notify(NoticeLevel.ERROR, "Port Error", f"Failed to fetch serial ports:\n{error}"),)
    )


def select_port(state: SerialSession, port: str | None) -> Transition:
    if state.connected:
        return Transition(state)
    return Transition(replace(state, selected_port=port or None))
