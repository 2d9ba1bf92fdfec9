from __future__ import annotations

import pytest

from niti.domain.models import NoticeLevel
from niti.services.session.serial_manager import SerialSessionManager
from tests.fakes import FakeGateway


@pytest.fixture()
def notices(serial: SerialSessionManager) -> list:
    seen: list = []
    serial.notice.connect(seen.append)
    return seen


def _connect(serial: SerialSessionManager, gateway: FakeGateway, port: str = "COM3") -> None:
    serial.connect_port(port)
    gateway.last("open_serial_port").resolve(None)
    assert serial.state.connected


def test_connect_success(serial, gateway, notices):
    serial.connect_port("COM3")
    assert gateway.last_args("open_serial_port") == ("COM3",)
    assert serial.state.connected is False

    gateway.last("open_serial_port").resolve(None)
    assert serial.state.connected is True
    assert serial.state.port_name == "COM3"
    assert notices[-1].level is NoticeLevel.SUCCESS


def test_connect_failure_stays_disconnected(serial, gateway, notices):
    serial.connect_port("COM9")
    gateway.last("open_serial_port").fail("Port not found")
    assert serial.state.connected is False
    assert serial.state.port_name is None
    assert notices[-1].level is NoticeLevel.ERROR
    assert "Port not found" in notices[-1].text


def test_connect_selected_uses_selection(serial, gateway):
    serial.refresh_port_list()
    gateway.last("list_serial_ports").resolve(["COM1", "COM3"])
    serial.select_port("COM3")
    serial.connect_selected()
    assert gateway.last_args("open_serial_port") == ("COM3",)


def test_refresh_ports_empty_informs(serial, gateway, notices):
    serial.refresh_port_list()
    gateway.last("list_serial_ports").resolve([])
    assert serial.state.ports == ()
    assert notices[-1].title == "No Ports Found"


def test_manual_read_appends(serial, gateway):
    _connect(serial, gateway)
    serial.manual_read()
    assert serial.state.read_in_flight
    gateway.last("read_serial_port").resolve("hello\n")
    assert serial.state.receive_buffer == "hello\n"
    assert serial.state.read_in_flight is False


def test_manual_read_in_line_mode(serial, gateway):
    _connect(serial, gateway)
    serial.toggle_line_mode()
    serial.manual_read()
    gateway.last("read_serial_port").resolve("  a \n\n b \n")
    assert serial.state.receive_buffer == "a\nb"


def test_auto_read_starts_polling(serial, gateway):
    _connect(serial, gateway)
    serial.toggle_auto_read()
    assert serial.state.auto_read is True
    assert serial.is_polling
    serial.toggle_auto_read()
    assert serial.is_polling is False


def test_poll_tick_skipped_while_read_in_flight(serial, gateway):
    _connect(serial, gateway)
    serial.toggle_auto_read()

    serial._on_poll_tick()
    serial._on_poll_tick()
    serial._on_poll_tick()
    assert gateway.count("read_serial_port") == 1

    gateway.last("read_serial_port").resolve("x")
    serial._on_poll_tick()
    assert gateway.count("read_serial_port") == 2


def test_poll_timer_issues_reads(qtbot, serial, gateway):
    _connect(serial, gateway)
    serial.toggle_auto_read()
    qtbot.waitUntil(lambda: gateway.count("read_serial_port") == 1, timeout=3000)
    gateway.last("read_serial_port").resolve("tick")
    qtbot.waitUntil(lambda: gateway.count("read_serial_port") == 2, timeout=3000)
    assert serial.state.receive_buffer == "tick"


def test_auto_read_while_disconnected_never_polls(serial, gateway, notices):
    serial.toggle_auto_read()
    assert serial.state.auto_read is False
    assert serial.is_polling is False
    assert notices[-1].level is NoticeLevel.WARNING
    serial._on_poll_tick()
    assert gateway.count("read_serial_port") == 0


def test_disconnect_stops_polling(serial, gateway, notices):
    _connect(serial, gateway)
    serial.toggle_auto_read()
    serial.disconnect_port()

    assert serial.state.connected is False
    assert serial.state.auto_read is False
    assert serial.is_polling is False
    gateway.last("close_serial_port").resolve(None)
    assert notices[-1].level is NoticeLevel.INFO


def test_disconnect_failure_still_disconnected(serial, gateway, notices):
    _connect(serial, gateway)
    serial.disconnect_port()
    gateway.last("close_serial_port").fail("No port is open")
    assert serial.state.connected is False
    assert serial.state.port_name is None
    assert serial.state.auto_read is False
    assert notices[-1].level is NoticeLevel.ERROR


def test_stale_read_after_reconnect_is_discarded(serial, gateway):
    _connect(serial, gateway)
    serial.manual_read()
    stale = gateway.last("read_serial_port")

    serial.disconnect_port()
    gateway.last("close_serial_port").resolve(None)
    _connect(serial, gateway)

    # The old read still holds the guard.
    serial.manual_read()
    assert gateway.count("read_serial_port") == 1

    stale.resolve("old data")
    assert serial.state.receive_buffer == ""
    assert serial.state.read_in_flight is False

    serial.manual_read()
    assert gateway.count("read_serial_port") == 2


def test_manual_read_when_disconnected_warns(serial, gateway, notices):
    serial.manual_read()
    assert gateway.count("read_serial_port") == 0
    assert notices[-1].level is NoticeLevel.WARNING


def test_write_clears_outbound_on_success(serial, gateway):
    _connect(serial, gateway)
    serial.set_outbound("LED ON")
    serial.write()
    assert gateway.last_args("write_serial_port") == ("LED ON",)
    gateway.last("write_serial_port").resolve(None)
    assert serial.state.pending_outbound == ""


def test_write_with_explicit_data(serial, gateway):
    _connect(serial, gateway)
    serial.write("ping")
    assert gateway.last_args("write_serial_port") == ("ping",)


def test_write_failure_keeps_outbound(serial, gateway, notices):
    _connect(serial, gateway)
    serial.write("ping")
    gateway.last("write_serial_port").fail("Failed to write to port")
    assert serial.state.pending_outbound == "ping"
    assert notices[-1].level is NoticeLevel.ERROR


def test_clear_receive_buffer(serial, gateway):
    _connect(serial, gateway)
    serial.manual_read()
    gateway.last("read_serial_port").resolve("abc")
    serial.clear_receive_buffer()
    assert serial.state.receive_buffer == ""


def test_shutdown_closes_open_connection(serial, gateway):
    _connect(serial, gateway)
    serial.toggle_auto_read()
    serial.shutdown()
    assert serial.is_polling is False
    assert serial.state.connected is False
    assert gateway.count("close_serial_port") == 1


def test_shutdown_when_disconnected_does_nothing(serial, gateway):
    serial.shutdown()
    assert gateway.calls == []
