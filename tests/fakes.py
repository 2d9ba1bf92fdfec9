"""In-memory stand-ins for the gateway and the UI ports.

FakeGateway never settles a call on its own: tests resolve or fail the
returned PendingCall explicitly, which keeps ordering deterministic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from niti.domain.models import DocumentCollection, PendingConfirmation, SerialSession
from niti.services.pending import PendingCall


class FakeGateway:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], PendingCall]] = []

    def _call(self, name: str, *args: Any) -> PendingCall:
        call = PendingCall(name)
        self.calls.append((name, args, call))
        return call

    # ----- inspection helpers -----

    def names(self) -> list[str]:
        return [name for name, _args, _call in self.calls]

    def last(self, name: str) -> PendingCall:
        for n, _args, call in reversed(self.calls):
            if n == name:
                return call
        raise AssertionError(f"no {name} call recorded; saw {self.names()}")

    def last_args(self, name: str) -> tuple[Any, ...]:
        for n, args, _call in reversed(self.calls):
            if n == name:
                return args
        raise AssertionError(f"no {name} call recorded; saw {self.names()}")

    def count(self, name: str) -> int:
        return self.names().count(name)

    def unsettled(self, name: str) -> list[PendingCall]:
        return [c for n, _a, c in self.calls if n == name and not c.done]

    # ----- IGateway -----

    def read_file(self, path: Path) -> PendingCall:
        return self._call("read_file", path)

    def save_file(self, path: Path, content: str) -> PendingCall:
        return self._call("save_file", path, content)

    def list_serial_ports(self) -> PendingCall:
        return self._call("list_serial_ports")

    def open_serial_port(self, port: str) -> PendingCall:
        return self._call("open_serial_port", port)

    def close_serial_port(self) -> PendingCall:
        return self._call("close_serial_port")

    def read_serial_port(self) -> PendingCall:
        return self._call("read_serial_port")

    def write_serial_port(self, data: str) -> PendingCall:
        return self._call("write_serial_port", data)

    def build_project(self, main_file: Path) -> PendingCall:
        return self._call("build_project", main_file)

    def run_project(self, main_file: Path) -> PendingCall:
        return self._call("run_project", main_file)

    def get_board_info(self) -> PendingCall:
        return self._call("get_board_info")

    def exit(self) -> PendingCall:
        return self._call("exit")


class FakeDialogs:
    def __init__(self) -> None:
        self.open_result: Path | None = None
        self.save_result: Path | None = None
        self.open_calls = 0
        self.save_calls = 0

    def get_open_file(self, parent, caption, start_dir, filter_str) -> Path | None:
        self.open_calls += 1
        return self.open_result

    def get_save_file(self, parent, caption, start_path, filter_str) -> Path | None:
        self.save_calls += 1
        return self.save_result


class FakeMessages:
    def __init__(self) -> None:
        self.shown: list[tuple[str, str, str]] = []
        self.answer = True

    def info(self, parent, title: str, text: str) -> None:
        self.shown.append(("info", title, text))

    def warning(self, parent, title: str, text: str) -> None:
        self.shown.append(("warning", title, text))

    def error(self, parent, title: str, text: str) -> None:
        self.shown.append(("error", title, text))

    def ask(self, parent, title: str, text: str) -> bool:
        self.shown.append(("ask", title, text))
        return self.answer

    def levels(self) -> list[str]:
        return [level for level, _t, _x in self.shown]


class FakeView:
    def __init__(self) -> None:
        self.documents: list[DocumentCollection] = []
        self.serial: list[SerialSession] = []
        self.font_sizes: list[int] = []
        self.statuses: list[str] = []
        self.confirmations: list[PendingConfirmation] = []

    def render_documents(self, state: DocumentCollection) -> None:
        self.documents.append(state)

    def render_serial(self, state: SerialSession) -> None:
        self.serial.append(state)

    def set_font_size(self, size: int) -> None:
        self.font_sizes.append(size)

    def show_status(self, text: str, msec: int = 0) -> None:
        self.statuses.append(text)

    def show_confirmation(self, pending: PendingConfirmation) -> None:
        self.confirmations.append(pending)


class FakeWindow:
    def __init__(self) -> None:
        self.closed = 0

    def close_window(self) -> None:
        self.closed += 1


class FakeLinks:
    def __init__(self) -> None:
        self.opened: list[str] = []
        self.result = True

    def open_url(self, url: str) -> bool:
        self.opened.append(url)
        return self.result
