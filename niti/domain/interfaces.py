from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from niti.services.pending import PendingCall


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISerialPortService(Protocol):
    """Blocking access to the single process-wide serial connection."""

    def list_ports(self) -> list[str]: ...
    def open(self, port: str) -> None: ...
    def close(self) -> None: ...
    def read(self) -> str: ...
    def write(self, data: str) -> None: ...
    def board_info(self) -> str: ...


class IBuildService(Protocol):
    """Runs the configured build/run commands for a main file."""

    def build(self, main_file: Path) -> str: ...
    def run(self, main_file: Path) -> str: ...


@runtime_checkable
class IGateway(Protocol):
    """
    Uniform asynchronous boundary to out-of-process services.

    Every call returns a PendingCall that later emits exactly one of
    ``succeeded(result)`` or ``failed(message)``.
    """

    def read_file(self, path: Path) -> PendingCall: ...
    def save_file(self, path: Path, content: str) -> PendingCall: ...
    def list_serial_ports(self) -> PendingCall: ...
    def open_serial_port(self, port: str) -> PendingCall: ...
    def close_serial_port(self) -> PendingCall: ...
    def read_serial_port(self) -> PendingCall: ...
    def write_serial_port(self, data: str) -> PendingCall: ...
    def build_project(self, main_file: Path) -> PendingCall: ...
    def run_project(self, main_file: Path) -> PendingCall: ...
    def get_board_info(self) -> PendingCall: ...
    def exit(self) -> PendingCall: ...


class IConfigService(Protocol):
    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...
    def app_version(self) -> str: ...


class IAppConfig(IConfigService, Protocol):
    def get_version(self) -> str: ...
