from __future__ import annotations

import logging
import threading

import serial
from serial.tools.list_ports import comports

from niti.domain.errors import DeviceError
from niti.domain.interfaces import ISerialPortService
from niti.utils.constants import DEFAULT_BAUD_RATE, DEFAULT_READ_TIMEOUT_MS, READ_CHUNK_SIZE

logger = logging.getLogger(__name__)


class SerialPortService(ISerialPortService):
    """
    Owns the one process-wide serial connection (pyserial).

    Calls block and are meant to run on a worker thread; a lock serializes
    access to the shared handle.
    """

    def __init__(
        self,
        *,
        baud_rate: int = DEFAULT_BAUD_RATE,
        read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
    ) -> None:
        self._baud_rate = baud_rate
        self._timeout = read_timeout_ms / 1000.0
        self._lock = threading.Lock()
        self._port: serial.Serial | None = None

    @property
    def is_open(self) -> bool:
        return self._port is not None

    def list_ports(self) -> list[str]:
        try:
            return [p.device for p in comports()]
        except Exception as e:
            raise DeviceError(f"Failed to enumerate ports: {e}") from e

    def open(self, port: str) -> None:
        if port not in self.list_ports():
            raise DeviceError("Port not found")
        try:
            handle = serial.Serial(port=port, baudrate=self._baud_rate, timeout=self._timeout)
        except serial.SerialException as e:
            raise DeviceError(f"Failed to open port: {e}") from e
        with self._lock:
            previous, self._port = self._port, handle
        if previous is not None:
            previous.close()
        logger.info("opened %s at %d baud", port, self._baud_rate)

    def close(self) -> None:
        with self._lock:
            handle, self._port = self._port, None
        if handle is None:
            raise DeviceError("No port is open")
        try:
            handle.close()
        except serial.SerialException as e:
            raise DeviceError(f"Failed to close port: {e}") from e
        logger.info("closed %s", handle.port)

    def read(self) -> str:
        with self._lock:
            if self._port is None:
                raise DeviceError("No port is open")
            try:
                data = self._port.read(READ_CHUNK_SIZE)
            except serial.SerialException as e:
                raise DeviceError(f"Failed to read from port: {e}") from e
        return data.decode("utf-8", errors="replace")

    def write(self, data: str) -> None:
        with self._lock:
            if self._port is None:
                raise DeviceError("No port is open")
            try:
                self._port.write(data.encode("utf-8"))
            except serial.SerialException as e:
                raise DeviceError(f"Failed to write to port: {e}") from e

    def board_info(self) -> str:
        ports = comports()
        if not ports:
            raise DeviceError("No ports available")
        info = ports[0]
        lines = [
            f"Device Name: {info.name or info.device}",
            f"Port Number: {info.device}",
            f"BN: {info.description or 'Unknown board'}",
        ]
        if info.vid is not None:
            lines.append(f"VID: {info.vid:04X}")
        if info.pid is not None:
            lines.append(f"PID: {info.pid:04X}")
        if info.serial_number:
            lines.append(f"SN: {info.serial_number}")
        if info.manufacturer:
            lines.append(f"Manufacturer: {info.manufacturer}")
        return "\n".join(lines)
