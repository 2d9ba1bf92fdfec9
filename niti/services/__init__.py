"""Concrete services: gateway, file/serial/build backends, config and session managers."""

from .build_service import BuildService
from .file_service import FileService
from .gateway import LocalGateway
from .pending import PendingCall
from .serial_port_service import SerialPortService

__all__ = ["BuildService", "FileService", "LocalGateway", "PendingCall", "SerialPortService"]
