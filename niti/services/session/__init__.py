"""Session managers: the open-document collection and the serial-device session."""

from .document_manager import DocumentSessionManager
from .serial_manager import SerialSessionManager

__all__ = ["DocumentSessionManager", "SerialSessionManager"]
