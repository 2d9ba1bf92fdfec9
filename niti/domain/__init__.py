"""Domain layer: interfaces, effects, errors and immutable state models."""

from .errors import DeviceError, FileIOError, GatewayError, NitiError, ValidationError
from .interfaces import IBuildService, IFileService, IGateway, ISerialPortService
from .models import (
    ConfirmAction,
    Document,
    DocumentCollection,
    Idle,
    Notice,
    NoticeLevel,
    PendingConfirmation,
    SerialSession,
    SerialStatus,
    Transition,
)

__all__ = [
    "IBuildService",
    "IFileService",
    "IGateway",
    "ISerialPortService",
    "NitiError",
    "GatewayError",
    "FileIOError",
    "DeviceError",
    "ValidationError",
    "ConfirmAction",
    "Document",
    "DocumentCollection",
    "Idle",
    "Notice",
    "NoticeLevel",
    "PendingConfirmation",
    "SerialSession",
    "SerialStatus",
    "Transition",
]
