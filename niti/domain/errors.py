from __future__ import annotations


class NitiError(Exception):
    """Base class for application errors."""


class GatewayError(NitiError):
    """A remote operation failed; the message is the remote error text."""


class FileIOError(GatewayError):
    """File open/read/write failure."""


class DeviceError(GatewayError):
    """Serial open/close/read/write failure."""


class ValidationError(NitiError):
    """An action was requested while its preconditions did not hold."""
