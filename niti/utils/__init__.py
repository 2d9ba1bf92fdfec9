"""App constants and utilities."""

from .constants import (
    APP_DIR,
    APP_NAME,
    APP_ORG,
    DEFAULT_BAUD_RATE,
    DEFAULT_CONTENT,
    DEFAULT_EXTENSION,
    DEFAULT_FONT_SIZE,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_READ_TIMEOUT_MS,
    STATUS_MSEC,
)

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "APP_DIR",
    "DEFAULT_BAUD_RATE",
    "DEFAULT_CONTENT",
    "DEFAULT_EXTENSION",
    "DEFAULT_FONT_SIZE",
    "DEFAULT_POLL_INTERVAL_MS",
    "DEFAULT_READ_TIMEOUT_MS",
    "STATUS_MSEC",
]
