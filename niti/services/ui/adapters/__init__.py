from __future__ import annotations

from .qt_dialogs import QtFileDialogService
from .qt_links import QtLinkOpener
from .qt_messages import QtMessageService

__all__ = [
    "QtFileDialogService",
    "QtLinkOpener",
    "QtMessageService",
]
