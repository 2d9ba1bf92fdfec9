from __future__ import annotations

from .dialogs import IFileDialogService
from .links import ILinkOpener
from .messages import IMessageService
from .window import IWindowControl

__all__ = [
    "IFileDialogService",
    "ILinkOpener",
    "IMessageService",
    "IWindowControl",
]
