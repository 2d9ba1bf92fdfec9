from __future__ import annotations

from typing import Any

from PyQt6.QtWidgets import QMessageBox

from niti.services.ui.ports.messages import IMessageService


class QtMessageService(IMessageService):
    """Qt-backed implementation for message dialogs."""

    def __init__(self, default_parent: Any | None = None) -> None:
        self._default_parent = default_parent

    def set_default_parent(self, parent: Any | None) -> None:
        self._default_parent = parent

    def info(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.information(parent or self._default_parent, title, text)

    def warning(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.warning(parent or self._default_parent, title, text)

    def error(self, parent: Any | None, title: str, text: str) -> None:
        QMessageBox.critical(parent or self._default_parent, title, text)

    def ask(self, parent: Any | None, title: str, text: str) -> bool:
        resp = QMessageBox.question(
            parent or self._default_parent,
            title,
            text,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return resp == QMessageBox.StandardButton.Yes
