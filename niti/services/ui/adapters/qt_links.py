from __future__ import annotations

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices

from niti.services.ui.ports.links import ILinkOpener


class QtLinkOpener(ILinkOpener):
    """Opens URLs through QDesktopServices."""

    def open_url(self, url: str) -> bool:
        return QDesktopServices.openUrl(QUrl(url))
