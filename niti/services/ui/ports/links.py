from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ILinkOpener(Protocol):
    """UI port for handing a URL to the desktop's default browser."""

    def open_url(self, url: str) -> bool:
        """False when the desktop could not open the URL."""
        ...
