from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IWindowControl(Protocol):
    """Window lifecycle capability used by the quit flow."""

    def close_window(self) -> None: ...
