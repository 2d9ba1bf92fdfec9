"""Side effects requested by the pure transitions in ``niti.core``.

Managers interpret these: Gateway calls, dialog interactions, poll timer
control and user notifications.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from niti.domain.models import Notice


@dataclass(frozen=True)
class ReadFile:
    path: Path


@dataclass(frozen=True)
class WriteFile:
    uid: int
    path: Path
    text: str


@dataclass(frozen=True)
class ChooseSaveLocation:
    index: int


@dataclass(frozen=True)
class OpenPort:
    port: str


@dataclass(frozen=True)
class ClosePort:
    port: str


@dataclass(frozen=True)
class ReadPort:
    pass


@dataclass(frozen=True)
class WritePort:
    data: str


@dataclass(frozen=True)
class ListPorts:
    pass


@dataclass(frozen=True)
class StartPolling:
    pass


@dataclass(frozen=True)
class StopPolling:
    pass


@dataclass(frozen=True)
class Notify:
    notice: Notice
