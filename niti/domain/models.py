from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from pathlib import Path


@dataclass(frozen=True)
class Document:
    path: Path | None
    text: str
    saved_text: str = ""
    # Assigned by the collection; unlike the index it survives other tabs closing.
    uid: int = 0

    @property
    def modified(self) -> bool:
        return self.text != self.saved_text

    @property
    def label(self) -> str:
        return self.path.name if self.path else "Untitled"


@dataclass(frozen=True)
class DocumentCollection:
    """Ordered open buffers plus the index of the active one."""

    documents: tuple[Document, ...] = ()
    active_index: int = 0
    next_uid: int = 1

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def is_empty(self) -> bool:
        return not self.documents

    @property
    def active(self) -> Document | None:
        if self.is_empty:
            return None
        return self.documents[self.active_index]

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self.documents)

    def index_of(self, uid: int) -> int:
        for i, doc in enumerate(self.documents):
            if doc.uid == uid:
                return i
        return -1

    def with_document(self, index: int, doc: Document) -> DocumentCollection:
        docs = list(self.documents)
        docs[index] = doc
        return replace(self, documents=tuple(docs))


class SerialStatus(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


@dataclass(frozen=True)
class SerialSession:
    status: SerialStatus = SerialStatus.DISCONNECTED
    port_name: str | None = None
    auto_read: bool = False
    line_mode: bool = False
    receive_buffer: str = ""
    pending_outbound: str = ""
    ports: tuple[str, ...] = ()
    selected_port: str | None = None
    read_in_flight: bool = False

    @property
    def connected(self) -> bool:
        return self.status is SerialStatus.CONNECTED


class NoticeLevel(Enum):
    INFO = auto()
    SUCCESS = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass(frozen=True)
class Notice:
    level: NoticeLevel
    title: str
    text: str = ""


class ConfirmAction(Enum):
    QUIT = "quit"
    BOARD_INFO = "board_info"


@dataclass(frozen=True)
class PendingConfirmation:
    action: ConfirmAction
    detail: str = ""


@dataclass(frozen=True)
class Idle:
    pass


ConfirmationState = Idle | PendingConfirmation


@dataclass(frozen=True)
class Transition:
    """Result of a pure state transition: the next state and the effects to run."""

    state: object
    effects: tuple[object, ...] = field(default_factory=tuple)
