from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import QObject, pyqtSignal

from niti.core import documents as docs
from niti.domain.effects import ChooseSaveLocation, Notify, ReadFile, WriteFile
from niti.domain.interfaces import IGateway
from niti.domain.models import Document, DocumentCollection, Notice, NoticeLevel, Transition
from niti.services.ui.ports.dialogs import IFileDialogService
from niti.utils.constants import DEFAULT_CONTENT, DEFAULT_EXTENSION, OPEN_FILTER, SAVE_FILTER

logger = logging.getLogger(__name__)


class DocumentSessionManager(QObject):
    """
    Owns the open-document collection.

    Operations apply a pure transition from ``niti.core.documents`` and then
    carry out its effects: Gateway file reads/writes, the save-location
    dialog and user notices. Gateway results come back as further
    transitions. ``changed`` fires whenever the collection is replaced.
    """

    changed = pyqtSignal(object)  # DocumentCollection
    notice = pyqtSignal(object)  # Notice

    def __init__(
        self,
        gateway: IGateway,
        dialogs: IFileDialogService,
        *,
        default_extension: str = DEFAULT_EXTENSION,
        default_content: str = DEFAULT_CONTENT,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._gateway = gateway
        self._dialogs = dialogs
        self._default_extension = default_extension
        self._default_content = default_content
        self._state = DocumentCollection()

    @property
    def state(self) -> DocumentCollection:
        return self._state

    @property
    def active_document(self) -> Document | None:
        return self._state.active

    # ----------------------------- operations -----------------------------

    def create_document(self) -> None:
        self._apply(docs.create_document(self._state, self._default_content))

    def open_document(self, path: Path) -> None:
        self._apply(docs.request_open(self._state, Path(path)))

    def open_via_dialog(self) -> None:
        path = self._dialogs.get_open_file(None, "Open File", None, OPEN_FILTER)
        if path is None:
            return
        self.open_document(path)

    def update_content(self, index: int, text: str) -> None:
        self._apply(docs.update_content(self._state, index, text))

    def save_document(self, index: int) -> None:
        self._apply(docs.request_save(self._state, index))

    def save_active(self) -> None:
        self.save_document(self._state.active_index)

    def close_document(self, index: int) -> None:
        self._apply(docs.close_document(self._state, index))

    def set_active_document(self, index: int) -> None:
        self._apply(docs.set_active(self._state, index))

    # ----------------------------- effects -----------------------------

    def _apply(self, transition: Transition) -> None:
        new_state = transition.state
        if new_state is not self._state:
            self._state = new_state  # type: ignore[assignment]
            self.changed.emit(self._state)
        for effect in transition.effects:
            try:
                self._run(effect)
            except Exception as e:
                logger.exception("document effect %r failed", effect)
                self.notice.emit(Notice(NoticeLevel.ERROR, "Unexpected Error", str(e)))

    def _run(self, effect: object) -> None:
        if isinstance(effect, Notify):
            self.notice.emit(effect.notice)
        elif isinstance(effect, ReadFile):
            path = effect.path
            self._gateway.read_file(path).then(
                lambda text: self._apply(docs.open_succeeded(self._state, path, text)),
                lambda err: self._apply(docs.open_failed(self._state, path, err)),
            )
        elif isinstance(effect, WriteFile):
            uid, path, text = effect.uid, effect.path, effect.text
            self._gateway.save_file(path, text).then(
                lambda _ack: self._apply(docs.save_succeeded(self._state, uid, path, text)),
                lambda err: self._apply(docs.save_failed(self._state, uid, path, err)),
            )
        elif isinstance(effect, ChooseSaveLocation):
            chosen = self._dialogs.get_save_file(None, "Save As", None, SAVE_FILTER)
            self._apply(
                docs.save_location_chosen(
                    self._state, effect.index, chosen, self._default_extension
                )
            )
        else:
            raise TypeError(f"Unsupported document effect: {effect!r}")
