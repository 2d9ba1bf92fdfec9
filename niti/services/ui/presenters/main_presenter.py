from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from niti.core.confirmation import ConfirmationFlow
from niti.core.shortcuts import Chord, ShortcutActions, ShortcutRouter
from niti.domain.errors import ValidationError
from niti.domain.interfaces import IGateway
from niti.domain.models import (
    ConfirmAction,
    DocumentCollection,
    Notice,
    NoticeLevel,
    PendingConfirmation,
    SerialSession,
)
from niti.services.session.document_manager import DocumentSessionManager
from niti.services.session.serial_manager import SerialSessionManager
from niti.services.ui.ports.links import ILinkOpener
from niti.services.ui.ports.messages import IMessageService
from niti.services.ui.ports.window import IWindowControl
from niti.utils.constants import (
    ABOUT_TEXT,
    APP_NAME,
    DEFAULT_FONT_SIZE,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
    SOURCE_URL,
    STATUS_MSEC,
)

logger = logging.getLogger(__name__)


@runtime_checkable
class IMainView(Protocol):
    """Passive view surface (implemented by the Qt MainWindow)."""

    def render_documents(self, state: DocumentCollection) -> None: ...
    def render_serial(self, state: SerialSession) -> None: ...
    def set_font_size(self, size: int) -> None: ...
    def show_status(self, text: str, msec: int = STATUS_MSEC) -> None: ...
    def show_confirmation(self, pending: PendingConfirmation) -> None: ...


class MainPresenter:
    """
    Coordinates the view with the two session managers.

    Owns the confirmation flow (quit, board info), the shortcut table, the
    editor zoom level, the Help menu and the build/run requests. Notices
    from the managers are routed here: info/success to the status bar,
    warnings and errors to message boxes.
    """

    def __init__(
        self,
        view: IMainView,
        documents: DocumentSessionManager,
        serial: SerialSessionManager,
        gateway: IGateway,
        messages: IMessageService,
        window: IWindowControl,
        links: ILinkOpener,
        *,
        font_size: int = DEFAULT_FONT_SIZE,
        version: str = "0.0.0",
        source_url: str = SOURCE_URL,
    ) -> None:
        self.view = view
        self.documents = documents
        self.serial = serial
        self.gateway = gateway
        self.messages = messages
        self.window = window
        self.links = links
        self.version = version
        self.source_url = source_url
        self.confirmation = ConfirmationFlow()
        self.font_size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, font_size))
        self.shortcuts = ShortcutRouter.from_actions(self._shortcut_actions())

        documents.changed.connect(view.render_documents)
        documents.notice.connect(self.report)
        serial.changed.connect(view.render_serial)
        serial.notice.connect(self.report)

    def start(self) -> None:
        """Push the initial state to the view and enumerate ports."""
        self.view.render_documents(self.documents.state)
        self.view.render_serial(self.serial.state)
        self.view.set_font_size(self.font_size)
        self.serial.refresh_port_list()

    # ----------------------------- notices -----------------------------

    def report(self, notice: Notice) -> None:
        text = f"{notice.title}: {notice.text}" if notice.text else notice.title
        if notice.level in (NoticeLevel.INFO, NoticeLevel.SUCCESS):
            self.view.show_status(text, STATUS_MSEC)
        elif notice.level is NoticeLevel.WARNING:
            self.messages.warning(None, notice.title, notice.text)
        else:
            self.messages.error(None, notice.title, notice.text)

    # ----------------------------- shortcuts -----------------------------

    def _shortcut_actions(self) -> ShortcutActions:
        return ShortcutActions(
            save=self.documents.save_active,
            open=self.documents.open_via_dialog,
            new=self.documents.create_document,
            quit=self.request_quit,
            zoom_in=self.zoom_in,
            zoom_out=self.zoom_out,
        )

    def handle_chord(self, chord: Chord) -> bool:
        return self.shortcuts.dispatch(chord)

    # ----------------------------- zoom -----------------------------

    def zoom_in(self) -> None:
        self._set_font_size(self.font_size + 1)

    def zoom_out(self) -> None:
        self._set_font_size(self.font_size - 1)

    def _set_font_size(self, size: int) -> None:
        size = max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, size))
        if size == self.font_size:
            return
        self.font_size = size
        self.view.set_font_size(size)

    # ----------------------------- confirmations -----------------------------

    def request_quit(self) -> None:
        if self.confirmation.request(ConfirmAction.QUIT):
            self.view.show_confirmation(self.confirmation.pending)  # type: ignore[arg-type]

    def show_board_info(self) -> None:
        self.gateway.get_board_info().then(self._on_board_info, self._on_board_info_failed)

    def _on_board_info(self, details: object) -> None:
        if self.confirmation.request(ConfirmAction.BOARD_INFO, str(details or "")):
            self.view.show_confirmation(self.confirmation.pending)  # type: ignore[arg-type]

    def _on_board_info_failed(self, error: str) -> None:
        self.report(Notice(NoticeLevel.ERROR, "Board Info", f"Failed to query the board:\n{error}"))

    def confirm(self) -> None:
        action = self.confirmation.confirm()
        if action is ConfirmAction.QUIT:
            self._quit()

    def cancel(self) -> None:
        self.confirmation.cancel()

    def _quit(self) -> None:
        self.serial.shutdown()
        self.gateway.exit().then(
            lambda _ack: self.window.close_window(),
            self._on_exit_failed,
        )

    def _on_exit_failed(self, error: str) -> None:
        self.report(Notice(NoticeLevel.ERROR, "Exit", f"Failed to exit the application:\n{error}"))
        self.window.close_window()

    # ----------------------------- build / run -----------------------------

    def build_project(self) -> None:
        self._project_call("Build", self.gateway.build_project)

    def run_project(self) -> None:
        self._project_call("Run", self.gateway.run_project)

    def _main_file(self) -> Path:
        doc = self.documents.active_document
        if doc is None or doc.path is None:
            raise ValidationError("Save the active document before building or running it.")
        return doc.path

    def _project_call(self, label: str, call) -> None:
        try:
            main_file = self._main_file()
        except ValidationError as e:
            self.report(Notice(NoticeLevel.WARNING, label, str(e)))
            return
        self.view.show_status(f"{label}: {main_file.name}…", STATUS_MSEC)
        call(main_file).then(
            lambda output: self.messages.info(None, label, str(output or "")),
            lambda err: self.report(Notice(NoticeLevel.ERROR, f"{label} Failed", err)),
        )

    # ----------------------------- help -----------------------------

    def show_about(self) -> None:
        text = f"{APP_NAME}\nVersion {self.version}\n\n{ABOUT_TEXT}"
        self.messages.info(None, "About Us", text)

    def open_source_page(self) -> None:
        if not self.links.open_url(self.source_url):
            logger.warning("desktop refused to open %s", self.source_url)
            self.report(
                Notice(NoticeLevel.WARNING, "GitHub Source Code", f"Could not open {self.source_url}")
            )
