from __future__ import annotations

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtGui import QAction, QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QSplitter,
    QStackedWidget,
    QStatusBar,
    QTabWidget,
)

from niti.domain.models import (
    ConfirmAction,
    DocumentCollection,
    PendingConfirmation,
    SerialSession,
)
from niti.services.session.document_manager import DocumentSessionManager
from niti.services.session.serial_manager import SerialSessionManager
from niti.services.ui.adapters.qt_keys import chord_from_key
from niti.services.ui.serial_monitor import SerialMonitorPanel
from niti.utils.constants import APP_NAME, DEFAULT_FONT_SIZE, STATUS_MSEC


class MainWindow(QMainWindow):
    """
    Thin PyQt window: renders manager state and forwards user intents.

    Implements IMainView for the presenter and IWindowControl for the quit
    flow. Keyboard chords are caught by an application-wide event filter and
    handed to the presenter's shortcut router.
    """

    def __init__(
        self,
        documents: DocumentSessionManager,
        serial: SerialSessionManager,
        *,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self.setWindowTitle(app_title)
        self.resize(1200, 760)

        self._app_title = app_title
        self.documents = documents
        self.serial = serial
        self.presenter = None
        self._rendering = False
        self._close_confirmed = False
        self._editors: dict[int, QPlainTextEdit] = {}  # document uid -> editor
        self._font = QFont("Courier New", DEFAULT_FONT_SIZE)
        self._font.setStyleHint(QFont.StyleHint.Monospace)

        # Widgets
        self.tabs = QTabWidget(self)
        self.tabs.setTabsClosable(True)
        self.tabs.setMovable(False)
        self.placeholder = QLabel("No open files. Press Ctrl+N or Ctrl+O.", self)
        self.placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.editor_stack = QStackedWidget(self)
        self.editor_stack.addWidget(self.placeholder)
        self.editor_stack.addWidget(self.tabs)

        self.serial_panel = SerialMonitorPanel(self)

        self.splitter = QSplitter(self)
        self.splitter.setOrientation(Qt.Orientation.Horizontal)
        self.splitter.addWidget(self.serial_panel)
        self.splitter.addWidget(self.editor_stack)
        self.splitter.setStretchFactor(0, 0)
        self.splitter.setStretchFactor(1, 1)
        self.setCentralWidget(self.splitter)
        self.setStatusBar(QStatusBar(self))

        self._build_actions()
        self._build_menu()
        self._wire_documents()
        self._wire_serial()

    # ---------- Presenter ----------
    def attach_presenter(self, presenter) -> None:
        self.presenter = presenter
        self.act_quit.triggered.connect(presenter.request_quit)
        self.act_zoom_in.triggered.connect(presenter.zoom_in)
        self.act_zoom_out.triggered.connect(presenter.zoom_out)
        self.act_build.triggered.connect(presenter.build_project)
        self.act_run.triggered.connect(presenter.run_project)
        self.act_board_info.triggered.connect(presenter.show_board_info)
        self.act_source.triggered.connect(presenter.open_source_page)
        self.act_about.triggered.connect(presenter.show_about)
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)

    # ---------- UI creation ----------
    def _build_actions(self) -> None:
        # Chords are dispatched by the shortcut router, so actions carry
        # display text only.
        self.act_new = QAction("New File\tCtrl+N", self, triggered=self.documents.create_document)
        self.act_open = QAction("Open File…\tCtrl+O", self, triggered=self.documents.open_via_dialog)
        self.act_save = QAction("Save File\tCtrl+S", self, triggered=self.documents.save_active)
        self.act_close_tab = QAction("Close Tab", self, triggered=self._close_current_tab)
        self.act_quit = QAction("Exit\tCtrl+Q", self)

        self.act_zoom_in = QAction("Zoom In\tCtrl+Shift++", self)
        self.act_zoom_out = QAction("Zoom Out\tCtrl+-", self)

        self.act_build = QAction("Build", self)
        self.act_run = QAction("Run", self)
        self.act_board_info = QAction("Show Board Info", self)

        self.act_source = QAction("GitHub Source Code", self)
        self.act_about = QAction("About Us", self)

    def _build_menu(self) -> None:
        m = self.menuBar()
        filem = m.addMenu("&File")
        for a in (self.act_new, self.act_open, self.act_save, self.act_close_tab):
            filem.addAction(a)
        filem.addSeparator()
        filem.addAction(self.act_quit)

        viewm = m.addMenu("&View")
        viewm.addAction(self.act_zoom_in)
        viewm.addAction(self.act_zoom_out)

        runm = m.addMenu("&Run")
        for a in (self.act_build, self.act_run, self.act_board_info):
            runm.addAction(a)

        self.help_menu = m.addMenu("&Help")
        self.help_menu.addAction(self.act_source)
        self.help_menu.addAction(self.act_about)

    def _wire_documents(self) -> None:
        self.tabs.currentChanged.connect(self._on_tab_changed)
        self.tabs.tabCloseRequested.connect(self.documents.close_document)

    def _wire_serial(self) -> None:
        p, s = self.serial_panel, self.serial
        p.refresh_requested.connect(s.refresh_port_list)
        p.port_selected.connect(s.select_port)
        p.connect_requested.connect(s.connect_selected)
        p.disconnect_requested.connect(s.disconnect_port)
        p.auto_read_toggled.connect(s.toggle_auto_read)
        p.line_mode_toggled.connect(s.toggle_line_mode)
        p.read_requested.connect(s.manual_read)
        p.clear_requested.connect(s.clear_receive_buffer)
        p.outbound_edited.connect(s.set_outbound)
        p.send_requested.connect(lambda: s.write())

    # ---------- IMainView ----------
    def render_documents(self, state: DocumentCollection) -> None:
        self._rendering = True
        try:
            # One editor per document uid; surviving editors are never rebuilt.
            live = {doc.uid for doc in state.documents}
            for uid in [u for u in self._editors if u not in live]:
                editor = self._editors.pop(uid)
                self.tabs.removeTab(self.tabs.indexOf(editor))
                editor.deleteLater()

            for i, doc in enumerate(state.documents):
                editor = self._editors.get(doc.uid)
                if editor is None:
                    editor = self._editors[doc.uid] = self._new_editor()
                    self.tabs.insertTab(i, editor, "")
                elif self.tabs.indexOf(editor) != i:
                    self.tabs.removeTab(self.tabs.indexOf(editor))
                    self.tabs.insertTab(i, editor, "")
                if editor.toPlainText() != doc.text:
                    editor.setPlainText(doc.text)
                label = f"{doc.label} •" if doc.modified else doc.label
                self.tabs.setTabText(i, label)
                self.tabs.setTabToolTip(i, str(doc.path) if doc.path else "Untitled")

            if state.is_empty:
                self.editor_stack.setCurrentWidget(self.placeholder)
                self.setWindowTitle(self._app_title)
            else:
                self.tabs.setCurrentIndex(state.active_index)
                self.editor_stack.setCurrentWidget(self.tabs)
                active = state.active
                star = " •" if active.modified else ""
                self.setWindowTitle(f"{active.label}{star} — {self._app_title}")
        finally:
            self._rendering = False

    def render_serial(self, state: SerialSession) -> None:
        self.serial_panel.render(state)

    def set_font_size(self, size: int) -> None:
        self._font.setPointSize(size)
        for i in range(self.tabs.count()):
            self.editor_at(i).setFont(self._font)

    def show_status(self, text: str, msec: int = STATUS_MSEC) -> None:
        self.statusBar().showMessage(text, msec)

    def show_confirmation(self, pending: PendingConfirmation) -> None:
        if self.presenter is None:
            return
        messages = self.presenter.messages
        if pending.action is ConfirmAction.QUIT:
            question = f"Are you sure you want to quit {self._app_title}?"
            if messages.ask(self, "Confirm Quit", question):
                self.presenter.confirm()
            else:
                self.presenter.cancel()
        else:
            messages.info(self, "Board Information", pending.detail)
            self.presenter.confirm()

    # ---------- IWindowControl ----------
    def close_window(self) -> None:
        self._close_confirmed = True
        self.close()

    # ---------- Editors ----------
    def editor_at(self, index: int) -> QPlainTextEdit:
        return self.tabs.widget(index)  # type: ignore[return-value]

    def _new_editor(self) -> QPlainTextEdit:
        editor = QPlainTextEdit(self.tabs)
        editor.setFont(self._font)
        editor.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        editor.setTabStopDistance(4 * editor.fontMetrics().horizontalAdvance(" "))
        editor.textChanged.connect(lambda e=editor: self._on_editor_changed(e))
        return editor

    def _on_editor_changed(self, editor: QPlainTextEdit) -> None:
        if self._rendering:
            return
        index = self.tabs.indexOf(editor)
        if index >= 0:
            self.documents.update_content(index, editor.toPlainText())

    def _on_tab_changed(self, index: int) -> None:
        if not self._rendering and index >= 0:
            self.documents.set_active_document(index)

    def _close_current_tab(self) -> None:
        if self.tabs.count():
            self.documents.close_document(self.tabs.currentIndex())

    # ---------- Keyboard ----------
    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if (
            event.type() == QEvent.Type.KeyPress
            and self.presenter is not None
            and self.isActiveWindow()
            and isinstance(event, QKeyEvent)
        ):
            chord = chord_from_key(event.key(), event.modifiers())
            if chord is not None and chord.ctrl and self.presenter.handle_chord(chord):
                return True
        return super().eventFilter(obj, event)

    # ---------- Close ----------
    def closeEvent(self, event) -> None:
        if self._close_confirmed or self.presenter is None:
            app = QApplication.instance()
            if app is not None:
                app.removeEventFilter(self)
            super().closeEvent(event)
            return
        event.ignore()
        self.presenter.request_quit()
