from __future__ import annotations

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QTextCursor
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from niti.domain.models import SerialSession


class SerialMonitorPanel(QWidget):
    """
    Serial monitor side panel. Renders a SerialSession and re-emits user
    intents as signals; it never talks to the device itself.
    """

    refresh_requested = pyqtSignal()
    port_selected = pyqtSignal(str)
    connect_requested = pyqtSignal()
    disconnect_requested = pyqtSignal()
    auto_read_toggled = pyqtSignal()
    line_mode_toggled = pyqtSignal()
    read_requested = pyqtSignal()
    clear_requested = pyqtSignal()
    outbound_edited = pyqtSignal(str)
    send_requested = pyqtSignal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._rendering = False
        # Compared as str; Qt may rewrite line endings in toPlainText().
        self._shown_buffer = ""

        self.port_combo = QComboBox(self)
        self.port_combo.setPlaceholderText("Select a port")
        self.refresh_btn = QPushButton("Refresh Ports", self)
        self.connect_btn = QPushButton("Connect", self)
        self.disconnect_btn = QPushButton("Disconnect", self)
        self.auto_read_cb = QCheckBox("Auto Read", self)
        self.line_mode_btn = QPushButton("Line-by-Line Mode", self)

        self.received = QPlainTextEdit(self)
        self.received.setReadOnly(True)
        self.received.setPlaceholderText("Data will appear here")
        self.read_btn = QPushButton("Read Data", self)
        self.clear_btn = QPushButton("Clear", self)

        self.input_edit = QLineEdit(self)
        self.input_edit.setPlaceholderText("Enter data to send")
        self.send_btn = QPushButton("Send Data", self)

        self._build_layout()
        self._wire()

    def _build_layout(self) -> None:
        ports = QHBoxLayout()
        ports.addWidget(QLabel("Select Port:", self))
        ports.addWidget(self.port_combo, 1)
        ports.addWidget(self.refresh_btn)

        conn = QHBoxLayout()
        conn.addWidget(self.connect_btn)
        conn.addWidget(self.disconnect_btn)
        conn.addStretch(1)

        modes = QHBoxLayout()
        modes.addWidget(self.auto_read_cb)
        modes.addWidget(self.line_mode_btn)
        modes.addStretch(1)

        reads = QHBoxLayout()
        reads.addWidget(self.read_btn)
        reads.addWidget(self.clear_btn)
        reads.addStretch(1)

        send = QHBoxLayout()
        send.addWidget(self.input_edit, 1)
        send.addWidget(self.send_btn)

        root = QVBoxLayout(self)
        root.addWidget(QLabel("<b>Serial Monitor</b>", self))
        root.addLayout(ports)
        root.addLayout(conn)
        root.addLayout(modes)
        root.addWidget(QLabel("Received Data", self))
        root.addWidget(self.received, 1)
        root.addLayout(reads)
        root.addWidget(QLabel("Send Data", self))
        root.addLayout(send)

    def _wire(self) -> None:
        self.refresh_btn.clicked.connect(self.refresh_requested)
        self.port_combo.currentTextChanged.connect(self._on_port_changed)
        self.connect_btn.clicked.connect(self.connect_requested)
        self.disconnect_btn.clicked.connect(self.disconnect_requested)
        # Checkbox state is driven by render(); only forward user clicks.
        self.auto_read_cb.clicked.connect(lambda _checked: self.auto_read_toggled.emit())
        self.line_mode_btn.clicked.connect(self.line_mode_toggled)
        self.read_btn.clicked.connect(self.read_requested)
        self.clear_btn.clicked.connect(self.clear_requested)
        self.input_edit.textEdited.connect(self.outbound_edited)
        self.input_edit.returnPressed.connect(self.send_requested)
        self.send_btn.clicked.connect(self.send_requested)

    def _on_port_changed(self, text: str) -> None:
        if not self._rendering:
            self.port_selected.emit(text)

    def render(self, state: SerialSession) -> None:
        self._rendering = True
        try:
            current = [self.port_combo.itemText(i) for i in range(self.port_combo.count())]
            if current != list(state.ports):
                self.port_combo.clear()
                self.port_combo.addItems(list(state.ports))
            idx = self.port_combo.findText(state.selected_port) if state.selected_port else -1
            self.port_combo.setCurrentIndex(idx)

            connected = state.connected
            self.port_combo.setEnabled(not connected)
            self.connect_btn.setText(f"Connected to {state.port_name}" if connected else "Connect")
            self.connect_btn.setEnabled(not connected and bool(state.selected_port))
            self.disconnect_btn.setEnabled(connected)

            self.auto_read_cb.setEnabled(connected)
            self.auto_read_cb.setChecked(state.auto_read)
            self.line_mode_btn.setText("Normal Mode" if state.line_mode else "Line-by-Line Mode")

            self.read_btn.setVisible(not state.auto_read)
            self.read_btn.setEnabled(connected and not state.read_in_flight)

            self._show_received(state.receive_buffer)

            if self.input_edit.text() != state.pending_outbound:
                self.input_edit.setText(state.pending_outbound)
            self.send_btn.setEnabled(connected and bool(state.pending_outbound))
        finally:
            self._rendering = False

    def _show_received(self, buffer: str) -> None:
        shown = self._shown_buffer
        if buffer == shown:
            return
        if buffer.startswith(shown):
            # Append only the new tail; follow it only if already at the bottom.
            bar = self.received.verticalScrollBar()
            at_bottom = bar.value() >= bar.maximum()
            cursor = QTextCursor(self.received.document())
            cursor.movePosition(QTextCursor.MoveOperation.End)
            cursor.insertText(buffer[len(shown) :])
            if at_bottom:
                bar.setValue(bar.maximum())
        else:
            self.received.setPlainText(buffer)
            self.received.moveCursor(QTextCursor.MoveOperation.End)
        self._shown_buffer = buffer
