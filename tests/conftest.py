from __future__ import annotations

import os

import pytest
from PyQt6.QtWidgets import QApplication

from niti.services.session.document_manager import DocumentSessionManager
from niti.services.session.serial_manager import SerialSessionManager

from tests.fakes import (
    FakeDialogs,
    FakeGateway,
    FakeLinks,
    FakeMessages,
    FakeView,
    FakeWindow,
)

# Headless runs (CI) have no display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        # Don't forcibly quit a shared app; only close if we created it here.
        if created:
            app.quit()


# --- Other common fixtures ---


@pytest.fixture()
def gateway(qapp) -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def dialogs() -> FakeDialogs:
    return FakeDialogs()


@pytest.fixture()
def messages() -> FakeMessages:
    return FakeMessages()


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def window_control() -> FakeWindow:
    return FakeWindow()


@pytest.fixture()
def links() -> FakeLinks:
    return FakeLinks()


@pytest.fixture()
def documents(gateway: FakeGateway, dialogs: FakeDialogs) -> DocumentSessionManager:
    return DocumentSessionManager(
        gateway, dialogs, default_extension="rs", default_content="// hi\n"
    )


@pytest.fixture()
def serial(gateway: FakeGateway) -> SerialSessionManager:
    mgr = SerialSessionManager(gateway, poll_interval_ms=500)
    yield mgr
    mgr.shutdown()
