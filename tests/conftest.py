from __future__ import annotations

import pytest
from PySide6.QtCore import QCoreApplication

from core.state import AppState


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    # QObject / QTimer need an application instance; no display required
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def app_state():
    return AppState()


@pytest.fixture
def views(app_state):
    seen = []
    app_state.view_changed.connect(seen.append)
    return seen
