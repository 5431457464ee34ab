"""Pytest configuration.

State objects are PySide6 QObjects. We create a single `QCoreApplication` for
the entire session as early as possible and cleanly shut it down at the end.
Async actions are driven with `asyncio.run` and the asset service is faked
with `httpx.MockTransport` (see tests/helpers/fake_service.py).
"""

from __future__ import annotations

from typing import Any

import pytest

from asset_studio.app.backend import Backend
from asset_studio.models import FileSelection
from asset_studio.settings_manager import SettingsManager
from tests.helpers.fake_service import FakeAssetService

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QCoreApplication exists before collecting/running tests."""

    from PySide6.QtCore import QCoreApplication

    global _APP

    app = QCoreApplication.instance()
    if app is None:
        # Keep a strong ref so it isn't GC'd mid-session.
        _APP = QCoreApplication([])
    else:
        _APP = app


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    from PySide6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        return
    app.quit()
    app.processEvents()


@pytest.fixture
def service() -> FakeAssetService:
    return FakeAssetService()


@pytest.fixture
def settings() -> SettingsManager:
    sm = SettingsManager()
    sm.set("base_url", "http://assets.test")
    return sm


@pytest.fixture
def backend(service: FakeAssetService, settings: SettingsManager) -> Backend:
    return Backend(settings=settings, transport=service.transport)


@pytest.fixture
def cat_png() -> FileSelection:
    return FileSelection(name="cat.png", content=b"\x89PNG\r\n\x1a\nfake", content_type="image/png")
