from __future__ import annotations

from typing import Any

import httpx
from PySide6.QtCore import Property, QObject

from asset_studio.app.presenter import WorkflowPresenter
from asset_studio.errors import WorkflowError
from asset_studio.logger import get_logger
from asset_studio.models import AssetRegistered, ModificationApplied, Result, Severity
from asset_studio.ops.modification_coordinator import ModificationCoordinator
from asset_studio.ops.upload_coordinator import UploadCoordinator
from asset_studio.ops.validation import SelectionInput
from asset_studio.service.client import AssetServiceClient
from asset_studio.settings_manager import SettingsManager

_logger = get_logger("backend")


class Backend(QObject):
    """Application facade wiring settings, service client, presenter and coordinators.

    UI -> Python: ``await backend.dispatch(cmd, payload)`` or the two actions directly
    Python -> UI: ``backend.presenter.event(dict)``
    UI bindings: backend.presenter.asset / .modification / .notification
    """

    def __init__(
        self,
        settings: SettingsManager | None = None,
        client: AssetServiceClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)

        self._settings_mgr = settings or SettingsManager()
        self._client = client or AssetServiceClient.from_settings(self._settings_mgr, transport=transport)

        self._presenter = WorkflowPresenter(
            self,
            preserve_asset_on_modification_failure=self._settings_mgr.preserve_asset_on_modification_failure,
        )
        self._upload = UploadCoordinator(self._presenter, self._client)
        self._modify = ModificationCoordinator(self._presenter, self._client)

        _logger.debug("backend ready: %s", self._client.base_url)

    def _get_presenter(self) -> QObject:
        return self._presenter

    presenterObj = Property(QObject, _get_presenter, constant=True)  # type: ignore[arg-type]

    @property
    def presenter(self) -> WorkflowPresenter:
        return self._presenter

    @property
    def client(self) -> AssetServiceClient:
        return self._client

    @property
    def settings(self) -> SettingsManager:
        return self._settings_mgr

    # ---- actions ----
    async def submit_upload(self, file_selection: SelectionInput) -> Result[AssetRegistered]:
        return await self._upload.submit_upload(file_selection)

    async def submit_modification(self, prompt: str | None) -> Result[ModificationApplied]:
        return await self._modify.submit_modification(prompt)

    async def dispatch(self, cmd: str, payload: object | None = None) -> Result[Any] | None:
        """Single command entry for UI layers that route actions by name."""
        command = str(cmd or "").strip()
        if not command:
            self._presenter.notify("Empty cmd", Severity.ERROR)
            return None

        if command == "upload":
            return await self.submit_upload(_get_payload_value(payload, "file", default=payload))

        if command == "modify":
            return await self.submit_modification(_get_payload_value(payload, "prompt", default=payload))

        if command == "reset":
            self._presenter.reset()
            return None

        if command == "clearNotification":
            self._presenter.clear_notification()
            return None

        _logger.warning("unknown cmd: %s", command)
        self._presenter.notify(f"Unknown command: {command}", Severity.ERROR)
        return Result.failure(WorkflowError(f"Unknown command: {command}"))

    async def aclose(self) -> None:
        await self._client.close()


def _get_payload_value(payload: object | None, key: str, *, default: Any) -> Any:
    """Extract a value from a command payload.

    Dict payloads are looked up by ``key`` (missing -> None); anything else is
    returned as ``default``, which callers pass as the bare payload itself.
    """

    if isinstance(payload, dict):
        return payload.get(key)
    return default
