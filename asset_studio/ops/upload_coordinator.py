from __future__ import annotations

import asyncio

from asset_studio.app.presenter import WorkflowPresenter
from asset_studio.errors import (
    NoFileSelected,
    ServiceError,
    SupersededError,
    TransportError,
    WorkflowError,
)
from asset_studio.logger import get_logger
from asset_studio.models import AssetRegistered, Result, Severity
from asset_studio.ops.validation import (
    MSG_UPLOAD_TRANSPORT,
    MSG_UPLOADED,
    MSG_UPLOADING,
    SelectionInput,
    select_file,
    upload_failed_message,
)
from asset_studio.service.client import AssetServiceClient

_logger = get_logger("upload")


class UploadCoordinator:
    """Validates a file selection and registers it with the asset service.

    Steps run strictly in order: validate -> Uploading -> send -> Registered/Failed.
    A second upload issued before the first resolves supersedes it.
    """

    def __init__(self, presenter: WorkflowPresenter, client: AssetServiceClient) -> None:
        self._presenter = presenter
        self._client = client

    async def submit_upload(self, file_selection: SelectionInput) -> Result[AssetRegistered]:
        try:
            # Reading a path from disk must not stall the event loop.
            selection = await asyncio.to_thread(select_file, file_selection)
        except NoFileSelected as e:
            self._presenter.notify(e.message, Severity.ERROR)
            return Result.failure(e)

        token = self._presenter.begin_upload(selection.name)
        self._presenter.notify(MSG_UPLOADING, Severity.INFO)

        try:
            data = await self._client.create_asset(selection)
        except ServiceError as e:
            return self._fail(token, e, upload_failed_message(e))
        except TransportError as e:
            return self._fail(token, e, MSG_UPLOAD_TRANSPORT)
        except Exception as e:
            _logger.exception("unexpected error during upload of %s", selection.name)
            return self._fail(token, TransportError(str(e)), MSG_UPLOAD_TRANSPORT)

        asset_id = data["asset_id"]
        registered = AssetRegistered(
            asset_id=asset_id,
            source_name=selection.name,
            original_url=self._client.upload_url(selection.name),
            message=str(data.get("message") or MSG_UPLOADED),
        )
        if not self._presenter.complete_upload(token, registered.asset_id, registered.original_url):
            _logger.debug("upload #%d superseded; dropped asset_id=%r", token, registered.asset_id)
            return Result.failure(SupersededError("upload superseded by a newer upload"))

        self._presenter.notify(registered.message, Severity.SUCCESS)
        return Result.success(registered)

    def _fail(self, token: int, err: WorkflowError, message: str) -> Result[AssetRegistered]:
        if not self._presenter.fail_upload(token):
            _logger.debug("upload #%d superseded; dropped error %s: %s", token, err.code, err.message)
            return Result.failure(SupersededError("upload superseded by a newer upload"))
        _logger.warning("upload failed: %s", err.message)
        self._presenter.notify(message, Severity.ERROR)
        return Result.failure(err)
