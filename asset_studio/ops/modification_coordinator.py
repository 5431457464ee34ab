from __future__ import annotations

from asset_studio.app.presenter import WorkflowPresenter
from asset_studio.errors import (
    ServiceError,
    SupersededError,
    TransportError,
    ValidationError,
    WorkflowError,
)
from asset_studio.logger import get_logger
from asset_studio.models import ModificationApplied, ModificationRequest, Result, Severity
from asset_studio.ops.validation import (
    MSG_MODIFIED,
    MSG_MODIFY_TRANSPORT,
    MSG_MODIFYING,
    modification_failed_message,
    normalize_prompt,
    require_asset_id,
)
from asset_studio.service.client import AssetServiceClient

_logger = get_logger("modify")


class ModificationCoordinator:
    """Requests an AI modification of the current asset.

    The request always targets the asset identifier captured at upload time,
    never the file name. Only the most recently issued request may change
    state; late responses to older requests are dropped.
    """

    def __init__(self, presenter: WorkflowPresenter, client: AssetServiceClient) -> None:
        self._presenter = presenter
        self._client = client

    async def submit_modification(self, prompt: str | None) -> Result[ModificationApplied]:
        # Both checks are local; nothing goes over the network unless they pass.
        try:
            asset_id = require_asset_id(self._presenter.current_asset)
            text = normalize_prompt(prompt)
        except ValidationError as e:
            self._presenter.notify(e.message, Severity.ERROR)
            return Result.failure(e)

        request = self._presenter.begin_modification(asset_id, text)
        self._presenter.notify(MSG_MODIFYING, Severity.INFO)

        try:
            data = await self._client.modify_asset(request.target_asset_id, request.prompt)
        except ServiceError as e:
            return self._fail(request, e, modification_failed_message(e))
        except TransportError as e:
            return self._fail(request, e, MSG_MODIFY_TRANSPORT)
        except Exception as e:
            _logger.exception("unexpected error during modification #%d", request.request_id)
            return self._fail(request, TransportError(str(e)), MSG_MODIFY_TRANSPORT)

        applied = ModificationApplied(
            asset_id=request.target_asset_id,
            artifact_ref=str(data["artifact_ref"]),
            modified_url=str(data.get("modified_url") or ""),
            message=str(data.get("message") or MSG_MODIFIED),
        )
        if not self._presenter.complete_modification(request, applied.artifact_ref, applied.modified_url):
            _logger.debug("modification #%d superseded; dropped artifact %s", request.request_id, applied.artifact_ref)
            return Result.failure(SupersededError("modification superseded by a newer request"))

        self._presenter.notify(applied.message, Severity.SUCCESS)
        return Result.success(applied)

    def _fail(self, request: ModificationRequest, err: WorkflowError, message: str) -> Result[ModificationApplied]:
        if not self._presenter.fail_modification(request, err.message):
            _logger.debug(
                "modification #%d superseded; dropped error %s: %s", request.request_id, err.code, err.message
            )
            return Result.failure(SupersededError("modification superseded by a newer request"))
        _logger.warning("modification #%d failed: %s", request.request_id, err.message)
        self._presenter.notify(message, Severity.ERROR)
        return Result.failure(err)
