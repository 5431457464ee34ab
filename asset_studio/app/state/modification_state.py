from __future__ import annotations

from PySide6.QtCore import Property, QObject, Signal

from asset_studio.models import (
    AssetId,
    ModificationOutcome,
    ModificationRequest,
    ModificationStatus,
)


class ModificationState(QObject):
    """The most recently issued modification request, if any.

    The request is ephemeral: it lives for one round trip and is replaced by
    the next one (or cleared when a new asset is uploaded).
    """

    requestChanged = Signal()
    statusChanged = Signal(str)
    pendingChanged = Signal(bool)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._request: ModificationRequest | None = None

    def _get_status(self) -> str:
        return self._request.status.value if self._request else ""

    status = Property(str, _get_status, notify=statusChanged)  # type: ignore[arg-type]

    def _get_pending(self) -> bool:
        return self._request is not None and self._request.status == ModificationStatus.PENDING

    pending = Property(bool, _get_pending, notify=pendingChanged)  # type: ignore[arg-type]

    def _get_prompt(self) -> str:
        return self._request.prompt if self._request else ""

    prompt = Property(str, _get_prompt, notify=requestChanged)  # type: ignore[arg-type]

    def _get_failure_reason(self) -> str:
        if self._request and self._request.outcome and self._request.outcome.failure_reason:
            return self._request.outcome.failure_reason
        return ""

    failureReason = Property(str, _get_failure_reason, notify=requestChanged)  # type: ignore[arg-type]

    def snapshot(self) -> ModificationRequest | None:
        return self._request

    # ---- internal mutation helpers (called by presenter) ----
    def _begin(self, request_id: int, target_asset_id: AssetId, prompt: str) -> ModificationRequest:
        self._replace(ModificationRequest(request_id=request_id, target_asset_id=target_asset_id, prompt=prompt))
        return self._request  # type: ignore[return-value]

    def _resolve(self, status: ModificationStatus, outcome: ModificationOutcome) -> None:
        if self._request is None:
            return
        self._replace(
            ModificationRequest(
                request_id=self._request.request_id,
                target_asset_id=self._request.target_asset_id,
                prompt=self._request.prompt,
                status=status,
                outcome=outcome,
            )
        )

    def _clear(self) -> None:
        self._replace(None)

    def _replace(self, request: ModificationRequest | None) -> None:
        old_status = self._get_status()
        old_pending = self._get_pending()
        self._request = request
        self.requestChanged.emit()
        if self._get_status() != old_status:
            self.statusChanged.emit(self._get_status())
        if self._get_pending() != old_pending:
            self.pendingChanged.emit(self._get_pending())
