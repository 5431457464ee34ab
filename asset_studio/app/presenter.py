from __future__ import annotations

from PySide6.QtCore import Property, QObject, Signal

from asset_studio.app.state.asset_state import AssetState
from asset_studio.app.state.modification_state import ModificationState
from asset_studio.app.state.notification_state import NotificationState
from asset_studio.logger import get_logger
from asset_studio.models import (
    Asset,
    AssetId,
    LifecycleState,
    ModificationOutcome,
    ModificationRequest,
    ModificationStatus,
    Notification,
    Severity,
)

_logger = get_logger("presenter")


class WorkflowPresenter(QObject):
    """Single owner of what the user currently sees.

    Coordinators never touch the state objects directly; they call the
    ``begin_*`` / ``complete_*`` / ``fail_*`` methods below. Every ``begin_*``
    returns a token and every resolution method takes it back: a resolution
    whose token is no longer the latest is discarded and returns False.

    Python -> UI: presenter.event(dict) for notifications.
    UI bindings: presenter.asset / presenter.modification / presenter.notification
    """

    # QObject already has an .event() handler method, so we must not shadow it.
    event_ = Signal(object, name="event")

    def __init__(self, parent: QObject | None = None, *, preserve_asset_on_modification_failure: bool = True) -> None:
        super().__init__(parent)
        self._asset = AssetState(self)
        self._modification = ModificationState(self)
        self._notification = NotificationState(self)

        self.preserve_asset_on_modification_failure = bool(preserve_asset_on_modification_failure)

        self._instance_counter = 0
        self._request_counter = 0
        # Lifecycle to return to when a modification fails and the asset is kept.
        self._restore_state = LifecycleState.REGISTERED

    # ---- expose state objects to the UI ----
    def _get_asset(self) -> QObject:
        return self._asset

    asset = Property(QObject, _get_asset, constant=True)  # type: ignore[arg-type]

    def _get_modification(self) -> QObject:
        return self._modification

    modification = Property(QObject, _get_modification, constant=True)  # type: ignore[arg-type]

    def _get_notification(self) -> QObject:
        return self._notification

    notification = Property(QObject, _get_notification, constant=True)  # type: ignore[arg-type]

    # ---- snapshots ----
    @property
    def current_asset(self) -> Asset:
        return self._asset.snapshot()

    @property
    def current_modification(self) -> ModificationRequest | None:
        return self._modification.snapshot()

    @property
    def current_notification(self) -> Notification | None:
        return self._notification.snapshot()

    @property
    def original_visible(self) -> bool:
        return self._asset._get_original_visible()

    @property
    def modified_visible(self) -> bool:
        return self._asset._get_modified_visible()

    # ---- notifications ----
    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> None:
        sev = Severity(severity)
        self._notification._show(message, sev)
        _logger.debug("notify [%s] %s", sev.value, message)
        self.event_.emit({"type": "event", "name": "toast", "level": sev.value, "message": str(message)})

    def clear_notification(self) -> None:
        self._notification._hide()

    def reset(self) -> None:
        """Drop the current asset and any pending request."""
        self._instance_counter += 1
        self._asset._start_instance(self._instance_counter)
        self._modification._clear()
        self._notification._hide()

    # ---- upload transitions ----
    def begin_upload(self, source_name: str) -> int:
        """Start a fresh asset instance in ``Uploading``; returns its token."""
        self._instance_counter += 1
        token = self._instance_counter
        self._asset._start_instance(token, source_name)
        self._asset._transition(LifecycleState.UPLOADING)
        self._modification._clear()
        _logger.debug("upload #%d started: %s", token, source_name)
        return token

    def is_current_upload(self, token: int) -> bool:
        return token == self._asset._get_instance() and self._asset._get_lifecycle() == LifecycleState.UPLOADING

    def complete_upload(self, token: int, asset_id: AssetId, original_url: str) -> bool:
        if not self.is_current_upload(token):
            _logger.debug("upload #%d response discarded (superseded)", token)
            return False
        self._asset._set_asset_id(asset_id)
        self._asset._set_original_url(original_url)
        self._asset._transition(LifecycleState.REGISTERED)
        _logger.info("asset registered: id=%r name=%s", asset_id, self._asset._get_source_name())
        return True

    def fail_upload(self, token: int) -> bool:
        if not self.is_current_upload(token):
            _logger.debug("upload #%d failure discarded (superseded)", token)
            return False
        self._asset._transition(LifecycleState.FAILED)
        return True

    # ---- modification transitions ----
    def begin_modification(self, target_asset_id: AssetId, prompt: str) -> ModificationRequest:
        """Issue a new request against the current asset; supersedes any pending one."""
        current = self._asset._get_lifecycle()
        if current != LifecycleState.MODIFICATION_PENDING:
            self._restore_state = current
        self._request_counter += 1
        request = self._modification._begin(self._request_counter, target_asset_id, prompt)
        self._asset._transition(LifecycleState.MODIFICATION_PENDING)
        _logger.debug("modification #%d started for asset %r", request.request_id, target_asset_id)
        return request

    def is_current_modification(self, request: ModificationRequest) -> bool:
        current = self._modification.snapshot()
        return (
            current is not None
            and current.request_id == request.request_id
            and current.status == ModificationStatus.PENDING
            and self._asset._get_asset_id() == request.target_asset_id
            and self._asset._get_lifecycle() == LifecycleState.MODIFICATION_PENDING
        )

    def complete_modification(self, request: ModificationRequest, artifact_ref: str, modified_url: str) -> bool:
        if not self.is_current_modification(request):
            _logger.debug("modification #%d response discarded (superseded)", request.request_id)
            return False
        self._modification._resolve(ModificationStatus.APPLIED, ModificationOutcome(artifact_ref=artifact_ref))
        self._asset._set_modified_url(modified_url)
        self._asset._transition(LifecycleState.MODIFIED)
        _logger.info("modification #%d applied: %s", request.request_id, artifact_ref)
        return True

    def fail_modification(self, request: ModificationRequest, reason: str) -> bool:
        if not self.is_current_modification(request):
            _logger.debug("modification #%d failure discarded (superseded)", request.request_id)
            return False
        self._modification._resolve(ModificationStatus.FAILED, ModificationOutcome(failure_reason=reason))
        if self.preserve_asset_on_modification_failure:
            self._asset._transition(self._restore_state)
        else:
            self._asset._transition(LifecycleState.FAILED)
        return True
