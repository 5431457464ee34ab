from __future__ import annotations

import pytest

from asset_studio.app.presenter import WorkflowPresenter
from asset_studio.errors import InvalidTransition
from asset_studio.models import LifecycleState, ModificationStatus, Notification, Severity
from asset_studio.styles import NotificationColors


def _registered(presenter: WorkflowPresenter, asset_id: object = "a1") -> int:
    token = presenter.begin_upload("cat.png")
    assert presenter.complete_upload(token, asset_id, "http://h/uploads/cat.png")
    return token


def test_initial_state_is_unselected_and_hidden() -> None:
    p = WorkflowPresenter()

    asset = p.current_asset
    assert asset.lifecycle_state == LifecycleState.UNSELECTED
    assert asset.asset_id is None
    assert not p.original_visible
    assert not p.modified_visible
    assert p.current_modification is None
    assert p.current_notification is None


def test_view_visibility_follows_lifecycle() -> None:
    p = WorkflowPresenter()
    seen: list[tuple[str, bool]] = []
    p.asset.originalVisibleChanged.connect(lambda v: seen.append(("original", v)))
    p.asset.modifiedVisibleChanged.connect(lambda v: seen.append(("modified", v)))

    token = p.begin_upload("cat.png")
    assert not p.original_visible

    p.complete_upload(token, "a1", "http://h/uploads/cat.png")
    assert p.original_visible and not p.modified_visible

    request = p.begin_modification("a1", "make it blue")
    assert p.original_visible and not p.modified_visible

    p.complete_modification(request, "/out.png", "http://h/out.png")
    assert p.original_visible and p.modified_visible

    assert seen == [("original", True), ("modified", True)]


def test_notifications_replace_each_other() -> None:
    p = WorkflowPresenter()
    events: list[dict] = []
    p.event_.connect(events.append)

    p.notify("Uploading image...", Severity.INFO)
    p.notify("ok", "success")

    assert p.current_notification == Notification("ok", Severity.SUCCESS)
    assert p.notification.background == NotificationColors.SUCCESS_BACKGROUND
    assert p.notification.foreground == NotificationColors.SUCCESS_TEXT
    assert events[-1] == {"type": "event", "name": "toast", "level": "success", "message": "ok"}
    assert len(events) == 2

    p.clear_notification()
    assert p.current_notification is None


def test_unknown_severity_is_rejected() -> None:
    p = WorkflowPresenter()
    with pytest.raises(ValueError):
        p.notify("x", "warning")


def test_failed_asset_cannot_move_on_without_new_upload() -> None:
    p = WorkflowPresenter()
    token = p.begin_upload("cat.png")
    assert p.fail_upload(token)

    assert p.current_asset.lifecycle_state == LifecycleState.FAILED
    with pytest.raises(InvalidTransition):
        p.asset._transition(LifecycleState.REGISTERED)
    # The stale token cannot revive it either.
    assert not p.complete_upload(token, "a1", "")

    fresh = p.begin_upload("cat.png")
    assert fresh != token
    assert p.current_asset.lifecycle_state == LifecycleState.UPLOADING


def test_registered_cannot_jump_to_modified() -> None:
    p = WorkflowPresenter()
    _registered(p)
    with pytest.raises(InvalidTransition):
        p.asset._transition(LifecycleState.MODIFIED)


def test_stale_upload_token_is_discarded() -> None:
    p = WorkflowPresenter()
    old = p.begin_upload("a.png")
    new = p.begin_upload("b.png")

    assert not p.complete_upload(old, "id-a", "http://h/uploads/a.png")
    assert not p.fail_upload(old)
    assert p.complete_upload(new, "id-b", "http://h/uploads/b.png")
    assert p.current_asset.asset_id == "id-b"


def test_superseded_modification_is_discarded() -> None:
    p = WorkflowPresenter()
    _registered(p)
    first = p.begin_modification("a1", "one")
    second = p.begin_modification("a1", "two")

    assert not p.is_current_modification(first)
    assert not p.complete_modification(first, "/1.png", "http://h/1.png")
    assert p.complete_modification(second, "/2.png", "http://h/2.png")
    assert p.current_modification.status == ModificationStatus.APPLIED
    assert p.current_asset.modified_url == "http://h/2.png"


def test_modification_failure_restores_state_before_first_pending_request() -> None:
    p = WorkflowPresenter()
    _registered(p)
    p.begin_modification("a1", "one")
    second = p.begin_modification("a1", "two")

    assert p.fail_modification(second, "boom")
    assert p.current_asset.lifecycle_state == LifecycleState.REGISTERED
    assert p.current_modification.outcome.failure_reason == "boom"


def test_modification_failure_can_fail_the_asset() -> None:
    p = WorkflowPresenter(preserve_asset_on_modification_failure=False)
    _registered(p)
    request = p.begin_modification("a1", "one")

    assert p.fail_modification(request, "boom")
    assert p.current_asset.lifecycle_state == LifecycleState.FAILED
    assert not p.original_visible


def test_reset_drops_asset_and_request() -> None:
    p = WorkflowPresenter()
    _registered(p)
    p.begin_modification("a1", "one")
    p.notify("Applying AI modification...")

    p.reset()

    assert p.current_asset.lifecycle_state == LifecycleState.UNSELECTED
    assert p.current_asset.asset_id is None
    assert p.current_modification is None
    assert p.current_notification is None
