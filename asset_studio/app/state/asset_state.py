from __future__ import annotations

from PySide6.QtCore import Property, QObject, Signal

from asset_studio.errors import InvalidTransition
from asset_studio.models import (
    ORIGINAL_VISIBLE_STATES,
    TRANSITIONS,
    Asset,
    AssetId,
    LifecycleState,
)


class AssetState(QObject):
    """The single current asset, as the UI binds to it.

    Design:
    - ``instance`` identifies one asset record; a new upload starts a new instance.
    - Lifecycle transitions are checked against ``TRANSITIONS``; view visibility
      is derived from the lifecycle and never set directly.
    """

    instanceChanged = Signal(int)
    assetIdChanged = Signal(object)
    sourceNameChanged = Signal(str)
    lifecycleStateChanged = Signal(str)
    originalUrlChanged = Signal(str)
    modifiedUrlChanged = Signal(str)
    originalVisibleChanged = Signal(bool)
    modifiedVisibleChanged = Signal(bool)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._instance = 0
        self._asset_id: AssetId | None = None
        self._source_name = ""
        self._lifecycle = LifecycleState.UNSELECTED
        self._original_url = ""
        self._modified_url = ""

    # ---- read-only properties (mutate via presenter) ----
    def _get_instance(self) -> int:
        return int(self._instance)

    instance = Property(int, _get_instance, notify=instanceChanged)  # type: ignore[arg-type]

    def _get_asset_id(self) -> AssetId | None:
        return self._asset_id

    assetId = Property(object, _get_asset_id, notify=assetIdChanged)  # type: ignore[arg-type]

    def _get_source_name(self) -> str:
        return str(self._source_name)

    sourceName = Property(str, _get_source_name, notify=sourceNameChanged)  # type: ignore[arg-type]

    def _get_lifecycle(self) -> LifecycleState:
        return self._lifecycle

    def _get_lifecycle_name(self) -> str:
        return self._lifecycle.value

    lifecycleState = Property(str, _get_lifecycle_name, notify=lifecycleStateChanged)  # type: ignore[arg-type]

    def _get_original_url(self) -> str:
        return str(self._original_url)

    originalUrl = Property(str, _get_original_url, notify=originalUrlChanged)  # type: ignore[arg-type]

    def _get_modified_url(self) -> str:
        return str(self._modified_url)

    modifiedUrl = Property(str, _get_modified_url, notify=modifiedUrlChanged)  # type: ignore[arg-type]

    def _get_original_visible(self) -> bool:
        return self._lifecycle in ORIGINAL_VISIBLE_STATES

    originalVisible = Property(bool, _get_original_visible, notify=originalVisibleChanged)  # type: ignore[arg-type]

    def _get_modified_visible(self) -> bool:
        return self._lifecycle == LifecycleState.MODIFIED

    modifiedVisible = Property(bool, _get_modified_visible, notify=modifiedVisibleChanged)  # type: ignore[arg-type]

    def snapshot(self) -> Asset:
        return Asset(
            instance=self._instance,
            asset_id=self._asset_id,
            source_name=self._source_name,
            lifecycle_state=self._lifecycle,
            original_url=self._original_url,
            modified_url=self._modified_url,
        )

    # ---- internal mutation helpers (called by presenter) ----
    def _start_instance(self, instance: int, source_name: str = "") -> None:
        """Replace the record with a fresh, unselected asset."""
        self._instance = int(instance)
        self.instanceChanged.emit(self._instance)
        self._set_asset_id(None)
        self._set_source_name(source_name)
        self._set_original_url("")
        self._set_modified_url("")
        self._apply_lifecycle(LifecycleState.UNSELECTED)

    def _transition(self, target: LifecycleState) -> None:
        if target == self._lifecycle:
            return
        if target not in TRANSITIONS[self._lifecycle]:
            raise InvalidTransition(self._lifecycle.value, target.value)
        self._apply_lifecycle(target)

    def _apply_lifecycle(self, target: LifecycleState) -> None:
        if target == self._lifecycle:
            return
        was_original = self._get_original_visible()
        was_modified = self._get_modified_visible()
        self._lifecycle = target
        self.lifecycleStateChanged.emit(target.value)
        if self._get_original_visible() != was_original:
            self.originalVisibleChanged.emit(self._get_original_visible())
        if self._get_modified_visible() != was_modified:
            self.modifiedVisibleChanged.emit(self._get_modified_visible())

    def _set_asset_id(self, asset_id: AssetId | None) -> None:
        if asset_id == self._asset_id and type(asset_id) is type(self._asset_id):
            return
        self._asset_id = asset_id
        self.assetIdChanged.emit(asset_id)

    def _set_source_name(self, name: str) -> None:
        n = str(name)
        if n == self._source_name:
            return
        self._source_name = n
        self.sourceNameChanged.emit(n)

    def _set_original_url(self, url: str) -> None:
        u = str(url)
        if u == self._original_url:
            return
        self._original_url = u
        self.originalUrlChanged.emit(u)

    def _set_modified_url(self, url: str) -> None:
        u = str(url)
        if u == self._modified_url:
            return
        self._modified_url = u
        self.modifiedUrlChanged.emit(u)
