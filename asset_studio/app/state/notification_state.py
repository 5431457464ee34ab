from __future__ import annotations

from PySide6.QtCore import Property, QObject, Signal

from asset_studio.models import Notification, Severity
from asset_studio.styles import notification_style


class NotificationState(QObject):
    """The one visible notification. A new one replaces it; they never stack."""

    messageChanged = Signal(str)
    severityChanged = Signal(str)
    visibleChanged = Signal(bool)
    backgroundChanged = Signal(str)
    foregroundChanged = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._message = ""
        self._severity = Severity.INFO
        self._visible = False

    def _get_message(self) -> str:
        return str(self._message)

    message = Property(str, _get_message, notify=messageChanged)  # type: ignore[arg-type]

    def _get_severity(self) -> str:
        return self._severity.value

    severity = Property(str, _get_severity, notify=severityChanged)  # type: ignore[arg-type]

    def _get_visible(self) -> bool:
        return bool(self._visible)

    visible = Property(bool, _get_visible, notify=visibleChanged)  # type: ignore[arg-type]

    def _get_background(self) -> str:
        return notification_style(self._severity)[0]

    background = Property(str, _get_background, notify=backgroundChanged)  # type: ignore[arg-type]

    def _get_foreground(self) -> str:
        return notification_style(self._severity)[1]

    foreground = Property(str, _get_foreground, notify=foregroundChanged)  # type: ignore[arg-type]

    def snapshot(self) -> Notification | None:
        if not self._visible:
            return None
        return Notification(message=self._message, severity=self._severity)

    # ---- internal mutation helpers (called by presenter) ----
    def _show(self, message: str, severity: Severity) -> None:
        m = str(message)
        if m != self._message:
            self._message = m
            self.messageChanged.emit(m)
        if severity != self._severity:
            self._severity = severity
            self.severityChanged.emit(severity.value)
            bg, fg = notification_style(severity)
            self.backgroundChanged.emit(bg)
            self.foregroundChanged.emit(fg)
        if not self._visible:
            self._visible = True
            self.visibleChanged.emit(True)

    def _hide(self) -> None:
        if not self._visible:
            return
        self._visible = False
        self.visibleChanged.emit(False)
