# -----------------------------------------------------------------------------
# Notification palette: one fixed, mutually exclusive treatment per severity
# -----------------------------------------------------------------------------

from __future__ import annotations

from .models import Severity


class NotificationColors:
    INFO_BACKGROUND = "#cce5ff"
    INFO_TEXT = "#004085"

    SUCCESS_BACKGROUND = "#d4edda"
    SUCCESS_TEXT = "#155724"

    ERROR_BACKGROUND = "#f8d7da"
    ERROR_TEXT = "#721c24"


NOTIFICATION_STYLES: dict[Severity, tuple[str, str]] = {
    Severity.INFO: (NotificationColors.INFO_BACKGROUND, NotificationColors.INFO_TEXT),
    Severity.SUCCESS: (NotificationColors.SUCCESS_BACKGROUND, NotificationColors.SUCCESS_TEXT),
    Severity.ERROR: (NotificationColors.ERROR_BACKGROUND, NotificationColors.ERROR_TEXT),
}


def notification_style(severity: Severity | str) -> tuple[str, str]:
    """Return ``(background, foreground)`` for a severity; unknown values use info."""
    try:
        sev = Severity(severity)
    except ValueError:
        sev = Severity.INFO
    return NOTIFICATION_STYLES[sev]
