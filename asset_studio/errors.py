"""Workflow error taxonomy.

Every failure a user action can produce is a ``WorkflowError``. Coordinators
return these inside a ``Result`` instead of raising them; only the service
client raises ``ServiceError``/``TransportError`` and the coordinators catch
them at the action boundary.
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base class. ``message`` is safe to show to the user."""

    code = "workflow_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


# ---- local validation (never sent over the network) ----
class ValidationError(WorkflowError):
    code = "validation_error"


class NoFileSelected(ValidationError):
    code = "no_file_selected"


class NoAssetRegistered(ValidationError):
    code = "no_asset_registered"


class EmptyPrompt(ValidationError):
    code = "empty_prompt"


# ---- remote failures ----
class ServiceError(WorkflowError):
    """Non-2xx response from the asset service."""

    code = "service_error"

    def __init__(self, message: str = "", status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = int(status_code)


class TransportError(WorkflowError):
    """Network failure or a response the client cannot interpret."""

    code = "transport_error"


class SupersededError(WorkflowError):
    """A newer action replaced this one before its response arrived."""

    code = "superseded"


class InvalidTransition(RuntimeError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"invalid lifecycle transition {current} -> {target}")
        self.current = current
        self.target = target
