from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Generic, TypeVar, Union

from asset_studio.errors import WorkflowError

# Opaque server-assigned identifier; kept exactly as the server returned it.
AssetId = Union[str, int]

T = TypeVar("T")


def is_valid_asset_id(value: object) -> bool:
    """True for a usable identifier: a non-blank string or an integer (not a bool)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(value.strip())


class LifecycleState(str, Enum):
    UNSELECTED = "Unselected"
    UPLOADING = "Uploading"
    REGISTERED = "Registered"
    MODIFICATION_PENDING = "ModificationPending"
    MODIFIED = "Modified"
    FAILED = "Failed"


# Allowed transitions for a single asset instance. A fresh instance (new
# upload) is the only way out of FAILED.
TRANSITIONS: dict[LifecycleState, frozenset[LifecycleState]] = {
    LifecycleState.UNSELECTED: frozenset({LifecycleState.UPLOADING}),
    LifecycleState.UPLOADING: frozenset({LifecycleState.REGISTERED, LifecycleState.FAILED}),
    LifecycleState.REGISTERED: frozenset({LifecycleState.MODIFICATION_PENDING}),
    LifecycleState.MODIFICATION_PENDING: frozenset(
        {LifecycleState.MODIFIED, LifecycleState.FAILED, LifecycleState.REGISTERED}
    ),
    LifecycleState.MODIFIED: frozenset({LifecycleState.MODIFICATION_PENDING}),
    LifecycleState.FAILED: frozenset(),
}

# States in which the asset holds a server identity and may be targeted by a
# modification (a pending one is superseded by the next request).
ADDRESSABLE_STATES = frozenset(
    {LifecycleState.REGISTERED, LifecycleState.MODIFICATION_PENDING, LifecycleState.MODIFIED}
)
ORIGINAL_VISIBLE_STATES = frozenset(
    {LifecycleState.REGISTERED, LifecycleState.MODIFICATION_PENDING, LifecycleState.MODIFIED}
)


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class ModificationStatus(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    FAILED = "failed"


@dataclass(frozen=True)
class FileSelection:
    """A local file chosen for upload."""

    name: str
    content: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: str | Path) -> FileSelection:
        p = Path(path)
        ctype, _ = mimetypes.guess_type(p.name)
        return cls(name=p.name, content=p.read_bytes(), content_type=ctype or "application/octet-stream")


@dataclass(frozen=True)
class Asset:
    """Snapshot of the current asset record."""

    instance: int = 0
    asset_id: AssetId | None = None
    source_name: str = ""
    lifecycle_state: LifecycleState = LifecycleState.UNSELECTED
    original_url: str = ""
    modified_url: str = ""

    @property
    def is_addressable(self) -> bool:
        return is_valid_asset_id(self.asset_id) and self.lifecycle_state in ADDRESSABLE_STATES


@dataclass(frozen=True)
class ModificationOutcome:
    artifact_ref: str | None = None
    failure_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.artifact_ref is not None and self.failure_reason is None


@dataclass(frozen=True)
class ModificationRequest:
    request_id: int
    target_asset_id: AssetId
    prompt: str
    status: ModificationStatus = ModificationStatus.PENDING
    outcome: ModificationOutcome | None = None


@dataclass(frozen=True)
class Notification:
    message: str
    severity: Severity = Severity.INFO


@dataclass(frozen=True)
class AssetRegistered:
    asset_id: AssetId
    source_name: str
    original_url: str
    message: str = ""


@dataclass(frozen=True)
class ModificationApplied:
    asset_id: AssetId
    artifact_ref: str
    modified_url: str
    message: str = ""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one user action: either ``value`` or ``error`` is set."""

    value: T | None = None
    error: WorkflowError | None = field(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: WorkflowError) -> Result[T]:
        return cls(error=error)
