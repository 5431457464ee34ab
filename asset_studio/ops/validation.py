"""Shared validation and user-facing messages for the upload/modify actions.

Keep this module free of Qt and network dependencies.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Union

from asset_studio.errors import EmptyPrompt, NoAssetRegistered, NoFileSelected, ServiceError
from asset_studio.models import Asset, AssetId, FileSelection

MSG_NO_FILE = "Please select an image file to upload."
MSG_UPLOADING = "Uploading image..."
MSG_UPLOADED = "Image uploaded."
MSG_UPLOAD_TRANSPORT = "An error occurred during upload. Check console."

MSG_NO_ASSET = "Please upload an image first to get an Asset ID."
MSG_EMPTY_PROMPT = "Please enter an AI modification prompt."
MSG_MODIFYING = "Applying AI modification..."
MSG_MODIFIED = "AI modification applied."
MSG_MODIFY_TRANSPORT = "An error occurred during AI modification. Check console."

SelectionInput = Union[FileSelection, str, Path, Sequence[Union[FileSelection, str, Path]], None]


def select_file(selection: SelectionInput) -> FileSelection:
    """Resolve a file selection to the first chosen file.

    Accepts a single ``FileSelection``/path or a sequence of them (like a file
    picker's list). Raises ``NoFileSelected`` when nothing usable was chosen.
    """
    first: FileSelection | str | Path | None
    if selection is None or isinstance(selection, (FileSelection, str, Path)):
        first = selection
    else:
        first = next(iter(selection), None)

    if isinstance(first, FileSelection):
        if not first.name:
            raise NoFileSelected(MSG_NO_FILE)
        return first
    if first is None or not str(first).strip():
        raise NoFileSelected(MSG_NO_FILE)

    path = Path(first)
    if not path.is_file():
        raise NoFileSelected(MSG_NO_FILE)
    try:
        return FileSelection.from_path(path)
    except OSError as e:
        # Unreadable selection is treated like no selection: nothing to send.
        raise NoFileSelected(MSG_NO_FILE) from e


def require_asset_id(asset: Asset) -> AssetId:
    """Return the identifier of ``asset`` if it can be modified right now."""
    if not asset.is_addressable:
        raise NoAssetRegistered(MSG_NO_ASSET)
    return asset.asset_id  # type: ignore[return-value]


def normalize_prompt(prompt: str | None) -> str:
    text = (prompt or "").strip()
    if not text:
        raise EmptyPrompt(MSG_EMPTY_PROMPT)
    return text


def upload_failed_message(err: ServiceError) -> str:
    return f"Upload failed: {err.message}"


def modification_failed_message(err: ServiceError) -> str:
    return f"Modification failed: {err.message}"
