"""HTTP client for the external asset service.

The service owns two things this package never implements: asset byte
storage (``POST /assets``) and the generative modification engine
(``POST /modify``). This module only speaks their wire format and maps
failures onto ``ServiceError`` / ``TransportError``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from asset_studio.errors import ServiceError, TransportError
from asset_studio.logger import get_logger
from asset_studio.models import AssetId, FileSelection, is_valid_asset_id
from asset_studio.settings_manager import SettingsManager

_logger = get_logger("service")

# Keys checked, in order, for the modified artifact reference.
_ARTIFACT_KEYS = ("modified_url", "url", "image_url", "asset_id")
_URL_KEYS = frozenset({"modified_url", "url", "image_url"})


class AssetServiceClient:
    """Async client for asset registration and modification requests."""

    def __init__(
        self,
        base_url: str,
        *,
        assets_path: str = "/assets",
        modify_path: str = "/modify",
        uploads_path: str = "/uploads",
        upload_field: str = "image",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.assets_path = assets_path
        self.modify_path = modify_path
        self.uploads_path = uploads_path.rstrip("/")
        self.upload_field = upload_field
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls, settings: SettingsManager, transport: httpx.AsyncBaseTransport | None = None
    ) -> AssetServiceClient:
        return cls(
            settings.base_url,
            assets_path=str(settings.get("assets_path")),
            modify_path=str(settings.get("modify_path")),
            uploads_path=str(settings.get("uploads_path")),
            upload_field=str(settings.get("upload_field")),
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> AssetServiceClient:
        await self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ---- addressing ----
    def upload_url(self, source_name: str) -> str:
        """Retrieval path of the originally uploaded bytes, addressed by name."""
        return f"{self.base_url}{self.uploads_path}/{quote(source_name)}"

    def resolve_url(self, ref: str) -> str:
        return str(httpx.URL(self.base_url + "/").join(ref))

    # ---- requests ----
    async def create_asset(self, selection: FileSelection) -> dict[str, Any]:
        """Register ``selection`` with the service; returns the decoded JSON body.

        The body is guaranteed to carry a usable ``asset_id`` (non-blank string
        or integer); anything else is a ``TransportError``.
        """
        files = {self.upload_field: (selection.name, selection.content, selection.content_type)}
        data = await self._post(self.assets_path, files=files)
        if not is_valid_asset_id(data.get("asset_id")):
            _logger.warning("POST %s: unusable asset_id %r", self.assets_path, data.get("asset_id"))
            raise TransportError("asset service response has no usable asset_id")
        return data

    async def modify_asset(self, asset_id: AssetId, prompt: str) -> dict[str, Any]:
        """Request a modification of ``asset_id``.

        The decoded body gains an ``artifact_ref`` key (the first reference the
        service returned) and, when that reference is a URL, ``modified_url``
        resolved against the base URL.
        """
        data = await self._post(self.modify_path, json={"asset_id": asset_id, "prompt": prompt})

        for key in _ARTIFACT_KEYS:
            ref = data.get(key)
            if ref is None or ref == "":
                continue
            out = dict(data)
            out["artifact_ref"] = str(ref)
            out["modified_url"] = self.resolve_url(str(ref)) if key in _URL_KEYS else ""
            return out

        raise TransportError("modification response carries no artifact reference")

    async def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.post(path, **kwargs)
        except httpx.TimeoutException as e:
            _logger.warning("POST %s timed out: %s", path, e)
            raise TransportError(f"timeout: {e}") from e
        except httpx.HTTPError as e:
            _logger.warning("POST %s failed: %s", path, e)
            raise TransportError(f"request error: {e}") from e

        payload = _decode_json(response)

        if not response.is_success:
            message = ""
            if isinstance(payload, dict) and payload.get("message"):
                message = str(payload["message"])
            message = message or response.reason_phrase or f"HTTP {response.status_code}"
            _logger.info("POST %s -> %s: %s", path, response.status_code, message)
            raise ServiceError(message, status_code=response.status_code)

        if not isinstance(payload, dict):
            _logger.warning("POST %s -> %s: malformed body %r", path, response.status_code, response.text[:200])
            raise TransportError("malformed response")

        _logger.debug("POST %s -> %s", path, response.status_code)
        return payload


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
