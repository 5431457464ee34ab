from __future__ import annotations

import json
import os
from typing import Any

from .logger import get_logger

_logger = get_logger("settings")


class SettingsManager:
    """Client configuration for the asset service.

    Only connection settings live here; workflow state is never persisted.
    Without a ``settings_path`` the manager is in-memory only.
    """

    def __init__(self, settings_path: str | None = None):
        self.settings_path = settings_path
        self._settings: dict[str, Any] = {}
        self.load()

    DEFAULTS: dict[str, Any] = {
        "base_url": "http://127.0.0.1:8080",
        "assets_path": "/assets",
        "modify_path": "/modify",
        "uploads_path": "/uploads",
        "upload_field": "image",
        "request_timeout": 30.0,
        "preserve_asset_on_modification_failure": True,
    }

    def load(self) -> None:
        if not self.settings_path:
            self._settings = {}
            return
        try:
            if os.path.exists(self.settings_path):
                with open(self.settings_path, encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        self._settings = data
                        _logger.debug("settings loaded: %s", self.settings_path)
                        return
        except (OSError, ValueError) as e:
            _logger.warning("settings load failed: %s", e)
        self._settings = {}

    def save(self) -> None:
        if not self.settings_path:
            return
        try:
            parent = os.path.dirname(self.settings_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(self.settings_path, "w", encoding="utf-8") as f:
                json.dump(self._settings, f, ensure_ascii=False, indent=2)
            _logger.debug("settings saved: %s", self.settings_path)
        except OSError as e:
            _logger.error("settings save failed: %s", e)

    def get(self, key: str, default: Any = None) -> Any:
        if key in self._settings:
            return self._settings[key]
        if default is not None:
            return default
        return self.DEFAULTS.get(key)

    def set(self, key: str, value: Any) -> None:
        self._settings[key] = value
        self.save()

    @property
    def data(self) -> dict[str, Any]:
        return self._settings

    @property
    def base_url(self) -> str:
        val = self.get("base_url")
        return str(val).rstrip("/") if isinstance(val, str) and val.strip() else self.DEFAULTS["base_url"]

    @property
    def request_timeout(self) -> float:
        try:
            val = float(self.get("request_timeout"))
        except (TypeError, ValueError):
            _logger.warning("invalid request_timeout: %r", self.get("request_timeout"))
            return float(self.DEFAULTS["request_timeout"])
        return val if val > 0 else float(self.DEFAULTS["request_timeout"])

    @property
    def preserve_asset_on_modification_failure(self) -> bool:
        return bool(self.get("preserve_asset_on_modification_failure"))
