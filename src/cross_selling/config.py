"""Sales-channel scoped system configuration."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from .exceptions import ConfigLookupError

HIDE_CLOSEOUT_PRODUCTS_KEY = "core.listing.hideCloseoutProductsWhenOutOfStock"

_TRUE_STRINGS = {"1", "true", "yes", "on"}


class SystemConfigService:
    """JSON-backed configuration with per-sales-channel overrides.

    The file layout is ``{"global": {...}, "sales_channels": {"<id>": {...}}}``.
    A missing file is an empty configuration; a malformed one raises
    :class:`ConfigLookupError` on lookup.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path
        self._global: Dict[str, object] = {}
        self._channels: Dict[str, Dict[str, object]] = {}
        self._loaded = path is None

    def get(self, key: str, sales_channel_id: Optional[str] = None) -> object:
        self._ensure_loaded()
        if sales_channel_id is not None:
            channel = self._channels.get(sales_channel_id, {})
            if key in channel:
                return channel[key]
        return self._global.get(key)

    def get_bool(self, key: str, sales_channel_id: Optional[str] = None) -> bool:
        value = self.get(key, sales_channel_id)
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    def set(self, key: str, value: object, sales_channel_id: Optional[str] = None) -> None:
        self._ensure_loaded()
        if sales_channel_id is None:
            self._global[key] = value
        else:
            self._channels.setdefault(sales_channel_id, {})[key] = value

    def reload(self) -> None:
        self._global = {}
        self._channels = {}
        self._loaded = self.path is None
        self._ensure_loaded()

    def _ensure_loaded(self) -> None:
        path = self.path
        if self._loaded or path is None:
            return
        if path.exists():
            try:
                with path.open() as handle:
                    raw = json.load(handle)
            except (OSError, json.JSONDecodeError) as exc:
                raise ConfigLookupError(str(path), str(exc)) from exc
            if not isinstance(raw, dict):
                raise ConfigLookupError(str(path), "top-level value must be an object")
            self._global = dict(raw.get("global") or {})
            self._channels = {
                channel_id: dict(values or {})
                for channel_id, values in (raw.get("sales_channels") or {}).items()
            }
        self._loaded = True
