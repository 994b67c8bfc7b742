"""Key-value persistence for preferences, favorites and saved routes."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any
from urllib.parse import quote, unquote

from ..config import settings
from ..db.supabase import get_supabase_client

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal storage contract; values must be JSON-serialisable."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    def list(self, prefix: str = "") -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> bool:
        raise NotImplementedError


class FileKeyValueStore(KeyValueStore):
    """Stores each key as a JSON document under ``<root>/kv``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.kv_root = self.root / "kv"
        self.kv_root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.kv_root / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            try:
                return json.load(handle)
            except json.JSONDecodeError:
                logger.warning(f"Ignoring unreadable store entry '{key}'")
                return None

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(value, handle, ensure_ascii=False, indent=2)
        tmp_path.replace(path)

    def list(self, prefix: str = "") -> list[str]:
        keys = (unquote(path.stem) for path in self.kv_root.glob("*.json"))
        return sorted(key for key in keys if key.startswith(prefix))

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True


class SupabaseKeyValueStore(KeyValueStore):
    """Stores rows of ``{key, value}`` in a Supabase table."""

    def __init__(self, client: Any | None = None, table: str | None = None) -> None:
        self.client = client or get_supabase_client()
        if self.client is None:
            raise ValueError("Supabase is not configured. Set SALESTRAIL_SUPABASE_URL and SALESTRAIL_SUPABASE_KEY.")
        self.table = table or settings.supabase_table

    def get(self, key: str) -> Any | None:
        response = self.client.table(self.table).select("value").eq("key", key).limit(1).execute()
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: Any) -> None:
        self.client.table(self.table).upsert({"key": key, "value": value}).execute()

    def list(self, prefix: str = "") -> list[str]:
        query = self.client.table(self.table).select("key")
        if prefix:
            query = query.like("key", f"{prefix}%")
        response = query.execute()
        return sorted(row["key"] for row in response.data or [])

    def delete(self, key: str) -> bool:
        response = self.client.table(self.table).delete().eq("key", key).execute()
        return bool(response.data)


def get_store() -> KeyValueStore:
    if settings.store_backend == "supabase":
        return SupabaseKeyValueStore()
    return FileKeyValueStore()
