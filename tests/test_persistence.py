from pathlib import Path

import pytest

from salestrail.persistence.store import FileKeyValueStore


def test_file_store_round_trips_json(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)

    store.set("preferences:alice", {"unit": "mi", "weights": {"distance": 0.5}})

    assert store.get("preferences:alice") == {"unit": "mi", "weights": {"distance": 0.5}}
    assert (tmp_path / "kv").is_dir()


def test_file_store_missing_key_is_none(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)

    assert store.get("nothing") is None
    assert store.delete("nothing") is False


def test_file_store_lists_by_prefix(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)
    store.set("routes:alice:rt_2", {"id": "rt_2"})
    store.set("routes:alice:rt_1", {"id": "rt_1"})
    store.set("routes:bob:rt_3", {"id": "rt_3"})

    assert store.list("routes:alice:") == ["routes:alice:rt_1", "routes:alice:rt_2"]
    assert len(store.list()) == 3


def test_file_store_delete(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)
    store.set("favorites:alice", {})

    assert store.delete("favorites:alice") is True
    assert store.get("favorites:alice") is None
    assert store.list() == []


def test_file_store_ignores_corrupt_entries(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)
    store.set("broken", {"ok": True})
    next((tmp_path / "kv").glob("*.json")).write_text("{not json", encoding="utf-8")

    assert store.get("broken") is None


def test_file_store_keys_with_slashes(tmp_path: Path) -> None:
    store = FileKeyValueStore(root=tmp_path)
    key = "favorites:https://example.org/sale/1"

    store.set(key, [1, 2])

    assert store.get(key) == [1, 2]
    assert store.list("favorites:") == [key]


def test_supabase_store_requires_credentials(monkeypatch, caplog) -> None:
    from salestrail.db import supabase as supabase_db
    from salestrail.persistence.store import SupabaseKeyValueStore

    monkeypatch.setattr(supabase_db.settings, "supabase_url", None)
    monkeypatch.setattr(supabase_db.settings, "supabase_key", None)
    supabase_db.get_supabase_client.cache_clear()
    caplog.set_level("WARNING", logger="salestrail.db.supabase")

    try:
        with pytest.raises(ValueError, match="Supabase is not configured"):
            SupabaseKeyValueStore()
    finally:
        supabase_db.get_supabase_client.cache_clear()

    assert any(record.name == "salestrail.db.supabase" for record in caplog.records)
