"""Favorite sales, stored as one document per profile."""

from __future__ import annotations

from datetime import datetime, timezone

from ..errors import NotFoundError
from ..persistence.store import KeyValueStore
from ..schemas.library import FavoriteItem, FavoriteMeta


def _key(profile_id: str) -> str:
    return f"favorites:{profile_id}"


def _load(store: KeyValueStore, profile_id: str) -> dict[str, dict]:
    stored = store.get(_key(profile_id))
    return stored if isinstance(stored, dict) else {}


def _save(store: KeyValueStore, profile_id: str, favorites: dict[str, dict]) -> None:
    store.set(_key(profile_id), favorites)


def is_favorite(store: KeyValueStore, profile_id: str, sale_id: str) -> bool:
    return sale_id in _load(store, profile_id)


def toggle_favorite(
    store: KeyValueStore,
    profile_id: str,
    sale_id: str,
    meta: FavoriteMeta | None = None,
) -> bool:
    """Flip the favorite flag and return the new state."""

    favorites = _load(store, profile_id)
    if sale_id in favorites:
        del favorites[sale_id]
        _save(store, profile_id, favorites)
        return False

    # Placeholder meta keeps the entry listable when the caller sends none.
    details = meta.model_dump() if meta else {"title": sale_id, "url": sale_id}
    details["savedAt"] = datetime.now(timezone.utc).isoformat()
    favorites[sale_id] = details
    _save(store, profile_id, favorites)
    return True


def list_favorite_details(store: KeyValueStore, profile_id: str) -> list[FavoriteItem]:
    items = [FavoriteItem(id=sale_id, **details) for sale_id, details in _load(store, profile_id).items()]
    epoch = datetime.min.replace(tzinfo=timezone.utc)
    return sorted(items, key=lambda item: item.savedAt or epoch, reverse=True)


def remove_favorite(store: KeyValueStore, profile_id: str, sale_id: str) -> None:
    favorites = _load(store, profile_id)
    if sale_id not in favorites:
        raise NotFoundError(f"Favorite '{sale_id}' not found")
    del favorites[sale_id]
    _save(store, profile_id, favorites)


def clear_favorites(store: KeyValueStore, profile_id: str) -> None:
    _save(store, profile_id, {})


def count_favorites(store: KeyValueStore, profile_id: str) -> int:
    return len(_load(store, profile_id))
