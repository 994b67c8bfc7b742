import json
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from salestrail.errors import NotFoundError
from salestrail.persistence.store import FileKeyValueStore
from salestrail.schemas.library import FavoriteMeta, RouteStop, SavedRoute, WorkingRoute
from salestrail.schemas.preferences import Preferences
from salestrail.services import favorites, preferences, saved_routes, working_route


@pytest.fixture
def store(tmp_path: Path) -> FileKeyValueStore:
    return FileKeyValueStore(root=tmp_path)


def _route(name: str, route_id: str | None = None) -> SavedRoute:
    return SavedRoute(
        id=route_id,
        name=name,
        stops=[RouteStop(label="Estate sale", query="12 Elm St", lat=40.1, lon=-74.2)],
    )


def test_preferences_default_when_nothing_stored(store):
    prefs = preferences.load_preferences(store, "alice")

    assert prefs == Preferences()
    assert prefs.weights.distance == 0.4
    assert prefs.unit == "auto"


def test_preferences_merge_partial_sections_over_defaults(store):
    store.set("preferences:alice", {"unit": "mi", "weights": {"quality": 0.9}, "travel": {"radiusMi": 25}})

    prefs = preferences.load_preferences(store, "alice")

    assert prefs.unit == "mi"
    assert prefs.weights.quality == 0.9
    assert prefs.weights.distance == 0.4
    assert prefs.travel.radiusMi == 25
    assert prefs.travel.style == "local"


def test_invalid_stored_preferences_fall_back_to_defaults(store):
    store.set("preferences:alice", {"unit": "furlongs"})

    assert preferences.load_preferences(store, "alice") == Preferences()


def test_preferences_save_and_reset(store):
    saved = preferences.save_preferences(store, "alice", Preferences(mode="reseller", categories=["Furniture"]))

    assert preferences.load_preferences(store, "alice") == saved
    assert preferences.reset_preferences(store, "alice") == Preferences()
    assert store.get("preferences:alice") is None


def test_toggle_favorite_flips_state(store):
    assert favorites.toggle_favorite(store, "alice", "sale-1") is True
    assert favorites.is_favorite(store, "alice", "sale-1")
    assert favorites.toggle_favorite(store, "alice", "sale-1") is False
    assert not favorites.is_favorite(store, "alice", "sale-1")


def test_favorite_details_use_placeholder_and_newest_first(store):
    favorites.toggle_favorite(store, "alice", "sale-1")
    favorites.toggle_favorite(store, "alice", "sale-2", FavoriteMeta(title="Barn sale", url="https://example.org/2"))
    stored = store.get("favorites:alice")
    stored["sale-1"]["savedAt"] = (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat()
    store.set("favorites:alice", stored)

    items = favorites.list_favorite_details(store, "alice")

    assert [item.id for item in items] == ["sale-1", "sale-2"]
    assert items[0].title == "sale-1"
    assert items[0].url == "sale-1"
    assert items[1].title == "Barn sale"
    assert favorites.count_favorites(store, "alice") == 2


def test_remove_and_clear_favorites(store):
    favorites.toggle_favorite(store, "alice", "sale-1")
    favorites.toggle_favorite(store, "alice", "sale-2")

    favorites.remove_favorite(store, "alice", "sale-1")
    assert favorites.count_favorites(store, "alice") == 1
    with pytest.raises(NotFoundError):
        favorites.remove_favorite(store, "alice", "sale-1")

    favorites.clear_favorites(store, "alice")
    assert favorites.count_favorites(store, "alice") == 0


def test_favorites_are_scoped_per_profile(store):
    favorites.toggle_favorite(store, "alice", "sale-1")

    assert favorites.count_favorites(store, "bob") == 0


def test_new_route_id_format():
    route_id = saved_routes.new_route_id()

    assert re.fullmatch(r"rt_[0-9a-f]{10}_[0-9a-z]+", route_id)
    assert route_id != saved_routes.new_route_id()


def test_save_route_assigns_id_and_timestamps(store):
    saved = saved_routes.save_route(store, "alice", _route("Saturday loop"))

    assert saved.id.startswith("rt_")
    assert saved.createdAt is not None
    assert saved.updatedAt == saved.createdAt
    assert saved_routes.get_route(store, "alice", saved.id) == saved


def test_resaving_route_keeps_created_at(store):
    first = saved_routes.save_route(store, "alice", _route("Loop", route_id="rt_fixed"))

    second = saved_routes.save_route(store, "alice", _route("Loop v2", route_id="rt_fixed"))

    assert second.createdAt == first.createdAt
    assert second.updatedAt >= first.updatedAt
    assert saved_routes.get_route(store, "alice", "rt_fixed").name == "Loop v2"


def test_list_routes_newest_update_first(store):
    saved_routes.save_route(store, "alice", _route("Older", route_id="rt_a"))
    newer = saved_routes.save_route(store, "alice", _route("Newer", route_id="rt_b"))
    older = store.get("routes:alice:rt_a")
    older["updatedAt"] = (newer.updatedAt - timedelta(days=1)).isoformat()
    store.set("routes:alice:rt_a", older)

    routes = saved_routes.list_routes(store, "alice")

    assert [route.id for route in routes] == ["rt_b", "rt_a"]


def test_delete_and_export_routes(store):
    saved_routes.save_route(store, "alice", _route("Keep", route_id="rt_keep"))
    saved_routes.save_route(store, "alice", _route("Drop", route_id="rt_drop"))

    saved_routes.delete_route(store, "alice", "rt_drop")

    with pytest.raises(NotFoundError):
        saved_routes.get_route(store, "alice", "rt_drop")
    with pytest.raises(NotFoundError):
        saved_routes.delete_route(store, "alice", "rt_drop")
    exported = json.loads(saved_routes.export_routes(store, "alice"))
    assert list(exported) == ["rt_keep"]
    assert exported["rt_keep"]["stops"][0]["query"] == "12 Elm St"


def test_routes_of_profile_with_colon_stay_separate(store):
    other = saved_routes.save_route(store, "alice:work", _route("Other profile's route"))

    assert saved_routes.list_routes(store, "alice") == []
    assert json.loads(saved_routes.export_routes(store, "alice")) == {}
    with pytest.raises(NotFoundError):
        saved_routes.get_route(store, "alice", f"work:{other.id}")
    assert [route.id for route in saved_routes.list_routes(store, "alice:work")] == [other.id]


def test_import_routes_merges_over_existing(store):
    saved_routes.save_route(store, "alice", _route("Keep", route_id="rt_keep"))
    saved_routes.save_route(store, "alice", _route("Old name", route_id="rt_shared"))
    exported = json.loads(saved_routes.export_routes(store, "alice"))
    exported["rt_shared"]["name"] = "New name"
    exported["rt_new"] = {"name": "Imported", "stops": []}

    imported = saved_routes.import_routes(store, "bob", json.dumps(exported))
    merged = saved_routes.import_routes(store, "alice", {"rt_shared": exported["rt_shared"]})

    assert sorted(imported) == ["rt_keep", "rt_new", "rt_shared"]
    assert merged == ["rt_shared"]
    assert saved_routes.get_route(store, "alice", "rt_shared").name == "New name"
    assert saved_routes.get_route(store, "alice", "rt_keep").name == "Keep"
    assert saved_routes.get_route(store, "bob", "rt_new").createdAt is not None


def test_import_routes_ignores_unreadable_payloads(store):
    saved_routes.save_route(store, "alice", _route("Keep", route_id="rt_keep"))

    assert saved_routes.import_routes(store, "alice", "{not json") == []
    assert saved_routes.import_routes(store, "alice", "[1, 2]") == []
    assert saved_routes.import_routes(store, "alice", {"rt_bad": {"stops": []}, "rt_odd": 3}) == []
    assert [route.id for route in saved_routes.list_routes(store, "alice")] == ["rt_keep"]


def _stop(label: str) -> RouteStop:
    return RouteStop(label=label, query=f"{label} St", lat=40.0, lon=-74.0)


def test_working_route_starts_empty(store):
    assert working_route.get_working_route(store, "alice") == WorkingRoute()

    store.set("working-route:alice", {"stops": "nope"})

    assert working_route.get_working_route(store, "alice") == WorkingRoute()


def test_working_route_add_and_remove(store):
    working_route.add_stop(store, "alice", _stop("A"))
    working_route.add_stop(store, "alice", _stop("B"))
    working_route.add_stop(store, "alice", _stop("C"))

    route = working_route.remove_stop(store, "alice", 1)
    unchanged = working_route.remove_stop(store, "alice", 7)

    assert [stop.label for stop in route.stops] == ["A", "C"]
    assert unchanged == route
    assert working_route.get_working_route(store, "bob").stops == []


def test_working_route_move_stays_in_bounds(store):
    for label in ("A", "B", "C"):
        working_route.add_stop(store, "alice", _stop(label))

    down = working_route.move_stop(store, "alice", 0, 1)
    up = working_route.move_stop(store, "alice", 2, -1)
    past_top = working_route.move_stop(store, "alice", 0, -1)
    past_bottom = working_route.move_stop(store, "alice", 2, 1)

    assert [stop.label for stop in down.stops] == ["B", "A", "C"]
    assert [stop.label for stop in up.stops] == ["B", "C", "A"]
    assert past_top == up
    assert past_bottom == up


def test_working_route_selection_resets_when_out_of_range(store):
    working_route.add_stop(store, "alice", _stop("A"))
    working_route.add_stop(store, "alice", _stop("B"))

    assert working_route.select_stop(store, "alice", 1).selectedIndex == 1
    assert working_route.remove_stop(store, "alice", 1).selectedIndex is None
    assert working_route.select_stop(store, "alice", 5).selectedIndex is None
    assert working_route.clear_working_route(store, "alice") == WorkingRoute()
    assert store.get("working-route:alice") is None
