"""Item model, storage, weather resolution, config and the instrumented outfit facade."""

from __future__ import annotations

import json
import random
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from closet_app.config import ClosetConfig
from models.closet_item import ClosetItem, from_raw_metadata
from models.outfit import Outfit, outfit_from_raw
from tools.item_store import (
    SAMPLE_ITEMS,
    InMemoryItemStore,
    SQLiteItemStore,
    load_items_from_json,
    seed_sample_items,
)
from tools.observability import instrument_tool
from tools.outfit_store import InMemoryOutfitStore, SQLiteOutfitStore
from tools.outfit_tools import OutfitTools, RandomizeToolInput, outfit_payload
from tools.weather_provider import StaticWeatherResolver, WeatherReading

CONFIG_ENV_VARS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "CLOSET_CONFIG_DIR",
    "DEFAULT_MIN_ITEMS",
    "DEFAULT_MAX_ITEMS",
    "ITEMS_PATH",
    "RANDOM_SEED",
    "LOG_LEVEL",
    "DB_PATH",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    for key in CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


# -- item model ---------------------------------------------------------------


def test_from_raw_metadata_accepts_client_keys():
    item = from_raw_metadata(
        {
            "id": 42,
            "name": "Linen Shirt",
            "category": "top",
            "tags": "summer",
            "hidden": 1,
            "hiddenUntil": "1700000000000",
            "createdAt": 1_600_000_000_000,
            "imageUri": "file:///img.jpg",
        }
    )
    assert item.item_id == "42"
    assert item.tags == ["summer"]
    assert item.hidden is True
    assert item.hidden_until == 1_700_000_000_000
    assert item.created_at == 1_600_000_000_000
    assert item.image_uri == "file:///img.jpg"


def test_from_raw_metadata_requires_name():
    with pytest.raises(ValueError):
        from_raw_metadata({"category": "top"})
    with pytest.raises(ValueError):
        from_raw_metadata({"name": "   "})


def test_item_cleans_tags_and_blank_category():
    item = ClosetItem(name="Tee", category="  ", tags=[" casual ", "casual", ""])
    assert item.category is None
    assert item.normalized_category is None
    assert item.tags == ["casual"]


def test_favorite_via_flag_or_list_tag():
    assert ClosetItem(name="Tee", favorite=True).is_favorite
    assert ClosetItem(name="Tee", tags=["_list:favorites"]).is_favorite
    assert not ClosetItem(name="Tee", tags=["favorites"]).is_favorite


# -- storage ------------------------------------------------------------------


def test_in_memory_store_crud():
    store = InMemoryItemStore()
    older = store.create_item(ClosetItem(name="Chinos", category="bottom", created_at=1))
    newer = store.create_item(ClosetItem(name="Oxford", category="top", created_at=2))
    assert (older.item_id, newer.item_id) == ("1", "2")
    assert [item.name for item in store.list_items()] == ["Oxford", "Chinos"]

    updated = store.update_item("1", {"favorite": True, "tags": ["work"]})
    assert updated.favorite and updated.tags == ["work"]
    assert store.get_item("1").favorite
    assert store.update_item("missing", {"favorite": True}) is None
    with pytest.raises(ValueError):
        store.update_item("1", {"created_at": 5})

    assert store.delete_item("2") is True
    assert store.delete_item("2") is False
    assert store.get_item("2") is None


def test_store_rejects_duplicate_ids():
    store = InMemoryItemStore([ClosetItem(item_id="a", name="Tee")])
    with pytest.raises(ValueError):
        store.create_item(ClosetItem(item_id="a", name="Other Tee"))


def test_store_keeps_hidden_items(seasonal_closet):
    store = InMemoryItemStore(seasonal_closet)
    assert store.get_item("11").hidden


def test_seed_sample_items_only_fills_empty_store():
    store = InMemoryItemStore()
    created = seed_sample_items(store)
    assert len(created) == len(SAMPLE_ITEMS)
    assert seed_sample_items(store) == []
    assert len(store.list_items()) == len(SAMPLE_ITEMS)


def test_load_items_from_json(tmp_path: Path):
    path = tmp_path / "items.json"
    path.write_text(json.dumps([{"id": 1, "name": "Tee", "category": "top"}, {"name": "Jeans"}]))
    items = load_items_from_json(path)
    assert [item.name for item in items] == ["Tee", "Jeans"]
    assert items[0].item_id == "1"

    path.write_text(json.dumps({"name": "Tee"}))
    with pytest.raises(ValueError):
        load_items_from_json(path)


# -- weather ------------------------------------------------------------------


def test_static_resolver_maps_temperature():
    resolver = StaticWeatherResolver.from_temperature(25, city="Lisbon")
    assert resolver.current_reading("Lisbon").city == "Lisbon"
    assert resolver.resolve_condition("Lisbon") == "warm"
    assert WeatherReading(temperature_c=-12).condition == "freezing"


def test_resolver_without_reading():
    assert StaticWeatherResolver().resolve_condition("Nowhere") is None


# -- config -------------------------------------------------------------------


def test_config_defaults(clean_env):
    config = ClosetConfig.from_env()
    assert (config.default_min_items, config.default_max_items) == (2, 4)
    assert config.random_seed is None
    assert config.log_level == "INFO"
    assert config.environment is None


def test_config_yaml_with_env_override(clean_env, tmp_path: Path):
    env_dir = tmp_path / "envs"
    env_dir.mkdir()
    (env_dir / "staging.yaml").write_text(
        "# staging\ndefault_max_items: 6\nlog_level: 'debug'\nitems_path: \"closet.json\"\nrandom_seed: 11\n"
    )
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("CLOSET_CONFIG_DIR", str(env_dir))
    clean_env.setenv("RANDOM_SEED", "7")

    config = ClosetConfig.from_env()
    assert config.environment == "staging"
    assert config.default_max_items == 6
    assert config.log_level == "DEBUG"
    assert config.items_path == "closet.json"
    assert config.random_seed == 7


def test_config_rejects_bad_integers(clean_env):
    clean_env.setenv("DEFAULT_MIN_ITEMS", "two")
    with pytest.raises(ValueError):
        ClosetConfig.from_env()


def test_config_rejects_inverted_bounds(clean_env):
    clean_env.setenv("DEFAULT_MIN_ITEMS", "5")
    clean_env.setenv("DEFAULT_MAX_ITEMS", "3")
    with pytest.raises(ValueError):
        ClosetConfig.from_env()


def test_config_path_override(clean_env, tmp_path: Path):
    path = tmp_path / "closet.yaml"
    path.write_text("db_path: closet.db  # local database\nrandom_seed:\n")
    clean_env.setenv("APP_CONFIG_PATH", str(path))
    config = ClosetConfig.from_env()
    assert config.db_path == "closet.db"
    assert config.random_seed is None


# -- outfit facade ------------------------------------------------------------


def test_randomize_outfit_payload(mock_closet):
    tools = OutfitTools(store=InMemoryItemStore(mock_closet), rng=random.Random(3))
    payload = tools.randomize_outfit()
    assert payload["status"] == "ok"
    assert 2 <= len(payload["items"]) <= 4
    assert payload["score"] > 0
    assert set(payload["slots"]) <= {"hat", "outerwear", "top", "bottom", "shoes", "accessory"}


def test_randomize_outfit_on_empty_store():
    payload = OutfitTools(store=InMemoryItemStore()).randomize_outfit()
    assert payload == {"status": "empty", "items": [], "slots": [], "score": 30}


def test_config_supplies_default_bounds(mock_closet):
    config = ClosetConfig(default_min_items=1, default_max_items=1)
    tools = OutfitTools(store=InMemoryItemStore(mock_closet), config=config, rng=random.Random(0))
    assert len(tools.randomize_outfit()["items"]) == 1
    assert len(tools.randomize_outfit(options={"minItems": 3, "maxItems": 3})["items"]) == 3


def test_config_seed_makes_runs_repeatable(mock_closet):
    config = ClosetConfig(random_seed=5)
    first = OutfitTools(store=InMemoryItemStore(mock_closet), config=config).randomize_outfit()
    second = OutfitTools(store=InMemoryItemStore(mock_closet), config=config).randomize_outfit()
    assert [item["item_id"] for item in first["items"]] == [item["item_id"] for item in second["items"]]


def test_location_resolves_weather(mock_closet):
    tools = OutfitTools(
        store=InMemoryItemStore(mock_closet),
        weather_resolver=StaticWeatherResolver.from_temperature(35),
    )
    for seed in range(10):
        tools.rng = random.Random(seed)
        payload = tools.randomize_outfit(location="Seville")
        assert payload["items"]
        assert all(item["category"] != "outerwear" for item in payload["items"])


def test_explicit_weather_wins_over_location(mock_closet):
    tools = OutfitTools(
        store=InMemoryItemStore(mock_closet),
        weather_resolver=StaticWeatherResolver.from_temperature(35),
        rng=random.Random(2),
    )
    payload = tools.randomize_outfit(
        options={"weather_condition": "freezing", "required_categories": ["shoes"], "min_items": 1, "max_items": 1},
        location="Seville",
    )
    assert [item["name"] for item in payload["items"]] == ["Brown Boots"]


def test_invalid_options_raise(mock_closet):
    tools = OutfitTools(store=InMemoryItemStore(mock_closet))
    with pytest.raises(ValidationError):
        tools.randomize_outfit(options={"weather_condition": "tropical"})


def test_generate_ranked_outfits(mock_closet):
    tools = OutfitTools(store=InMemoryItemStore(mock_closet), rng=random.Random(21))
    ranked = tools.generate_ranked_outfits(count=6, options={"ensure_complete_outfit": True})
    assert len(ranked) == 6
    scores = [payload["score"] for payload in ranked]
    assert scores == sorted(scores, reverse=True)


def test_outfit_payload_scores_with_weather(mock_closet):
    outfit = [item for item in mock_closet if item.name in {"White T-Shirt", "Blue Jeans", "White Sneakers"}]
    assert outfit_payload(outfit, "mild")["score"] == 135
    assert outfit_payload(outfit)["slots"] == ["top", "bottom", "shoes"]


def test_instrument_tool_validation_fallback():
    @instrument_tool("echo", input_model=RandomizeToolInput, on_validation_error=lambda exc: "needs_review")
    def echo(**kwargs):
        return kwargs

    assert echo(options={"weather_condition": "tropical"}) == "needs_review"
    assert echo(location="Oslo") == {"location": "Oslo"}


def test_sqlite_store_round_trip(tmp_path: Path):
    store = SQLiteItemStore(tmp_path / "nested" / "closet.db")
    created = store.create_item(
        ClosetItem(name="Rain Jacket", category="jacket", tags=["waterproof"], favorite=True, notes="hood", created_at=5)
    )
    assert created.item_id == "1"
    assert store.create_item(ClosetItem(name="Tee", created_at=9)).item_id == "2"

    fetched = store.get_item("1")
    assert fetched == created
    assert [item.name for item in store.list_items()] == ["Tee", "Rain Jacket"]
    with pytest.raises(ValueError):
        store.create_item(ClosetItem(item_id="1", name="Duplicate"))

    assert store.update_item("1", {"hidden": True}).hidden
    assert SQLiteItemStore(tmp_path / "nested" / "closet.db").get_item("1").hidden
    assert store.delete_item("2") and not store.delete_item("2")


def test_sqlite_store_clears_expired_hides(tmp_path: Path):
    store = SQLiteItemStore(tmp_path / "closet.db")
    store.create_item(ClosetItem(item_id="old", name="Scarf", hidden_until=100))
    store.create_item(ClosetItem(item_id="new", name="Gloves", hidden_until=10_000))
    assert store.unhide_expired(now_ms=5_000) == 1
    assert store.get_item("old").hidden_until is None
    assert store.get_item("new").hidden_until == 10_000


# -- saved outfits ------------------------------------------------------------


def test_outfit_from_raw_accepts_client_keys():
    outfit = outfit_from_raw({"id": 3, "name": "Date Night", "itemIds": [1, 4], "createdAt": "1700000000000"})
    assert outfit.outfit_id == "3"
    assert outfit.item_ids == ["1", "4"]
    assert outfit.created_at == 1_700_000_000_000
    with pytest.raises(ValueError):
        outfit_from_raw({"itemIds": [1]})
    with pytest.raises(ValueError):
        Outfit(name="  ")


def test_in_memory_outfit_store_crud():
    store = InMemoryOutfitStore()
    older = store.create_outfit(Outfit(name="Office", item_ids=["1", "2"], created_at=1))
    newer = store.create_outfit(Outfit(name="Weekend", item_ids=["3"], created_at=2))
    assert (older.outfit_id, newer.outfit_id) == ("1", "2")
    assert [outfit.name for outfit in store.list_outfits()] == ["Weekend", "Office"]

    assert store.update_outfit("1", {"notes": "Mondays", "item_ids": [2]}).item_ids == ["2"]
    assert store.get_outfit("1").notes == "Mondays"
    assert store.update_outfit("missing", {"notes": "x"}) is None
    with pytest.raises(ValueError):
        store.update_outfit("1", {"created_at": 5})
    with pytest.raises(ValueError):
        store.create_outfit(Outfit(outfit_id="2", name="Duplicate"))

    assert store.delete_outfit("2") is True
    assert store.delete_outfit("2") is False


def test_sqlite_outfit_store_round_trip(tmp_path: Path):
    db_path = tmp_path / "closet.db"
    SQLiteItemStore(db_path).create_item(ClosetItem(name="Tee"))
    store = SQLiteOutfitStore(db_path)
    first = store.create_outfit(Outfit(name="Gym", item_ids=["1", "7"], notes="bag", created_at=10))
    store.create_outfit(Outfit(name="Brunch", created_at=20))

    assert first.outfit_id == "1"
    assert SQLiteOutfitStore(db_path).get_outfit("1") == first
    assert [outfit.name for outfit in store.list_outfits()] == ["Brunch", "Gym"]
    assert store.update_outfit("1", {"name": "Gym Day"}).name == "Gym Day"
    assert store.get_outfit("1").item_ids == ["1", "7"]
    assert store.delete_outfit("2") and not store.delete_outfit("2")
    assert SQLiteItemStore(db_path).get_item("1").name == "Tee"


def test_save_and_load_outfit_resolves_current_items(mock_closet):
    store = InMemoryItemStore(mock_closet)
    tools = OutfitTools(store=store)
    ids = [item.item_id for item in mock_closet if item.name in {"White T-Shirt", "Blue Jeans", "White Sneakers"}]

    saved = tools.save_outfit(name="Classic", item_ids=ids)
    assert saved["item_ids"] == ids
    with pytest.raises(ValueError):
        tools.save_outfit(name="Ghost", item_ids=["does-not-exist"])

    store.delete_item(ids[0])
    loaded = tools.load_saved_outfit(outfit_id=saved["outfit_id"])
    assert loaded["name"] == "Classic"
    assert loaded["item_ids"] == ids
    assert [item["item_id"] for item in loaded["items"]] == ids[1:]
    assert loaded["slots"] == ["bottom", "shoes"]
    assert tools.load_saved_outfit(outfit_id="missing") is None
