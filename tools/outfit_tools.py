"""Instrumented facade wiring the item store and weather resolver to the randomizer."""

from __future__ import annotations

import logging
import random
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from closet_app.config import ClosetConfig
from logic.outfit_categorization import populated_slots
from logic.outfit_scoring import rank_outfits, score_outfit
from logic.randomizer import generate_many, pick_random_outfit
from logic.validation import RandomizeOptions
from models.closet_item import ClosetItem
from models.outfit import Outfit
from tools.item_store import InMemoryItemStore, ItemStore
from tools.outfit_store import InMemoryOutfitStore, OutfitStore
from tools.observability import instrument_tool
from tools.weather_provider import WeatherResolver

LOGGER = logging.getLogger(__name__)


class RandomizeToolInput(BaseModel):
    options: Optional[RandomizeOptions] = None
    location: Optional[str] = None


def outfit_payload(outfit: List[ClosetItem], weather_condition: Optional[str] = None) -> Dict[str, Any]:
    """Serialise an outfit with its score for API and CLI output."""

    return {
        "status": "ok" if outfit else "empty",
        "items": [asdict(item) for item in outfit],
        "slots": populated_slots(outfit),
        "score": score_outfit(outfit, weather_condition),
    }


class OutfitTools:
    """Reads the current pool from storage and runs the outfit engine over it."""

    def __init__(
        self,
        store: Optional[ItemStore] = None,
        weather_resolver: Optional[WeatherResolver] = None,
        config: Optional[ClosetConfig] = None,
        rng: Optional[random.Random] = None,
        outfit_store: Optional[OutfitStore] = None,
    ) -> None:
        self.store = store or InMemoryItemStore()
        self.outfit_store = outfit_store or InMemoryOutfitStore()
        self.weather_resolver = weather_resolver
        self.config = config or ClosetConfig()
        if rng is None and self.config.random_seed is not None:
            rng = random.Random(self.config.random_seed)
        self.rng = rng

    def _resolve_options(self, options: RandomizeOptions, location: Optional[str]) -> RandomizeOptions:
        if "min_items" not in options.model_fields_set and "max_items" not in options.model_fields_set:
            options = options.merged(
                min_items=self.config.default_min_items, max_items=self.config.default_max_items
            )
        if options.weather_condition is None and location and self.weather_resolver is not None:
            condition = self.weather_resolver.resolve_condition(location)
            if condition is not None:
                options = options.merged(weather_condition=condition)
        return options

    @instrument_tool("randomize_outfit", input_model=RandomizeToolInput)
    def randomize_outfit(self, *, options: Any = None, location: Optional[str] = None) -> Dict[str, Any]:
        resolved = self._resolve_options(RandomizeOptions.coerce(options), location)
        pool = self.store.list_items()
        if not pool:
            LOGGER.warning("Closet is empty; no outfit generated")
            return outfit_payload([])
        outfit = pick_random_outfit(pool, resolved, self.rng)
        return outfit_payload(outfit, resolved.weather_condition)

    @instrument_tool("generate_ranked_outfits")
    def generate_ranked_outfits(
        self, *, count: int = 3, options: Any = None, location: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        resolved = self._resolve_options(RandomizeOptions.coerce(options), location)
        outfits = [outfit for outfit in generate_many(self.store.list_items(), count, resolved, self.rng) if outfit]
        ranked = rank_outfits(outfits, resolved.weather_condition)
        return [outfit_payload(outfit, resolved.weather_condition) for _, outfit in ranked]

    @instrument_tool("save_outfit")
    def save_outfit(self, *, name: str, item_ids: List[str], notes: Optional[str] = None) -> Dict[str, Any]:
        missing = [item_id for item_id in item_ids if self.store.get_item(item_id) is None]
        if missing:
            raise ValueError(f"Unknown item ids: {missing}")
        saved = self.outfit_store.create_outfit(Outfit(name=name, item_ids=item_ids, notes=notes))
        return asdict(saved)

    @instrument_tool("load_saved_outfit")
    def load_saved_outfit(self, *, outfit_id: str) -> Optional[Dict[str, Any]]:
        """Resolve a saved outfit against the closet; deleted items drop out."""

        saved = self.outfit_store.get_outfit(outfit_id)
        if saved is None:
            return None
        items = [item for item in map(self.store.get_item, saved.item_ids) if item is not None]
        return {**asdict(saved), **outfit_payload(items)}


__all__ = ["OutfitTools", "RandomizeToolInput", "outfit_payload"]
