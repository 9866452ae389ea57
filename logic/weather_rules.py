"""Keyword heuristics deciding which items suit a weather bucket.

Suitability is a conservative exclusion filter: an item is dropped only when
its name, tags or category carry a keyword that clashes with the bucket.
Matching is by substring on lower-cased text, so "long pants" in a top's name
blocks it for hot weather just like a tag would. The rules are approximate by
nature and are kept that way.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from models.closet_item import ClosetItem
from models.taxonomy import WEATHER_CONDITIONS

logger = logging.getLogger(__name__)

# (lower bound in Celsius, bucket); the first bound the temperature reaches wins.
TEMPERATURE_BANDS_C: Tuple[Tuple[float, str], ...] = (
    (30, "hot"),
    (20, "warm"),
    (10, "mild"),
    (0, "cool"),
    (-10, "cold"),
)

REJECT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "hot": (
        "jacket",
        "coat",
        "sweater",
        "hoodie",
        "long sleeve",
        "long-sleeve",
        "wool",
        "fleece",
        "winter",
        "heavy",
        "thermal",
        "parka",
        "jeans",
        "long pants",
    ),
    "warm": ("heavy", "winter", "wool", "parka", "down jacket", "down coat", "puffer", "thermal"),
    "mild": (),
    "cool": (),
    "cold": ("shorts", "tank", "sleeveless", "sandal", "flip flop", "flip-flop"),
    "freezing": ("shorts", "tank", "sleeveless", "sandal", "flip flop", "flip-flop", "light"),
}

HEAVY_OUTERWEAR_KEYWORDS = ("coat", "parka", "puffer")
SANDAL_KEYWORDS = ("sandal", "flip flop", "flip-flop", "slides")
WINTER_SHOE_KEYWORDS = ("boot", "winter", "snow", "insulated")

RECOMMEND_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "hot": ("shorts", "tank", "sleeveless", "sandal", "linen", "summer", "t-shirt", "tee", "breathable"),
    "warm": ("t-shirt", "tee", "shorts", "skirt", "linen", "summer", "sneakers", "polo"),
    "mild": ("spring", "fall", "autumn", "light jacket", "cardigan", "long sleeve", "jeans", "sneakers"),
    "cool": ("jacket", "sweater", "hoodie", "cardigan", "long sleeve", "jeans", "boots", "fall", "autumn"),
    "cold": ("coat", "sweater", "wool", "boots", "winter", "scarf", "beanie", "fleece", "thermal"),
    "freezing": (
        "coat",
        "parka",
        "down jacket",
        "down coat",
        "puffer",
        "wool",
        "thermal",
        "winter",
        "boots",
        "scarf",
        "beanie",
        "gloves",
        "insulated",
    ),
}


def map_temp_to_condition(temp_c: float) -> str:
    """Map a Celsius temperature onto one of the six weather buckets."""

    for lower_bound, condition in TEMPERATURE_BANDS_C:
        if temp_c >= lower_bound:
            return condition
    return "freezing"


get_temp_category = map_temp_to_condition


def _item_text(item: ClosetItem) -> str:
    parts = [item.search_text]
    if item.category:
        parts.append(item.category.lower())
    return " ".join(parts)


def _has_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def is_item_suitable_for_weather(item: ClosetItem, condition: str) -> bool:
    """Return False when the item clearly clashes with the weather bucket."""

    if condition not in WEATHER_CONDITIONS:
        raise ValueError(f"Unsupported weather condition '{condition}'. Allowed: {WEATHER_CONDITIONS}")

    text = _item_text(item)
    category = item.normalized_category

    if _has_any(text, REJECT_KEYWORDS[condition]):
        return False
    if condition == "hot":
        return category != "outerwear"
    if condition == "warm":
        return not (category == "outerwear" and _has_any(text, HEAVY_OUTERWEAR_KEYWORDS))
    if condition == "cool":
        return not (category == "bottom" and "shorts" in text)
    if condition == "cold":
        return not (category == "shoes" and _has_any(text, SANDAL_KEYWORDS))
    if condition == "freezing":
        return not (category == "shoes" and not _has_any(text, WINTER_SHOE_KEYWORDS))
    return True


def filter_items_for_weather(items: Iterable[ClosetItem], condition: str) -> List[ClosetItem]:
    return [item for item in items if is_item_suitable_for_weather(item, condition)]


def get_weather_recommended_items(items: Sequence[ClosetItem], condition: str) -> List[ClosetItem]:
    """Suitable items that also carry a keyword recommending them for the bucket."""

    keywords = RECOMMEND_KEYWORDS.get(condition, ())
    recommended = [
        item
        for item in items
        if is_item_suitable_for_weather(item, condition) and _has_any(_item_text(item), keywords)
    ]
    logger.debug("%s of %s items recommended for %s weather", len(recommended), len(items), condition)
    return recommended


__all__ = [
    "TEMPERATURE_BANDS_C",
    "map_temp_to_condition",
    "get_temp_category",
    "is_item_suitable_for_weather",
    "filter_items_for_weather",
    "get_weather_recommended_items",
]
