"""Canonical taxonomy definitions for closet items.

This module centralises the garment slots, the alias table used to normalise
free-text category labels, the weather bucket vocabulary and the list-tag
helpers. Helper functions keep lookups consistent across the randomizer,
scoring and the collaborator tools.
"""

from typing import Dict, List, Optional

CATEGORIES: List[str] = ["hat", "top", "bottom", "shoes", "outerwear", "accessory"]

CATEGORY_ALIASES: Dict[str, str] = {
    # tops
    "shirt": "top",
    "t-shirt": "top",
    "tshirt": "top",
    "blouse": "top",
    "sweater": "top",
    "tank": "top",
    "tank top": "top",
    "polo": "top",
    "tee": "top",
    # bottoms
    "pants": "bottom",
    "jeans": "bottom",
    "trousers": "bottom",
    "shorts": "bottom",
    "skirt": "bottom",
    "leggings": "bottom",
    # shoes
    "sneakers": "shoes",
    "boots": "shoes",
    "sandals": "shoes",
    "heels": "shoes",
    "flats": "shoes",
    "loafers": "shoes",
    # outerwear
    "jacket": "outerwear",
    "coat": "outerwear",
    "hoodie": "outerwear",
    "blazer": "outerwear",
    "cardigan": "outerwear",
    "vest": "outerwear",
    # hats
    "cap": "hat",
    "beanie": "hat",
    # accessories
    "belt": "accessory",
    "watch": "accessory",
    "jewelry": "accessory",
    "bag": "accessory",
    "scarf": "accessory",
    "sunglasses": "accessory",
    "necklace": "accessory",
    "bracelet": "accessory",
    "earrings": "accessory",
}

# Ordered warmest to coldest.
WEATHER_CONDITIONS: List[str] = ["hot", "warm", "mild", "cool", "cold", "freezing"]

HIDE_DURATION_MS: Dict[str, int] = {
    "ONE_DAY": 24 * 60 * 60 * 1000,
    "SEVEN_DAYS": 7 * 24 * 60 * 60 * 1000,
}

LIST_TAG_PREFIX = "_list:"
LIST_TAGS: Dict[str, str] = {"FAVORITES": f"{LIST_TAG_PREFIX}favorites"}


def normalize_category(value: Optional[str]) -> Optional[str]:
    """Map a free-form category label onto one of :data:`CATEGORIES`.

    Returns ``None`` for empty input and for labels that are neither canonical
    nor a known alias. Callers decide how to present unrecognised items.
    """

    if value is None:
        return None
    key = str(value).strip().lower()
    if not key:
        return None
    if key in CATEGORIES:
        return key
    return CATEGORY_ALIASES.get(key)


def get_category_display_name(category: str) -> str:
    """Capitalise a canonical category for display."""

    if not category:
        return category
    return category[0].upper() + category[1:]


def is_weather_condition(value: Optional[str]) -> bool:
    return value in WEATHER_CONDITIONS


def is_list_tag(tag: str) -> bool:
    return tag.startswith(LIST_TAG_PREFIX)


def get_list_display_name(tag: str) -> str:
    """Strip the list prefix; ordinary tags are returned as-is."""

    if not is_list_tag(tag):
        return tag
    return tag[len(LIST_TAG_PREFIX):]


def create_list_tag(name: str) -> str:
    """Build a list tag such as ``_list:summer-wear`` from a display name."""

    return f"{LIST_TAG_PREFIX}{'-'.join(name.lower().split())}"


__all__ = [
    "CATEGORIES",
    "CATEGORY_ALIASES",
    "WEATHER_CONDITIONS",
    "HIDE_DURATION_MS",
    "LIST_TAG_PREFIX",
    "LIST_TAGS",
    "normalize_category",
    "get_category_display_name",
    "is_weather_condition",
    "is_list_tag",
    "get_list_display_name",
    "create_list_tag",
]
