"""Tag-based color detection and pairing rules for outfit generation."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, TypeVar

from models.closet_item import ClosetItem

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ClosetItem)

# Order matters only for the order of extracted colors.
COLOR_NAMES: List[str] = [
    "black",
    "white",
    "gray",
    "grey",
    "navy",
    "blue",
    "red",
    "green",
    "yellow",
    "orange",
    "purple",
    "pink",
    "brown",
    "beige",
    "tan",
    "cream",
    "ivory",
    "burgundy",
    "maroon",
    "olive",
    "teal",
    "coral",
    "gold",
    "silver",
    "khaki",
    "denim",
    "charcoal",
    "indigo",
]

COLOR_GROUPS: Dict[str, List[str]] = {
    "neutrals": ["black", "white", "gray", "grey", "beige", "tan", "cream", "ivory", "khaki", "charcoal"],
    "warm": ["red", "orange", "yellow", "coral", "gold", "burgundy", "maroon", "brown"],
    "cool": ["blue", "navy", "green", "purple", "teal", "indigo", "silver"],
    "earth": ["brown", "olive", "tan", "khaki", "beige", "burgundy", "maroon"],
    "denim": ["denim", "indigo", "navy", "blue"],
}

# Hand-authored pairings. Lookups check both directions.
COLOR_HARMONIES: Dict[str, List[str]] = {
    "black": ["white", "gray", "red", "pink", "yellow", "gold", "silver", "navy", "beige", "cream"],
    "white": ["black", "navy", "blue", "red", "gray", "beige", "tan", "brown", "olive", "pink"],
    "gray": ["black", "white", "pink", "blue", "navy", "red", "yellow", "purple"],
    "navy": ["white", "cream", "beige", "tan", "khaki", "gray", "pink", "coral", "gold"],
    "blue": ["white", "gray", "navy", "tan", "brown", "orange", "coral", "beige"],
    "red": ["black", "white", "gray", "navy", "denim", "beige", "tan"],
    "green": ["white", "cream", "brown", "tan", "beige", "navy", "khaki", "gold"],
    "yellow": ["navy", "blue", "gray", "white", "black", "brown", "denim"],
    "orange": ["navy", "blue", "white", "brown", "tan", "denim", "cream"],
    "purple": ["white", "gray", "black", "cream", "silver", "gold", "navy"],
    "pink": ["white", "gray", "navy", "black", "cream", "denim", "silver"],
    "brown": ["white", "cream", "beige", "tan", "blue", "navy", "green", "orange"],
    "beige": ["navy", "brown", "white", "burgundy", "olive", "blue", "black"],
    "tan": ["navy", "white", "brown", "burgundy", "olive", "blue", "green"],
    "cream": ["navy", "brown", "burgundy", "olive", "blue", "black", "green"],
    "ivory": ["navy", "brown", "burgundy", "olive", "black", "gold"],
    "burgundy": ["white", "cream", "beige", "tan", "navy", "gray", "khaki"],
    "maroon": ["white", "cream", "beige", "tan", "navy", "gray", "khaki"],
    "olive": ["white", "cream", "tan", "beige", "brown", "burgundy", "navy"],
    "teal": ["white", "cream", "coral", "tan", "navy", "gray", "beige"],
    "coral": ["navy", "white", "teal", "cream", "gray", "beige", "denim"],
    "gold": ["black", "navy", "burgundy", "white", "cream", "brown"],
    "silver": ["black", "white", "gray", "navy", "purple", "pink"],
    "khaki": ["navy", "white", "brown", "burgundy", "olive", "blue", "black"],
    "denim": ["white", "black", "cream", "tan", "brown", "red", "yellow", "pink", "burgundy"],
    "charcoal": ["white", "pink", "blue", "cream", "silver", "gold", "coral"],
    "indigo": ["white", "cream", "tan", "coral", "gold", "beige"],
}

NEUTRAL_COLORS = frozenset(COLOR_GROUPS["neutrals"])


def _canonical(color: str) -> str:
    color = color.lower()
    return "gray" if color == "grey" else color


def extract_colors(item: ClosetItem) -> List[str]:
    """Return every vocabulary color found in the item's name or tags."""

    text = item.search_text
    return [color for color in COLOR_NAMES if color in text]


def are_colors_harmonious(color1: str, color2: str) -> bool:
    """Return True when the two colors pair well in either direction."""

    c1, c2 = _canonical(color1), _canonical(color2)
    if c1 == c2:
        return True
    return c2 in COLOR_HARMONIES.get(c1, ()) or c1 in COLOR_HARMONIES.get(c2, ())


def is_neutral_color(color: str) -> bool:
    return color.lower() in NEUTRAL_COLORS


def calculate_color_compatibility(item1: ClosetItem, item2: ClosetItem) -> float:
    """Score how well two items pair by color, between 0 and 1.

    Items without detectable colors cannot be judged and score 1, as do
    pairs made only of neutrals.
    """

    colors1 = extract_colors(item1)
    colors2 = extract_colors(item2)
    if not colors1 or not colors2:
        return 1.0
    if all(is_neutral_color(c) for c in colors1) and all(is_neutral_color(c) for c in colors2):
        return 1.0

    total_pairs = 0
    matches = 0
    for c1 in colors1:
        for c2 in colors2:
            total_pairs += 1
            if are_colors_harmonious(c1, c2):
                matches += 1
    return matches / total_pairs if total_pairs else 1.0


def calculate_outfit_color_harmony(items: Sequence[ClosetItem]) -> float:
    """Mean pairwise compatibility across every unordered pair of items."""

    if len(items) < 2:
        return 1.0
    total = 0.0
    pairs = 0
    for i in range(len(items)):
        for j in range(i + 1, len(items)):
            total += calculate_color_compatibility(items[i], items[j])
            pairs += 1
    harmony = total / pairs if pairs else 1.0
    logger.debug("outfit harmony over %s pairs -> %.3f", pairs, harmony)
    return harmony


def filter_color_compatible_items(
    candidates: Sequence[T], existing_items: Sequence[ClosetItem], min_compatibility: float = 0.5
) -> List[T]:
    """Keep candidates whose average compatibility with the current selection meets the threshold."""

    if not existing_items:
        return list(candidates)

    kept = []
    for candidate in candidates:
        average = sum(calculate_color_compatibility(candidate, existing) for existing in existing_items) / len(
            existing_items
        )
        if average >= min_compatibility:
            kept.append(candidate)
    logger.debug(
        "color filter kept %s/%s candidates at threshold %.2f", len(kept), len(candidates), min_compatibility
    )
    return kept


__all__ = [
    "COLOR_NAMES",
    "COLOR_GROUPS",
    "COLOR_HARMONIES",
    "extract_colors",
    "are_colors_harmonious",
    "is_neutral_color",
    "calculate_color_compatibility",
    "calculate_outfit_color_harmony",
    "filter_color_compatible_items",
]
