"""Deterministic scoring for generated outfits.

Scores are for ranking and display only; they never feed back into selection.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from logic.weather_rules import is_item_suitable_for_weather
from models.closet_item import ClosetItem
from models.color_theory import calculate_outfit_color_harmony

WEIGHTS = {
    "per_item": 10,
    "color_harmony": 30,
    "top": 15,
    "bottom": 15,
    "shoes": 10,
    "weather": 20,
    "favorite": 5,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_outfit(outfit: Sequence[ClosetItem], weather_condition: Optional[str] = None) -> int:
    """Calculate the ranking score of an outfit.

    Size, color harmony, core garments, weather fit and favorites each add
    points. The weather bonus is only considered when a condition is given.
    """

    categories = {item.normalized_category for item in outfit}
    score = WEIGHTS["per_item"] * len(outfit)
    score += WEIGHTS["color_harmony"] * calculate_outfit_color_harmony(outfit)
    for slot in ("top", "bottom", "shoes"):
        if slot in categories:
            score += WEIGHTS[slot]
    if weather_condition and outfit:
        if all(is_item_suitable_for_weather(item, weather_condition) for item in outfit):
            score += WEIGHTS["weather"]
    score += WEIGHTS["favorite"] * sum(1 for item in outfit if item.is_favorite)
    return _round_half_up(score)


def rank_outfits(
    outfits: Sequence[List[ClosetItem]], weather_condition: Optional[str] = None
) -> List[Tuple[int, List[ClosetItem]]]:
    """Return ``(score, outfit)`` pairs, best first; ties keep input order."""

    scored = [(score_outfit(outfit, weather_condition), list(outfit)) for outfit in outfits]
    return sorted(scored, key=lambda pair: -pair[0])


__all__ = ["score_outfit", "rank_outfits", "WEIGHTS"]
