"""Randomized, rule-aware outfit generation.

The engine is a pure function of the item pool, the options and a random
source. It filters the pool, groups the survivors by normalised category and
draws at most one item per category until a randomly chosen target size is
reached. Constraints that cannot be met are relaxed rather than reported: the
result may be shorter than the target, or empty.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from logic.availability import filter_visible_items
from logic.validation import RandomizeOptions
from logic.weather_rules import get_weather_recommended_items, is_item_suitable_for_weather
from models.closet_item import ClosetItem
from models.color_theory import filter_color_compatible_items

logger = logging.getLogger(__name__)

# Probability of narrowing to favorites / weather-recommended candidates.
PREFERENCE_PROBABILITY = 0.7
COMPLETE_OUTFIT_CATEGORIES = ("top", "bottom")

DEFAULT_OPTIONS = RandomizeOptions(
    min_items=2,
    max_items=4,
    avoid_same_category=True,
    use_color_matching=False,
    use_weather_rules=False,
    prefer_favorites=False,
    ensure_complete_outfit=False,
)

SMART_OPTIONS = RandomizeOptions(
    min_items=3,
    max_items=5,
    avoid_same_category=True,
    use_color_matching=True,
    color_match_threshold=0.5,
    use_weather_rules=True,
    prefer_favorites=True,
    ensure_complete_outfit=True,
)

_RNG = random.Random()

OptionsLike = Union[RandomizeOptions, Mapping[str, Any], None]


def _lowered(values: Sequence[str]) -> set:
    return {str(value).strip().lower() for value in values}


def _raw_category(item: ClosetItem) -> Optional[str]:
    return item.category.strip().lower() if item.category else None


def _apply_rules(items: List[ClosetItem], options: RandomizeOptions) -> List[ClosetItem]:
    """Apply the explicit category, tag and weather filters in order."""

    filtered = items
    if options.required_categories:
        required = _lowered(options.required_categories)
        filtered = [item for item in filtered if _raw_category(item) is None or _raw_category(item) in required]
    if options.excluded_categories:
        excluded = _lowered(options.excluded_categories)
        filtered = [item for item in filtered if _raw_category(item) not in excluded]
    if options.required_tags:
        required_tags = _lowered(options.required_tags)
        filtered = [item for item in filtered if required_tags <= _lowered(item.tags)]
    if options.excluded_tags:
        excluded_tags = _lowered(options.excluded_tags)
        filtered = [item for item in filtered if not excluded_tags & _lowered(item.tags)]
    if options.weather_rules_active:
        filtered = [item for item in filtered if is_item_suitable_for_weather(item, options.weather_condition)]
    return filtered


def _group_by_category(items: List[ClosetItem]) -> Dict[str, List[ClosetItem]]:
    grouped: Dict[str, List[ClosetItem]] = {}
    for item in items:
        category = item.normalized_category
        if category is not None:
            grouped.setdefault(category, []).append(item)
    return grouped


def _shuffled(items: Sequence[ClosetItem], rng: random.Random) -> List[ClosetItem]:
    copy = list(items)
    rng.shuffle(copy)
    return copy


def _pick_candidate(
    candidates: List[ClosetItem],
    chosen: List[ClosetItem],
    options: RandomizeOptions,
    rng: random.Random,
) -> Optional[ClosetItem]:
    """Narrow the candidates step by step and draw one.

    A narrowing step that would leave nothing is skipped, so a non-empty
    candidate list always yields an item.
    """

    if not candidates:
        return None
    pool = candidates
    if options.use_color_matching and chosen:
        compatible = filter_color_compatible_items(pool, chosen, options.color_match_threshold)
        if compatible:
            pool = compatible
    # Soft preferences: one draw each against PREFERENCE_PROBABILITY.
    if options.prefer_favorites and rng.random() < PREFERENCE_PROBABILITY:
        favorites = [item for item in pool if item.is_favorite]
        if favorites:
            pool = favorites
    if options.weather_rules_active and rng.random() < PREFERENCE_PROBABILITY:
        recommended = get_weather_recommended_items(pool, options.weather_condition)
        if recommended:
            pool = recommended
    return _shuffled(pool, rng)[0]


def pick_random_outfit(
    items: Sequence[ClosetItem],
    options: OptionsLike = None,
    rng: Optional[random.Random] = None,
) -> List[ClosetItem]:
    """Pick one outfit from ``items`` honoring ``options``.

    Returns an empty list when nothing survives filtering. Pass a seeded
    ``random.Random`` as ``rng`` for reproducible draws.
    """

    opts = RandomizeOptions.coerce(options)
    rng = rng or _RNG
    if not items:
        return []

    pool = _apply_rules(filter_visible_items(items), opts)
    if not pool:
        logger.info("No eligible items after filtering %s candidates", len(items))
        return []
    if opts.prefer_favorites:
        pool = sorted(pool, key=lambda item: not item.is_favorite)

    grouped = _group_by_category(pool)
    target = rng.randint(opts.min_items, opts.max_items)
    chosen: List[ClosetItem] = []
    chosen_ids: set = set()
    used_categories: set = set()

    def _take(item: ClosetItem, category: Optional[str]) -> None:
        chosen.append(item)
        chosen_ids.add(id(item))
        if category is not None:
            used_categories.add(category)

    if opts.ensure_complete_outfit:
        for category in COMPLETE_OUTFIT_CATEGORIES:
            if len(chosen) >= target:
                break
            picked = _pick_candidate(grouped.get(category, []), chosen, opts, rng)
            if picked is not None:
                _take(picked, category)

    for category in _shuffled_categories(grouped, used_categories, rng):
        if len(chosen) >= target:
            break
        candidates = [item for item in grouped[category] if id(item) not in chosen_ids]
        picked = _pick_candidate(candidates, chosen, opts, rng)
        if picked is not None:
            _take(picked, category)

    if len(chosen) < target:
        # Items without a recognised category cannot collide with a slot.
        uncategorized = [item for item in pool if item.normalized_category is None and id(item) not in chosen_ids]
        for item in _shuffled(uncategorized, rng):
            if len(chosen) >= target:
                break
            _take(item, None)

    if not opts.avoid_same_category and len(chosen) < target:
        for item in _shuffled(pool, rng):
            if len(chosen) >= target:
                break
            if id(item) not in chosen_ids:
                _take(item, item.normalized_category)

    logger.debug(
        "picked %s/%s items from %s eligible (categories=%s)",
        len(chosen),
        target,
        len(pool),
        sorted(used_categories),
    )
    return chosen


def _shuffled_categories(grouped: Dict[str, List[ClosetItem]], used: set, rng: random.Random) -> List[str]:
    remaining = sorted(category for category in grouped if category not in used)
    rng.shuffle(remaining)
    return remaining


def generate_many(
    items: Sequence[ClosetItem],
    count: int,
    options: OptionsLike = None,
    rng: Optional[random.Random] = None,
) -> List[List[ClosetItem]]:
    """Generate ``count`` independent outfits from the same pool."""

    opts = RandomizeOptions.coerce(options)
    rng = rng or _RNG
    return [pick_random_outfit(items, opts, rng) for _ in range(max(0, count))]


__all__ = [
    "DEFAULT_OPTIONS",
    "SMART_OPTIONS",
    "PREFERENCE_PROBABILITY",
    "pick_random_outfit",
    "generate_many",
]
