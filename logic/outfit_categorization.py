"""Group outfit items into display slots."""

from __future__ import annotations

from typing import Dict, Iterable, List

from models.closet_item import ClosetItem

# Head-to-toe order used when laying out an outfit.
SLOT_ORDER = ("hat", "outerwear", "top", "bottom", "shoes", "accessory")


def categorize_items(items: Iterable[ClosetItem]) -> Dict[str, List[ClosetItem]]:
    """Bucket items by slot; items without a recognised category show as accessories."""

    slots: Dict[str, List[ClosetItem]] = {slot: [] for slot in SLOT_ORDER}
    for item in items:
        slots[item.normalized_category or "accessory"].append(item)
    return slots


def populated_slots(items: Iterable[ClosetItem]) -> List[str]:
    slots = categorize_items(items)
    return [slot for slot in SLOT_ORDER if slots[slot]]


__all__ = ["SLOT_ORDER", "categorize_items", "populated_slots"]
