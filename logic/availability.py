"""Item visibility rules: permanently hidden items and hidden-until expiry."""

from __future__ import annotations

import time
from dataclasses import replace
from typing import Iterable, List, Optional

from models.closet_item import ClosetItem


def _now_ms() -> int:
    return int(time.time() * 1000)


def is_item_hidden(item: ClosetItem, now_ms: Optional[int] = None) -> bool:
    """Return True when the item must not be offered for outfits right now.

    An item is hidden when its ``hidden`` flag is set, or when ``hidden_until``
    lies strictly in the future. At ``now_ms == hidden_until`` the item is
    visible again.
    """

    if item.hidden:
        return True
    if item.hidden_until is not None:
        current = _now_ms() if now_ms is None else now_ms
        return item.hidden_until > current
    return False


def filter_visible_items(items: Iterable[ClosetItem], now_ms: Optional[int] = None) -> List[ClosetItem]:
    current = _now_ms() if now_ms is None else now_ms
    return [item for item in items if not is_item_hidden(item, current)]


def filter_hidden_items(items: Iterable[ClosetItem], now_ms: Optional[int] = None) -> List[ClosetItem]:
    current = _now_ms() if now_ms is None else now_ms
    return [item for item in items if is_item_hidden(item, current)]


def hide_item(item: ClosetItem, duration_ms: Optional[int] = None, now_ms: Optional[int] = None) -> ClosetItem:
    """Return a copy hidden indefinitely, or until ``now + duration_ms``.

    Timed hiding leaves the ``hidden`` flag unset so the item comes back on its
    own once the timestamp elapses.
    """

    if duration_ms is None:
        return replace(item, hidden=True, hidden_until=None)
    if duration_ms <= 0:
        raise ValueError("duration_ms must be positive")
    current = _now_ms() if now_ms is None else now_ms
    return replace(item, hidden=False, hidden_until=current + duration_ms)


def unhide_item(item: ClosetItem) -> ClosetItem:
    return replace(item, hidden=False, hidden_until=None)


__all__ = [
    "is_item_hidden",
    "filter_visible_items",
    "filter_hidden_items",
    "hide_item",
    "unhide_item",
]
