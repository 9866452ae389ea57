"""Shared closet fixtures for the test suite."""

from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.closet_item import ClosetItem

CREATED_AT = 1_700_000_000_000


@pytest.fixture()
def mock_closet() -> List[ClosetItem]:
    """Twelve visible items covering five slots; four are favorites."""

    return [
        ClosetItem(item_id="1", name="White T-Shirt", category="top", tags=["white", "casual", "summer"], favorite=True, created_at=CREATED_AT),
        ClosetItem(item_id="2", name="Navy Polo", category="top", tags=["navy", "casual"], created_at=CREATED_AT),
        ClosetItem(item_id="3", name="Black Sweater", category="top", tags=["black", "warm", "winter"], created_at=CREATED_AT),
        ClosetItem(item_id="4", name="Blue Jeans", category="bottom", tags=["denim", "blue", "casual"], favorite=True, created_at=CREATED_AT),
        ClosetItem(item_id="5", name="Khaki Pants", category="bottom", tags=["khaki", "formal"], created_at=CREATED_AT),
        ClosetItem(item_id="6", name="Black Shorts", category="bottom", tags=["black", "summer", "shorts"], created_at=CREATED_AT),
        ClosetItem(item_id="7", name="White Sneakers", category="shoes", tags=["white", "casual"], favorite=True, created_at=CREATED_AT),
        ClosetItem(item_id="8", name="Brown Boots", category="shoes", tags=["brown", "winter", "boots"], created_at=CREATED_AT),
        ClosetItem(item_id="9", name="Navy Jacket", category="outerwear", tags=["navy", "jacket", "cool"], created_at=CREATED_AT),
        ClosetItem(item_id="10", name="Black Winter Coat", category="outerwear", tags=["black", "winter", "heavy", "coat"], created_at=CREATED_AT),
        ClosetItem(item_id="11", name="Silver Watch", category="accessory", tags=["silver", "formal"], favorite=True, created_at=CREATED_AT),
        ClosetItem(item_id="12", name="Brown Belt", category="accessory", tags=["brown", "casual"], created_at=CREATED_AT),
    ]


@pytest.fixture()
def seasonal_closet() -> List[ClosetItem]:
    """Eleven items, the last one permanently hidden."""

    return [
        ClosetItem(item_id="1", name="T-Shirt", category="top", tags=["casual", "summer"]),
        ClosetItem(item_id="2", name="Jeans", category="bottom", tags=["casual", "winter"]),
        ClosetItem(item_id="3", name="Jacket", category="outerwear", tags=["cool", "winter"]),
        ClosetItem(item_id="4", name="Shorts", category="bottom", tags=["casual", "summer"]),
        ClosetItem(item_id="5", name="Dress Shirt", category="top", tags=["formal", "spring"]),
        ClosetItem(item_id="6", name="Winter Coat", category="outerwear", tags=["cold", "winter"]),
        ClosetItem(item_id="7", name="Sneakers", category="shoes", tags=["casual"]),
        ClosetItem(item_id="8", name="Sandals", category="shoes", tags=["summer"]),
        ClosetItem(item_id="9", name="Hat", category="accessory", tags=["summer"]),
        ClosetItem(item_id="10", name="Scarf", category="accessory", tags=["winter"]),
        ClosetItem(item_id="11", name="Hidden Item", category="misc", tags=["test"], hidden=True),
    ]


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)
