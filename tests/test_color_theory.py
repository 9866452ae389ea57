"""Color extraction and harmony scoring."""

import itertools
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.closet_item import ClosetItem
from models.color_theory import (
    COLOR_HARMONIES,
    COLOR_NAMES,
    are_colors_harmonious,
    calculate_color_compatibility,
    calculate_outfit_color_harmony,
    extract_colors,
    filter_color_compatible_items,
    is_neutral_color,
)


def _item(name, tags=None, category=None):
    return ClosetItem(name=name, tags=tags or [], category=category)


def test_vocabulary_size():
    assert len(COLOR_NAMES) == 28
    assert len(set(COLOR_NAMES)) == 28


def test_extract_from_name_and_tags():
    assert "blue" in extract_colors(_item("Blue T-Shirt"))
    assert extract_colors(_item("Casual Shirt", ["navy", "cotton"])) == ["navy"]
    assert set(extract_colors(_item("Black and White Striped Shirt"))) == {"black", "white"}


def test_extract_is_case_insensitive_and_deduplicated():
    assert set(extract_colors(_item("NAVY Blazer", ["BLACK trim"]))) == {"navy", "black"}
    assert extract_colors(_item("Black black", ["BLACK"])) == ["black"]


def test_extract_without_colors():
    assert extract_colors(_item("Casual Shirt", ["cotton"])) == []


def test_harmony_pairs():
    assert are_colors_harmonious("blue", "blue")
    assert are_colors_harmonious("black", "white")
    assert are_colors_harmonious("navy", "khaki")
    assert are_colors_harmonious("denim", "white")
    assert are_colors_harmonious("gray", "grey")
    assert are_colors_harmonious("grey", "pink")
    assert not are_colors_harmonious("red", "green")


def test_harmony_checks_both_directions():
    assert "khaki" not in COLOR_HARMONIES["black"]
    assert "black" in COLOR_HARMONIES["khaki"]
    assert are_colors_harmonious("black", "khaki")
    assert are_colors_harmonious("khaki", "black")


def test_neutral_colors():
    for color in ["black", "white", "gray", "grey", "beige", "tan", "cream", "ivory", "khaki", "charcoal"]:
        assert is_neutral_color(color)
    for color in ["red", "navy", "denim", "gold"]:
        assert not is_neutral_color(color)


def test_compatibility_without_detectable_colors():
    assert calculate_color_compatibility(_item("Casual Shirt"), _item("Red Scarf")) == 1.0


def test_compatibility_of_neutrals():
    assert calculate_color_compatibility(_item("Black Tee"), _item("Beige Chinos")) == 1.0


def test_navy_blazer_pairs_with_white_shirt():
    assert calculate_color_compatibility(_item("Navy Blazer"), _item("White Shirt")) > 0.5


def test_compatibility_is_fraction_of_harmonious_pairs():
    assert calculate_color_compatibility(_item("Red Shirt"), _item("Green and Navy Scarf")) == pytest.approx(0.5)
    assert calculate_color_compatibility(_item("Red Shirt"), _item("Green Pants")) == 0.0


def test_compatibility_is_symmetric_over_vocabulary():
    items = [_item(color) for color in COLOR_NAMES]
    for a, b in itertools.product(items, repeat=2):
        assert calculate_color_compatibility(a, b) == calculate_color_compatibility(b, a), (a.name, b.name)


def test_outfit_harmony():
    assert calculate_outfit_color_harmony([]) == 1.0
    assert calculate_outfit_color_harmony([_item("Red Shirt")]) == 1.0
    outfit = [_item("Red Shirt"), _item("Green Pants"), _item("White Sneakers")]
    assert calculate_outfit_color_harmony(outfit) == pytest.approx(2 / 3)


def test_filter_without_existing_returns_candidates_unchanged():
    candidates = [_item("Red Shirt"), _item("Green Pants")]
    assert filter_color_compatible_items(candidates, []) == candidates


def test_filter_keeps_compatible_candidates():
    kept = filter_color_compatible_items([_item("Green Pants"), _item("Navy Pants")], [_item("Red Shirt")])
    assert [item.name for item in kept] == ["Navy Pants"]


def test_filter_uses_average_against_selection():
    existing = [_item("Red Shirt"), _item("White Tee")]
    candidate = _item("Green Pants")
    assert filter_color_compatible_items([candidate], existing, 0.5) == [candidate]
    assert filter_color_compatible_items([candidate], existing, 0.6) == []
