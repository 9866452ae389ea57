"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.closet_item import ClosetItem, from_raw_metadata
from models.outfit import Outfit, outfit_from_raw

__all__ = ["ClosetItem", "from_raw_metadata", "Outfit", "outfit_from_raw"]
