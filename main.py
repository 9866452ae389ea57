"""Command line entrypoint: generate ranked outfits from a closet export."""

import argparse
import json
import random
import sys
from pathlib import Path

from pydantic import ValidationError

from closet_app.config import ClosetConfig
from closet_app.logging_config import configure_logging
from logic.validation import RandomizeOptions, validation_failure
from tools.item_store import InMemoryItemStore, SQLiteItemStore, load_items_from_json, seed_sample_items
from tools.outfit_store import SQLiteOutfitStore
from tools.outfit_tools import OutfitTools
from tools.weather_provider import StaticWeatherResolver


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate random outfits from a closet export.")
    parser.add_argument("--items", help="JSON array of items; defaults to the configured items_path")
    parser.add_argument("--db", help="SQLite closet database; takes precedence over --items")
    parser.add_argument("--count", type=int, default=3, help="number of outfits to generate")
    parser.add_argument("--options", help="RandomizeOptions as a JSON object")
    parser.add_argument("--smart", action="store_true", help="enable color, weather, favorite and completeness rules")
    parser.add_argument("--temperature", type=float, help="current temperature in Celsius")
    parser.add_argument("--seed", type=int, help="seed for reproducible output")
    parser.add_argument("--save", metavar="NAME", help="save the top-ranked outfit under this name")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = ClosetConfig.from_env()
    configure_logging(config.log_level)

    db_path = args.db or config.db_path
    outfit_store = None
    if db_path:
        store = SQLiteItemStore(db_path)
        outfit_store = SQLiteOutfitStore(db_path)
        store.unhide_expired()
        seed_sample_items(store)
    else:
        items_path = Path(args.items or config.items_path)
        store = InMemoryItemStore()
        if items_path.exists():
            for item in load_items_from_json(items_path):
                store.create_item(item)
        else:
            seed_sample_items(store)

    raw_options = json.loads(args.options) if args.options else {}
    if args.smart:
        raw_options = {
            "use_color_matching": True,
            "use_weather_rules": True,
            "prefer_favorites": True,
            "ensure_complete_outfit": True,
            **raw_options,
        }
    try:
        options = RandomizeOptions.model_validate(raw_options)
    except ValidationError as exc:
        print(json.dumps(validation_failure("Invalid randomize options", exc), indent=2, default=str))
        return 2

    resolver = StaticWeatherResolver.from_temperature(args.temperature) if args.temperature is not None else None
    seed = args.seed if args.seed is not None else config.random_seed
    tools = OutfitTools(
        store=store,
        weather_resolver=resolver,
        config=config,
        rng=random.Random(seed) if seed is not None else None,
        outfit_store=outfit_store,
    )
    outfits = tools.generate_ranked_outfits(count=args.count, options=options, location="local")
    if args.save and outfits:
        tools.save_outfit(name=args.save, item_ids=[item["item_id"] for item in outfits[0]["items"]])
    print(json.dumps(outfits, indent=2))
    return 0 if outfits else 1


if __name__ == "__main__":
    sys.exit(main())
