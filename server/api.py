"""FastAPI server exposing outfit generation and scoring."""

import random
from typing import List

from fastapi import FastAPI

from closet_app.config import ClosetConfig
from closet_app.logging_config import configure_logging, operation_context
from logic.outfit_scoring import rank_outfits
from logic.randomizer import generate_many, pick_random_outfit
from logic.validation import BatchOutfitRequest, ItemPayload, RandomOutfitRequest, ScoreOutfitRequest
from models.closet_item import ClosetItem, from_raw_metadata
from tools.outfit_tools import outfit_payload

config = ClosetConfig.from_env()
configure_logging(config.log_level)

app = FastAPI(title="Closet Randomizer", version="0.1.0")


def _to_items(payloads: List[ItemPayload]) -> List[ClosetItem]:
    return [from_raw_metadata(payload.model_dump()) for payload in payloads]


def _rng(seed: int | None) -> random.Random | None:
    return random.Random(seed) if seed is not None else None


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness check."""

    return {
        "status": "ok",
        "service": "closet-randomizer",
        "environment": config.environment or "local",
    }


@app.post("/outfits/random")
async def random_outfit(request: RandomOutfitRequest) -> dict:
    """Generate one outfit from the posted pool."""

    with operation_context("random_outfit"):
        outfit = pick_random_outfit(_to_items(request.items), request.options, _rng(request.seed))
        return outfit_payload(outfit, request.options.weather_condition)


@app.post("/outfits/batch")
async def batch_outfits(request: BatchOutfitRequest) -> dict:
    """Generate several outfits and return them best first."""

    with operation_context("batch_outfits"):
        outfits = generate_many(_to_items(request.items), request.count, request.options, _rng(request.seed))
        ranked = rank_outfits([outfit for outfit in outfits if outfit], request.options.weather_condition)
        return {
            "status": "ok" if ranked else "empty",
            "outfits": [outfit_payload(outfit, request.options.weather_condition) for _, outfit in ranked],
        }


@app.post("/outfits/score")
async def score(request: ScoreOutfitRequest) -> dict:
    """Score an outfit the client already assembled."""

    return outfit_payload(_to_items(request.items), request.weather_condition)


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=8080, reload=False)
