"""Pydantic schemas for randomizer options and the HTTP payloads around them."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

WeatherCondition = Literal["hot", "warm", "mild", "cool", "cold", "freezing"]


class RandomizeOptions(BaseModel):
    """Rules for a single outfit generation.

    Field names are snake_case; the camelCase spelling used by the mobile
    client (``minItems``, ``useWeatherRules`` ...) is accepted as well.
    Out-of-range bounds are clamped rather than rejected.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    min_items: int = 2
    max_items: int = 4
    avoid_same_category: bool = True
    required_categories: List[str] = Field(default_factory=list)
    excluded_categories: List[str] = Field(default_factory=list)
    required_tags: List[str] = Field(default_factory=list)
    excluded_tags: List[str] = Field(default_factory=list)
    weather_condition: Optional[WeatherCondition] = None
    use_color_matching: bool = False
    color_match_threshold: float = 0.5
    # None follows weather_condition: rules apply whenever a bucket is given.
    use_weather_rules: Optional[bool] = None
    prefer_favorites: bool = False
    ensure_complete_outfit: bool = False

    @field_validator("required_categories", "excluded_categories", "required_tags", "excluded_tags", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _clamp_ranges(self) -> "RandomizeOptions":
        # Assign only on change so model_fields_set keeps reflecting caller input.
        if self.min_items < 0:
            self.min_items = 0
        if self.max_items < 0:
            self.max_items = 0
        if self.min_items > self.max_items:
            self.min_items = self.max_items
        if not 0.0 <= self.color_match_threshold <= 1.0:
            self.color_match_threshold = min(1.0, max(0.0, self.color_match_threshold))
        return self

    @property
    def weather_rules_active(self) -> bool:
        if self.weather_condition is None:
            return False
        return self.use_weather_rules is not False

    def merged(self, **overrides: Any) -> "RandomizeOptions":
        """Return a validated copy with the given fields replaced."""

        data = self.model_dump()
        data.update(overrides)
        return RandomizeOptions.model_validate(data)

    @classmethod
    def coerce(cls, options: Union["RandomizeOptions", Mapping[str, Any], None]) -> "RandomizeOptions":
        if options is None:
            return cls()
        if isinstance(options, RandomizeOptions):
            return options
        return cls.model_validate(dict(options))


class ItemPayload(BaseModel):
    """Closet item as sent by API clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1)
    item_id: Optional[Union[str, int]] = Field(default=None, alias="id")
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    favorite: bool = False
    hidden: bool = False
    hidden_until: Optional[int] = None
    created_at: Optional[int] = None
    image_uri: Optional[str] = None
    thumb_uri: Optional[str] = None
    notes: Optional[str] = None
    worn_at: Optional[int] = None


class RandomOutfitRequest(BaseModel):
    """Pool plus options for ``POST /outfits/random``."""

    items: List[ItemPayload]
    options: RandomizeOptions = Field(default_factory=RandomizeOptions)
    seed: Optional[int] = None


class BatchOutfitRequest(RandomOutfitRequest):
    count: int = Field(default=3, ge=1, le=50)


class ScoreOutfitRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[ItemPayload]
    weather_condition: Optional[WeatherCondition] = None


class ValidationResult(BaseModel):
    """Wrapper returned when a payload fails validation outside FastAPI."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors()).model_dump()


__all__ = [
    "WeatherCondition",
    "RandomizeOptions",
    "ItemPayload",
    "RandomOutfitRequest",
    "BatchOutfitRequest",
    "ScoreOutfitRequest",
    "ValidationResult",
    "validation_failure",
]
