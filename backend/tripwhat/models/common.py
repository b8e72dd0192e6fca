"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose external (wire/document) representation is camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Geo(BaseModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class PriceTier(str, Enum):
    """Resolver price signal."""

    free = "free"
    inexpensive = "inexpensive"
    moderate = "moderate"
    expensive = "expensive"
    very_expensive = "very_expensive"
    unknown = "unknown"
