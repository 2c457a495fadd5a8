"""
Domain models for parcel boundary capture.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, HTTP surface, etc.).
"""
from enum import Enum
from typing import List
from pydantic import BaseModel, Field


class GeoPoint(BaseModel):
    """A single latitude/longitude reading. Immutable once created."""
    latitude: float = Field(ge=-90.0, le=90.0, description="Latitude in degrees")
    longitude: float = Field(ge=-180.0, le=180.0, description="Longitude in degrees")

    class Config:
        frozen = True


class BoundaryState(str, Enum):
    """Lifecycle state of an in-progress boundary draft."""
    EMPTY = "empty"
    OPEN = "open"
    VALID = "valid"


class Metrics(BaseModel):
    """Geometric metrics recomputed from the current draft."""
    area_hectares: float = Field(ge=0.0)
    perimeter_meters: float = Field(ge=0.0)
    point_count: int = Field(ge=0)

    class Config:
        frozen = True


class DerivedStats(BaseModel):
    """Secondary agronomic figures derived from Metrics."""
    area_square_meters: float
    headline_acres: int = Field(description="Acres rounded up, for headline display")
    precise_acres: float = Field(description="Acres with the precise multiplier")
    usable_area_hectares: float
    estimated_plant_capacity: int
    estimated_traversal_minutes: int
    perimeter_kilometers: float
    point_validity_label: str

    class Config:
        frozen = True


class SaveResult(BaseModel):
    """Geometry ready to be handed to the persistence API."""
    closed_ring_coordinates: List[List[float]] = Field(
        description="Closed ring as [longitude, latitude] pairs"
    )
    area_hectares: float
